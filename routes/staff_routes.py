from flask import Blueprint, request, redirect, url_for, render_template, flash
from extensions import db
from savour import filters
from savour.forms import parse_waiting_staff, form_values
from savour.models import WaitingStaff
from . import crud
from .guards import require_shell_access

staff_bp = Blueprint('staff', __name__, url_prefix='/waiting-staff')
staff_bp.before_request(require_shell_access)

EMPTY_STAFF = {'name': '', 'email': '', 'phone': '', 'avatar_url': '', 'is_active': True}


def _render(form=None, errors=None, editing_id=None, status=200):
    term = request.args.get('q', '')
    staff, error = crud.fetch_all(WaitingStaff.query.order_by(WaitingStaff.name), 'waiting staff')
    return render_template(
        'waiting_staff.html',
        staff=filters.search(staff, term, ('name', 'email')),
        total=len(staff),
        error=error,
        q=term,
        form=form,
        errors=errors or {},
        editing_id=editing_id,
    ), status


@staff_bp.route('')
def list_staff():
    form = editing_id = None
    if request.args.get('new'):
        form = dict(EMPTY_STAFF)
    elif request.args.get('edit'):
        member = db.session.get(WaitingStaff, request.args['edit'])
        if member:
            editing_id = member.id
            form = {
                'name': member.name,
                'email': member.email or '',
                'phone': member.phone or '',
                'avatar_url': member.avatar_url or '',
                'is_active': member.is_active,
            }
    return _render(form, editing_id=editing_id)


@staff_bp.route('/new', methods=['POST'])
def create_staff():
    data, errors = parse_waiting_staff(request.form)
    if errors:
        return _render(form_values(request.form), errors, status=400)
    error = crud.save(WaitingStaff(), data, 'staff member')
    if error:
        flash(error, 'danger')
        return _render(form_values(request.form), status=400)
    flash(f"{data['name']} added to waiting staff.")
    return redirect(url_for('staff.list_staff'))


@staff_bp.route('/<staff_id>/edit', methods=['POST'])
def update_staff(staff_id):
    member = db.get_or_404(WaitingStaff, staff_id)
    data, errors = parse_waiting_staff(request.form)
    if errors:
        return _render(form_values(request.form), errors, editing_id=member.id, status=400)
    error = crud.save(member, data, 'staff member')
    if error:
        flash(error, 'danger')
        return _render(form_values(request.form), editing_id=member.id, status=400)
    flash(f"{member.name} updated.")
    return redirect(url_for('staff.list_staff'))


@staff_bp.route('/<staff_id>/delete', methods=['POST'])
def delete_staff(staff_id):
    member = db.get_or_404(WaitingStaff, staff_id)
    name = member.name
    # their orders become unassigned
    error = crud.delete(member, 'staff member')
    if error:
        flash(error, 'danger')
    else:
        flash(f"{name} deleted.")
    return redirect(url_for('staff.list_staff'))
