import logging
from flask import Blueprint, request, redirect, url_for, render_template, flash, jsonify
from extensions import db, socketio
from savour import filters
from savour import orders as order_status
from savour.models import Order, Company, WaitingStaff, Employee
from . import crud
from .guards import action_required, require_shell_access

logger = logging.getLogger(__name__)

orders_bp = Blueprint('orders', __name__, url_prefix='/orders')
orders_bp.before_request(require_shell_access)


@orders_bp.route('')
def list_orders():
    company_id = request.args.get('company_id') or None
    staff_id = request.args.get('staff_id') or None

    orders, error = crud.fetch_all(Order.query.order_by(Order.created_at.desc()), 'orders')
    companies = crud.lookup(Company.query.order_by(Company.name), 'companies')
    staff = crud.lookup(WaitingStaff.query.order_by(WaitingStaff.name), 'waiting staff')
    employees = crud.lookup(Employee.query, 'employees')

    return render_template(
        'orders.html',
        orders=filters.filter_orders(orders, company_id, staff_id),
        total=len(orders),
        error=error,
        companies=companies,
        staff=staff,
        employees=employees,
        company_id=company_id,
        staff_id=staff_id,
    )


def _payload():
    return request.get_json(silent=True) or request.form


def _order_view(order):
    """The stored row plus what a card needs to redraw itself."""
    data = order.to_dict()
    data.update(
        status_color=order_status.status_color(order.status),
        description=order_status.status_description(order),
        completed=order_status.is_completed(order.status),
    )
    return data


def _respond(order, error):
    if request.is_json:
        if error:
            return jsonify({'success': False, 'error': error}), 500
        return jsonify({'success': True, 'order': _order_view(order)}), 200
    if error:
        flash(error, 'danger')
    return redirect(url_for('orders.list_orders',
                            company_id=request.args.get('company_id'),
                            staff_id=request.args.get('staff_id')))


def _notify(order):
    # other open order screens patch the same card
    view = _order_view(order)
    view['order_id'] = view.pop('id')
    socketio.emit('order_updated', view)


@orders_bp.route('/<order_id>/status', methods=['POST'])
@action_required('orders.update')
def update_status(order_id):
    order = db.get_or_404(Order, order_id)
    new_status = (_payload().get('status') or '').strip()
    if not new_status:
        error = 'Status cannot be empty.'
        if request.is_json:
            return jsonify({'success': False, 'error': error}), 400
        flash(error, 'danger')
        return redirect(url_for('orders.list_orders'))

    error = crud.update_field(order, 'status', new_status, 'order status')
    if not error:
        logger.info("Order %s moved to %s", order.id, new_status)
        _notify(order)
    return _respond(order, error)


@orders_bp.route('/<order_id>/assign', methods=['POST'])
@action_required('orders.update')
def assign_staff(order_id):
    order = db.get_or_404(Order, order_id)
    staff_id = _payload().get('waiting_staff_id') or None
    if staff_id is not None and db.session.get(WaitingStaff, staff_id) is None:
        error = 'Unknown waiting staff member.'
        if request.is_json:
            return jsonify({'success': False, 'error': error}), 400
        flash(error, 'danger')
        return redirect(url_for('orders.list_orders'))

    error = crud.update_field(order, 'waiting_staff_id', staff_id, 'order assignment')
    if not error:
        _notify(order)
    return _respond(order, error)
