from flask import Blueprint, request, redirect, url_for, render_template, flash, jsonify
from extensions import db
from savour import filters
from savour.forms import parse_menu_item, form_values
from savour.models import MenuItem, MENU_CATEGORIES
from . import crud
from .guards import require_shell_access

menu_bp = Blueprint('menu', __name__, url_prefix='/menu')
menu_bp.before_request(require_shell_access)

EMPTY_ITEM = {'name': '', 'price': '', 'category': 'food', 'available': True, 'image': ''}


def _render(form=None, errors=None, editing_id=None, status=200):
    term = request.args.get('q', '')
    tab = request.args.get('tab', 'all')
    if tab not in filters.MENU_TABS:
        tab = 'all'
    items, error = crud.fetch_all(MenuItem.query.order_by(MenuItem.name), 'menu items')
    return render_template(
        'menu.html',
        items=filters.filter_menu(items, term, tab),
        total=len(items),
        error=error,
        q=term,
        tab=tab,
        tabs=filters.MENU_TABS,
        categories=MENU_CATEGORIES,
        form=form,
        errors=errors or {},
        editing_id=editing_id,
    ), status


@menu_bp.route('')
def list_items():
    form = editing_id = None
    if request.args.get('new'):
        form = dict(EMPTY_ITEM)
    elif request.args.get('edit'):
        item = db.session.get(MenuItem, request.args['edit'])
        if item:
            editing_id = item.id
            form = {
                'name': item.name,
                'price': str(item.price),
                'category': item.category,
                'available': item.available,
                'image': item.image or '',
            }
    return _render(form, editing_id=editing_id)


@menu_bp.route('/new', methods=['POST'])
def create_item():
    data, errors = parse_menu_item(request.form)
    if errors:
        return _render(form_values(request.form), errors, status=400)
    error = crud.save(MenuItem(), data, 'menu item')
    if error:
        flash(error, 'danger')
        return _render(form_values(request.form), status=400)
    flash(f"{data['name']} added to the menu.")
    return redirect(url_for('menu.list_items'))


@menu_bp.route('/<item_id>/edit', methods=['POST'])
def update_item(item_id):
    item = db.get_or_404(MenuItem, item_id)
    data, errors = parse_menu_item(request.form)
    if errors:
        return _render(form_values(request.form), errors, editing_id=item.id, status=400)
    error = crud.save(item, data, 'menu item')
    if error:
        flash(error, 'danger')
        return _render(form_values(request.form), editing_id=item.id, status=400)
    flash(f"{item.name} updated.")
    return redirect(url_for('menu.list_items'))


@menu_bp.route('/<item_id>/delete', methods=['POST'])
def delete_item(item_id):
    item = db.get_or_404(MenuItem, item_id)
    name = item.name
    error = crud.delete(item, 'menu item')
    if error:
        flash(error, 'danger')
    else:
        flash(f"{name} deleted.")
    return redirect(url_for('menu.list_items'))


@menu_bp.route('/<item_id>/availability', methods=['POST'])
def toggle_availability(item_id):
    item = db.get_or_404(MenuItem, item_id)
    error = crud.update_field(item, 'available', not item.available, 'menu item')
    if request.is_json:
        if error:
            return jsonify({'success': False, 'error': error}), 500
        # the page patches just this row
        return jsonify({'success': True, 'item': item.to_dict()}), 200
    if error:
        flash(error, 'danger')
    return redirect(url_for('menu.list_items', q=request.args.get('q', ''), tab=request.args.get('tab', 'all')))
