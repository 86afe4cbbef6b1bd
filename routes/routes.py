import logging
from flask import Blueprint, g, jsonify, redirect, request, url_for, render_template
from flask_login import current_user
from sqlalchemy.exc import SQLAlchemyError

from savour.auth import build_auth_context
from savour.models import Order, MenuItem, Employee
from extensions import db
from .guards import current_auth, require_shell_access

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)
admin_bp.before_request(require_shell_access)


@admin_bp.before_app_request
def load_auth_context():
    """Resolve session and role once, before any other hook of the request."""
    g.auth = build_auth_context(current_user)


@admin_bp.route('/')
def dashboard():
    try:
        stats = {
            'total_orders': Order.query.count(),
            'menu_items': MenuItem.query.count(),
            'active_employees': Employee.query.filter_by(is_active=True).count(),
        }
    except SQLAlchemyError:
        logger.exception("Dashboard counts failed")
        db.session.rollback()
        stats = None
    return render_template('dashboard.html', stats=stats)


@admin_bp.route('/settings')
def settings():
    return render_template('settings.html')


@admin_bp.app_errorhandler(404)
def redirect_unknown(e):
    """Unknown pages land on the dashboard, or on login when signed out.

    Inline JSON calls and stored files get a real 404 instead.
    """
    if request.is_json:
        return jsonify({'success': False, 'error': 'Not found.'}), 404
    if request.blueprint == 'storage':
        return e.get_response()
    if current_user.is_authenticated and current_auth().role:
        return redirect(url_for('admin.dashboard'))
    return redirect(url_for('auth.login'))
