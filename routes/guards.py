import logging
from functools import wraps
from flask import abort, flash, g, jsonify, redirect, request, url_for
from flask_login import current_user, logout_user

from savour.auth import build_auth_context
from .nav import can, can_access

logger = logging.getLogger(__name__)


def current_auth():
    if 'auth' not in g:
        g.auth = build_auth_context(current_user)
    return g.auth


def _deny(message, endpoint, category='danger', status=401):
    if request.is_json:
        return jsonify({'error': message}), status
    flash(message, category)
    return redirect(url_for(endpoint))


def require_shell_access():
    """before_request hook for every blueprint of the signed-in shell."""
    if not current_user.is_authenticated:
        if request.is_json:
            return jsonify({'error': 'Not signed in.'}), 401
        return redirect(url_for('auth.login'))

    auth = current_auth()
    if auth.role is None:
        # no profile or no role: end the session rather than just hiding pages
        logger.warning("Signing out %s: no role on profile", current_user.email)
        logout_user()
        return _deny('Your account is not authorized. Please sign in again.', 'auth.login')

    if not can_access(auth.role, request.endpoint):
        return _deny("You don't have access to that page.", 'admin.dashboard', 'warning', 403)


def shell_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        denied = require_shell_access()
        if denied is not None:
            return denied
        return f(*args, **kwargs)
    return decorated_function


def action_required(action):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not can(current_auth().role, action):
                abort(403)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
