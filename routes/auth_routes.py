import logging
from flask import Blueprint, current_app, redirect, url_for, request, render_template
from flask_login import login_user, logout_user, current_user
from werkzeug.security import check_password_hash
from savour.auth import check_login_privileges
from savour.models import User
from .guards import current_auth

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated and current_auth().role:
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST':
        email = (request.form.get('email') or '').strip().lower()
        password = request.form.get('password') or ''
        user = User.query.filter_by(email=email).first()

        if not user or not check_password_hash(user.password, password):
            logger.info("Failed login for %s", email)
            return render_template('login.html', email=email,
                                   error='Invalid login credentials.'), 401

        login_user(user)
        denied = check_login_privileges(user, current_app.config['LOGIN_REQUIRE_SUPER_ADMIN'])
        if denied:
            logger.warning("Login refused for %s: %s", email, denied)
            logout_user()
            return render_template('login.html', email=email, error=denied), 403

        return redirect(url_for('admin.dashboard'))

    return render_template('login.html')

@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    logout_user()
    return redirect(url_for('auth.login'))
