import logging
import os
from flask import Flask
from extensions import db, migrate, socketio, login_manager, mail
from savour.models import User
from config import config

def create_app(config_name='default'):
    app = Flask(
        __name__,
        template_folder='savour/templates',
        static_folder='savour/static',
        static_url_path='/static'
    )
    app.config.from_object(config[config_name])
    logging.basicConfig(format='%(asctime)s %(levelname)s [%(name)s] %(message)s')
    logging.getLogger().setLevel(app.config['LOG_LEVEL'])

    db.init_app(app)
    migrate.init_app(app, db)
    socketio.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)
    login_manager.login_view = 'auth.login'

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, user_id)

    # connects the session-change signal handlers
    import savour.auth  # noqa: F401

    from routes.routes import admin_bp
    from routes.auth_routes import auth_bp
    from routes.ui_routes import ui_bp
    from routes.company_routes import companies_bp
    from routes.employee_routes import employees_bp
    from routes.staff_routes import staff_bp
    from routes.menu_routes import menu_bp
    from routes.order_routes import orders_bp
    from routes.storage_routes import storage_bp
    from savour.cli import cli_bp

    app.register_blueprint(admin_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(ui_bp)
    app.register_blueprint(companies_bp)
    app.register_blueprint(employees_bp)
    app.register_blueprint(staff_bp)
    app.register_blueprint(menu_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(storage_bp)
    app.register_blueprint(cli_bp)

    if app.config.get('SQLALCHEMY_DATABASE_URI', '').startswith('sqlite'):
        with app.app_context():
            db.create_all()

    return app

if __name__ == '__main__':
    socketio.run(create_app(os.getenv('FLASK_CONFIG') or 'default'))
