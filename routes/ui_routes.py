from flask import Blueprint
from savour import orders as order_status
from .guards import current_auth
from .nav import visible_nav, can

ui_bp = Blueprint('ui', __name__)


@ui_bp.app_context_processor
def inject_admin_nav():
    """Injects the auth context and the role-filtered sidebar into all templates."""
    auth = current_auth()
    sidebar_menu = visible_nav(auth.role) if auth.is_authenticated else []
    return dict(
        auth=auth,
        sidebar_menu=sidebar_menu,
        can=lambda action: can(auth.role, action),
        order_status=order_status,
    )
