from savour.auth import SUPER_ADMIN, ADMIN

ALL_ROLES = frozenset({SUPER_ADMIN, ADMIN})
SUPER_ONLY = frozenset({SUPER_ADMIN})

# Sidebar entries, in display order. 'roles' is the set allowed to open them.
NAV_ITEMS = [
    {'label': 'Dashboard', 'endpoint': 'admin.dashboard', 'icon': 'bi-speedometer2', 'roles': ALL_ROLES},
    {'label': 'Orders', 'endpoint': 'orders.list_orders', 'icon': 'bi-bag', 'roles': ALL_ROLES},
    {'label': 'Companies', 'endpoint': 'companies.list_companies', 'icon': 'bi-building', 'roles': ALL_ROLES},
    {'label': 'Employees', 'endpoint': 'employees.list_employees', 'icon': 'bi-people', 'roles': ALL_ROLES},
    {'label': 'Waiting Staff', 'endpoint': 'staff.list_staff', 'icon': 'bi-person-badge', 'roles': SUPER_ONLY},
    {'label': 'Menu', 'endpoint': 'menu.list_items', 'icon': 'bi-journal-text', 'roles': SUPER_ONLY},
    {'label': 'Settings', 'endpoint': 'admin.settings', 'icon': 'bi-gear', 'roles': ALL_ROLES},
]

# Every endpoint under a blueprint inherits the roles of that blueprint's section.
SECTION_ROLES = {
    'admin': ALL_ROLES,
    'orders': ALL_ROLES,
    'companies': ALL_ROLES,
    'employees': ALL_ROLES,
    'staff': SUPER_ONLY,
    'menu': SUPER_ONLY,
    'storage': ALL_ROLES,
}

ACTION_POLICY = {
    'companies.manage': SUPER_ONLY,
    'company_admins.manage': SUPER_ONLY,
    'employees.manage': ALL_ROLES,
    'orders.update': ALL_ROLES,
}


def visible_nav(role):
    """Sidebar entries the given role may open."""
    return [item for item in NAV_ITEMS if role in item['roles']]


def can_access(role, endpoint):
    if not endpoint:
        return False
    section = endpoint.split('.', 1)[0]
    return role in SECTION_ROLES.get(section, frozenset())


def can(role, action):
    return role in ACTION_POLICY.get(action, frozenset())
