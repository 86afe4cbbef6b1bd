import pytest

from routes.nav import NAV_ITEMS, can, can_access, visible_nav
from savour.auth import ADMIN, SUPER_ADMIN


def labels(role):
    return [item['label'] for item in visible_nav(role)]


def test_super_admin_sees_every_section():
    assert labels(SUPER_ADMIN) == [item['label'] for item in NAV_ITEMS]


def test_admin_sees_reduced_menu():
    assert labels(ADMIN) == ['Dashboard', 'Orders', 'Companies', 'Employees', 'Settings']


def test_no_role_sees_nothing():
    assert visible_nav(None) == []
    assert not can_access(None, 'admin.dashboard')


@pytest.mark.parametrize('role', [SUPER_ADMIN, ADMIN])
def test_every_visible_entry_is_reachable(role):
    for item in visible_nav(role):
        assert can_access(role, item['endpoint'])


@pytest.mark.parametrize('endpoint', ['menu.list_items', 'menu.toggle_availability', 'staff.delete_staff'])
def test_admin_cannot_reach_super_admin_sections(endpoint):
    assert can_access(SUPER_ADMIN, endpoint)
    assert not can_access(ADMIN, endpoint)


def test_unknown_sections_are_closed():
    assert not can_access(SUPER_ADMIN, 'reports.index')
    assert not can_access(SUPER_ADMIN, None)


def test_actions():
    assert can(SUPER_ADMIN, 'companies.manage')
    assert not can(ADMIN, 'companies.manage')
    assert not can(ADMIN, 'company_admins.manage')
    assert can(ADMIN, 'employees.manage')
    assert can(ADMIN, 'orders.update')
    assert not can(SUPER_ADMIN, 'unknown.action')


def test_sidebar_follows_role(super_client):
    page = super_client.get('/').data
    assert b'Waiting Staff' in page
    assert b'href="/menu"' in page


def test_admin_sidebar_hides_super_admin_sections(admin_client):
    page = admin_client.get('/').data
    assert b'Waiting Staff' not in page
    assert b'href="/menu"' not in page
    assert b'href="/orders"' in page


def test_admin_is_redirected_from_hidden_sections(admin_client):
    resp = admin_client.get('/waiting-staff', follow_redirects=True)
    assert resp.status_code == 200
    assert b"You don&#39;t have access to that page." in resp.data
