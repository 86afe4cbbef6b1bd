from extensions import db
from savour.models import Company, Employee


def test_no_company_selected_shows_prompt(super_client, sample_data):
    page = super_client.get('/employees')
    assert b'Select a company to view its employees.' in page.data
    assert b'Alice Bekele' not in page.data


def test_single_company_is_selected_automatically(app, super_client):
    with app.app_context():
        company = Company(name='Solo', floor_number=1)
        db.session.add(company)
        db.session.flush()
        db.session.add(Employee(company_id=company.id, name='Only One', email='one@solo.test'))
        db.session.commit()

    page = super_client.get('/employees')
    assert b'Only One' in page.data


def test_list_is_scoped_to_selected_company(super_client, sample_data):
    page = super_client.get(f"/employees?company_id={sample_data['globex']}")
    assert b'Hana' in page.data
    assert b'Alice Bekele' not in page.data


def test_search_by_name_or_email(super_client, sample_data):
    acme = sample_data['acme']
    by_email = super_client.get(f'/employees?company_id={acme}&q=example')
    assert b'Bob Tadesse' in by_email.data
    assert b'Alice Bekele' not in by_email.data

    by_name = super_client.get(f'/employees?company_id={acme}&q=ALICE')
    assert b'Alice Bekele' in by_name.data
    assert b'Bob Tadesse' not in by_name.data


def test_create_employee(app, super_client, sample_data):
    resp = super_client.post('/employees/new', data={
        'company_id': sample_data['globex'], 'name': 'Kebede', 'email': 'kebede@globex.test',
        'position': 'Accountant',
    })
    assert resp.status_code == 302
    assert f"company_id={sample_data['globex']}" in resp.headers['Location']
    with app.app_context():
        employee = Employee.query.filter_by(email='kebede@globex.test').one()
        assert employee.company_id == sample_data['globex']
        assert employee.is_active is True
        assert employee.phone is None


def test_create_from_company_page_returns_there(super_client, sample_data):
    resp = super_client.post('/employees/new', data={
        'company_id': sample_data['acme'], 'name': 'Dawit', 'email': 'dawit@acme.test',
        'origin': 'company',
    })
    location = resp.headers['Location']
    assert f"/companies/{sample_data['acme']}" in location
    assert 'tab=employees' in location


def test_employee_requires_valid_email(app, super_client, sample_data):
    resp = super_client.post('/employees/new', data={
        'company_id': sample_data['acme'], 'name': 'No Mail', 'email': 'nope',
    })
    assert resp.status_code == 400
    assert b'Enter a valid email address.' in resp.data
    with app.app_context():
        assert Employee.query.filter_by(name='No Mail').count() == 0


def test_update_and_deactivate_employee(app, super_client, sample_data):
    resp = super_client.post(f"/employees/{sample_data['bob']}/edit", data={
        'name': 'Bob T.', 'email': 'bob@acme.test', 'is_active': 'off',
    })
    assert resp.status_code == 302
    with app.app_context():
        bob = db.session.get(Employee, sample_data['bob'])
        assert (bob.name, bob.email, bob.is_active) == ('Bob T.', 'bob@acme.test', False)


def test_delete_employee_keeps_their_orders(app, super_client, sample_data):
    from savour.models import Order
    resp = super_client.post(f"/employees/{sample_data['alice']}/delete")
    assert resp.status_code == 302
    with app.app_context():
        assert db.session.get(Employee, sample_data['alice']) is None
        order = db.session.get(Order, sample_data['order_acme'])
        assert order is not None
        assert order.employee_id is None


def test_admin_role_may_manage_employees(app, admin_client, sample_data):
    resp = admin_client.post('/employees/new', data={
        'company_id': sample_data['acme'], 'name': 'Tigist', 'email': 'tigist@acme.test',
    })
    assert resp.status_code == 302
    with app.app_context():
        assert Employee.query.filter_by(email='tigist@acme.test').count() == 1
