from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from extensions import db
from savour.models import User, Profile, Company, Employee, WaitingStaff, MenuItem, Order

PASSWORD = 'secret123'


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['STORAGE_ROOT'] = str(tmp_path / 'storage')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(app, email, role='super_admin', is_super_admin=True, with_profile=True):
    """Create an identity (and its profile) and return its id."""
    with app.app_context():
        user = User(email=email, password=generate_password_hash(PASSWORD))
        db.session.add(user)
        db.session.flush()
        if with_profile:
            db.session.add(Profile(id=user.id, role=role, is_super_admin=is_super_admin))
        db.session.commit()
        return user.id


def login(client, email, password=PASSWORD):
    return client.post('/login', data={'email': email, 'password': password})


def force_session(client, user_id):
    """Put a user in the session without going through the login form."""
    with client.session_transaction() as sess:
        sess['_user_id'] = user_id
        sess['_fresh'] = True


@pytest.fixture
def superadmin(app):
    return make_user(app, 'root@savour.test')


@pytest.fixture
def super_client(client, superadmin):
    login(client, 'root@savour.test')
    return client


@pytest.fixture
def admin_user(app):
    return make_user(app, 'admin@acme.test', role='admin', is_super_admin=False)


@pytest.fixture
def admin_client(client, admin_user):
    force_session(client, admin_user)
    return client


@pytest.fixture
def sample_data(app):
    """A small building: two companies, three employees, two waiters, three dishes, two orders.

    Returns the ids of the created rows by name.
    """
    with app.app_context():
        acme = Company(name='Acme Inc.', floor_number=3)
        globex = Company(name='Globex', floor_number=7)
        db.session.add_all([acme, globex])
        db.session.flush()

        alice = Employee(company_id=acme.id, name='Alice Bekele', email='alice@acme.test')
        bob = Employee(company_id=acme.id, name='Bob Tadesse', email='bob@example.com')
        hana = Employee(company_id=globex.id, name='Hana', email='hana@globex.test')
        sam = WaitingStaff(name='Samuel Girma', email='sam@savour.test')
        liya = WaitingStaff(name='Liya', email='liya@savour.test')
        shiro = MenuItem(name='Shiro', price=Decimal('180.00'), category='food')
        macchiato = MenuItem(name='Macchiato', price=Decimal('60.00'), category='drinks')
        sambusa = MenuItem(name='Sambusa', price=Decimal('45.00'), category='snacks')
        db.session.add_all([alice, bob, hana, sam, liya, shiro, macchiato, sambusa])
        db.session.flush()

        order_acme = Order(total_price=Decimal('240.00'), floor_number=3,
                           company_id=acme.id, employee_id=alice.id)
        order_globex = Order(total_price=Decimal('90.00'), floor_number=7, company_id=globex.id,
                             employee_id=hana.id, waiting_staff_id=sam.id)
        db.session.add_all([order_acme, order_globex])
        db.session.commit()

        rows = dict(acme=acme, globex=globex, alice=alice, bob=bob, hana=hana, sam=sam, liya=liya,
                    shiro=shiro, macchiato=macchiato, sambusa=sambusa,
                    order_acme=order_acme, order_globex=order_globex)
        return {name: row.id for name, row in rows.items()}
