from flask_login import UserMixin
import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy import event
from sqlalchemy.engine import Engine
from extensions import db

MENU_CATEGORIES = ('food', 'drinks', 'snacks')


def new_id():
    return str(uuid.uuid4())


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE rules are ignored by SQLite unless switched on per connection
    if dbapi_connection.__class__.__module__.startswith('sqlite3'):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()


class User(UserMixin, db.Model):
    """An authenticated identity. Role and privileges live on Profile."""
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    profile = db.relationship('Profile', uselist=False, backref='user', cascade='all, delete-orphan')
    admin_assignments = db.relationship('CompanyAdmin', backref='user', cascade='all, delete-orphan')


class Profile(db.Model):
    __tablename__ = 'profiles'

    id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    role = db.Column(db.String(30))  # 'super_admin' or 'admin'
    is_super_admin = db.Column(db.Boolean, default=False, nullable=False)


class Company(db.Model):
    __tablename__ = 'companies'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(150), nullable=False)
    floor_number = db.Column(db.Integer, nullable=False)
    contact_email = db.Column(db.String(255))
    contact_phone = db.Column(db.String(50))
    logo_url = db.Column(db.String(500))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    employees = db.relationship('Employee', backref='company', cascade='all, delete-orphan', passive_deletes=True)
    orders = db.relationship('Order', backref='company', cascade='all, delete-orphan', passive_deletes=True)
    admin_assignments = db.relationship('CompanyAdmin', backref='company', cascade='all, delete-orphan', passive_deletes=True)


class Employee(db.Model):
    __tablename__ = 'employees'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company_id = db.Column(db.String(36), db.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50))
    position = db.Column(db.String(100))
    avatar_url = db.Column(db.String(500))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    orders = db.relationship('Order', backref='employee')


class WaitingStaff(db.Model):
    __tablename__ = 'waiting_staff'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(255))
    phone = db.Column(db.String(50))
    avatar_url = db.Column(db.String(500))
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    orders = db.relationship('Order', backref='waiting_staff')


class MenuItem(db.Model):
    __tablename__ = 'menu_items'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(150), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)
    category = db.Column(db.String(20), nullable=False, default='food')  # food, drinks, snacks
    available = db.Column(db.Boolean, default=True, nullable=False)
    image = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': str(self.price),
            'category': self.category,
            'available': self.available,
            'image': self.image,
        }


class Order(db.Model):
    __tablename__ = 'orders'

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    total_price = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0.00'))
    status = db.Column(db.String(50), nullable=False, default='pending_confirmation')
    status_description = db.Column(db.Text)
    floor_number = db.Column(db.Integer, nullable=False)
    company_id = db.Column(db.String(36), db.ForeignKey('companies.id', ondelete='CASCADE'))
    employee_id = db.Column(db.String(36), db.ForeignKey('employees.id', ondelete='SET NULL'))
    waiting_staff_id = db.Column(db.String(36), db.ForeignKey('waiting_staff.id', ondelete='SET NULL'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'total_price': str(self.total_price),
            'status': self.status,
            'status_description': self.status_description,
            'floor_number': self.floor_number,
            'company_id': self.company_id,
            'employee_id': self.employee_id,
            'waiting_staff_id': self.waiting_staff_id,
        }


class CompanyAdmin(db.Model):
    """Pairs an identity with a company it may administer."""
    __tablename__ = 'company_admins'

    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    company_id = db.Column(db.String(36), db.ForeignKey('companies.id', ondelete='CASCADE'), primary_key=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
