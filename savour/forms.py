"""Validation of submitted entity forms.

Each ``parse_*`` function takes ``request.form`` and returns ``(data, errors)``.
``data`` holds the cleaned column values ready to be assigned to a model and
``errors`` maps field names to messages. Nothing is written when ``errors`` is
non-empty.
"""
import re
from decimal import Decimal, InvalidOperation

from savour.models import MENU_CATEGORIES

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def _text(form, key):
    return (form.get(key) or '').strip()


def _optional(form, key):
    return _text(form, key) or None


def _checkbox(form, key, default=True):
    # forms post a hidden 'off' ahead of the checkbox; an absent key keeps the default
    if key not in form:
        return default
    values = form.getlist(key) if hasattr(form, 'getlist') else [form.get(key)]
    return values[-1] in ('on', 'true', '1', 'y')


def is_valid_email(value):
    return bool(value) and EMAIL_RE.match(value) is not None


def _required_name(form, errors):
    name = _text(form, 'name')
    if not name:
        errors['name'] = 'Name is required.'
    return name


def _email(form, errors, key='email', required=False):
    email = _text(form, key)
    if not email:
        if required:
            errors[key] = 'Email is required.'
        return None
    if not is_valid_email(email):
        errors[key] = 'Enter a valid email address.'
    return email


def _integer(form, key, errors, label):
    raw = _text(form, key)
    try:
        return int(raw)
    except ValueError:
        errors[key] = f'{label} must be a whole number.'
        return None


def parse_company(form):
    errors = {}
    data = {
        'name': _required_name(form, errors),
        'floor_number': _integer(form, 'floor_number', errors, 'Floor number'),
        'contact_email': _email(form, errors, key='contact_email'),
        'contact_phone': _optional(form, 'contact_phone'),
        'logo_url': _optional(form, 'logo_url'),
        'is_active': _checkbox(form, 'is_active'),
    }
    return data, errors


def parse_employee(form):
    errors = {}
    data = {
        'name': _required_name(form, errors),
        'email': _email(form, errors, required=True),
        'phone': _optional(form, 'phone'),
        'position': _optional(form, 'position'),
        'avatar_url': _optional(form, 'avatar_url'),
        'is_active': _checkbox(form, 'is_active'),
    }
    return data, errors


def parse_waiting_staff(form):
    errors = {}
    data = {
        'name': _required_name(form, errors),
        'email': _email(form, errors),
        'phone': _optional(form, 'phone'),
        'avatar_url': _optional(form, 'avatar_url'),
        'is_active': _checkbox(form, 'is_active'),
    }
    return data, errors


def parse_menu_item(form):
    errors = {}
    price = None
    raw_price = _text(form, 'price')
    try:
        price = Decimal(raw_price).quantize(Decimal('0.01'))
        if price < 0:
            errors['price'] = 'Price cannot be negative.'
    except InvalidOperation:
        errors['price'] = 'Price must be a number.'

    category = _text(form, 'category') or 'food'
    if category not in MENU_CATEGORIES:
        errors['category'] = 'Choose food, drinks or snacks.'

    data = {
        'name': _required_name(form, errors),
        'price': price,
        'category': category,
        'available': _checkbox(form, 'available'),
        'image': _optional(form, 'image'),
    }
    return data, errors


def parse_admin(form, min_password_length):
    errors = {}
    email = _email(form, errors, required=True)
    password = form.get('password') or ''
    if len(password) < min_password_length:
        errors['password'] = f'Password must be at least {min_password_length} characters.'
    return {'email': email, 'password': password}, errors


def form_values(form):
    """Echo submitted values back into a re-rendered form, minus secrets.

    Checkboxes post a hidden 'off' ahead of the box itself, so the last value
    of each key is the one the user chose.
    """
    if hasattr(form, 'getlist'):
        return {k: form.getlist(k)[-1] for k in form.keys() if k != 'password'}
    return {k: v for k, v in form.items() if k != 'password'}


EMPTY_EMPLOYEE = {'name': '', 'email': '', 'phone': '', 'position': '', 'avatar_url': '', 'is_active': True}


def employee_form(employee):
    """Initial values of the employee form when editing ``employee``."""
    return {
        'name': employee.name,
        'email': employee.email,
        'phone': employee.phone or '',
        'position': employee.position or '',
        'avatar_url': employee.avatar_url or '',
        'is_active': employee.is_active,
    }
