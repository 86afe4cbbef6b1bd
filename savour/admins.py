"""Company admin provisioning.

These run with full privileges on the server because creating a login
identity cannot be done through the ordinary entity forms. Each call is one
transaction: it either commits completely or raises AdminProvisioningError
with the session rolled back.
"""
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db
from savour.auth import ADMIN
from savour.errors import AdminProvisioningError
from savour.forms import is_valid_email
from savour.models import Company, CompanyAdmin, Profile, User

logger = logging.getLogger(__name__)


def get_company_admins(company_id):
    """Admins of one company as dicts with user_id, email and created_at."""
    rows = db.session.query(CompanyAdmin, User.email).join(
        User, User.id == CompanyAdmin.user_id
    ).filter(
        CompanyAdmin.company_id == company_id
    ).order_by(CompanyAdmin.created_at).all()
    return [
        {'user_id': assignment.user_id, 'email': email, 'created_at': assignment.created_at}
        for assignment, email in rows
    ]


def create_company_admin(email, password, company_id):
    email = (email or '').strip().lower()
    if not is_valid_email(email):
        raise AdminProvisioningError('A valid email address is required.')
    min_length = current_app.config.get('ADMIN_PASSWORD_MIN_LENGTH', 6)
    if not password or len(password) < min_length:
        raise AdminProvisioningError(f'Password must be at least {min_length} characters.')

    company = db.session.get(Company, company_id)
    if company is None:
        raise AdminProvisioningError('Company not found.')

    user = User.query.filter_by(email=email).first()
    if user is not None:
        if db.session.get(CompanyAdmin, (user.id, company_id)):
            raise AdminProvisioningError(f'{email} is already an admin of {company.name}.')
        # linking an existing identity requires proving ownership of it
        if not check_password_hash(user.password, password):
            raise AdminProvisioningError('A user with this email already exists.')
    else:
        user = User(email=email, password=generate_password_hash(password))
        db.session.add(user)
        db.session.flush()
        db.session.add(Profile(id=user.id, role=ADMIN, is_super_admin=False))

    db.session.add(CompanyAdmin(user_id=user.id, company_id=company.id))
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Creating admin %s for company %s failed", email, company_id)
        raise AdminProvisioningError(str(e.orig) if getattr(e, 'orig', None) else str(e))

    logger.info("Provisioned admin %s for company %s", email, company.name)
    return user


def remove_company_admin(user_id, company_id):
    assignment = db.session.get(CompanyAdmin, (user_id, company_id))
    if assignment is None:
        raise AdminProvisioningError('This user is not an admin of the company.')

    user = db.session.get(User, user_id)
    db.session.delete(assignment)
    db.session.flush()

    # drop identities that no longer administer anything
    remaining = CompanyAdmin.query.filter_by(user_id=user_id).count()
    profile = db.session.get(Profile, user_id)
    if user is not None and remaining == 0 and not (profile and profile.is_super_admin):
        db.session.delete(user)

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Removing admin %s from company %s failed", user_id, company_id)
        raise AdminProvisioningError(str(e))
    logger.info("Removed admin %s from company %s", user_id, company_id)
