import logging
from dataclasses import dataclass
from typing import Optional

from flask import g
from flask_login import user_logged_in, user_logged_out
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from savour.models import Profile

logger = logging.getLogger(__name__)

SUPER_ADMIN = 'super_admin'
ADMIN = 'admin'


@dataclass(frozen=True)
class AuthContext:
    """Who is signed in and what they may see, resolved once per request."""
    user: Optional[object]
    role: Optional[str]

    @property
    def is_authenticated(self):
        return self.user is not None and self.role is not None

    @property
    def is_super_admin(self):
        return self.role == SUPER_ADMIN


ANONYMOUS = AuthContext(user=None, role=None)


def resolve_role(user, profile):
    """Role for a session given its profile lookup result.

    ``profile`` is whatever the lookup produced: a Profile, or None when the
    row is missing or the fetch failed.
    """
    if user is None or profile is None:
        return None
    if profile.id != user.id:
        return None
    return profile.role or None


def fetch_profile(user_id):
    try:
        return db.session.get(Profile, user_id)
    except SQLAlchemyError:
        logger.exception("Profile lookup failed for user %s", user_id)
        db.session.rollback()
        return None


def build_auth_context(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        return ANONYMOUS
    role = resolve_role(user, fetch_profile(user.id))
    return AuthContext(user=user, role=role)


def check_login_privileges(user, require_super_admin):
    """Error message for a freshly authenticated user who may not proceed."""
    profile = fetch_profile(user.id)
    if require_super_admin:
        if profile is None or not profile.is_super_admin:
            return 'Access denied. Superadmin privileges required.'
        return None
    if resolve_role(user, profile) is None:
        return 'Access denied. No role is assigned to this account.'
    return None


@user_logged_in.connect
def _on_login(sender, user, **extra):
    g.pop('auth', None)
    logger.info("Session started for %s", user.email)


@user_logged_out.connect
def _on_logout(sender, user, **extra):
    g.pop('auth', None)
    if user is not None and getattr(user, 'is_authenticated', False):
        logger.info("Session ended for %s", user.email)
