"""Shared fetch/save/delete steps of the entity screens.

Fetch failures come back as an error string for the list's error state.
Mutation failures roll the session back and come back as the backend's
message; nothing is retried.
"""
import logging
from sqlalchemy.exc import SQLAlchemyError
from extensions import db

logger = logging.getLogger(__name__)


def backend_message(e):
    orig = getattr(e, 'orig', None)
    return str(orig) if orig is not None else str(e)


def fetch_all(query, label):
    try:
        return query.all(), None
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Error fetching %s", label)
        return [], backend_message(e)


def lookup(query, label):
    """id -> name map for display labels; failures are logged and give {}."""
    try:
        return {row.id: row.name for row in query.all()}
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error fetching %s lookup", label)
        return {}


def save(instance, data, label):
    """Insert ``instance`` if new, else update it, with ``data`` applied."""
    for key, value in data.items():
        setattr(instance, key, value)
    try:
        db.session.add(instance)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Error saving %s", label)
        return f'Error saving {label}: {backend_message(e)}'
    return None


def delete(instance, label):
    try:
        db.session.delete(instance)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Error deleting %s", label)
        return f'Error deleting {label}: {backend_message(e)}'
    return None


def update_field(instance, field, value, label):
    try:
        setattr(instance, field, value)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.exception("Error updating %s.%s", label, field)
        return f'Error updating {label}: {backend_message(e)}'
    db.session.refresh(instance)
    return None
