"""Flask CLI commands for provisioning and maintenance.

Profiles are never created through the dashboard itself; these commands are
how an operator provisions the first super admin and seeds demo data.
"""
from decimal import Decimal

import click
from flask import Blueprint
from werkzeug.security import generate_password_hash

from extensions import db
from savour.auth import SUPER_ADMIN
from savour.models import User, Profile, Company, Employee, WaitingStaff, MenuItem, Order
from savour.orders import normalize_status

cli_bp = Blueprint('savour', __name__, cli_group=None)


@cli_bp.cli.command('init-db')
def init_db():
    """Create all tables."""
    db.create_all()
    click.echo('Database tables created.')


@cli_bp.cli.command('create-superadmin')
@click.argument('email')
@click.password_option()
def create_superadmin(email, password):
    """Create a login with a super_admin profile, or promote an existing one."""
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(email=email, password=generate_password_hash(password))
        db.session.add(user)
        db.session.flush()
    else:
        user.password = generate_password_hash(password)

    profile = db.session.get(Profile, user.id)
    if profile is None:
        profile = Profile(id=user.id)
        db.session.add(profile)
    profile.role = SUPER_ADMIN
    profile.is_super_admin = True
    db.session.commit()
    click.echo(f'{email} is now a super admin.')


@cli_bp.cli.command('seed-demo')
def seed_demo():
    """Insert a small demo data set."""
    if Company.query.first() is not None:
        click.echo('Database already has companies; skipping.')
        return

    acme = Company(name='Acme Inc.', floor_number=3, contact_email='office@acme.test')
    globex = Company(name='Globex', floor_number=7)
    db.session.add_all([acme, globex])
    db.session.flush()

    alice = Employee(company_id=acme.id, name='Alice Bekele', email='alice@acme.test', position='Engineer')
    db.session.add_all([
        alice,
        Employee(company_id=globex.id, name='Hana Tesfaye', email='hana@globex.test'),
        WaitingStaff(name='Samuel Girma', email='samuel@savour.test'),
        MenuItem(name='Shiro', price=Decimal('180.00'), category='food'),
        MenuItem(name='Macchiato', price=Decimal('60.00'), category='drinks'),
        MenuItem(name='Sambusa', price=Decimal('45.00'), category='snacks'),
    ])
    db.session.flush()
    db.session.add(Order(total_price=Decimal('240.00'), floor_number=3,
                         company_id=acme.id, employee_id=alice.id))
    db.session.commit()
    click.echo('Demo data created.')


@cli_bp.cli.command('normalize-order-statuses')
@click.option('--apply', 'apply_changes', is_flag=True, help='Write the changes instead of listing them.')
def normalize_order_statuses(apply_changes):
    """Rewrite legacy order status spellings to the canonical ones."""
    changed = 0
    for order in Order.query.all():
        target = normalize_status(order.status)
        if target is None:
            continue
        click.echo(f'{order.id}: {order.status!r} -> {target!r}')
        if apply_changes:
            order.status = target
        changed += 1

    if apply_changes:
        db.session.commit()
        click.echo(f'{changed} order(s) updated.')
    else:
        click.echo(f'{changed} order(s) would change. Re-run with --apply to write them.')
