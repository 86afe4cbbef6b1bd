import logging
from flask import Blueprint, current_app, request, redirect, url_for, render_template, flash
from extensions import db
from savour import filters
from savour.admins import get_company_admins, create_company_admin, remove_company_admin
from savour.errors import AdminProvisioningError
from sqlalchemy.exc import SQLAlchemyError
from savour.forms import parse_company, parse_admin, form_values, EMPTY_EMPLOYEE, employee_form
from savour.models import Company, Employee
from . import crud
from .email import send_email
from .guards import action_required, current_auth, require_shell_access
from .nav import can

logger = logging.getLogger(__name__)

companies_bp = Blueprint('companies', __name__, url_prefix='/companies')
companies_bp.before_request(require_shell_access)

EMPTY_COMPANY = {'name': '', 'floor_number': 1, 'contact_email': '', 'contact_phone': '',
                 'logo_url': '', 'is_active': True}


def _company_form(company):
    return {
        'name': company.name,
        'floor_number': company.floor_number,
        'contact_email': company.contact_email or '',
        'contact_phone': company.contact_phone or '',
        'logo_url': company.logo_url or '',
        'is_active': company.is_active,
    }


def _render_list(form=None, errors=None, editing_id=None, status=200):
    term = request.args.get('q', '')
    companies, error = crud.fetch_all(Company.query.order_by(Company.name), 'companies')
    return render_template(
        'companies.html',
        companies=filters.search(companies, term),
        total=len(companies),
        error=error,
        q=term,
        form=form,
        errors=errors or {},
        editing_id=editing_id,
    ), status


@companies_bp.route('')
def list_companies():
    form = editing_id = None
    if can(current_auth().role, 'companies.manage'):
        if request.args.get('new'):
            form = dict(EMPTY_COMPANY)
        elif request.args.get('edit'):
            company = db.session.get(Company, request.args['edit'])
            if company:
                form, editing_id = _company_form(company), company.id
    return _render_list(form=form, editing_id=editing_id)


@companies_bp.route('/new', methods=['POST'])
@action_required('companies.manage')
def create_company():
    data, errors = parse_company(request.form)
    if errors:
        return _render_list(form_values(request.form), errors, status=400)

    error = crud.save(Company(), data, 'company')
    if error:
        flash(error, 'danger')
        return _render_list(form_values(request.form), status=400)

    flash(f"Company {data['name']} added.")
    return redirect(url_for('companies.list_companies'))


@companies_bp.route('/<company_id>/edit', methods=['POST'])
@action_required('companies.manage')
def update_company(company_id):
    company = db.get_or_404(Company, company_id)
    data, errors = parse_company(request.form)
    if errors:
        return _render_list(form_values(request.form), errors, editing_id=company.id, status=400)

    error = crud.save(company, data, 'company')
    if error:
        flash(error, 'danger')
        return _render_list(form_values(request.form), editing_id=company_id, status=400)

    flash(f"Company {company.name} updated.")
    return redirect(url_for('companies.list_companies'))


@companies_bp.route('/<company_id>/delete', methods=['POST'])
@action_required('companies.manage')
def delete_company(company_id):
    company = db.get_or_404(Company, company_id)
    name = company.name
    # employees, orders and admin assignments go with it
    error = crud.delete(company, 'company')
    if error:
        flash(error, 'danger')
    else:
        flash(f"Company {name} deleted.")
    return redirect(url_for('companies.list_companies'))


@companies_bp.route('/<company_id>')
def company_details(company_id):
    company = db.get_or_404(Company, company_id)
    form = editing_id = None
    if request.args.get('new'):
        form = dict(EMPTY_EMPLOYEE)
    elif request.args.get('edit'):
        employee = db.session.get(Employee, request.args['edit'])
        if employee and employee.company_id == company.id:
            form, editing_id = employee_form(employee), employee.id
    return render_company_details(company, form=form, editing_id=editing_id)


def render_company_details(company, form=None, errors=None, editing_id=None, status=200):
    tab = request.args.get('tab', 'employees')
    if tab == 'admins' and not can(current_auth().role, 'company_admins.manage'):
        tab = 'employees'

    context = dict(company=company, tab=tab, q=request.values.get('q', ''),
                   form=form, errors=errors or {}, editing_id=editing_id)
    if tab == 'admins':
        try:
            context['admins'], context['error'] = get_company_admins(company.id), None
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception("Error fetching admins of %s", company.id)
            context['admins'], context['error'] = [], crud.backend_message(e)
        context['admin_form'] = {'email': request.args.get('email', '')}
    else:
        employees, error = crud.fetch_all(
            Employee.query.filter_by(company_id=company.id).order_by(Employee.name), 'employees')
        context.update(
            employees=filters.search(employees, context['q'], ('name', 'email')),
            total=len(employees),
            error=error,
        )
    return render_template('company_details.html', **context), status


@companies_bp.route('/<company_id>/admins', methods=['POST'])
@action_required('company_admins.manage')
def create_admin(company_id):
    company = db.get_or_404(Company, company_id)
    data, errors = parse_admin(request.form, current_app.config['ADMIN_PASSWORD_MIN_LENGTH'])
    if errors:
        for message in errors.values():
            flash(message, 'danger')
        return redirect(url_for('companies.company_details', company_id=company.id,
                                tab='admins', email=request.form.get('email', '')))
    try:
        create_company_admin(data['email'], data['password'], company.id)
    except AdminProvisioningError as e:
        flash(f'Error creating admin: {e.message}', 'danger')
        return redirect(url_for('companies.company_details', company_id=company.id,
                                tab='admins', email=data['email']))

    send_email(data['email'], f'You are now an admin of {company.name}',
               'email/admin_welcome', company=company, email=data['email'],
               login_url=url_for('auth.login', _external=True))
    flash('Admin created successfully!')
    return redirect(url_for('companies.company_details', company_id=company.id, tab='admins'))


@companies_bp.route('/<company_id>/admins/<user_id>/delete', methods=['POST'])
@action_required('company_admins.manage')
def remove_admin(company_id, user_id):
    try:
        remove_company_admin(user_id, company_id)
    except AdminProvisioningError as e:
        flash(f'Error removing admin: {e.message}', 'danger')
    else:
        flash('Admin removed.')
    return redirect(url_for('companies.company_details', company_id=company_id, tab='admins'))
