from flask import Blueprint, request, redirect, url_for, render_template, flash
from extensions import db
from savour import filters
from savour.forms import parse_employee, form_values, EMPTY_EMPLOYEE, employee_form
from savour.models import Company, Employee
from . import crud
from .company_routes import render_company_details
from .guards import action_required, require_shell_access

employees_bp = Blueprint('employees', __name__, url_prefix='/employees')
employees_bp.before_request(require_shell_access)


def _back_to(company_id):
    # forms embedded in the company details page post origin=company
    if request.values.get('origin') == 'company':
        return url_for('companies.company_details', company_id=company_id, tab='employees')
    return url_for('employees.list_employees', company_id=company_id)


def _render(selected_id, form=None, errors=None, editing_id=None, status=200):
    if request.values.get('origin') == 'company' and selected_id:
        company = db.get_or_404(Company, selected_id)
        return render_company_details(company, form, errors, editing_id, status)

    companies, error = crud.fetch_all(Company.query.order_by(Company.name), 'companies')
    if not selected_id and len(companies) == 1:
        selected_id = companies[0].id
    selected = next((c for c in companies if c.id == selected_id), None)

    term = request.values.get('q', '')
    employees, total = [], 0
    if selected is not None and error is None:
        rows, error = crud.fetch_all(
            Employee.query.filter_by(company_id=selected.id).order_by(Employee.name), 'employees')
        employees, total = filters.search(rows, term, ('name', 'email')), len(rows)

    return render_template(
        'employees.html',
        companies=companies,
        selected=selected,
        employees=employees,
        total=total,
        error=error,
        q=term,
        form=form if selected is not None else None,
        errors=errors or {},
        editing_id=editing_id,
    ), status


@employees_bp.route('')
def list_employees():
    company_id = request.args.get('company_id')
    form = editing_id = None
    if request.args.get('new'):
        form = dict(EMPTY_EMPLOYEE)
    elif request.args.get('edit'):
        employee = db.session.get(Employee, request.args['edit'])
        if employee:
            form, editing_id, company_id = employee_form(employee), employee.id, employee.company_id
    return _render(company_id, form=form, editing_id=editing_id)


@employees_bp.route('/new', methods=['POST'])
@action_required('employees.manage')
def create_employee():
    company = db.get_or_404(Company, request.form.get('company_id', ''))
    data, errors = parse_employee(request.form)
    if errors:
        return _render(company.id, form_values(request.form), errors, status=400)

    data['company_id'] = company.id
    error = crud.save(Employee(), data, 'employee')
    if error:
        flash(error, 'danger')
        return _render(company.id, form_values(request.form), status=400)

    flash(f"Employee {data['name']} added.")
    return redirect(_back_to(company.id))


@employees_bp.route('/<employee_id>/edit', methods=['POST'])
@action_required('employees.manage')
def update_employee(employee_id):
    employee = db.get_or_404(Employee, employee_id)
    data, errors = parse_employee(request.form)
    if errors:
        return _render(employee.company_id, form_values(request.form), errors,
                       editing_id=employee.id, status=400)

    error = crud.save(employee, data, 'employee')
    if error:
        flash(error, 'danger')
        return _render(employee.company_id, form_values(request.form),
                       editing_id=employee.id, status=400)

    flash(f"Employee {employee.name} updated.")
    return redirect(_back_to(employee.company_id))


@employees_bp.route('/<employee_id>/delete', methods=['POST'])
@action_required('employees.manage')
def delete_employee(employee_id):
    employee = db.get_or_404(Employee, employee_id)
    company_id, name = employee.company_id, employee.name
    error = crud.delete(employee, 'employee')
    if error:
        flash(error, 'danger')
    else:
        flash(f"Employee {name} deleted.")
    return redirect(_back_to(company_id))
