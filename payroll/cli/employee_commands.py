"""Employee CLI commands."""

from datetime import date

import click
from pydantic import ValidationError

from payroll.sdk import Developer, Manager, PayrollValidationError

from .common import echo_json, get_system, make_console, parse_date
from .renderers.tables import render_employee_detail, render_employees


def common_employee_options(f):
    """Options shared by add-manager and add-developer."""
    options = [
        click.option("--id", "employee_id", required=True, help="Unique employee ID."),
        click.option("--name", required=True, help="Full name."),
        click.option("--email", default="", help="Email address."),
        click.option("--phone", default="", help="Phone number."),
        click.option("--department", default="", help="Department."),
        click.option("--joining-date", callback=parse_date, help="Joining date (YYYY-MM-DD). Defaults to today."),
        click.option("--basic-salary", type=float, required=True, help="Monthly basic salary."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _add(ctx, employee_cls, **fields):
    system = get_system(ctx)
    fields["joining_date"] = fields.get("joining_date") or date.today()
    fields.setdefault("available_leave_days", system.rules.default_leave_days)

    try:
        employee = employee_cls(**fields)
        added = system.add_employee(employee)
    except (ValidationError, PayrollValidationError) as e:
        raise click.ClickException(str(e))

    if not added:
        raise click.ClickException(f"Employee with ID {employee.id} already exists.")

    system.checkpoint()
    click.echo(f"Added {employee.employee_type.lower()}: {employee.id} ({employee.name})")


@click.group()
def employee():
    """Manage employees (managers and developers)."""
    pass


@employee.command("add-manager")
@common_employee_options
@click.option("--team-size", type=int, default=0, help="Number of direct reports.")
@click.option("--management-level", type=int, default=1, help="Management level (1-3).")
@click.pass_context
def employee_add_manager(ctx, employee_id, name, email, phone, department, joining_date, basic_salary,
                         team_size, management_level):
    """Add a new manager."""
    _add(
        ctx, Manager,
        id=employee_id, name=name, email=email, phone=phone, department=department,
        joining_date=joining_date, basic_salary=basic_salary,
        team_size=team_size, management_level=management_level,
    )


@employee.command("add-developer")
@common_employee_options
@click.option("--language", "programming_language", default="", help="Primary programming language.")
@click.option("--experience", "experience_years", type=int, default=0, help="Years of experience.")
@click.pass_context
def employee_add_developer(ctx, employee_id, name, email, phone, department, joining_date, basic_salary,
                           programming_language, experience_years):
    """Add a new developer."""
    _add(
        ctx, Developer,
        id=employee_id, name=name, email=email, phone=phone, department=department,
        joining_date=joining_date, basic_salary=basic_salary,
        programming_language=programming_language, experience_years=experience_years,
    )


@employee.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def employee_list(ctx, as_json):
    """List all employees."""
    system = get_system(ctx)
    employees = system.employees()
    if as_json:
        echo_json(employees)
        return
    render_employees(make_console(), employees, system.rules)


@employee.command("show")
@click.argument("employee_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def employee_show(ctx, employee_id, as_json):
    """Show details for EMPLOYEE_ID, including gross, tax and net."""
    system = get_system(ctx)
    emp = system.get_employee(employee_id)
    if emp is None:
        raise click.ClickException(f"Employee with ID {employee_id} not found.")

    if as_json:
        data = emp.model_dump(mode="json")
        data["gross_salary"] = emp.gross_salary(system.rules)
        data["tax"] = emp.tax(system.rules)
        data["net_salary"] = emp.net_salary(system.rules)
        echo_json(data)
        return
    render_employee_detail(make_console(), emp, system.rules)


@employee.command("update")
@click.argument("employee_id")
@click.option("--name", help="New name.")
@click.option("--email", help="New email.")
@click.option("--phone", help="New phone.")
@click.option("--department", help="New department.")
@click.option("--basic-salary", type=float, help="New monthly basic salary.")
@click.pass_context
def employee_update(ctx, employee_id, name, email, phone, department, basic_salary):
    """Update fields of an existing employee."""
    changes = {
        "name": name,
        "email": email,
        "phone": phone,
        "department": department,
        "basic_salary": basic_salary,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        raise click.UsageError("Nothing to update. Pass at least one field option.")

    system = get_system(ctx)
    emp = system.get_employee(employee_id)
    if emp is None:
        raise click.ClickException(f"Employee with ID {employee_id} not found.")

    updated = emp.model_copy(update=changes)
    try:
        system.update_employee(updated)
    except PayrollValidationError as e:
        raise click.ClickException(str(e))

    system.checkpoint()
    click.echo(f"Updated {employee_id}: {', '.join(sorted(changes))}")


@employee.command("deduct-leave")
@click.argument("employee_id")
@click.argument("days", type=click.IntRange(min=0))
@click.pass_context
def employee_deduct_leave(ctx, employee_id, days):
    """Deduct DAYS from EMPLOYEE_ID's available leave balance.

    Approving a leave does not touch the balance; use this to book it.
    """
    system = get_system(ctx)
    emp = system.get_employee(employee_id)
    if emp is None:
        raise click.ClickException(f"Employee with ID {employee_id} not found.")

    if not system.deduct_leave_days(employee_id, days):
        raise click.ClickException(
            f"Insufficient leave balance: {employee_id} has {emp.available_leave_days} day(s), requested {days}."
        )

    system.checkpoint()
    click.echo(f"Deducted {days} leave day(s) from {employee_id}; {emp.available_leave_days} remaining.")
