"""Salary processing CLI commands."""

import click

from .common import echo_json, get_system, make_console
from .renderers.tables import render_salaries, render_salary_detail

MONTH = click.IntRange(1, 12)


@click.group()
def salary():
    """Process and view monthly salaries.

    \b
    Examples:
      payroll salary process 1 2024      # process January 2024 for everyone
      payroll salary show D001 1 2024
      payroll salary history D001
    """
    pass


@salary.command("process")
@click.argument("month", type=MONTH)
@click.argument("year", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def salary_process(ctx, month, year, as_json):
    """Process MONTH/YEAR salaries for all employees.

    Running the same month again creates a second set of records.
    """
    system = get_system(ctx)
    processed = system.process_salaries(month, year)
    system.checkpoint()

    if as_json:
        echo_json(processed)
        return
    click.echo(f"Processed {len(processed)} salary record(s) for {month}/{year}.")
    render_salaries(make_console(), processed)


@salary.command("show")
@click.argument("employee_id")
@click.argument("month", type=MONTH)
@click.argument("year", type=int)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def salary_show(ctx, employee_id, month, year, as_json):
    """Show the salary record for EMPLOYEE_ID in MONTH/YEAR."""
    record = get_system(ctx).view_salary_details(employee_id, month, year)
    if record is None:
        raise click.ClickException("No salary record found for the specified month and year.")
    if as_json:
        echo_json(record)
        return
    render_salary_detail(make_console(), record)


@salary.command("history")
@click.argument("employee_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def salary_history(ctx, employee_id, as_json):
    """List every salary record for EMPLOYEE_ID, in processing order."""
    records = get_system(ctx).salaries_for(employee_id)
    if as_json:
        echo_json(records)
        return
    render_salaries(make_console(), records)


@salary.command("pending")
@click.argument("employee_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def salary_pending(ctx, employee_id, as_json):
    """List pending salaries for EMPLOYEE_ID, oldest first.

    The pending queue is rebuilt from the salary history on every load.
    """
    records = get_system(ctx).pending_salaries(employee_id)
    if as_json:
        echo_json(records)
        return
    render_salaries(make_console(), records)


@salary.command("next")
@click.argument("employee_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def salary_next(ctx, employee_id, as_json):
    """Take the oldest pending salary for EMPLOYEE_ID off the queue."""
    record = get_system(ctx).process_next_salary(employee_id)
    if record is None:
        raise click.ClickException(f"No pending salaries for {employee_id}.")
    if as_json:
        echo_json(record)
        return
    render_salary_detail(make_console(), record)
