"""Leave CLI commands."""

import click

from payroll.sdk import Leave, LeaveType, PayrollValidationError

from .common import echo_json, get_system, make_console, parse_date
from .renderers.tables import render_leaves


@click.group()
def leave():
    """Apply for, approve, reject and undo leave requests.

    \b
    Examples:
      payroll leave apply D001 2024-01-30 2024-02-02 --type SICK
      payroll leave approve D001 2024-01-30
      payroll leave undo                # remove the most recent application
    """
    pass


@leave.command("apply")
@click.argument("employee_id")
@click.argument("start", callback=parse_date)
@click.argument("end", callback=parse_date)
@click.option("--type", "leave_type", type=click.Choice([t.value for t in LeaveType]),
              default=LeaveType.CASUAL.value, show_default=True, help="Leave type.")
@click.option("--reason", default="", help="Reason for leave.")
@click.pass_context
def leave_apply(ctx, employee_id, start, end, leave_type, reason):
    """Apply for leave from START to END (inclusive, YYYY-MM-DD)."""
    system = get_system(ctx)

    if system.get_employee(employee_id) is None:
        click.secho(f"Warning: no employee with ID {employee_id}; recording leave anyway.", fg="yellow")

    new_leave = Leave(
        employee_id=employee_id,
        start_date=start,
        end_date=end,
        leave_type=leave_type,
        reason=reason,
    )
    try:
        system.apply_leave(new_leave)
    except PayrollValidationError as e:
        raise click.ClickException(str(e))

    system.checkpoint()
    click.echo(f"Leave applied: {employee_id} {start}..{end} ({new_leave.duration()} days, PENDING)")


@leave.command("approve")
@click.argument("employee_id")
@click.argument("start", callback=parse_date)
@click.pass_context
def leave_approve(ctx, employee_id, start):
    """Approve the pending leave for EMPLOYEE_ID starting on START."""
    system = get_system(ctx)
    if not system.approve_leave(employee_id, start):
        raise click.ClickException(f"No pending leave for {employee_id} starting {start}.")
    system.checkpoint()
    click.echo(f"Approved leave: {employee_id} starting {start}")


@leave.command("reject")
@click.argument("employee_id")
@click.argument("start", callback=parse_date)
@click.pass_context
def leave_reject(ctx, employee_id, start):
    """Reject the pending leave for EMPLOYEE_ID starting on START."""
    system = get_system(ctx)
    if not system.reject_leave(employee_id, start):
        raise click.ClickException(f"No pending leave for {employee_id} starting {start}.")
    system.checkpoint()
    click.echo(f"Rejected leave: {employee_id} starting {start}")


@leave.command("list")
@click.argument("employee_id", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def leave_list(ctx, employee_id, as_json):
    """List leaves, optionally only for EMPLOYEE_ID."""
    system = get_system(ctx)
    leaves = system.leaves_for(employee_id) if employee_id else system.leaves()
    if as_json:
        echo_json(leaves)
        return
    render_leaves(make_console(), leaves)


@leave.command("recent")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def leave_recent(ctx, as_json):
    """Show the most recent leave application."""
    recent = get_system(ctx).most_recent_leave()
    if recent is None:
        raise click.ClickException("No leave applications to show.")
    if as_json:
        echo_json(recent)
        return
    render_leaves(make_console(), [recent])


@leave.command("undo")
@click.pass_context
def leave_undo(ctx):
    """Remove the most recent leave application, whatever its status."""
    system = get_system(ctx)
    removed = system.undo_recent_leave()
    if removed is None:
        raise click.ClickException("No leave applications to undo.")
    system.checkpoint()
    click.echo(
        f"Undid leave: {removed.employee_id} {removed.start_date}..{removed.end_date} "
        f"({removed.status.value})"
    )
