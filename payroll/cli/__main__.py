"""Payroll Ledger CLI - employees, leave requests and monthly salaries."""

import click

from payroll import __version__

from .employee_commands import employee as employee_group
from .leave_commands import leave as leave_group
from .salary_commands import salary as salary_group
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="payroll")
@click.option("--strict/--no-strict", default=None,
              help="Reject inverted leave dates and negative/out-of-range employee fields. "
                   "Defaults to the strict_validation setting.")
@click.pass_context
def cli(ctx, strict):
    """Payroll Ledger - employee, leave and salary tracking.

    Data is stored as CSV files (employees.csv, leaves.csv, salaries.csv)
    in the data directory. Every command that changes state saves all
    three files before exiting.

    Configuration is loaded from (in order):

    \b
    1. PAYROLL_CONFIG_PATH environment variable
    2. ~/.config/payroll-ledger/settings.json (XDG default)

    Run 'payroll settings show' to see the effective data directory.
    """
    ctx.ensure_object(dict)
    # None means "use the strict_validation setting"
    ctx.obj["strict"] = strict


cli.add_command(employee_group)
cli.add_command(leave_group)
cli.add_command(salary_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
