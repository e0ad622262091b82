"""Rich renderers for employees, leaves and salary records.

Amounts are rounded to cents here and nowhere else.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from payroll.sdk.rules import PayrollRules
from payroll.sdk.schemas import Employee, Leave, LeaveStatus, Manager, Salary

STATUS_STYLES = {
    LeaveStatus.PENDING: "yellow",
    LeaveStatus.APPROVED: "green",
    LeaveStatus.REJECTED: "red",
}


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def render_employees(console: Console, employees: List[Employee], rules: Optional[PayrollRules] = None) -> None:
    if not employees:
        console.print("No employees found.")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Department")
    table.add_column("Basic", justify="right")
    table.add_column("Gross", justify="right")

    for e in employees:
        table.add_row(e.id, e.name, e.employee_type, e.department, _money(e.basic_salary), _money(e.gross_salary(rules)))

    console.print(table)


def render_employee_detail(console: Console, employee: Employee, rules: Optional[PayrollRules] = None) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    gross = employee.gross_salary(rules)
    rows = [
        ("Employee ID", employee.id),
        ("Name", employee.name),
        ("Type", employee.employee_type),
        ("Email", employee.email),
        ("Phone", employee.phone),
        ("Department", employee.department),
        ("Joining Date", employee.joining_date.isoformat()),
        ("Basic Salary", _money(employee.basic_salary)),
        ("Gross Salary", _money(gross)),
        ("Tax", _money(employee.tax(rules))),
        ("Net Salary", _money(employee.net_salary(rules))),
        ("Available Leave Days", str(employee.available_leave_days)),
    ]
    if isinstance(employee, Manager):
        rows += [
            ("Team Size", str(employee.team_size)),
            ("Management Level", str(employee.management_level)),
        ]
    else:
        rows += [
            ("Programming Language", employee.programming_language),
            ("Experience Years", str(employee.experience_years)),
        ]

    for key, value in rows:
        table.add_row(key, value)

    console.print(Panel(table, title=employee.name, border_style="dim"))


def render_leaves(console: Console, leaves: List[Leave]) -> None:
    if not leaves:
        console.print("No leave records found.")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("Employee")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Type")
    table.add_column("Days", justify="right")
    table.add_column("Status")
    table.add_column("Reason")

    for leave in leaves:
        style = STATUS_STYLES.get(leave.status, "")
        table.add_row(
            leave.employee_id,
            leave.start_date.isoformat(),
            leave.end_date.isoformat(),
            leave.leave_type,
            str(leave.duration()),
            f"[{style}]{leave.status.value}[/{style}]",
            leave.reason,
        )

    console.print(table)


def render_salaries(console: Console, salaries: List[Salary]) -> None:
    if not salaries:
        console.print("No salary records found.")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("Employee")
    table.add_column("Period")
    table.add_column("Basic", justify="right")
    table.add_column("Gross", justify="right")
    table.add_column("Tax", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("Leave Days", justify="right")
    table.add_column("Processed")

    for s in salaries:
        table.add_row(
            s.employee_id,
            f"{s.month}/{s.year}",
            _money(s.basic_salary),
            _money(s.gross_salary),
            _money(s.tax_amount),
            _money(s.net_salary),
            str(s.leave_days),
            s.process_date.isoformat(),
        )

    console.print(table)


def render_salary_detail(console: Console, salary: Salary) -> None:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    table.add_row("Employee ID", salary.employee_id)
    table.add_row("Month/Year", f"{salary.month}/{salary.year}")
    table.add_row("Basic Salary", _money(salary.basic_salary))
    table.add_row("Gross Salary", _money(salary.gross_salary))
    table.add_row("Tax Amount", _money(salary.tax_amount))
    table.add_row("Net Salary", _money(salary.net_salary))
    table.add_row("Leave Days", str(salary.leave_days))
    table.add_row("Process Date", salary.process_date.isoformat())

    console.print(Panel(table, title="Salary Details", border_style="dim"))
