"""Monthly payroll processing.

SDK layer - pure logic over in-memory employees and leaves. No CLI,
presentation or file access.

For each employee, independently:
1. Sum approved leave days overlapping the target month
2. Prorate a deduction: basic / days_in_month * leave_days
3. gross = role gross - deduction (not clamped; can go negative)
4. tax on the reduced gross, net = gross - tax
5. Emit an immutable Salary, append to the master list and enqueue it

Processing the same month twice produces two records. Nothing is
deduplicated and view_salary_details() returns the earliest.
"""

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional

from .overlap import days_in_calendar_month, days_in_month
from .pending import PendingSalaryQueue
from .rules import DEFAULT_RULES, PayrollRules
from .schemas import Employee, Leave, LeaveStatus, Salary
from .tax import calc_tax

logger = logging.getLogger(__name__)


class PayrollProcessor:
    """Produces salary records and keeps the master list and pending queues."""

    def __init__(
        self,
        salaries: Optional[Iterable[Salary]] = None,
        rules: Optional[PayrollRules] = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Args:
            salaries: Previously persisted salaries, in processing order.
                      Each is also enqueued as pending.
            rules: Tax and allowance rules (defaults to built-in)
            today: Clock for Salary.process_date
        """
        self.rules = rules or DEFAULT_RULES
        self._today = today
        self._salaries: List[Salary] = []
        self.pending = PendingSalaryQueue()

        for salary in salaries or []:
            self._record(salary)

    def _record(self, salary: Salary) -> None:
        self._salaries.append(salary)
        self.pending.enqueue(salary)

    def leave_days_for(self, employee_id: str, leaves: Iterable[Leave], month: int, year: int) -> int:
        """Approved leave days for an employee that fall inside the month."""
        total = 0
        for leave in leaves:
            if leave.employee_id != employee_id or leave.status != LeaveStatus.APPROVED:
                continue
            total += days_in_month(leave, month, year)
        return total

    def process_salary(self, employee: Employee, leaves: Iterable[Leave], month: int, year: int) -> Salary:
        """Compute, record and enqueue one employee's salary for a month.

        Raises:
            ValueError: If month is not in 1..12
        """
        leave_days = self.leave_days_for(employee.id, leaves, month, year)
        total_days = days_in_calendar_month(month, year)

        leave_deduction = 0.0
        if leave_days > 0:
            leave_deduction = (employee.basic_salary / total_days) * leave_days

        gross = employee.gross_salary(self.rules) - leave_deduction
        tax_amount = calc_tax(gross, self.rules)

        salary = Salary(
            employee_id=employee.id,
            basic_salary=employee.basic_salary,
            gross_salary=gross,
            tax_amount=tax_amount,
            net_salary=gross - tax_amount,
            month=month,
            year=year,
            leave_days=leave_days,
            process_date=self._today(),
        )
        self._record(salary)

        logger.debug(
            f"processed {employee.id} {month}/{year}: gross={gross:.2f} "
            f"tax={tax_amount:.2f} leave_days={leave_days}"
        )
        return salary

    def process_salaries(
        self, employees: Iterable[Employee], leaves: Iterable[Leave], month: int, year: int
    ) -> List[Salary]:
        """Process every employee for a month.

        Returns:
            The new salary records, in employee order
        """
        leaves = list(leaves)
        return [self.process_salary(employee, leaves, month, year) for employee in employees]

    def view_salary_details(self, employee_id: str, month: int, year: int) -> Optional[Salary]:
        """First salary recorded for the employee and month, or None."""
        for salary in self._salaries:
            if salary.employee_id == employee_id and salary.month == month and salary.year == year:
                return salary
        return None

    def salaries_for(self, employee_id: str) -> List[Salary]:
        return [s for s in self._salaries if s.employee_id == employee_id]

    def all_salaries(self) -> List[Salary]:
        return list(self._salaries)

    def pending_for(self, employee_id: str) -> List[Salary]:
        return self.pending.peek_all(employee_id)

    def process_next(self, employee_id: str) -> Optional[Salary]:
        """Pop the oldest pending salary for an employee, or None."""
        return self.pending.pop(employee_id)
