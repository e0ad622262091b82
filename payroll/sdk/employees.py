"""Employee registry keyed by employee ID."""

import logging
from typing import Dict, Iterable, List, Optional

from .schemas import Employee, PayrollValidationError, validate_employee

logger = logging.getLogger(__name__)


class EmployeeRegistry:
    """In-memory employees, in insertion order.

    Employees are never deleted; update() replaces the entry under the
    same ID.
    """

    def __init__(self, employees: Optional[Iterable[Employee]] = None, strict: bool = False):
        self.strict = strict
        self._employees: Dict[str, Employee] = {}
        for employee in employees or []:
            # Reload: later rows win, as re-insertion under the same id
            self._employees[employee.id] = employee

    def _check(self, employee: Employee) -> None:
        if self.strict:
            errors = validate_employee(employee)
            if errors:
                raise PayrollValidationError(errors)

    def add(self, employee: Employee) -> bool:
        """Add a new employee.

        Returns:
            True if added, False if the ID already exists (existing data untouched)

        Raises:
            PayrollValidationError: In strict mode, if fields are out of range
        """
        if employee.id in self._employees:
            logger.warning(f"Employee with ID {employee.id} already exists.")
            return False

        self._check(employee)
        self._employees[employee.id] = employee
        return True

    def update(self, employee: Employee) -> bool:
        """Replace an existing employee with the same ID.

        Returns:
            True if replaced, False if no such employee
        """
        if employee.id not in self._employees:
            logger.warning(f"Employee with ID {employee.id} not found.")
            return False

        self._check(employee)
        self._employees[employee.id] = employee
        return True

    def get(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get(employee_id)

    def all(self) -> List[Employee]:
        return list(self._employees.values())

    def __len__(self) -> int:
        return len(self._employees)

    def __contains__(self, employee_id: str) -> bool:
        return employee_id in self._employees

    def deduct_leave_days(self, employee_id: str, days: int) -> bool:
        """Deduct from an employee's available leave balance.

        Returns:
            False if the employee is unknown or the balance is insufficient
        """
        employee = self.get(employee_id)
        if employee is None:
            logger.warning(f"Employee with ID {employee_id} not found.")
            return False

        if employee.available_leave_days < days:
            logger.warning(
                f"{employee_id} has {employee.available_leave_days} leave days left, cannot deduct {days}."
            )
            return False

        employee.available_leave_days -= days
        return True
