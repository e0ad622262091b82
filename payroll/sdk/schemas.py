"""Pydantic schemas for employees, leaves and salary records.

All schemas use extra='forbid' to reject unknown fields, so a typo in a
caller's keyword arguments fails instead of being silently ignored.

Employees are a discriminated union on `employee_type`; the tag is also
the role column in the CSV store. Numeric fields are left unconstrained
(negative salaries and inverted leave ranges are accepted);
validate_employee() and validate_leave() report those problems for
strict mode.
"""

from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .rules import DEFAULT_LEAVE_DAYS, DEFAULT_RULES, PayrollRules
from .tax import calc_tax


class LeaveStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class LeaveType(str, Enum):
    SICK = "SICK"
    CASUAL = "CASUAL"
    ANNUAL = "ANNUAL"


# =============================================================================
# Employees
# =============================================================================


class Employee(BaseModel, ABC):
    """Common employee attributes.

    Abstract: only Manager and Developer can be instantiated.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    id: str = Field(..., frozen=True, description="Unique employee ID")
    name: str
    email: str = ""
    phone: str = ""
    department: str = ""
    joining_date: date
    basic_salary: float = Field(..., description="Monthly basic salary")
    available_leave_days: int = Field(default=DEFAULT_LEAVE_DAYS)

    @abstractmethod
    def gross_salary(self, rules: Optional[PayrollRules] = None) -> float:
        """Basic salary plus role-specific allowances, before leave deductions."""

    def tax(self, rules: Optional[PayrollRules] = None) -> float:
        return calc_tax(self.gross_salary(rules), rules)

    def net_salary(self, rules: Optional[PayrollRules] = None) -> float:
        gross = self.gross_salary(rules)
        return gross - calc_tax(gross, rules)


class Manager(Employee):
    employee_type: Literal["Manager"] = "Manager"
    team_size: int = 0
    management_level: int = Field(default=1, description="Nominally 1..3")

    def gross_salary(self, rules: Optional[PayrollRules] = None) -> float:
        allowances = (rules or DEFAULT_RULES).allowances
        return self.basic_salary * (
            1
            + allowances.management * self.management_level
            + allowances.team_size * self.team_size
        )


class Developer(Employee):
    employee_type: Literal["Developer"] = "Developer"
    programming_language: str = ""
    experience_years: int = 0

    def gross_salary(self, rules: Optional[PayrollRules] = None) -> float:
        allowances = (rules or DEFAULT_RULES).allowances
        return self.basic_salary * (
            1
            + allowances.tech
            + allowances.experience_bonus * self.experience_years
        )


AnyEmployee = Annotated[Union[Manager, Developer], Field(discriminator="employee_type")]

EMPLOYEE_TYPES: Dict[str, Type[Employee]] = {
    "Manager": Manager,
    "Developer": Developer,
}

_employee_adapter = TypeAdapter(AnyEmployee)


def parse_employee(data: dict) -> Employee:
    """Build the right Employee variant from a dict carrying employee_type.

    Raises:
        pydantic.ValidationError: Unknown employee_type or bad field values
    """
    return _employee_adapter.validate_python(data)


# =============================================================================
# Leaves
# =============================================================================


class Leave(BaseModel):
    """A leave request. Created PENDING; status changes via the ledger."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    employee_id: str
    start_date: date
    end_date: date
    leave_type: str = Field(default=LeaveType.CASUAL.value, description="SICK, CASUAL or ANNUAL (not enforced)")
    reason: str = ""
    status: LeaveStatus = LeaveStatus.PENDING

    def duration(self) -> int:
        """Inclusive day count from start_date to end_date."""
        return (self.end_date - self.start_date).days + 1


# =============================================================================
# Salary records
# =============================================================================


class Salary(BaseModel):
    """Processed salary for one employee and month. Immutable."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_id: str
    basic_salary: float
    gross_salary: float = Field(..., description="Gross after leave deduction")
    tax_amount: float
    net_salary: float
    month: int = Field(..., ge=1, le=12)
    year: int
    leave_days: int = Field(default=0, ge=0)
    process_date: date = Field(default_factory=date.today)

    @model_validator(mode="after")
    def check_coherence(self) -> "Salary":
        """net_salary must equal gross_salary - tax_amount."""
        tolerance = 0.01  # CSV from older writers carries 2-decimal amounts
        expected_net = self.gross_salary - self.tax_amount
        if abs(self.net_salary - expected_net) > tolerance:
            raise ValueError(
                f"net_salary ({self.net_salary:.2f}) != "
                f"gross_salary - tax_amount ({expected_net:.2f})"
            )
        return self


# =============================================================================
# Strict-mode checks
# =============================================================================


class PayrollValidationError(Exception):
    """Raised in strict mode when an employee or leave fails validation."""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Validation failed: {'; '.join(errors)}")


def validate_employee(employee: Employee) -> List[str]:
    """Return a list of problems with an employee's numeric fields.

    Empty list means valid. Only consulted in strict mode.
    """
    errors = []

    if employee.basic_salary < 0:
        errors.append(f"basic_salary is negative: {employee.basic_salary}")
    if employee.available_leave_days < 0:
        errors.append(f"available_leave_days is negative: {employee.available_leave_days}")

    if isinstance(employee, Manager):
        if employee.team_size < 0:
            errors.append(f"team_size is negative: {employee.team_size}")
        if not 1 <= employee.management_level <= 3:
            errors.append(f"management_level must be 1..3, got {employee.management_level}")
    elif isinstance(employee, Developer):
        if employee.experience_years < 0:
            errors.append(f"experience_years is negative: {employee.experience_years}")

    return errors


def validate_leave(leave: Leave) -> List[str]:
    """Return a list of problems with a leave request (strict mode only)."""
    errors = []
    if leave.end_date < leave.start_date:
        errors.append(f"end_date {leave.end_date} is before start_date {leave.start_date}")
    return errors
