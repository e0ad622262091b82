"""Payroll Ledger SDK - Core employee, leave and payroll logic."""

from .config import (
    get_config_dir,
    get_settings_path,
    get_rules_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_data_path,
    is_strict,
)

from .rules import (
    PayrollRules,
    TaxBracket,
    AllowanceRates,
    DEFAULT_RULES,
    DEFAULT_LEAVE_DAYS,
    load_rules,
)

from .tax import calc_tax

from .schemas import (
    Employee,
    Manager,
    Developer,
    EMPLOYEE_TYPES,
    parse_employee,
    Leave,
    LeaveStatus,
    LeaveType,
    Salary,
    PayrollValidationError,
    validate_employee,
    validate_leave,
)

from .overlap import (
    month_bounds,
    days_in_calendar_month,
    is_in_month,
    days_in_month,
)

from .ledger import LeaveLedger
from .pending import PendingSalaryQueue
from .processor import PayrollProcessor
from .employees import EmployeeRegistry
from .store import PayrollStore, StoreConfig
from .system import PayrollSystem

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "get_rules_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_data_path",
    "is_strict",
    # Rules
    "PayrollRules",
    "TaxBracket",
    "AllowanceRates",
    "DEFAULT_RULES",
    "DEFAULT_LEAVE_DAYS",
    "load_rules",
    # Tax
    "calc_tax",
    # Schemas
    "Employee",
    "Manager",
    "Developer",
    "EMPLOYEE_TYPES",
    "parse_employee",
    "Leave",
    "LeaveStatus",
    "LeaveType",
    "Salary",
    "PayrollValidationError",
    "validate_employee",
    "validate_leave",
    # Overlap
    "month_bounds",
    "days_in_calendar_month",
    "is_in_month",
    "days_in_month",
    # Engine
    "LeaveLedger",
    "PendingSalaryQueue",
    "PayrollProcessor",
    "EmployeeRegistry",
    # Persistence
    "PayrollStore",
    "StoreConfig",
    "PayrollSystem",
]
