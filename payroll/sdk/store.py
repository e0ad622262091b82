"""CSV persistence for employees, leaves and salaries.

This module is the only place that touches the data files. The engine
(registry, ledger, processor) receives lists at load time and hands lists
back at checkpoint time.

File layout (no header rows):

    employees.csv  id,name,email,phone,department,joining_date,basic_salary,
                   employee_type,<variant_1>,<variant_2>,available_leave_days
                   Manager:   variant_1=team_size, variant_2=management_level
                   Developer: variant_1=programming_language,
                              variant_2=experience_years
    leaves.csv     employee_id,start_date,end_date,leave_type,reason,status
    salaries.csv   employee_id,basic_salary,gross_salary,tax_amount,
                   net_salary,month,year,leave_days,process_date

Loading is best-effort. A row with too few fields, an unknown employee_type
or an unparsable value is logged and skipped; it never aborts the load.
The trailing available_leave_days column is optional on read (older files
omit it) and defaults to 20.

Floats are written with full precision so a save/load round trip is exact.
Free text containing commas is quoted by the csv module.
"""

import csv
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, TypeVar

from pydantic import ValidationError

from .config import get_data_path, get_setting
from .schemas import (
    EMPLOYEE_TYPES,
    Developer,
    Employee,
    Leave,
    Manager,
    Salary,
    parse_employee,
)

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

EMPLOYEE_MIN_FIELDS = 10
LEAVE_FIELDS = 6
SALARY_FIELDS = 9

T = TypeVar("T")


@dataclass
class StoreConfig:
    """Where the CSV files live and how they are written."""

    data_dir: Path
    employees_file: str = "employees.csv"
    leaves_file: str = "leaves.csv"
    salaries_file: str = "salaries.csv"
    backup: bool = False

    @property
    def employees_path(self) -> Path:
        return self.data_dir / self.employees_file

    @property
    def leaves_path(self) -> Path:
        return self.data_dir / self.leaves_file

    @property
    def salaries_path(self) -> Path:
        return self.data_dir / self.salaries_file

    @classmethod
    def from_settings(cls) -> "StoreConfig":
        """Resolve from settings.json (data_dir, backup_on_save)."""
        return cls(
            data_dir=get_data_path(),
            backup=bool(get_setting("backup_on_save", False)),
        )


# =============================================================================
# Row codecs
# =============================================================================


def employee_to_row(employee: Employee) -> list:
    if not isinstance(employee, (Manager, Developer)):
        raise TypeError(f"Unsupported employee type: {type(employee).__name__}")

    row = [
        employee.id,
        employee.name,
        employee.email,
        employee.phone,
        employee.department,
        employee.joining_date.isoformat(),
        employee.basic_salary,
        employee.employee_type,
    ]
    if isinstance(employee, Manager):
        row += [employee.team_size, employee.management_level]
    else:
        row += [employee.programming_language, employee.experience_years]
    row.append(employee.available_leave_days)
    return row


def employee_from_row(row: List[str]) -> Employee:
    """Parse an employee row.

    Raises:
        ValueError: Too few fields or unknown employee_type
        pydantic.ValidationError: Unparsable field values
    """
    if len(row) < EMPLOYEE_MIN_FIELDS:
        raise ValueError(f"expected at least {EMPLOYEE_MIN_FIELDS} fields, got {len(row)}")

    employee_type = row[7]
    if employee_type not in EMPLOYEE_TYPES:
        raise ValueError(f"unknown employee_type '{employee_type}'")

    data = {
        "id": row[0],
        "name": row[1],
        "email": row[2],
        "phone": row[3],
        "department": row[4],
        "joining_date": row[5],
        "basic_salary": row[6],
        "employee_type": employee_type,
    }
    if employee_type == "Manager":
        data["team_size"] = row[8]
        data["management_level"] = row[9]
    else:
        data["programming_language"] = row[8]
        data["experience_years"] = row[9]

    if len(row) > EMPLOYEE_MIN_FIELDS and row[10] != "":
        data["available_leave_days"] = row[10]

    return parse_employee(data)


def leave_to_row(leave: Leave) -> list:
    return [
        leave.employee_id,
        leave.start_date.isoformat(),
        leave.end_date.isoformat(),
        leave.leave_type,
        leave.reason,
        leave.status.value,
    ]


def leave_from_row(row: List[str]) -> Leave:
    if len(row) < LEAVE_FIELDS:
        raise ValueError(f"expected {LEAVE_FIELDS} fields, got {len(row)}")
    return Leave(
        employee_id=row[0],
        start_date=row[1],
        end_date=row[2],
        leave_type=row[3],
        reason=row[4],
        status=row[5],
    )


def salary_to_row(salary: Salary) -> list:
    return [
        salary.employee_id,
        salary.basic_salary,
        salary.gross_salary,
        salary.tax_amount,
        salary.net_salary,
        salary.month,
        salary.year,
        salary.leave_days,
        salary.process_date.isoformat(),
    ]


def salary_from_row(row: List[str]) -> Salary:
    if len(row) < SALARY_FIELDS:
        raise ValueError(f"expected {SALARY_FIELDS} fields, got {len(row)}")
    return Salary(
        employee_id=row[0],
        basic_salary=row[1],
        gross_salary=row[2],
        tax_amount=row[3],
        net_salary=row[4],
        month=row[5],
        year=row[6],
        leave_days=row[7],
        process_date=row[8],
    )


def _decode_lines(f, file_name: str, label: str) -> Iterator[str]:
    """Decode a binary file as UTF-8 line by line, dropping undecodable lines."""
    for line_no, raw in enumerate(f, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.warning(f"{file_name}:{line_no}: skipping undecodable {label} record: {e}")


# =============================================================================
# Store
# =============================================================================


class PayrollStore:
    """Loads and saves the three CSV files described by a StoreConfig."""

    def __init__(self, config: StoreConfig):
        self.config = config

    def ensure_files(self) -> None:
        """Create the data directory and empty data files if missing."""
        self.config.data_dir.mkdir(parents=True, exist_ok=True)
        for path in (self.config.employees_path, self.config.leaves_path, self.config.salaries_path):
            if not path.exists():
                path.touch()
                logger.info(f"Created file: {path}")

    def _load(self, path: Path, parse: Callable[[List[str]], T], label: str) -> List[T]:
        if not path.exists():
            logger.info(f"No existing {label} data at {path}. Starting empty.")
            return []

        items = []
        with open(path, "rb") as f:
            reader = csv.reader(_decode_lines(f, path.name, label))
            while True:
                try:
                    row = next(reader)
                except StopIteration:
                    break
                except csv.Error as e:
                    logger.warning(f"{path.name}:{reader.line_num}: skipping malformed {label} record: {e}")
                    continue

                if not row:
                    continue
                try:
                    items.append(parse(row))
                except (ValueError, ValidationError) as e:
                    logger.warning(f"{path.name}:{reader.line_num}: skipping malformed {label} record: {e}")

        logger.info(f"Loaded {len(items)} {label} records.")
        return items

    def _save(self, path: Path, rows: List[list], label: str) -> Path:
        self.config.data_dir.mkdir(parents=True, exist_ok=True)

        if self.config.backup and path.exists():
            self.backup(path)

        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(rows)

        logger.info(f"Saved {len(rows)} {label} records.")
        return path

    def backup(self, path: Path) -> Optional[Path]:
        """Copy a data file to <file>.bak, replacing any previous backup.

        Returns:
            Path to the backup, or None if the source doesn't exist
        """
        if not path.exists():
            return None
        backup_path = path.with_name(path.name + ".bak")
        shutil.copyfile(path, backup_path)
        return backup_path

    def load_employees(self) -> List[Employee]:
        return self._load(self.config.employees_path, employee_from_row, "employee")

    def load_leaves(self) -> List[Leave]:
        return self._load(self.config.leaves_path, leave_from_row, "leave")

    def load_salaries(self) -> List[Salary]:
        return self._load(self.config.salaries_path, salary_from_row, "salary")

    def save_employees(self, employees: List[Employee]) -> Path:
        return self._save(self.config.employees_path, [employee_to_row(e) for e in employees], "employee")

    def save_leaves(self, leaves: List[Leave]) -> Path:
        return self._save(self.config.leaves_path, [leave_to_row(leave) for leave in leaves], "leave")

    def save_salaries(self, salaries: List[Salary]) -> Path:
        return self._save(self.config.salaries_path, [salary_to_row(s) for s in salaries], "salary")
