"""PayrollSystem - wires the registry, ledger, processor and store together.

CLI and other front ends should be thin wrappers over this class. It loads
all three collections at start, and checkpoint() writes them back.

Every public method runs under a single re-entrant lock, so the system can
be shared between threads. The engine classes underneath are not
synchronized and assume one caller at a time.
"""

import threading
from datetime import date
from typing import List, Optional

from .config import is_strict
from .employees import EmployeeRegistry
from .ledger import LeaveLedger
from .processor import PayrollProcessor
from .rules import PayrollRules, load_rules
from .schemas import Employee, Leave, Salary
from .store import PayrollStore, StoreConfig


class PayrollSystem:
    """In-memory payroll state backed by a PayrollStore."""

    def __init__(
        self,
        store: PayrollStore,
        registry: EmployeeRegistry,
        ledger: LeaveLedger,
        processor: PayrollProcessor,
    ):
        self.store = store
        self.registry = registry
        self.ledger = ledger
        self.processor = processor
        self._lock = threading.RLock()

    @classmethod
    def load(
        cls,
        config: Optional[StoreConfig] = None,
        rules: Optional[PayrollRules] = None,
        strict: Optional[bool] = None,
    ) -> "PayrollSystem":
        """Load state from the CSV store.

        Args:
            config: Store location (defaults to settings.json / XDG data dir)
            rules: Payroll rules (defaults to rules.yaml or built-ins)
            strict: Strict validation (defaults to the strict_validation setting)
        """
        store = PayrollStore(config or StoreConfig.from_settings())
        store.ensure_files()
        if strict is None:
            strict = is_strict()

        return cls(
            store=store,
            registry=EmployeeRegistry(store.load_employees(), strict=strict),
            ledger=LeaveLedger(store.load_leaves(), strict=strict),
            processor=PayrollProcessor(store.load_salaries(), rules=rules or load_rules()),
        )

    @property
    def rules(self) -> PayrollRules:
        return self.processor.rules

    def checkpoint(self) -> None:
        """Persist employees, leaves and salaries."""
        with self._lock:
            self.store.save_employees(self.registry.all())
            self.store.save_leaves(self.ledger.all_leaves())
            self.store.save_salaries(self.processor.all_salaries())

    # Employees

    def add_employee(self, employee: Employee) -> bool:
        with self._lock:
            return self.registry.add(employee)

    def update_employee(self, employee: Employee) -> bool:
        with self._lock:
            return self.registry.update(employee)

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        with self._lock:
            return self.registry.get(employee_id)

    def employees(self) -> List[Employee]:
        with self._lock:
            return self.registry.all()

    def deduct_leave_days(self, employee_id: str, days: int) -> bool:
        with self._lock:
            return self.registry.deduct_leave_days(employee_id, days)

    # Leaves

    def apply_leave(self, leave: Leave) -> bool:
        with self._lock:
            return self.ledger.apply(leave)

    def approve_leave(self, employee_id: str, start_date: date) -> bool:
        with self._lock:
            return self.ledger.approve(employee_id, start_date)

    def reject_leave(self, employee_id: str, start_date: date) -> bool:
        with self._lock:
            return self.ledger.reject(employee_id, start_date)

    def most_recent_leave(self) -> Optional[Leave]:
        with self._lock:
            return self.ledger.most_recent()

    def undo_recent_leave(self) -> Optional[Leave]:
        with self._lock:
            return self.ledger.undo_recent()

    def leaves_for(self, employee_id: str) -> List[Leave]:
        with self._lock:
            return self.ledger.leaves_for(employee_id)

    def leaves(self) -> List[Leave]:
        with self._lock:
            return self.ledger.all_leaves()

    # Salaries

    def process_salaries(self, month: int, year: int) -> List[Salary]:
        with self._lock:
            return self.processor.process_salaries(
                self.registry.all(), self.ledger.all_leaves(), month, year
            )

    def view_salary_details(self, employee_id: str, month: int, year: int) -> Optional[Salary]:
        with self._lock:
            return self.processor.view_salary_details(employee_id, month, year)

    def salaries_for(self, employee_id: str) -> List[Salary]:
        with self._lock:
            return self.processor.salaries_for(employee_id)

    def pending_salaries(self, employee_id: str) -> List[Salary]:
        with self._lock:
            return self.processor.pending_for(employee_id)

    def process_next_salary(self, employee_id: str) -> Optional[Salary]:
        with self._lock:
            return self.processor.process_next(employee_id)
