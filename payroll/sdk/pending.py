"""Per-employee FIFO of processed salaries awaiting downstream handling."""

from collections import deque
from typing import Deque, Dict, List, Optional

from .schemas import Salary


class PendingSalaryQueue:
    """One FIFO queue per employee, keyed by employee ID.

    Order is processing-call order, not month/year order. Popping here does
    not touch the processor's master salary list.
    """

    def __init__(self):
        self._queues: Dict[str, Deque[Salary]] = {}

    def enqueue(self, salary: Salary) -> None:
        self._queues.setdefault(salary.employee_id, deque()).append(salary)

    def pop(self, employee_id: str) -> Optional[Salary]:
        """Remove and return the oldest pending salary, or None."""
        queue = self._queues.get(employee_id)
        if not queue:
            return None
        return queue.popleft()

    def peek_all(self, employee_id: str) -> List[Salary]:
        """Pending salaries for an employee, oldest first (a copy)."""
        return list(self._queues.get(employee_id, ()))

    def __len__(self) -> int:
        return sum(len(q) for q in self._queues.values())
