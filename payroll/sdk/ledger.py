"""Leave ledger: the authoritative list of leave requests plus undo history.

Leaves live in an arena keyed by an integer handle that is never reused.
Insertion order of the arena is ledger order. The undo stack holds handles,
not copies, so a status change made after a leave was applied is visible
through both, and undo removes exactly the instance that was applied even
when another leave has identical field values.

Design notes:
    apply() never checks for overlapping or duplicate requests for the same
    employee.

    approve()/reject() match on (employee_id, start_date) only. Two pending
    leaves sharing a start date are indistinguishable; the earliest applied
    one is the one acted on.

    undo_recent() removes the most recent application regardless of its
    status, so an already-approved leave can be undone.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from .schemas import Leave, LeaveStatus, PayrollValidationError, validate_leave

logger = logging.getLogger(__name__)


class LeaveLedger:
    """Ordered store of leave requests with a LIFO undo stack."""

    def __init__(self, leaves: Optional[Iterable[Leave]] = None, strict: bool = False):
        """
        Args:
            leaves: Previously persisted leaves, in ledger order. Each is
                    pushed onto the undo stack as if freshly applied.
            strict: Reject leaves whose end_date precedes start_date
        """
        self.strict = strict
        self._arena: Dict[int, Leave] = {}
        self._recent: List[int] = []
        self._next_handle = 0

        for leave in leaves or []:
            self._push(leave)

    def _push(self, leave: Leave) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._arena[handle] = leave
        self._recent.append(handle)
        return handle

    def __len__(self) -> int:
        return len(self._arena)

    def apply(self, leave: Leave) -> bool:
        """Record a new leave request and remember it for undo.

        Returns:
            True (applying always succeeds)

        Raises:
            PayrollValidationError: In strict mode, if the date range is inverted
        """
        if self.strict:
            errors = validate_leave(leave)
            if errors:
                raise PayrollValidationError(errors)

        handle = self._push(leave)
        logger.debug(
            f"applied leave #{handle}: {leave.employee_id} "
            f"{leave.start_date}..{leave.end_date} ({leave.leave_type})"
        )
        return True

    def _transition(self, employee_id: str, start_date: date, status: LeaveStatus) -> bool:
        for leave in self._arena.values():
            if (
                leave.employee_id == employee_id
                and leave.start_date == start_date
                and leave.status == LeaveStatus.PENDING
            ):
                leave.status = status
                logger.debug(f"leave {employee_id}@{start_date} -> {status.value}")
                return True
        return False

    def approve(self, employee_id: str, start_date: date) -> bool:
        """Approve the first pending leave matching employee and start date.

        Returns:
            True if a pending leave was approved, False if none matched
        """
        return self._transition(employee_id, start_date, LeaveStatus.APPROVED)

    def reject(self, employee_id: str, start_date: date) -> bool:
        """Reject the first pending leave matching employee and start date.

        Returns:
            True if a pending leave was rejected, False if none matched
        """
        return self._transition(employee_id, start_date, LeaveStatus.REJECTED)

    def most_recent(self) -> Optional[Leave]:
        """Peek at the most recently applied leave without removing it."""
        if not self._recent:
            return None
        return self._arena[self._recent[-1]]

    def undo_recent(self) -> Optional[Leave]:
        """Remove the most recently applied leave from the ledger.

        Returns:
            The removed leave, or None if there is nothing to undo
        """
        if not self._recent:
            return None

        handle = self._recent.pop()
        leave = self._arena.pop(handle)
        logger.debug(f"undid leave #{handle}: {leave.employee_id}@{leave.start_date} ({leave.status.value})")
        return leave

    def leaves_for(self, employee_id: str) -> List[Leave]:
        """All leaves for an employee, in ledger order."""
        return [leave for leave in self._arena.values() if leave.employee_id == employee_id]

    def all_leaves(self) -> List[Leave]:
        """All leaves, in ledger order."""
        return list(self._arena.values())
