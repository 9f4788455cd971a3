from __future__ import annotations

from typing import Iterable

from outage_planner.schemas.requests import DraftRequest
from outage_planner.services.lifecycle import sort_drafts

PENDING_NOT_EMPTY = "pending-not-empty"


class PendingBatchNotEmpty(Exception):
    reason = PENDING_NOT_EMPTY

    def __init__(self, count: int):
        super().__init__(f"มีรายการรอการบันทึกอยู่แล้ว {count} รายการ")
        self.count = count


class PendingBatch:
    """Drafts waiting for submission, always kept in schedule order.

    A non-empty batch only takes new drafts after the operator acknowledged
    what is already there (or cleared it), so unreviewed edits are never
    merged away silently.
    """

    def __init__(self):
        self._items: list[DraftRequest] = []
        self.acknowledged = False

    @property
    def items(self) -> list[DraftRequest]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def can_accept(self) -> bool:
        return not self._items or self.acknowledged

    def ensure_can_accept(self) -> None:
        if not self.can_accept():
            raise PendingBatchNotEmpty(len(self._items))

    def acknowledge(self) -> None:
        self.acknowledged = True

    def append(self, drafts: DraftRequest | Iterable[DraftRequest]) -> int:
        self.ensure_can_accept()
        new = [drafts] if isinstance(drafts, DraftRequest) else list(drafts)
        self._items = sort_drafts(self._items + new)
        self.acknowledged = False
        return len(self._items)

    def remove(self, index: int) -> DraftRequest:
        if index < 0 or index >= len(self._items):
            raise IndexError(f"pending item {index} does not exist")
        removed = self._items.pop(index)
        if not self._items:
            self.acknowledged = False
        return removed

    def clear(self) -> None:
        self._items = []
        self.acknowledged = False


class PendingBatchRegistry:
    """One pending batch per caller; lives on ``app.state`` for the process."""

    def __init__(self):
        self._batches: dict[int, PendingBatch] = {}

    def for_caller(self, user_id: int) -> PendingBatch:
        return self._batches.setdefault(user_id, PendingBatch())
