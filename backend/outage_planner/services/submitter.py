from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from outage_planner.core.logging import logger
from outage_planner.schemas.requests import DraftRequest
from outage_planner.services.batch import PendingBatch

EMPTY_BATCH = "ไม่มีรายการรอบันทึก"


@dataclass(frozen=True)
class CommitOutcome:
    success: bool
    created_count: int = 0
    reason: str | None = None


class RequestStore(Protocol):
    def create_requests_atomic(self, drafts: Sequence[DraftRequest], creator_id: int) -> CommitOutcome: ...


@dataclass(frozen=True)
class SubmitResult:
    success: bool
    count: int = 0
    reason: str | None = None


def submit_pending_batch(batch: PendingBatch, store: RequestStore, creator_id: int) -> SubmitResult:
    """Commit the whole batch in one go; the batch is only cleared on success."""
    drafts = batch.items
    if not drafts:
        return SubmitResult(success=False, reason=EMPTY_BATCH)

    outcome = store.create_requests_atomic(drafts, creator_id)
    if not outcome.success:
        logger.warning("batch_submit_failed", creator_id=creator_id, items=len(drafts), reason=outcome.reason)
        return SubmitResult(success=False, reason=outcome.reason)

    batch.clear()
    logger.info("batch_submitted", creator_id=creator_id, created=outcome.created_count)
    return SubmitResult(success=True, count=outcome.created_count)
