from typing import Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from outage_planner.core.logging import logger
from outage_planner.db.models.outage_request import ApprovalStatus, OmsStatus, OutageRequest
from outage_planner.schemas.requests import DraftRequest
from outage_planner.services.etl.times import to_time
from outage_planner.services.submitter import CommitOutcome

DUPLICATE = "พบข้อมูลซ้ำกับที่มีอยู่แล้วในระบบ"
COMMIT_FAILED = "เกิดข้อผิดพลาดในการสร้างคำขอดับไฟ"

UNIQUE_SLOT = "uq_outage_request_transformer_slot"


def _to_model(d: DraftRequest, creator_id: int) -> OutageRequest:
    return OutageRequest(
        outage_date=d.outage_date,
        start_time=to_time(d.start_time),
        end_time=to_time(d.end_time),
        work_center_id=d.work_center_id,
        branch_id=d.branch_id,
        transformer_number=d.transformer_number,
        gis_details=d.gis_details or "",
        area=d.area,
        created_by_id=creator_id,
        status_request=ApprovalStatus.pending.value,
        oms_status=OmsStatus.not_started.value,
    )


def _is_duplicate(e: IntegrityError) -> bool:
    # postgres reports sqlstate 23505, sqlite names the failed unique columns
    if getattr(e.orig, "sqlstate", None) == "23505":
        return True
    msg = str(e.orig)
    return UNIQUE_SLOT in msg or "UNIQUE constraint failed" in msg


def create_requests_atomic(db: Session, drafts: Sequence[DraftRequest], creator_id: int) -> CommitOutcome:
    try:
        rows = [_to_model(d, creator_id) for d in drafts]
        db.add_all(rows)
        db.flush()
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_duplicate(e):
            logger.warning("create_requests_duplicate", items=len(drafts), error=str(e.orig))
            return CommitOutcome(success=False, reason=DUPLICATE)
        logger.error("create_requests_rejected", items=len(drafts), error=str(e.orig))
        return CommitOutcome(success=False, reason=COMMIT_FAILED)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("create_requests_failed", items=len(drafts), error=str(e))
        return CommitOutcome(success=False, reason=COMMIT_FAILED)
    return CommitOutcome(success=True, created_count=len(rows))


class SqlRequestStore:
    def __init__(self, db: Session):
        self.db = db

    def create_requests_atomic(self, drafts: Sequence[DraftRequest], creator_id: int) -> CommitOutcome:
        return create_requests_atomic(self.db, drafts, creator_id)


def list_requests(db: Session, work_center_id: int | None = None) -> list[OutageRequest]:
    q = db.query(OutageRequest)
    if work_center_id is not None:
        q = q.filter(OutageRequest.work_center_id == work_center_id)
    return q.all()

