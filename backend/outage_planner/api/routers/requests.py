from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from outage_planner.core.deps import get_db, get_current_caller, get_pending_batch, require_roles
from outage_planner.crud.requests import DUPLICATE, SqlRequestStore, list_requests
from outage_planner.schemas.auth import Caller, Role
from outage_planner.schemas.imports import ValidationErrorOut
from outage_planner.schemas.requests import DraftRequest, OutageRequestOut, PendingBatchOut, SubmitOut
from outage_planner.services.batch import PendingBatch
from outage_planner.services.etl.dates import min_selectable_date, today_local, validate_schedule
from outage_planner.services.etl.rows import FIELD_WORK_CENTER, NO_UNITS_ASSIGNED
from outage_planner.services.lifecycle import classify, sort_for_display
from outage_planner.services.submitter import EMPTY_BATCH, submit_pending_batch

router = APIRouter()

ALLOWED_ROLES_EDIT = (Role.admin, Role.supervisor, Role.user)
# roles that see requests of every work center
ALLOWED_ROLES_ALL_UNITS = (Role.admin, Role.viewer)


def _batch_out(batch: PendingBatch) -> PendingBatchOut:
    return PendingBatchOut(items=batch.items, acknowledged=batch.acknowledged)


@router.get("", response_model=list[OutageRequestOut])
def get_requests(db: Session = Depends(get_db), caller: Caller = Depends(get_current_caller)):
    if caller.role in ALLOWED_ROLES_ALL_UNITS:
        wc_id = None
    elif caller.work_center_id is None:
        return []  # no unit assigned, nothing to read
    else:
        wc_id = caller.work_center_id
    today = today_local()
    out = []
    for r in sort_for_display(list_requests(db, work_center_id=wc_id), today):
        c = classify(r, today)
        out.append(OutageRequestOut(
            id=r.id,
            outage_date=r.outage_date,
            start_time=r.start_time,
            end_time=r.end_time,
            work_center_id=r.work_center_id,
            branch_id=r.branch_id,
            transformer_number=r.transformer_number,
            gis_details=r.gis_details,
            area=r.area,
            created_by_id=r.created_by_id,
            created_at=r.created_at,
            status_request=r.status_request,
            oms_status=r.oms_status,
            bucket=c.bucket.value,
            color=c.color,
        ))
    return out


@router.get("/pending", response_model=PendingBatchOut)
def get_pending(batch: PendingBatch = Depends(get_pending_batch)):
    return _batch_out(batch)


@router.post("/pending", response_model=PendingBatchOut)
def add_pending(
    draft: DraftRequest,
    caller: Caller = Depends(require_roles(*ALLOWED_ROLES_EDIT)),
    batch: PendingBatch = Depends(get_pending_batch),
):
    if not caller.is_privileged:
        if caller.work_center_id is None or caller.branch_id is None:
            raise HTTPException(
                status_code=422,
                detail=[ValidationErrorOut(row_num=None, field=FIELD_WORK_CENTER, message=NO_UNITS_ASSIGNED).model_dump()],
            )
        draft = DraftRequest.model_validate(
            {**draft.model_dump(), "work_center_id": caller.work_center_id, "branch_id": caller.branch_id}
        )

    today = today_local()
    errors = validate_schedule(draft.outage_date, min_selectable_date(today), today, draft.start_time, draft.end_time)
    if errors:
        raise HTTPException(
            status_code=422,
            detail=[ValidationErrorOut(**vars(e)).model_dump(mode="json") for e in errors],
        )
    batch.append(draft)
    return _batch_out(batch)


@router.post("/pending/acknowledge", response_model=PendingBatchOut)
def acknowledge_pending(
    _caller: Caller = Depends(require_roles(*ALLOWED_ROLES_EDIT)),
    batch: PendingBatch = Depends(get_pending_batch),
):
    batch.acknowledge()
    return _batch_out(batch)


@router.delete("/pending/{index}", response_model=PendingBatchOut)
def remove_pending(
    index: int,
    _caller: Caller = Depends(require_roles(*ALLOWED_ROLES_EDIT)),
    batch: PendingBatch = Depends(get_pending_batch),
):
    try:
        batch.remove(index)
    except IndexError:
        raise HTTPException(status_code=404, detail=f"Pending item {index} not found")
    return _batch_out(batch)


@router.delete("/pending", response_model=PendingBatchOut)
def clear_pending(
    _caller: Caller = Depends(require_roles(*ALLOWED_ROLES_EDIT)),
    batch: PendingBatch = Depends(get_pending_batch),
):
    batch.clear()
    return _batch_out(batch)


@router.post("/pending/submit", response_model=SubmitOut)
def submit_pending(
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles(*ALLOWED_ROLES_EDIT)),
    batch: PendingBatch = Depends(get_pending_batch),
):
    result = submit_pending_batch(batch, SqlRequestStore(db), caller.user_id)
    if not result.success:
        status_code = 400 if result.reason == EMPTY_BATCH else 409 if result.reason == DUPLICATE else 500
        raise HTTPException(status_code=status_code, detail=SubmitOut(success=False, reason=result.reason).model_dump())
    return SubmitOut(success=True, count=result.count)
