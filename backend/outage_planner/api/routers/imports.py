from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from outage_planner.core.deps import get_db, get_pending_batch, require_roles
from outage_planner.crud.reference import SqlReferenceSource
from outage_planner.schemas.auth import Caller, Role
from outage_planner.schemas.imports import ImportResultOut, ValidationErrorOut
from outage_planner.services.batch import PendingBatch
from outage_planner.services.etl.dates import today_local
from outage_planner.services.etl.importer import ImportResult, import_file
from outage_planner.services.etl.rows import RowLayout
from outage_planner.services.exports.template import TEMPLATE_FILE_NAME, build_csv_template

router = APIRouter()

ALLOWED_ROLES_EDIT = (Role.admin, Role.supervisor, Role.user)


def _to_out(result: ImportResult) -> ImportResultOut:
    errors = result.all_errors()
    return ImportResultOut(
        status=result.status,
        total=result.total,
        accepted=result.accepted,
        has_partial_data=result.has_partial_data,
        errors=[ValidationErrorOut(**vars(e)) for e in errors],
        error_count=len(errors),
        warnings=[ValidationErrorOut(**vars(e)) for e in result.warnings],
        report=result.error_report(),
    )


@router.post("/upload", response_model=ImportResultOut)
async def upload_file(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_roles(*ALLOWED_ROLES_EDIT)),
    batch: PendingBatch = Depends(get_pending_batch),
):
    content = await file.read()
    result = await import_file(file.filename or "", content, caller, SqlReferenceSource(db), batch)

    if result.file_error is not None:
        raise HTTPException(status_code=400, detail=_to_out(result).model_dump(mode="json"))
    return _to_out(result)


@router.get("/template")
def download_template(caller: Caller = Depends(require_roles(*ALLOWED_ROLES_EDIT))):
    body = build_csv_template(RowLayout.for_caller(caller), today_local())
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILE_NAME}"'},
    )
