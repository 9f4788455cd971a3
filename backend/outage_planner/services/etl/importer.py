from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Sequence

from outage_planner.core.config import settings
from outage_planner.core.logging import import_log_context, logger
from outage_planner.schemas.auth import Caller
from outage_planner.schemas.reference import WorkCenterOut
from outage_planner.schemas.requests import DraftRequest
from outage_planner.services.batch import PendingBatch
from outage_planner.services.etl.dates import min_selectable_date, today_local
from outage_planner.services.etl.parsers.tabular import FileImportError, read_tabular
from outage_planner.services.etl.resolver import BranchCache, ReferenceSource
from outage_planner.services.etl.rows import RowContext, validate_row
from outage_planner.services.etl.validators import FIELD_FILE, ValidationError

SUCCESS = "success"
PARTIAL = "partial"
FAILED = "failed"


@dataclass
class ImportResult:
    total: int = 0
    accepted: int = 0
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)
    drafts: list[DraftRequest] = field(default_factory=list)
    file_error: ValidationError | None = None

    @property
    def has_partial_data(self) -> bool:
        return self.accepted > 0 and bool(self.errors)

    @property
    def status(self) -> str:
        if self.file_error is not None or self.accepted == 0:
            return FAILED
        return PARTIAL if self.errors else SUCCESS

    def all_errors(self) -> list[ValidationError]:
        return [self.file_error] if self.file_error is not None else list(self.errors)

    def error_report(self, limit: int | None = None) -> str:
        """First ``limit`` errors, one per line; the rest are only counted."""
        limit = settings.IMPORT_ERROR_REPORT_LIMIT if limit is None else limit
        errors = self.all_errors()
        lines = [e.render() for e in errors[:limit]]
        rest = len(errors) - limit
        if rest > 0:
            lines.append(f"... และอีก {rest} รายการ")
        return "\n".join(lines)


def _file_error(message: str, value=None) -> ValidationError:
    return ValidationError(message, row_num=0, field=FIELD_FILE, value=value)


async def import_file(
    filename: str,
    content: bytes,
    caller: Caller,
    source: ReferenceSource,
    batch: PendingBatch,
    work_centers: Sequence[WorkCenterOut] | None = None,
    today: dt.date | None = None,
) -> ImportResult:
    """Validate every row of an uploaded file and forward accepted drafts to ``batch``.

    Raises ``PendingBatchNotEmpty`` before touching the file when the caller
    still has unreviewed pending items. File-level problems come back as
    ``ImportResult.file_error`` with nothing forwarded.
    """
    batch.ensure_can_accept()
    with import_log_context(filename, caller.user_id):
        return await _run_import(filename, content, caller, source, batch, work_centers, today or today_local())


async def _run_import(
    filename: str,
    content: bytes,
    caller: Caller,
    source: ReferenceSource,
    batch: PendingBatch,
    work_centers: Sequence[WorkCenterOut] | None,
    today: dt.date,
) -> ImportResult:
    logger.info("import_start", size=len(content), role=caller.role.value)

    try:
        tabular = read_tabular(filename, content)
    except FileImportError as e:
        logger.warning("import_file_rejected", reason=e.message)
        return ImportResult(file_error=_file_error(e.message, e.value if e.value is not None else filename))

    if caller.is_privileged and work_centers is None:
        work_centers = await source.list_work_centers()

    ctx = RowContext(
        caller=caller,
        source=source,
        today=today,
        boundary=min_selectable_date(today),
        work_centers=list(work_centers or []),
        branch_cache=BranchCache(source),
    )

    result = ImportResult(total=len(tabular.rows))
    # rows run one after another; later rows reuse the branch cache
    for line, values in tabular.rows:
        outcome = await validate_row(values, line, ctx)
        if outcome.skipped:
            continue
        result.warnings.extend(outcome.warnings)
        if outcome.draft is not None:
            result.drafts.append(outcome.draft)
        else:
            result.errors.extend(outcome.errors)
    result.accepted = len(result.drafts)

    if result.drafts:
        batch.append(result.drafts)
    elif not result.errors:
        result.file_error = _file_error("ไม่พบข้อมูลในไฟล์", filename)

    logger.info(
        "import_finished",
        status=result.status,
        total=result.total,
        accepted=result.accepted,
        errors=len(result.errors),
        warnings=len(result.warnings),
        branch_fetches=ctx.branch_cache.fetches,
    )
    return result
