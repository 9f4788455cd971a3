from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Sequence

from outage_planner.schemas.auth import Caller
from outage_planner.schemas.reference import WorkCenterOut
from outage_planner.schemas.requests import DraftRequest
from outage_planner.services.etl.dates import (
    FIELD_DATE,
    FIELD_END,
    FIELD_START,
    parse_outage_date,
    validate_schedule,
)
from outage_planner.services.etl.resolver import (
    BranchCache,
    LookupUnavailable,
    ReferenceSource,
    TransformerFound,
    TransformerNotFound,
    clean_transformer_number,
    lookup_transformer,
    resolve_branch,
    resolve_work_center,
)
from outage_planner.services.etl.times import normalize_time
from outage_planner.services.etl.validators import ValidationError, is_blank_row, is_nan, norm_str
from outage_planner.core.logging import logger

FIELD_WORK_CENTER = "จุดรวมงาน"
FIELD_BRANCH = "สาขา"
FIELD_TRANSFORMER = "หมายเลขหม้อแปลง"
FIELD_GIS = "สถานที่ติดตั้ง (GIS)"
FIELD_AREA = "พื้นที่ไฟดับ"

NO_UNITS_ASSIGNED = "ผู้ใช้งานยังไม่ได้กำหนดจุดรวมงานหรือสาขา"


@dataclass(frozen=True)
class RowLayout:
    with_units: bool

    @classmethod
    def for_caller(cls, caller: Caller) -> "RowLayout":
        return cls(with_units=caller.is_privileged)

    @property
    def headers(self) -> list[str]:
        units = [FIELD_WORK_CENTER, FIELD_BRANCH] if self.with_units else []
        return [FIELD_DATE, FIELD_START, FIELD_END, *units, FIELD_TRANSFORMER, FIELD_GIS, FIELD_AREA]

    def split(self, values: Sequence[Any]) -> dict[str, Any]:
        padded = list(values) + [None] * max(0, len(self.headers) - len(values))
        return dict(zip(self.headers, padded))


@dataclass
class RowContext:
    caller: Caller
    source: ReferenceSource
    today: dt.date
    boundary: dt.date
    work_centers: list[WorkCenterOut] = field(default_factory=list)
    branch_cache: BranchCache | None = None

    def __post_init__(self):
        if self.branch_cache is None:
            self.branch_cache = BranchCache(self.source)

    @property
    def layout(self) -> RowLayout:
        return RowLayout.for_caller(self.caller)


@dataclass
class RowOutcome:
    draft: DraftRequest | None = None
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)
    skipped: bool = False


def _raw(v: Any) -> Any:
    return None if is_nan(v) else v


async def validate_row(values: Sequence[Any], row_num: int, ctx: RowContext) -> RowOutcome:
    if is_blank_row(list(values)):
        return RowOutcome(skipped=True)

    row = ctx.layout.split(values)
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    def err(field_name: str, message: str, value: Any = None) -> None:
        errors.append(ValidationError(message, row_num=row_num, field=field_name, value=_raw(value)))

    # date
    raw_date = row[FIELD_DATE]
    outage_date = parse_outage_date(raw_date)
    if outage_date is None:
        if norm_str(raw_date) is None:
            err(FIELD_DATE, "กรุณาระบุวันที่ดับไฟ (รูปแบบ: YYYY-MM-DD หรือ DD/MM/YYYY)", raw_date)
        else:
            err(FIELD_DATE, "รูปแบบวันที่ไม่ถูกต้อง (รูปแบบ: YYYY-MM-DD หรือ DD/MM/YYYY)", raw_date)

    # times
    start_time = normalize_time(row[FIELD_START])
    end_time = normalize_time(row[FIELD_END])
    if not start_time:
        err(FIELD_START, "กรุณาระบุเวลาเริ่มต้น (รูปแบบ: HH:MM เช่น 08:00)", row[FIELD_START])
    if not end_time:
        err(FIELD_END, "กรุณาระบุเวลาสิ้นสุด (รูปแบบ: HH:MM เช่น 12:00)", row[FIELD_END])

    # an unreadable date is already reported; the boundary stands in so the time rules still run
    for e in validate_schedule(
        outage_date or ctx.boundary,
        ctx.boundary,
        ctx.today,
        start_time,
        end_time,
        raw_date=_raw(raw_date),
        raw_start=_raw(row[FIELD_START]),
        raw_end=_raw(row[FIELD_END]),
    ):
        e.row_num = row_num
        errors.append(e)

    # transformer
    gis_details = norm_str(row[FIELD_GIS]) or ""
    raw_tx = norm_str(row[FIELD_TRANSFORMER])
    transformer_number = clean_transformer_number(raw_tx) if raw_tx else ""
    if not transformer_number:
        err(FIELD_TRANSFORMER, "กรุณาระบุหมายเลขหม้อแปลง", row[FIELD_TRANSFORMER])
    else:
        found = await lookup_transformer(ctx.source, transformer_number)
        if isinstance(found, TransformerNotFound):
            err(FIELD_TRANSFORMER, f'ไม่พบหมายเลขหม้อแปลง "{raw_tx}" ในระบบ', raw_tx)
        elif isinstance(found, TransformerFound):
            if not gis_details and found.location:
                gis_details = found.location
        elif isinstance(found, LookupUnavailable):
            warnings.append(ValidationError(
                f'ไม่สามารถตรวจสอบหมายเลขหม้อแปลง "{raw_tx}" ได้ในขณะนี้',
                row_num=row_num,
                field=FIELD_TRANSFORMER,
                value=raw_tx,
            ))

    # work center / branch
    work_center_id = ctx.caller.work_center_id
    branch_id = ctx.caller.branch_id
    if ctx.layout.with_units:
        work_center_id, branch_id = None, None
        wc_name = norm_str(row[FIELD_WORK_CENTER])
        br_name = norm_str(row[FIELD_BRANCH])
        if not wc_name:
            err(FIELD_WORK_CENTER, "กรุณาระบุจุดรวมงาน", row[FIELD_WORK_CENTER])
        else:
            wc = resolve_work_center(wc_name, ctx.work_centers)
            if wc is None:
                err(FIELD_WORK_CENTER, f'ไม่พบจุดรวมงาน "{wc_name}" ในระบบ', wc_name)
            else:
                work_center_id = wc.id
                if not br_name:
                    err(FIELD_BRANCH, "กรุณาระบุสาขา", row[FIELD_BRANCH])
                else:
                    try:
                        br = await resolve_branch(br_name, wc.id, ctx.branch_cache)
                    except Exception as e:
                        logger.warning("branch_lookup_failed", work_center_id=wc.id, error=str(e))
                        err(FIELD_BRANCH, f'เกิดข้อผิดพลาดในการค้นหาสาขา "{br_name}"', br_name)
                    else:
                        if br is None:
                            err(FIELD_BRANCH, f'ไม่พบสาขา "{br_name}" ในจุดรวมงาน "{wc_name}"', br_name)
                        else:
                            branch_id = br.id
    elif work_center_id is None or branch_id is None:
        err(FIELD_WORK_CENTER, NO_UNITS_ASSIGNED)

    if errors:
        return RowOutcome(errors=errors, warnings=warnings)

    draft = DraftRequest(
        outage_date=outage_date,
        start_time=start_time,
        end_time=end_time,
        work_center_id=work_center_id,
        branch_id=branch_id,
        transformer_number=transformer_number,
        gis_details=gis_details,
        area=norm_str(row[FIELD_AREA]),
    )
    return RowOutcome(draft=draft, warnings=warnings)
