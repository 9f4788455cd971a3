"""Outage date parsing and scheduling rules.

Shared by the import pipeline, the manual pending-batch append and the
lifecycle classifier so that "today" and the lead time mean the same thing
everywhere.
"""
import datetime as dt
from typing import Any
from zoneinfo import ZoneInfo

from openpyxl.utils.datetime import from_excel

from outage_planner.core.config import settings
from outage_planner.services.etl.times import to_minutes
from outage_planner.services.etl.validators import ValidationError

DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d")

FIELD_DATE = "วันที่ดับไฟ"
FIELD_START = "เวลาเริ่มต้น"
FIELD_END = "เวลาสิ้นสุด"

WORKDAY_START = 6 * 60  # 06:00
LAST_START = 19 * 60 + 30  # 19:30
WORKDAY_END = 20 * 60  # 20:00
MIN_DURATION = 30


def today_local(tz: str | None = None) -> dt.date:
    return dt.datetime.now(ZoneInfo(tz or settings.TZ)).date()


def min_selectable_date(today: dt.date, lead_days: int | None = None) -> dt.date:
    # strictly more than `lead_days` whole days ahead
    days = settings.MIN_LEAD_DAYS if lead_days is None else lead_days
    return today + dt.timedelta(days=days + 1)


def parse_outage_date(v: Any) -> dt.date | None:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, dt.datetime):
        return v.date()
    if isinstance(v, dt.date):
        return v
    if isinstance(v, (int, float)):
        if v != v or v <= 30000:  # excel serial
            return None
        try:
            d = from_excel(v)
        except (ValueError, OverflowError):
            return None
        return d.date() if isinstance(d, dt.datetime) else d
    if isinstance(v, str):
        s = v.strip()
        for fmt in DATE_FORMATS:
            try:
                return dt.datetime.strptime(s, fmt).date()
            except ValueError:
                pass
    return None


def validate_schedule(
    outage_date: dt.date,
    boundary: dt.date,
    today: dt.date,
    start_time: str = "",
    end_time: str = "",
    raw_date: Any = None,
    raw_start: Any = None,
    raw_end: Any = None,
) -> list[ValidationError]:
    """Check lead time and the working-hours window; report every violation."""
    errors: list[ValidationError] = []

    if outage_date < boundary:
        days_left = (outage_date - today).days
        errors.append(ValidationError(
            f"วันที่ดับไฟต้องมากกว่าวันปัจจุบันอย่างน้อย {settings.MIN_LEAD_DAYS} วัน "
            f"(วันที่เลือก: {outage_date:%d/%m/%Y} - เหลือเพียง {days_left} วัน)",
            field=FIELD_DATE,
            value=raw_date if raw_date is not None else outage_date.isoformat(),
        ))

    start_min = to_minutes(start_time) if start_time else None
    end_min = to_minutes(end_time) if end_time else None

    if start_min is not None and not (WORKDAY_START <= start_min <= LAST_START):
        errors.append(ValidationError(
            "เวลาเริ่มต้นต้องอยู่ระหว่าง 06:00 - 19:30 น.",
            field=FIELD_START,
            value=raw_start if raw_start is not None else start_time,
        ))

    if end_min is not None:
        if end_min > WORKDAY_END:
            errors.append(ValidationError(
                "เวลาสิ้นสุดต้องไม่เกิน 20:00 น.",
                field=FIELD_END,
                value=raw_end if raw_end is not None else end_time,
            ))
        if start_min is not None and end_min < start_min + MIN_DURATION:
            errors.append(ValidationError(
                "เวลาสิ้นสุดต้องมาหลังเวลาเริ่มต้นอย่างน้อย 30 นาที",
                field=FIELD_END,
                value=raw_end if raw_end is not None else end_time,
            ))
    return errors
