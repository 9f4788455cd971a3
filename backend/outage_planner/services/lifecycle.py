"""Urgency buckets, row colors and display order for outage requests.

Classification only looks at the current approval / OMS state pair and the
number of days until the outage; state transitions happen elsewhere.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Protocol

from outage_planner.db.models.outage_request import ApprovalStatus, OmsStatus
from outage_planner.services.etl.dates import today_local


class Bucket(str, Enum):
    completed = "COMPLETED"
    overdue = "OVERDUE"
    urgent = "URGENT"
    elevated = "ELEVATED"
    normal = "NORMAL"
    future = "FUTURE"
    default = "DEFAULT"


BUCKET_COLORS = {
    Bucket.completed: "blue",
    Bucket.overdue: "darkred",
    Bucket.urgent: "red",
    Bucket.elevated: "yellow",
    Bucket.normal: "green",
    Bucket.future: "lightgray",
    Bucket.default: "transparent",
}


class RequestLike(Protocol):
    id: Any
    outage_date: dt.date
    start_time: Any
    created_at: dt.datetime | None
    status_request: str
    oms_status: str


@dataclass(frozen=True)
class Classification:
    bucket: Bucket
    color: str


def _value(v: Any) -> str:
    return v.value if isinstance(v, Enum) else str(v)


def _as_date(v: Any) -> dt.date:
    return v.date() if isinstance(v, dt.datetime) else v


def days_until(outage_date: dt.date, today: dt.date) -> int:
    return (_as_date(outage_date) - today).days


def classify_state(status_request: str, oms_status: str, days: int) -> Bucket:
    approval, oms = _value(status_request), _value(oms_status)
    confirmed = approval == ApprovalStatus.confirmed.value

    if confirmed and oms == OmsStatus.processed.value:
        return Bucket.completed
    if confirmed and oms == OmsStatus.not_started.value and days < 0:
        return Bucket.overdue
    if oms == OmsStatus.not_started.value and approval not in (
        ApprovalStatus.pending.value,
        ApprovalStatus.cancelled.value,
    ):
        if 0 <= days <= 5:
            return Bucket.urgent
        if 6 <= days <= 7:
            return Bucket.elevated
        if 8 <= days <= 15:
            return Bucket.normal
        if days > 15:
            return Bucket.future
    return Bucket.default


def classify(request: RequestLike, today: dt.date | None = None) -> Classification:
    today = today or today_local()
    bucket = classify_state(request.status_request, request.oms_status, days_until(request.outage_date, today))
    return Classification(bucket=bucket, color=BUCKET_COLORS[bucket])


# -----------------------------
# Display order
# -----------------------------
_UPCOMING, _PAST, _OTHER, _COMPLETED = range(4)


def _minutes(t: Any) -> int:
    if t is None:
        return 0
    if isinstance(t, (dt.time, dt.datetime)):
        return t.hour * 60 + t.minute
    h, m = str(t).split(":")[:2]
    return int(h) * 60 + int(m)


def _created_ts(v: dt.datetime | None) -> float:
    if v is None:
        return 0.0
    if v.tzinfo is None:
        v = v.replace(tzinfo=dt.timezone.utc)
    return v.timestamp()


def _tiebreak(r: RequestLike) -> Any:
    return r.id if r.id is not None else 0


def display_key(r: RequestLike, today: dt.date) -> tuple:
    approval, oms = _value(r.status_request), _value(r.oms_status)
    confirmed = approval == ApprovalStatus.confirmed.value
    if confirmed and oms == OmsStatus.processed.value:
        return (_COMPLETED, -_created_ts(r.created_at), 0, _tiebreak(r))
    if confirmed:
        day = _as_date(r.outage_date)
        if day >= today:
            return (_UPCOMING, day.toordinal(), _minutes(r.start_time), _tiebreak(r))
        return (_PAST, -day.toordinal(), -_minutes(r.start_time), _tiebreak(r))
    return (_OTHER, -_created_ts(r.created_at), 0, _tiebreak(r))


def sort_for_display(requests: Iterable[RequestLike], today: dt.date | None = None) -> list:
    """Confirmed upcoming (soonest first), confirmed past (latest first),
    everything else newest first, completed last."""
    today = today or today_local()
    return sorted(requests, key=lambda r: display_key(r, today))


def draft_sort_key(d: Any) -> tuple:
    # drafts carry no approval state yet: schedule order only
    return (_as_date(d.outage_date), _minutes(d.start_time or "00:00"))


def sort_drafts(drafts: Iterable[Any]) -> list:
    return sorted(drafts, key=draft_sort_key)
