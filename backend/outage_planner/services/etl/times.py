import datetime as dt
import math
import re
from typing import Any

_COLON_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_COLON_SECONDS_RE = re.compile(r"^(\d{1,2}):(\d{2}):\d{2}$")
_DOT_RE = re.compile(r"^(\d{1,2})\.(\d{1,2})$")
_NON_DIGIT_RE = re.compile(r"\D")


def _fmt(h: int, m: int) -> str:
    if 0 <= h <= 23 and 0 <= m <= 59:
        return f"{h:02d}:{m:02d}"
    return ""


def _from_digits(digits: str) -> str:
    # HMM / HHMM, e.g. 830 -> 08:30, 0800 -> 08:00
    if len(digits) == 3:
        return _fmt(int(digits[:1]), int(digits[1:]))
    if len(digits) == 4:
        return _fmt(int(digits[:2]), int(digits[2:]))
    return ""


def _from_number(v: float) -> str:
    if math.isnan(v) or v < 0:
        return ""
    if v < 1:
        # excel stores times as a fraction of a day; floor to the minute
        total = min(int(v * 24 * 60 + 1e-6), 23 * 60 + 59)
        return _fmt(total // 60, total % 60)
    if float(v).is_integer():
        return _from_digits(str(int(v)))
    return ""


def normalize_time(value: Any) -> str:
    """Return ``HH:MM`` for any supported time encoding, ``""`` when unparseable."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, dt.datetime):
        return value.strftime("%H:%M")
    if isinstance(value, dt.time):
        return f"{value.hour:02d}:{value.minute:02d}"
    if isinstance(value, (int, float)):
        return _from_number(float(value))
    if not isinstance(value, str):
        return ""

    s = value.strip()
    if not s:
        return ""

    m = _COLON_RE.match(s) or _COLON_SECONDS_RE.match(s)
    if m:
        return _fmt(int(m.group(1)), int(m.group(2)))

    out = _from_digits(_NON_DIGIT_RE.sub("", s))
    if out:
        return out

    m = _DOT_RE.match(s)
    if m:
        return _fmt(int(m.group(1)), int(m.group(2)))
    return ""


def to_minutes(hhmm: str) -> int:
    h, m = hhmm.split(":")
    return int(h) * 60 + int(m)


def to_time(hhmm: str) -> dt.time:
    h, m = hhmm.split(":")
    return dt.time(int(h), int(m))
