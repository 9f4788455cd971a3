import datetime as dt

import pytest

from outage_planner.services.etl.dates import (
    FIELD_DATE,
    FIELD_END,
    FIELD_START,
    min_selectable_date,
    parse_outage_date,
    validate_schedule,
)

TODAY = dt.date(2026, 1, 5)
BOUNDARY = min_selectable_date(TODAY)

def test_boundary_is_eleven_days_out():
    assert BOUNDARY == dt.date(2026, 1, 16)

@pytest.mark.parametrize("days", [-3, 0, 5, 9, 10])
def test_lead_time_violation(days):
    errors = validate_schedule(TODAY + dt.timedelta(days=days), BOUNDARY, TODAY)
    assert [e.field for e in errors] == [FIELD_DATE]
    assert f"เหลือเพียง {days} วัน" in errors[0].message

@pytest.mark.parametrize("days", [11, 12, 400])
def test_lead_time_ok(days):
    assert validate_schedule(TODAY + dt.timedelta(days=days), BOUNDARY, TODAY) == []

@pytest.mark.parametrize("raw,expected", [
    ("2099-01-31", dt.date(2099, 1, 31)),
    ("31/01/2099", dt.date(2099, 1, 31)),
    ("31-01-2099", dt.date(2099, 1, 31)),
    ("2099/01/31", dt.date(2099, 1, 31)),
    (" 2099-01-31 ", dt.date(2099, 1, 31)),
    (dt.datetime(2099, 1, 31, 0, 0), dt.date(2099, 1, 31)),
    (dt.date(2099, 1, 31), dt.date(2099, 1, 31)),
    (45658, dt.date(2025, 1, 1)),
])
def test_parse_outage_date(raw, expected):
    assert parse_outage_date(raw) == expected

@pytest.mark.parametrize("raw", ["2099-13-01", "31.01.2099", "tomorrow", "", None, 12, float("nan")])
def test_parse_outage_date_rejects(raw):
    assert parse_outage_date(raw) is None

def _fields(start, end):
    return [e.field for e in validate_schedule(BOUNDARY, BOUNDARY, TODAY, start, end)]

def test_working_window():
    assert _fields("06:00", "06:30") == []
    assert _fields("19:30", "20:00") == []
    assert _fields("05:59", "07:00") == [FIELD_START]
    assert _fields("19:31", "20:00") == [FIELD_START]
    assert _fields("18:00", "20:01") == [FIELD_END]

def test_minimum_duration():
    assert _fields("08:00", "08:30") == []
    errors = validate_schedule(BOUNDARY, BOUNDARY, TODAY, "08:00", "08:29")
    assert [e.field for e in errors] == [FIELD_END]
    assert "30 นาที" in errors[0].message
    assert _fields("10:00", "09:00") == [FIELD_END]

def test_all_violations_are_reported():
    errors = validate_schedule(TODAY, BOUNDARY, TODAY, "05:00", "21:00")
    assert [e.field for e in errors] == [FIELD_DATE, FIELD_START, FIELD_END]
