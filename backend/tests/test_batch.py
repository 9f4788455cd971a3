import datetime as dt

import pytest

from conftest import make_draft
from outage_planner.services.batch import PendingBatch, PendingBatchNotEmpty, PendingBatchRegistry

def test_items_stay_in_schedule_order():
    batch = PendingBatch()
    batch.append([
        make_draft(outage_date=dt.date(2099, 2, 1), start="08:00"),
        make_draft(outage_date=dt.date(2099, 1, 1), start="13:00", end="14:00"),
    ])
    batch.acknowledge()
    batch.append(make_draft(outage_date=dt.date(2099, 1, 1), start="08:00"))
    assert [(d.outage_date.month, d.start_time) for d in batch.items] == [(1, "08:00"), (1, "13:00"), (2, "08:00")]

def test_non_empty_batch_needs_acknowledgement():
    batch = PendingBatch()
    batch.append(make_draft())
    with pytest.raises(PendingBatchNotEmpty):
        batch.append(make_draft(start="10:00", end="11:00"))
    assert len(batch) == 1

    batch.acknowledge()
    assert batch.append(make_draft(start="10:00", end="11:00")) == 2
    assert not batch.acknowledged

def test_remove_and_clear():
    batch = PendingBatch()
    batch.append([make_draft(start="08:00"), make_draft(start="10:00", end="11:00")])
    assert batch.remove(0).start_time == "08:00"
    with pytest.raises(IndexError):
        batch.remove(5)
    batch.remove(0)
    assert len(batch) == 0
    assert batch.can_accept()

    batch.append(make_draft())
    batch.clear()
    assert batch.items == []
    batch.append(make_draft())

def test_items_is_a_copy():
    batch = PendingBatch()
    batch.append(make_draft())
    batch.items.clear()
    assert len(batch) == 1

def test_registry_scopes_batches_by_user():
    reg = PendingBatchRegistry()
    reg.for_caller(1).append(make_draft())
    assert len(reg.for_caller(1)) == 1
    assert len(reg.for_caller(2)) == 0
