import datetime as dt

from conftest import make_draft
from outage_planner.crud.requests import COMMIT_FAILED, DUPLICATE, SqlRequestStore, list_requests
from outage_planner.db.models.outage_request import OutageRequest
from outage_planner.services.batch import PendingBatch
from outage_planner.services.lifecycle import Bucket, classify
from outage_planner.services.submitter import EMPTY_BATCH, CommitOutcome, submit_pending_batch

class FakeStore:
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    def create_requests_atomic(self, drafts, creator_id):
        self.calls.append((list(drafts), creator_id))
        return self.outcome

def _batch(n):
    batch = PendingBatch()
    batch.append([make_draft(start=f"{8 + i:02d}:00", end=f"{8 + i:02d}:30") for i in range(n)])
    return batch

def test_failed_commit_keeps_batch():
    batch = _batch(5)
    store = FakeStore(CommitOutcome(success=False, reason="connection lost"))
    result = submit_pending_batch(batch, store, creator_id=100)
    assert not result.success
    assert result.reason == "connection lost"
    assert len(batch) == 5

def test_successful_commit_clears_batch():
    batch = _batch(2)
    store = FakeStore(CommitOutcome(success=True, created_count=2))
    result = submit_pending_batch(batch, store, creator_id=100)
    assert (result.success, result.count) == (True, 2)
    assert len(batch) == 0
    assert store.calls[0][1] == 100

def test_empty_batch_is_not_submitted():
    store = FakeStore(CommitOutcome(success=True))
    result = submit_pending_batch(PendingBatch(), store, creator_id=1)
    assert result.reason == EMPTY_BATCH
    assert store.calls == []

def test_sql_store_persists_pending_requests(seeded_db):
    batch = _batch(2)
    result = submit_pending_batch(batch, SqlRequestStore(seeded_db), creator_id=100)
    assert result.success and result.count == 2

    rows = list_requests(seeded_db, work_center_id=1)
    assert len(rows) == 2
    r = rows[0]
    assert (r.status_request, r.oms_status, r.created_by_id) == ("PENDING", "NOT_STARTED", 100)
    assert r.start_time == dt.time(8, 0)
    assert classify(r, dt.date(2026, 1, 5)).bucket == Bucket.default
    assert list_requests(seeded_db, work_center_id=2) == []

def test_sql_store_is_all_or_nothing(seeded_db):
    batch = PendingBatch()
    batch.append([make_draft(start="08:00"), make_draft(start="10:00", end="11:00"), make_draft(start="08:00")])
    result = submit_pending_batch(batch, SqlRequestStore(seeded_db), creator_id=100)
    assert not result.success
    assert result.reason == DUPLICATE
    assert seeded_db.query(OutageRequest).count() == 0
    assert len(batch) == 3

def test_sql_store_rejects_existing_slot(seeded_db):
    store = SqlRequestStore(seeded_db)
    assert submit_pending_batch(_batch(1), store, creator_id=1).success
    result = submit_pending_batch(_batch(1), store, creator_id=2)
    assert result.reason == DUPLICATE
    assert seeded_db.query(OutageRequest).count() == 1

def test_sql_store_reports_non_duplicate_integrity_errors(seeded_db):
    batch = PendingBatch()
    # bypasses pydantic like a corrupted draft would
    batch.append(make_draft().model_copy(update={"work_center_id": None}))
    result = submit_pending_batch(batch, SqlRequestStore(seeded_db), creator_id=100)
    assert not result.success
    assert result.reason == COMMIT_FAILED
    assert result.reason != DUPLICATE
    assert len(batch) == 1
    assert seeded_db.query(OutageRequest).count() == 0
