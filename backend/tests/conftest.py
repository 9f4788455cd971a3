import datetime as dt
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SEED_DEMO", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from outage_planner.db.base import Base
from outage_planner.db.models import Branch, Transformer, WorkCenter
from outage_planner.schemas.auth import Caller, Role
from outage_planner.schemas.reference import BranchOut, TransformerOut, WorkCenterOut
from outage_planner.schemas.requests import DraftRequest

TODAY = dt.date(2026, 1, 5)
FAR = "2099-01-01"


class FakeSource:
    def __init__(self, work_centers=None, branches=None, transformers=None, fail_search=False, fail_branches=False):
        self.work_centers = work_centers or []
        self.branches = branches or []
        self.transformers = transformers or []
        self.fail_search = fail_search
        self.fail_branches = fail_branches
        self.branch_calls: list[int] = []
        self.search_calls: list[str] = []

    async def list_work_centers(self):
        return list(self.work_centers)

    async def list_branches(self, work_center_id):
        self.branch_calls.append(work_center_id)
        if self.fail_branches:
            raise ConnectionError("reference db unavailable")
        return [b for b in self.branches if b.work_center_id == work_center_id]

    async def search_transformers(self, text):
        self.search_calls.append(text)
        if self.fail_search:
            raise ConnectionError("search timeout")
        t = text.lower()
        return [
            x for x in self.transformers
            if t in x.transformer_number.lower() or t in (x.gis_details or "").lower()
        ][:10]


@pytest.fixture
def source():
    return FakeSource(
        work_centers=[WorkCenterOut(id=1, name="นราธิวาส"), WorkCenterOut(id=2, name="ปัตตานี")],
        branches=[
            BranchOut(id=11, short_name="เมือง", work_center_id=1),
            BranchOut(id=12, short_name="ตากใบ", work_center_id=1),
            BranchOut(id=21, short_name="เมือง", work_center_id=2),
        ],
        transformers=[
            TransformerOut(transformer_number="TX001", gis_details="หน้าโรงเรียนวัดใหม่"),
            TransformerOut(transformer_number="TX002", gis_details="หน้าตลาดสด"),
        ],
    )


@pytest.fixture
def user_caller():
    return Caller(login="u100", user_id=100, role=Role.user, work_center_id=1, branch_id=11)


@pytest.fixture
def admin_caller():
    return Caller(login="admin", user_id=1, role=Role.admin)


def make_draft(outage_date=dt.date(2099, 1, 1), start="08:00", end="09:00", tx="TX001", **kw):
    return DraftRequest(
        outage_date=outage_date,
        start_time=start,
        end_time=end,
        work_center_id=kw.pop("work_center_id", 1),
        branch_id=kw.pop("branch_id", 11),
        transformer_number=tx,
        **kw,
    )


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def seeded_db(db_session):
    wc = WorkCenter(id=1, name="นราธิวาส")
    wc.branches = [Branch(id=11, short_name="เมือง"), Branch(id=12, short_name="ตากใบ")]
    db_session.add(wc)
    db_session.add_all([
        Transformer(transformer_number="TX001", gis_details="หน้าโรงเรียนวัดใหม่"),
        Transformer(transformer_number="TX002", gis_details="หน้าตลาดสด"),
    ])
    db_session.commit()
    return db_session
