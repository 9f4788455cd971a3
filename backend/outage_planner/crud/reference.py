import asyncio

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from outage_planner.core.config import settings
from outage_planner.db.models.transformer import Transformer
from outage_planner.db.models.work_center import Branch, WorkCenter
from outage_planner.schemas.reference import BranchOut, TransformerOut, WorkCenterOut


def list_work_centers(db: Session) -> list[WorkCenter]:
    return db.query(WorkCenter).order_by(WorkCenter.id).all()


def list_branches(db: Session, work_center_id: int) -> list[Branch]:
    return db.query(Branch).filter(Branch.work_center_id == work_center_id).order_by(Branch.id).all()


def search_transformers(db: Session, text: str, limit: int | None = None) -> list[Transformer]:
    pattern = f"%{text.strip().lower()}%"
    return (
        db.query(Transformer)
        .filter(or_(
            func.lower(Transformer.transformer_number).like(pattern),
            func.lower(Transformer.gis_details).like(pattern),
        ))
        .order_by(Transformer.transformer_number)
        .limit(limit or settings.TRANSFORMER_SEARCH_LIMIT)
        .all()
    )


class SqlReferenceSource:
    """Reference lookups for the importer; blocking ORM calls run in a worker thread."""

    def __init__(self, db: Session):
        self.db = db

    async def list_work_centers(self) -> list[WorkCenterOut]:
        rows = await asyncio.to_thread(list_work_centers, self.db)
        return [WorkCenterOut.model_validate(r) for r in rows]

    async def list_branches(self, work_center_id: int) -> list[BranchOut]:
        rows = await asyncio.to_thread(list_branches, self.db, work_center_id)
        return [BranchOut.model_validate(r) for r in rows]

    async def search_transformers(self, text: str) -> list[TransformerOut]:
        rows = await asyncio.to_thread(search_transformers, self.db, text)
        return [TransformerOut.model_validate(r) for r in rows]
