from sqlalchemy.orm import Session
from outage_planner.db.session import SessionLocal
from outage_planner.db.models.work_center import WorkCenter, Branch
from outage_planner.db.models.transformer import Transformer
from outage_planner.core.logging import logger

DEMO_WORK_CENTERS = {
    "นราธิวาส": ["เมือง", "ตากใบ", "บาเจาะ"],
    "ปัตตานี": ["เมือง", "หนองจิก"],
}
DEMO_TRANSFORMERS = [
    ("TX001", "หน้าโรงเรียนวัดใหม่"),
    ("TX002", "หน้าตลาดสด"),
]

def seed_demo():
    db: Session = SessionLocal()
    try:
        if db.query(WorkCenter).count() == 0:
            for name, branches in DEMO_WORK_CENTERS.items():
                wc = WorkCenter(name=name)
                wc.branches = [Branch(short_name=b) for b in branches]
                db.add(wc)
        if db.query(Transformer).count() == 0:
            db.add_all([Transformer(transformer_number=n, gis_details=g) for n, g in DEMO_TRANSFORMERS])
        db.commit()
        logger.info("seed_demo_done")
    finally:
        db.close()
