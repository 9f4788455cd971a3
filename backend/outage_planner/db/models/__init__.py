# import all models for Alembic
from outage_planner.db.models.work_center import WorkCenter, Branch
from outage_planner.db.models.transformer import Transformer
from outage_planner.db.models.outage_request import OutageRequest
