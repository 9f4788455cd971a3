import datetime as dt
from pydantic import BaseModel, ConfigDict, Field


class DraftRequest(BaseModel):
    outage_date: dt.date
    start_time: str = Field(pattern=r"^([01][0-9]|2[0-3]):[0-5][0-9]$")
    end_time: str = Field(pattern=r"^([01][0-9]|2[0-3]):[0-5][0-9]$")
    work_center_id: int
    branch_id: int
    transformer_number: str = Field(min_length=1)
    gis_details: str = ""
    area: str | None = None


class PendingBatchOut(BaseModel):
    items: list[DraftRequest]
    acknowledged: bool


class SubmitOut(BaseModel):
    success: bool
    count: int = 0
    reason: str | None = None


class OutageRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    outage_date: dt.date
    start_time: dt.time
    end_time: dt.time
    work_center_id: int
    branch_id: int
    transformer_number: str
    gis_details: str
    area: str | None = None
    created_by_id: int
    created_at: dt.datetime
    status_request: str
    oms_status: str
    bucket: str
    color: str
