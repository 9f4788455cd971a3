from pydantic import BaseModel, ConfigDict

class WorkCenterOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str

class BranchOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    short_name: str
    work_center_id: int

class TransformerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    transformer_number: str
    gis_details: str | None = None
