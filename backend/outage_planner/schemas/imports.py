from typing import Any
from pydantic import BaseModel


class ValidationErrorOut(BaseModel):
    row_num: int | None
    field: str | None
    message: str
    value: Any = None


class ImportResultOut(BaseModel):
    status: str  # success|partial|failed
    total: int
    accepted: int
    has_partial_data: bool
    errors: list[ValidationErrorOut]
    error_count: int
    warnings: list[ValidationErrorOut]
    report: str
