from dataclasses import dataclass
from typing import Any

FIELD_FILE = "ไฟล์"

@dataclass
class ValidationError:
    message: str
    row_num: int | None = None  # file line, header is line 1
    field: str | None = None
    value: Any = None

    def render(self) -> str:
        if self.row_num:
            return f"แถว {self.row_num}: {self.field} - {self.message}"
        return f"{self.field or FIELD_FILE}: {self.message}"

def is_nan(v: Any) -> bool:
    return isinstance(v, float) and v != v

def norm_str(v: Any) -> str | None:
    if v is None or is_nan(v):
        return None
    s = str(v).strip()
    return s if s else None

def is_blank_row(values: list[Any]) -> bool:
    return all(norm_str(v) is None for v in values)
