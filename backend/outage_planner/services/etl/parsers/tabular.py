import csv
import io
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

import pandas as pd

from outage_planner.core.config import settings
from outage_planner.services.etl.validators import is_blank_row

CSV = "csv"
XLSX = "xlsx"

# Thai Excel on Windows saves CSV as TIS-620 / cp874 unless told otherwise
CSV_ENCODINGS = ("utf-8-sig", "cp874")


class FileImportError(Exception):
    """File-level problem: the whole import is rejected, no row is validated."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.message = message
        self.value = value


@dataclass
class TabularFile:
    kind: str
    header: list[Any]
    rows: list[tuple[int, list[Any]]] = field(default_factory=list)  # (file line, values)


def detect_kind(filename: str) -> str:
    ext = PurePath(filename or "").suffix.lower().lstrip(".")
    if ext not in (CSV, XLSX):
        raise FileImportError("กรุณาเลือกไฟล์ CSV (.csv) หรือ Excel (.xlsx)", value=filename)
    return ext


def max_rows_for(kind: str) -> int:
    return settings.IMPORT_MAX_ROWS_CSV if kind == CSV else settings.IMPORT_MAX_ROWS_XLSX


def _decode(content: bytes) -> str:
    for enc in CSV_ENCODINGS:
        try:
            return content.decode(enc)
        except UnicodeDecodeError:
            continue
    raise FileImportError("ไม่สามารถอ่านไฟล์ CSV ได้ กรุณาตรวจสอบการเข้ารหัสไฟล์ (UTF-8)")


def read_csv_rows(content: bytes) -> tuple[list[Any], list[tuple[int, list[Any]]]]:
    text = _decode(content)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",", quotechar='"', doublequote=True)
    header: list[Any] | None = None
    rows: list[tuple[int, list[Any]]] = []
    last_line = 0
    try:
        for record in reader:
            line = last_line + 1
            last_line = reader.line_num
            values = [v.strip() for v in record]
            if is_blank_row(values):
                continue  # blank line or only separators
            if header is None:
                header = values
                continue
            rows.append((line, values))
    except csv.Error as e:
        raise FileImportError(f"รูปแบบไฟล์ CSV ไม่ถูกต้อง ({e})")
    if header is None:
        raise FileImportError("ไฟล์ว่างเปล่า")
    return header, rows


def read_xlsx_rows(content: bytes) -> tuple[list[Any], list[tuple[int, list[Any]]]]:
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, header=None, dtype=object, engine="openpyxl")
    except Exception as e:
        raise FileImportError("ไม่สามารถอ่านไฟล์ Excel ได้ กรุณาตรวจสอบรูปแบบไฟล์", value=str(e))
    if df.empty:
        raise FileImportError("ไฟล์ว่างเปล่า")

    # blank rows are dropped like blank CSV lines; sheet row numbers are kept
    records = [
        (int(idx) + 1, list(vals))
        for idx, vals in zip(df.index, df.itertuples(index=False, name=None))
        if not is_blank_row(list(vals))
    ]
    if not records:
        raise FileImportError("ไฟล์ว่างเปล่า")
    return records[0][1], records[1:]


def read_tabular(filename: str, content: bytes) -> TabularFile:
    """Check file-level limits and split the file into header and data rows."""
    kind = detect_kind(filename)
    if len(content) > settings.IMPORT_MAX_FILE_BYTES:
        limit_mb = settings.IMPORT_MAX_FILE_BYTES // (1024 * 1024)
        raise FileImportError(f"ไฟล์มีขนาดใหญ่เกินไป (สูงสุด {limit_mb}MB)", value=len(content))
    if not content:
        raise FileImportError("ไฟล์ว่างเปล่า")

    header, rows = read_csv_rows(content) if kind == CSV else read_xlsx_rows(content)

    limit = max_rows_for(kind)
    if len(rows) > limit:
        raise FileImportError(f"จำนวนแถวเกินขีดจำกัด (สูงสุด {limit} แถว)", value=len(rows))
    if not rows:
        raise FileImportError("ไม่พบข้อมูลในไฟล์ (มีเฉพาะหัวตาราง)")
    return TabularFile(kind=kind, header=header, rows=rows)
