import csv
import datetime as dt
import io

from outage_planner.services.etl.rows import RowLayout

TEMPLATE_FILE_NAME = "template_power_outage_request.csv"


def _sample_rows(layout: RowLayout, today: dt.date) -> list[list[str]]:
    samples = [
        (15, "08:00", "12:00", ("จุดรวมงานตัวอย่าง", "สาขาตัวอย่าง"), "TX001", "หน้าโรงเรียนวัดใหม่", "หมู่บ้านเจริญสุข"),
        (20, "14:00", "17:30", ("นราธิวาส", "เมือง"), "TX002", "หน้าตลาดสด", "ชุมชนบ้านใหม่"),
    ]
    rows = []
    for days, start, end, units, tx, gis, area in samples:
        row = [(today + dt.timedelta(days=days)).isoformat(), start, end]
        if layout.with_units:
            row += list(units)
        rows.append(row + [tx, gis, area])
    return rows


def build_csv_template(layout: RowLayout, today: dt.date) -> bytes:
    buf = io.StringIO()
    w = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    w.writerow(layout.headers)
    w.writerows(_sample_rows(layout, today))
    # BOM so Excel opens Thai text as UTF-8
    return buf.getvalue().encode("utf-8-sig")
