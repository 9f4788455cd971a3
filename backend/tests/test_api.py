import datetime as dt

import pytest
from fastapi.testclient import TestClient

from conftest import FAR
from outage_planner.core.deps import get_db
from outage_planner.core.security import create_access_token
from outage_planner.db.models.outage_request import OutageRequest
from outage_planner.main import create_app
from outage_planner.services.etl.rows import RowLayout

HEADER = ",".join(RowLayout(with_units=False).headers)

@pytest.fixture
def client(seeded_db):
    app = create_app()

    def _db():
        yield seeded_db

    app.dependency_overrides[get_db] = _db
    with TestClient(app) as c:
        yield c

def _auth(role="USER", uid=100, wc=1, br=11):
    token = create_access_token(sub=f"u{uid}", role=role, user_id=uid, work_center_id=wc, branch_id=br)
    return {"Authorization": f"Bearer {token}"}

def _upload(client, body: str, headers, name="requests.csv"):
    return client.post(
        "/imports/upload",
        files={"file": (name, body.encode("utf-8"), "text/csv")},
        headers=headers,
    )

def test_me(client):
    r = client.get("/auth/me", headers=_auth())
    assert r.status_code == 200
    assert r.json()["work_center_id"] == 1

def test_requires_token(client):
    assert client.get("/requests/pending").status_code == 401
    assert client.get("/requests/pending", headers={"Authorization": "Bearer junk"}).status_code == 401

def test_viewer_cannot_import(client):
    r = _upload(client, f"{HEADER}\n{FAR},08:00,09:00,TX001,,\n", _auth(role="VIEWER"))
    assert r.status_code == 403

def test_upload_review_submit_flow(client):
    headers = _auth()
    r = _upload(client, f"{HEADER}\n{FAR},08:00,09:00,TX001,,\n{FAR},08:00,08:10,TX002,,\n", headers)
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "partial"
    assert body["accepted"] == 1
    assert body["errors"][0]["row_num"] == 3
    assert body["report"].startswith("แถว 3: เวลาสิ้นสุด")

    pending = client.get("/requests/pending", headers=headers).json()
    assert len(pending["items"]) == 1
    assert pending["items"][0]["gis_details"] == "หน้าโรงเรียนวัดใหม่"

    r = _upload(client, f"{HEADER}\n{FAR},10:00,11:00,TX002,,\n", headers)
    assert r.status_code == 409
    assert r.json()["detail"]["reason"] == "pending-not-empty"

    assert client.post("/requests/pending/acknowledge", headers=headers).json()["acknowledged"]
    r = _upload(client, f"{HEADER}\n{FAR},10:00,11:00,TX002,,\n", headers)
    assert r.status_code == 200

    r = client.post("/requests/pending/submit", headers=headers)
    assert r.json() == {"success": True, "count": 2, "reason": None}
    assert client.get("/requests/pending", headers=headers).json()["items"] == []

    listed = client.get("/requests", headers=headers).json()
    assert sorted(x["start_time"] for x in listed) == ["08:00:00", "10:00:00"]
    assert {x["bucket"] for x in listed} == {"DEFAULT"}
    assert {x["color"] for x in listed} == {"transparent"}

def test_file_error_returns_400(client):
    r = _upload(client, "a,b\n", _auth(), name="requests.pdf")
    assert r.status_code == 400
    assert r.json()["detail"]["status"] == "failed"

def test_manual_append_validates_and_forces_units(client):
    headers = _auth()
    draft = {
        "outage_date": FAR,
        "start_time": "08:00",
        "end_time": "09:00",
        "work_center_id": 2,
        "branch_id": 21,
        "transformer_number": "TX001",
    }
    r = client.post("/requests/pending", json=draft, headers=headers)
    assert r.status_code == 200
    item = r.json()["items"][0]
    assert (item["work_center_id"], item["branch_id"]) == (1, 11)

    r = client.post("/requests/pending", json={**draft, "start_time": "10:00", "end_time": "11:00"}, headers=headers)
    assert r.status_code == 409

    client.post("/requests/pending/acknowledge", headers=headers)
    r = client.post("/requests/pending", json={**draft, "end_time": "08:10"}, headers=headers)
    assert r.status_code == 422

def test_remove_and_clear_pending(client):
    headers = _auth()
    _upload(client, f"{HEADER}\n{FAR},08:00,09:00,TX001,,\n{FAR},10:00,11:00,TX002,,\n", headers)
    assert client.delete("/requests/pending/7", headers=headers).status_code == 404
    r = client.delete("/requests/pending/0", headers=headers)
    assert [x["start_time"] for x in r.json()["items"]] == ["10:00"]
    assert client.delete("/requests/pending", headers=headers).json()["items"] == []

def test_submit_empty_batch(client):
    r = client.post("/requests/pending/submit", headers=_auth())
    assert r.status_code == 400

def test_template_download(client):
    r = client.get("/imports/template", headers=_auth(role="ADMIN", uid=1, wc=None, br=None))
    assert r.status_code == 200
    assert "attachment" in r.headers["content-disposition"]
    assert "จุดรวมงาน" in r.content.decode("utf-8-sig").splitlines()[0]

def test_user_without_unit_reads_nothing(client, seeded_db):
    seeded_db.add(OutageRequest(
        outage_date=dt.date(2099, 1, 1),
        start_time=dt.time(8, 0),
        end_time=dt.time(9, 0),
        work_center_id=1,
        branch_id=11,
        transformer_number="TX001",
        created_by_id=5,
    ))
    seeded_db.commit()

    assert len(client.get("/requests", headers=_auth()).json()) == 1
    assert len(client.get("/requests", headers=_auth(role="VIEWER", wc=None, br=None)).json()) == 1
    r = client.get("/requests", headers=_auth(role="SUPERVISOR", uid=7, wc=None, br=None))
    assert r.status_code == 200
    assert r.json() == []

def test_user_without_unit_cannot_append(client):
    headers = _auth(uid=8, wc=None, br=None)
    draft = {
        "outage_date": FAR,
        "start_time": "08:00",
        "end_time": "09:00",
        "work_center_id": 1,
        "branch_id": 11,
        "transformer_number": "TX001",
    }
    r = client.post("/requests/pending", json=draft, headers=headers)
    assert r.status_code == 422
    assert r.json()["detail"][0]["field"] == "จุดรวมงาน"
    assert client.get("/requests/pending", headers=headers).json()["items"] == []
