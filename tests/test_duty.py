from __future__ import annotations
from datetime import datetime, timedelta, timezone
import pytest

from app import create_app
from extensions import db

NAMES = ["A", "B", "C", "D", "E"]

@pytest.fixture()
def app_ctx():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture()
def client(app_ctx):
    return app_ctx.test_client()

def add_duty(client, date="2025-03-10", names=None, **extra):
    return client.post("/api/duty", json={"date": date, "names": names or NAMES, **extra})

def test_create_conflict_and_names_validation(client):
    r = add_duty(client)
    assert r.status_code == 201
    duty = r.get_json()
    assert duty["date"] == "2025-03-10"
    assert duty["names"] == NAMES
    assert duty["notes"] is None

    r2 = add_duty(client)
    assert r2.status_code == 409
    assert r2.get_json()["error"] == "This date already exists"

    r3 = client.patch(f"/api/duty/{duty['id']}", json={"names": ["A", "B", "C", "D"]})
    assert r3.status_code == 400
    assert "names" in r3.get_json()["error"]

    got = client.get(f"/api/duty/{duty['id']}").get_json()
    assert got["names"] == NAMES

def test_same_day_with_time_component_conflicts(client):
    assert add_duty(client, date="2025-03-10").status_code == 201
    r = add_duty(client, date="2025-03-10T15:45:00Z")
    assert r.status_code == 409
    assert len(client.get("/api/duty").get_json()) == 1

@pytest.mark.parametrize("names", [
    ["A", "B", "C", "D"],
    ["A", "B", "C", "D", "E", "F"],
    ["A", "B", " ", "D", "E"],
    ["A", "B", "C", "D", 5],
    "A,B,C,D,E",
])
def test_create_rejects_bad_names(client, names):
    r = client.post("/api/duty", json={"date": "2025-03-10", "names": names})
    assert r.status_code == 400
    assert r.get_json()["error"] == "names must be an array of exactly 5 non-empty strings"
    assert client.get("/api/duty").get_json() == []

def test_names_and_notes_are_trimmed(client):
    r = add_duty(client, names=[" A ", "B", "C", "D", "E "], notes="  ")
    js = r.get_json()
    assert js["names"] == NAMES
    assert js["notes"] is None

@pytest.mark.parametrize("payload,message", [
    ({"names": NAMES}, "date is required (YYYY-MM-DD)"),
    ({"date": "", "names": NAMES}, "date is required (YYYY-MM-DD)"),
    ({"date": "10.03.2025", "names": NAMES}, "Invalid date"),
])
def test_create_rejects_bad_date(client, payload, message):
    r = client.post("/api/duty", json=payload)
    assert r.status_code == 400
    assert r.get_json()["error"] == message

def test_list_sorted_by_date(client):
    add_duty(client, date="2025-03-12")
    add_duty(client, date="2025-03-10")
    add_duty(client, date="2025-03-11")
    rows = client.get("/api/duty").get_json()
    assert [r["date"] for r in rows] == ["2025-03-10", "2025-03-11", "2025-03-12"]

def test_patch_date_conflict(client):
    add_duty(client, date="2025-03-10")
    other = add_duty(client, date="2025-03-11").get_json()
    r = client.patch(f"/api/duty/{other['id']}", json={"date": "2025-03-10"})
    assert r.status_code == 409
    assert client.get(f"/api/duty/{other['id']}").get_json()["date"] == "2025-03-11"

def test_patch_notes_and_names(client):
    duty = add_duty(client, notes="Цэвэрлэгээ").get_json()
    url = f"/api/duty/{duty['id']}"

    r = client.patch(url, json={"names": ["E", "D", "C", "B", "A"]})
    assert r.status_code == 200
    assert r.get_json()["names"] == ["E", "D", "C", "B", "A"]
    assert r.get_json()["notes"] == "Цэвэрлэгээ"

    r = client.patch(url, json={"notes": None})
    assert r.get_json()["notes"] is None

    assert client.patch(url, json={}).status_code == 400

def test_missing_duty(client):
    assert client.get("/api/duty/7").status_code == 404
    assert client.patch("/api/duty/7", json={"notes": "x"}).status_code == 404
    assert client.delete("/api/duty/7").status_code == 404

def test_delete_duty(client):
    duty = add_duty(client).get_json()
    assert client.delete(f"/api/duty/{duty['id']}").get_json() == {"ok": True}
    assert client.get("/api/duty").get_json() == []

def test_today_and_next(client):
    today = datetime.now(timezone.utc).date()
    r = client.get("/api/duty/today")
    assert r.get_json() == {"date": today.isoformat(), "today": None, "next": None}

    add_duty(client, date=(today - timedelta(days=1)).isoformat())
    add_duty(client, date=(today + timedelta(days=5)).isoformat(), names=["F", "G", "H", "I", "J"])
    add_duty(client, date=(today + timedelta(days=2)).isoformat(), names=["K", "L", "M", "N", "O"])

    js = client.get("/api/duty/today").get_json()
    assert js["today"] is None
    assert js["next"]["names"] == ["K", "L", "M", "N", "O"]

    add_duty(client, date=today.isoformat())
    js = client.get("/api/duty/today").get_json()
    assert js["today"]["date"] == today.isoformat()
    assert js["next"]["date"] == (today + timedelta(days=2)).isoformat()

def test_oversized_id_is_not_found(client):
    huge = "99999999999999999999"
    r = client.get(f"/api/duty/{huge}")
    assert r.status_code == 404
    assert r.get_json()["error"]
    assert client.patch(f"/api/duty/{huge}", json={"notes": "x"}).status_code == 404
    assert client.delete(f"/api/duty/{huge}").status_code == 404
