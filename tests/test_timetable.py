from __future__ import annotations
import pytest

from app import create_app
from extensions import db


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


def upsert(client, day="MONDAY", lesson=1, subject="Математик"):
    return client.post("/api/timetable", json={"day": day, "lessonNumber": lesson, "subject": subject})


def test_upsert_replaces_subject_in_same_cell(client):
    r1 = upsert(client, subject="Математик")
    assert r1.status_code == 201
    js1 = r1.get_json()
    assert js1["day"] == "MONDAY"
    assert js1["lessonNumber"] == 1
    assert js1["subject"] == "Математик"
    assert r1.headers["Location"].endswith(f"/api/timetable/{js1['id']}")

    r2 = upsert(client, subject="Физик")
    assert r2.status_code == 201
    js2 = r2.get_json()
    assert js2["id"] == js1["id"]
    assert js2["subject"] == "Физик"

    rows = client.get("/api/timetable").get_json()
    cell = [r for r in rows if r["day"] == "MONDAY" and r["lessonNumber"] == 1]
    assert len(cell) == 1
    assert cell[0]["subject"] == "Физик"


def test_subject_is_trimmed(client):
    r = upsert(client, subject="  Хими  ")
    assert r.status_code == 201
    assert r.get_json()["subject"] == "Хими"


def test_list_ordered_by_weekday_then_lesson(client):
    upsert(client, "FRIDAY", 1, "Тамир")
    upsert(client, "MONDAY", 3, "Түүх")
    upsert(client, "WEDNESDAY", 2, "Физик")
    upsert(client, "MONDAY", 1, "Математик")

    rows = client.get("/api/timetable").get_json()
    assert [(r["day"], r["lessonNumber"]) for r in rows] == [
        ("MONDAY", 1), ("MONDAY", 3), ("WEDNESDAY", 2), ("FRIDAY", 1),
    ]
    assert rows[0]["createdAt"].endswith("Z")


@pytest.mark.parametrize("payload", [
    {"day": "SUNDAY", "lessonNumber": 1, "subject": "x"},
    {"day": "MONDAY", "lessonNumber": 0, "subject": "x"},
    {"day": "MONDAY", "lessonNumber": 13, "subject": "x"},
    {"day": "MONDAY", "lessonNumber": "3", "subject": "x"},
    {"day": "MONDAY", "lessonNumber": 1.5, "subject": "x"},
    {"day": "MONDAY", "lessonNumber": True, "subject": "x"},
    {"day": "MONDAY", "lessonNumber": 1, "subject": "   "},
    {"day": "MONDAY", "lessonNumber": 1},
    {"lessonNumber": 1, "subject": "x"},
])
def test_upsert_rejects_invalid_input(client, payload):
    r = client.post("/api/timetable", json=payload)
    assert r.status_code == 400
    assert r.get_json()["error"]
    assert client.get("/api/timetable").get_json() == []


def test_body_must_be_object(client):
    r = client.post("/api/timetable", json=["MONDAY", 1, "x"])
    assert r.status_code == 400
    assert r.get_json()["error"] == "Invalid body"


def test_patch_subject_keeps_cell(client):
    slot = upsert(client, "TUESDAY", 4, "Биологи").get_json()
    r = client.patch(f"/api/timetable/{slot['id']}", json={"subject": "Газар зүй"})
    assert r.status_code == 200
    js = r.get_json()
    assert js["subject"] == "Газар зүй"
    assert js["day"] == "TUESDAY"
    assert js["lessonNumber"] == 4


def test_patch_moves_slot(client):
    slot = upsert(client, "TUESDAY", 4, "Биологи").get_json()
    r = client.patch(f"/api/timetable/{slot['id']}", json={"day": "THURSDAY", "lessonNumber": 2})
    assert r.status_code == 200
    got = client.get(f"/api/timetable/{slot['id']}").get_json()
    assert (got["day"], got["lessonNumber"], got["subject"]) == ("THURSDAY", 2, "Биологи")


def test_patch_validation(client):
    slot = upsert(client).get_json()
    url = f"/api/timetable/{slot['id']}"

    r = client.patch(url, json={})
    assert r.status_code == 400
    assert r.get_json()["error"] == "Empty patch"

    r = client.patch(url, json={"subject": None})
    assert r.status_code == 400
    assert r.get_json()["error"] == "subject must not be null"

    r = client.patch(url, json={"lessonNumber": 99})
    assert r.status_code == 400

    assert client.get(url).get_json()["subject"] == "Математик"


def test_patch_into_taken_cell_conflicts(client):
    upsert(client, "MONDAY", 1, "Математик")
    other = upsert(client, "MONDAY", 2, "Физик").get_json()

    r = client.patch(f"/api/timetable/{other['id']}", json={"lessonNumber": 1})
    assert r.status_code == 409
    assert r.get_json()["error"]
    assert client.get(f"/api/timetable/{other['id']}").get_json()["lessonNumber"] == 2


def test_get_delete_missing_slot(client):
    assert client.get("/api/timetable/999").status_code == 404
    r = client.delete("/api/timetable/999")
    assert r.status_code == 404
    assert r.get_json() == {"error": "Not found"}
    assert client.patch("/api/timetable/999", json={"subject": "x"}).status_code == 404


def test_delete_slot(client):
    slot = upsert(client).get_json()
    r = client.delete(f"/api/timetable/{slot['id']}")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True}
    assert client.get("/api/timetable").get_json() == []


def test_long_subject_is_accepted(client):
    subject = "Математик (нэмэлт хичээл) " * 10
    r = upsert(client, "THURSDAY", 5, subject)
    assert r.status_code == 201
    assert r.get_json()["subject"] == subject.strip()


def test_oversized_id_is_not_found(client):
    huge = "99999999999999999999"
    for method in ("get", "delete"):
        r = getattr(client, method)(f"/api/timetable/{huge}")
        assert r.status_code == 404
        assert r.is_json
    assert client.patch(f"/api/timetable/{huge}", json={"subject": "x"}).status_code == 404
