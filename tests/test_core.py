from __future__ import annotations
import json
import logging
import re
from datetime import datetime, timezone

import pytest

from app import create_app
from blueprints.core.routes import JSONFormatter
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

def test_health_ok(client):
    rv = client.get("/health")
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["status"] == "ok"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", data["ts"])

def test_unknown_api_path_is_json(client):
    rv = client.get("/api/nope")
    assert rv.status_code == 404
    assert rv.is_json
    assert "error" in rv.get_json()

def test_unknown_page_is_html(client):
    rv = client.get("/nope")
    assert rv.status_code == 404
    assert not rv.is_json

def test_index_links(client):
    html = client.get("/").get_data(as_text=True)
    assert 'href="/timetable"' in html
    assert 'href="/homework"' in html
    assert 'href="/duty"' in html

def test_timetable_page_shows_day(client):
    client.post("/api/timetable", json={"day": "TUESDAY", "lessonNumber": 2, "subject": "Англи хэл"})
    client.post("/api/timetable", json={"day": "TUESDAY", "lessonNumber": 9, "subject": "Тамир"})
    rv = client.get("/timetable?day=TUESDAY")
    assert rv.status_code == 200
    html = rv.get_data(as_text=True)
    assert "Англи хэл" in html
    assert "Тамир" in html
    assert "Мягмар" in html
    # 9 уроков: больше минимальных 7
    assert html.count("<tr") == 1 + 9

def test_timetable_page_marks_lessons_by_bell(client, monkeypatch):
    from blueprints.core import routes

    # вторник 09:15: второй урок идёт
    monkeypatch.setattr(routes, "_school_now", lambda: datetime(2025, 3, 11, 9, 15, tzinfo=timezone.utc))
    html = client.get("/timetable").get_data(as_text=True)
    assert html.count('<tr class="past">') == 1
    assert html.count('<tr class="now">') == 1
    assert html.count('<tr class="future">') == 5

    html = client.get("/timetable?day=MONDAY").get_data(as_text=True)
    assert '<tr class="now">' not in html

def test_timetable_page_bad_day(client):
    assert client.get("/timetable?day=SUNDAY").status_code == 400

def test_homework_pages(client):
    client.post("/api/hwork", json={"title": "Дасгал 3", "subject": "Физик", "date": "2025-03-10",
                                     "images": ["http://a/1.png"]})
    client.post("/api/hwork", json={"title": "Эссэ", "subject": "Монгол хэл", "date": "2025-03-11"})

    html = client.get("/homework").get_data(as_text=True)
    assert html.index("2025.03.11") < html.index("2025.03.10")
    assert "Даваа" in html  # 2025-03-10
    assert 'src="http://a/1.png"' in html

    html = client.get("/homework/2025-03-10").get_data(as_text=True)
    assert "Дасгал 3" in html
    assert "Эссэ" not in html

    assert client.get("/homework/not-a-day").status_code == 400

def test_duty_page_falls_back_to_next(client):
    client.post("/api/duty", json={"date": "2999-01-02", "names": ["A", "B", "C", "D", "E"]})
    html = client.get("/duty").get_data(as_text=True)
    assert "Дараагийн жижүүр" in html
    assert "2999.01.02" in html

def test_json_formatter_includes_request_extras():
    record = logging.LogRecord("app", logging.INFO, __file__, 1, "request handled", None, None)
    record.event = "http_request"
    record.path = "/health"
    record.status = 200
    payload = json.loads(JSONFormatter().format(record))
    assert payload["msg"] == "request handled"
    assert payload["level"] == "INFO"
    assert payload["event"] == "http_request"
    assert payload["path"] == "/health"
    assert payload["status"] == 200
    assert "method" not in payload

def test_seed_demo_is_idempotent(app_ctx, client):
    from seed import DEMO_NAMES, seed_demo

    first = seed_demo("UTC")
    assert first["timetable"] > 0
    assert first["duty"] == 1
    assert seed_demo("UTC") == {"timetable": 0, "homework": 0, "duty": 0}

    js = client.get("/api/duty/today").get_json()
    assert js["today"]["names"] == DEMO_NAMES
    rows = client.get("/api/timetable").get_json()
    assert rows[0]["day"] == "MONDAY" and rows[0]["lessonNumber"] == 1
