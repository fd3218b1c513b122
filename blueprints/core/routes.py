from __future__ import annotations
import json, logging
from datetime import datetime, timezone

from flask import abort, current_app, g, jsonify, render_template, request
from werkzeug.wrappers.response import Response

from blueprints.duty import services as duty_svc
from blueprints.homework import services as hw_svc
from blueprints.timetable import services as tt_svc
from schedule_utils import (
    DAYS, get_tz, group_by_day, lesson_status, parse_bell_times, parse_iso_day, school_day,
)

from . import bp
from .filters import register_filters

MIN_LESSONS = 7

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": _utcnow().isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in ("event", "path", "method", "status", "duration_ms"):
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _setup_structured_logging(app):
    logger = app.logger
    has_json = any(
        isinstance(h, logging.StreamHandler)
        and isinstance(getattr(h, "formatter", None), JSONFormatter)
        for h in logger.handlers
    )
    if not has_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)

@bp.before_app_request
def _start_timer():
    g._req_start = _utcnow()

@bp.after_app_request
def _log_request(response: Response):
    start = getattr(g, "_req_start", None)
    duration_ms = int((_utcnow() - start).total_seconds() * 1000) if start else None
    extra = {
        "event": "http_request",
        "path": request.path,
        "method": request.method,
        "status": response.status_code,
        "duration_ms": duration_ms,
    }
    current_app.logger.info("request handled", extra=extra)
    return response

@bp.record_once
def _on_register(state):
    app = state.app
    _setup_structured_logging(app)
    register_filters(app)

@bp.get("/health")
def health():
    return jsonify({
        "status": "ok",
        "ts": _utcnow().isoformat(timespec="seconds").replace("+00:00", "Z"),
    })

# ---------- страницы учеников (только чтение) ----------
def _school_now() -> datetime:
    return _utcnow().astimezone(get_tz(current_app.config.get("SCHOOL_TZ")))

@bp.get("/")
def home():
    return render_template("core/index.html")

@bp.get("/timetable")
def timetable_page():
    slots = tt_svc.list_slots()
    grid = {(s.day.value, s.lesson_number): s.subject for s in slots}
    lessons = max([MIN_LESSONS, *(s.lesson_number for s in slots)])
    now = _school_now()
    today = school_day(now)
    active = request.args.get("day") or today
    if active not in DAYS:
        abort(400, description="Bad day")
    bells = parse_bell_times(current_app.config.get("BELL_TIMES", []))
    is_today = active == today and now.weekday() < len(DAYS)
    rows = [{"no": n, "subject": grid.get((active, n), ""),
             "status": lesson_status(n, now, bells) if is_today else ""}
            for n in range(1, lessons + 1)]
    return render_template("core/timetable.html", days=DAYS, active=active, today=today, rows=rows)

@bp.get("/homework")
def homework_page():
    items = hw_svc.list_homework()
    groups = group_by_day(items, key=lambda h: h.date)
    return render_template("core/homework.html", groups=groups)

@bp.get("/homework/<day>")
def homework_day_page(day: str):
    try:
        d = parse_iso_day(day)
    except ValueError:
        abort(400, description="Bad date")
    items = hw_svc.list_homework(day=d)
    return render_template("core/homework_day.html", day=d, items=items)

@bp.get("/duty")
def duty_page():
    today = _school_now().date()
    current, upcoming = duty_svc.today_and_next(today)
    return render_template("core/duty.html", today=today, current=current, upcoming=upcoming)
