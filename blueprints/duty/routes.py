# blueprints/duty/routes.py
from __future__ import annotations

from flask import Blueprint, abort, current_app, url_for

from blueprints.api.helpers import created, dump, dump_many, json_object, ok
from schedule_utils import today_in
from . import services as svc
from .schemas import DutyIn, DutyOut, DutyPatch

api_bp = Blueprint("duty_api", __name__)


def _duty_or_404(duty_id: int):
    return svc.get_duty(duty_id) or abort(404, description="Not found")


@api_bp.get("/duty")
def api_duty_list():
    return ok(dump_many(DutyOut, svc.list_duties()))


@api_bp.post("/duty")
def api_duty_create():
    data = DutyIn.model_validate(json_object())
    duty = svc.create_duty(day=data.date, names=data.names, notes=data.notes)
    return created(url_for("duty_api.api_duty_get", duty_id=duty.id), dump(DutyOut, duty))


@api_bp.get("/duty/today")
def api_duty_today():
    today = today_in(current_app.config.get("SCHOOL_TZ"))
    current, upcoming = svc.today_and_next(today)
    return ok({
        "date": today.isoformat(),
        "today": dump(DutyOut, current) if current else None,
        "next": dump(DutyOut, upcoming) if upcoming else None,
    })


# max = предел INTEGER в SQLite, id больше -> 404 ещё на роутинге
@api_bp.get("/duty/<int(max=9223372036854775807):duty_id>")
def api_duty_get(duty_id: int):
    return ok(dump(DutyOut, _duty_or_404(duty_id)))


@api_bp.patch("/duty/<int(max=9223372036854775807):duty_id>")
def api_duty_patch(duty_id: int):
    patch = DutyPatch.model_validate(json_object())
    duty = svc.update_duty(_duty_or_404(duty_id), patch.changes())
    return ok(dump(DutyOut, duty))


@api_bp.delete("/duty/<int(max=9223372036854775807):duty_id>")
def api_duty_delete(duty_id: int):
    svc.delete_duty(_duty_or_404(duty_id))
    return ok({"ok": True})
