# blueprints/homework/routes.py
from __future__ import annotations

from flask import Blueprint, abort, request, url_for

from blueprints.api.helpers import created, dump, dump_many, json_object, ok
from schedule_utils import parse_iso_day
from . import services as svc
from .schemas import HomeworkIn, HomeworkOut, HomeworkPatch

api_bp = Blueprint("homework_api", __name__)


def _hw_or_404(hw_id: int):
    return svc.get_homework(hw_id) or abort(404, description="Not found")


@api_bp.get("/hwork")
def api_homework_list():
    subject = (request.args.get("subject") or "").strip() or None
    d = (request.args.get("date") or "").strip()
    day = None
    if d:
        try:
            day = parse_iso_day(d)
        except ValueError:
            abort(400, description="invalid date")
    return ok(dump_many(HomeworkOut, svc.list_homework(subject=subject, day=day)))


@api_bp.post("/hwork")
def api_homework_create():
    data = HomeworkIn.model_validate(json_object())
    hw = svc.create_homework(
        title=data.title,
        subject=data.subject,
        day=data.date,
        images=data.images,
        image=data.image,
    )
    return created(url_for("homework_api.api_homework_get", hw_id=hw.id), dump(HomeworkOut, hw))


# max = предел INTEGER в SQLite, id больше -> 404 ещё на роутинге
@api_bp.get("/hwork/<int(max=9223372036854775807):hw_id>")
def api_homework_get(hw_id: int):
    return ok(dump(HomeworkOut, _hw_or_404(hw_id)))


@api_bp.patch("/hwork/<int(max=9223372036854775807):hw_id>")
def api_homework_patch(hw_id: int):
    patch = HomeworkPatch.model_validate(json_object())
    hw = svc.update_homework(_hw_or_404(hw_id), patch.changes())
    return ok(dump(HomeworkOut, hw))


@api_bp.delete("/hwork/<int(max=9223372036854775807):hw_id>")
def api_homework_delete(hw_id: int):
    svc.delete_homework(_hw_or_404(hw_id))
    return ok({"ok": True})
