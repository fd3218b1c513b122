# blueprints/timetable/routes.py
from __future__ import annotations

from flask import Blueprint, abort, url_for

from blueprints.api.helpers import created, dump, dump_many, json_object, ok
from . import services as svc
from .schemas import SlotIn, SlotOut, SlotPatch

api_bp = Blueprint("timetable_api", __name__)


def _slot_or_404(slot_id: int):
    return svc.get_slot(slot_id) or abort(404, description="Not found")


@api_bp.get("/timetable")
def api_timetable_list():
    return ok(dump_many(SlotOut, svc.list_slots()))


@api_bp.post("/timetable")
def api_timetable_upsert():
    data = SlotIn.model_validate(json_object())
    slot = svc.upsert_slot(day=data.day, lesson_number=data.lesson_number, subject=data.subject)
    return created(url_for("timetable_api.api_timetable_get", slot_id=slot.id), dump(SlotOut, slot))


# max = предел INTEGER в SQLite, id больше -> 404 ещё на роутинге
@api_bp.get("/timetable/<int(max=9223372036854775807):slot_id>")
def api_timetable_get(slot_id: int):
    return ok(dump(SlotOut, _slot_or_404(slot_id)))


@api_bp.patch("/timetable/<int(max=9223372036854775807):slot_id>")
def api_timetable_patch(slot_id: int):
    patch = SlotPatch.model_validate(json_object())
    slot = svc.update_slot(_slot_or_404(slot_id), patch.changes())
    return ok(dump(SlotOut, slot))


@api_bp.delete("/timetable/<int(max=9223372036854775807):slot_id>")
def api_timetable_delete(slot_id: int):
    svc.delete_slot(_slot_or_404(slot_id))
    return ok({"ok": True})
