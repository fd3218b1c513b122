# blueprints/timetable/services.py
from __future__ import annotations
import logging
from typing import List, Optional

from sqlalchemy import case
from sqlalchemy.exc import IntegrityError

from blueprints.api.errors import ConflictError
from extensions import db
from models import TimetableSlot, Weekday

log = logging.getLogger(__name__)

# порядок дней недели, а не алфавит (FRIDAY < MONDAY)
_DAY_ORDER = case({d.name: i for i, d in enumerate(Weekday)}, value=TimetableSlot.day)


def list_slots() -> List[TimetableSlot]:
    return (db.session.query(TimetableSlot)
            .order_by(_DAY_ORDER, TimetableSlot.lesson_number.asc())
            .all())


def get_slot(slot_id: int) -> Optional[TimetableSlot]:
    return db.session.get(TimetableSlot, slot_id)


def _find(day: Weekday, lesson_number: int) -> Optional[TimetableSlot]:
    return (db.session.query(TimetableSlot)
            .filter_by(day=day, lesson_number=lesson_number)
            .first())


def upsert_slot(*, day: Weekday, lesson_number: int, subject: str) -> TimetableSlot:
    """Создать/перезаписать предмет в ячейке (day, lesson_number)."""
    slot = _find(day, lesson_number)
    if slot is None:
        slot = TimetableSlot(day=day, lesson_number=lesson_number, subject=subject)
        db.session.add(slot)
        try:
            db.session.commit()
            log.info("timetable slot created %s#%s", day.value, lesson_number)
            return slot
        except IntegrityError:
            # ячейку успели создать параллельно: обновляем её
            db.session.rollback()
            slot = _find(day, lesson_number)
            if slot is None:
                raise
    slot.subject = subject
    db.session.commit()
    log.info("timetable slot updated %s#%s", day.value, lesson_number)
    return slot


def update_slot(slot: TimetableSlot, changes: dict) -> TimetableSlot:
    for field, value in changes.items():
        setattr(slot, field, value)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("This lesson slot is already taken")
    return slot


def delete_slot(slot: TimetableSlot) -> None:
    db.session.delete(slot)
    db.session.commit()
