# blueprints/duty/services.py
from __future__ import annotations
import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from blueprints.api.errors import ConflictError
from extensions import db
from models import DutySchedule

log = logging.getLogger(__name__)

DATE_EXISTS = "This date already exists"


def list_duties() -> List[DutySchedule]:
    return db.session.query(DutySchedule).order_by(DutySchedule.date.asc()).all()


def get_duty(duty_id: int) -> Optional[DutySchedule]:
    return db.session.get(DutySchedule, duty_id)


def _commit_unique():
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(DATE_EXISTS)


def create_duty(*, day: date, names: List[str], notes: Optional[str]) -> DutySchedule:
    duty = DutySchedule(date=day, names=list(names), notes=notes)
    db.session.add(duty)
    _commit_unique()
    log.info("duty schedule created for %s", day.isoformat())
    return duty


def update_duty(duty: DutySchedule, changes: dict) -> DutySchedule:
    for field, value in changes.items():
        setattr(duty, field, value)
    _commit_unique()
    return duty


def delete_duty(duty: DutySchedule) -> None:
    db.session.delete(duty)
    db.session.commit()


def today_and_next(today: date) -> Tuple[Optional[DutySchedule], Optional[DutySchedule]]:
    """Дежурство на сегодня и ближайшее будущее (для страницы учеников)."""
    current = db.session.query(DutySchedule).filter(DutySchedule.date == today).first()
    upcoming = (db.session.query(DutySchedule)
                .filter(DutySchedule.date > today)
                .order_by(DutySchedule.date.asc())
                .first())
    return current, upcoming
