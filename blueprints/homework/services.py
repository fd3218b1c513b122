# blueprints/homework/services.py
from __future__ import annotations
import logging
from datetime import date
from typing import List, Optional

from flask import current_app
from extensions import db
from models import Homework, merge_image_urls
from schedule_utils import day_bounds, today_in

log = logging.getLogger(__name__)


def school_today() -> date:
    return today_in(current_app.config.get("SCHOOL_TZ"))


def list_homework(*, subject: Optional[str] = None, day: Optional[date] = None) -> List[Homework]:
    q = db.session.query(Homework)
    if subject:
        q = q.filter(Homework.subject == subject)
    if day is not None:
        start, end = day_bounds(day)
        q = q.filter(Homework.date >= start, Homework.date < end)
    return q.order_by(Homework.date.desc(), Homework.created_at.desc(), Homework.id.desc()).all()


def get_homework(hw_id: int) -> Optional[Homework]:
    return db.session.get(Homework, hw_id)


def create_homework(*, title: str, subject: str, day: Optional[date],
                    images: List[str], image: Optional[str]) -> Homework:
    """Новое ДЗ. images + legacy image сливаются, первая ссылка дублируется в image."""
    urls = merge_image_urls(images, image)
    hw = Homework(
        title=title,
        subject=subject,
        date=day or school_today(),
        images=urls,
        image=urls[0] if urls else None,
    )
    db.session.add(hw)
    db.session.commit()
    log.info("homework created id=%s date=%s images=%d", hw.id, hw.date, len(urls))
    return hw


def update_homework(hw: Homework, changes: dict) -> Homework:
    if "images" in changes:
        urls = merge_image_urls(changes["images"])
        changes["images"] = urls
        # image не передали: держим legacy-поле в синхроне со списком
        if "image" not in changes:
            changes["image"] = urls[0] if urls else None
    for field, value in changes.items():
        setattr(hw, field, value)
    db.session.commit()
    return hw


def delete_homework(hw: Homework) -> None:
    db.session.delete(hw)
    db.session.commit()
