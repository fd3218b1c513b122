from datetime import datetime, date as dt_date, timezone
from enum import Enum as PyEnum

from sqlalchemy import (
    Enum, UniqueConstraint, Index, Date, DateTime, Integer, Text, JSON
)
from sqlalchemy.orm import Mapped, mapped_column

from extensions import db


def utcnow() -> datetime:
    # naive UTC, как и везде в БД
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ---------- Enums ----------
class Weekday(PyEnum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"


# ---------- Entities ----------
class TimetableSlot(db.Model):
    __tablename__ = "timetable_slots"

    id: Mapped[int] = mapped_column(primary_key=True)
    day: Mapped[Weekday] = mapped_column(Enum(Weekday, name="weekday"), nullable=False)
    lesson_number: Mapped[int] = mapped_column(Integer, nullable=False)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("day", "lesson_number", name="uq_timetable_day_lesson"),
    )

    def __repr__(self):
        return f"<TimetableSlot {self.day.value}#{self.lesson_number} {self.subject}>"


class Homework(db.Model):
    __tablename__ = "homeworks"

    id: Mapped[int] = mapped_column(primary_key=True)
    subject: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[dt_date] = mapped_column(Date, nullable=False)
    image: Mapped[str | None] = mapped_column(Text)        # legacy: одна ссылка
    images: Mapped[list | None] = mapped_column(JSON)       # актуальный список ссылок
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_homeworks_date", "date"),
    )

    @property
    def all_images(self) -> list[str]:
        return merge_image_urls(self.images or [], self.image)

    def __repr__(self):
        return f"<Homework {self.date} {self.subject}>"


class DutySchedule(db.Model):
    __tablename__ = "duty_schedules"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt_date] = mapped_column(Date, nullable=False, unique=True, index=True)
    names: Mapped[list] = mapped_column(JSON, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<DutySchedule {self.date}>"


def merge_image_urls(images, image=None) -> list[str]:
    """Объединение images + legacy image без дублей, порядок сохраняется."""
    out: list[str] = []
    for url in [*(images or []), image]:
        if not url:
            continue
        url = url.strip()
        if url and url not in out:
            out.append(url)
    return out
