"""
Idempotent seed-скрипт.
Запуск:
  python seed.py --reset   # дропнуть и пересоздать БД + демо-данные
  python seed.py           # мягкое наполнение недостающих данных (idempotent)
"""
from datetime import timedelta
import argparse

from extensions import db
from models import DutySchedule, Homework, TimetableSlot, Weekday
from schedule_utils import today_in

DEMO_WEEK = {
    Weekday.MONDAY:    ["Математик", "Монгол хэл", "Англи хэл", "Физик", "Түүх"],
    Weekday.TUESDAY:   ["Хими", "Биологи", "Математик", "Газар зүй", "Тамир"],
    Weekday.WEDNESDAY: ["Мэдээлэл зүй", "Математик", "Монгол хэл", "Эрүүл мэнд"],
    Weekday.THURSDAY:  ["Англи хэл", "Физик", "Иргэний ёс зүй", "Хими", "Түүх"],
    Weekday.FRIDAY:    ["Дизайн технологи", "Математик", "Биологи", "Тамир"],
}

DEMO_NAMES = ["Болд", "Сараа", "Тэмүүлэн", "Номин", "Анар"]


def seed_timetable() -> int:
    created = 0
    for day, subjects in DEMO_WEEK.items():
        for no, subject in enumerate(subjects, start=1):
            if TimetableSlot.query.filter_by(day=day, lesson_number=no).first():
                continue
            db.session.add(TimetableSlot(day=day, lesson_number=no, subject=subject))
            created += 1
    return created


def seed_homework(today) -> int:
    if Homework.query.first():
        return 0
    db.session.add_all([
        Homework(subject="Математик", title="Сурах бичиг 45-р тал, 1-10 бодлого", date=today, images=[]),
        Homework(subject="Англи хэл", title="Unit 3 шинэ үг цээжлэх", date=today - timedelta(days=1), images=[]),
    ])
    return 2


def seed_duty(today) -> int:
    if DutySchedule.query.filter_by(date=today).first():
        return 0
    db.session.add(DutySchedule(date=today, names=list(DEMO_NAMES), notes=None))
    return 1


def seed_demo(tz_name: str | None = None) -> dict:
    from flask import current_app
    today = today_in(tz_name or current_app.config.get("SCHOOL_TZ"))
    stats = {
        "timetable": seed_timetable(),
        "homework": seed_homework(today),
        "duty": seed_duty(today),
    }
    db.session.commit()
    return stats


def main():
    from app import create_app

    parser = argparse.ArgumentParser(description="Demo data for classboard")
    parser.add_argument("--reset", action="store_true", help="drop and recreate all tables")
    parser.add_argument("--config", default="dev")
    args = parser.parse_args()

    app = create_app(args.config)
    with app.app_context():
        if args.reset:
            db.drop_all()
        db.create_all()
        stats = seed_demo()
        print(f"Seed done: {stats}")


if __name__ == "__main__":
    main()
