"""Календарные хелперы: календарный день, дни недели, звонки, группировка ДЗ по дням.

Модуль без зависимостей от Flask: его используют и обработчики API, и client/.
"""
from __future__ import annotations
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Iterable, Sequence, TypeVar

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

T = TypeVar("T")

_ISO_DAY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

DAYS = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY")

# по умолчанию уроки идут по часу с 08:00 до 16:00
DEFAULT_BELL_TIMES = [(f"{h:02d}:00", f"{h + 1:02d}:00") for h in range(8, 16)]

DAY_LABELS = {
    "MONDAY": "Даваа",
    "TUESDAY": "Мягмар",
    "WEDNESDAY": "Лхагва",
    "THURSDAY": "Пүрэв",
    "FRIDAY": "Баасан",
}

# date.weekday(): 0=Mon .. 6=Sun
WEEKDAY_LABELS = ["Даваа", "Мягмар", "Лхагва", "Пүрэв", "Баасан", "Бямба", "Ням"]


def get_tz(name: str | None):
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        return timezone.utc


def parse_day(value) -> date:
    """YYYY-MM-DD или ISO-8601 datetime -> календарный день.

    Для datetime берётся дата в его собственном смещении:
    2025-03-10T00:00:00+08:00 -> 2025-03-10.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("invalid date")
    s = value.strip()
    try:
        if len(s) == 10:
            return date.fromisoformat(s)
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        return datetime.fromisoformat(s).date()
    except ValueError:
        raise ValueError("invalid date") from None


def parse_iso_day(value: str) -> date:
    """Только YYYY-MM-DD (фильтры в query string)."""
    if not isinstance(value, str) or not _ISO_DAY.fullmatch(value.strip()):
        raise ValueError("invalid date")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError("invalid date") from None


def day_bounds(day: date) -> tuple[date, date]:
    """Полуинтервал [day, day + 1) для фильтров по дню."""
    return day, day + timedelta(days=1)


def today_in(tz_name: str | None, now: datetime | None = None) -> date:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(get_tz(tz_name)).date()


def school_day(value: date | datetime) -> str:
    """День недели для расписания; в выходные показываем пятницу."""
    idx = value.weekday()
    return DAYS[idx] if idx < len(DAYS) else DAYS[-1]


def weekday_label(value: date | datetime | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return DAY_LABELS.get(value, "")
    return WEEKDAY_LABELS[value.weekday()]


def parse_bell_times(pairs: Iterable[Sequence]) -> list[tuple[time, time]]:
    out = []
    for start, end in pairs:
        if isinstance(start, str):
            start = time.fromisoformat(start)
        if isinstance(end, str):
            end = time.fromisoformat(end)
        if end <= start:
            raise ValueError("end must be > start")
        out.append((start, end))
    return out


def current_lesson(now: datetime | time, bells: Sequence[tuple[time, time]]) -> int | None:
    """Номер идущего урока (с 1) по таблице звонков, иначе None."""
    t = now.time() if isinstance(now, datetime) else now
    t = t.replace(tzinfo=None)
    for no, (start, end) in enumerate(bells, start=1):
        if start <= t < end:
            return no
    return None


def lesson_status(lesson_no: int, now: datetime | time, bells: Sequence[tuple[time, time]]) -> str:
    """past | now | future, по аналогии со статусами пар в расписании."""
    if lesson_no < 1 or lesson_no > len(bells):
        return "future"
    t = (now.time() if isinstance(now, datetime) else now).replace(tzinfo=None)
    start, end = bells[lesson_no - 1]
    if t < start:
        return "future"
    if start <= t < end:
        return "now"
    return "past"


def group_by_day(items: Iterable[T], key: Callable[[T], date],
                 tiebreak: Callable[[T], object] | None = None) -> list[tuple[date, list[T]]]:
    """Группирует записи по календарному дню: новые дни первыми."""
    buckets: dict[date, list[T]] = {}
    for it in items:
        buckets.setdefault(key(it), []).append(it)
    out = []
    for day in sorted(buckets, reverse=True):
        rows = buckets[day]
        if tiebreak is not None:
            rows = sorted(rows, key=tiebreak, reverse=True)
        out.append((day, rows))
    return out
