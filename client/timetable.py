from __future__ import annotations
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from client.api import ClassboardApi
from client.state import ScreenState
from schedule_utils import (
    DAYS, DEFAULT_BELL_TIMES, current_lesson, parse_bell_times, school_day,
)

MIN_LESSONS = 7


class TimetableBoard(ScreenState):
    """Сетка недели: админ правит ячейку, ученик только смотрит."""

    def __init__(self, api: ClassboardApi, max_lessons: Optional[int] = None,
                 bells: Sequence = DEFAULT_BELL_TIMES) -> None:
        super().__init__()
        self.api = api
        self.max_lessons = max_lessons
        self.bells = parse_bell_times(bells)
        self.items: List[dict] = []
        self.active_day = DAYS[0]
        self.edit_key: Optional[Tuple[str, int]] = None
        self.edit_value = ""

    @property
    def editing(self) -> bool:
        return self.edit_key is not None

    @property
    def grid(self) -> Dict[Tuple[str, int], dict]:
        return {(it["day"], it["lessonNumber"]): it for it in self.items}

    @property
    def lesson_count(self) -> int:
        if self.max_lessons and self.max_lessons > 0:
            return self.max_lessons
        return max([MIN_LESSONS, *(it["lessonNumber"] for it in self.items)])

    def load(self) -> bool:
        items = self._run("loading", self.api.list_timetable)
        if items is None:
            return False
        self.items = items
        self.loaded = True
        return True

    def day_rows(self, day: Optional[str] = None) -> List[dict]:
        day = day or self.active_day
        grid = self.grid
        return [{"lessonNumber": n, "subject": grid.get((day, n), {}).get("subject", "")}
                for n in range(1, self.lesson_count + 1)]

    def start_edit(self, day: str, lesson_number: int) -> None:
        self.edit_key = (day, lesson_number)
        self.edit_value = self.grid.get(self.edit_key, {}).get("subject", "")

    def cancel_edit(self) -> None:
        self.edit_key = None
        self.edit_value = ""

    def save_cell(self) -> bool:
        if self.edit_key is None:
            return False
        subject = self.edit_value.strip()
        if not subject:
            return False
        day, lesson_number = self.edit_key
        saved = self._run("submitting", lambda: self.api.upsert_slot(day, lesson_number, subject))
        if saved is None:
            return False  # черновик остаётся в edit_value
        self._put(saved)
        self.cancel_edit()
        return True

    def delete_cell(self, day: str, lesson_number: int) -> bool:
        item = self.grid.get((day, lesson_number))
        if item is None:
            return False
        if self._run("submitting", lambda: self.api.delete_slot(item["id"])) is None:
            return False
        self.items = [it for it in self.items if it["id"] != item["id"]]
        return True

    def _put(self, saved: dict) -> None:
        key = (saved["day"], saved["lessonNumber"])
        for idx, it in enumerate(self.items):
            if (it["day"], it["lessonNumber"]) == key:
                self.items[idx] = saved
                return
        self.items.append(saved)

    # ---------- подсветка текущего урока ----------
    def today_day(self, now: datetime) -> str:
        return school_day(now)

    def current_lesson(self, now: datetime) -> Optional[int]:
        if now.weekday() >= len(DAYS):
            return None
        found = current_lesson(now, self.bells)
        if found is None or found > self.lesson_count:
            return None
        return found
