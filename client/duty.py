from __future__ import annotations
from datetime import date
from typing import List, Optional, Sequence

from client.api import ClassboardApi
from client.state import ScreenState
from config import DUTY_NAMES_COUNT
from schedule_utils import parse_day

NAMES_ERROR = f"names must be an array of exactly {DUTY_NAMES_COUNT} non-empty strings"


def clean_names(names: Sequence[str]) -> List[str]:
    """Та же проверка, что и на сервере: ровно 5 непустых имён после trim."""
    if len(names) != DUTY_NAMES_COUNT:
        raise ValueError(NAMES_ERROR)
    out = [str(n).strip() for n in names]
    if not all(out):
        raise ValueError(NAMES_ERROR)
    return out


class DutyBoard(ScreenState):
    def __init__(self, api: ClassboardApi) -> None:
        super().__init__()
        self.api = api
        self.items: List[dict] = []
        self.editing_id: Optional[int] = None

    @property
    def editing(self) -> bool:
        return self.editing_id is not None

    def load(self) -> bool:
        items = self._run("loading", self.api.list_duties)
        if items is None:
            return False
        self.items = sorted(items, key=lambda it: it["date"])
        self.loaded = True
        return True

    def today_entry(self, today: date) -> Optional[dict]:
        for it in self.items:
            if parse_day(it["date"]) == today:
                return it
        return None

    def next_upcoming(self, today: date) -> Optional[dict]:
        upcoming = [it for it in self.items if parse_day(it["date"]) > today]
        return min(upcoming, key=lambda it: it["date"], default=None)

    def create(self, day: date, names: Sequence[str], notes: Optional[str] = None) -> Optional[dict]:
        try:
            cleaned = clean_names(names)
        except ValueError as exc:
            self.error = str(exc)
            return None
        created = self._run("submitting", lambda: self.api.create_duty(day, cleaned, notes))
        if created is None:
            return None
        self.items = sorted([*self.items, created], key=lambda it: it["date"])
        return created

    def update(self, duty_id: int, **fields) -> Optional[dict]:
        if "names" in fields:
            try:
                fields["names"] = clean_names(fields["names"])
            except ValueError as exc:
                self.error = str(exc)
                return None
        updated = self._run("submitting", lambda: self.api.patch_duty(duty_id, **fields))
        if updated is None:
            return None
        self.items = sorted(
            [updated if it["id"] == duty_id else it for it in self.items], key=lambda it: it["date"])
        self.editing_id = None
        return updated

    def delete(self, duty_id: int) -> bool:
        if self._run("submitting", lambda: self.api.delete_duty(duty_id)) is None:
            return False
        self.items = [it for it in self.items if it["id"] != duty_id]
        return True
