from __future__ import annotations
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import requests
from requests import RequestException

from client.settings import settings


class ApiError(Exception):
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


# snake_case полей клиента -> имена в JSON API
_WIRE_NAMES = {"lesson_number": "lessonNumber"}


def _wire(fields: Dict[str, Any]) -> Dict[str, Any]:
    out = {}
    for key, value in fields.items():
        if isinstance(value, date):
            value = value.isoformat()
        out[_WIRE_NAMES.get(key, key)] = value
    return out


class ClassboardApi:
    """HTTP-клиент к /api/timetable, /api/hwork, /api/duty."""

    def __init__(self, base_url: str, *, session=None, timeout: float = 15) -> None:
        if not base_url:
            raise ApiError("Missing CLASSBOARD_API_URL in environment")
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, session=None) -> "ClassboardApi":
        return cls(settings.api_url, session=session, timeout=settings.timeout)

    # ---------- timetable ----------
    def list_timetable(self) -> List[dict]:
        return self._request("GET", "/timetable")

    def upsert_slot(self, day: str, lesson_number: int, subject: str) -> dict:
        return self._request("POST", "/timetable", json=_wire(
            {"day": day, "lesson_number": lesson_number, "subject": subject}))

    def patch_slot(self, slot_id: int, **fields) -> dict:
        return self._request("PATCH", f"/timetable/{slot_id}", json=_wire(fields))

    def delete_slot(self, slot_id: int) -> dict:
        return self._request("DELETE", f"/timetable/{slot_id}")

    # ---------- homework ----------
    def list_homework(self, subject: Optional[str] = None, day: Optional[date] = None) -> List[dict]:
        params = {}
        if subject:
            params["subject"] = subject
        if day is not None:
            params["date"] = day.isoformat()
        return self._request("GET", "/hwork", params=params or None)

    def get_homework(self, hw_id: int) -> dict:
        return self._request("GET", f"/hwork/{hw_id}")

    def create_homework(self, *, subject: str, title: str, day: Optional[date] = None,
                        images: Iterable[str] = ()) -> dict:
        payload: Dict[str, Any] = {"subject": subject, "title": title, "images": list(images)}
        if day is not None:
            payload["date"] = day
        return self._request("POST", "/hwork", json=_wire(payload))

    def patch_homework(self, hw_id: int, **fields) -> dict:
        return self._request("PATCH", f"/hwork/{hw_id}", json=_wire(fields))

    def delete_homework(self, hw_id: int) -> dict:
        return self._request("DELETE", f"/hwork/{hw_id}")

    # ---------- duty ----------
    def list_duties(self) -> List[dict]:
        return self._request("GET", "/duty")

    def duty_today(self) -> dict:
        return self._request("GET", "/duty/today")

    def create_duty(self, day: date, names: List[str], notes: Optional[str] = None) -> dict:
        payload: Dict[str, Any] = {"date": day, "names": list(names)}
        if notes is not None:
            payload["notes"] = notes
        return self._request("POST", "/duty", json=_wire(payload))

    def patch_duty(self, duty_id: int, **fields) -> dict:
        return self._request("PATCH", f"/duty/{duty_id}", json=_wire(fields))

    def delete_duty(self, duty_id: int) -> dict:
        return self._request("DELETE", f"/duty/{duty_id}")

    def _request(self, method: str, path: str, *, json: Any = None, params: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            res = self.session.request(method, url, json=json, params=params, timeout=self.timeout)
        except RequestException as exc:
            raise ApiError("API_UNAVAILABLE") from exc
        try:
            data = res.json()
        except ValueError:
            data = None

        if res.status_code >= 400:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(str(message or res.text or f"Request failed: {res.status_code}"), res.status_code)

        return data
