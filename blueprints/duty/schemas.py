from __future__ import annotations
from datetime import date as dt_date
from typing import ClassVar, List, Optional

from pydantic import Field, field_validator

from blueprints.api.schemas import CamelModel, PatchModel, UtcDateTime
from config import DUTY_NAMES_COUNT
from schedule_utils import parse_day

NAMES_ERROR = f"names must be an array of exactly {DUTY_NAMES_COUNT} non-empty strings"


def check_names(v):
    if (not isinstance(v, list) or len(v) != DUTY_NAMES_COUNT
            or not all(isinstance(x, str) and x.strip() for x in v)):
        raise ValueError(NAMES_ERROR)
    return [x.strip() for x in v]


def check_day(v):
    if not isinstance(v, str) or not v.strip():
        raise ValueError("date is required (YYYY-MM-DD)")
    try:
        return parse_day(v)
    except ValueError:
        raise ValueError("Invalid date") from None


def clean_notes(v):
    return v.strip() if isinstance(v, str) and v.strip() else None


class DutyIn(CamelModel):
    # без даты -> своё сообщение, а не "Field required"
    date: dt_date = Field(default=None, validate_default=True)
    names: List[str]
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v):
        return check_day(v)

    @field_validator("names", mode="before")
    @classmethod
    def _names(cls, v):
        return check_names(v)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, v):
        return clean_notes(v)


class DutyPatch(PatchModel):
    NULLABLE: ClassVar[tuple[str, ...]] = ("notes",)

    date: Optional[dt_date] = None
    names: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v):
        return None if v is None else check_day(v)

    @field_validator("names", mode="before")
    @classmethod
    def _names(cls, v):
        return None if v is None else check_names(v)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, v):
        return clean_notes(v)


class DutyOut(CamelModel):
    id: int
    date: dt_date
    names: List[str]
    notes: Optional[str] = None
    created_at: UtcDateTime
    updated_at: UtcDateTime
