from __future__ import annotations
from typing import Annotated, Optional

from pydantic import Field, field_validator

from blueprints.api.schemas import CamelModel, PatchModel, UtcDateTime, non_empty
from models import Weekday

# строго int: true / 1.5 / "3" не принимаем
LessonNumber = Annotated[int, Field(strict=True, ge=1, le=12)]


class SlotIn(CamelModel):
    day: Weekday
    lesson_number: LessonNumber
    subject: str

    @field_validator("subject", mode="before")
    @classmethod
    def _subject(cls, v):
        return non_empty(v, "subject")


class SlotPatch(PatchModel):
    day: Optional[Weekday] = None
    lesson_number: Optional[LessonNumber] = None
    subject: Optional[str] = None

    @field_validator("subject", mode="before")
    @classmethod
    def _subject(cls, v):
        return None if v is None else non_empty(v, "subject")


class SlotOut(CamelModel):
    id: int
    day: Weekday
    lesson_number: int
    subject: str
    created_at: UtcDateTime
