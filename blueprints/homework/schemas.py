from __future__ import annotations
from datetime import date as dt_date
from typing import ClassVar, List, Optional

from pydantic import Field, field_validator

from blueprints.api.schemas import CamelModel, PatchModel, UtcDateTime, non_empty
from schedule_utils import parse_day


def _image_list(v):
    if not isinstance(v, list) or not all(isinstance(x, str) and x.strip() for x in v):
        raise ValueError("images must be an array of non-empty strings")
    return [x.strip() for x in v]


def _legacy_image(v):
    if v is None:
        return None
    if not isinstance(v, str):
        raise ValueError("Invalid image")
    return v.strip() or None


class HomeworkIn(CamelModel):
    title: str = Field(default=None, validate_default=True)
    subject: str = Field(default=None, validate_default=True)
    date: Optional[dt_date] = None
    images: List[str] = Field(default_factory=list)
    image: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v):
        return non_empty(v, "title")

    @field_validator("subject", mode="before")
    @classmethod
    def _subject(cls, v):
        return non_empty(v, "subject")

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v):
        # пусто -> сегодня (подставляет сервис)
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        if not isinstance(v, str):
            raise ValueError("invalid date")
        return parse_day(v)

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        return [] if v is None else _image_list(v)

    @field_validator("image", mode="before")
    @classmethod
    def _image(cls, v):
        return _legacy_image(v)


class HomeworkPatch(PatchModel):
    NULLABLE: ClassVar[tuple[str, ...]] = ("image",)

    title: Optional[str] = None
    subject: Optional[str] = None
    date: Optional[dt_date] = None
    images: Optional[List[str]] = None
    image: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _title(cls, v):
        if v is None:
            return None
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Invalid title")
        return non_empty(v, "title")

    @field_validator("subject", mode="before")
    @classmethod
    def _subject(cls, v):
        if v is None:
            return None
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Invalid subject")
        return non_empty(v, "subject")

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, v):
        if v is None:
            return None
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Invalid date")
        try:
            return parse_day(v)
        except ValueError:
            raise ValueError("Invalid date") from None

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        return None if v is None else _image_list(v)

    @field_validator("image", mode="before")
    @classmethod
    def _image(cls, v):
        return _legacy_image(v)


class HomeworkOut(CamelModel):
    id: int
    subject: str
    title: str
    date: dt_date
    image: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    created_at: UtcDateTime

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, v):
        return v or []
