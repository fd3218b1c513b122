from __future__ import annotations
from datetime import datetime, timezone
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, PlainSerializer, model_validator
from pydantic.alias_generators import to_camel


def _iso_utc(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"

# в БД naive UTC, наружу ISO с Z
UtcDateTime = Annotated[datetime, PlainSerializer(_iso_utc, return_type=str)]


class CamelModel(BaseModel):
    """lessonNumber/createdAt снаружи, snake_case внутри."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PatchModel(CamelModel):
    # поля, которым разрешено явное null
    NULLABLE: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _check_fields(self):
        if not self.model_fields_set:
            raise ValueError("Empty patch")
        for name in self.model_fields_set:
            if name not in self.NULLABLE and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} must not be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


def non_empty(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} required")
    return value.strip()
