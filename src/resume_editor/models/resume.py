"""Resume entities and the ``ResumeData`` aggregate.

Every model is frozen: an edit always produces a new instance, so a
snapshot handed to a renderer or exporter can never change underneath it.
Field names follow Python conventions; the JSON form uses the camelCase
names of the draft file format (``fullName``, ``jobTitle``, ...).
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "DEFAULT_SKILL_LEVEL",
    "MAX_SKILL_LEVEL",
    "MIN_SKILL_LEVEL",
    "Education",
    "Experience",
    "PersonalInfo",
    "ResumeData",
    "Skill",
    "clamp_skill_level",
]

MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 5
DEFAULT_SKILL_LEVEL = 3


def clamp_skill_level(value: Any) -> int:
    """Normalize *value* into an integer skill level in ``[1, 5]``.

    Floats and numeric strings are truncated toward zero (``"4.9"`` -> 4)
    before clamping. Anything that cannot be read as a number falls back
    to :data:`DEFAULT_SKILL_LEVEL`; infinities clamp to the nearest bound.
    """
    if isinstance(value, bool):
        value = int(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SKILL_LEVEL
    if math.isnan(number):
        return DEFAULT_SKILL_LEVEL
    if math.isinf(number):
        return MAX_SKILL_LEVEL if number > 0 else MIN_SKILL_LEVEL
    level = int(number)
    return max(MIN_SKILL_LEVEL, min(MAX_SKILL_LEVEL, level))


class _Entity(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def with_changes(self, **changes: Any):
        """Return a copy with *changes* applied, re-running validation."""
        return self.model_validate({**self.model_dump(), **changes})


class PersonalInfo(_Entity):
    """Contact details and summary; a singleton owned by the aggregate."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    profile_picture: str | None = None
    title: str = ""
    summary: str = ""

    @field_validator("full_name", "email", "phone", "address", "title", "summary", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class _DatedEntry(_Entity):
    id: str | None = None
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""

    @model_validator(mode="after")
    def clear_end_date_when_current(self):
        # Checking "current" drops the end date, in any form pydantic coerces to True.
        if self.current and self.end_date:
            object.__setattr__(self, "end_date", "")
        return self

    @field_validator("location", "start_date", "end_date", "description", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class Experience(_DatedEntry):
    """A job held; sequence order is display order."""

    company: str = ""
    job_title: str = ""

    @field_validator("company", "job_title", mode="before")
    @classmethod
    def none_as_empty_title(cls, value: Any) -> Any:
        return "" if value is None else value


class Education(_DatedEntry):
    """A course of study; same date rules as :class:`Experience`."""

    institution: str = ""
    degree: str = ""
    field_of_study: str = ""

    @field_validator("institution", "degree", "field_of_study", mode="before")
    @classmethod
    def none_as_empty_title(cls, value: Any) -> Any:
        return "" if value is None else value


class Skill(_Entity):
    """A named skill with a 1-5 proficiency level."""

    id: str | None = None
    name: str = ""
    level: int = DEFAULT_SKILL_LEVEL

    @field_validator("level", mode="before")
    @classmethod
    def clamp_level(cls, value: Any) -> int:
        return clamp_skill_level(value)


class ResumeData(_Entity):
    """The aggregate root: one immutable snapshot of the whole resume."""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experiences: tuple[Experience, ...] = ()
    education: tuple[Education, ...] = ()
    skills: tuple[Skill, ...] = ()

    def to_json_dict(self) -> dict[str, Any]:
        """Return the camelCase JSON-compatible form of the aggregate."""
        return self.model_dump(mode="json", by_alias=True)
