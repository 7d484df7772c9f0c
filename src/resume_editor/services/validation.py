"""Field validation for resume entities.

Each ``validate_*`` function inspects a single entity and returns a mapping
of field name to error code. An empty mapping means the entity is valid.
Rules are evaluated independently, so one bad field never hides another.
Nothing here performs I/O or modifies its argument.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from resume_editor.models.errors import ValidationError
from resume_editor.models.resume import (
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
    clamp_skill_level,
)

__all__ = [
    "INVALID_EMAIL",
    "MISSING_FIELD",
    "FieldErrors",
    "clamp_skill_level",
    "ensure_valid",
    "is_valid_email",
    "validate_education",
    "validate_experience",
    "validate_personal_info",
    "validate_resume",
    "validate_skill",
    "validate_skills",
]

MISSING_FIELD = "MISSING_FIELD"
INVALID_EMAIL = "INVALID_EMAIL"

FieldErrors = dict[str, str]

_EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def _require(errors: FieldErrors, **fields: str | None) -> None:
    for name, value in fields.items():
        if _is_blank(value):
            errors[name] = MISSING_FIELD


def is_valid_email(value: str) -> bool:
    """Return True if *value* looks like ``local@domain.tld``."""
    return _EMAIL_PATTERN.search(value) is not None


def validate_personal_info(info: PersonalInfo) -> FieldErrors:
    """Full name and email are mandatory; a non-empty email must be well formed."""
    errors: FieldErrors = {}
    _require(errors, full_name=info.full_name, email=info.email)
    if not _is_blank(info.email) and not is_valid_email(info.email):
        errors["email"] = INVALID_EMAIL
    return errors


def _validate_dates(errors: FieldErrors, entry: Experience | Education) -> None:
    _require(errors, start_date=entry.start_date)
    if not entry.current:
        _require(errors, end_date=entry.end_date)


def validate_experience(entry: Experience) -> FieldErrors:
    errors: FieldErrors = {}
    _require(errors, company=entry.company, job_title=entry.job_title)
    _validate_dates(errors, entry)
    return errors


def validate_education(entry: Education) -> FieldErrors:
    errors: FieldErrors = {}
    _require(errors, institution=entry.institution, degree=entry.degree)
    _validate_dates(errors, entry)
    return errors


def validate_skill(skill: Skill) -> FieldErrors:
    """Only the name can fail; the level is clamped when the skill is built."""
    errors: FieldErrors = {}
    _require(errors, name=skill.name)
    return errors


def validate_skills(skills: Sequence[Skill]) -> FieldErrors:
    """Validate a whole skill list, keying errors as ``"<index>.<field>"``."""
    errors: FieldErrors = {}
    for index, skill in enumerate(skills):
        for field, code in validate_skill(skill).items():
            errors[f"{index}.{field}"] = code
    return errors


def _prefixed(errors: FieldErrors, prefix: str, found: FieldErrors) -> None:
    for field, code in found.items():
        errors[f"{prefix}.{field}"] = code


def validate_resume(data: ResumeData) -> FieldErrors:
    """Validate every entity in *data*.

    Keys carry the section and position, e.g. ``"experiences.0.company"``
    or ``"personal_info.email"``.
    """
    errors: FieldErrors = {}
    _prefixed(errors, "personal_info", validate_personal_info(data.personal_info))
    for index, entry in enumerate(data.experiences):
        _prefixed(errors, f"experiences.{index}", validate_experience(entry))
    for index, entry in enumerate(data.education):
        _prefixed(errors, f"education.{index}", validate_education(entry))
    _prefixed(errors, "skills", validate_skills(data.skills))
    return errors


def ensure_valid(data: ResumeData) -> ResumeData:
    """Return *data* unchanged if it passes :func:`validate_resume`.

    Raises:
        ValidationError: Carrying every failing field.
    """
    errors = validate_resume(data)
    if errors:
        raise ValidationError(errors)
    return data
