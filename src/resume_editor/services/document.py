"""Document model: snapshot operations and the live editing session.

The module-level functions are pure: each takes a ``ResumeData`` snapshot
and returns a new one. :class:`ResumeDocument` owns the canonical snapshot
for a session, gates submissions through the validation engine and
notifies subscribers (renderer, auto-mirror) after every change.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar
from uuid import uuid4

from resume_editor.models.errors import IndexOutOfRangeError
from resume_editor.models.resume import (
    DEFAULT_SKILL_LEVEL,
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
)
from resume_editor.services.validation import (
    FieldErrors,
    validate_education,
    validate_experience,
    validate_personal_info,
    validate_skill,
)

logger = logging.getLogger(__name__)

__all__ = [
    "ResumeDocument",
    "Subscriber",
    "add_education",
    "add_experience",
    "remove_education",
    "remove_experience",
    "set_personal_info",
    "set_skills",
    "update_education",
    "update_experience",
]

Subscriber = Callable[[ResumeData], None]

_T = TypeVar("_T")


# -----------------------------------------------------------------------
# Pure snapshot operations


def _check_index(collection: str, items: tuple, index: int) -> None:
    # Negative indices are rejected rather than counted from the end.
    if not 0 <= index < len(items):
        raise IndexOutOfRangeError(collection, index, len(items))


def _replaced(items: tuple[_T, ...], index: int, item: _T) -> tuple[_T, ...]:
    return items[:index] + (item,) + items[index + 1 :]


def _removed(items: tuple[_T, ...], index: int) -> tuple[_T, ...]:
    return items[:index] + items[index + 1 :]


def set_personal_info(data: ResumeData, info: PersonalInfo) -> ResumeData:
    return data.model_copy(update={"personal_info": info})


def add_experience(data: ResumeData, entry: Experience) -> ResumeData:
    return data.model_copy(update={"experiences": (*data.experiences, entry)})


def update_experience(data: ResumeData, index: int, entry: Experience) -> ResumeData:
    """Replace the experience at *index*.

    Raises:
        IndexOutOfRangeError: If *index* does not address an existing entry.
    """
    _check_index("experiences", data.experiences, index)
    return data.model_copy(update={"experiences": _replaced(data.experiences, index, entry)})


def remove_experience(data: ResumeData, index: int) -> ResumeData:
    """Delete the experience at *index*.

    Raises:
        IndexOutOfRangeError: If *index* does not address an existing entry.
    """
    _check_index("experiences", data.experiences, index)
    return data.model_copy(update={"experiences": _removed(data.experiences, index)})


def add_education(data: ResumeData, entry: Education) -> ResumeData:
    return data.model_copy(update={"education": (*data.education, entry)})


def update_education(data: ResumeData, index: int, entry: Education) -> ResumeData:
    _check_index("education", data.education, index)
    return data.model_copy(update={"education": _replaced(data.education, index, entry)})


def remove_education(data: ResumeData, index: int) -> ResumeData:
    _check_index("education", data.education, index)
    return data.model_copy(update={"education": _removed(data.education, index)})


def set_skills(data: ResumeData, skills: Sequence[Skill]) -> ResumeData:
    return data.model_copy(update={"skills": tuple(skills)})


# -----------------------------------------------------------------------
# Live session


class ResumeDocument:
    """Owner of the canonical resume snapshot for one editing session.

    Mutations run to completion synchronously. After each one the new
    snapshot is pushed to every subscriber in subscription order.
    """

    def __init__(self, initial: ResumeData | None = None) -> None:
        self._snapshot = initial if initial is not None else ResumeData()
        self._subscribers: list[Subscriber] = []

    @property
    def snapshot(self) -> ResumeData:
        """The current immutable aggregate."""
        return self._snapshot

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for change notifications.

        Returns:
            A function that removes the subscription. Calling it twice is harmless.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # -- commit ------------------------------------------------------------

    def _commit(self, data: ResumeData) -> ResumeData:
        self._snapshot = data
        for callback in list(self._subscribers):
            try:
                callback(data)
            except Exception:
                logger.exception("Resume subscriber %r failed", callback)
        return data

    def _apply(self, operation: Callable[[], ResumeData]) -> ResumeData | None:
        try:
            data = operation()
        except IndexOutOfRangeError as exc:
            logger.warning("Edit rejected (%s): %s", exc.code, exc)
            return None
        return self._commit(data)

    # -- direct mutations ------------------------------------------------------

    def replace(self, data: ResumeData) -> ResumeData:
        """Swap in a whole new aggregate (draft load, hydration)."""
        return self._commit(data)

    def set_personal_info(self, info: PersonalInfo) -> ResumeData:
        return self._commit(set_personal_info(self._snapshot, info))

    def set_profile_picture(self, data_uri: str | None) -> ResumeData:
        info = self._snapshot.personal_info.with_changes(profile_picture=data_uri)
        return self.set_personal_info(info)

    def clear_profile_picture(self) -> ResumeData:
        return self.set_profile_picture(None)

    def add_experience(self, entry: Experience) -> ResumeData:
        return self._commit(add_experience(self._snapshot, entry))

    def update_experience(self, index: int, entry: Experience) -> ResumeData | None:
        """Replace an experience; returns None if *index* is stale."""
        return self._apply(lambda: update_experience(self._snapshot, index, entry))

    def remove_experience(self, index: int) -> ResumeData | None:
        return self._apply(lambda: remove_experience(self._snapshot, index))

    def add_education(self, entry: Education) -> ResumeData:
        return self._commit(add_education(self._snapshot, entry))

    def update_education(self, index: int, entry: Education) -> ResumeData | None:
        return self._apply(lambda: update_education(self._snapshot, index, entry))

    def remove_education(self, index: int) -> ResumeData | None:
        return self._apply(lambda: remove_education(self._snapshot, index))

    def set_skills(self, skills: Sequence[Skill]) -> ResumeData:
        return self._commit(set_skills(self._snapshot, skills))

    def remove_skill(self, index: int) -> ResumeData | None:
        skills = self._snapshot.skills
        if not 0 <= index < len(skills):
            logger.warning(
                "Edit rejected (%s): skills index %d out of range",
                IndexOutOfRangeError.code,
                index,
            )
            return None
        return self.set_skills(_removed(skills, index))

    # -- validated submissions ----------------------------------------------

    def submit_personal_info(self, info: PersonalInfo) -> FieldErrors:
        """Validate *info* and commit it when valid.

        Returns:
            The field errors; empty when the edit was committed.
        """
        errors = validate_personal_info(info)
        if not errors:
            self.set_personal_info(info)
        return errors

    def submit_experience(self, entry: Experience, index: int | None = None) -> FieldErrors:
        """Validate *entry*, then append it (or replace position *index*)."""
        errors = validate_experience(entry)
        if errors:
            return errors
        if index is None:
            self.add_experience(entry)
        elif self.update_experience(index, entry) is None:
            return {"index": IndexOutOfRangeError.code}
        return {}

    def submit_education(self, entry: Education, index: int | None = None) -> FieldErrors:
        errors = validate_education(entry)
        if errors:
            return errors
        if index is None:
            self.add_education(entry)
        elif self.update_education(index, entry) is None:
            return {"index": IndexOutOfRangeError.code}
        return {}

    def submit_skill(self, name: str, level: object = DEFAULT_SKILL_LEVEL) -> FieldErrors:
        """Append a skill under a fresh id; out-of-range levels are clamped."""
        skill = Skill(id=uuid4().hex, name=name.strip(), level=level)
        errors = validate_skill(skill)
        if not errors:
            self.set_skills([*self._snapshot.skills, skill])
        return errors
