"""Persistence adapter: auto-mirror of the live session and draft files.

Two independent facilities share the durable key-value store:

- The **auto-mirror** writes every snapshot under :data:`MIRROR_KEY` with
  the profile picture stripped, keeping the record small. A failed write
  is logged and the session carries on in memory.
- **Drafts** are user-initiated full copies (picture included) saved under
  ``resume_draft_<ISO-8601 timestamp>`` and optionally as a JSON file.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError as SchemaError

from resume_editor.models.errors import DraftFormatError, StorageError
from resume_editor.models.resume import ResumeData
from resume_editor.services.document import ResumeDocument
from resume_editor.services.store import get_item, list_keys, set_item
from resume_editor.utils.export import sanitize_filename

logger = logging.getLogger(__name__)

__all__ = [
    "DRAFT_PREFIX",
    "MIRROR_KEY",
    "AutoMirror",
    "SavedDraft",
    "draft_name",
    "get_draft_dir",
    "list_drafts",
    "load_draft",
    "load_draft_file",
    "load_mirror",
    "load_stored_draft",
    "open_session",
    "parse_draft",
    "save_draft",
    "to_draft_json",
    "to_mirror_json",
]

MIRROR_KEY = "resumeData"
DRAFT_PREFIX = "resume_draft_"

_DRAFT_KEYS = ("personalInfo", "experiences", "education", "skills")


@dataclass(frozen=True)
class SavedDraft:
    name: str
    path: Path | None = None


# -----------------------------------------------------------------------
# Serialization


def to_mirror_json(data: ResumeData) -> str:
    """Serialize *data* for the auto-mirror, always with a null profile picture."""
    payload = data.to_json_dict()
    payload["personalInfo"]["profilePicture"] = None
    return json.dumps(payload, ensure_ascii=False)


def to_draft_json(data: ResumeData) -> str:
    """Serialize the full aggregate, profile picture included."""
    return json.dumps(data.to_json_dict(), ensure_ascii=False, indent=2)


def parse_draft(contents: str | bytes) -> ResumeData:
    """Parse draft contents into a ``ResumeData`` aggregate.

    The payload must be a JSON object carrying all four top-level sections
    with values of the right shape.

    Raises:
        DraftFormatError: If *contents* is not valid JSON or not a resume.
    """
    try:
        payload: Any = json.loads(contents)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DraftFormatError(f"Draft is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DraftFormatError("Draft must be a JSON object.")
    missing = [key for key in _DRAFT_KEYS if key not in payload]
    if missing:
        raise DraftFormatError(f"Draft is missing sections: {', '.join(missing)}")

    try:
        return ResumeData.model_validate(payload)
    except SchemaError as exc:
        raise DraftFormatError(f"Draft does not match the resume shape: {exc}") from exc


# -----------------------------------------------------------------------
# Auto-mirror


class AutoMirror:
    """Mirror every snapshot of a :class:`ResumeDocument` into the durable store.

    Lifecycle: :meth:`attach` at session start, :meth:`detach` at teardown
    (which also flushes the final snapshot).
    """

    def __init__(self, key: str = MIRROR_KEY) -> None:
        self.key = key
        self._document: ResumeDocument | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def attached(self) -> bool:
        return self._document is not None

    def attach(self, document: ResumeDocument) -> None:
        if self._document is not None:
            self.detach()
        self._document = document
        self._unsubscribe = document.subscribe(self.mirror)
        self.mirror(document.snapshot)

    def detach(self) -> None:
        if self._document is None:
            return
        if self._unsubscribe is not None:
            self._unsubscribe()
        self.mirror(self._document.snapshot)
        self._document = None
        self._unsubscribe = None

    def mirror(self, data: ResumeData) -> bool:
        """Write *data* to the store. Returns False (and logs) on failure."""
        try:
            set_item(self.key, to_mirror_json(data))
        except (StorageError, TypeError, ValueError):
            logger.exception("Auto-mirror write to %r failed; continuing in memory", self.key)
            return False
        return True


def load_mirror(key: str = MIRROR_KEY) -> ResumeData | None:
    """Return the mirrored aggregate, or None if absent or unreadable."""
    try:
        raw = get_item(key)
    except StorageError:
        logger.exception("Could not read the mirrored resume")
        return None
    if raw is None:
        return None
    try:
        return parse_draft(raw)
    except DraftFormatError as exc:
        logger.warning("Ignoring unreadable mirrored resume: %s", exc)
        return None


def open_session(key: str = MIRROR_KEY) -> tuple[ResumeDocument, AutoMirror]:
    """Hydrate a document from the mirror and attach a new auto-mirror to it."""
    document = ResumeDocument(load_mirror(key))
    mirror = AutoMirror(key)
    mirror.attach(document)
    return document, mirror


# -----------------------------------------------------------------------
# Drafts


def draft_name(now: datetime | None = None) -> str:
    """Return ``resume_draft_<timestamp>`` with a UTC ISO-8601 timestamp."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    stamp = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return f"{DRAFT_PREFIX}{stamp}"


def get_draft_dir() -> Path | None:
    """Return the directory configured for draft files via RESUME_DRAFT_DIR, if any."""
    env_dir = os.getenv("RESUME_DRAFT_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return None


def save_draft(
    data: ResumeData,
    directory: Path | None = None,
    *,
    now: datetime | None = None,
) -> SavedDraft:
    """Save the full aggregate as a timestamped draft.

    The draft is always written to the durable store. When *directory* is
    given (or RESUME_DRAFT_DIR is set) it is also written as a JSON file.

    Raises:
        StorageError: If the store write fails.
        OSError: If the draft file cannot be written.
    """
    name = draft_name(now)
    contents = to_draft_json(data)
    set_item(name, contents)

    target_dir = directory if directory is not None else get_draft_dir()
    path = None
    if target_dir is not None:
        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{sanitize_filename(name, default=DRAFT_PREFIX.rstrip('_'))}.json"
        path.write_text(contents, encoding="utf-8")

    logger.info("Saved draft %s", name)
    return SavedDraft(name=name, path=path)


def list_drafts() -> list[str]:
    """Return the names of drafts saved to the store, oldest first."""
    return list_keys(DRAFT_PREFIX)


def load_stored_draft(name: str) -> ResumeData | None:
    """Return the draft saved under *name*, or None if there is none.

    Raises:
        DraftFormatError: If the stored record is not a resume.
    """
    raw = get_item(name)
    if raw is None:
        return None
    return parse_draft(raw)


def load_draft(document: ResumeDocument, contents: str | bytes) -> ResumeData:
    """Replace the aggregate held by *document* with the parsed draft.

    Raises:
        DraftFormatError: If *contents* is malformed; *document* is unchanged.
    """
    data = parse_draft(contents)
    logger.info("Loaded draft into the session")
    return document.replace(data)


async def load_draft_file(document: ResumeDocument, path: Path) -> ResumeData:
    """Read a draft file without blocking the event loop, then load it."""
    contents = await asyncio.to_thread(Path(path).read_bytes)
    return load_draft(document, contents)
