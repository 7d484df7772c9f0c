"""Durable key-value store service.

A thin get/set/remove layer over the ``StoreEntry`` table. Writes are
upserts, so the last writer wins. Database failures surface as
:class:`StorageError`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from resume_editor.data.db import get_session
from resume_editor.data.models import StoreEntry
from resume_editor.models.errors import StorageError

logger = logging.getLogger(__name__)

__all__ = [
    "get_item",
    "list_keys",
    "remove_item",
    "set_item",
]


def get_item(key: str) -> str | None:
    """Return the value stored under *key*, or None if absent."""
    try:
        with get_session() as session:
            entry = session.get(StoreEntry, key)
            return entry.value if entry is not None else None
    except SQLAlchemyError as exc:
        logger.debug("Store read for %r failed", key, exc_info=True)
        raise StorageError(f"Failed to read {key!r}: {exc}") from exc


def set_item(key: str, value: str) -> None:
    """Insert or overwrite the value stored under *key*."""
    try:
        with get_session() as session:
            entry = session.get(StoreEntry, key)
            if entry is None:
                session.add(StoreEntry(key=key, value=value))
            else:
                entry.value = value
    except SQLAlchemyError as exc:
        logger.debug("Store write for %r failed", key, exc_info=True)
        raise StorageError(f"Failed to write {key!r}: {exc}") from exc


def remove_item(key: str) -> bool:
    """Delete *key*. Returns True if something was removed."""
    try:
        with get_session() as session:
            entry = session.get(StoreEntry, key)
            if entry is None:
                return False
            session.delete(entry)
            return True
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to remove {key!r}: {exc}") from exc


def list_keys(prefix: str = "") -> list[str]:
    """Return the stored keys starting with *prefix*, sorted."""
    try:
        with get_session() as session:
            query = session.query(StoreEntry.key)
            if prefix:
                query = query.filter(StoreEntry.key.startswith(prefix, autoescape=True))
            return sorted(row.key for row in query.all())
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to list keys: {exc}") from exc
