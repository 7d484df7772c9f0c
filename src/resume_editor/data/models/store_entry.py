"""StoreEntry model: one row per key of the durable key-value store.

The auto-mirror record and every saved draft live here as JSON text.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from resume_editor.data.db import Base


class StoreEntry(Base):
    """A key-value pair in the durable store.

    Attributes:
        key: Unique key (e.g. ``resumeData`` or ``resume_draft_<timestamp>``).
        value: Serialized JSON payload.
        updated_at: UTC timestamp of the last write.
    """

    __tablename__ = "StoreEntry"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<StoreEntry(key={self.key!r}, size={len(self.value)})>"
