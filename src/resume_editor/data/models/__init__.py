"""ORM models package for database tables.

This package provides SQLAlchemy ORM models representing database tables:
- StoreEntry: Key-value rows holding the auto-mirror record and saved drafts

All models inherit from the shared Base declarative class defined in data.db.
"""

from resume_editor.data.db import Base
from resume_editor.data.models.store_entry import StoreEntry

__all__ = ["Base", "StoreEntry"]
