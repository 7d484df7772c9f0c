"""Data models and type definitions"""

from resume_editor.models.errors import (
    AssetConstraintError,
    DraftFormatError,
    ExportError,
    IndexOutOfRangeError,
    ResumeEditorError,
    StorageError,
    ValidationError,
)
from resume_editor.models.resume import (
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
    clamp_skill_level,
)

__all__ = [
    "AssetConstraintError",
    "DraftFormatError",
    "Education",
    "Experience",
    "ExportError",
    "IndexOutOfRangeError",
    "PersonalInfo",
    "ResumeData",
    "ResumeEditorError",
    "Skill",
    "StorageError",
    "ValidationError",
    "clamp_skill_level",
]
