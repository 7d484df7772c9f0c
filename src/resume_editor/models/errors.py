"""Error taxonomy for the resume editor core."""

from __future__ import annotations


class ResumeEditorError(Exception):
    """Base class for all errors raised by the editor core."""

    code = "RESUME_EDITOR_ERROR"


class ValidationError(ResumeEditorError):
    """Raised when a submission carries per-field validation errors.

    Attributes:
        errors: Mapping of field name to error code.
    """

    code = "VALIDATION_ERROR"

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        fields = ", ".join(f"{name}={code}" for name, code in sorted(self.errors.items()))
        super().__init__(f"Invalid fields: {fields}")


class IndexOutOfRangeError(ResumeEditorError, IndexError):
    """Raised when a positional update/remove targets a missing element."""

    code = "INDEX_OUT_OF_RANGE"

    def __init__(self, collection: str, index: int, size: int) -> None:
        self.collection = collection
        self.index = index
        self.size = size
        super().__init__(f"{collection} index {index} out of range (size {size})")


class StorageError(ResumeEditorError):
    """Raised when the durable store cannot be read or written."""

    code = "STORAGE_ERROR"


class DraftFormatError(ResumeEditorError, ValueError):
    """Raised when draft contents are not a well-formed resume aggregate."""

    code = "INVALID_DRAFT_FORMAT"


class AssetConstraintError(ResumeEditorError, ValueError):
    """Raised when an uploaded profile picture is too large or of the wrong type."""

    code = "ASSET_CONSTRAINT"


class ExportError(ResumeEditorError):
    """Raised when capture or page composition fails during export."""

    code = "EXPORT_FAILED"
