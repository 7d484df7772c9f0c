"""Profile picture upload: type and size checks plus data URI handling."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from resume_editor.models.errors import AssetConstraintError

if TYPE_CHECKING:
    from resume_editor.services.document import ResumeDocument

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_PROFILE_PICTURE_BYTES",
    "PictureInfo",
    "attach_profile_picture",
    "decode_data_uri",
    "load_profile_picture",
    "to_data_uri",
    "validate_profile_picture",
]

MAX_PROFILE_PICTURE_BYTES = 2 * 1024 * 1024

IMAGE_TYPE_TO_MIME = {
    "png": "image/png",
    "jpeg": "image/jpeg",
}
IMAGE_TYPE_TO_EXTENSION = {
    "png": ".png",
    "jpeg": ".jpg",
}
CONTENT_TYPE_ALIASES = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
}
EXTENSION_TO_MIME = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


@dataclass(frozen=True)
class PictureInfo:
    image_type: str
    mime_type: str
    extension: str


def _normalize_content_type(content_type: str | None) -> str | None:
    if content_type is None:
        return None
    normalized = content_type.strip().lower()
    return CONTENT_TYPE_ALIASES.get(normalized, normalized)


def _detect_image_type(data: bytes) -> str | None:
    if len(data) >= 8 and data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if len(data) >= 3 and data[:3] == b"\xff\xd8\xff":
        return "jpeg"
    return None


def validate_profile_picture(
    data: bytes,
    *,
    content_type: str | None = None,
    filename: str | None = None,
) -> PictureInfo:
    """Check that *data* is a PNG or JPEG of at most 2 MiB.

    Raises:
        AssetConstraintError: With a message suitable for showing to the user.
    """
    if not data:
        raise AssetConstraintError("Profile picture file is empty.")
    if len(data) > MAX_PROFILE_PICTURE_BYTES:
        raise AssetConstraintError("File size exceeds 2MB limit.")

    image_type = _detect_image_type(data)
    if image_type is None:
        raise AssetConstraintError("Only JPG and PNG files are allowed.")

    expected_mime = IMAGE_TYPE_TO_MIME[image_type]
    normalized_type = _normalize_content_type(content_type)
    suffix = Path(filename).suffix.lower() if filename else ""
    if normalized_type is None and suffix:
        normalized_type = EXTENSION_TO_MIME.get(suffix)
        if normalized_type is None:
            raise AssetConstraintError("Only JPG and PNG files are allowed.")
    if normalized_type and normalized_type not in IMAGE_TYPE_TO_MIME.values():
        raise AssetConstraintError("Only JPG and PNG files are allowed.")
    if normalized_type and normalized_type != expected_mime:
        raise AssetConstraintError("File type does not match image data.")

    return PictureInfo(
        image_type=image_type,
        mime_type=expected_mime,
        extension=IMAGE_TYPE_TO_EXTENSION[image_type],
    )


def to_data_uri(data: bytes, mime_type: str) -> str:
    """Encode *data* as a ``data:<mime>;base64,...`` URI."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its MIME type and raw bytes.

    Raises:
        ValueError: If *uri* is not a base64 data URI.
    """
    match = _DATA_URI.match(uri)
    if match is None:
        raise ValueError("Not a base64 data URI.")
    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc
    return match.group("mime").lower(), data


async def load_profile_picture(path: Path, content_type: str | None = None) -> str:
    """Read and validate an image file, returning it as a data URI.

    Raises:
        AssetConstraintError: If the file is too large or not PNG/JPEG.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    size = await asyncio.to_thread(lambda: path.stat().st_size)
    if size > MAX_PROFILE_PICTURE_BYTES:
        # Reject before pulling the whole file into memory.
        raise AssetConstraintError("File size exceeds 2MB limit.")
    data = await asyncio.to_thread(path.read_bytes)
    info = validate_profile_picture(data, content_type=content_type, filename=path.name)
    return to_data_uri(data, info.mime_type)


async def attach_profile_picture(
    document: ResumeDocument,
    path: Path,
    content_type: str | None = None,
) -> tuple[bool, str | None]:
    """Load *path* and set it as the profile picture of *document*.

    Returns:
        ``(True, None)`` on success, otherwise ``(False, message)``. A
        rejected upload leaves the current picture untouched.
    """
    try:
        data_uri = await load_profile_picture(path, content_type)
    except AssetConstraintError as exc:
        logger.info("Profile picture rejected: %s", exc)
        return False, str(exc)
    except OSError as exc:
        logger.warning("Could not read profile picture %s: %s", path, exc)
        return False, "Failed to read profile picture."

    document.set_profile_picture(data_uri)
    return True, None
