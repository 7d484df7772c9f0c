"""Capture stage of the PDF export: turn the preview into a raster image.

The default :class:`LatexCapturer` compiles the preview ``Document`` with
a LaTeX compiler, renders every page with PyMuPDF at twice the native
resolution and stacks the pages into one tall image. Other capturers can
be injected wherever a :class:`Capturer` is accepted.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import fitz
from PIL import Image, UnidentifiedImageError

from resume_editor.models.errors import ExportError
from resume_editor.services.profile_picture import decode_data_uri
from resume_editor.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from pylatex import Document

    from resume_editor.models.resume import ResumeData

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SCALE",
    "Capturer",
    "LatexCapturer",
    "capture",
    "ensure_images_decoded",
    "get_latex_compiler",
    "stack_pages",
]

DEFAULT_SCALE = 2


class Capturer(Protocol):
    async def capture(self, document: Document, data: ResumeData) -> Image.Image: ...


def get_latex_compiler() -> str:
    """Return the compiler configured via RESUME_LATEX_COMPILER (default ``pdflatex``)."""
    return os.getenv("RESUME_LATEX_COMPILER") or "pdflatex"


def _decode_image(payload: bytes) -> Image.Image:
    image = Image.open(BytesIO(payload))
    image.load()
    return image


async def ensure_images_decoded(data: ResumeData) -> Image.Image | None:
    """Wait until the profile picture (if any) is fully decoded.

    Returns:
        The decoded picture, or None when the resume has none.

    Raises:
        ExportError: If the picture cannot be decoded.
    """
    uri = data.personal_info.profile_picture
    if not uri:
        return None
    try:
        _, payload = decode_data_uri(uri)
        return await asyncio.to_thread(_decode_image, payload)
    except (ValueError, OSError, UnidentifiedImageError) as exc:
        raise ExportError(f"Profile picture could not be decoded: {exc}") from exc


def stack_pages(pages: list[Image.Image]) -> Image.Image:
    """Stack *pages* top to bottom on a white canvas as wide as the widest page."""
    if not pages:
        raise ExportError("Nothing was rendered.")
    width = max(page.width for page in pages)
    height = sum(page.height for page in pages)
    canvas = Image.new("RGB", (width, height), "white")
    top = 0
    for page in pages:
        canvas.paste(page, (0, top))
        top += page.height
    return canvas


class LatexCapturer:
    """Compile the preview with LaTeX and rasterize the resulting PDF."""

    def __init__(self, compiler: str | None = None, scale: float = DEFAULT_SCALE) -> None:
        self.compiler = compiler or get_latex_compiler()
        self.scale = scale

    async def capture(self, document: Document, data: ResumeData) -> Image.Image:
        return await asyncio.to_thread(self._capture_sync, document, data)

    def _capture_sync(self, document: Document, data: ResumeData) -> Image.Image:
        with tempfile.TemporaryDirectory(prefix="resume-capture-") as tmp:
            workdir = Path(tmp)
            self._write_picture(workdir, data)
            stem = workdir / "resume"
            # PyLaTeX appends .pdf/.tex automatically
            document.generate_pdf(str(stem), clean_tex=True, compiler=self.compiler)
            return self._rasterize(Path(f"{stem}.pdf"))

    @staticmethod
    def _write_picture(workdir: Path, data: ResumeData) -> None:
        filename = ResumeTemplate.profile_picture_filename(data)
        if filename is None:
            return
        _, payload = decode_data_uri(data.personal_info.profile_picture or "")
        (workdir / filename).write_bytes(payload)

    def _rasterize(self, pdf_path: Path) -> Image.Image:
        matrix = fitz.Matrix(self.scale, self.scale)
        pages: list[Image.Image] = []
        doc = fitz.open(pdf_path)
        try:
            for page in doc:
                pix = page.get_pixmap(matrix=matrix, alpha=False)
                pages.append(Image.frombytes("RGB", (pix.width, pix.height), pix.samples))
        finally:
            doc.close()
        logger.debug("Rasterized %d page(s) from %s", len(pages), pdf_path)
        return stack_pages(pages)


async def capture(
    document: Document,
    data: ResumeData,
    capturer: Capturer | None = None,
) -> Image.Image:
    """Capture *document* as a single image.

    Images are decoded before capture starts, so a broken picture aborts
    the export instead of producing a page with a hole in it.

    Raises:
        ExportError: If decoding or capture fails.
    """
    await ensure_images_decoded(data)
    active = capturer if capturer is not None else LatexCapturer()
    try:
        return await active.capture(document, data)
    except ExportError:
        raise
    except Exception as exc:
        raise ExportError(f"Capture failed: {exc}") from exc
