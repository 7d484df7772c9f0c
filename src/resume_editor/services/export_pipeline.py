"""Export pipeline: text, LaTeX source, rasterized PDF and print.

PDF export runs in two stages. The capture stage turns the live preview
into an image, then the composition stage lays that image out on A4
pages. Only one PDF export may be in flight per pipeline.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from resume_editor.models.errors import ExportError
from resume_editor.services.rasterize import capture
from resume_editor.utils.export import (
    artifact_filename,
    compose_pdf,
    export_to_txt,
    pdf_filename,
)

if TYPE_CHECKING:
    from pylatex import Document

    from resume_editor.services.rasterize import Capturer
    from resume_editor.services.renderer import TemplateRenderer

logger = logging.getLogger(__name__)

__all__ = ["ExportPipeline", "PrintSurface", "get_export_dir"]

PrintSurface = Callable[["Document"], Any]


def get_export_dir() -> Path:
    """Return the default export directory.

    Checks the RESUME_EXPORT_DIR environment variable first, falling back
    to the current working directory.
    """
    env_dir = os.getenv("RESUME_EXPORT_DIR")
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    return Path.cwd()


class ExportPipeline:
    """Produce artifacts from a renderer's current snapshot and preview."""

    def __init__(self, renderer: TemplateRenderer, capturer: Capturer | None = None) -> None:
        self.renderer = renderer
        self.capturer = capturer
        self._pdf_in_flight = False

    @property
    def busy(self) -> bool:
        """True while a PDF export is pending."""
        return self._pdf_in_flight

    def export_text(self, output_dir: Path | None = None) -> Path:
        """Write the plain-text layout of the current snapshot."""
        target = Path(output_dir) if output_dir is not None else get_export_dir()
        return export_to_txt(self.renderer.data, target)

    def export_tex(self, output_dir: Path | None = None) -> Path:
        """Write the LaTeX source of the current preview."""
        target = Path(output_dir) if output_dir is not None else get_export_dir()
        target.mkdir(parents=True, exist_ok=True)
        output_path = target / artifact_filename(self.renderer.data, "tex")
        output_path.write_text(self.renderer.preview.dumps(), encoding="utf-8")
        logger.info("Exported LaTeX resume to %s", output_path)
        return output_path

    async def export_pdf(self, output_dir: Path | None = None) -> Path:
        """Capture the preview and write it as an A4 PDF.

        Raises:
            ExportError: If another PDF export is pending, or if capture or
                composition fails. No file is left behind on failure.
        """
        if self._pdf_in_flight:
            raise ExportError("export already in progress")
        self._pdf_in_flight = True
        try:
            data = self.renderer.data
            preview = self.renderer.preview
            target = Path(output_dir) if output_dir is not None else get_export_dir()

            image = await capture(preview, data, self.capturer)

            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ExportError(f"Cannot create export directory: {exc}") from exc
            output_path = await asyncio.to_thread(compose_pdf, image, target / pdf_filename(data))
            logger.info("Exported PDF resume to %s", output_path)
            return output_path
        finally:
            self._pdf_in_flight = False

    def print_preview(self, surface: PrintSurface) -> Any:
        """Hand the current preview to *surface*, the host's print facility.

        The same ``Document`` object the preview shows is passed, not a copy.
        """
        return surface(self.renderer.preview)
