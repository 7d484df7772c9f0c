"""Export utilities: plain-text layout, artifact filenames and PDF page composition."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from fpdf import FPDF

from resume_editor.models.errors import ExportError

if TYPE_CHECKING:
    from PIL import Image

    from resume_editor.models.resume import ResumeData

logger = logging.getLogger(__name__)

__all__ = [
    "A4_HEIGHT_MM",
    "A4_WIDTH_MM",
    "artifact_filename",
    "compose_pdf",
    "export_to_txt",
    "pdf_filename",
    "render_text",
    "sanitize_filename",
    "text_filename",
]

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0


def sanitize_filename(name: str, default: str = "Resume") -> str:
    """Remove or replace characters that are invalid in filenames."""
    # Replace invalid characters with underscores
    sanitized = re.sub(r'[<>:"/\\|?*]', "_", name)
    # Remove leading/trailing whitespace and dots
    sanitized = sanitized.strip(". ")
    return sanitized or default


def artifact_filename(data: ResumeData, extension: str) -> str:
    """Return ``<fullName or "Resume">_CV.<extension>``."""
    base_name = sanitize_filename(data.personal_info.full_name)
    return f"{base_name}_CV.{extension}"


def text_filename(data: ResumeData) -> str:
    return artifact_filename(data, "txt")


def pdf_filename(data: ResumeData) -> str:
    return artifact_filename(data, "pdf")


def render_text(data: ResumeData) -> str:
    """Lay out *data* as plain text.

    The layout is fixed and does not depend on the selected template.
    List sections keep their headers even when empty.
    """
    info = data.personal_info
    lines = [
        info.full_name,
        info.title,
        f"{info.email} | {info.phone}",
        info.address,
        "",
        "SUMMARY",
        info.summary,
        "",
        "EXPERIENCE",
    ]
    for exp in data.experiences:
        lines.append(f"{exp.job_title} at {exp.company}")
        lines.append(f"{exp.start_date} - {exp.end_date or 'Present'}")
        lines.append(exp.description)
        lines.append("")

    lines.append("EDUCATION")
    for edu in data.education:
        lines.append(f"{edu.degree} in {edu.field_of_study}")
        lines.append(edu.institution)
        lines.append(f"{edu.start_date} - {edu.end_date or 'Present'}")
        lines.append("")

    lines.append("SKILLS")
    for skill in data.skills:
        lines.append(f"{skill.name} - {skill.level}/5")

    return "\n".join(lines) + "\n"


def export_to_txt(data: ResumeData, output_dir: Path) -> Path:
    """Write the plain-text rendition of *data* into *output_dir*.

    Returns:
        Path to the created file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / text_filename(data)
    output_path.write_text(render_text(data), encoding="utf-8")
    logger.info("Exported text resume to %s", output_path)
    return output_path


def compose_pdf(image: Image.Image, output_path: Path) -> Path:
    """Place *image* on A4 portrait pages.

    The image is scaled to the full page width and its height follows
    proportionally. An image taller than one page is cut into page-sized
    strips, one per page. The file only appears at *output_path* once it
    is complete.

    Raises:
        ExportError: If the image is empty or the PDF cannot be written.
    """
    width_px, height_px = image.size
    if width_px <= 0 or height_px <= 0:
        raise ExportError("Captured image is empty.")

    if image.mode != "RGB":
        image = image.convert("RGB")

    mm_per_px = A4_WIDTH_MM / width_px
    rows_per_page = max(1, int(A4_HEIGHT_MM / mm_per_px))

    pdf = FPDF(orientation="portrait", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(0, 0, 0)

    for top in range(0, height_px, rows_per_page):
        bottom = min(top + rows_per_page, height_px)
        strip = image.crop((0, top, width_px, bottom))
        pdf.add_page()
        pdf.image(strip, x=0, y=0, w=A4_WIDTH_MM, h=(bottom - top) * mm_per_px)

    output_path = Path(output_path)
    partial = output_path.with_name(output_path.name + ".part")
    try:
        pdf.output(str(partial))
        partial.replace(output_path)
    except Exception as exc:
        partial.unlink(missing_ok=True)
        raise ExportError(f"Failed to write PDF: {exc}") from exc
    return output_path
