"""Utility functions and helpers"""

from resume_editor.utils.export import (
    compose_pdf,
    export_to_txt,
    render_text,
    sanitize_filename,
)

__all__ = [
    "compose_pdf",
    "export_to_txt",
    "render_text",
    "sanitize_filename",
]
