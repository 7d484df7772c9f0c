"""Abstract base class for pluggable resume templates."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from pylatex import Document

    from resume_editor.models.resume import ResumeData

__all__ = ["PROFILE_PICTURE_STEM", "ResumeTemplate"]

# Characters that have special meaning in LaTeX.
_LATEX_REPLACEMENTS = {
    "\\": r"\textbackslash{}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}
_LATEX_SPECIAL = re.compile(r"([&%$#_{}~^\\])")

_DATA_URI_MIME = re.compile(r"^data:(image/[\w.+-]+);base64,")


def _escape_match(match: re.Match[str]) -> str:
    char = match.group(1)
    return _LATEX_REPLACEMENTS.get(char, "\\" + char)


_MONTH_ABBR = [
    "",
    "Jan.",
    "Feb.",
    "Mar.",
    "Apr.",
    "May",
    "Jun.",
    "Jul.",
    "Aug.",
    "Sep.",
    "Oct.",
    "Nov.",
    "Dec.",
]

# The capture stage writes the decoded picture under this stem next to the .tex file.
PROFILE_PICTURE_STEM = "profile-picture"
_MIME_TO_EXTENSION = {"image/png": ".png", "image/jpeg": ".jpg"}


class ResumeTemplate(ABC):
    """Interface that every resume template must implement.

    ``build`` must be a pure projection: the same data always yields the
    same document, and sections or fields with nothing in them are left
    out entirely.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable template name shown in the UI."""

    @abstractmethod
    def build(self, data: ResumeData) -> Document:
        """Construct a PyLaTeX ``Document`` from *data*."""

    # ------------------------------------------------------------------
    # Shared helpers available to all templates
    # ------------------------------------------------------------------

    @staticmethod
    def escape_latex(text: str) -> str:
        r"""Escape LaTeX special characters in *text*.

        Handles: ``& % $ # _ { } ~ ^ \``
        """
        # Single pass, so braces introduced by a replacement are not escaped again.
        return _LATEX_SPECIAL.sub(_escape_match, text)

    @staticmethod
    def escape_url(url: str) -> str:
        r"""Percent-encode *url* for use as the first argument of ``\href``.

        The ``%`` signs of the encoding are themselves escaped for LaTeX.
        """
        return quote(url, safe=":/@.+-_~").replace("%", r"\%")

    @classmethod
    def escape_paragraph(cls, text: str) -> str:
        """Escape free text, keeping its non-empty lines as forced line breaks."""
        lines = [cls.escape_latex(line.strip()) for line in text.splitlines() if line.strip()]
        return r" \newline ".join(lines)

    @staticmethod
    def format_date_range(
        start: str | None,
        end: str | None,
        is_current: bool = False,
    ) -> str:
        """Return a formatted date range like ``Aug. 2018 -- May 2021``.

        Dates are expected as ISO strings (``YYYY-MM-DD``); anything else
        is shown as entered.
        """

        def _fmt(iso: str | None) -> str:
            if not iso:
                return ""
            parts = iso.split("-")
            if len(parts) >= 2 and parts[1].isdigit() and 1 <= int(parts[1]) <= 12:
                month = int(parts[1])
                year = parts[0]
                return f"{_MONTH_ABBR[month]} {year}"
            return iso

        start_str = _fmt(start)
        end_str = "Present" if is_current else _fmt(end)

        if start_str and end_str:
            return f"{start_str} -- {end_str}"
        return start_str or end_str or ""

    @staticmethod
    def profile_picture_filename(data: ResumeData) -> str | None:
        """Return the file name the picture is referenced by, or None if there is none.

        Only PNG and JPEG data URIs are referenced.
        """
        uri = data.personal_info.profile_picture
        if not uri:
            return None
        match = _DATA_URI_MIME.match(uri)
        if match is None:
            return None
        extension = _MIME_TO_EXTENSION.get(match.group(1).lower())
        if extension is None:
            return None
        return f"{PROFILE_PICTURE_STEM}{extension}"

    @classmethod
    def contact_parts(cls, data: ResumeData) -> list[str]:
        """Escaped email, phone and address, skipping the empty ones."""
        info = data.personal_info
        parts: list[str] = []
        if info.email:
            url = cls.escape_url(f"mailto:{info.email}")
            parts.append(rf"\href{{{url}}}{{{cls.escape_latex(info.email)}}}")
        if info.phone:
            parts.append(cls.escape_latex(info.phone))
        if info.address:
            parts.append(cls.escape_latex(info.address))
        return parts

    @staticmethod
    def join_nonempty(separator: str, *parts: str) -> str:
        return separator.join(part for part in parts if part)
