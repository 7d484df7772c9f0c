"""Creative resume template.

Coloured uppercase section headers with horizontal rules, native LaTeX
sectioning, a split header with the photo and name on the left and
contact details on the right, and a ``description`` list for skills.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from resume_editor.models.resume import MAX_SKILL_LEVEL
from resume_editor.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from resume_editor.models.resume import Education, Experience, ResumeData, Skill

__all__ = ["CreativeResumeTemplate"]

# ---------------------------------------------------------------------------
# LaTeX preamble fragments
# ---------------------------------------------------------------------------

_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("a4paper,margin=1in")),
    Package("titlesec"),
    Package("enumitem"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
    Package("graphicx"),
    Package("xcolor"),
]

_PREAMBLE_SETUP = r"""
\definecolor{creativeAccent}{RGB}{147,51,234}
\setlength{\parindent}{0pt}
\setcounter{secnumdepth}{0}
\titleformat{\section}{\large\bfseries\uppercase\color{creativeAccent}}{}{}{}[\titlerule]
\titleformat{\subsection}{\bfseries}{}{0em}{}
\titleformat*{\subsubsection}{\itshape}
\titlespacing{\section}{0pt}{6pt}{4pt}
\titlespacing{\subsection}{0pt}{4pt}{0pt}
\titlespacing{\subsubsection}{0pt}{2pt}{0pt}
\setlist[itemize]{noitemsep, topsep=2pt, left=0pt .. 1.5em}
\setlist[description]{itemsep=0pt}
\pagestyle{empty}
\pdfgentounicode=1
"""


class CreativeResumeTemplate(ResumeTemplate):
    """Colourful resume with uppercase ruled headers and a split header."""

    @property
    def name(self) -> str:
        return "Creative Resume"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, data: ResumeData) -> Document:
        doc = self._create_document()
        self._add_heading(doc, data)

        summary = data.personal_info.summary
        if summary.strip():
            doc.append(NoEscape(r"\section{About Me}" "\n" + self.escape_paragraph(summary)))

        if data.skills:
            self._add_skills(doc, data.skills)

        if data.experiences:
            self._add_experience(doc, data.experiences)

        if data.education:
            self._add_education(doc, data.education)

        return doc

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _create_document(self) -> Document:
        doc = Document(
            documentclass="article",
            document_options=["a4paper", "11pt"],
            page_numbers=False,
            indent=True,
            lmodern=False,
            textcomp=False,
            microtype=False,
            fontenc=None,
            inputenc=None,
            geometry_options=None,
        )

        for pkg in _PACKAGES:
            doc.packages.append(pkg)
        doc.preamble.append(NoEscape(_PREAMBLE_SETUP))
        return doc

    # -- heading -----------------------------------------------------------

    def _add_heading(self, doc: Document, data: ResumeData) -> None:
        esc = self.escape_latex
        info = data.personal_info
        picture = self.profile_picture_filename(data)
        contact = self.contact_parts(data)

        left: list[str] = []
        if picture:
            left.append(rf"\includegraphics[width=0.9in]{{{picture}}}")
        if info.full_name:
            left.append(rf"{{\Huge\bfseries {esc(info.full_name)}}}")
        if info.title:
            left.append(rf"{{\large\color{{creativeAccent}} {esc(info.title)}}}")
        if not left and not contact:
            return

        heading = r"\begin{center}" "\n"
        heading += r"\begin{minipage}[t]{0.55\textwidth}" "\n"
        heading += r" \\ ".join(left) + "\n"
        heading += r"\end{minipage}%" "\n"
        heading += r"\hfill" "\n"
        heading += r"\begin{minipage}[t]{0.4\textwidth}" "\n"
        heading += r"\raggedleft" "\n"
        if contact:
            heading += r" \\ ".join(contact) + "\n"
        heading += r"\end{minipage}" "\n"
        heading += r"\end{center}"
        doc.append(NoEscape(heading))

    # -- experience --------------------------------------------------------

    def _add_experience(self, doc: Document, entries: tuple[Experience, ...]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Experience}"]

        for entry in entries:
            date_range = self.format_date_range(entry.start_date, entry.end_date, entry.current)
            lines.append(rf"\subsection*{{{esc(entry.job_title)} \hfill {date_range}}}")
            employer = self.join_nonempty(r" \hfill ", esc(entry.company), esc(entry.location))
            if employer:
                lines.append(rf"\subsubsection*{{{employer}}}")
            if entry.description.strip():
                lines.append(self.escape_paragraph(entry.description))

        doc.append(NoEscape("\n".join(lines)))

    # -- education ---------------------------------------------------------

    def _add_education(self, doc: Document, entries: tuple[Education, ...]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Education}"]

        for entry in entries:
            degree = esc(entry.degree)
            if entry.field_of_study:
                degree = f"{degree} in {esc(entry.field_of_study)}"
            date_range = self.format_date_range(entry.start_date, entry.end_date, entry.current)
            lines.append(rf"\subsection*{{{degree} \hfill {date_range}}}")
            school = self.join_nonempty(r" \hfill ", esc(entry.institution), esc(entry.location))
            if school:
                lines.append(rf"\subsubsection*{{{school}}}")
            if entry.description.strip():
                lines.append(self.escape_paragraph(entry.description))

        doc.append(NoEscape("\n".join(lines)))

    # -- skills ------------------------------------------------------------

    def _add_skills(self, doc: Document, skills: tuple[Skill, ...]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Skills}", r"\begin{description}"]
        for skill in skills:
            lines.append(rf"\item[{{{esc(skill.name)}}}] {skill.level}/{MAX_SKILL_LEVEL}")
        lines.append(r"\end{description}")
        doc.append(NoEscape("\n".join(lines)))
