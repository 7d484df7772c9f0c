"""Classic resume template.

Serif body with small-caps section titles underlined by a full-width
rule, centered name block, and the traditional two-column subheading
rows (role and dates on the first line, employer and place on the
second).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from resume_editor.models.resume import MAX_SKILL_LEVEL
from resume_editor.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from resume_editor.models.resume import Education, Experience, ResumeData, Skill

__all__ = ["ClassicResumeTemplate"]

# ---------------------------------------------------------------------------
# LaTeX preamble fragments
# ---------------------------------------------------------------------------

_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("a4paper,margin=0.75in")),
    Package("latexsym"),
    Package("titlesec"),
    Package("enumitem"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("graphicx"),
    Package("tabularx"),
    Package("fontenc", options=NoEscape("T1")),
]

_PREAMBLE_SETUP = r"""
\pagestyle{empty}
\urlstyle{same}
\raggedbottom
\raggedright
\setlength{\tabcolsep}{0in}
\titleformat{\section}{
  \vspace{-4pt}\scshape\raggedright\large
}{}{0em}{}[\titlerule \vspace{-5pt}]
\pdfgentounicode=1
"""

_CONTACT_SEPARATOR = " $|$ "

_CUSTOM_COMMANDS = r"""
\newcommand{\resumeItem}[1]{
  \item\small{
    {#1 \vspace{-2pt}}
  }
}
\newcommand{\resumeSubheading}[4]{
  \vspace{-2pt}\item
    \begin{tabular*}{0.97\textwidth}[t]{l@{\extracolsep{\fill}}r}
      \textbf{#1} & #2 \\
      \textit{\small#3} & \textit{\small #4} \\
    \end{tabular*}\vspace{-7pt}
}
\newcommand{\resumeSubHeadingListStart}{\begin{itemize}[leftmargin=0.15in, label={}]}
\newcommand{\resumeSubHeadingListEnd}{\end{itemize}}
\newcommand{\resumeItemListStart}{\begin{itemize}}
\newcommand{\resumeItemListEnd}{\end{itemize}\vspace{-5pt}}
"""


class ClassicResumeTemplate(ResumeTemplate):
    """Traditional serif resume with ruled section headers."""

    @property
    def name(self) -> str:
        return "Classic Resume"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, data: ResumeData) -> Document:
        doc = self._create_document()
        self._add_heading(doc, data)

        summary = data.personal_info.summary
        if summary.strip():
            doc.append(NoEscape(r"\section{Summary}" "\n" + self.escape_paragraph(summary)))

        if data.experiences:
            self._add_experience(doc, data.experiences)

        if data.education:
            self._add_education(doc, data.education)

        if data.skills:
            self._add_skills(doc, data.skills)

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
        doc.preamble.append(NoEscape(_CUSTOM_COMMANDS))
        return doc

    # -- heading -----------------------------------------------------------

    def _add_heading(self, doc: Document, data: ResumeData) -> None:
        esc = self.escape_latex
        info = data.personal_info
        picture = self.profile_picture_filename(data)
        contact = self.contact_parts(data)

        rows: list[str] = []
        if picture:
            rows.append(rf"\includegraphics[width=1in]{{{picture}}}")
        if info.full_name:
            rows.append(rf"\textbf{{\Huge \scshape {esc(info.full_name)}}}")
        if info.title:
            rows.append(rf"\textit{{{esc(info.title)}}}")
        if contact:
            rows.append(r"\small " + _CONTACT_SEPARATOR.join(contact))
        if not rows:
            return

        heading = r"\begin{center}" + r" \\ \vspace{1pt}".join(rows) + r"\end{center}"
        doc.append(NoEscape(heading))

    # -- experience --------------------------------------------------------

    def _add_experience(self, doc: Document, entries: tuple[Experience, ...]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Experience}", r"\resumeSubHeadingListStart"]

        for entry in entries:
            date_range = self.format_date_range(entry.start_date, entry.end_date, entry.current)
            lines.append(
                rf"\resumeSubheading{{{esc(entry.job_title)}}}{{{date_range}}}"
                rf"{{{esc(entry.company)}}}{{{esc(entry.location)}}}"
            )
            if entry.description.strip():
                lines.append(r"\resumeItemListStart")
                lines.append(rf"\resumeItem{{{self.escape_paragraph(entry.description)}}}")
                lines.append(r"\resumeItemListEnd")

        lines.append(r"\resumeSubHeadingListEnd")
        doc.append(NoEscape("\n".join(lines)))

    # -- education ---------------------------------------------------------

    def _add_education(self, doc: Document, entries: tuple[Education, ...]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Education}", r"\resumeSubHeadingListStart"]

        for entry in entries:
            degree = esc(entry.degree)
            if entry.field_of_study:
                degree = f"{degree} in {esc(entry.field_of_study)}"
            date_range = self.format_date_range(entry.start_date, entry.end_date, entry.current)
            lines.append(
                rf"\resumeSubheading{{{esc(entry.institution)}}}{{{esc(entry.location)}}}"
                rf"{{{degree}}}{{{date_range}}}"
            )
            if entry.description.strip():
                lines.append(r"\resumeItemListStart")
                lines.append(rf"\resumeItem{{{self.escape_paragraph(entry.description)}}}")
                lines.append(r"\resumeItemListEnd")

        lines.append(r"\resumeSubHeadingListEnd")
        doc.append(NoEscape("\n".join(lines)))

    # -- skills ------------------------------------------------------------

    def _add_skills(self, doc: Document, skills: tuple[Skill, ...]) -> None:
        esc = self.escape_latex
        joined = ", ".join(
            f"{esc(skill.name)} ({skill.level}/{MAX_SKILL_LEVEL})" for skill in skills
        )
        lines = [
            r"\section{Skills}",
            r"\begin{itemize}[leftmargin=0.15in, label={}]",
            rf"\small{{\item{{{joined}}}}}",
            r"\end{itemize}",
        ]
        doc.append(NoEscape("\n".join(lines)))
