"""Modern resume template.

Helvetica sans-serif, no decorative rules on section headers, compact
10pt body, tight margins. Photo and name share the header row; skills
show a five-dot level gauge.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pylatex import Document, NoEscape, Package

from resume_editor.models.resume import MAX_SKILL_LEVEL
from resume_editor.templates.base import ResumeTemplate

if TYPE_CHECKING:
    from resume_editor.models.resume import Education, Experience, ResumeData, Skill

__all__ = ["ModernResumeTemplate"]

# ---------------------------------------------------------------------------
# LaTeX preamble fragments
# ---------------------------------------------------------------------------

_PACKAGES: list[Package] = [
    Package("geometry", options=NoEscape("a4paper,margin=0.6in")),
    Package("titlesec"),
    Package("enumitem"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
    Package("helvet"),
    Package("graphicx"),
    Package("tabularx"),
    Package("xcolor"),
]

_PREAMBLE_SETUP = r"""
\renewcommand{\familydefault}{\sfdefault}
\definecolor{modernAccent}{RGB}{37,99,235}
\pagestyle{empty}
\urlstyle{same}
\raggedbottom
\raggedright
\setlength{\tabcolsep}{0in}
\setlength{\parindent}{0pt}
\titleformat{\section}{\large\bfseries\color{modernAccent}}{}{0em}{}
\titlespacing{\section}{0pt}{8pt}{4pt}
\pdfgentounicode=1
"""

_CONTACT_SEPARATOR = r" \textbar\ "

_CUSTOM_COMMANDS = r"""
\newcommand{\modernSubheading}[3]{
  \vspace{-2pt}\item
    \begin{tabular*}{0.97\textwidth}[t]{l@{\extracolsep{\fill}}r}
      \textbf{#1} & \textit{\small #3} \\
      \small#2 & \\
    \end{tabular*}\vspace{-4pt}
}
\newcommand{\modernItem}[1]{
  \item\small{
    {#1 \vspace{-2pt}}
  }
}
\newcommand{\modernListStart}{\begin{itemize}[leftmargin=0.15in, label={}]}
\newcommand{\modernListEnd}{\end{itemize}}
"""


class ModernResumeTemplate(ResumeTemplate):
    """Modern sans-serif resume with compact layout."""

    @property
    def name(self) -> str:
        return "Modern Resume"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, data: ResumeData) -> Document:
        doc = self._create_document()
        self._add_heading(doc, data)

        summary = data.personal_info.summary
        if summary.strip():
            doc.append(NoEscape(self.escape_paragraph(summary)))

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
            document_options=["a4paper", "10pt"],
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

        text_lines: list[str] = []
        if info.full_name:
            text_lines.append(rf"{{\LARGE\bfseries {esc(info.full_name)}}}")
        if info.title:
            text_lines.append(rf"{{\large\color{{modernAccent}} {esc(info.title)}}}")
        contact = self.contact_parts(data)
        if contact:
            text_lines.append(r"\small " + _CONTACT_SEPARATOR.join(contact))
        picture = self.profile_picture_filename(data)
        if not text_lines and not picture:
            return

        heading = ""
        if picture:
            heading += r"\begin{minipage}[c]{1.2in}" "\n"
            heading += rf"\includegraphics[width=1.1in]{{{picture}}}" "\n"
            heading += r"\end{minipage}%" "\n"
            heading += r"\begin{minipage}[c]{0.75\textwidth}" "\n"
        heading += r" \\[2pt] ".join(text_lines) + "\n"
        if picture:
            heading += r"\end{minipage}" "\n"
        heading += r"\par\vspace{6pt}"
        doc.append(NoEscape(heading))

    # -- experience --------------------------------------------------------

    def _add_experience(self, doc: Document, entries: tuple[Experience, ...]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Experience}", r"\modernListStart"]

        for entry in entries:
            employer = self.join_nonempty(", ", esc(entry.company), esc(entry.location))
            date_range = self.format_date_range(entry.start_date, entry.end_date, entry.current)
            lines.append(
                rf"\modernSubheading{{{esc(entry.job_title)}}}{{{employer}}}{{{date_range}}}"
            )
            if entry.description.strip():
                lines.append(rf"\modernItem{{{self.escape_paragraph(entry.description)}}}")

        lines.append(r"\modernListEnd")
        doc.append(NoEscape("\n".join(lines)))

    # -- education ---------------------------------------------------------

    def _add_education(self, doc: Document, entries: tuple[Education, ...]) -> None:
        esc = self.escape_latex
        lines = [r"\section{Education}", r"\modernListStart"]

        for entry in entries:
            degree = esc(entry.degree)
            if entry.field_of_study:
                degree = f"{degree} in {esc(entry.field_of_study)}"
            school = self.join_nonempty(", ", esc(entry.institution), esc(entry.location))
            date_range = self.format_date_range(entry.start_date, entry.end_date, entry.current)
            lines.append(rf"\modernSubheading{{{degree}}}{{{school}}}{{{date_range}}}")
            if entry.description.strip():
                lines.append(rf"\modernItem{{{self.escape_paragraph(entry.description)}}}")

        lines.append(r"\modernListEnd")
        doc.append(NoEscape("\n".join(lines)))

    # -- skills ------------------------------------------------------------

    def _add_skills(self, doc: Document, skills: tuple[Skill, ...]) -> None:
        esc = self.escape_latex
        lines = [
            r"\section{Skills}",
            r"\begin{tabularx}{\textwidth}{Xr}",
        ]
        for skill in skills:
            gauge = r"$\bullet$" * skill.level + r"$\circ$" * (MAX_SKILL_LEVEL - skill.level)
            lines.append(
                rf"{esc(skill.name)} & {{\color{{modernAccent}}{gauge}}}"
                rf" \small{{{skill.level}/{MAX_SKILL_LEVEL}}} \\"
            )
        lines.append(r"\end{tabularx}")
        doc.append(NoEscape("\n".join(lines)))
