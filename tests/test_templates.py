"""Tests for resume templates, the registry and the live renderer."""

from __future__ import annotations

import logging

import pytest

from resume_editor.models import Education, Experience, PersonalInfo, ResumeData, Skill
from resume_editor.services.document import ResumeDocument
from resume_editor.services.renderer import TemplateRenderer, render
from resume_editor.templates import get_template, list_templates
from resume_editor.templates.base import ResumeTemplate
from resume_editor.templates.classic import ClassicResumeTemplate
from resume_editor.templates.creative import CreativeResumeTemplate
from resume_editor.templates.modern import ModernResumeTemplate

ALL_TEMPLATES = ["modern", "classic", "creative"]
PNG_URI = "data:image/png;base64,iVBORw0KGgo="


# ======================================================================
# Shared helpers
# ======================================================================


class TestEscapeLatex:
    def test_special_characters(self) -> None:
        assert ResumeTemplate.escape_latex("R&D 100% $5 #1 a_b") == (
            r"R\&D 100\% \$5 \#1 a\_b"
        )

    def test_backslash_tilde_caret(self) -> None:
        assert ResumeTemplate.escape_latex("a\\b~c^d") == (
            r"a\textbackslash{}b\textasciitilde{}c\textasciicircum{}d"
        )

    def test_paragraph_keeps_lines(self) -> None:
        assert ResumeTemplate.escape_paragraph("one\n\n two &") == r"one \newline two \&"


class TestFormatDateRange:
    def test_full_range(self) -> None:
        assert ResumeTemplate.format_date_range("2018-08-15", "2021-05-01") == (
            "Aug. 2018 -- May 2021"
        )

    def test_current(self) -> None:
        assert ResumeTemplate.format_date_range("2020-01", "", True) == "Jan. 2020 -- Present"

    def test_free_form_kept(self) -> None:
        assert ResumeTemplate.format_date_range("Fall 2019", None) == "Fall 2019"

    def test_empty(self) -> None:
        assert ResumeTemplate.format_date_range(None, None) == ""


class TestProfilePictureFilename:
    def test_png(self) -> None:
        data = ResumeData(personal_info=PersonalInfo(profile_picture=PNG_URI))
        assert ResumeTemplate.profile_picture_filename(data) == "profile-picture.png"

    def test_jpeg(self) -> None:
        data = ResumeData(personal_info=PersonalInfo(profile_picture="data:image/jpeg;base64,/9j/"))
        assert ResumeTemplate.profile_picture_filename(data) == "profile-picture.jpg"

    def test_none_or_unknown(self) -> None:
        assert ResumeTemplate.profile_picture_filename(ResumeData()) is None
        bogus = ResumeData(personal_info=PersonalInfo(profile_picture="http://x/y.png"))
        assert ResumeTemplate.profile_picture_filename(bogus) is None


# ======================================================================
# Registry
# ======================================================================


class TestRegistry:
    def test_list(self) -> None:
        assert list_templates() == ["classic", "creative", "modern"]

    @pytest.mark.parametrize(
        ("name", "cls"),
        [
            ("modern", ModernResumeTemplate),
            ("classic", ClassicResumeTemplate),
            ("creative", CreativeResumeTemplate),
        ],
    )
    def test_lookup(self, name, cls) -> None:
        assert isinstance(get_template(name), cls)

    def test_unknown_falls_back_to_modern(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="resume_editor.templates"):
            template = get_template("unknown")
        assert isinstance(template, ModernResumeTemplate)
        assert "unknown" in caplog.text

    def test_none_falls_back_to_modern(self) -> None:
        assert isinstance(get_template(None), ModernResumeTemplate)


# ======================================================================
# Template output
# ======================================================================


class TestTemplateOutput:
    @pytest.mark.parametrize("name", ALL_TEMPLATES)
    def test_all_populated_fields_shown(self, name, sample_resume) -> None:
        tex = get_template(name).build(sample_resume).dumps()
        for text in ("Ana Ruiz", "Engineer", "ana@x.io", "555", "Madrid", "Builds things."):
            assert text in tex
        for text in ("Acme", "Dev", "Remote", "Present", "Shipped features."):
            assert text in tex
        for text in ("UPM", "BSc", "CS", "Sep. 2014", "Jun. 2018"):
            assert text in tex
        assert "Go" in tex
        assert "4/5" in tex

    @pytest.mark.parametrize("name", ALL_TEMPLATES)
    def test_empty_sections_omitted(self, name) -> None:
        tex = get_template(name).build(ResumeData()).dumps()
        for header in ("Experience", "Education", "Skills", "Summary", "About Me"):
            assert rf"\section{{{header}}}" not in tex
        assert r"\includegraphics" not in tex

    @pytest.mark.parametrize("name", ALL_TEMPLATES)
    def test_only_populated_sections(self, name) -> None:
        data = ResumeData(skills=(Skill(name="Rust", level=2),))
        tex = get_template(name).build(data).dumps()
        assert r"\section{Skills}" in tex
        assert r"\section{Experience}" not in tex
        assert "Rust" in tex

    @pytest.mark.parametrize("name", ALL_TEMPLATES)
    def test_picture_referenced(self, name) -> None:
        data = ResumeData(personal_info=PersonalInfo(full_name="Ana", profile_picture=PNG_URI))
        tex = get_template(name).build(data).dumps()
        assert "profile-picture.png" in tex
        assert r"\usepackage{graphicx}" in tex

    @pytest.mark.parametrize("name", ALL_TEMPLATES)
    def test_deterministic(self, name, sample_resume) -> None:
        template = get_template(name)
        assert template.build(sample_resume).dumps() == template.build(sample_resume).dumps()

    @pytest.mark.parametrize("name", ALL_TEMPLATES)
    def test_special_characters_escaped(self, name) -> None:
        data = ResumeData(
            experiences=(
                Experience(company="R&D Corp", job_title="Dev_Ops", start_date="2020-01"),
            ),
        )
        tex = get_template(name).build(data).dumps()
        assert r"R\&D Corp" in tex
        assert r"Dev\_Ops" in tex

    def test_contact_separators(self, sample_resume) -> None:
        assert r"ana@x.io} \textbar\ 555" in ModernResumeTemplate().build(sample_resume).dumps()
        assert r"ana@x.io} $|$ 555" in ClassicResumeTemplate().build(sample_resume).dumps()

    @pytest.mark.parametrize("name", ALL_TEMPLATES)
    def test_email_link_target_escaped(self, name) -> None:
        data = ResumeData(personal_info=PersonalInfo(email=r"a%b#c\d@x.io"))
        tex = get_template(name).build(data).dumps()
        assert r"\href{mailto:a\%25b\%23c\%5Cd@x.io}" in tex
        assert r"{a\%b\#c\textbackslash{}d@x.io}" in tex

    def test_creative_skill_label_with_bracket(self) -> None:
        data = ResumeData(skills=(Skill(name="C[++]", level=4),))
        tex = CreativeResumeTemplate().build(data).dumps()
        assert r"\item[{C[++]}] 4/5" in tex

    def test_field_of_study_optional(self) -> None:
        data = ResumeData(education=(Education(institution="UPM", degree="BSc"),))
        tex = ClassicResumeTemplate().build(data).dumps()
        assert "BSc in" not in tex

    def test_variants_differ(self, sample_resume) -> None:
        outputs = {get_template(name).build(sample_resume).dumps() for name in ALL_TEMPLATES}
        assert len(outputs) == 3

    def test_a4_paper(self, sample_resume) -> None:
        for name in ALL_TEMPLATES:
            assert "a4paper" in get_template(name).build(sample_resume).dumps()


# ======================================================================
# Renderer
# ======================================================================


class TestTemplateRenderer:
    def test_preview_follows_document(self) -> None:
        doc = ResumeDocument()
        renderer = TemplateRenderer(doc)
        assert "Ana" not in renderer.preview.dumps()
        doc.set_personal_info(PersonalInfo(full_name="Ana"))
        assert "Ana" in renderer.preview.dumps()
        assert renderer.data == doc.snapshot

    def test_select_rebuilds_preview(self, sample_resume) -> None:
        renderer = TemplateRenderer(ResumeDocument(sample_resume))
        renderer.select("classic")
        assert renderer.template_id == "classic"
        assert renderer.preview.dumps() == ClassicResumeTemplate().build(sample_resume).dumps()

    def test_select_unknown_uses_modern(self, sample_resume) -> None:
        renderer = TemplateRenderer(ResumeDocument(sample_resume), "creative")
        renderer.select("unknown")
        assert renderer.template_id == "modern"
        assert renderer.preview.dumps() == ModernResumeTemplate().build(sample_resume).dumps()

    def test_unknown_initial_template(self) -> None:
        assert TemplateRenderer(template_id="fancy").template_id == "modern"

    def test_detach_stops_updates(self) -> None:
        doc = ResumeDocument()
        renderer = TemplateRenderer(doc)
        renderer.detach()
        doc.set_personal_info(PersonalInfo(full_name="Ana"))
        assert "Ana" not in renderer.preview.dumps()
        assert renderer.document is None

    def test_render_is_pure(self, sample_resume) -> None:
        renderer = TemplateRenderer()
        renderer.render(sample_resume)
        assert renderer.data == ResumeData()
        assert render(sample_resume, "modern").dumps() == renderer.render(sample_resume).dumps()
