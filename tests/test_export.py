"""Tests for the export utility module."""

from __future__ import annotations

import fitz
import pytest
from PIL import Image

from resume_editor.models import ExportError, PersonalInfo, ResumeData
from resume_editor.utils.export import (
    compose_pdf,
    export_to_txt,
    pdf_filename,
    render_text,
    sanitize_filename,
    text_filename,
)


class TestSanitizeFilename:
    """Tests for sanitize_filename function."""

    def test_removes_invalid_characters(self) -> None:
        assert sanitize_filename('test<>:"/\\|?*file') == "test_________file"

    def test_strips_leading_trailing_dots_spaces(self) -> None:
        assert sanitize_filename("  ..test.. ") == "test"

    def test_returns_default_for_empty(self) -> None:
        assert sanitize_filename("") == "Resume"
        assert sanitize_filename("...", default="draft") == "draft"


class TestArtifactFilenames:
    def test_uses_full_name(self) -> None:
        data = ResumeData(personal_info=PersonalInfo(full_name="Ana Ruiz"))
        assert text_filename(data) == "Ana Ruiz_CV.txt"
        assert pdf_filename(data) == "Ana Ruiz_CV.pdf"

    def test_falls_back_to_resume(self) -> None:
        assert text_filename(ResumeData()) == "Resume_CV.txt"
        assert pdf_filename(ResumeData()) == "Resume_CV.pdf"


class TestRenderText:
    def test_empty_resume_layout(self) -> None:
        assert render_text(ResumeData()) == (
            "\n\n | \n\n\nSUMMARY\n\n\nEXPERIENCE\nEDUCATION\nSKILLS\n"
        )

    def test_populated_layout(self, sample_resume) -> None:
        assert render_text(sample_resume) == (
            "Ana Ruiz\n"
            "Engineer\n"
            "ana@x.io | 555\n"
            "Madrid\n"
            "\n"
            "SUMMARY\n"
            "Builds things.\n"
            "\n"
            "EXPERIENCE\n"
            "Dev at Acme\n"
            "2020-01 - Present\n"
            "Shipped features.\n"
            "\n"
            "EDUCATION\n"
            "BSc in CS\n"
            "UPM\n"
            "2014-09 - 2018-06\n"
            "\n"
            "SKILLS\n"
            "Go - 4/5\n"
        )

    def test_export_to_txt_writes_utf8(self, tmp_path) -> None:
        data = ResumeData(personal_info=PersonalInfo(full_name="José Núñez"))
        path = export_to_txt(data, tmp_path / "out")
        assert path == tmp_path / "out" / "José Núñez_CV.txt"
        assert path.read_text(encoding="utf-8").startswith("José Núñez\n")


class TestComposePdf:
    def test_single_page(self, tmp_path) -> None:
        image = Image.new("RGB", (210, 200), "white")
        path = compose_pdf(image, tmp_path / "out.pdf")
        assert path.read_bytes().startswith(b"%PDF")
        with fitz.open(path) as doc:
            assert doc.page_count == 1
            width_pt = doc[0].rect.width
        assert width_pt == pytest.approx(595.28, abs=0.5)

    def test_tall_image_split_across_pages(self, tmp_path) -> None:
        image = Image.new("RGBA", (100, 300), (0, 0, 0, 255))
        path = compose_pdf(image, tmp_path / "tall.pdf")
        with fitz.open(path) as doc:
            assert doc.page_count == 3

    def test_failure_leaves_no_file(self, tmp_path) -> None:
        target = tmp_path / "missing-dir" / "out.pdf"
        with pytest.raises(ExportError):
            compose_pdf(Image.new("RGB", (10, 10)), target)
        assert not target.exists()
        assert not target.with_name("out.pdf.part").exists()
