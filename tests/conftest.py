from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

import resume_editor.data.db as db_module
from resume_editor.data.db import init_db
from resume_editor.models import Education, Experience, PersonalInfo, ResumeData, Skill


@pytest.fixture(autouse=True)
def store_db(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Point the durable store at a temporary SQLite database."""
    db_path = tmp_path / "store.db"
    monkeypatch.setenv("DB_URL", f"sqlite:///{db_path.as_posix()}")
    monkeypatch.delenv("RESUME_DRAFT_DIR", raising=False)
    monkeypatch.delenv("RESUME_EXPORT_DIR", raising=False)
    db_module._engine = None
    db_module._SessionLocal = None
    init_db()
    yield
    # Dispose engine to release connections
    db_module.dispose_engine()


def make_image_bytes(fmt: str = "PNG", size: tuple[int, int] = (8, 8)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    return make_image_bytes


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image_bytes("JPEG")


@pytest.fixture
def sample_resume() -> ResumeData:
    return ResumeData(
        personal_info=PersonalInfo(
            full_name="Ana Ruiz",
            email="ana@x.io",
            phone="555",
            address="Madrid",
            title="Engineer",
            summary="Builds things.",
        ),
        experiences=(
            Experience(
                company="Acme",
                job_title="Dev",
                location="Remote",
                start_date="2020-01",
                current=True,
                description="Shipped features.",
            ),
        ),
        education=(
            Education(
                institution="UPM",
                degree="BSc",
                field_of_study="CS",
                start_date="2014-09",
                end_date="2018-06",
            ),
        ),
        skills=(Skill(name="Go", level=4),),
    )
