"""Tests for the validation engine."""

from __future__ import annotations

import pytest

from resume_editor.models import (
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
    ValidationError,
)
from resume_editor.services.validation import (
    INVALID_EMAIL,
    MISSING_FIELD,
    ensure_valid,
    is_valid_email,
    validate_education,
    validate_experience,
    validate_personal_info,
    validate_resume,
    validate_skill,
    validate_skills,
)


class TestEmail:
    def test_valid(self) -> None:
        assert is_valid_email("ana@x.io")

    def test_invalid(self) -> None:
        assert not is_valid_email("ana@")
        assert not is_valid_email("ana at x.io")
        assert not is_valid_email("ana@x")


class TestPersonalInfo:
    def test_valid_info_has_no_errors(self) -> None:
        assert validate_personal_info(PersonalInfo(full_name="Ana", email="ana@x.io")) == {}

    def test_blank_name_and_bad_email(self) -> None:
        errors = validate_personal_info(PersonalInfo(full_name="   ", email="ana@"))
        assert errors == {"full_name": MISSING_FIELD, "email": INVALID_EMAIL}

    def test_missing_email_reports_missing_not_invalid(self) -> None:
        errors = validate_personal_info(PersonalInfo(full_name="Ana"))
        assert errors == {"email": MISSING_FIELD}

    def test_optional_fields_never_fail(self) -> None:
        info = PersonalInfo(full_name="Ana", email="ana@x.io", phone="", summary="")
        assert validate_personal_info(info) == {}


class TestExperience:
    def test_end_date_required_unless_current(self) -> None:
        exp = Experience(company="Acme", job_title="Dev", start_date="2020-01")
        assert validate_experience(exp) == {"end_date": MISSING_FIELD}

    def test_current_entry_needs_no_end_date(self) -> None:
        exp = Experience(company="Acme", job_title="Dev", start_date="2020-01", current=True)
        assert validate_experience(exp) == {}

    def test_all_rules_evaluated(self) -> None:
        errors = validate_experience(Experience())
        assert errors == {
            "company": MISSING_FIELD,
            "job_title": MISSING_FIELD,
            "start_date": MISSING_FIELD,
            "end_date": MISSING_FIELD,
        }


class TestEducation:
    def test_required_fields(self) -> None:
        errors = validate_education(Education(start_date="2014", end_date="2018"))
        assert errors == {"institution": MISSING_FIELD, "degree": MISSING_FIELD}

    def test_valid_current(self) -> None:
        edu = Education(institution="UPM", degree="BSc", start_date="2014", current=True)
        assert validate_education(edu) == {}


class TestSkills:
    def test_name_required(self) -> None:
        assert validate_skill(Skill(name=" ")) == {"name": MISSING_FIELD}

    def test_level_never_an_error(self) -> None:
        assert validate_skill(Skill(name="Go", level=99)) == {}

    def test_list_errors_keyed_by_index(self) -> None:
        skills = [Skill(name="Go"), Skill(name=""), Skill(name="Rust")]
        assert validate_skills(skills) == {"1.name": MISSING_FIELD}


class TestWholeResume:
    def test_complete_resume_passes(self, sample_resume) -> None:
        assert validate_resume(sample_resume) == {}
        assert ensure_valid(sample_resume) is sample_resume

    def test_errors_keyed_by_section(self) -> None:
        data = ResumeData(
            personal_info=PersonalInfo(full_name="Ana", email="nope"),
            experiences=(Experience(company="Acme", job_title="Dev", start_date="2020"),),
            skills=(Skill(name="Go"), Skill(name="")),
        )
        assert validate_resume(data) == {
            "personal_info.email": INVALID_EMAIL,
            "experiences.0.end_date": MISSING_FIELD,
            "skills.1.name": MISSING_FIELD,
        }

    def test_ensure_valid_raises(self) -> None:
        with pytest.raises(ValidationError) as info:
            ensure_valid(ResumeData())
        assert info.value.code == "VALIDATION_ERROR"
        assert info.value.errors == {
            "personal_info.full_name": MISSING_FIELD,
            "personal_info.email": MISSING_FIELD,
        }
