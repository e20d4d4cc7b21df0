"""Unit tests for validators."""

import pytest

from hiretrack.schemas.application import ApplicantInput
from hiretrack.utils.validators import (
    sanitize_filename,
    validate_applicant_input,
    validate_job_input,
    validate_upload,
)

TEN_MB = 10 * 1024 * 1024
ALLOWED = ["application/pdf", "text/plain"]


class TestApplicantValidation:
    """Test applicant input validation."""

    def test_valid_input(self, applicant_input):
        result = validate_applicant_input(applicant_input)

        assert result.is_valid
        assert result.error is None
        assert result.warnings == []

    def test_warns_without_resume(self, applicant_input):
        data = applicant_input.model_copy(update={"documents": {}})
        result = validate_applicant_input(data)

        assert result.is_valid
        assert result.warnings == ["No resume attached"]

    def test_empty_input_lists_all_required(self):
        result = validate_applicant_input(ApplicantInput())

        assert not result.is_valid
        assert result.fields == [
            "first_name",
            "last_name",
            "email",
            "phone",
            "experience",
            "education",
        ]
        assert "Required fields are empty" in result.error


class TestJobValidation:
    """Test job input validation."""

    def test_valid_job(self, job_input):
        assert validate_job_input(job_input).is_valid

    @pytest.mark.parametrize("job_type", ["full-time", "part-time", "contract", "internship"])
    def test_every_job_type_accepted(self, job_input, job_type):
        data = job_input.model_copy(update={"type": job_type})
        assert validate_job_input(data).is_valid

    def test_empty_type_rejected(self, job_input):
        data = job_input.model_copy(update={"type": ""})
        result = validate_job_input(data)

        assert not result.is_valid
        assert result.fields == ["type"]


class TestUploadValidation:
    """Test upload size and type checks."""

    def test_within_limits(self):
        assert validate_upload(1024, "application/pdf", TEN_MB, ALLOWED).is_valid

    def test_exactly_at_ceiling_is_allowed(self):
        assert validate_upload(TEN_MB, "application/pdf", TEN_MB, ALLOWED).is_valid

    def test_oversized_file(self):
        result = validate_upload(12 * 1024 * 1024, "application/pdf", TEN_MB, ALLOWED)

        assert not result.is_valid
        assert result.error == "File size must be less than 10MB"
        assert result.fields == ["size"]

    def test_disallowed_type(self):
        result = validate_upload(10, "image/png", TEN_MB, ALLOWED)

        assert not result.is_valid
        assert result.fields == ["type"]
        assert "PDF, DOC, DOCX, or TXT" in result.error

    def test_missing_content_type(self):
        assert not validate_upload(10, None, TEN_MB, ALLOWED).is_valid


class TestSanitizeFilename:
    """Test blob path filename sanitising."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("cv.pdf", "cv.pdf"),
            ("my resume (final).pdf", "my_resume__final_.pdf"),
            ("../../etc/passwd", ".._.._etc_passwd"),
            ("", "file"),
        ],
    )
    def test_unsafe_characters_replaced(self, name, expected):
        assert sanitize_filename(name) == expected
