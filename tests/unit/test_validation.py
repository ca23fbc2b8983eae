"""Unit tests for input validation and sanitization.

This module covers the per-field length, type and format rules and the
markup/traversal stripping applied to free text.
"""

import pytest

from sdd_server.errors import ValidationError
from sdd_server.validation import InputValidator, sanitize_text


@pytest.fixture
def validator():
    return InputValidator(max_input_length=200)


class TestSanitizeText:
    """Test cases for sanitize_text."""

    @pytest.mark.parametrize("raw", [
        "<script>alert(1)</script>",
        "click javascript:alert(1)",
        "JavaScript:void(0)",
        '<a onClick="steal()">x</a>',
        "img onerror=boom",
        "jav..ascript:alert(1)",
        "javajavascript:script:run",
        "oonclick=nclick=x",
    ])
    def test_disallowed_fragments_removed(self, raw):
        """Test that no disallowed fragment survives sanitization."""
        cleaned = sanitize_text(raw)

        assert "<" not in cleaned
        assert ">" not in cleaned
        assert "javascript:" not in cleaned.lower()
        assert "onclick=" not in cleaned.lower()
        assert "onerror=" not in cleaned.lower()
        assert ".." not in cleaned

    def test_sanitize_is_idempotent(self):
        """Test that sanitizing twice gives the same result as once."""
        samples = ["  <b>bold</b> ", "a...b....c", "jav..ascript:x", "plain text", "on..load=1"]
        for sample in samples:
            once = sanitize_text(sample)
            assert sanitize_text(once) == once

    def test_path_traversal_removed(self):
        """Test that '..' segments are stripped."""
        assert sanitize_text("../../etc/passwd") == "//etc/passwd"

    def test_ellipsis_is_stripped(self):
        """Test that ellipses lose their dots like any other '..'."""
        assert sanitize_text("Wait...") == "Wait."
        assert sanitize_text("versions 1..3") == "versions 13"

    def test_whitespace_trimmed(self):
        """Test surrounding whitespace is trimmed."""
        assert sanitize_text("  hello world \n") == "hello world"

    def test_clean_text_unchanged(self):
        """Test that ordinary prose passes through."""
        text = "As a user, I want to add tasks so that I remember them."
        assert sanitize_text(text) == text


class TestProjectName:
    """Test cases for project name validation."""

    def test_valid_name(self, validator):
        """Test a valid name is trimmed and returned."""
        assert validator.validate_project_name(" Todo App-v1.0_beta ") == "Todo App-v1.0_beta"

    def test_non_string(self, validator):
        """Test non-string names fail with INVALID_TYPE."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_project_name(42)
        assert exc_info.value.code == "INVALID_TYPE"

    def test_empty(self, validator):
        """Test empty names fail with INVALID_LENGTH."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_project_name("")
        assert exc_info.value.code == "INVALID_LENGTH"

    def test_too_long(self, validator):
        """Test names over 100 characters fail instead of being truncated."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_project_name("a" * 101)
        assert exc_info.value.code == "INVALID_LENGTH"

    def test_max_length_accepted(self, validator):
        """Test a 100 character name is accepted."""
        assert validator.validate_project_name("a" * 100) == "a" * 100

    @pytest.mark.parametrize("name", ["Todo<App>", "app/name", "rm -rf;", "naïve"])
    def test_invalid_characters(self, validator, name):
        """Test names outside the allowed character set fail with INVALID_FORMAT."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_project_name(name)
        assert exc_info.value.code == "INVALID_FORMAT"

    @pytest.mark.parametrize("name", ["..", "...", "Todo..App", " .. "])
    def test_dot_runs_rejected(self, validator, name):
        """Test names containing '..' fail with INVALID_FORMAT."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_project_name(name)
        assert exc_info.value.code == "INVALID_FORMAT"

    def test_single_dots_allowed(self, validator):
        assert validator.validate_project_name(".env.v2") == ".env.v2"


class TestDescription:
    """Test cases for generic description validation."""

    def test_sanitized(self, validator):
        """Test descriptions are sanitized."""
        assert validator.validate_description("<b>Hi</b> there") == "bHi/b there"

    def test_empty_allowed(self, validator):
        """Test empty descriptions are allowed."""
        assert validator.validate_description("") == ""

    def test_too_long(self, validator):
        """Test descriptions over the configured maximum fail."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_description("x" * 201)
        assert exc_info.value.code == "DESCRIPTION_TOO_LONG"
        assert "200" in exc_info.value.message

    def test_default_maximum(self):
        """Test the default maximum input length is 10000."""
        validator = InputValidator()
        assert validator.validate_description("x" * 10000) == "x" * 10000
        with pytest.raises(ValidationError):
            validator.validate_description("x" * 10001)

    def test_non_string(self, validator):
        """Test non-string descriptions fail with INVALID_TYPE."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_description(None)
        assert exc_info.value.code == "INVALID_TYPE"


class TestUserStory:
    """Test cases for user story validation."""

    def test_valid(self, validator):
        """Test a valid story is sanitized."""
        assert validator.validate_user_story(" As a user, I want x ") == "As a user, I want x"

    def test_empty(self, validator):
        """Test empty stories fail."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_user_story("")
        assert exc_info.value.code == "INVALID_LENGTH"

    def test_too_long(self, validator):
        """Test stories over 1000 characters fail."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_user_story("s" * 1001)
        assert exc_info.value.code == "INVALID_LENGTH"

    def test_non_string(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_user_story(["story"])
        assert exc_info.value.code == "INVALID_TYPE"


class TestAcceptanceCriteria:
    """Test cases for acceptance criteria validation."""

    def test_valid(self, validator):
        """Test each criterion is sanitized in order."""
        result = validator.validate_acceptance_criteria(["Can add <b>", " Can delete "])
        assert result == ["Can add b", "Can delete"]

    def test_empty_list(self, validator):
        """Test empty lists fail with EMPTY_CRITERIA."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_acceptance_criteria([])
        assert exc_info.value.code == "EMPTY_CRITERIA"

    def test_not_a_list(self, validator):
        """Test non-list criteria fail with INVALID_TYPE."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_acceptance_criteria("Can add a task")
        assert exc_info.value.code == "INVALID_TYPE"

    def test_criterion_too_long(self, validator):
        """Test criteria over 500 characters fail."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_acceptance_criteria(["ok", "c" * 501])
        assert exc_info.value.code == "CRITERION_TOO_LONG"

    def test_first_invalid_element_decides(self, validator):
        """Test the first invalid element determines the error."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_acceptance_criteria(["ok", 7, "c" * 501])
        assert exc_info.value.code == "INVALID_TYPE"
