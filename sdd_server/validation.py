"""Input validation and sanitization for tool arguments."""

from __future__ import annotations

import re
from typing import Any, List

from .config import DEFAULT_MAX_INPUT_LENGTH
from .errors import (
    CRITERION_TOO_LONG,
    DESCRIPTION_TOO_LONG,
    EMPTY_CRITERIA,
    INVALID_FORMAT,
    INVALID_LENGTH,
    INVALID_TYPE,
    ValidationError,
)


MAX_PROJECT_NAME_LENGTH = 100
MAX_USER_STORY_LENGTH = 1000
MAX_CRITERION_LENGTH = 500

PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_.]{1,100}$")

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)


def sanitize_text(value: str) -> str:
    """Strip markup and traversal fragments from free text.

    The passes repeat until nothing changes, so removing one fragment can
    never leave another one behind (``jav..ascript:`` collapses to nothing).
    """
    previous = None
    while value != previous:
        previous = value
        value = _ANGLE_BRACKETS.sub("", value)
        value = _JAVASCRIPT_SCHEME.sub("", value)
        value = _EVENT_HANDLER.sub("", value)
        value = value.replace("..", "")
        value = value.strip()
    return value


class InputValidator:
    """Validate and sanitize the text fields of a tool call."""

    def __init__(self, max_input_length: int = DEFAULT_MAX_INPUT_LENGTH):
        self.max_input_length = max_input_length

    def validate_project_name(self, name: Any) -> str:
        if not isinstance(name, str):
            raise ValidationError("Project name must be a string", INVALID_TYPE)
        if len(name) == 0 or len(name) > MAX_PROJECT_NAME_LENGTH:
            raise ValidationError(
                f"Project name must be 1-{MAX_PROJECT_NAME_LENGTH} characters", INVALID_LENGTH
            )
        if not PROJECT_NAME_PATTERN.match(name) or ".." in name:
            raise ValidationError("Project name contains invalid characters", INVALID_FORMAT)
        return name.strip()

    def validate_description(self, description: Any) -> str:
        """Validate generic free text bounded by the configured input length."""
        if not isinstance(description, str):
            raise ValidationError("Description must be a string", INVALID_TYPE)
        if len(description) > self.max_input_length:
            raise ValidationError(
                f"Description too long (max {self.max_input_length} chars)", DESCRIPTION_TOO_LONG
            )
        return sanitize_text(description)

    def validate_user_story(self, story: Any) -> str:
        if not isinstance(story, str):
            raise ValidationError("User story must be a string", INVALID_TYPE)
        if len(story) == 0 or len(story) > MAX_USER_STORY_LENGTH:
            raise ValidationError(
                f"User story must be 1-{MAX_USER_STORY_LENGTH} characters", INVALID_LENGTH
            )
        return sanitize_text(story)

    def validate_acceptance_criteria(self, criteria: Any) -> List[str]:
        """Validate every criterion in order; the first bad one decides the error."""
        if not isinstance(criteria, list):
            raise ValidationError("Acceptance criteria must be a list", INVALID_TYPE)
        if not criteria:
            raise ValidationError("At least one acceptance criterion is required", EMPTY_CRITERIA)

        validated: List[str] = []
        for criterion in criteria:
            if not isinstance(criterion, str):
                raise ValidationError("Each acceptance criterion must be a string", INVALID_TYPE)
            if len(criterion) > MAX_CRITERION_LENGTH:
                raise ValidationError(
                    f"Acceptance criterion too long (max {MAX_CRITERION_LENGTH} chars)",
                    CRITERION_TOO_LONG,
                )
            validated.append(sanitize_text(criterion))
        return validated

    def validate_descriptions(self, values: List[Any]) -> List[str]:
        """Validate a list of generic text values."""
        return [self.validate_description(value) for value in values]
