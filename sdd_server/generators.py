"""Markdown renderers for the SDD documents.

Each renderer validates every field through the given
:class:`InputValidator` and fills a fixed template. Renderers do no I/O;
any validation error propagates to the caller unchanged.
"""

from __future__ import annotations

from typing import List

from .models import DesignRequest, RequirementsRequest, TasksRequest
from .validation import InputValidator


COMPONENTS_PLACEHOLDER = "Description of main components and their interactions."
DATA_MODELS_PLACEHOLDER = "Key data structures and their relationships."

DEFINITION_OF_DONE = """## Definition of Done
- [ ] Code implemented and tested
- [ ] All acceptance criteria met
- [ ] Code reviewed
- [ ] Documentation updated
- [ ] Ready for deployment

## Notes
Additional implementation notes or considerations."""


def _bullets(items: List[str], indent: str = "") -> str:
    return "\n".join(f"{indent}- {item}" for item in items)


def render_requirements(validator: InputValidator, request: RequirementsRequest) -> str:
    """Render a requirements document with one block per user story."""
    validator.validate_project_name(request.project_name)
    description = validator.validate_description(request.project_description)

    content = (
        "# Requirements Document\n"
        "\n"
        "## Introduction\n"
        f"{description}\n"
        "\n"
        "## Requirements\n"
        "\n"
    )

    for index, requirement in enumerate(request.requirements, start=1):
        user_story = validator.validate_user_story(requirement.user_story)
        criteria = validator.validate_acceptance_criteria(requirement.acceptance_criteria)
        content += (
            f"### Requirement {index}\n"
            "\n"
            f"**User Story:** {user_story}\n"
            "\n"
            "#### Acceptance Criteria\n"
            f"{_bullets(criteria)}\n"
            "\n"
        )

    return content


def render_design(validator: InputValidator, request: DesignRequest) -> str:
    """Render a design document; only the tech stack entries given are listed."""
    validator.validate_project_name(request.project_name)
    description = validator.validate_description(request.project_description)

    content = (
        "# Design Document\n"
        "\n"
        "## Overview\n"
        f"{description}\n"
        "\n"
        "## High-Level Architecture\n"
        "System architecture diagram and explanation.\n"
        "\n"
        "## Technology Stack\n"
    )

    for label, value in request.tech_stack.entries():
        value = validator.validate_description(value)
        if value:
            content += f"- **{label}**: {value}\n"

    content += "\n## Components and Interfaces\n"
    if request.components:
        content += _bullets(validator.validate_descriptions(request.components))
    else:
        content += COMPONENTS_PLACEHOLDER

    content += "\n\n## Data Models\n\n### Core Types\n"
    if request.data_models:
        content += _bullets(validator.validate_descriptions(request.data_models))
    else:
        content += DATA_MODELS_PLACEHOLDER

    content += "\n\n### API Contracts\nMain endpoints and data flow."
    return content


def render_tasks(validator: InputValidator, request: TasksRequest) -> str:
    """Render an implementation plan with a checklist per task."""
    project_name = validator.validate_project_name(request.project_name)
    estimated_duration = validator.validate_description(request.estimated_duration)
    deliverables = validator.validate_descriptions(request.key_deliverables)

    content = (
        "# Implementation Plan\n"
        "\n"
        "## Overview\n"
        f"- **Project**: {project_name}\n"
        f"- **Estimated Duration**: {estimated_duration}\n"
        "- **Key Deliverables**:\n"
        f"{_bullets(deliverables, indent='  ')}\n"
        "\n"
        "## Tasks\n"
        "\n"
    )

    for index, task in enumerate(request.tasks, start=1):
        name = validator.validate_description(task.name)
        description = validator.validate_description(task.description)
        criteria = validator.validate_acceptance_criteria(task.acceptance_criteria)
        dependencies = validator.validate_descriptions(task.dependencies)
        estimate = validator.validate_description(task.estimate)

        lines = [
            f"### Task {index}: {name}",
            f"- [ ] **Description**: {description}",
            "- [ ] **Acceptance Criteria**:",
            _bullets(criteria, indent="  "),
            f"- [ ] **Dependencies**: {', '.join(dependencies) or 'None'}",
            f"- [ ] **Estimate**: {estimate}",
        ]
        requirement_ref = None
        if task.requirement_ref is not None:
            requirement_ref = validator.validate_description(task.requirement_ref)
        if requirement_ref:
            lines.append(f"- [ ] **Requirements Reference**: {requirement_ref}")

        content += "\n".join(lines) + "\n\n"

    return content + DEFINITION_OF_DONE
