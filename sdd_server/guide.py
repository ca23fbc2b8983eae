"""Static Spec-Driven Development guidance served by ``sdd_guide``."""

from __future__ import annotations

import textwrap

from .validation import InputValidator


GUIDE_TEMPLATE = """\
# Spec-Driven Development Guide

**Your question**: {query}

## Workflow
Spec-Driven Development moves through three documents, in order. Each one is
reviewed and approved before the next is written.

1. **Requirements** (`requirements.md`): what the system must do.
2. **Design** (`design.md`): how the system will do it.
3. **Tasks** (`tasks.md`): the ordered work needed to build it.

## Phase 1: Requirements
- Start with a short introduction describing the problem and the users.
- Write each requirement as a user story: "As a <role>, I want <feature>, so that <benefit>".
- Give every requirement testable acceptance criteria, for example
  "WHEN <event> THEN the system SHALL <response>".
- Cover error cases and edge cases, not only the happy path.
- Tool: `generate_requirements(projectName, projectDescription, requirements, outputPath?)`

## Phase 2: Design
- Summarize the solution in an overview that links back to the requirements.
- Describe the high-level architecture and the technology stack.
- List the main components with their interfaces and responsibilities.
- Define the core data models and the API contracts between components.
- Tool: `generate_design(projectName, projectDescription, techStack, components?, dataModels?, outputPath?)`

## Phase 3: Tasks
- Break the design into small tasks that can each be finished and verified on their own.
- Give every task a description, acceptance criteria, dependencies and an estimate.
- Reference the requirement each task implements (e.g. REQ-1) for traceability.
- Order tasks so that dependencies come first.
- Tool: `generate_tasks(projectName, estimatedDuration, keyDeliverables, tasks, outputPath?)`

## Tips
- Keep each document focused: requirements say what, design says how, tasks say when.
- Revisit earlier documents when a later phase uncovers a gap.
- Output files must end in `.md` or `.txt` and live under the working directory.
"""


def render_guide(validator: InputValidator, query: str) -> str:
    """Return the guidance text with the sanitized query echoed back."""
    sanitized = validator.validate_description(query)
    return textwrap.dedent(GUIDE_TEMPLATE).format(query=sanitized or "(none)")
