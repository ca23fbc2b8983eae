"""Request objects for the document tools.

Each ``from_dict`` checks the shape of a tool's JSON arguments (types,
required keys, minimum item counts, unknown keys) and raises
:class:`InvalidArgsError` on a mismatch. Argument keys are camelCase on the
wire (``projectName``, ``outputPath``) and snake_case on the dataclasses.
Content checks (lengths, character sets, sanitization) belong to the input
validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import InvalidArgsError


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidArgsError(f"{what} must be an object")
    return data


def _reject_unknown_keys(data: Mapping[str, Any], allowed: Iterable[str], what: str) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise InvalidArgsError(f"{what} has unexpected fields: {', '.join(unknown)}")


def _string(data: Mapping[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise InvalidArgsError(f"{what}.{key} must be a string")
    return value


def _optional_string(data: Mapping[str, Any], key: str, what: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidArgsError(f"{what}.{key} must be a string")
    return value


def _list(data: Mapping[str, Any], key: str, what: str, *, min_items: int = 0) -> List[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        raise InvalidArgsError(f"{what}.{key} must be a list")
    if len(value) < min_items:
        raise InvalidArgsError(f"{what}.{key} needs at least {min_items} item(s)")
    return value


def _optional_list(data: Mapping[str, Any], key: str, what: str) -> Optional[List[Any]]:
    if data.get(key) is None:
        return None
    return _list(data, key, what)


@dataclass(slots=True)
class RequirementItem:
    """One user story with its acceptance criteria."""

    user_story: str
    acceptance_criteria: List[Any]

    FIELDS = ("userStory", "acceptanceCriteria")

    @classmethod
    def from_dict(cls, data: Any, index: int = 1) -> "RequirementItem":
        what = f"requirements[{index}]"
        data = _require_mapping(data, what)
        _reject_unknown_keys(data, cls.FIELDS, what)
        return cls(
            user_story=_string(data, "userStory", what),
            acceptance_criteria=_list(data, "acceptanceCriteria", what),
        )


@dataclass(slots=True)
class RequirementsRequest:
    """Arguments of ``generate_requirements``."""

    project_name: str
    project_description: str
    requirements: List[RequirementItem]
    output_path: Optional[str] = None

    FIELDS = ("projectName", "projectDescription", "requirements", "outputPath")

    @classmethod
    def from_dict(cls, data: Any) -> "RequirementsRequest":
        what = "generate_requirements"
        data = _require_mapping(data, f"{what} arguments")
        _reject_unknown_keys(data, cls.FIELDS, what)
        items = _list(data, "requirements", what, min_items=1)
        return cls(
            project_name=_string(data, "projectName", what),
            project_description=_string(data, "projectDescription", what),
            requirements=[RequirementItem.from_dict(item, idx) for idx, item in enumerate(items, start=1)],
            output_path=_optional_string(data, "outputPath", what),
        )


@dataclass(slots=True)
class TechStack:
    """Optional technology choices; absent entries are left out of the document."""

    frontend: Optional[str] = None
    backend: Optional[str] = None
    database: Optional[str] = None
    infrastructure: Optional[str] = None

    FIELDS = ("frontend", "backend", "database", "infrastructure")

    @classmethod
    def from_dict(cls, data: Any) -> "TechStack":
        what = "techStack"
        data = _require_mapping(data, what)
        _reject_unknown_keys(data, cls.FIELDS, what)
        return cls(**{name: _optional_string(data, name, what) for name in cls.FIELDS})

    def entries(self) -> List[tuple[str, str]]:
        """Return ``(label, value)`` pairs for the entries that are set."""
        return [
            (name.capitalize(), getattr(self, name))
            for name in self.FIELDS
            if getattr(self, name)
        ]


@dataclass(slots=True)
class DesignRequest:
    """Arguments of ``generate_design``."""

    project_name: str
    project_description: str
    tech_stack: TechStack
    components: Optional[List[Any]] = None
    data_models: Optional[List[Any]] = None
    output_path: Optional[str] = None

    FIELDS = ("projectName", "projectDescription", "techStack", "components", "dataModels", "outputPath")

    @classmethod
    def from_dict(cls, data: Any) -> "DesignRequest":
        what = "generate_design"
        data = _require_mapping(data, f"{what} arguments")
        _reject_unknown_keys(data, cls.FIELDS, what)
        if "techStack" not in data:
            raise InvalidArgsError(f"{what}.techStack must be an object")
        return cls(
            project_name=_string(data, "projectName", what),
            project_description=_string(data, "projectDescription", what),
            tech_stack=TechStack.from_dict(data["techStack"]),
            components=_optional_list(data, "components", what),
            data_models=_optional_list(data, "dataModels", what),
            output_path=_optional_string(data, "outputPath", what),
        )


@dataclass(slots=True)
class TaskItem:
    """One implementation task."""

    name: str
    description: str
    acceptance_criteria: List[Any]
    dependencies: List[Any]
    estimate: str
    requirement_ref: Optional[str] = None

    FIELDS = ("name", "description", "acceptanceCriteria", "dependencies", "estimate", "requirementRef")

    @classmethod
    def from_dict(cls, data: Any, index: int = 1) -> "TaskItem":
        what = f"tasks[{index}]"
        data = _require_mapping(data, what)
        _reject_unknown_keys(data, cls.FIELDS, what)
        return cls(
            name=_string(data, "name", what),
            description=_string(data, "description", what),
            acceptance_criteria=_list(data, "acceptanceCriteria", what),
            dependencies=_list(data, "dependencies", what),
            estimate=_string(data, "estimate", what),
            requirement_ref=_optional_string(data, "requirementRef", what),
        )


@dataclass(slots=True)
class TasksRequest:
    """Arguments of ``generate_tasks``."""

    project_name: str
    estimated_duration: str
    key_deliverables: List[Any]
    tasks: List[TaskItem] = field(default_factory=list)
    output_path: Optional[str] = None

    FIELDS = ("projectName", "estimatedDuration", "keyDeliverables", "tasks", "outputPath")

    @classmethod
    def from_dict(cls, data: Any) -> "TasksRequest":
        what = "generate_tasks"
        data = _require_mapping(data, f"{what} arguments")
        _reject_unknown_keys(data, cls.FIELDS, what)
        items = _list(data, "tasks", what, min_items=1)
        return cls(
            project_name=_string(data, "projectName", what),
            estimated_duration=_string(data, "estimatedDuration", what),
            key_deliverables=_list(data, "keyDeliverables", what, min_items=1),
            tasks=[TaskItem.from_dict(item, idx) for idx, item in enumerate(items, start=1)],
            output_path=_optional_string(data, "outputPath", what),
        )


def success_result(message: str, **fields: Any) -> Dict[str, Any]:
    """Build the structured result returned by a successful tool call."""
    return {"success": True, "message": message, **fields}
