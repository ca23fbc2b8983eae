"""Tool dispatch: rate limiting, routing and structured error results.

All process-wide state (configuration, the rate limiter's client map) lives
in a :class:`ServerContext` handed to the dispatcher, so tests can build as
many isolated servers as they like.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from .config import ServerConfig
from .errors import UNKNOWN_ERROR, UNKNOWN_TOOL, InvalidArgsError, RateLimitError, SddError
from .file_writer import SecureFileWriter
from .generators import render_design, render_requirements, render_tasks
from .guide import render_guide
from .models import DesignRequest, RequirementsRequest, TasksRequest, success_result
from .rate_limiter import DEFAULT_CLIENT_ID, RateLimiter
from .sdd_logging import log_document_generation, log_error_with_context, log_performance
from .validation import InputValidator


DEFAULT_REQUIREMENTS_PATH = "./requirements.md"
DEFAULT_DESIGN_PATH = "./design.md"
DEFAULT_TASKS_PATH = "./tasks.md"

logger = logging.getLogger("sdd_server.dispatcher")


@dataclass
class ServerContext:
    """Everything a dispatcher needs, built once per server."""

    config: ServerConfig
    validator: InputValidator
    file_writer: SecureFileWriter
    rate_limiter: RateLimiter = field(default_factory=RateLimiter)

    @classmethod
    def from_config(cls, config: ServerConfig, rate_limiter: Optional[RateLimiter] = None) -> "ServerContext":
        return cls(
            config=config,
            validator=InputValidator(max_input_length=config.max_input_length),
            file_writer=SecureFileWriter(
                allowed_dirs=config.allowed_dirs,
                allowed_extensions=config.allowed_extensions,
                max_file_size=config.max_file_size,
            ),
            rate_limiter=rate_limiter or RateLimiter(),
        )


class ToolDispatcher:
    """Route tool calls to the document generators."""

    def __init__(self, context: ServerContext):
        self.context = context
        self._handlers: Dict[str, Callable[[Any], Dict[str, Any]]] = {
            "generate_requirements": self.generate_requirements,
            "generate_design": self.generate_design,
            "generate_tasks": self.generate_tasks,
            "sdd_guide": self.sdd_guide,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    def dispatch(
        self,
        tool_name: str,
        arguments: Optional[Mapping[str, Any]],
        client_id: str = DEFAULT_CLIENT_ID,
    ) -> Dict[str, Any]:
        """Run one tool call and return its structured result. Never raises."""
        try:
            config = self.context.config
            if not self.context.rate_limiter.is_allowed(
                client_id,
                max_requests=config.rate_limit_max_requests,
                window_ms=config.rate_limit_window_ms,
            ):
                raise RateLimitError()

            handler = self._handlers.get(tool_name)
            if handler is None:
                raise SddError(f"Unknown tool: {tool_name}", UNKNOWN_TOOL)

            return handler(arguments if arguments is not None else {})

        except SddError as e:
            logger.warning(f"Tool '{tool_name}' rejected: {e}")
            return e.to_dict()
        except Exception as e:
            log_error_with_context(e, {"operation": tool_name, "client_id": client_id})
            return SddError(
                f"Unexpected {type(e).__name__} while running {tool_name}", UNKNOWN_ERROR
            ).to_dict()

    @log_performance("generate_requirements")
    def generate_requirements(self, arguments: Any) -> Dict[str, Any]:
        request = RequirementsRequest.from_dict(arguments)
        content = render_requirements(self.context.validator, request)
        path = self.context.file_writer.write(request.output_path or DEFAULT_REQUIREMENTS_PATH, content)
        log_document_generation("requirements", path, requirement_count=len(request.requirements))
        return success_result(
            f"Requirements document generated successfully at: {path}",
            path=str(path),
        )

    @log_performance("generate_design")
    def generate_design(self, arguments: Any) -> Dict[str, Any]:
        request = DesignRequest.from_dict(arguments)
        content = render_design(self.context.validator, request)
        path = self.context.file_writer.write(request.output_path or DEFAULT_DESIGN_PATH, content)
        log_document_generation("design", path)
        return success_result(
            f"Design document generated successfully at: {path}",
            path=str(path),
        )

    @log_performance("generate_tasks")
    def generate_tasks(self, arguments: Any) -> Dict[str, Any]:
        request = TasksRequest.from_dict(arguments)
        content = render_tasks(self.context.validator, request)
        path = self.context.file_writer.write(request.output_path or DEFAULT_TASKS_PATH, content)
        log_document_generation("tasks", path, task_count=len(request.tasks))
        return success_result(
            f"Tasks document generated successfully at: {path}",
            path=str(path),
        )

    @log_performance("sdd_guide")
    def sdd_guide(self, arguments: Any) -> Dict[str, Any]:
        if not isinstance(arguments, Mapping) or set(arguments) != {"query"}:
            raise InvalidArgsError("sdd_guide takes exactly one argument: query")
        if not isinstance(arguments["query"], str):
            raise InvalidArgsError("sdd_guide.query must be a string")
        content = render_guide(self.context.validator, arguments["query"])
        return success_result("SDD guidance", content=content)
