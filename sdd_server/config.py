"""Server configuration loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple


DEFAULT_SERVER_NAME = "sdd-server"
DEFAULT_SERVER_VERSION = "0.1.0"
DEFAULT_MAX_FILE_SIZE = 1024 * 1024
DEFAULT_MAX_INPUT_LENGTH = 10000
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 100
DEFAULT_RATE_LIMIT_WINDOW_MS = 60000

ALLOWED_EXTENSIONS: Tuple[str, ...] = (".md", ".txt")
ALLOWED_DIRS: Tuple[str, ...] = ("./output", "./temp", "./")


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got '{raw}'.")
    if value <= 0:
        raise ValueError(f"Environment variable {name} must be positive, got {value}.")
    return value


@dataclass(frozen=True)
class ServerConfig:
    """Limits and identity strings for one server process."""

    server_name: str = DEFAULT_SERVER_NAME
    server_version: str = DEFAULT_SERVER_VERSION
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH
    rate_limit_max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS
    rate_limit_window_ms: int = DEFAULT_RATE_LIMIT_WINDOW_MS
    allowed_extensions: Tuple[str, ...] = ALLOWED_EXTENSIONS
    allowed_dirs: Tuple[str, ...] = ALLOWED_DIRS
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build a config from ``os.environ`` (or the given mapping).

        Unset variables fall back to their defaults. Numeric variables that
        are not positive integers raise ``ValueError`` naming the variable.
        """
        env = os.environ if env is None else env
        log_file = env.get("SDD_LOG_FILE")
        return cls(
            server_name=env.get("SERVER_NAME") or DEFAULT_SERVER_NAME,
            server_version=env.get("SERVER_VERSION") or DEFAULT_SERVER_VERSION,
            max_file_size=_positive_int(env, "MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE),
            max_input_length=_positive_int(env, "MAX_INPUT_LENGTH", DEFAULT_MAX_INPUT_LENGTH),
            rate_limit_max_requests=_positive_int(
                env, "RATE_LIMIT_MAX_REQUESTS", DEFAULT_RATE_LIMIT_MAX_REQUESTS
            ),
            rate_limit_window_ms=_positive_int(
                env, "RATE_LIMIT_WINDOW_MS", DEFAULT_RATE_LIMIT_WINDOW_MS
            ),
            log_level=(env.get("SDD_LOG_LEVEL") or "INFO").upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
        )
