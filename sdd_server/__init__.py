"""SDD server - core package for requirements, design and tasks documents."""

from .config import ServerConfig
from .dispatcher import ServerContext, ToolDispatcher
from .errors import SddError
from .file_writer import SecureFileWriter
from .rate_limiter import RateLimiter
from .validation import InputValidator, sanitize_text

__all__ = [
    "ServerConfig",
    "ServerContext",
    "ToolDispatcher",
    "SddError",
    "SecureFileWriter",
    "RateLimiter",
    "InputValidator",
    "sanitize_text",
]
