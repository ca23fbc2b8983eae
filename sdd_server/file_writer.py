"""Allow-listed, size-limited markdown output."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .config import ALLOWED_DIRS, ALLOWED_EXTENSIONS, DEFAULT_MAX_FILE_SIZE
from .errors import FILE_TOO_LARGE, INVALID_EXTENSION, INVALID_PATH, FileWriteError
from .sdd_logging import log_operation


FILE_MODE = 0o644

logger = logging.getLogger("sdd_server.file_writer")


class SecureFileWriter:
    """Write generated documents under a fixed set of root directories.

    Path, extension and size are all checked before any directory is
    created or any byte is written, so a rejected request leaves the
    filesystem untouched.
    """

    def __init__(
        self,
        allowed_dirs: Iterable[str] = ALLOWED_DIRS,
        allowed_extensions: Iterable[str] = ALLOWED_EXTENSIONS,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        base_dir: Optional[Path | str] = None,
    ):
        self.allowed_dirs: Tuple[str, ...] = tuple(allowed_dirs)
        self.allowed_extensions: Tuple[str, ...] = tuple(allowed_extensions)
        self.max_file_size = max_file_size
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def _base(self) -> Path:
        return self.base_dir if self.base_dir is not None else Path.cwd()

    def _resolve(self, path: Path | str) -> Path:
        try:
            return (self._base() / Path(path).expanduser()).resolve()
        except (ValueError, OSError) as e:
            # embedded NUL bytes, over-long paths
            raise FileWriteError("Output path not allowed", INVALID_PATH) from e

    def allowed_roots(self) -> Tuple[Path, ...]:
        """Return the allow-listed roots resolved against the base directory."""
        return tuple(self._resolve(directory) for directory in self.allowed_dirs)

    def validate_output_path(self, requested_path: str) -> Path:
        """Resolve the requested path and check it against the allow-lists."""
        resolved = self._resolve(requested_path)

        if not any(resolved.is_relative_to(root) for root in self.allowed_roots()):
            raise FileWriteError("Output path not allowed", INVALID_PATH)

        if resolved.suffix not in self.allowed_extensions:
            raise FileWriteError(
                f"File extension {resolved.suffix or '(none)'} not allowed", INVALID_EXTENSION
            )

        return resolved

    def write(self, requested_path: str, content: str) -> Path:
        """Write content to an allowed location and return the resolved path."""
        resolved = self.validate_output_path(requested_path)

        size = len(content.encode("utf-8"))
        if size > self.max_file_size:
            raise FileWriteError(
                f"Content too large ({size} bytes, max {self.max_file_size})", FILE_TOO_LARGE
            )

        with log_operation("write_document", path=str(resolved), size=size):
            resolved.parent.mkdir(parents=True, exist_ok=True)
            resolved.write_text(content, encoding="utf-8")
            os.chmod(resolved, FILE_MODE)

        logger.debug(f"Wrote {size} bytes to {resolved}")
        return resolved
