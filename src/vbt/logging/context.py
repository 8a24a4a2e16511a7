"""Per-file context for structured logging.

Propagates the identity of the file currently being transcoded using
contextvars, so log records emitted anywhere during a job carry file_id
and file_path without threading them through every call.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_file_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_id", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


def set_file_context(file_id: str, file_path: Path | str | None = None) -> None:
    """Set the current file context.

    Args:
        file_id: File identifier (e.g., "F001", "F002").
        file_path: Full path to file being processed, or None.
    """
    _file_id.set(file_id)
    _file_path.set(str(file_path) if file_path is not None else None)


def clear_file_context() -> None:
    """Clear the current file context."""
    _file_id.set(None)
    _file_path.set(None)


@contextmanager
def file_context(
    file_id: str,
    file_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager for per-file processing context.

    Sets the context on entry and restores the previous one on exit.

    Example:
        with file_context("F001", "/videos/clip.mp4"):
            logger.info("Encoding")  # tagged [F001]
    """
    old_file_id = _file_id.get()
    old_file_path = _file_path.get()
    try:
        set_file_context(file_id, file_path)
        yield
    finally:
        _file_id.set(old_file_id)
        _file_path.set(old_file_path)


def get_file_context() -> tuple[str | None, str | None]:
    """Get current file context.

    Returns:
        Tuple of (file_id, file_path), either may be None.
    """
    return _file_id.get(), _file_path.get()


class FileContextFilter(logging.Filter):
    """Logging filter that injects file context into log records.

    Adds file_id and file_path attributes for JSON output and a compact
    file_tag such as "[F001] " for text output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject file context into log record (never filters anything out)."""
        file_id, file_path = get_file_context()

        record.file_id = file_id
        record.file_path = file_path
        record.file_tag = f"[{file_id}] " if file_id else ""

        return True
