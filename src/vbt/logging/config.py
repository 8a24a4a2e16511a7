"""Root logger setup for batch runs.

configure_logging() replaces any installed root handlers with a rotating
log file, a stderr stream, or both. All handlers share one formatter and
the per-file context filter, so every line written while a file is being
encoded carries its ``[F001]`` tag.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from vbt.logging.context import FileContextFilter
from vbt.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from vbt.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(file_tag)s%(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def make_formatter(config: LoggingConfig) -> logging.Formatter:
    """Formatter for the configured format (text or json)."""
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def open_log_file(config: LoggingConfig) -> RotatingFileHandler | None:
    """Open the rotating log file, or return None if none is usable.

    A file that cannot be opened is reported on stderr and the run
    carries on logging to stderr only.
    """
    if config.file is None:
        return None
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: cannot open log file {path}: {e}; using stderr\n")
        return None


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Install root handlers for a run.

    Args:
        config: Logging configuration.

    Returns:
        The handlers now attached to the root logger.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    root.setLevel(config.level.upper())

    handlers: list[logging.Handler] = []
    file_handler = open_log_file(config)
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = make_formatter(config)
    context_filter = FileContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)
    return handlers
