"""Structured logging module for vbt.

Provides configurable logging with JSON format support and file rotation.
Includes per-file context so every line logged while a job runs is tagged.
"""

from vbt.logging.config import configure_logging
from vbt.logging.context import (
    FileContextFilter,
    clear_file_context,
    file_context,
    get_file_context,
    set_file_context,
)
from vbt.logging.handlers import JSONFormatter

__all__ = [
    "FileContextFilter",
    "JSONFormatter",
    "clear_file_context",
    "configure_logging",
    "file_context",
    "get_file_context",
    "set_file_context",
]
