"""Shared low-level utilities."""

from vbt.core.subprocess_utils import run_command

__all__ = ["run_command"]
