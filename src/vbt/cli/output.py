"""Unified CLI output formatting for JSON and human-readable output.

Every command reports results and errors through these helpers so the
text and JSON shapes stay consistent.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from typing import Any, NoReturn

import click

from vbt.cli.exit_codes import ExitCode


@dataclass
class CLIResult:
    """Result object for CLI operations.

    Provides consistent JSON serialization for command results.
    """

    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    exit_code: ExitCode | int = ExitCode.SUCCESS

    def to_json(self) -> str:
        """Serialize to JSON string.

        Returns:
            JSON string with status, message, and data fields. Failed
            results also carry an error object.
        """
        output: dict[str, Any] = {
            "status": "completed" if self.success else "failed",
            "message": self.message,
        }
        if not self.success:
            output["error"] = {
                "code": _code_name(self.exit_code),
                "message": self.message,
            }
        output.update(self.data)
        return json.dumps(output, indent=2)


def _code_name(code: ExitCode | int) -> str:
    if isinstance(code, ExitCode):
        return code.name
    return "UNKNOWN_ERROR"


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.

    Note:
        This function never returns; it always calls sys.exit().
    """
    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": _code_name(code),
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(int(code))


def result_output(
    result: CLIResult,
    json_output: bool = False,
) -> None:
    """Output a result in the appropriate format.

    Args:
        result: The CLIResult to output.
        json_output: Whether to format output as JSON.
    """
    if json_output:
        click.echo(result.to_json())
    else:
        click.echo(result.message)

