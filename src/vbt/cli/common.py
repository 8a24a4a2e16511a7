"""Options and helpers shared by the config-driven commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click

from vbt.cli.exit_codes import ExitCode
from vbt.cli.output import error_exit
from vbt.config.loader import ConfigOverrides, load_config
from vbt.config.models import TranscodeConfig
from vbt.exceptions import (
    ConfigError,
    NoInputFilesError,
    OutputCollisionError,
    OutputDirectoryError,
    PreconditionError,
    ToolNotFoundError,
)


_PRECONDITION_EXIT_CODES: dict[type[PreconditionError], ExitCode] = {
    ToolNotFoundError: ExitCode.TOOL_NOT_AVAILABLE,
    NoInputFilesError: ExitCode.TARGET_NOT_FOUND,
    OutputCollisionError: ExitCode.INVALID_ARGUMENT,
    OutputDirectoryError: ExitCode.GENERAL_ERROR,
}


def config_override_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the CLI options that override config file values."""
    options = [
        click.option(
            "--encoder",
            "encoder",
            default=None,
            help="ffmpeg executable name or path (overrides encoder_path).",
        ),
        click.option(
            "--overwrite/--no-overwrite",
            default=None,
            help="Re-encode files whose output already exists.",
        ),
        click.option(
            "--hwaccel",
            default=None,
            help="Hardware decode: auto, none, or an ffmpeg method (e.g. cuda).",
        ),
        click.option(
            "--workdir",
            type=click.Path(file_okay=False, path_type=Path, resolve_path=True),
            default=None,
            help="Directory the input mask and output_dir resolve against.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def load_cli_config(
    config_path: Path,
    encoder: str | None,
    overwrite: bool | None,
    hwaccel: str | None,
    workdir: Path | None,
    json_output: bool = False,
) -> TranscodeConfig:
    """Load the config file with CLI overrides, exiting on error."""
    overrides = ConfigOverrides(
        encoder_path=encoder,
        hwaccel=hwaccel,
        overwrite_existing=overwrite,
        working_dir=workdir,
    )
    try:
        return load_config(config_path, overrides=overrides)
    except ConfigError as e:
        error_exit(e.message, ExitCode.CONFIG_ERROR, json_output)


def exit_for_precondition(error: PreconditionError, json_output: bool) -> NoReturn:
    """Report a precondition failure with its mapped exit code."""
    code = _PRECONDITION_EXIT_CODES.get(type(error), ExitCode.GENERAL_ERROR)
    error_exit(str(error), code, json_output)
