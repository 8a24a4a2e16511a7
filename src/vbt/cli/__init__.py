"""CLI module for vbt."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click

from vbt.config.models import LoggingConfig
from vbt.logging import configure_logging

logger = logging.getLogger(__name__)


def configure_cli_logging(ctx: click.Context, base: LoggingConfig | None = None) -> None:
    """Configure logging from a base config plus the global CLI options.

    Called once by the group with defaults, and again by commands once
    the config file's logging section is known.

    Args:
        ctx: Click context carrying the global options in ctx.obj.
        base: Logging section of the loaded config (defaults if None).
    """
    obj = ctx.find_root().obj or {}
    overrides = {
        "level": obj.get("log_level"),
        "file": obj.get("log_file"),
        "format": "json" if obj.get("log_json") else None,
    }
    logging_config = replace(
        base or LoggingConfig(),
        **{key: value for key, value in overrides.items() if value is not None},
    )
    configure_logging(logging_config)


@click.group()
@click.version_option(package_name="video-batch-transcoder")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """vbt - Batch transcode a directory of videos with ffmpeg."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.lower() if log_level else None
    ctx.obj["log_file"] = log_file
    ctx.obj["log_json"] = log_json

    configure_cli_logging(ctx)


# Defer import to avoid circular dependency
def _register_commands() -> None:
    from vbt.cli.crop import crop_command
    from vbt.cli.plan import plan_command
    from vbt.cli.run import run_command

    main.add_command(run_command)
    main.add_command(plan_command)
    main.add_command(crop_command)


_register_commands()
