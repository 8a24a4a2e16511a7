"""CLI command for running a batch transcode."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from vbt.cli import configure_cli_logging
from vbt.cli.common import (
    config_override_options,
    exit_for_precondition,
    load_cli_config,
)
from vbt.cli.exit_codes import ExitCode
from vbt.cli.output import CLIResult, result_output
from vbt.exceptions import PreconditionError
from vbt.executor.types import FileJob, JobStatus
from vbt.reports import format_summary, summary_to_dict
from vbt.runner import run_batch

logger = logging.getLogger(__name__)


def _progress_printer(json_output: bool):
    """Build a per-file callback that echoes one line per finished job."""

    def _on_job_done(job: FileJob) -> None:
        if json_output:
            return
        marker = {
            JobStatus.SUCCEEDED: "ok",
            JobStatus.SKIPPED: "skip",
            JobStatus.FAILED: "FAIL",
        }.get(job.status, job.status.value)
        line = f"[{marker}] {job.input_path.name}"
        if job.status is JobStatus.FAILED and job.message:
            line += f": {job.message}"
        click.echo(line)

    return _on_job_done


@click.command("run")
@click.argument("config_path", metavar="CONFIG", type=click.Path(path_type=Path))
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Log the ffmpeg commands without running them.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output the summary in JSON format.",
)
@config_override_options
@click.pass_context
def run_command(
    ctx: click.Context,
    config_path: Path,
    dry_run: bool,
    json_output: bool,
    encoder: str | None,
    overwrite: bool | None,
    hwaccel: str | None,
    workdir: Path | None,
) -> None:
    """Transcode every file matching the configured input mask.

    Files whose output already exists are skipped unless overwriting is
    enabled. A failed file never stops the batch; the exit code is
    non-zero if any file or the concatenation step failed.

    Examples:

        # Run a batch
        vbt run batch.yaml

        # Preview the ffmpeg commands
        vbt run batch.yaml --dry-run

        # Force re-encode with software decoding
        vbt run batch.yaml --overwrite --hwaccel none
    """
    config = load_cli_config(
        config_path, encoder, overwrite, hwaccel, workdir, json_output
    )
    configure_cli_logging(ctx, config.logging)

    try:
        summary = run_batch(
            config,
            on_job_done=_progress_printer(json_output),
            dry_run=dry_run,
        )
    except PreconditionError as e:
        logger.error("%s", e)
        exit_for_precondition(e, json_output)

    success = not summary.has_failures
    result = CLIResult(
        success=success,
        message=format_summary(summary, dry_run=dry_run),
        data={"dry_run": dry_run, "summary": summary_to_dict(summary)},
        exit_code=ExitCode.SUCCESS if success else ExitCode.OPERATION_FAILED,
    )
    result_output(result, json_output)

    if not success:
        sys.exit(int(ExitCode.OPERATION_FAILED))
