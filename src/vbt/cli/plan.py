"""CLI command for previewing the encode plan."""

from __future__ import annotations

from pathlib import Path

import click

from vbt.cli import configure_cli_logging
from vbt.cli.common import (
    config_override_options,
    exit_for_precondition,
    load_cli_config,
)
from vbt.cli.output import CLIResult, result_output
from vbt.exceptions import PreconditionError
from vbt.executor.batch import build_encode_job, build_output_path
from vbt.executor.ffmpeg import build_ffmpeg_command, command_as_string
from vbt.plan.builder import EncodePlan
from vbt.runner import prepare_run


def _format_plan(plan: EncodePlan, command: str, inputs: list[Path]) -> str:
    dims = plan.dimensions
    size = (
        f"{dims.width if dims.width is not None else '?'}x"
        f"{dims.height if dims.height is not None else '?'}"
    )
    lines = [
        "Encode plan:",
        f"  Estimated size: {size} ({dims.source})",
        f"  Filter profile: {plan.profile.name}",
        f"  Filters:        {plan.filter_expression or 'none'}",
        f"  Video codec:    {plan.codec_args.codec} "
        f"({plan.codec_args.family.value}, {plan.codec_args.rate_control})",
        f"  Hwaccel:        {plan.hwaccel_method or 'none'}",
        "",
        f"Command template ({len(inputs)} input file(s)):",
        f"  {command}",
    ]
    for warning in plan.warnings:
        lines.append(f"Warning: {warning}")
    return "\n".join(lines)


@click.command("plan")
@click.argument("config_path", metavar="CONFIG", type=click.Path(path_type=Path))
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
@config_override_options
@click.pass_context
def plan_command(
    ctx: click.Context,
    config_path: Path,
    json_output: bool,
    encoder: str | None,
    overwrite: bool | None,
    hwaccel: str | None,
    workdir: Path | None,
) -> None:
    """Show the filter chain, encoder arguments and inputs for a config.

    Nothing is encoded and nothing is written.
    """
    config = load_cli_config(
        config_path, encoder, overwrite, hwaccel, workdir, json_output
    )
    configure_cli_logging(ctx, config.logging)

    try:
        prep = prepare_run(config)
    except PreconditionError as e:
        exit_for_precondition(e, json_output)

    outputs = [
        build_output_path(path, config.resolved_output_dir, config.output_extension)
        for path in prep.candidates
    ]
    first_job = build_encode_job(prep.plan, prep.candidates[0], outputs[0])
    command = command_as_string(build_ffmpeg_command(prep.encoder_path, first_job))

    result = CLIResult(
        success=True,
        message=_format_plan(prep.plan, command, prep.candidates),
        data={
            "plan": prep.plan.to_dict(),
            "encoder": str(prep.encoder_path),
            "command": command,
            "inputs": [
                {"input": str(path), "output": str(output)}
                for path, output in zip(prep.candidates, outputs)
            ],
        },
    )
    result_output(result, json_output)
