"""Batch run orchestration.

Checks every precondition, derives the encode plan once, then runs the
per-file batch followed by the optional concatenation step.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

from vbt.config.models import TranscodeConfig
from vbt.exceptions import (
    NoInputFilesError,
    OutputCollisionError,
    OutputDirectoryError,
)
from vbt.executor.batch import BatchExecutor, JobCallback, build_output_path
from vbt.executor.concat import ConcatAggregator, manifest_path_for
from vbt.executor.ffmpeg import DryRunEncoder, FFmpegEncoder
from vbt.executor.interface import Encoder
from vbt.executor.types import RunSummary
from vbt.plan.builder import EncodePlan, build_encode_plan
from vbt.scanner import discover_inputs
from vbt.tools.hwaccel import resolve_hwaccel_method
from vbt.tools.resolve import resolve_encoder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunPreparation:
    """Everything resolved before the first file is touched."""

    encoder_path: Path
    candidates: list[Path]
    plan: EncodePlan


def prepare_run(config: TranscodeConfig) -> RunPreparation:
    """Resolve the encoder, discover inputs and build the encode plan.

    Nothing is written to disk.

    Raises:
        ToolNotFoundError: If the encoder cannot be found.
        NoInputFilesError: If the input mask matches nothing.
        OutputCollisionError: If two inputs map to one output path, or an
            output would replace an input or the concatenated file.
    """
    encoder_path = resolve_encoder(config.encoder_path)

    candidates = discover_inputs(
        config.working_dir,
        config.input_mask,
        exclude_dir=config.resolved_output_dir,
    )
    if not candidates:
        raise NoInputFilesError(config.working_dir, config.input_mask)
    logger.info(
        "Found %d input file(s) matching %s", len(candidates), config.input_mask
    )
    check_output_paths(config, candidates)

    hwaccel_method = resolve_hwaccel_method(config.hwaccel, encoder_path)
    plan = build_encode_plan(config, hwaccel_method=hwaccel_method)
    return RunPreparation(encoder_path=encoder_path, candidates=candidates, plan=plan)


def check_output_paths(config: TranscodeConfig, candidates: list[Path]) -> None:
    """Reject runs where outputs would collide or overwrite their inputs.

    Raises:
        OutputCollisionError: Listing every contested output path.
    """
    output_dir = config.resolved_output_dir.resolve()
    claims: dict[Path, list[str]] = defaultdict(list)
    for path in candidates:
        output = build_output_path(path, output_dir, config.output_extension)
        claims[output].append(str(path))
    if config.concat.enabled:
        claims[output_dir / config.concat.output_name].append("concatenated output")

    inputs = set(candidates)
    conflicts: dict[Path, list[str]] = {}
    for output, sources in claims.items():
        if output in inputs:
            sources = [*sources, "existing input"]
        if len(sources) > 1:
            conflicts[output] = sources
    if conflicts:
        raise OutputCollisionError(conflicts)


def _prepare_output_dir(output_dir: Path) -> None:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(output_dir, e.strerror or str(e)) from e
    if not output_dir.is_dir():
        raise OutputDirectoryError(output_dir, "not a directory")

    stale = manifest_path_for(output_dir)
    try:
        stale.unlink(missing_ok=True)
    except OSError as e:
        raise OutputDirectoryError(output_dir, f"cannot remove {stale.name}: {e}") from e


def run_batch(
    config: TranscodeConfig,
    encoder: Encoder | None = None,
    *,
    on_job_done: JobCallback | None = None,
    dry_run: bool = False,
) -> RunSummary:
    """Run a full batch: preconditions, per-file encodes, concatenation.

    Args:
        config: Run configuration.
        encoder: Encoder to use. Defaults to an FFmpegEncoder for the
            resolved executable (a DryRunEncoder when dry_run is set).
        on_job_done: Optional callback invoked after each file.
        dry_run: Log encoder commands without running them or writing
            anything to the output directory.

    Returns:
        The finalized RunSummary.

    Raises:
        PreconditionError: If the run cannot start. No output has been
            written in that case.
    """
    prep = prepare_run(config)

    output_dir = config.resolved_output_dir
    if not dry_run:
        _prepare_output_dir(output_dir)

    if encoder is None:
        if dry_run:
            encoder = DryRunEncoder(prep.encoder_path)
        else:
            encoder = FFmpegEncoder(prep.encoder_path)

    batch = BatchExecutor(encoder, prep.plan, config, on_job_done=on_job_done)
    result = batch.run(prep.candidates)

    aggregator = ConcatAggregator(encoder, config, write_files=not dry_run)
    return aggregator.aggregate(result.summary, result.manifest)
