"""Sequential per-file batch execution.

Each candidate becomes a FileJob that is skipped, succeeds or fails
independently; one bad file never stops the batch.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from vbt.config.models import TranscodeConfig
from vbt.executor.interface import EncodeJob, EncodeMode, Encoder
from vbt.executor.types import BatchResult, FileJob, JobStatus, RunSummary
from vbt.logging.context import file_context
from vbt.plan.builder import EncodePlan

logger = logging.getLogger(__name__)

JobCallback = Callable[[FileJob], None]


def build_output_path(input_path: Path, output_dir: Path, extension: str) -> Path:
    """Output path for an input: same stem, configured extension.

    Example:
        build_output_path(Path("/in/clip01.mov"), Path("/out"), ".mp4")
        -> Path("/out/clip01.mp4")
    """
    return output_dir / f"{input_path.stem}{extension}"


def build_encode_job(plan: EncodePlan, input_path: Path, output_path: Path) -> EncodeJob:
    """Transcode job for one input under the run-wide plan."""
    return EncodeJob(
        mode=EncodeMode.TRANSCODE,
        input_path=input_path,
        output_path=output_path,
        filter_expression=plan.filter_expression,
        codec_args=tuple(plan.codec_args.to_list()),
        hwaccel_args=plan.hwaccel_args,
        audio_args=plan.audio_args,
    )


class BatchExecutor:
    """Runs the encode plan over every candidate, one file at a time."""

    def __init__(
        self,
        encoder: Encoder,
        plan: EncodePlan,
        config: TranscodeConfig,
        on_job_done: JobCallback | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            encoder: Encoder used for every non-skipped job.
            plan: Run-wide encode plan.
            config: Run configuration (output dir, overwrite policy, concat).
            on_job_done: Optional callback invoked with each finished job.
        """
        self.encoder = encoder
        self.plan = plan
        self.config = config
        self.on_job_done = on_job_done

    def make_job(self, input_path: Path) -> FileJob:
        return FileJob(
            input_path=input_path,
            output_path=build_output_path(
                input_path,
                self.config.resolved_output_dir,
                self.config.output_extension,
            ),
        )

    def encode_job(self, job: FileJob) -> EncodeJob:
        return build_encode_job(self.plan, job.input_path, job.output_path)

    def run(self, candidates: Sequence[Path]) -> BatchResult:
        """Process candidates in the given order.

        The order is preserved in the manifest, so callers must pass a
        stable ordering.

        Args:
            candidates: Input files, already ordered.

        Returns:
            BatchResult with the summary and the ordered manifest.
        """
        summary = RunSummary(total=len(candidates))
        manifest: list[Path] = []

        for index, input_path in enumerate(candidates, start=1):
            job = self.make_job(input_path)
            with file_context(f"F{index:03d}", input_path):
                self._process(job, index, summary.total)

            summary.record(job)
            if job.status is JobStatus.SUCCEEDED and self.config.concat.enabled:
                manifest.append(job.output_path.resolve())
            if self.on_job_done is not None:
                self.on_job_done(job)

        logger.info(
            "Batch finished: total=%d succeeded=%d skipped=%d failed=%d",
            summary.total,
            summary.succeeded,
            summary.skipped,
            summary.failed,
        )
        return BatchResult(summary=summary, manifest=manifest)

    def _process(self, job: FileJob, index: int, total: int) -> None:
        name = job.input_path.name

        if job.output_path.exists() and not self.config.overwrite_existing:
            job.transition(JobStatus.SKIPPED, "output exists")
            logger.info(
                "[%d/%d] Skipping %s: %s already exists",
                index,
                total,
                name,
                job.output_path.name,
                extra=_outcome(job),
            )
            return

        logger.info("[%d/%d] Encoding %s -> %s", index, total, name, job.output_path)
        start = time.monotonic()
        try:
            result = self.encoder.run(self.encode_job(job))
        except Exception as e:
            job.transition(JobStatus.FAILED, f"encoder error: {e}")
            logger.exception(
                "Encoder raised while processing %s",
                name,
                extra=_outcome(job, elapsed=time.monotonic() - start),
            )
            return

        elapsed = time.monotonic() - start
        if result.success:
            job.transition(JobStatus.SUCCEEDED)
            logger.info(
                "Encoded %s in %.1fs",
                name,
                elapsed,
                extra=_outcome(job, result.returncode, elapsed),
            )
        else:
            message = f"encoder exited with code {result.returncode}"
            if result.diagnostics:
                last_line = result.diagnostics.splitlines()[-1]
                message = f"{message}: {last_line}"
            job.transition(JobStatus.FAILED, message)
            logger.error(
                "Failed to encode %s (%s)",
                name,
                message,
                extra=_outcome(job, result.returncode, elapsed),
            )


def _outcome(
    job: FileJob, returncode: int | None = None, elapsed: float | None = None
) -> dict[str, object]:
    """Structured fields attached to a job's final log record."""
    return {
        "status": job.status.value,
        "output_path": str(job.output_path),
        "returncode": returncode,
        "elapsed": round(elapsed, 3) if elapsed is not None else None,
    }
