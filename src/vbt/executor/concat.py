"""Stream-copy concatenation of successful outputs.

Outputs are joined with ffmpeg's concat demuxer and ``-c copy``; nothing
is re-encoded, so inputs with mismatched streams make the step fail.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from vbt.config.models import TranscodeConfig
from vbt.executor.interface import EncodeJob, EncodeMode, Encoder
from vbt.executor.types import ConcatStatus, RunSummary

logger = logging.getLogger(__name__)

MANIFEST_NAME = ".vbt_concat_list.txt"


def manifest_path_for(output_dir: Path) -> Path:
    """Location of the run's concat manifest scratch file."""
    return output_dir / MANIFEST_NAME


def escape_concat_path(path: Path) -> str:
    """Quote a path for a concat demuxer ``file`` directive.

    Single quotes close the quoted string, emit an escaped quote and
    reopen it: ``it's.mp4`` -> ``'it'\\''s.mp4'``.
    """
    return "'" + str(path).replace("'", "'\\''") + "'"


def render_manifest(paths: Sequence[Path]) -> str:
    """Render concat demuxer manifest text, one entry per path in order."""
    return "".join(f"file {escape_concat_path(p)}\n" for p in paths)


def write_manifest(paths: Sequence[Path], manifest_path: Path) -> Path:
    """Write the manifest file, replacing any previous contents."""
    manifest_path.write_text(render_manifest(paths), encoding="utf-8")
    logger.debug("Wrote concat manifest with %d entries: %s", len(paths), manifest_path)
    return manifest_path


class ConcatAggregator:
    """Finalizes a RunSummary by concatenating successful outputs."""

    def __init__(
        self,
        encoder: Encoder,
        config: TranscodeConfig,
        write_files: bool = True,
    ) -> None:
        """Initialize the aggregator.

        Args:
            encoder: Encoder invoked in CONCAT mode.
            config: Run configuration (concat settings, output dir).
            write_files: Write the manifest to disk. Dry runs pass False.
        """
        self.encoder = encoder
        self.config = config
        self.write_files = write_files

    @property
    def output_path(self) -> Path:
        return self.config.resolved_output_dir / self.config.concat.output_name

    def aggregate(self, summary: RunSummary, manifest: Sequence[Path]) -> RunSummary:
        """Concatenate the manifest if enabled and non-empty.

        Per-file statuses are never changed here; a concat failure is only
        reflected in summary.concat_status.

        Args:
            summary: Summary from the batch stage.
            manifest: Successful outputs in success order.

        Returns:
            The same summary with concat fields set.
        """
        if not self.config.concat.enabled:
            summary.concat_status = ConcatStatus.NOT_APPLICABLE
            return summary

        if summary.succeeded == 0 or not manifest:
            logger.warning("Concatenation skipped: no successful outputs")
            summary.concat_status = ConcatStatus.SKIPPED
            summary.concat_message = "no successful outputs"
            return summary

        manifest_path = manifest_path_for(self.config.resolved_output_dir)
        if self.write_files:
            try:
                write_manifest(manifest, manifest_path)
            except OSError as e:
                logger.error("Could not write concat manifest %s: %s", manifest_path, e)
                summary.concat_status = ConcatStatus.FAILED
                summary.concat_message = f"manifest not written: {e}"
                return summary

        logger.info(
            "Concatenating %d file(s) into %s", len(manifest), self.output_path
        )
        summary.concat_output = self.output_path
        try:
            result = self.encoder.run(
                EncodeJob(
                    mode=EncodeMode.CONCAT,
                    input_path=manifest_path,
                    output_path=self.output_path,
                )
            )
        except Exception as e:
            logger.exception("Encoder raised while concatenating: %s", e)
            summary.concat_status = ConcatStatus.FAILED
            summary.concat_message = f"encoder error: {e}"
            return summary

        if result.success:
            summary.concat_status = ConcatStatus.SUCCEEDED
            logger.info("Concatenation complete: %s", self.output_path)
        else:
            summary.concat_status = ConcatStatus.FAILED
            last_line = result.diagnostics.splitlines()[-1] if result.diagnostics else ""
            summary.concat_message = (
                f"encoder exited with code {result.returncode}"
                + (f": {last_line}" if last_line else "")
            )
            logger.error("Concatenation failed (%s)", summary.concat_message)
        return summary
