"""Encoder protocol and job/result types.

The batch pipeline only ever talks to an Encoder: it describes a job and
gets back success or failure. The real implementation shells out to
ffmpeg; tests substitute doubles.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol


class EncodeMode(Enum):
    """What the encoder is asked to do."""

    TRANSCODE = "transcode"
    """Re-encode one input through the filter chain."""

    CONCAT = "concat"
    """Stream-copy the files listed in a concat manifest into one output."""


@dataclass(frozen=True)
class EncodeJob:
    """A single encoder invocation."""

    mode: EncodeMode
    input_path: Path
    """Source file, or the manifest file for CONCAT."""

    output_path: Path
    filter_expression: str | None = None
    codec_args: tuple[str, ...] = ()
    hwaccel_args: tuple[str, ...] = ()
    audio_args: tuple[str, ...] = ()


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of an encoder invocation.

    Diagnostics are for humans only; callers branch on success alone.
    """

    success: bool
    returncode: int | None = None
    diagnostics: str = ""


class Encoder(Protocol):
    """Protocol for encoder implementations.

    run() blocks until the encode finishes. It should report failures
    through EncodeResult rather than raising.
    """

    def run(self, job: EncodeJob) -> EncodeResult:
        """Perform the job.

        Args:
            job: The job to execute.

        Returns:
            EncodeResult with success status and diagnostics.
        """
        ...
