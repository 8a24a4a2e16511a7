"""FFmpeg-backed encoder implementations.

FFmpegEncoder runs each job as a blocking ffmpeg subprocess with no
timeout. DryRunEncoder builds the same commands, logs them and reports
success without running anything.
"""

from __future__ import annotations

import logging
import shlex
import subprocess  # nosec B404 - only used for exception types
from pathlib import Path

from vbt.core.subprocess_utils import run_command
from vbt.executor.interface import EncodeJob, EncodeMode, EncodeResult

logger = logging.getLogger(__name__)

# Number of trailing stderr lines kept as diagnostics
DIAGNOSTIC_TAIL_LINES = 20


def build_ffmpeg_command(encoder: Path | str, job: EncodeJob) -> list[str]:
    """Build the ffmpeg command line for a job.

    Transcode layout:
        ffmpeg -hide_banner -nostdin -y <hwaccel> -i <input>
               [-vf <filters>] -c:v <codec> <codec args> <audio args> <output>

    Concat layout:
        ffmpeg -hide_banner -nostdin -y -f concat -safe 0 -i <manifest>
               -map 0 -c copy <output>

    Args:
        encoder: Path to the ffmpeg executable.
        job: Job to describe.

    Returns:
        List of command arguments.
    """
    cmd = [str(encoder), "-hide_banner", "-nostdin", "-y"]

    if job.mode is EncodeMode.CONCAT:
        cmd.extend(["-f", "concat", "-safe", "0", "-i", str(job.input_path)])
        # Stream copy only; incompatible inputs must fail, not re-encode
        cmd.extend(["-map", "0", "-c", "copy"])
        cmd.append(str(job.output_path))
        return cmd

    cmd.extend(job.hwaccel_args)
    cmd.extend(["-i", str(job.input_path)])
    if job.filter_expression:
        cmd.extend(["-vf", job.filter_expression])
    cmd.extend(job.codec_args)
    cmd.extend(job.audio_args)
    cmd.append(str(job.output_path))
    return cmd


def command_as_string(cmd: list[str]) -> str:
    """Shell-quoted version of the command for logging and copy-paste."""
    return shlex.join(cmd)


def _tail(text: str, lines: int = DIAGNOSTIC_TAIL_LINES) -> str:
    kept = [line for line in text.splitlines() if line.strip()]
    return "\n".join(kept[-lines:])


class FFmpegEncoder:
    """Encoder that runs ffmpeg as a blocking subprocess."""

    def __init__(self, encoder_path: Path | str) -> None:
        """Initialize the encoder.

        Args:
            encoder_path: Resolved path to the ffmpeg executable.
        """
        self.encoder_path = Path(encoder_path)

    def build_command(self, job: EncodeJob) -> list[str]:
        return build_ffmpeg_command(self.encoder_path, job)

    def run(self, job: EncodeJob) -> EncodeResult:
        """Run ffmpeg for the job and wait for it to exit.

        There is no timeout: a hung ffmpeg blocks the run.
        """
        cmd = self.build_command(job)
        logger.debug("Command: %s", command_as_string(cmd))

        try:
            _stdout, stderr, returncode = run_command(cmd, timeout=None)
        except (OSError, subprocess.SubprocessError) as e:
            logger.error("Could not start %s: %s", self.encoder_path, e)
            return EncodeResult(success=False, returncode=None, diagnostics=str(e))

        diagnostics = _tail(stderr)
        if returncode != 0:
            logger.debug("ffmpeg stderr:\n%s", diagnostics)
            return EncodeResult(
                success=False, returncode=returncode, diagnostics=diagnostics
            )

        return EncodeResult(success=True, returncode=0, diagnostics=diagnostics)


class DryRunEncoder:
    """Encoder that only records and logs the commands it would run."""

    def __init__(self, encoder_path: Path | str) -> None:
        self.encoder_path = Path(encoder_path)
        self.commands: list[list[str]] = []

    def run(self, job: EncodeJob) -> EncodeResult:
        cmd = build_ffmpeg_command(self.encoder_path, job)
        self.commands.append(cmd)
        logger.info("[dry-run] %s", command_as_string(cmd))
        return EncodeResult(success=True, returncode=0, diagnostics="dry run")
