"""Batch execution: encoder interface, per-file batch, concatenation.

Module organization:
- interface.py: Encoder protocol, EncodeJob, EncodeResult
- types.py: FileJob, RunSummary and status enums
- ffmpeg.py: ffmpeg command building and subprocess/dry-run encoders
- batch.py: BatchExecutor
- concat.py: ConcatAggregator and manifest helpers
"""

from vbt.executor.batch import BatchExecutor, build_encode_job, build_output_path
from vbt.executor.concat import (
    MANIFEST_NAME,
    ConcatAggregator,
    escape_concat_path,
    manifest_path_for,
    render_manifest,
)
from vbt.executor.ffmpeg import DryRunEncoder, FFmpegEncoder, build_ffmpeg_command
from vbt.executor.interface import EncodeJob, EncodeMode, EncodeResult, Encoder
from vbt.executor.types import (
    BatchResult,
    ConcatStatus,
    FileJob,
    JobStatus,
    RunSummary,
)

__all__ = [
    # Interface
    "EncodeJob",
    "EncodeMode",
    "EncodeResult",
    "Encoder",
    # Types
    "BatchResult",
    "ConcatStatus",
    "FileJob",
    "JobStatus",
    "RunSummary",
    # Encoders
    "DryRunEncoder",
    "FFmpegEncoder",
    "build_ffmpeg_command",
    # Stages
    "BatchExecutor",
    "ConcatAggregator",
    "build_encode_job",
    "build_output_path",
    # Manifest helpers
    "MANIFEST_NAME",
    "escape_concat_path",
    "manifest_path_for",
    "render_manifest",
]
