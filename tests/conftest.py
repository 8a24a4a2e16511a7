"""Shared test fixtures for vbt."""

from __future__ import annotations

import logging
import stat
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from vbt.config.models import TranscodeConfig
from vbt.executor.interface import EncodeJob, EncodeMode, EncodeResult
from vbt.logging.context import clear_file_context

FAKE_FFMPEG_SCRIPT = """#!/bin/sh
# Stand-in for ffmpeg: fails when an argument contains "__corrupt__".
case "$*" in
  *-hwaccels*) printf 'Hardware acceleration methods:\\nvdpau\\ncuda\\n'; exit 0;;
  *__corrupt__*) echo "Invalid data found when processing input" >&2; exit 1;;
esac
exit 0
"""


class FakeEncoder:
    """Encoder double that records jobs and writes placeholder outputs.

    Jobs whose input file name is in fail_names fail; jobs whose input
    name is in raise_names raise RuntimeError, as does
    the concat job when concat_raises is set.
    """

    def __init__(
        self,
        fail_names: set[str] | None = None,
        raise_names: set[str] | None = None,
        concat_succeeds: bool = True,
        concat_raises: bool = False,
    ) -> None:
        self.fail_names = fail_names or set()
        self.raise_names = raise_names or set()
        self.concat_succeeds = concat_succeeds
        self.concat_raises = concat_raises
        self.jobs: list[EncodeJob] = []

    @property
    def transcode_jobs(self) -> list[EncodeJob]:
        return [job for job in self.jobs if job.mode is EncodeMode.TRANSCODE]

    @property
    def concat_jobs(self) -> list[EncodeJob]:
        return [job for job in self.jobs if job.mode is EncodeMode.CONCAT]

    def run(self, job: EncodeJob) -> EncodeResult:
        self.jobs.append(job)
        if job.mode is EncodeMode.CONCAT:
            if self.concat_raises:
                raise RuntimeError("concat crashed")
            if not self.concat_succeeds:
                return EncodeResult(
                    success=False, returncode=1, diagnostics="codec mismatch"
                )
            job.output_path.write_bytes(b"concat")
            return EncodeResult(success=True, returncode=0)

        name = job.input_path.name
        if name in self.raise_names:
            raise RuntimeError(f"encoder crashed on {name}")
        if name in self.fail_names:
            return EncodeResult(
                success=False, returncode=1, diagnostics="line one\nmoov atom not found"
            )
        job.output_path.parent.mkdir(parents=True, exist_ok=True)
        job.output_path.write_bytes(b"encoded")
        return EncodeResult(success=True, returncode=0)


@pytest.fixture(autouse=True)
def _isolate_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging and clear file context."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    clear_file_context()


@pytest.fixture
def fake_ffmpeg(tmp_path: Path) -> Path:
    """Create an executable ffmpeg stand-in script."""
    path = tmp_path / "bin" / "ffmpeg"
    path.parent.mkdir()
    path.write_text(FAKE_FFMPEG_SCRIPT)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    """Working directory with three input clips."""
    work = tmp_path / "work"
    work.mkdir()
    for name in ("a.mp4", "b.mp4", "c.mp4"):
        (work / name).write_bytes(b"video")
    return work


@pytest.fixture
def make_config(input_dir: Path) -> Callable[..., TranscodeConfig]:
    """Factory for TranscodeConfig anchored at input_dir."""

    def _make(**kwargs: Any) -> TranscodeConfig:
        kwargs.setdefault("working_dir", input_dir)
        kwargs.setdefault("output_dir", Path("out"))
        return TranscodeConfig(**kwargs)

    return _make


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write YAML text to a config file and return its path."""

    def _write(text: str, name: str = "batch.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def make_encoder() -> Callable[..., FakeEncoder]:
    """Factory for FakeEncoder with configurable failures."""
    return FakeEncoder
