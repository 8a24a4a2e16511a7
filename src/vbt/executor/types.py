"""Batch run data types: per-file jobs and the run summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class JobStatus(Enum):
    """Lifecycle of a FileJob. Every state but PENDING is terminal."""

    PENDING = "pending"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ConcatStatus(Enum):
    """Outcome of the concatenation step."""

    NOT_APPLICABLE = "not_applicable"
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class FileJob:
    """One candidate input and what happened to it."""

    input_path: Path
    output_path: Path
    status: JobStatus = JobStatus.PENDING
    message: str = ""

    def transition(self, status: JobStatus, message: str = "") -> None:
        """Move out of PENDING into a terminal status.

        Raises:
            ValueError: If the job already has a terminal status, or the
                target status is PENDING.
        """
        if self.status is not JobStatus.PENDING:
            raise ValueError(
                f"{self.input_path.name} is already {self.status.value}; "
                f"cannot become {status.value}"
            )
        if status is JobStatus.PENDING:
            raise ValueError("Cannot transition a job back to pending")
        self.status = status
        self.message = message


@dataclass
class RunSummary:
    """Aggregate outcome of a batch run.

    Counters are updated only through record(); concat fields are set
    by the concatenation step.
    """

    total: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    concat_status: ConcatStatus = ConcatStatus.NOT_APPLICABLE
    concat_output: Path | None = None
    concat_message: str = ""
    jobs: list[FileJob] = field(default_factory=list)

    def record(self, job: FileJob) -> None:
        """Count a job that has reached a terminal status."""
        if job.status is JobStatus.SUCCEEDED:
            self.succeeded += 1
        elif job.status is JobStatus.SKIPPED:
            self.skipped += 1
        elif job.status is JobStatus.FAILED:
            self.failed += 1
        else:
            raise ValueError(f"Cannot record pending job {job.input_path}")
        self.jobs.append(job)

    @property
    def is_consistent(self) -> bool:
        """True when every candidate has exactly one terminal outcome."""
        return self.succeeded + self.skipped + self.failed == self.total

    @property
    def has_failures(self) -> bool:
        return self.failed > 0 or self.concat_status is ConcatStatus.FAILED

    @property
    def failed_jobs(self) -> list[FileJob]:
        return [job for job in self.jobs if job.status is JobStatus.FAILED]


@dataclass
class BatchResult:
    """What the batch stage hands to the concatenation stage."""

    summary: RunSummary
    manifest: list[Path] = field(default_factory=list)
    """Absolute output paths in the order they succeeded. Append-only."""
