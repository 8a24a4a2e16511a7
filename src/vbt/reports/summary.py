"""Render a RunSummary for humans (text) or machines (dict/JSON)."""

from __future__ import annotations

from typing import Any

from vbt.executor.types import ConcatStatus, RunSummary


def summary_to_dict(summary: RunSummary) -> dict[str, Any]:
    """Serialize a summary for JSON output.

    Returns:
        Dictionary with counters, concat outcome and per-file results.
    """
    return {
        "total": summary.total,
        "succeeded": summary.succeeded,
        "skipped": summary.skipped,
        "failed": summary.failed,
        "concat": {
            "status": summary.concat_status.value,
            "output": str(summary.concat_output) if summary.concat_output else None,
            "message": summary.concat_message or None,
        },
        "files": [
            {
                "input": str(job.input_path),
                "output": str(job.output_path),
                "status": job.status.value,
                "message": job.message or None,
            }
            for job in summary.jobs
        ],
    }


def format_summary(summary: RunSummary, dry_run: bool = False) -> str:
    """Format a summary as a short text report.

    Args:
        summary: Finalized run summary.
        dry_run: Label the report as a dry run.

    Returns:
        Multi-line report.
    """
    title = "Dry run summary" if dry_run else "Run summary"
    lines = [
        f"{title}:",
        f"  Total:     {summary.total}",
        f"  Succeeded: {summary.succeeded}",
        f"  Skipped:   {summary.skipped}",
        f"  Failed:    {summary.failed}",
    ]

    if summary.concat_status is not ConcatStatus.NOT_APPLICABLE:
        concat_line = f"  Concat:    {summary.concat_status.value}"
        if summary.concat_output is not None:
            concat_line += f" ({summary.concat_output})"
        if summary.concat_message:
            concat_line += f" - {summary.concat_message}"
        lines.append(concat_line)

    failed = summary.failed_jobs
    if failed:
        lines.append("")
        lines.append("Failed files:")
        for job in failed:
            lines.append(f"  {job.input_path.name}: {job.message}")

    return "\n".join(lines)
