"""Run summary reporting."""

from vbt.reports.summary import format_summary, summary_to_dict

__all__ = [
    "format_summary",
    "summary_to_dict",
]
