"""JSON log formatter for batch runs.

Every record becomes one JSON object per line. Records emitted while a
file is being processed carry a ``file`` object with the file id and
input path. Job outcome records also carry a ``job`` object holding the
status, output path, encoder return code and elapsed seconds.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Keys BatchExecutor passes via extra= when a job reaches a terminal state.
JOB_FIELDS: tuple[str, ...] = ("status", "output_path", "returncode", "elapsed")

_RECORD_ATTRS: frozenset[str] = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "file_id",
    "file_path",
    "file_tag",
}


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Keys: time, level, logger, msg, and when present file, job, extra
    and traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "time": created.isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }

        file_id = getattr(record, "file_id", None)
        if file_id:
            entry["file"] = {"id": file_id, "input": getattr(record, "file_path", None)}

        job = {
            key: getattr(record, key)
            for key in JOB_FIELDS
            if getattr(record, key, None) is not None
        }
        if job:
            entry["job"] = job

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
            and key not in JOB_FIELDS
            and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["traceback"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
