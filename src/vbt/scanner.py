"""Input discovery.

Candidates are matched by a glob mask relative to the working directory
and returned in a stable order, so the manifest order and the order of
log lines are reproducible across runs.
"""

from __future__ import annotations

import glob
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def _is_within(path: Path, directory: Path) -> bool:
    return directory == path or directory in path.parents


def discover_inputs(
    working_dir: Path,
    mask: str,
    exclude_dir: Path | None = None,
) -> list[Path]:
    """Find candidate input files.

    Args:
        working_dir: Directory the mask is evaluated against.
        mask: Glob pattern such as ``*.mp4`` or ``clips/**/*.mov``.
            Absolute patterns are used as-is.
        exclude_dir: Directory whose contents are never candidates
            (the output directory). Ignored when it is working_dir itself.

    Returns:
        Regular files sorted by file name, then by full path.
    """
    pattern = os.path.join(os.fspath(working_dir), os.path.expanduser(mask))
    matches = (Path(p).resolve() for p in glob.glob(pattern, recursive=True))
    files = {p for p in matches if p.is_file()}

    if exclude_dir is not None:
        excluded = exclude_dir.resolve()
        if excluded != working_dir.resolve():
            before = len(files)
            files = {p for p in files if not _is_within(p, excluded)}
            if len(files) != before:
                logger.debug(
                    "Ignored %d match(es) inside output directory %s",
                    before - len(files),
                    excluded,
                )

    return sorted(files, key=lambda p: (p.name, str(p)))
