"""Encoder executable resolution."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from vbt.exceptions import ToolNotFoundError

logger = logging.getLogger(__name__)


def resolve_encoder(encoder_path: str) -> Path:
    """Resolve the encoder to an executable path.

    A value containing a path separator is treated as a file path; a bare
    name is looked up on PATH.

    Args:
        encoder_path: Configured encoder path or name.

    Returns:
        Absolute path to the executable.

    Raises:
        ToolNotFoundError: If no executable can be found.
    """
    candidate = Path(encoder_path).expanduser()
    if candidate.parent != Path("."):
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return candidate.resolve()
        raise ToolNotFoundError(encoder_path)

    found = shutil.which(encoder_path)
    if found is None:
        raise ToolNotFoundError(encoder_path)

    logger.debug("Resolved encoder %s -> %s", encoder_path, found)
    return Path(found)
