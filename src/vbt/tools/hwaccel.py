"""Hardware decode method detection.

Queries ``ffmpeg -hwaccels`` to find which decode methods the build
supports. Detection is best effort: any failure means "unavailable".
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - only used for exception types
from pathlib import Path

from vbt.config.models import HWACCEL_AUTO, HWACCEL_NONE
from vbt.core.subprocess_utils import run_command

logger = logging.getLogger(__name__)

# Preferred methods for "auto", best first
HWACCEL_PRIORITY: tuple[str, ...] = ("cuda", "qsv", "vaapi", "videotoolbox")

PROBE_TIMEOUT = 30


def parse_hwaccels_output(output: str) -> list[str]:
    """Extract method names from ``ffmpeg -hwaccels`` output.

    Args:
        output: stdout of ``ffmpeg -hide_banner -hwaccels``.

    Returns:
        Method names in the order ffmpeg lists them.
    """
    methods: list[str] = []
    in_list = False
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        if line.lower().startswith("hardware acceleration methods"):
            in_list = True
            continue
        if in_list:
            methods.append(line)
    return methods


def list_hwaccels(encoder: Path | str) -> list[str]:
    """List hardware decode methods supported by the encoder build.

    Args:
        encoder: Path to the ffmpeg executable.

    Returns:
        Supported methods; empty if the probe fails.
    """
    try:
        stdout, stderr, rc = run_command(
            [encoder, "-hide_banner", "-hwaccels"], timeout=PROBE_TIMEOUT
        )
    except (subprocess.TimeoutExpired, OSError) as e:
        logger.warning("Could not probe hardware acceleration: %s", e)
        return []

    if rc != 0:
        logger.warning(
            "ffmpeg -hwaccels exited with code %d: %s", rc, stderr.strip()[:200]
        )
        return []

    return parse_hwaccels_output(stdout)


def resolve_hwaccel_method(mode: str, encoder: Path | str) -> str | None:
    """Turn the configured hwaccel mode into a concrete method.

    Args:
        mode: "none", "auto", or an explicit ffmpeg method such as "cuda".
        encoder: Path to the ffmpeg executable (probed only for "auto").

    Returns:
        The method to use, or None when hardware decoding is off or
        unavailable.
    """
    mode = mode.strip().casefold()
    if mode == HWACCEL_NONE:
        return None
    if mode != HWACCEL_AUTO:
        return mode

    available = list_hwaccels(encoder)
    for method in HWACCEL_PRIORITY:
        if method in available:
            logger.info("Hardware decode available: %s", method)
            return method

    logger.info("No supported hardware decode method found; decoding on CPU")
    return None
