"""Hardware-accelerated decode negotiation.

Keeping decoded frames in accelerated memory (``-hwaccel_output_format``)
is incompatible with CPU-side filters such as crop, hqdn3d or unsharp:
ffmpeg refuses to link the filtergraph. Decode-only acceleration is always
safe to combine with filters.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# Pixel formats whose name differs from the hwaccel method.
HWACCEL_OUTPUT_FORMATS: dict[str, str] = {
    "videotoolbox": "videotoolbox_vld",
    "d3d11va": "d3d11",
}


def negotiate_hwaccel(method: str | None, filters_present: bool) -> tuple[str, ...]:
    """Choose hardware decode arguments for the whole run.

    Args:
        method: Available ffmpeg hwaccel method (e.g., 'cuda'), or None when
            hardware decoding is unavailable or disabled.
        filters_present: True if the filter chain has at least one stage.

    Returns:
        Arguments to place before ``-i``; empty when unavailable.
    """
    if not method:
        return ()

    if filters_present:
        logger.debug(
            "Filters present; using decode-only hardware acceleration (%s)", method
        )
        return ("-hwaccel", method)

    output_format = HWACCEL_OUTPUT_FORMATS.get(method, method)
    return ("-hwaccel", method, "-hwaccel_output_format", output_format)
