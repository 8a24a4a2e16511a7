"""Crop rectangle computation from two selected corner points.

Turns a pair of points picked on a video frame into a ``crop`` filter
argument list (``W:H:X:Y``), clamped to the frame and optionally squared.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

Point = tuple[float, float]


@dataclass(frozen=True)
class CropRect:
    """Crop rectangle in pixels; (x, y) is the top-left corner."""

    width: int
    height: int
    x: int
    y: int

    def __post_init__(self) -> None:
        """Validate dimensions."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"crop rectangle must have a positive area, "
                f"got {self.width}x{self.height}"
            )
        if self.x < 0 or self.y < 0:
            raise ValueError(f"crop offset must be non-negative, got {self.x},{self.y}")

    def to_expression(self) -> str:
        """Argument list for the crop filter, e.g. ``1080:1080:420:0``."""
        return f"{self.width}:{self.height}:{self.x}:{self.y}"

    def to_filter(self) -> str:
        """Full filter expression, e.g. ``crop=1080:1080:420:0``."""
        return f"crop={self.to_expression()}"


def crop_from_points(
    p1: Point,
    p2: Point,
    frame_width: int,
    frame_height: int,
    enforce_square: bool = True,
) -> CropRect:
    """Compute the crop rectangle spanned by two corner points.

    The span is clamped to the frame: the low edge is floored and kept at
    least 1, the high edge is ceiled and kept within the frame size. With
    enforce_square, both sides take the larger of the two spans.

    Args:
        p1: First corner (x, y), in any order relative to p2.
        p2: Opposite corner (x, y).
        frame_width: Frame width in pixels.
        frame_height: Frame height in pixels.
        enforce_square: Make the rectangle square.

    Returns:
        CropRect anchored at the clamped top-left corner.

    Raises:
        ValueError: If the frame size is not positive or the clamped
            rectangle has no area.
    """
    if frame_width <= 0 or frame_height <= 0:
        raise ValueError(
            f"frame size must be positive, got {frame_width}x{frame_height}"
        )

    x_min = max(1, math.floor(min(p1[0], p2[0])))
    x_max = min(frame_width, math.ceil(max(p1[0], p2[0])))
    y_min = max(1, math.floor(min(p1[1], p2[1])))
    y_max = min(frame_height, math.ceil(max(p1[1], p2[1])))

    width = x_max - x_min
    height = y_max - y_min
    if width <= 0 or height <= 0:
        raise ValueError(
            f"selected points span no area inside a {frame_width}x{frame_height} frame"
        )

    if enforce_square:
        width = height = max(width, height)

    return CropRect(width=width, height=height, x=x_min, y=y_min)
