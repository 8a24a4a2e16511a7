"""Output geometry estimation from crop/scale expressions.

The estimate only feeds denoise/sharpen profile selection. It is derived
from configuration text alone; no file is probed.
"""

from __future__ import annotations

from dataclasses import dataclass

from vbt.config.models import FilterToggle


@dataclass(frozen=True)
class DimensionEstimate:
    """Estimated output width/height. Either axis may be unknown."""

    width: int | None = None
    height: int | None = None
    source: str = "unknown"
    """Which stage the estimate came from: "scale", "crop" or "unknown"."""

    @property
    def is_known(self) -> bool:
        return self.width is not None or self.height is not None

    @property
    def max_dimension(self) -> int | None:
        """Largest known axis, or None when nothing is known."""
        known = [v for v in (self.width, self.height) if v is not None]
        return max(known) if known else None


UNKNOWN = DimensionEstimate()


def _split_args(expr: str, kind: str) -> list[str]:
    """Split ``kind=a:b:c`` (or bare ``a:b:c``) into its argument tokens."""
    expr = expr.strip()
    prefix = f"{kind}="
    if expr.startswith(prefix):
        expr = expr[len(prefix) :]
    return [token.strip() for token in expr.split(":")]


def _parse_axis(token: str) -> int | None:
    """Parse one axis token; named forms like ``w=1280`` are accepted.

    Returns None for -1 (aspect-preserving sentinel), other non-positive
    values and anything non-numeric, such as ffmpeg expressions.
    """
    if "=" in token:
        token = token.split("=", 1)[1].strip()
    if not token.isdecimal():
        return None
    value = int(token)
    return value if value > 0 else None


def _from_scale(expr: str) -> DimensionEstimate | None:
    tokens = _split_args(expr, "scale")
    if len(tokens) < 2:
        return None
    width, height = _parse_axis(tokens[0]), _parse_axis(tokens[1])
    if width is None and height is None:
        return None
    return DimensionEstimate(width=width, height=height, source="scale")


def _from_crop(expr: str) -> DimensionEstimate | None:
    tokens = _split_args(expr, "crop")
    if len(tokens) < 2:
        return None
    width, height = _parse_axis(tokens[0]), _parse_axis(tokens[1])
    if width is None or height is None:
        return None
    return DimensionEstimate(width=width, height=height, source="crop")


def estimate_dimensions(
    crop: FilterToggle | None,
    scale: FilterToggle | None,
) -> DimensionEstimate:
    """Estimate output geometry with strict precedence: scale, crop, unknown.

    A scale of ``1280:-1`` yields width 1280 with the height unknown; the
    known axis alone is enough to pick a profile. Crop is only used when
    both its width and height are numeric.

    Args:
        crop: Crop stage configuration (may be None or disabled).
        scale: Scale stage configuration (may be None or disabled).

    Returns:
        DimensionEstimate, UNKNOWN when no usable numeric hint exists.
    """
    if scale is not None and scale.enabled:
        estimate = _from_scale(scale.expr)
        if estimate is not None:
            return estimate

    if crop is not None and crop.enabled:
        estimate = _from_crop(crop.expr)
        if estimate is not None:
            return estimate

    return UNKNOWN
