"""Denoise/sharpen parameter profiles bucketed by output size.

The parameter tuples are tuning constants handed to ffmpeg verbatim
(hqdn3d and unsharp respectively); nothing here interprets them.
"""

from __future__ import annotations

from dataclasses import dataclass

DenoiseParams = tuple[float, float, float, float]
SharpenParams = tuple[int, int, float, int, int, float]


@dataclass(frozen=True)
class FilterProfile:
    """Denoise/sharpen parameters for outputs up to a maximum dimension."""

    name: str
    max_dimension_upper_bound: int | None
    """Inclusive upper bound; None means unbounded."""

    denoise_params: DenoiseParams
    sharpen_params: SharpenParams

    def contains(self, max_dimension: int) -> bool:
        if self.max_dimension_upper_bound is None:
            return True
        return max_dimension <= self.max_dimension_upper_bound

    @property
    def denoise_args(self) -> tuple[str, ...]:
        return tuple(str(v) for v in self.denoise_params)

    @property
    def sharpen_args(self) -> tuple[str, ...]:
        return tuple(str(v) for v in self.sharpen_params)


# Ordered by bound; together they partition the positive integers
FILTER_PROFILES: tuple[FilterProfile, ...] = (
    FilterProfile("small", 1250, (2.3, 1.5, 3.0, 3.0), (3, 3, 0.7, 3, 3, 0.0)),
    FilterProfile("medium", 1750, (3.0, 2.0, 4.0, 4.0), (5, 5, 0.8, 5, 5, 0.0)),
    FilterProfile("large", 2250, (3.7, 2.4, 4.9, 4.9), (7, 7, 0.87, 7, 7, 0.0)),
    FilterProfile("xlarge", None, (4.4, 3.0, 5.9, 5.9), (9, 9, 0.97, 9, 9, 0.0)),
)

DEFAULT_PROFILE = FILTER_PROFILES[1]


def select_filter_profile(max_dimension: int | None) -> FilterProfile:
    """Pick the profile whose bucket contains max_dimension.

    Args:
        max_dimension: Estimated largest output axis in pixels, or None.

    Returns:
        Matching FilterProfile; the medium profile when the size is
        unknown or not positive.
    """
    if max_dimension is None or max_dimension <= 0:
        return DEFAULT_PROFILE
    for profile in FILTER_PROFILES:
        if profile.contains(max_dimension):
            return profile
    return FILTER_PROFILES[-1]
