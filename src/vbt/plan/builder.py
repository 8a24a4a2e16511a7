"""Run-wide encode plan construction.

The plan is computed once before any file is touched and applied
identically to every job, which keeps runs deterministic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from vbt.config.models import TranscodeConfig
from vbt.plan.codecs import CodecArgs, map_encode_args
from vbt.plan.dimensions import DimensionEstimate, estimate_dimensions
from vbt.plan.filters import FilterChain, build_filter_chain
from vbt.plan.hwaccel import negotiate_hwaccel
from vbt.plan.profiles import FilterProfile, select_filter_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodePlan:
    """Filter chain and encoder arguments shared by every job in a run."""

    dimensions: DimensionEstimate
    profile: FilterProfile
    filter_chain: FilterChain
    codec_args: CodecArgs
    hwaccel_method: str | None
    hwaccel_args: tuple[str, ...]
    audio_args: tuple[str, ...]
    warnings: tuple[str, ...] = ()

    @property
    def filter_expression(self) -> str | None:
        return self.filter_chain.to_expression()

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "estimated_width": self.dimensions.width,
            "estimated_height": self.dimensions.height,
            "estimate_source": self.dimensions.source,
            "profile": self.profile.name,
            "filters": self.filter_expression,
            "codec": self.codec_args.codec,
            "codec_family": self.codec_args.family.value,
            "rate_control": self.codec_args.rate_control,
            "codec_args": self.codec_args.to_list(),
            "hwaccel_method": self.hwaccel_method,
            "hwaccel_args": list(self.hwaccel_args),
            "audio_args": list(self.audio_args),
            "warnings": list(self.warnings),
        }


def build_encode_plan(
    config: TranscodeConfig,
    hwaccel_method: str | None = None,
) -> EncodePlan:
    """Derive the encode plan from configuration.

    Args:
        config: Run configuration.
        hwaccel_method: Resolved hardware decode method, or None if
            unavailable. Resolution (which may probe ffmpeg) is the caller's
            job so this function stays pure.

    Returns:
        EncodePlan for the run.
    """
    dimensions = estimate_dimensions(config.crop, config.scale)
    profile = select_filter_profile(dimensions.max_dimension)
    filter_chain = build_filter_chain(config, profile)
    codec_args = map_encode_args(config.video_codec, config.quality)
    hwaccel_args = negotiate_hwaccel(hwaccel_method, not filter_chain.is_empty)

    warnings: list[str] = []
    if codec_args.warning:
        warnings.append(codec_args.warning)

    logger.info(
        "Encode plan: size=%sx%s (%s) profile=%s filters=%s codec=%s hwaccel=%s",
        dimensions.width if dimensions.width is not None else "?",
        dimensions.height if dimensions.height is not None else "?",
        dimensions.source,
        profile.name,
        filter_chain.to_expression() or "none",
        codec_args.codec,
        " ".join(hwaccel_args) or "none",
    )

    return EncodePlan(
        dimensions=dimensions,
        profile=profile,
        filter_chain=filter_chain,
        codec_args=codec_args,
        hwaccel_method=hwaccel_method,
        hwaccel_args=hwaccel_args,
        audio_args=("-c:a", config.audio_codec),
        warnings=tuple(warnings),
    )
