"""Encode planning: geometry, filter profiles, filter chain, codec and hwaccel.

Everything in this package is pure: it reads configuration and returns
values, never touching the filesystem or spawning processes.
"""

from vbt.plan.builder import EncodePlan, build_encode_plan
from vbt.plan.codecs import (
    CodecArgs,
    CodecFamily,
    map_encode_args,
    resolve_codec_family,
)
from vbt.plan.dimensions import DimensionEstimate, estimate_dimensions
from vbt.plan.filters import (
    FilterChain,
    FilterKind,
    FilterStage,
    build_filter_chain,
)
from vbt.plan.hwaccel import negotiate_hwaccel
from vbt.plan.profiles import (
    DEFAULT_PROFILE,
    FILTER_PROFILES,
    FilterProfile,
    select_filter_profile,
)

__all__ = [
    "CodecArgs",
    "CodecFamily",
    "DEFAULT_PROFILE",
    "DimensionEstimate",
    "EncodePlan",
    "FILTER_PROFILES",
    "FilterChain",
    "FilterKind",
    "FilterProfile",
    "FilterStage",
    "build_encode_plan",
    "build_filter_chain",
    "estimate_dimensions",
    "map_encode_args",
    "negotiate_hwaccel",
    "resolve_codec_family",
    "select_filter_profile",
]
