"""Codec-specific encoder argument mapping.

One quality dial drives every encoder: software encoders read it as CRF,
NVENC encoders as a VBR constant-quality (CQ) target. Each codec family
carries its own argument strategy; unknown encoder names pass through with
a generic CRF flag and a warning.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class CodecFamily(Enum):
    """Encoder families with distinct rate-control conventions."""

    X264 = "x264"
    X265 = "x265"
    SVT_AV1 = "svt-av1"
    VP9 = "vp9"
    NVENC = "nvenc"
    UNKNOWN = "unknown"


KNOWN_CODECS: dict[str, CodecFamily] = {
    "libx264": CodecFamily.X264,
    "libx265": CodecFamily.X265,
    "libsvtav1": CodecFamily.SVT_AV1,
    "libvpx-vp9": CodecFamily.VP9,
    "h264_nvenc": CodecFamily.NVENC,
    "hevc_nvenc": CodecFamily.NVENC,
    "av1_nvenc": CodecFamily.NVENC,
}

# Families whose quality flag is a CQ target rather than CRF
CQ_FAMILIES = frozenset({CodecFamily.NVENC})


def _x264_args(quality: int) -> list[str]:
    return ["-crf", str(quality), "-preset", "medium"]


def _x265_args(quality: int) -> list[str]:
    return ["-crf", str(quality), "-preset", "medium"]


def _svt_av1_args(quality: int) -> list[str]:
    return ["-crf", str(quality), "-preset", "8"]


def _vp9_args(quality: int) -> list[str]:
    # libvpx only honours CRF as constant quality when the bitrate is 0
    return ["-crf", str(quality), "-b:v", "0", "-deadline", "good"]


def _nvenc_args(quality: int) -> list[str]:
    return [
        "-rc", "vbr",
        "-cq", str(quality),
        "-preset", "p5",
        "-tune", "hq",
        "-b:v", "0",
    ]  # fmt: skip


def _generic_args(quality: int) -> list[str]:
    return ["-crf", str(quality)]


_STRATEGIES: dict[CodecFamily, Callable[[int], list[str]]] = {
    CodecFamily.X264: _x264_args,
    CodecFamily.X265: _x265_args,
    CodecFamily.SVT_AV1: _svt_av1_args,
    CodecFamily.VP9: _vp9_args,
    CodecFamily.NVENC: _nvenc_args,
    CodecFamily.UNKNOWN: _generic_args,
}


@dataclass(frozen=True)
class CodecArgs:
    """Encoder selection plus its quality/speed arguments."""

    codec: str
    family: CodecFamily
    args: tuple[str, ...]
    warning: str | None = None

    @property
    def rate_control(self) -> str:
        """"cq" for hardware VBR encoders, "crf" for everything else."""
        return "cq" if self.family in CQ_FAMILIES else "crf"

    def to_list(self) -> list[str]:
        """Full ffmpeg video encoder arguments, starting with -c:v."""
        return ["-c:v", self.codec, *self.args]


def resolve_codec_family(codec: str) -> CodecFamily:
    """Look up the family of an ffmpeg encoder name (case-insensitive).

    Args:
        codec: ffmpeg encoder name (e.g., 'libx265', 'hevc_nvenc').

    Returns:
        The matching CodecFamily, or CodecFamily.UNKNOWN.
    """
    return KNOWN_CODECS.get(codec.strip().casefold(), CodecFamily.UNKNOWN)


def map_encode_args(codec: str, quality: int) -> CodecArgs:
    """Map a codec name and quality value to encoder arguments.

    Unrecognized codec names are passed through unchanged with ``-crf``;
    if ffmpeg rejects that combination it surfaces as an ordinary per-file
    failure rather than aborting the run.

    Args:
        codec: ffmpeg encoder name.
        quality: Quality dial (CRF or CQ depending on the family).

    Returns:
        CodecArgs for the encoder.
    """
    family = resolve_codec_family(codec)
    args = _STRATEGIES[family](quality)
    codec = codec.strip()

    warning = None
    if family is CodecFamily.UNKNOWN:
        warning = (
            f"Unrecognized video codec '{codec}'; passing it through with "
            f"a generic -crf {quality}"
        )
        logger.warning("%s", warning)
    else:
        codec = codec.casefold()

    return CodecArgs(codec=codec, family=family, args=tuple(args), warning=warning)
