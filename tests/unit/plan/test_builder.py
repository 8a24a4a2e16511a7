"""Tests for encode plan construction."""

from __future__ import annotations

from collections.abc import Callable

from vbt.config.models import FilterToggle, TranscodeConfig
from vbt.plan.builder import build_encode_plan


class TestBuildEncodePlan:
    """Tests for build_encode_plan."""

    def test_scaled_denoised_nvenc_plan(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """scale=1280:-1 picks the medium profile; NVENC uses CQ."""
        config = make_config(
            scale=FilterToggle(True, "scale=1280:-1"),
            denoise=True,
            video_codec="hevc_nvenc",
            quality=22,
        )
        plan = build_encode_plan(config, hwaccel_method="cuda")

        assert plan.profile.name == "medium"
        assert plan.filter_expression == "scale=1280:-1,hqdn3d=3.0:2.0:4.0:4.0"
        assert plan.codec_args.rate_control == "cq"
        assert plan.hwaccel_args == ("-hwaccel", "cuda")
        assert plan.audio_args == ("-c:a", "copy")
        assert plan.warnings == ()

    def test_no_filters_with_hwaccel_keeps_output_format(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """An empty chain allows frames to stay on the device."""
        plan = build_encode_plan(make_config(), hwaccel_method="cuda")
        assert plan.filter_expression is None
        assert "-hwaccel_output_format" in plan.hwaccel_args

    def test_no_hwaccel_method(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """Without a method there are no hwaccel arguments."""
        plan = build_encode_plan(make_config(sharpen=True))
        assert plan.hwaccel_args == ()
        assert plan.hwaccel_method is None

    def test_unknown_codec_recorded_as_warning(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """Unrecognized codecs still plan, with a warning attached."""
        plan = build_encode_plan(make_config(video_codec="weird_codec"))
        assert len(plan.warnings) == 1
        assert "weird_codec" in plan.warnings[0]

    def test_plan_is_deterministic(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """The same config always yields an equal plan."""
        config = make_config(
            crop=FilterToggle(True, "crop=1920:1920:0:0"),
            denoise=True,
            sharpen=True,
        )
        assert build_encode_plan(config) == build_encode_plan(config)

    def test_to_dict(self, make_config: Callable[..., TranscodeConfig]) -> None:
        """Serialized plan carries the resolved values."""
        data = build_encode_plan(
            make_config(crop=FilterToggle(True, "crop=1920:1920:0:0"), denoise=True)
        ).to_dict()
        assert data["profile"] == "large"
        assert data["estimate_source"] == "crop"
        assert data["filters"] == "crop=1920:1920:0:0,hqdn3d=3.7:2.4:4.9:4.9"
        assert data["codec_args"][:2] == ["-c:v", "libx265"]
