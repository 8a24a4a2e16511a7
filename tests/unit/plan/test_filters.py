"""Tests for filter chain construction."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from vbt.config.models import FilterToggle, TranscodeConfig
from vbt.plan.filters import (
    FilterChain,
    FilterKind,
    FilterStage,
    build_filter_chain,
)
from vbt.plan.profiles import FILTER_PROFILES, select_filter_profile

MEDIUM = select_filter_profile(1280)


class TestFilterStage:
    """Tests for FilterStage parsing and serialization."""

    def test_expression_round_trip(self) -> None:
        """A prefixed expression serializes back unchanged."""
        stage = FilterStage.from_expression(FilterKind.CROP, "crop=1080:1080:420:0")
        assert stage.params == ("1080", "1080", "420", "0")
        assert stage.to_expression() == "crop=1080:1080:420:0"

    def test_bare_arguments_get_prefix(self) -> None:
        """Bare W:H:X:Y gains the filter name."""
        stage = FilterStage.from_expression(FilterKind.CROP, "640:480:0:0")
        assert stage.to_expression() == "crop=640:480:0:0"


class TestFilterChain:
    """Tests for FilterChain invariants."""

    def test_empty_chain_serializes_to_none(self) -> None:
        """No stages means no -vf argument at all."""
        chain = FilterChain()
        assert chain.is_empty
        assert chain.to_expression() is None

    def test_rejects_out_of_order_stages(self) -> None:
        """Stages must follow crop, scale, denoise, sharpen."""
        with pytest.raises(ValueError, match="ordered"):
            FilterChain(
                stages=(
                    FilterStage(FilterKind.SCALE, ("1280", "-1")),
                    FilterStage(FilterKind.CROP, ("10", "10", "0", "0")),
                )
            )

    def test_rejects_duplicate_stages(self) -> None:
        """A kind may appear at most once."""
        with pytest.raises(ValueError):
            FilterChain(
                stages=(
                    FilterStage(FilterKind.DENOISE, ()),
                    FilterStage(FilterKind.DENOISE, ()),
                )
            )


class TestBuildFilterChain:
    """Tests for build_filter_chain."""

    def test_full_chain_order(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """All four stages appear in canonical order."""
        config = make_config(
            crop=FilterToggle(True, "crop=1080:1080:420:0"),
            scale=FilterToggle(True, "scale=1280:-1"),
            denoise=True,
            sharpen=True,
        )
        chain = build_filter_chain(config, MEDIUM)
        assert chain.kinds == (
            FilterKind.CROP,
            FilterKind.SCALE,
            FilterKind.DENOISE,
            FilterKind.SHARPEN,
        )
        assert chain.to_expression() == (
            "crop=1080:1080:420:0,scale=1280:-1,"
            "hqdn3d=3.0:2.0:4.0:4.0,unsharp=5:5:0.8:5:5:0.0"
        )

    def test_disabled_stages_are_omitted(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """Disabled stages leave no trace, not even a placeholder."""
        config = make_config(
            crop=FilterToggle(False, "crop=10:10:0:0"),
            scale=FilterToggle(True, "scale=640:360"),
        )
        chain = build_filter_chain(config, MEDIUM)
        assert chain.to_expression() == "scale=640:360"

    def test_nothing_enabled_is_empty(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """With every stage off the chain is empty."""
        chain = build_filter_chain(make_config(), MEDIUM)
        assert chain.is_empty

    def test_denoise_uses_profile_parameters(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """Denoise parameters come from the selected profile verbatim."""
        config = make_config(denoise=True)
        chain = build_filter_chain(config, FILTER_PROFILES[-1])
        assert chain.to_expression() == "hqdn3d=4.4:3.0:5.9:5.9"

    def test_order_invariant_across_subsets(
        self, make_config: Callable[..., TranscodeConfig]
    ) -> None:
        """Any subset of enabled stages keeps canonical relative order."""
        order = [FilterKind.CROP, FilterKind.SCALE, FilterKind.DENOISE, FilterKind.SHARPEN]
        for mask in range(16):
            config = make_config(
                crop=FilterToggle(bool(mask & 1), "crop=10:10:0:0"),
                scale=FilterToggle(bool(mask & 2), "scale=20:20"),
                denoise=bool(mask & 4),
                sharpen=bool(mask & 8),
            )
            kinds = list(build_filter_chain(config, MEDIUM).kinds)
            assert kinds == sorted(kinds, key=order.index)
            assert len(kinds) == bin(mask).count("1")
