"""Video filter chain construction.

Filters are held as structured stages and only turned into ffmpeg's
``-vf`` text at the encoder boundary. Stage order is fixed:
crop, scale, denoise, sharpen.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from vbt.config.models import TranscodeConfig
from vbt.plan.profiles import FilterProfile


class FilterKind(Enum):
    """Filter stage kinds; values are the ffmpeg filter names."""

    CROP = "crop"
    SCALE = "scale"
    DENOISE = "hqdn3d"
    SHARPEN = "unsharp"


STAGE_ORDER: tuple[FilterKind, ...] = (
    FilterKind.CROP,
    FilterKind.SCALE,
    FilterKind.DENOISE,
    FilterKind.SHARPEN,
)


@dataclass(frozen=True)
class FilterStage:
    """One filter in the chain: an ffmpeg filter name plus its arguments."""

    kind: FilterKind
    params: tuple[str, ...] = ()

    @classmethod
    def from_expression(cls, kind: FilterKind, expr: str) -> FilterStage:
        """Parse ``name=a:b:c`` (or bare ``a:b:c``) into a stage.

        Arguments are split on ':' and re-joined on output, so the
        expression round-trips unchanged.
        """
        expr = expr.strip()
        prefix = f"{kind.value}="
        if expr.startswith(prefix):
            expr = expr[len(prefix) :]
        params = tuple(expr.split(":")) if expr else ()
        return cls(kind=kind, params=params)

    def to_expression(self) -> str:
        if not self.params:
            return self.kind.value
        return f"{self.kind.value}={':'.join(self.params)}"


@dataclass(frozen=True)
class FilterChain:
    """Ordered, possibly empty sequence of filter stages."""

    stages: tuple[FilterStage, ...] = ()

    def __post_init__(self) -> None:
        """Enforce canonical stage order with no repeats."""
        positions = [STAGE_ORDER.index(stage.kind) for stage in self.stages]
        if positions != sorted(set(positions)):
            kinds = ", ".join(stage.kind.value for stage in self.stages)
            raise ValueError(
                f"Filter stages must be unique and ordered crop, scale, "
                f"hqdn3d, unsharp; got {kinds}"
            )

    def __len__(self) -> int:
        return len(self.stages)

    @property
    def is_empty(self) -> bool:
        return not self.stages

    @property
    def kinds(self) -> tuple[FilterKind, ...]:
        return tuple(stage.kind for stage in self.stages)

    def to_expression(self) -> str | None:
        """Serialize to ffmpeg filtergraph text, or None for no filtering."""
        if not self.stages:
            return None
        return ",".join(stage.to_expression() for stage in self.stages)


def build_filter_chain(config: TranscodeConfig, profile: FilterProfile) -> FilterChain:
    """Compose the enabled stages of the configuration into a chain.

    Args:
        config: Run configuration (crop/scale expressions, denoise/sharpen flags).
        profile: Denoise/sharpen parameters selected for the output size.

    Returns:
        FilterChain with disabled stages omitted entirely.
    """
    stages: list[FilterStage] = []

    if config.crop is not None and config.crop.enabled:
        stages.append(FilterStage.from_expression(FilterKind.CROP, config.crop.expr))

    if config.scale is not None and config.scale.enabled:
        stages.append(
            FilterStage.from_expression(FilterKind.SCALE, config.scale.expr)
        )

    if config.denoise:
        stages.append(FilterStage(FilterKind.DENOISE, profile.denoise_args))

    if config.sharpen:
        stages.append(FilterStage(FilterKind.SHARPEN, profile.sharpen_args))

    return FilterChain(stages=tuple(stages))
