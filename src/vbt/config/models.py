"""Configuration data models.

This module defines the immutable dataclasses a batch run is driven by.
They are produced by the loader after validation and never mutated.
"""

from dataclasses import dataclass, field
from pathlib import Path

# Accepted values for the hwaccel setting besides explicit ffmpeg methods
HWACCEL_AUTO = "auto"
HWACCEL_NONE = "none"

DEFAULT_CONCAT_NAME = "concat.mp4"


def normalize_filter_expr(kind: str, expr: str) -> str:
    """Prefix a bare filter argument list with its filter name.

    The region-selection utility prints ``W:H:X:Y`` without the ``crop=``
    prefix, so both spellings are accepted.

    Args:
        kind: Filter name (e.g., "crop", "scale").
        expr: Expression as written in the config file.

    Returns:
        Expression in ``kind=args`` form, stripped of whitespace.
    """
    expr = expr.strip()
    if not expr or expr.startswith(f"{kind}="):
        return expr
    return f"{kind}={expr}"


@dataclass(frozen=True)
class FilterToggle:
    """An optional filter stage with a user-supplied expression."""

    enabled: bool = False
    expr: str = ""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.enabled and not self.expr.strip():
            raise ValueError("expr is required when the filter is enabled")


@dataclass(frozen=True)
class ConcatConfig:
    """Configuration for stream-copy concatenation of successful outputs."""

    enabled: bool = False
    output_name: str = DEFAULT_CONCAT_NAME

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.output_name or Path(self.output_name).name != self.output_name:
            raise ValueError(
                f"output_name must be a plain file name, got {self.output_name!r}"
            )


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB, 0 disables rotation)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes < 0:
            raise ValueError(f"max_bytes must be >= 0, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(f"backup_count must be >= 0, got {self.backup_count}")


@dataclass(frozen=True)
class TranscodeConfig:
    """Everything a batch run needs, materialized once per process.

    This dataclass is immutable (frozen); no component may change it
    for the duration of a run.
    """

    encoder_path: str = "ffmpeg"
    """Name or path of the ffmpeg executable."""

    input_mask: str = "*.mp4"
    """Glob pattern, relative to working_dir, selecting candidate inputs."""

    output_dir: Path = Path("output")
    """Destination directory; relative paths resolve against working_dir."""

    output_extension: str = ".mp4"

    video_codec: str = "libx265"

    quality: int = 23
    """Single quality dial: CRF for software encoders, CQ for NVENC."""

    overwrite_existing: bool = False

    crop: FilterToggle | None = None
    scale: FilterToggle | None = None
    denoise: bool = False
    sharpen: bool = False

    concat: ConcatConfig = field(default_factory=ConcatConfig)

    hwaccel: str = HWACCEL_NONE
    """"auto" to probe ffmpeg, "none" to disable, or an ffmpeg hwaccel method."""

    audio_codec: str = "copy"

    working_dir: Path = Path(".")

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 0 <= self.quality <= 63:
            raise ValueError(f"quality must be 0-63, got {self.quality}")
        if not self.output_extension.startswith("."):
            raise ValueError(
                f"output_extension must start with '.', got {self.output_extension}"
            )

    @property
    def resolved_output_dir(self) -> Path:
        """Output directory, anchored at working_dir when relative."""
        if self.output_dir.is_absolute():
            return self.output_dir
        return self.working_dir / self.output_dir

    @property
    def crop_enabled(self) -> bool:
        return self.crop is not None and self.crop.enabled

    @property
    def scale_enabled(self) -> bool:
        return self.scale is not None and self.scale.enabled
