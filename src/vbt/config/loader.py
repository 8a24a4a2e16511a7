"""Configuration file loading and validation.

Configuration is assembled with the following precedence (highest to lowest):
1. CLI arguments (passed as a ConfigOverrides)
2. Environment variables (VBT_*)
3. Config file (YAML)
4. Default values

Environment variables:
- VBT_ENCODER_PATH: Path or name of the ffmpeg executable
- VBT_HWACCEL: Hardware decode mode ("auto", "none", or an ffmpeg method)
- VBT_OVERWRITE_EXISTING: Re-encode even when the output already exists
- VBT_LOG_LEVEL: Log level (debug, info, warning, error)
- VBT_LOG_FILE: Log file path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from vbt.config.env import EnvReader
from vbt.config.models import (
    DEFAULT_CONCAT_NAME,
    ConcatConfig,
    FilterToggle,
    LoggingConfig,
    TranscodeConfig,
    normalize_filter_expr,
)
from vbt.exceptions import ConfigError

logger = logging.getLogger(__name__)


class FilterToggleModel(BaseModel):
    """Pydantic model for an optional crop/scale stage."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = False
    expr: str = ""

    @model_validator(mode="after")
    def validate_expr_when_enabled(self) -> FilterToggleModel:
        """An enabled stage must carry an expression."""
        if self.enabled and not self.expr.strip():
            raise ValueError("expr is required when enabled is true")
        return self


class ConcatModel(BaseModel):
    """Pydantic model for concatenation settings."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = False
    output_name: str = DEFAULT_CONCAT_NAME

    @field_validator("output_name")
    @classmethod
    def validate_output_name(cls, v: str) -> str:
        """Output name must be a bare file name inside output_dir."""
        v = v.strip()
        if not v or Path(v).name != v:
            raise ValueError(f"output_name must be a plain file name, got {v!r}")
        return v


class LoggingModel(BaseModel):
    """Pydantic model for the optional logging section."""

    model_config = ConfigDict(extra="forbid")

    level: str = "info"
    file: Path | None = None
    format: str = "text"
    include_stderr: bool = False
    max_bytes: int = Field(default=10_485_760, ge=0)
    backup_count: int = Field(default=5, ge=0)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid = ("debug", "info", "warning", "error")
        if v.casefold() not in valid:
            raise ValueError(f"level must be one of {', '.join(valid)}, got {v!r}")
        return v.casefold()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v.casefold() not in ("text", "json"):
            raise ValueError(f"format must be 'text' or 'json', got {v!r}")
        return v.casefold()


class TranscodeConfigModel(BaseModel):
    """Pydantic model for a batch transcode configuration file."""

    model_config = ConfigDict(extra="forbid")

    encoder_path: str = "ffmpeg"
    input_mask: str = "*.mp4"
    output_dir: Path = Path("output")
    output_extension: str = ".mp4"
    video_codec: str = "libx265"
    quality: int = Field(default=23, ge=0, le=63)
    overwrite_existing: bool = False
    crop: FilterToggleModel | None = None
    scale: FilterToggleModel | None = None
    denoise: bool = False
    sharpen: bool = False
    concat: ConcatModel = Field(default_factory=ConcatModel)
    hwaccel: str = "none"
    audio_codec: str = "copy"
    working_dir: Path | None = None
    logging: LoggingModel = Field(default_factory=LoggingModel)

    @field_validator("encoder_path", "input_mask", "video_codec", "audio_codec")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty strings for required text settings."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("output_extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Accept 'mp4' or '.mp4', store the dotted form."""
        v = v.strip()
        if not v or v == ".":
            raise ValueError("must not be empty")
        return v if v.startswith(".") else f".{v}"

    @field_validator("hwaccel")
    @classmethod
    def validate_hwaccel(cls, v: str) -> str:
        """Normalize hwaccel mode; any ffmpeg method name is allowed."""
        v = v.strip().casefold()
        if not v:
            raise ValueError("must not be empty (use 'none' to disable)")
        return v


@dataclass
class ConfigOverrides:
    """Configuration values from a single source above the config file.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    encoder_path: str | None = None
    hwaccel: str | None = None
    overwrite_existing: bool | None = None
    working_dir: Path | None = None
    log_level: str | None = None
    log_file: Path | None = None

    def apply(self, data: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of raw config data with these overrides applied.

        Args:
            data: Raw mapping as read from the config file.

        Returns:
            New mapping; the input is not modified.
        """
        merged = dict(data)
        logging_section = dict(merged.get("logging") or {})
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "log_level":
                logging_section["level"] = value
            elif f.name == "log_file":
                logging_section["file"] = value
            else:
                merged[f.name] = value
        if logging_section:
            merged["logging"] = logging_section
        return merged


def overrides_from_env(reader: EnvReader | None = None) -> ConfigOverrides:
    """Collect configuration overrides from VBT_* environment variables.

    Args:
        reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        ConfigOverrides with only the variables that are set.
    """
    reader = reader or EnvReader()
    return ConfigOverrides(
        encoder_path=reader.get_str("VBT_ENCODER_PATH") or None,
        hwaccel=reader.get_str("VBT_HWACCEL") or None,
        overwrite_existing=reader.get_bool("VBT_OVERWRITE_EXISTING"),
        log_level=reader.get_str("VBT_LOG_LEVEL") or None,
        log_file=reader.get_path("VBT_LOG_FILE"),
    )


def read_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a mapping.

    Args:
        path: Path to the config file.

    Returns:
        Parsed mapping (empty if the file is empty).

    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    """Flatten the first pydantic error into (message, dotted field path)."""
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", str(error))
    if loc:
        return f"{loc}: {msg}", loc
    return msg, None


def _toggle(model: FilterToggleModel | None, kind: str) -> FilterToggle | None:
    if model is None:
        return None
    return FilterToggle(
        enabled=model.enabled,
        expr=normalize_filter_expr(kind, model.expr),
    )


def build_config(
    data: dict[str, Any],
    base_dir: Path,
) -> TranscodeConfig:
    """Validate raw config data and materialize a TranscodeConfig.

    Args:
        data: Raw mapping (config file with overrides applied).
        base_dir: Directory relative working_dir values resolve against,
            and the default working_dir.

    Returns:
        Validated, immutable TranscodeConfig.

    Raises:
        ConfigError: If validation fails.
    """
    try:
        model = TranscodeConfigModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise ConfigError(f"Invalid configuration: {message}", field=field) from e

    working_dir = model.working_dir.expanduser() if model.working_dir else base_dir
    if not working_dir.is_absolute():
        working_dir = base_dir / working_dir

    try:
        return TranscodeConfig(
            encoder_path=model.encoder_path,
            input_mask=model.input_mask,
            output_dir=model.output_dir.expanduser(),
            output_extension=model.output_extension,
            video_codec=model.video_codec,
            quality=model.quality,
            overwrite_existing=model.overwrite_existing,
            crop=_toggle(model.crop, "crop"),
            scale=_toggle(model.scale, "scale"),
            denoise=model.denoise,
            sharpen=model.sharpen,
            concat=ConcatConfig(
                enabled=model.concat.enabled,
                output_name=model.concat.output_name,
            ),
            hwaccel=model.hwaccel,
            audio_codec=model.audio_codec,
            working_dir=working_dir,
            logging=LoggingConfig(
                level=model.logging.level,
                file=model.logging.file,
                format=model.logging.format,
                include_stderr=model.logging.include_stderr,
                max_bytes=model.logging.max_bytes,
                backup_count=model.logging.backup_count,
            ),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(
    path: Path,
    overrides: ConfigOverrides | None = None,
    env_reader: EnvReader | None = None,
) -> TranscodeConfig:
    """Load a transcode configuration with full precedence handling.

    Args:
        path: Path to the YAML config file.
        overrides: CLI overrides (highest precedence).
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        Validated TranscodeConfig.

    Raises:
        ConfigError: If the file cannot be read or validated.
    """
    data = read_config_file(path)
    data = overrides_from_env(env_reader).apply(data)
    if overrides is not None:
        data = overrides.apply(data)

    config = build_config(data, base_dir=path.resolve().parent)
    logger.debug(
        "Loaded config from %s (codec=%s, quality=%d, hwaccel=%s)",
        path,
        config.video_codec,
        config.quality,
        config.hwaccel,
    )
    return config
