"""Configuration management for vbt.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (VBT_*)
3. Config file (YAML)
4. Default values (lowest priority)
"""

from vbt.config.env import EnvReader
from vbt.config.loader import (
    ConfigOverrides,
    build_config,
    load_config,
    overrides_from_env,
    read_config_file,
)
from vbt.config.models import (
    ConcatConfig,
    FilterToggle,
    LoggingConfig,
    TranscodeConfig,
)

__all__ = [
    # Models
    "ConcatConfig",
    "FilterToggle",
    "LoggingConfig",
    "TranscodeConfig",
    # Loader
    "ConfigOverrides",
    "EnvReader",
    "build_config",
    "load_config",
    "overrides_from_env",
    "read_config_file",
]
