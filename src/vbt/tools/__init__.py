"""External tool discovery (encoder executable, hardware decode support)."""

from vbt.tools.hwaccel import (
    HWACCEL_PRIORITY,
    list_hwaccels,
    parse_hwaccels_output,
    resolve_hwaccel_method,
)
from vbt.tools.resolve import resolve_encoder

__all__ = [
    "HWACCEL_PRIORITY",
    "list_hwaccels",
    "parse_hwaccels_output",
    "resolve_encoder",
    "resolve_hwaccel_method",
]
