"""Driver bug workaround detection for buffer presentation."""

from gpuquirks.api.workarounds import BackendMetadata, Platform, PlatformWorkaround, describe
from gpuquirks.rendering.workaround_detector import (
    detect_workaround,
    is_affected_intel_gen9,
    resolve_workaround,
)

__all__ = [
    "BackendMetadata",
    "Platform",
    "PlatformWorkaround",
    "describe",
    "detect_workaround",
    "is_affected_intel_gen9",
    "resolve_workaround",
]
