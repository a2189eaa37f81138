"""Public boundary types and ports."""

from gpuquirks.api.logging import JsonFormatter, LoggingConfig
from gpuquirks.api.present import PresentPort
from gpuquirks.api.workarounds import BackendMetadata, Platform, PlatformWorkaround, describe

__all__ = [
    "BackendMetadata",
    "JsonFormatter",
    "LoggingConfig",
    "Platform",
    "PlatformWorkaround",
    "PresentPort",
    "describe",
]
