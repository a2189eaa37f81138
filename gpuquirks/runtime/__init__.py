"""Runtime configuration and logging."""

from gpuquirks.runtime.config import (
    RuntimeConfig,
    get_runtime_config,
    initialize_runtime_config,
    load_runtime_config,
    set_runtime_config,
)
from gpuquirks.runtime.logging import configure_logging, setup_logging, shutdown_logging

__all__ = [
    "RuntimeConfig",
    "configure_logging",
    "get_runtime_config",
    "initialize_runtime_config",
    "load_runtime_config",
    "set_runtime_config",
    "setup_logging",
    "shutdown_logging",
]
