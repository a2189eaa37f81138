"""Centralized runtime configuration sourced from the environment."""

from __future__ import annotations

import os
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Mapping

from gpuquirks.api.logging import LoggingConfig
from gpuquirks.api.workarounds import PlatformWorkaround


@dataclass(frozen=True, slots=True)
class RuntimeWorkaroundConfig:
    configured: PlatformWorkaround
    vsync: bool


@dataclass(frozen=True, slots=True)
class RuntimeProbeConfig:
    power_preference: str


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    workaround: RuntimeWorkaroundConfig
    probe: RuntimeProbeConfig
    logging: LoggingConfig


_RUNTIME_CONFIG: ContextVar[RuntimeConfig | None] = ContextVar("gpuquirks_runtime_config", default=None)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _flag(name: str, default: bool, *, env: Mapping[str, str] | None = None) -> bool:
    raw = _raw(name, env=env)
    if raw is None:
        return bool(default)
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return bool(default)


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _normalize_format(raw: str, fallback: str) -> str:
    value = str(raw).strip().lower()
    if value not in {"text", "json"}:
        return str(fallback)
    return value


def _normalize_power_preference(raw: str) -> str:
    value = str(raw).strip().lower().replace("_", "-")
    if value in {"low-power", "low", "integrated"}:
        return "low-power"
    return "high-performance"


def resolve_log_level_name(default: str = "INFO", *, env: Mapping[str, str] | None = None) -> str:
    """Resolve log level with package-prefixed override."""
    value = _raw("GPUQUIRKS_LOG_LEVEL", env=env)
    if value is None or not value.strip():
        value = _text("LOG_LEVEL", default, env=env)
    return value.strip().upper()


def load_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    file_path = _text("GPUQUIRKS_LOG_FILE", "", env=env)
    return RuntimeConfig(
        workaround=RuntimeWorkaroundConfig(
            configured=PlatformWorkaround.parse(_text("GPUQUIRKS_WORKAROUND", "auto", env=env)),
            vsync=_flag("GPUQUIRKS_RENDER_VSYNC", True, env=env),
        ),
        probe=RuntimeProbeConfig(
            power_preference=_normalize_power_preference(
                _text("GPUQUIRKS_WGPU_POWER_PREFERENCE", "high-performance", env=env)
            ),
        ),
        logging=LoggingConfig(
            level_name=resolve_log_level_name(env=env),
            console_format=_normalize_format(_text("GPUQUIRKS_LOG_FORMAT", "text", env=env), "text"),
            file_path=file_path or None,
            file_format=_normalize_format(_text("GPUQUIRKS_LOG_FILE_FORMAT", "json", env=env), "json"),
        ),
    )


def initialize_runtime_config(*, env: Mapping[str, str] | None = None) -> RuntimeConfig:
    config = load_runtime_config(env=env)
    _RUNTIME_CONFIG.set(config)
    return config


def set_runtime_config(config: RuntimeConfig) -> RuntimeConfig:
    _RUNTIME_CONFIG.set(config)
    return config


def get_runtime_config() -> RuntimeConfig:
    config = _RUNTIME_CONFIG.get()
    if config is not None:
        return config
    return initialize_runtime_config()


__all__ = [
    "RuntimeConfig",
    "RuntimeProbeConfig",
    "RuntimeWorkaroundConfig",
    "get_runtime_config",
    "initialize_runtime_config",
    "load_runtime_config",
    "resolve_log_level_name",
    "set_runtime_config",
]
