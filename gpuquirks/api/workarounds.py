"""Boundary types for driver workaround detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, StrEnum


class Platform(StrEnum):
    """Operating system family supplied by the host."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    IOS = "ios"
    ANDROID = "android"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: str | None) -> Platform:
        """Map a user-supplied platform name onto a member, defaulting to UNKNOWN."""
        value = str(raw or "").strip().lower()
        return _PLATFORM_ALIASES.get(value, cls.UNKNOWN)


_PLATFORM_ALIASES: dict[str, Platform] = {
    "windows": Platform.WINDOWS,
    "win32": Platform.WINDOWS,
    "win": Platform.WINDOWS,
    "macos": Platform.MACOS,
    "osx": Platform.MACOS,
    "darwin": Platform.MACOS,
    "linux": Platform.LINUX,
    "ios": Platform.IOS,
    "android": Platform.ANDROID,
}


class PlatformWorkaround(Flag):
    """Presentation workarounds required by the active GPU driver."""

    # Sentinel: workarounds still need to be detected.
    AUTO = 0
    # glFinish after SwapBuffers while VSync is enabled.
    FINISH_AFTER_SWAP_VSYNC = 1 << 0
    # glFinish after SwapBuffers while VSync is disabled.
    FINISH_AFTER_SWAP_NO_VSYNC = 1 << 1
    # glFinish before SwapBuffers.
    FINISH_BEFORE_SWAP = 1 << 2
    # InvalidateRect on the window before anything else (Windows only).
    WINDOWS_INVALIDATE_RECT = 1 << 3
    FINISH_AFTER_SWAP_ALWAYS = FINISH_AFTER_SWAP_VSYNC | FINISH_AFTER_SWAP_NO_VSYNC
    DEFAULT = FINISH_AFTER_SWAP_VSYNC

    @classmethod
    def parse(cls, raw: str | None) -> PlatformWorkaround:
        """Parse ``auto``, ``default`` or a ``,``/``|`` separated list of flag names.

        Unknown names are ignored. Empty input parses to ``AUTO``.
        """
        text = str(raw or "").replace("|", ",")
        result = cls.AUTO
        for item in text.split(","):
            name = item.strip().upper().replace("-", "_")
            if not name:
                continue
            member = cls.__members__.get(name)
            if member is not None:
                result |= member
        return result


def describe(workaround: PlatformWorkaround) -> tuple[str, ...]:
    """Return lowercase names of the single-bit flags set, in bit order."""
    return tuple(
        str(member.name).lower()
        for member in PlatformWorkaround
        if member.value and member in workaround
    )


@dataclass(frozen=True, slots=True)
class BackendMetadata:
    """Identification strings reported by a graphics backend for the active device."""

    vendor: str = ""
    renderer_name: str = ""
    version_string: str = ""

    def __post_init__(self) -> None:
        for name in ("vendor", "renderer_name", "version_string"):
            value = getattr(self, name)
            if not isinstance(value, str):
                object.__setattr__(self, name, "" if value is None else str(value))


__all__ = ["BackendMetadata", "Platform", "PlatformWorkaround", "describe"]
