"""Presentation port driven by workaround-aware present plans."""

from __future__ import annotations

from typing import Protocol


class PresentPort(Protocol):
    """Swap-chain calls the presentation collaborator exposes."""

    def invalidate_rect(self) -> None:
        """Invalidate the window's drawable region (Windows only)."""

    def finish(self) -> None:
        """Block until all submitted GPU work has completed."""

    def swap_buffers(self) -> None:
        """Request buffer presentation."""
