"""Present-call sequencing for detected platform workarounds."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import StrEnum

from gpuquirks.api.present import PresentPort
from gpuquirks.api.workarounds import Platform, PlatformWorkaround

_LOG = logging.getLogger("gpuquirks.present")


class PresentStep(StrEnum):
    INVALIDATE_RECT = "invalidate_rect"
    FINISH = "finish"
    SWAP_BUFFERS = "swap_buffers"


def plan_present(
    workaround: PlatformWorkaround,
    *,
    vsync: bool,
    platform: Platform,
) -> tuple[PresentStep, ...]:
    """Return the ordered calls needed to present one frame.

    ``AUTO`` must be resolved before planning.
    """
    if workaround == PlatformWorkaround.AUTO:
        raise ValueError("cannot plan presentation for AUTO; resolve the workaround first")
    steps: list[PresentStep] = []
    if PlatformWorkaround.WINDOWS_INVALIDATE_RECT in workaround and platform == Platform.WINDOWS:
        steps.append(PresentStep.INVALIDATE_RECT)
    if PlatformWorkaround.FINISH_BEFORE_SWAP in workaround:
        steps.append(PresentStep.FINISH)
    steps.append(PresentStep.SWAP_BUFFERS)
    finish_flag = (
        PlatformWorkaround.FINISH_AFTER_SWAP_VSYNC
        if vsync
        else PlatformWorkaround.FINISH_AFTER_SWAP_NO_VSYNC
    )
    if finish_flag in workaround:
        steps.append(PresentStep.FINISH)
    return tuple(steps)


def present_frame(port: PresentPort, steps: Iterable[PresentStep]) -> None:
    """Execute a present plan against ``port`` in order."""
    steps = tuple(steps)
    for step in steps:
        if step == PresentStep.INVALIDATE_RECT:
            port.invalidate_rect()
        elif step == PresentStep.FINISH:
            port.finish()
        elif step == PresentStep.SWAP_BUFFERS:
            port.swap_buffers()
        else:
            raise ValueError(f"unknown present step: {step!r}")
    if _LOG.isEnabledFor(logging.DEBUG):
        _LOG.debug("present_frame steps=%s", ",".join(str(step) for step in steps))


__all__ = ["PresentStep", "plan_present", "present_frame"]
