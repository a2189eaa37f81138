"""Workaround detection and presentation sequencing."""

from gpuquirks.rendering.present import PresentStep, plan_present, present_frame
from gpuquirks.rendering.workaround_detector import (
    DEFAULT_RULES,
    RevisionRange,
    WorkaroundRule,
    detect_workaround,
    is_affected_intel_gen9,
    resolve_workaround,
)

__all__ = [
    "DEFAULT_RULES",
    "PresentStep",
    "RevisionRange",
    "WorkaroundRule",
    "detect_workaround",
    "is_affected_intel_gen9",
    "plan_present",
    "present_frame",
    "resolve_workaround",
]
