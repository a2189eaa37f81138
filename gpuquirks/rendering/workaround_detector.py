"""Driver bug detection for buffer presentation workarounds."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from gpuquirks.api.workarounds import BackendMetadata, Platform, PlatformWorkaround, describe

_LOG = logging.getLogger("gpuquirks.detector")

# Product revisions are signed 32-bit values in the driver database.
_MAX_PRODUCT_REVISION = 2**31 - 1


@dataclass(frozen=True, slots=True)
class RevisionRange:
    """Inclusive product revision range for product lines containing ``line_keyword``.

    A range with ``line_keyword=None`` applies to every line not claimed by a
    keyword range.
    """

    minimum: int
    maximum: int
    line_keyword: str | None = None

    def claims(self, product_line: str) -> bool:
        return self.line_keyword is None or self.line_keyword in product_line

    def contains(self, revision: int) -> bool:
        return self.minimum <= revision <= self.maximum


@dataclass(frozen=True, slots=True)
class WorkaroundRule:
    """One known driver bug signature and the workarounds it requires."""

    name: str
    platforms: frozenset[Platform]
    vendor: str
    renderer_pattern: re.Pattern[str]
    ranges: tuple[RevisionRange, ...]
    workaround: PlatformWorkaround
    platform_workarounds: Mapping[Platform, PlatformWorkaround] = field(default_factory=dict)
    driver_exclusions: Mapping[Platform, tuple[str, ...]] = field(default_factory=dict)

    def matches(self, metadata: BackendMetadata, platform: Platform) -> bool:
        if platform not in self.platforms:
            return False
        if self._excluded_driver(metadata, platform):
            return False
        # Vendor strings vary ("Intel", "Intel Inc.", ...), so match by substring.
        if self.vendor.casefold() not in metadata.vendor.casefold():
            return False
        match = self.renderer_pattern.search(metadata.renderer_name)
        if match is None:
            return False
        product_line = match.group(1)
        revision = _parse_product_revision(match.group(2))
        if revision is None:
            _LOG.error(
                "workaround_rule_match_failed rule=%s match=%r: no valid product revision",
                self.name,
                match.group(0),
                extra={
                    "rule": self.name,
                    "matched_text": match.group(0),
                    "reason": "product revision is not a valid integer",
                },
            )
            return False
        for revision_range in self.ranges:
            if revision_range.claims(product_line):
                return revision_range.contains(revision)
        return False

    def workaround_for(self, platform: Platform) -> PlatformWorkaround:
        return self.platform_workarounds.get(platform, self.workaround)

    def _excluded_driver(self, metadata: BackendMetadata, platform: Platform) -> bool:
        markers = self.driver_exclusions.get(platform, ())
        haystacks = (metadata.renderer_name.casefold(), metadata.version_string.casefold())
        return any(marker.casefold() in text for marker in markers for text in haystacks)


def _parse_product_revision(raw: str) -> int | None:
    try:
        value = int(raw)
    except ValueError:
        # Python refuses integers past its digit limit.
        return None
    if value > _MAX_PRODUCT_REVISION:
        return None
    return value


INTEL_GEN9_PRODUCT_PATTERN = re.compile(
    r"Intel[^ ]* (HD|UHD|Iris|Iris Pro|Iris Plus) Graphics P?([0-9]+).*"
)

# A big chunk of Gen9 Intel iGPUs ship broken drivers. On Windows the bug
# overloads dwm until it or the driver crashes; on macOS it is a scheduling
# bug that a finish after every swap keeps in sync. Mesa stacks on Linux are
# not affected.
INTEL_GEN9_RULE = WorkaroundRule(
    name="intel_gen9",
    platforms=frozenset({Platform.WINDOWS, Platform.MACOS, Platform.LINUX}),
    vendor="Intel",
    renderer_pattern=INTEL_GEN9_PRODUCT_PATTERN,
    ranges=(
        # Only Iris Plus Graphics 655 is confirmed broken so far.
        RevisionRange(minimum=655, maximum=655, line_keyword="Iris"),
        # 620 and 630 are the notorious ones; 530/535 lack samples.
        RevisionRange(minimum=620, maximum=630),
    ),
    workaround=PlatformWorkaround.FINISH_AFTER_SWAP_ALWAYS,
    platform_workarounds={
        # TODO: prefer wglSwapLayerBuffers over an explicit finish before SwapBuffers.
        Platform.WINDOWS: PlatformWorkaround.WINDOWS_INVALIDATE_RECT
        | PlatformWorkaround.FINISH_BEFORE_SWAP
        | PlatformWorkaround.FINISH_AFTER_SWAP_ALWAYS,
    },
    driver_exclusions={Platform.LINUX: ("Mesa",)},
)

DEFAULT_RULES: tuple[WorkaroundRule, ...] = (INTEL_GEN9_RULE,)


def is_affected_intel_gen9(metadata: BackendMetadata, platform: Platform) -> bool:
    """Return True when the device matches a known-broken Intel Gen9 driver."""
    return INTEL_GEN9_RULE.matches(metadata, platform)


def detect_workaround(
    metadata: BackendMetadata,
    platform: Platform,
    *,
    rules: tuple[WorkaroundRule, ...] = DEFAULT_RULES,
) -> PlatformWorkaround:
    """Classify backend metadata into the workarounds presentation must apply.

    The first matching rule wins. Without a match the baseline ``DEFAULT`` is
    returned. Never raises for any metadata content.
    """
    for rule in rules:
        if rule.matches(metadata, platform):
            return rule.workaround_for(platform)
    return PlatformWorkaround.DEFAULT


def resolve_workaround(
    metadata: BackendMetadata,
    platform: Platform,
    *,
    configured: PlatformWorkaround = PlatformWorkaround.AUTO,
) -> PlatformWorkaround:
    """Use ``configured`` verbatim unless it is ``AUTO``, in which case detect."""
    if configured == PlatformWorkaround.AUTO:
        resolved = detect_workaround(metadata, platform)
        source = "detected"
    else:
        resolved = configured
        source = "configured"
    _LOG.info(
        "platform_workaround_resolved platform=%s source=%s flags=%s",
        platform.value,
        source,
        ",".join(describe(resolved)),
        extra={"platform": platform.value, "source": source, "flags": describe(resolved)},
    )
    return resolved


__all__ = [
    "DEFAULT_RULES",
    "INTEL_GEN9_PRODUCT_PATTERN",
    "INTEL_GEN9_RULE",
    "RevisionRange",
    "WorkaroundRule",
    "detect_workaround",
    "is_affected_intel_gen9",
    "resolve_workaround",
]
