from __future__ import annotations

import dataclasses

import pytest

from gpuquirks.api.workarounds import BackendMetadata, Platform, PlatformWorkaround, describe


def test_auto_is_zero_and_distinct_from_default() -> None:
    assert PlatformWorkaround.AUTO.value == 0
    assert not PlatformWorkaround.AUTO
    assert PlatformWorkaround.AUTO != PlatformWorkaround.DEFAULT


def test_default_is_finish_after_swap_vsync() -> None:
    assert PlatformWorkaround.DEFAULT == PlatformWorkaround.FINISH_AFTER_SWAP_VSYNC
    assert PlatformWorkaround.DEFAULT.value == 1


def test_finish_after_swap_always_is_union_of_vsync_flags() -> None:
    always = PlatformWorkaround.FINISH_AFTER_SWAP_ALWAYS
    assert always == (
        PlatformWorkaround.FINISH_AFTER_SWAP_VSYNC | PlatformWorkaround.FINISH_AFTER_SWAP_NO_VSYNC
    )
    assert always.value == 0b0011
    assert PlatformWorkaround.FINISH_BEFORE_SWAP not in always


def test_flag_bits_are_independent() -> None:
    assert PlatformWorkaround.FINISH_BEFORE_SWAP.value == 1 << 2
    assert PlatformWorkaround.WINDOWS_INVALIDATE_RECT.value == 1 << 3


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, PlatformWorkaround.AUTO),
        ("", PlatformWorkaround.AUTO),
        ("auto", PlatformWorkaround.AUTO),
        ("Default", PlatformWorkaround.DEFAULT),
        ("finish-after-swap-always", PlatformWorkaround.FINISH_AFTER_SWAP_ALWAYS),
        (
            "finish_before_swap, windows_invalidate_rect",
            PlatformWorkaround.FINISH_BEFORE_SWAP | PlatformWorkaround.WINDOWS_INVALIDATE_RECT,
        ),
        ("FINISH_AFTER_SWAP_NO_VSYNC|bogus", PlatformWorkaround.FINISH_AFTER_SWAP_NO_VSYNC),
        ("bogus", PlatformWorkaround.AUTO),
    ],
)
def test_parse_workaround(raw: str | None, expected: PlatformWorkaround) -> None:
    assert PlatformWorkaround.parse(raw) == expected


def test_describe_lists_single_bit_names_in_order() -> None:
    value = PlatformWorkaround.WINDOWS_INVALIDATE_RECT | PlatformWorkaround.FINISH_AFTER_SWAP_ALWAYS
    assert describe(value) == (
        "finish_after_swap_vsync",
        "finish_after_swap_no_vsync",
        "windows_invalidate_rect",
    )
    assert describe(PlatformWorkaround.AUTO) == ()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("windows", Platform.WINDOWS),
        ("Win32", Platform.WINDOWS),
        ("macOS", Platform.MACOS),
        ("darwin", Platform.MACOS),
        (" linux ", Platform.LINUX),
        ("android", Platform.ANDROID),
        ("freebsd", Platform.UNKNOWN),
        (None, Platform.UNKNOWN),
    ],
)
def test_platform_parse(raw: str | None, expected: Platform) -> None:
    assert Platform.parse(raw) is expected


def test_backend_metadata_is_frozen_and_normalizes_none() -> None:
    metadata = BackendMetadata(vendor=None, renderer_name="x")  # type: ignore[arg-type]
    assert metadata == BackendMetadata(vendor="", renderer_name="x", version_string="")
    with pytest.raises(dataclasses.FrozenInstanceError):
        metadata.vendor = "Intel"  # type: ignore[misc]
