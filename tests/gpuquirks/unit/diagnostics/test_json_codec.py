from __future__ import annotations

from gpuquirks.api.workarounds import Platform
from gpuquirks.diagnostics.json_codec import dumps_bytes, dumps_text


def test_dumps_text_is_compact_by_default() -> None:
    raw = dumps_text({"k": "v", "n": 1, "arr": [1, 2, 3]})
    assert isinstance(raw, str)
    assert "\"k\":\"v\"" in raw


def test_dumps_bytes_pretty_mode() -> None:
    text = dumps_bytes({"a": 1, "b": {"c": 2}}, pretty=True).decode("utf-8")
    assert "\n" in text
    assert "  " in text


def test_dumps_text_stringifies_unknown_values() -> None:
    raw = dumps_text({"platform": Platform.WINDOWS, "tags": {"b", "a"}, "obj": object()}, sort_keys=True)
    assert "\"platform\":\"windows\"" in raw
    assert "\"tags\":[\"a\",\"b\"]" in raw
    assert "\"obj\":\"<object object" in raw
