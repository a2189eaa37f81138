from __future__ import annotations

import logging

import orjson

from gpuquirks.api.logging import JsonFormatter


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="gpuquirks.detector",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg="workaround_rule_match_failed rule=%s",
        args=("intel_gen9",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_core_fields() -> None:
    payload = orjson.loads(JsonFormatter().format(_record()))
    assert payload["level"] == "ERROR"
    assert payload["logger"] == "gpuquirks.detector"
    assert payload["msg"] == "workaround_rule_match_failed rule=intel_gen9"
    assert "fields" not in payload


def test_json_formatter_preserves_extra_fields() -> None:
    record = _record(matched_text="Intel(R) HD Graphics 9", flags=("a",))
    payload = orjson.loads(JsonFormatter().format(record))
    assert payload["fields"] == {"matched_text": "Intel(R) HD Graphics 9", "flags": ["a"]}
