"""Serialization helpers for diagnostics output."""

from gpuquirks.diagnostics.json_codec import dumps_bytes, dumps_text

__all__ = ["dumps_bytes", "dumps_text"]
