"""Backend metadata sourced from wgpu adapter info."""

from __future__ import annotations

from collections.abc import Mapping

from gpuquirks.api.workarounds import BackendMetadata

# PCI vendor ids, used when the adapter reports an empty vendor name.
_PCI_VENDOR_NAMES: dict[int, str] = {
    0x8086: "Intel",
    0x10DE: "NVIDIA",
    0x1002: "AMD",
    0x106B: "Apple",
}


class AdapterProbeError(RuntimeError):
    """Adapter request failure with structured details."""

    def __init__(self, message: str, *, details: dict[str, object]) -> None:
        super().__init__(message)
        self.details = details


def _text(info: Mapping[str, object], *keys: str) -> str:
    for key in keys:
        value = info.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def _vendor_id(info: Mapping[str, object]) -> int | None:
    raw = info.get("vendor_id")
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip(), 0)
    except ValueError:
        return None


def metadata_from_adapter_info(info: Mapping[str, object]) -> BackendMetadata:
    """Map wgpu ``adapter.info`` keys onto backend metadata."""
    vendor = _text(info, "vendor")
    if not vendor:
        vendor_id = _vendor_id(info)
        if vendor_id is not None:
            vendor = _PCI_VENDOR_NAMES.get(vendor_id, "")
    return BackendMetadata(
        vendor=vendor,
        renderer_name=_text(info, "device"),
        version_string=_text(info, "description", "driver"),
    )


def extract_adapter_info(adapter: object) -> dict[str, object]:
    info = getattr(adapter, "info", None)
    if isinstance(info, Mapping):
        return {str(key): value for key, value in info.items()}
    return {}


def request_adapter_info(*, power_preference: str = "high-performance") -> dict[str, object]:
    """Request a wgpu adapter and return its info mapping."""
    try:
        import wgpu
    except Exception as exc:
        raise AdapterProbeError(
            "wgpu dependency unavailable",
            details={
                "exception_type": exc.__class__.__name__,
                "exception_message": str(exc),
            },
        ) from exc
    gpu = getattr(wgpu, "gpu", None)
    if gpu is None:
        raise AdapterProbeError("wgpu.gpu entrypoint unavailable", details={})
    request = getattr(gpu, "request_adapter_sync", None)
    if not callable(request):
        request = getattr(gpu, "request_adapter", None)
    if not callable(request):
        raise AdapterProbeError("wgpu adapter request API unavailable", details={})
    try:
        adapter = request(power_preference=power_preference)
    except Exception as exc:
        raise AdapterProbeError(
            "wgpu adapter request failed",
            details={
                "power_preference": power_preference,
                "exception_type": exc.__class__.__name__,
                "exception_message": str(exc),
            },
        ) from exc
    if adapter is None:
        raise AdapterProbeError(
            "wgpu adapter request returned None",
            details={"power_preference": power_preference},
        )
    return extract_adapter_info(adapter)


def request_backend_metadata(
    *, power_preference: str = "high-performance"
) -> tuple[BackendMetadata, dict[str, object]]:
    """Probe the active adapter and return its metadata plus the raw info."""
    info = request_adapter_info(power_preference=power_preference)
    return metadata_from_adapter_info(info), info


__all__ = [
    "AdapterProbeError",
    "extract_adapter_info",
    "metadata_from_adapter_info",
    "request_adapter_info",
    "request_backend_metadata",
]
