from __future__ import annotations

import sys
from types import ModuleType, SimpleNamespace

import pytest

from gpuquirks.api.workarounds import BackendMetadata
from gpuquirks.rendering.adapter_metadata import (
    AdapterProbeError,
    extract_adapter_info,
    metadata_from_adapter_info,
    request_adapter_info,
    request_backend_metadata,
)

_INTEL_INFO = {
    "vendor": "Intel",
    "architecture": "",
    "device": "Intel(R) UHD Graphics 630",
    "description": "Intel driver 31.0.101.2111",
    "vendor_id": 0x8086,
    "device_id": 0x3E92,
    "adapter_type": "IntegratedGPU",
    "backend_type": "Vulkan",
}


def _install_fake_wgpu(monkeypatch, gpu: object) -> None:
    module = ModuleType("wgpu")
    module.gpu = gpu  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "wgpu", module)


def test_metadata_from_adapter_info_maps_device_and_description() -> None:
    assert metadata_from_adapter_info(_INTEL_INFO) == BackendMetadata(
        vendor="Intel",
        renderer_name="Intel(R) UHD Graphics 630",
        version_string="Intel driver 31.0.101.2111",
    )


def test_metadata_from_adapter_info_falls_back_to_pci_vendor_id() -> None:
    info = {"vendor": "", "vendor_id": "0x8086", "device": "Intel(R) HD Graphics 620", "driver": "27.20"}
    metadata = metadata_from_adapter_info(info)
    assert metadata.vendor == "Intel"
    assert metadata.version_string == "27.20"


def test_metadata_from_adapter_info_tolerates_missing_keys() -> None:
    assert metadata_from_adapter_info({"vendor_id": "garbage", "device": None}) == BackendMetadata()


def test_extract_adapter_info_requires_mapping() -> None:
    assert extract_adapter_info(SimpleNamespace(info=dict(_INTEL_INFO))) == _INTEL_INFO
    assert extract_adapter_info(SimpleNamespace(info="nope")) == {}
    assert extract_adapter_info(object()) == {}


def test_request_backend_metadata_uses_sync_adapter_request(monkeypatch) -> None:
    seen: list[str] = []

    def request_adapter_sync(*, power_preference: str) -> object:
        seen.append(power_preference)
        return SimpleNamespace(info=dict(_INTEL_INFO))

    _install_fake_wgpu(monkeypatch, SimpleNamespace(request_adapter_sync=request_adapter_sync))
    metadata, info = request_backend_metadata(power_preference="low-power")
    assert seen == ["low-power"]
    assert metadata.renderer_name == "Intel(R) UHD Graphics 630"
    assert info["backend_type"] == "Vulkan"


def test_request_adapter_info_raises_when_adapter_is_none(monkeypatch) -> None:
    _install_fake_wgpu(monkeypatch, SimpleNamespace(request_adapter_sync=lambda **_: None))
    with pytest.raises(AdapterProbeError, match="returned None") as excinfo:
        request_adapter_info()
    assert excinfo.value.details == {"power_preference": "high-performance"}


def test_request_adapter_info_wraps_request_failures(monkeypatch) -> None:
    def boom(**_: object) -> object:
        raise RuntimeError("no adapters")

    _install_fake_wgpu(monkeypatch, SimpleNamespace(request_adapter=boom))
    with pytest.raises(AdapterProbeError, match="request failed") as excinfo:
        request_adapter_info()
    assert excinfo.value.details["exception_message"] == "no adapters"


def test_request_adapter_info_requires_gpu_entrypoint(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "wgpu", ModuleType("wgpu"))
    with pytest.raises(AdapterProbeError, match="entrypoint unavailable"):
        request_adapter_info()
