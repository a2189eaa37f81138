"""Print the presentation workarounds for a device as JSON."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from gpuquirks.api.workarounds import BackendMetadata, Platform, PlatformWorkaround, describe
from gpuquirks.diagnostics.json_codec import dumps_text
from gpuquirks.rendering.adapter_metadata import AdapterProbeError, request_backend_metadata
from gpuquirks.rendering.present import plan_present
from gpuquirks.rendering.workaround_detector import resolve_workaround
from gpuquirks.runtime.config import initialize_runtime_config
from gpuquirks.runtime.logging import configure_logging, shutdown_logging

_LOG = logging.getLogger("gpuquirks.probe")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--platform",
        required=True,
        help="Host OS family: windows, macos, linux, ios, android.",
    )
    parser.add_argument("--vendor", default="", help="Vendor string reported by the driver.")
    parser.add_argument("--renderer", default="", help="Renderer/device name reported by the driver.")
    parser.add_argument("--version", default="", help="Driver version string.")
    parser.add_argument(
        "--probe-wgpu",
        action="store_true",
        help="Fill metadata from the active wgpu adapter instead of the flags above.",
    )
    parser.add_argument(
        "--workaround",
        default=None,
        help="Override: auto, default, or comma separated flag names.",
    )
    parser.add_argument(
        "--vsync",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="VSync state used for the present plan.",
    )
    parser.add_argument("--pretty", action="store_true", help="Indent JSON output.")
    return parser


def run(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = initialize_runtime_config()
    configure_logging(config.logging)
    try:
        return _run(
            args,
            config.workaround.configured,
            config.workaround.vsync,
            config.probe.power_preference,
        )
    finally:
        shutdown_logging()


def _run(
    args: argparse.Namespace,
    configured: PlatformWorkaround,
    vsync: bool,
    power_preference: str,
) -> int:
    platform = Platform.parse(args.platform)
    adapter_info: dict[str, object] = {}
    if args.probe_wgpu:
        try:
            metadata, adapter_info = request_backend_metadata(power_preference=power_preference)
        except AdapterProbeError as exc:
            _LOG.error("adapter_probe_failed error=%s", exc, extra={"details": exc.details})
            payload = {"status": "error", "error": str(exc), "details": exc.details}
            print(dumps_text(payload, pretty=args.pretty))
            return 2
    else:
        metadata = BackendMetadata(
            vendor=args.vendor,
            renderer_name=args.renderer,
            version_string=args.version,
        )
    if args.workaround is not None:
        configured = PlatformWorkaround.parse(args.workaround)
    if args.vsync is not None:
        vsync = bool(args.vsync)
    workaround = resolve_workaround(metadata, platform, configured=configured)
    payload = {
        "status": "ok",
        "platform": platform.value,
        "metadata": {
            "vendor": metadata.vendor,
            "renderer_name": metadata.renderer_name,
            "version_string": metadata.version_string,
        },
        "adapter_info": adapter_info,
        "source": "detected" if configured == PlatformWorkaround.AUTO else "configured",
        "workaround": {"value": workaround.value, "flags": list(describe(workaround))},
        "vsync": vsync,
        "present_plan": [str(step) for step in plan_present(workaround, vsync=vsync, platform=platform)],
    }
    print(dumps_text(payload, pretty=args.pretty))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
