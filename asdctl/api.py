"""Stable public API for building tooling on top of asdctl.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from asdctl.core.errors import (
    AsdctlError,
    BrightnessResolutionError,
    DeviceOpenError,
    DeviceQueryError,
    ModelLoadError,
    ModelValidationError,
    NotAMonitorError,
    ProtocolError,
    ReportError,
    ReportInitError,
    UnsupportedDeviceError,
    UsageError,
)
from asdctl.core.model import (
    BrightnessRange,
    BrightnessReport,
    BrightnessToken,
    DetectReport,
    DeviceProbe,
    ModelDescriptor,
    OperationMode,
    TokenKind,
    VendorDescriptor,
)
from asdctl.core.registry import DeviceRegistry
from asdctl.core.service import BrightnessService
from asdctl.core.token import parse_token
from asdctl.transports.base import Transport

__all__ = [
    "AsdctlError",
    "BrightnessResolutionError",
    "DeviceOpenError",
    "DeviceQueryError",
    "ModelLoadError",
    "ModelValidationError",
    "NotAMonitorError",
    "ProtocolError",
    "ReportError",
    "ReportInitError",
    "UnsupportedDeviceError",
    "UsageError",
    "BrightnessRange",
    "BrightnessReport",
    "BrightnessToken",
    "DetectReport",
    "DeviceProbe",
    "DeviceRegistry",
    "ModelDescriptor",
    "OperationMode",
    "TokenKind",
    "VendorDescriptor",
    "Client",
]


class Client:
    """Public client for reading and changing monitor brightness.

    A `Client` wraps the model database, device classification and the hiddev
    feature-report protocol behind a stable API intended for third-party
    tools (GUI/TUI/services/scripts). Brightness arguments use the command
    line syntax: ``"20000"``, ``"+1000"``, ``"-1000"``, ``"50%"``, ``"+10%"``.
    """

    def __init__(
        self,
        *,
        transport: Transport | None = None,
        registry: DeviceRegistry | None = None,
    ) -> None:
        self._service = BrightnessService(transport=transport, registry=registry)

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self._service.load_warnings

    def list_models(self) -> list[ModelDescriptor]:
        return self._service.list_models()

    def detect(self, path: str) -> DetectReport | None:
        return self._service.detect(path)

    def get_brightness(self, path: str, *, force: bool = False) -> int:
        return self._service.process(path, force=force).value

    def set_brightness(self, path: str, brightness: str, *, force: bool = False) -> BrightnessReport:
        token = parse_token(brightness)
        if token is None:
            raise BrightnessResolutionError(f"'{brightness}' is not a brightness value")
        return self._service.process(path, token, force=force)
