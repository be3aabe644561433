"""Service layer used by CLI and public API."""

from __future__ import annotations

import logging

from asdctl.core.device_match import classify, describe_device, is_monitor_control_device
from asdctl.core.errors import BrightnessResolutionError, NotAMonitorError, UnsupportedDeviceError
from asdctl.core.model import (
    ID_MASK,
    PROTOCOL_RANGE,
    BrightnessRange,
    BrightnessReport,
    BrightnessToken,
    DetectReport,
    DeviceProbe,
    ModelDescriptor,
    OperationMode,
)
from asdctl.core.model_loader import load_registry
from asdctl.core.registry import DeviceRegistry
from asdctl.core.resolver import resolve
from asdctl.transports.base import BRIGHTNESS_USAGE, HidDevice, Transport
from asdctl.transports.hiddev import HiddevTransport

LOGGER = logging.getLogger(__name__)


class BrightnessService:
    def __init__(
        self,
        *,
        transport: Transport | None = None,
        registry: DeviceRegistry | None = None,
    ) -> None:
        self.load_warnings: tuple[str, ...] = ()
        if registry is None:
            loaded = load_registry()
            registry = loaded.registry
            self.load_warnings = loaded.warnings
        self.registry = registry
        self.transport = transport or HiddevTransport()

    def list_models(self) -> list[ModelDescriptor]:
        return self.registry.list_all()

    def describe(self, probe: DeviceProbe) -> str:
        return describe_device(self.registry, probe.vendor_id, probe.product_id)

    def detect(self, path: str) -> DetectReport | None:
        """Probe ``path`` read-only; return None unless it is a USB monitor."""
        with self.transport.open(path, writable=False) as device:
            driver_version = device.driver_version()
            probe = _probe(device)
            if not probe.is_monitor:
                LOGGER.debug("%s: not a monitor control device", path)
                return None
            model = classify(self.registry, probe.vendor_id, probe.product_id)
            return DetectReport(path=path, probe=probe, model=model, driver_version=driver_version)

    def process(
        self,
        path: str,
        token: BrightnessToken | None = None,
        *,
        force: bool = False,
    ) -> BrightnessReport:
        """Read or change the brightness of the monitor at ``path``.

        Without a token the current brightness is read. An absolute token is
        written as is. A relative token is applied to the value read from the
        device and the brightness is read back afterwards, since the monitor
        may round the requested value.
        """
        mode = OperationMode.for_token(token)
        with self.transport.open(path, writable=mode.writes) as device:
            driver_version = device.driver_version()
            probe = _probe(device)

            model = classify(self.registry, probe.vendor_id, probe.product_id)
            if model is None:
                description = self.describe(probe)
                if not force:
                    raise UnsupportedDeviceError(f"Unsupported device: {description}")
                LOGGER.debug("%s: forcing unsupported device %s", path, description)

            if not probe.is_monitor:
                raise NotAMonitorError(f"{path}: This device is not a USB monitor!")

            device.init_reports()

            requested: int | None = None
            if mode is OperationMode.GET:
                value = device.read_usage(BRIGHTNESS_USAGE)
            elif mode is OperationMode.SET:
                requested = resolve(token, _bounds_for(model, token))
                device.write_usage(BRIGHTNESS_USAGE, requested)
                value = requested
            else:
                bounds = _bounds_for(model, token)
                current = device.read_usage(BRIGHTNESS_USAGE)
                requested = resolve(token, bounds, current)
                LOGGER.debug("%s: brightness %d -> %d", path, current, requested)
                device.write_usage(BRIGHTNESS_USAGE, requested)
                value = device.read_usage(BRIGHTNESS_USAGE)

            LOGGER.info("%s: %s brightness=%d", path, mode.value, value)
            return BrightnessReport(
                path=path,
                probe=probe,
                model=model,
                driver_version=driver_version,
                mode=mode,
                value=value,
                requested=requested,
            )


def _probe(device: HidDevice) -> DeviceProbe:
    info = device.device_info()
    applications = tuple(device.application(index) for index in range(info.num_applications))
    return DeviceProbe(
        vendor_id=info.vendor & ID_MASK,
        product_id=info.product & ID_MASK,
        num_applications=info.num_applications,
        applications=applications,
        is_monitor=is_monitor_control_device(applications),
    )


def _bounds_for(model: ModelDescriptor | None, token: BrightnessToken) -> BrightnessRange:
    if model is not None:
        return model.bounds
    if token.is_percentage:
        raise BrightnessResolutionError(
            "Percentage brightness needs a known model; use a raw value with --force"
        )
    return PROTOCOL_RANGE
