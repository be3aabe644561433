from __future__ import annotations

import pytest

from asdctl.core.errors import DeviceOpenError, ReportError, ReportInitError, UsageError
from asdctl.core.model import ModelDescriptor, VendorDescriptor
from asdctl.core.registry import DeviceRegistry
from asdctl.transports.base import DeviceInfo, FeatureUsage

MONITOR_APPLICATION = 0x00800001
KEYBOARD_APPLICATION = 0x00010006


class FakeDevice:
    """In-memory stand-in for a hiddev node holding one brightness value."""

    def __init__(
        self,
        path: str,
        *,
        vendor: int = 0x05AC,
        product: int = 0x1114,
        applications: tuple[int, ...] = (MONITOR_APPLICATION,),
        brightness: int = 30000,
        step: int = 1,
        fail: str | None = None,
    ) -> None:
        self.path = path
        self.vendor = vendor
        self.product = product
        self.applications = applications
        self.brightness = brightness
        self.step = step
        self.fail = fail
        self.calls: list[str] = []
        self.writes: list[int] = []
        self.closed = False
        self.writable = False

    def driver_version(self) -> tuple[int, int, int]:
        self.calls.append("version")
        return 1, 0, 4

    def device_info(self) -> DeviceInfo:
        self.calls.append("devinfo")
        return DeviceInfo(vendor=self.vendor, product=self.product, num_applications=len(self.applications))

    def application(self, index: int) -> int:
        self.calls.append(f"application:{index}")
        return self.applications[index]

    def init_reports(self) -> None:
        self.calls.append("init")
        if self.fail == "init":
            raise ReportInitError(f"{self.path}: Failed to initialize internal report structures")

    def read_usage(self, usage: FeatureUsage) -> int:
        self.calls.append("read")
        if self.fail == "get_usage":
            raise UsageError(f"{self.path}: Cannot ask monitor for brightness control")
        if self.fail == "get_report":
            raise ReportError(f"{self.path}: Cannot read brightness")
        return self.brightness

    def write_usage(self, usage: FeatureUsage, value: int) -> None:
        self.calls.append("write")
        if self.fail == "set_usage":
            raise UsageError(f"{self.path}: Cannot set brightness")
        if self.fail == "set_report":
            raise ReportError(f"{self.path}: Cannot commit brightness")
        self.writes.append(value)
        self.brightness = value - value % self.step

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeDevice:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FakeTransport:
    def __init__(self, *devices: FakeDevice) -> None:
        self.devices = {device.path: device for device in devices}
        self.opened: list[tuple[str, bool]] = []

    def open(self, path: str, *, writable: bool) -> FakeDevice:
        self.opened.append((path, writable))
        device = self.devices.get(path)
        if device is None:
            raise DeviceOpenError(f"{path}: No such file or directory")
        device.writable = writable
        device.closed = False
        return device


@pytest.fixture
def registry() -> DeviceRegistry:
    return DeviceRegistry(
        vendors=[VendorDescriptor(vendor_id=0x05AC, name="Apple")],
        models=[
            ModelDescriptor(
                vendor_id=0x05AC,
                product_id=0x1114,
                name='Apple Studio Display (2022, 27")',
                brightness_min=400,
                brightness_max=60000,
            )
        ],
    )


@pytest.fixture
def monitor() -> FakeDevice:
    return FakeDevice("/dev/usb/hiddev0")
