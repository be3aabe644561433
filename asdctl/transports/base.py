"""Transport interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType
from typing import Protocol

HID_REPORT_TYPE_FEATURE = 3


@dataclass(frozen=True)
class FeatureUsage:
    report_id: int
    usage_code: int
    report_type: int = HID_REPORT_TYPE_FEATURE
    field_index: int = 0
    usage_index: int = 0


# Feature report 1, vendor-defined brightness usage of the Studio Display
BRIGHTNESS_USAGE = FeatureUsage(report_id=1, usage_code=0x820001)


@dataclass(frozen=True)
class DeviceInfo:
    """Identity as reported by the driver, before masking."""

    vendor: int
    product: int
    num_applications: int


class HidDevice(Protocol):
    path: str

    def driver_version(self) -> tuple[int, int, int]:
        """Return the driver version as (major, minor, patch)."""

    def device_info(self) -> DeviceInfo:
        """Return vendor, product and number of HID applications."""

    def application(self, index: int) -> int:
        """Return the usage of application collection ``index``."""

    def init_reports(self) -> None:
        """Ask the driver to initialise its internal report structures."""

    def read_usage(self, usage: FeatureUsage) -> int:
        """Fetch a usage value and commit the read with a get-report."""

    def write_usage(self, usage: FeatureUsage, value: int) -> None:
        """Store a usage value and commit the write with a set-report."""

    def close(self) -> None:
        """Release the device handle."""

    def __enter__(self) -> HidDevice: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class Transport(Protocol):
    def open(self, path: str, *, writable: bool) -> HidDevice:
        """Open a device node, read-write when ``writable`` is set."""
