"""Linux hiddev transport using feature-report ioctls.

Structures and request codes mirror ``<linux/hiddev.h>``.
"""

from __future__ import annotations

import ctypes
import fcntl
import logging
import os
from enum import Enum
from types import TracebackType

from asdctl.core.errors import (
    DeviceOpenError,
    DeviceQueryError,
    ProtocolError,
    ReportError,
    ReportInitError,
    UsageError,
)
from asdctl.transports.base import DeviceInfo, FeatureUsage

LOGGER = logging.getLogger(__name__)


class hiddev_devinfo(ctypes.Structure):
    _fields_ = [
        ("bustype", ctypes.c_uint32),
        ("busnum", ctypes.c_uint32),
        ("devnum", ctypes.c_uint32),
        ("ifnum", ctypes.c_uint32),
        ("vendor", ctypes.c_int16),
        ("product", ctypes.c_int16),
        ("version", ctypes.c_int16),
        ("num_applications", ctypes.c_uint32),
    ]


class hiddev_report_info(ctypes.Structure):
    _fields_ = [
        ("report_type", ctypes.c_uint32),
        ("report_id", ctypes.c_uint32),
        ("num_fields", ctypes.c_uint32),
    ]


class hiddev_usage_ref(ctypes.Structure):
    _fields_ = [
        ("report_type", ctypes.c_uint32),
        ("report_id", ctypes.c_uint32),
        ("field_index", ctypes.c_uint32),
        ("usage_index", ctypes.c_uint32),
        ("usage_code", ctypes.c_uint32),
        ("value", ctypes.c_int32),
    ]


_IOC_NONE = 0
_IOC_WRITE = 1
_IOC_READ = 2


def _ioc(direction: int, type_: int, nr: int, size: int) -> int:
    # asm-generic/ioctl.h
    nr_bits, type_bits, size_bits = 8, 8, 14
    type_shift = nr_bits
    size_shift = type_shift + type_bits
    dir_shift = size_shift + size_bits
    return (direction << dir_shift) | (size << size_shift) | (type_ << type_shift) | nr


def _io(nr: int) -> int:
    return _ioc(_IOC_NONE, ord("H"), nr, 0)


def _ior(nr: int, size: int) -> int:
    return _ioc(_IOC_READ, ord("H"), nr, size)


def _iow(nr: int, size: int) -> int:
    return _ioc(_IOC_WRITE, ord("H"), nr, size)


def _iowr(nr: int, size: int) -> int:
    return _ioc(_IOC_READ | _IOC_WRITE, ord("H"), nr, size)


HIDIOCGVERSION = _ior(0x01, ctypes.sizeof(ctypes.c_int))
HIDIOCAPPLICATION = _io(0x02)
HIDIOCGDEVINFO = _ior(0x03, ctypes.sizeof(hiddev_devinfo))
HIDIOCINITREPORT = _io(0x05)
HIDIOCGREPORT = _iow(0x07, ctypes.sizeof(hiddev_report_info))
HIDIOCSREPORT = _iow(0x08, ctypes.sizeof(hiddev_report_info))
HIDIOCGUSAGE = _iowr(0x0B, ctypes.sizeof(hiddev_usage_ref))
HIDIOCSUSAGE = _iow(0x0C, ctypes.sizeof(hiddev_usage_ref))


class HidOperation(Enum):
    GET_VERSION = "Cannot read driver version"
    GET_DEVINFO = "Cannot read device information"
    APPLICATION = "Cannot read application collection"
    INIT_REPORT = "Failed to initialize internal report structures"
    GET_USAGE = "Cannot ask monitor for brightness control"
    GET_REPORT = "Cannot read brightness"
    SET_USAGE = "Cannot set brightness"
    SET_REPORT = "Cannot commit brightness"


_OPERATION_ERRORS: dict[HidOperation, type[ProtocolError]] = {
    HidOperation.GET_VERSION: DeviceQueryError,
    HidOperation.GET_DEVINFO: DeviceQueryError,
    HidOperation.APPLICATION: DeviceQueryError,
    HidOperation.INIT_REPORT: ReportInitError,
    HidOperation.GET_USAGE: UsageError,
    HidOperation.GET_REPORT: ReportError,
    HidOperation.SET_USAGE: UsageError,
    HidOperation.SET_REPORT: ReportError,
}


class HiddevDevice:
    def __init__(self, path: str, fd: int) -> None:
        self.path = path
        self._fd: int | None = fd

    def _ioctl(
        self,
        operation: HidOperation,
        request: int,
        arg: int | ctypes.Structure | ctypes.c_int = 0,
    ) -> int:
        if self._fd is None:
            raise _OPERATION_ERRORS[operation](f"{self.path}: {operation.value}: device is closed")
        LOGGER.debug("%s: ioctl %s (%#010x)", self.path, operation.name, request)
        try:
            return fcntl.ioctl(self._fd, request, arg)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise _OPERATION_ERRORS[operation](f"{self.path}: {operation.value}: {reason}") from exc

    def driver_version(self) -> tuple[int, int, int]:
        version = ctypes.c_int(0)
        self._ioctl(HidOperation.GET_VERSION, HIDIOCGVERSION, version)
        raw = version.value
        return raw >> 16, (raw >> 8) & 0xFF, raw & 0xFF

    def device_info(self) -> DeviceInfo:
        info = hiddev_devinfo()
        self._ioctl(HidOperation.GET_DEVINFO, HIDIOCGDEVINFO, info)
        return DeviceInfo(
            vendor=info.vendor,
            product=info.product,
            num_applications=info.num_applications,
        )

    def application(self, index: int) -> int:
        return self._ioctl(HidOperation.APPLICATION, HIDIOCAPPLICATION, index)

    def init_reports(self) -> None:
        self._ioctl(HidOperation.INIT_REPORT, HIDIOCINITREPORT, 0)

    @staticmethod
    def _refs(usage: FeatureUsage, value: int = 0) -> tuple[hiddev_usage_ref, hiddev_report_info]:
        usage_ref = hiddev_usage_ref(
            report_type=usage.report_type,
            report_id=usage.report_id,
            field_index=usage.field_index,
            usage_index=usage.usage_index,
            usage_code=usage.usage_code,
            value=value,
        )
        report_info = hiddev_report_info(
            report_type=usage.report_type,
            report_id=usage.report_id,
            num_fields=1,
        )
        return usage_ref, report_info

    def read_usage(self, usage: FeatureUsage) -> int:
        usage_ref, report_info = self._refs(usage)
        self._ioctl(HidOperation.GET_USAGE, HIDIOCGUSAGE, usage_ref)
        self._ioctl(HidOperation.GET_REPORT, HIDIOCGREPORT, report_info)
        return usage_ref.value

    def write_usage(self, usage: FeatureUsage, value: int) -> None:
        usage_ref, report_info = self._refs(usage, value)
        self._ioctl(HidOperation.SET_USAGE, HIDIOCSUSAGE, usage_ref)
        self._ioctl(HidOperation.SET_REPORT, HIDIOCSREPORT, report_info)

    def close(self) -> None:
        if self._fd is not None:
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> HiddevDevice:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class HiddevTransport:
    def open(self, path: str, *, writable: bool) -> HiddevDevice:
        flags = (os.O_RDWR if writable else os.O_RDONLY) | getattr(os, "O_CLOEXEC", 0)
        try:
            fd = os.open(path, flags)
        except OSError as exc:
            raise DeviceOpenError(f"{path}: {exc.strerror or exc}") from exc
        LOGGER.debug("Opened %s (%s)", path, "read-write" if writable else "read-only")
        return HiddevDevice(path, fd)
