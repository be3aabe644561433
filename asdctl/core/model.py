"""Core data models used across loader, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ID_MASK = 0xFFFF


@dataclass(frozen=True)
class BrightnessRange:
    minimum: int
    maximum: int

    @property
    def span(self) -> int:
        return self.maximum - self.minimum

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))


# Full range of the 16-bit brightness usage, used when a model is unknown.
PROTOCOL_RANGE = BrightnessRange(minimum=0, maximum=0xFFFF)


@dataclass(frozen=True)
class VendorDescriptor:
    vendor_id: int
    name: str


@dataclass(frozen=True)
class ModelDescriptor:
    vendor_id: int
    product_id: int
    name: str
    brightness_min: int
    brightness_max: int

    @property
    def key(self) -> tuple[int, int]:
        return self.vendor_id, self.product_id

    @property
    def bounds(self) -> BrightnessRange:
        return BrightnessRange(minimum=self.brightness_min, maximum=self.brightness_max)


@dataclass(frozen=True)
class DeviceProbe:
    vendor_id: int
    product_id: int
    num_applications: int
    applications: tuple[int, ...]
    is_monitor: bool


class TokenKind(Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


@dataclass(frozen=True)
class BrightnessToken:
    kind: TokenKind
    magnitude: int
    sign: int = 1
    is_percentage: bool = False

    @property
    def is_relative(self) -> bool:
        return self.kind is TokenKind.RELATIVE


class OperationMode(Enum):
    GET = "get"
    SET = "set"
    SET_RELATIVE = "set-relative"

    @classmethod
    def for_token(cls, token: BrightnessToken | None) -> OperationMode:
        if token is None:
            return cls.GET
        if token.is_relative:
            return cls.SET_RELATIVE
        return cls.SET

    @property
    def writes(self) -> bool:
        return self in (OperationMode.SET, OperationMode.SET_RELATIVE)


@dataclass(frozen=True)
class BrightnessReport:
    path: str
    probe: DeviceProbe
    model: ModelDescriptor | None
    driver_version: tuple[int, int, int]
    mode: OperationMode
    value: int
    requested: int | None = None


@dataclass(frozen=True)
class DetectReport:
    path: str
    probe: DeviceProbe
    model: ModelDescriptor | None
    driver_version: tuple[int, int, int]
