"""Device classification against the model registry."""

from __future__ import annotations

from collections.abc import Iterable

from asdctl.core.model import ID_MASK, ModelDescriptor
from asdctl.core.registry import DeviceRegistry

# HID Usage Tables 1.4, usage page 0x80: Monitor
MONITOR_USAGE_PAGE = 0x80


def classify(registry: DeviceRegistry, vendor_id: int, product_id: int) -> ModelDescriptor | None:
    return registry.lookup_model(vendor_id & ID_MASK, product_id & ID_MASK)


def is_monitor_control_device(application_ids: Iterable[int]) -> bool:
    return any((application >> 16) & 0xFF == MONITOR_USAGE_PAGE for application in application_ids)


def describe_device(registry: DeviceRegistry, vendor_id: int, product_id: int) -> str:
    vendor_id &= ID_MASK
    product_id &= ID_MASK

    text = f"Vendor={vendor_id:#06x}"
    vendor = registry.lookup_vendor(vendor_id)
    if vendor is not None:
        text += f" ({vendor.name})"
    text += f", Product={product_id:#06x}"
    model = classify(registry, vendor_id, product_id)
    if model is not None:
        text += f" [{model.name}]"
    return text


def describe_model(registry: DeviceRegistry, model: ModelDescriptor) -> str:
    text = describe_device(registry, model.vendor_id, model.product_id)
    return f"{text}, Brightness={model.brightness_min}..{model.brightness_max}"
