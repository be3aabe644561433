"""Immutable lookup table of known vendors and monitor models."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from asdctl.core.model import ID_MASK, ModelDescriptor, VendorDescriptor


class DeviceRegistry:
    """Known vendors and models, keyed by their 16-bit USB identifiers.

    Built once at startup and never mutated; safe to share between callers.
    """

    def __init__(
        self,
        vendors: Iterable[VendorDescriptor] = (),
        models: Iterable[ModelDescriptor] = (),
    ) -> None:
        self._vendors = MappingProxyType({v.vendor_id & ID_MASK: v for v in vendors})
        self._models = MappingProxyType({m.key: m for m in models})

    def lookup_vendor(self, vendor_id: int) -> VendorDescriptor | None:
        return self._vendors.get(vendor_id & ID_MASK)

    def lookup_model(self, vendor_id: int, product_id: int) -> ModelDescriptor | None:
        return self._models.get((vendor_id & ID_MASK, product_id & ID_MASK))

    def list_all(self) -> list[ModelDescriptor]:
        return [self._models[key] for key in sorted(self._models)]

    def __len__(self) -> int:
        return len(self._models)
