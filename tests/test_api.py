from __future__ import annotations

import pytest

from asdctl.api import BrightnessResolutionError, Client, DetectReport
from asdctl.core.registry import DeviceRegistry

from conftest import FakeDevice, FakeTransport


def test_public_client_list_models() -> None:
    client = Client(transport=FakeTransport())
    models = client.list_models()
    assert models
    assert any(m.product_id == 0x1114 for m in models)


def test_public_client_get_and_set(registry: DeviceRegistry, monitor: FakeDevice) -> None:
    client = Client(transport=FakeTransport(monitor), registry=registry)

    assert client.get_brightness(monitor.path) == 30000

    report = client.set_brightness(monitor.path, "+10%")
    assert report.value == 35960
    assert client.get_brightness(monitor.path) == 35960


def test_public_client_detect(registry: DeviceRegistry, monitor: FakeDevice) -> None:
    client = Client(transport=FakeTransport(monitor), registry=registry)

    report = client.detect(monitor.path)
    assert isinstance(report, DetectReport)
    assert report.model is not None


def test_public_client_rejects_malformed_brightness(registry: DeviceRegistry, monitor: FakeDevice) -> None:
    client = Client(transport=FakeTransport(monitor), registry=registry)

    with pytest.raises(BrightnessResolutionError):
        client.set_brightness(monitor.path, "12x")
    assert monitor.writes == []
