from asdctl.core.device_match import classify, describe_device, describe_model, is_monitor_control_device
from asdctl.core.model import ModelDescriptor, VendorDescriptor
from asdctl.core.registry import DeviceRegistry


def test_classify_known_model(registry: DeviceRegistry) -> None:
    model = classify(registry, 0x05AC, 0x1114)
    assert model is not None
    assert model.bounds.minimum == 400
    assert model.bounds.maximum == 60000


def test_classify_masks_wide_identifiers(registry: DeviceRegistry) -> None:
    assert classify(registry, 0x00FF05AC, 0x1114) == classify(registry, 0x05AC, 0x1114)
    # hiddev reports ids as signed 16-bit values
    assert classify(registry, -0xFA54, 0x1114) is not None


def test_classify_unknown_model(registry: DeviceRegistry) -> None:
    assert classify(registry, 0x05AC, 0x9999) is None
    assert classify(registry, 0x1234, 0x1114) is None


def test_monitor_application_detection() -> None:
    assert is_monitor_control_device([0x00010006, 0x00800000, 0xFF000001])
    assert is_monitor_control_device([0x00800001])
    assert not is_monitor_control_device([0x00010006, 0x00820001, 0x80000000])
    assert not is_monitor_control_device([])


def test_describe_device(registry: DeviceRegistry) -> None:
    assert (
        describe_device(registry, 0x05AC, 0x1114)
        == 'Vendor=0x05ac (Apple), Product=0x1114 [Apple Studio Display (2022, 27")]'
    )
    assert describe_device(registry, 0x05AC, 0x0001) == "Vendor=0x05ac (Apple), Product=0x0001"
    assert describe_device(registry, 0x046D, 0xC52B) == "Vendor=0x046d, Product=0xc52b"


def test_describe_model_includes_bounds(registry: DeviceRegistry) -> None:
    model = registry.list_all()[0]
    assert describe_model(registry, model).endswith("Brightness=400..60000")


def test_registry_lists_models_in_identity_order() -> None:
    models = [
        ModelDescriptor(vendor_id=0x05AC, product_id=0x9226, name="b", brightness_min=0, brightness_max=255),
        ModelDescriptor(vendor_id=0x0419, product_id=0x8002, name="a", brightness_min=0, brightness_max=255),
        ModelDescriptor(vendor_id=0x05AC, product_id=0x1114, name="c", brightness_min=400, brightness_max=60000),
    ]
    registry = DeviceRegistry(vendors=[VendorDescriptor(vendor_id=0x05AC, name="Apple")], models=models)

    assert [m.key for m in registry.list_all()] == [(0x0419, 0x8002), (0x05AC, 0x1114), (0x05AC, 0x9226)]
    assert registry.lookup_vendor(0x00FF05AC) == VendorDescriptor(vendor_id=0x05AC, name="Apple")
    assert registry.lookup_vendor(0x0419) is None
    assert len(registry) == 3
