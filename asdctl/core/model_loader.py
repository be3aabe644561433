"""Loading and validation of the YAML monitor model database."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from asdctl.core.errors import ModelLoadError, ModelValidationError
from asdctl.core.model import ModelDescriptor, VendorDescriptor
from asdctl.core.registry import DeviceRegistry

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ModelValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedRegistry:
    registry: DeviceRegistry
    warnings: tuple[str, ...]


def _load_schema_validator() -> Any:
    schema_text = resources.files("asdctl.schemas").joinpath("model.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _model_dirs() -> tuple[Path, Path]:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_config / "asdctl/models", xdg_data / "asdctl/models"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelLoadError(f"Could not read model file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ModelValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ModelValidationError(f"Model file {path} must contain a mapping at root")
    return loaded


def _build_models(
    doc: dict[str, Any],
    source: Path | Traversable,
) -> tuple[VendorDescriptor, list[ModelDescriptor]]:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ModelValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    vendor = VendorDescriptor(vendor_id=doc["vendor"]["id"], name=doc["vendor"]["name"])

    models: list[ModelDescriptor] = []
    seen: set[int] = set()
    for entry in doc["models"]:
        product_id = entry["product_id"]
        context = f"{source}: product {product_id:#06x}"
        if product_id in seen:
            raise ModelValidationError(f"{context} is defined more than once")
        seen.add(product_id)
        if entry["brightness_min"] > entry["brightness_max"]:
            raise ModelValidationError(
                f"{context} has brightness_min {entry['brightness_min']} "
                f"greater than brightness_max {entry['brightness_max']}"
            )
        models.append(
            ModelDescriptor(
                vendor_id=vendor.vendor_id,
                product_id=product_id,
                name=entry["name"],
                brightness_min=entry["brightness_min"],
                brightness_max=entry["brightness_max"],
            )
        )
    return vendor, models


def _iter_packaged_model_paths() -> list[Traversable]:
    model_root = resources.files("asdctl.models")
    return [item for item in model_root.iterdir() if item.name.endswith((".yml", ".yaml"))]


def _iter_user_model_paths() -> list[Path]:
    paths: list[Path] = []
    for directory in _model_dirs():
        if not directory.exists() or not directory.is_dir():
            continue
        paths.extend(sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"}))
    return paths


def load_registry() -> LoadedRegistry:
    vendors: dict[int, VendorDescriptor] = {}
    models: dict[tuple[int, int], ModelDescriptor] = {}
    warnings: list[str] = []

    for path in sorted(_iter_packaged_model_paths(), key=lambda p: p.name):
        vendor, entries = _build_models(_read_yaml(path), path)
        vendors[vendor.vendor_id] = vendor
        for model in entries:
            models[model.key] = model

    for path in _iter_user_model_paths():
        vendor, entries = _build_models(_read_yaml(path), path)
        known = vendors.get(vendor.vendor_id)
        if known is not None and known.name != vendor.name:
            warning = f"User model file {path} renames vendor {vendor.vendor_id:#06x} to '{vendor.name}'"
            LOGGER.warning(warning)
            warnings.append(warning)
        vendors[vendor.vendor_id] = vendor
        for model in entries:
            if model.key in models:
                warning = (
                    f"User model '{model.name}' ({model.vendor_id:#06x}:{model.product_id:#06x}) "
                    "overrides packaged model"
                )
                LOGGER.warning(warning)
                warnings.append(warning)
            models[model.key] = model

    LOGGER.debug("Loaded %d model(s) from %d vendor(s)", len(models), len(vendors))
    return LoadedRegistry(
        registry=DeviceRegistry(vendors=vendors.values(), models=models.values()),
        warnings=tuple(warnings),
    )
