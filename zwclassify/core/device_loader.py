"""Load device descriptions (identification plus exposed data points) from YAML."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from zwclassify.core.documents import load_document, validate_document
from zwclassify.core.errors import DeviceLoadError, DeviceValidationError
from zwclassify.core.model import Device

_SCHEMA = "device.schema.json"


def _build_device(doc: dict[str, Any]) -> Device:
    default_name = doc.get("default_name", doc["id"])
    device = Device(
        id=doc["id"],
        zw_info=dict(doc["zw_info"]),
        name=doc.get("name", default_name),
        default_name=default_name,
    )
    for value in doc.get("values", []):
        device.add_value(
            value["command_class"],
            value["instance"],
            value["index"],
            units=value.get("units", ""),
            label=value.get("label", ""),
        )
    return device


def device_from_dict(doc: dict[str, Any], *, source: str = "<memory>") -> Device:
    validate_document(doc, _SCHEMA, source, DeviceValidationError)
    return _build_device(doc)


def load_device(path: Path) -> Device:
    doc = load_document(
        path,
        _SCHEMA,
        load_error=DeviceLoadError,
        validation_error=DeviceValidationError,
    )
    return _build_device(doc)
