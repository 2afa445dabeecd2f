"""Stable public API for building tooling on top of zwclassify.

This module is the supported integration surface for adapters that discover
Z-Wave nodes and need them classified. Avoid importing from internal modules
unless intentionally depending on non-stable internals.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from zwclassify.core.classifier import Classifier
from zwclassify.core.constants import DeviceType
from zwclassify.core.device_loader import device_from_dict, load_device
from zwclassify.core.errors import (
    DeviceLoadError,
    DeviceValidationError,
    QuirkLoadError,
    QuirkValidationError,
    ZWClassifyError,
)
from zwclassify.core.model import (
    ConfigWrite,
    Device,
    Property,
    PropertyDescription,
    Quirk,
    ZWValue,
)
from zwclassify.core.quirk_loader import LoadedQuirks, load_quirks
from zwclassify.transports.base import ConfigWriter
from zwclassify.transports.recording import ConfigCall, RecordingConfigWriter

__all__ = [
    "ZWClassifyError",
    "DeviceLoadError",
    "DeviceValidationError",
    "QuirkLoadError",
    "QuirkValidationError",
    "ConfigWrite",
    "Device",
    "DeviceType",
    "Property",
    "PropertyDescription",
    "Quirk",
    "ZWValue",
    "LoadedQuirks",
    "ConfigWriter",
    "ConfigCall",
    "RecordingConfigWriter",
    "Classifier",
    "classify",
    "device_from_dict",
    "load_device",
    "load_quirks",
]


@lru_cache(maxsize=1)
def _default_quirks() -> tuple[Quirk, ...]:
    return load_quirks().quirks


def classify(
    device: Device,
    writer: ConfigWriter,
    *,
    quirks: Sequence[Quirk] | None = None,
) -> None:
    """Classify `device` in place, pushing any quirk configuration through `writer`.

    When `quirks` is omitted the packaged and user quirk tables are loaded on
    the first call and reused afterwards.
    """
    if quirks is None:
        quirks = _default_quirks()
    Classifier(writer, quirks=quirks).classify(device)
