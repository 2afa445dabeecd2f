"""Quirk table matching.

Multiple matching quirks compose: exclusions are unioned and configuration
writes are concatenated in table order.
"""

from __future__ import annotations

from collections.abc import Sequence

from zwclassify.core.model import ConfigWrite, Device, Quirk


def quirk_matches(quirk: Quirk, device: Device) -> bool:
    return all(device.zw_info.get(field) == expected for field, expected in quirk.match.items())


def matching_quirks(quirks: Sequence[Quirk], device: Device) -> list[Quirk]:
    return [quirk for quirk in quirks if quirk_matches(quirk, device)]


def config_overrides_for(quirks: Sequence[Quirk], device: Device) -> list[ConfigWrite]:
    overrides: list[ConfigWrite] = []
    for quirk in matching_quirks(quirks, device):
        overrides.extend(quirk.set_configs)
    return overrides


def switch_configs_for(quirks: Sequence[Quirk], device: Device) -> list[ConfigWrite]:
    """Post-switch writes whose device type condition holds for the device right now."""
    writes: list[ConfigWrite] = []
    for quirk in matching_quirks(quirks, device):
        writes.extend(
            write
            for write in quirk.switch_configs
            if write.device_type is None or write.device_type == device.type
        )
    return writes


def is_excluded(quirks: Sequence[Quirk], device: Device, property_name: str) -> bool:
    return any(property_name in quirk.exclude_properties for quirk in matching_quirks(quirks, device))
