"""Property construction, filtered through the quirk table."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from zwclassify.core.model import Device, Property, PropertyDescription, Quirk
from zwclassify.core.quirks import is_excluded

LOGGER = logging.getLogger(__name__)


def add_property(
    device: Device,
    quirks: Sequence[Quirk],
    name: str,
    description: PropertyDescription,
    value_id: str | None,
    set_transform: str | None = None,
    parse_transform: str | None = None,
) -> Property | None:
    if value_id is None:
        return None

    if is_excluded(quirks, device, name):
        LOGGER.info("Not adding property %s to device %s due to quirk.", name, device.id)
        return None

    prop = Property(
        name=name,
        description=description,
        value_id=value_id,
        set_transform=set_transform,
        parse_transform=parse_transform,
    )
    device.properties[name] = prop
    return prop
