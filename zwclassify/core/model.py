"""Core data models shared by the quirk table, detectors and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from zwclassify.core.constants import DeviceType
from zwclassify.core.errors import QuirkValidationError


@dataclass(frozen=True)
class ZWValue:
    value_id: str
    command_class: int
    instance: int
    index: int
    units: str = ""
    label: str = ""


@dataclass(frozen=True)
class PropertyDescription:
    type: str
    unit: str | None = None
    minimum: int | None = None
    maximum: int | None = None

    def as_dict(self) -> dict[str, Any]:
        descr: dict[str, Any] = {"type": self.type}
        if self.unit is not None:
            descr["unit"] = self.unit
        if self.minimum is not None:
            descr["min"] = self.minimum
        if self.maximum is not None:
            descr["max"] = self.maximum
        return descr


@dataclass(frozen=True)
class Property:
    name: str
    description: PropertyDescription
    value_id: str
    set_transform: str | None = None
    parse_transform: str | None = None


@dataclass(frozen=True)
class ConfigWrite:
    instance: int
    index: int
    value: int | str
    device_type: DeviceType | None = None


@dataclass(frozen=True)
class Quirk:
    id: str
    match: dict[str, str]
    description: str = ""
    exclude_properties: tuple[str, ...] = ()
    set_configs: tuple[ConfigWrite, ...] = ()
    switch_configs: tuple[ConfigWrite, ...] = ()

    def __post_init__(self) -> None:
        # set_configs run before any device type is known.
        conditional = [write for write in self.set_configs if write.device_type is not None]
        if conditional:
            raise QuirkValidationError(
                f"Quirk '{self.id}' set_configs cannot carry a device_type condition "
                f"(index {conditional[0].index})"
            )


@dataclass
class Device:
    """A node being classified.

    The classifier mutates `type`, `properties` and possibly `name` in place.
    `values` doubles as the data-point resolver through `find_value_id`.
    """

    id: str
    zw_info: dict[str, str]
    values: dict[str, ZWValue] = field(default_factory=dict)
    type: DeviceType = DeviceType.THING
    properties: dict[str, Property] = field(default_factory=dict)
    name: str = ""
    default_name: str = ""

    @property
    def node_id(self) -> str:
        return self.zw_info.get("node_id", "")

    def find_value_id(self, command_class: int, instance: int, index: int) -> str | None:
        for value_id, value in self.values.items():
            if (
                value.command_class == command_class
                and value.instance == instance
                and value.index == index
            ):
                return value_id
        return None

    def add_value(
        self,
        command_class: int,
        instance: int,
        index: int,
        *,
        units: str = "",
        label: str = "",
    ) -> str:
        value_id = f"{self.node_id}-{command_class}-{instance}-{index}"
        self.values[value_id] = ZWValue(
            value_id=value_id,
            command_class=command_class,
            instance=instance,
            index=index,
            units=units,
            label=label,
        )
        return value_id
