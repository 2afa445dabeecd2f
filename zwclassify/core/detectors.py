"""Feature detectors.

Each detector probes the device for one feature family and, only when the
data point exists, adds properties and possibly updates the device type.
Detectors never remove properties added by others.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from zwclassify.core import constants as c
from zwclassify.core.constants import DeviceType
from zwclassify.core.model import ConfigWrite, Device, PropertyDescription, Quirk
from zwclassify.core.properties import add_property
from zwclassify.core.quirks import switch_configs_for
from zwclassify.transports.base import ConfigWriter

LOGGER = logging.getLogger(__name__)

_BOOLEAN = PropertyDescription(type="boolean")
_LEVEL = PropertyDescription(type="number", unit="percent", minimum=0, maximum=100)

_METERS = (
    ("instantaneousPower", c.METER_INDEX_ELECTRIC_INSTANT_POWER, "watt"),
    ("voltage", c.METER_INDEX_ELECTRIC_INSTANT_VOLTAGE, "volt"),
    ("current", c.METER_INDEX_ELECTRIC_INSTANT_CURRENT, "ampere"),
)

_TEMPERATURE_UNITS = {"F": "farenheit", "C": "celsius"}


def push_config_writes(device: Device, writer: ConfigWriter, writes: Iterable[ConfigWrite]) -> None:
    for write in writes:
        LOGGER.info(
            "Setting device %s config instance: %s index: %s to value: %r",
            device.id,
            write.instance,
            write.index,
            write.value,
        )
        writer.set_config_value(
            device.node_id,
            c.COMMAND_CLASS_CONFIGURATION,
            write.instance,
            write.index,
            write.value,
        )


def probe_switch(device: Device, instance: int) -> tuple[str | None, str | None]:
    """Return the (binary switch, multilevel level) value ids at an instance."""
    binary_id = device.find_value_id(
        c.COMMAND_CLASS_SWITCH_BINARY, instance, c.SWITCH_BINARY_INDEX_SWITCH
    )
    level_id = device.find_value_id(
        c.COMMAND_CLASS_SWITCH_MULTILEVEL, instance, c.SWITCH_MULTILEVEL_INDEX_LEVEL
    )
    return binary_id, level_id


def init_switch(
    device: Device,
    quirks: Sequence[Quirk],
    writer: ConfigWriter,
    instance: int,
    binary_id: str | None,
    level_id: str | None,
    suffix: str = "",
) -> None:
    if binary_id is not None:
        # Secondary outlets have no first-class type yet, so the device
        # becomes a generic thing.
        device.type = DeviceType.THING if suffix else DeviceType.ON_OFF_SWITCH
        add_property(device, quirks, f"on{suffix}", _BOOLEAN, binary_id)
        if level_id is not None:
            if not suffix:
                device.type = DeviceType.MULTI_LEVEL_SWITCH
            add_property(
                device,
                quirks,
                f"level{suffix}",
                _LEVEL,
                level_id,
                c.SET_LEVEL_VALUE,
                c.PARSE_LEVEL_VALUE,
            )
    elif level_id is not None:
        # No on/off support, so fake it using the level.
        device.type = DeviceType.THING if suffix else DeviceType.MULTI_LEVEL_SWITCH
        add_property(
            device,
            quirks,
            f"on{suffix}",
            _BOOLEAN,
            level_id,
            c.SET_ON_OFF_LEVEL_VALUE,
            c.PARSE_ON_OFF_LEVEL_VALUE,
        )
        add_property(
            device,
            quirks,
            f"level{suffix}",
            _LEVEL,
            level_id,
            c.SET_ON_OFF_LEVEL_VALUE,
            c.PARSE_ON_OFF_LEVEL_VALUE,
        )

    for name, index, unit in _METERS:
        meter_id = device.find_value_id(c.COMMAND_CLASS_METER, instance, index)
        if meter_id is None:
            continue
        if not suffix:
            device.type = DeviceType.SMART_PLUG
        add_property(
            device,
            quirks,
            f"{name}{suffix}",
            PropertyDescription(type="number", unit=unit),
            meter_id,
        )

    push_config_writes(device, writer, switch_configs_for(quirks, device))


def detect_alarm(device: Device, quirks: Sequence[Quirk]) -> None:
    alarm_id = device.find_value_id(
        c.COMMAND_CLASS_ALARM, c.PRIMARY_INSTANCE, c.ALARM_INDEX_HOME_SECURITY
    )
    if alarm_id is None:
        return
    add_property(device, quirks, "motion", _BOOLEAN, alarm_id, None, c.PARSE_ALARM_MOTION_VALUE)
    add_property(device, quirks, "tamper", _BOOLEAN, alarm_id, None, c.PARSE_ALARM_TAMPER_VALUE)


def _find_multilevel_sensor(device: Device, index: int) -> str | None:
    return device.find_value_id(c.COMMAND_CLASS_SENSOR_MULTILEVEL, c.PRIMARY_INSTANCE, index)


def detect_temperature(device: Device, quirks: Sequence[Quirk]) -> None:
    value_id = _find_multilevel_sensor(device, c.SENSOR_MULTILEVEL_INDEX_TEMPERATURE)
    if value_id is None:
        return
    unit = _TEMPERATURE_UNITS.get(device.values[value_id].units)
    add_property(device, quirks, "temperature", PropertyDescription(type="number", unit=unit), value_id)


def detect_luminance(device: Device, quirks: Sequence[Quirk]) -> None:
    value_id = _find_multilevel_sensor(device, c.SENSOR_MULTILEVEL_INDEX_LUMINANCE)
    if value_id is None:
        return
    add_property(device, quirks, "luminance", PropertyDescription(type="number", unit="lux"), value_id)


def detect_humidity(device: Device, quirks: Sequence[Quirk]) -> None:
    value_id = _find_multilevel_sensor(device, c.SENSOR_MULTILEVEL_INDEX_RELATIVE_HUMIDITY)
    if value_id is None:
        return
    add_property(device, quirks, "humidity", PropertyDescription(type="number", unit="percent"), value_id)


def detect_ultraviolet(device: Device, quirks: Sequence[Quirk]) -> None:
    value_id = _find_multilevel_sensor(device, c.SENSOR_MULTILEVEL_INDEX_ULTRAVIOLET)
    if value_id is None:
        return
    add_property(device, quirks, "uvIndex", PropertyDescription(type="number"), value_id)


def detect_binary_sensor(device: Device, quirks: Sequence[Quirk]) -> None:
    value_id = device.find_value_id(
        c.COMMAND_CLASS_SENSOR_BINARY, c.PRIMARY_INSTANCE, c.SENSOR_BINARY_INDEX_SENSOR
    )
    if value_id is None:
        return
    if not device.properties:
        device.type = DeviceType.BINARY_SENSOR
    add_property(device, quirks, "on", _BOOLEAN, value_id)

    if device.type == DeviceType.THING and device.name == device.default_name:
        device.name = f"{device.id}-thing"


def detect_battery(device: Device, quirks: Sequence[Quirk]) -> None:
    value_id = device.find_value_id(
        c.COMMAND_CLASS_BATTERY, c.PRIMARY_INSTANCE, c.BATTERY_INDEX_LEVEL
    )
    if value_id is None:
        return
    add_property(
        device,
        quirks,
        "batteryLevel",
        PropertyDescription(type="number", unit="percent"),
        value_id,
    )


SENSOR_DETECTORS = (
    detect_alarm,
    detect_temperature,
    detect_luminance,
    detect_humidity,
    detect_ultraviolet,
    detect_binary_sensor,
)
