from __future__ import annotations

from pathlib import Path

import pytest

from zwclassify.core import constants as c
from zwclassify.core.classifier import Classifier
from zwclassify.core.constants import DeviceType
from zwclassify.core.model import ConfigWrite, Device, Quirk
from zwclassify.transports.recording import ConfigCall, RecordingConfigWriter


def _device(node_id: str = "5", **zw_info: str) -> Device:
    info = {"manufacturer_id": "0x0000", "product_id": "0x0000", "node_id": node_id}
    info.update(zw_info)
    return Device(id=f"zwave-{node_id}", zw_info=info, name="Device", default_name="Device")


def _classify(device: Device, quirks: list[Quirk] | None = None) -> RecordingConfigWriter:
    writer = RecordingConfigWriter()
    Classifier(writer, quirks=quirks or []).classify(device)
    return writer


def test_binary_switch_only_is_on_off_switch() -> None:
    device = _device()
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)

    _classify(device)

    assert device.type is DeviceType.ON_OFF_SWITCH
    assert list(device.properties) == ["on"]
    assert device.properties["on"].description.type == "boolean"
    assert device.properties["on"].set_transform is None


def test_binary_and_level_is_multi_level_switch() -> None:
    device = _device()
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    level_id = device.add_value(c.COMMAND_CLASS_SWITCH_MULTILEVEL, 1, 0)

    _classify(device)

    assert device.type is DeviceType.MULTI_LEVEL_SWITCH
    assert {"on", "level"} <= set(device.properties)
    level = device.properties["level"]
    assert level.value_id == level_id
    assert (level.description.minimum, level.description.maximum) == (0, 100)
    assert level.description.unit == "percent"
    assert level.set_transform == c.SET_LEVEL_VALUE
    assert level.parse_transform == c.PARSE_LEVEL_VALUE


def test_level_only_synthesizes_on_from_level() -> None:
    device = _device()
    level_id = device.add_value(c.COMMAND_CLASS_SWITCH_MULTILEVEL, 1, 0)

    _classify(device)

    assert device.type is DeviceType.MULTI_LEVEL_SWITCH
    assert set(device.properties) == {"on", "level"}
    for name in ("on", "level"):
        prop = device.properties[name]
        assert prop.value_id == level_id
        assert prop.set_transform == c.SET_ON_OFF_LEVEL_VALUE
        assert prop.parse_transform == c.PARSE_ON_OFF_LEVEL_VALUE


def test_numbered_instances_replace_instance_one() -> None:
    # Instance 1 is only exposed when no instance from 2 upward has a switch.
    device = _device()
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    device.add_value(c.COMMAND_CLASS_SWITCH_MULTILEVEL, 1, 0)
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 2, 0)
    device.add_value(c.COMMAND_CLASS_SWITCH_MULTILEVEL, 2, 0)

    _classify(device)

    assert set(device.properties) == {"on2", "level2"}
    assert device.type is DeviceType.THING


def test_enumeration_stops_at_first_gap() -> None:
    device = _device()
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 2, 0)
    device.add_value(c.COMMAND_CLASS_SWITCH_MULTILEVEL, 3, 0)
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 5, 0)

    _classify(device)

    assert list(device.properties) == ["on2", "on3", "level3"]
    assert device.properties["on3"].set_transform == c.SET_ON_OFF_LEVEL_VALUE
    assert device.type is DeviceType.THING


def test_meters_upgrade_primary_switch_to_smart_plug() -> None:
    device = _device()
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    device.add_value(c.COMMAND_CLASS_METER, 1, c.METER_INDEX_ELECTRIC_INSTANT_POWER)
    device.add_value(c.COMMAND_CLASS_METER, 1, c.METER_INDEX_ELECTRIC_INSTANT_VOLTAGE)
    device.add_value(c.COMMAND_CLASS_METER, 1, c.METER_INDEX_ELECTRIC_INSTANT_CURRENT)

    _classify(device)

    assert device.type is DeviceType.SMART_PLUG
    assert list(device.properties) == ["on", "instantaneousPower", "voltage", "current"]
    assert device.properties["instantaneousPower"].description.unit == "watt"
    assert device.properties["voltage"].description.unit == "volt"
    assert device.properties["current"].description.unit == "ampere"


def test_meters_on_secondary_instance_are_suffixed() -> None:
    device = _device()
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 2, 0)
    device.add_value(c.COMMAND_CLASS_METER, 2, c.METER_INDEX_ELECTRIC_INSTANT_POWER)

    _classify(device)

    assert set(device.properties) == {"on2", "instantaneousPower2"}
    assert device.type is DeviceType.THING


def test_excluded_property_is_not_surfaced() -> None:
    quirks = [Quirk(id="no-level", match={"product_id": "0x0060"}, exclude_properties=("level",))]
    device = _device(product_id="0x0060")
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    level_id = device.add_value(c.COMMAND_CLASS_SWITCH_MULTILEVEL, 1, 0)
    device.add_value(c.COMMAND_CLASS_METER, 1, c.METER_INDEX_ELECTRIC_INSTANT_POWER)

    _classify(device, quirks)

    assert "level" not in device.properties
    assert level_id in device.values
    assert list(device.properties) == ["on", "instantaneousPower"]
    assert device.type is DeviceType.SMART_PLUG


def test_config_overrides_sent_in_table_order_before_properties() -> None:
    quirks = [
        Quirk(id="first", match={"product_id": "0x0064"}, set_configs=(ConfigWrite(1, 5, 1),)),
        Quirk(id="other", match={"product_id": "0x0001"}, set_configs=(ConfigWrite(1, 9, 9),)),
        Quirk(
            id="second",
            match={"manufacturer_id": "0x0086"},
            set_configs=(ConfigWrite(2, 3, 0), ConfigWrite(1, 4, "x")),
        ),
    ]
    device = _device(node_id="7", manufacturer_id="0x0086", product_id="0x0064")
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    device.add_value(c.COMMAND_CLASS_BATTERY, 1, 0)

    property_counts: list[int] = []

    class SnapshotWriter(RecordingConfigWriter):
        def set_config_value(self, node_id, command_class, instance, index, value) -> None:
            property_counts.append(len(device.properties))
            super().set_config_value(node_id, command_class, instance, index, value)

    writer = SnapshotWriter()
    Classifier(writer, quirks=quirks).classify(device)

    assert writer.calls == [
        ConfigCall("7", c.COMMAND_CLASS_CONFIGURATION, 1, 5, 1),
        ConfigCall("7", c.COMMAND_CLASS_CONFIGURATION, 2, 3, 0),
        ConfigCall("7", c.COMMAND_CLASS_CONFIGURATION, 1, 4, "x"),
    ]
    assert property_counts == [0, 0, 0]


def test_no_signals_resets_type_to_thing() -> None:
    device = _device()
    device.type = DeviceType.SMART_PLUG

    writer = _classify(device)

    assert device.type is DeviceType.THING
    assert device.properties == {}
    assert writer.calls == []
    assert device.name == "Device"


def test_sensor_branch_skipped_when_switch_found() -> None:
    device = _device()
    device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    device.add_value(c.COMMAND_CLASS_SENSOR_MULTILEVEL, 1, c.SENSOR_MULTILEVEL_INDEX_TEMPERATURE, units="C")
    device.add_value(c.COMMAND_CLASS_SENSOR_BINARY, 1, 0)

    _classify(device)

    assert list(device.properties) == ["on"]
    assert device.type is DeviceType.ON_OFF_SWITCH


def test_battery_is_added_on_every_branch() -> None:
    switch = _device()
    switch.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
    switch.add_value(c.COMMAND_CLASS_BATTERY, 1, c.BATTERY_INDEX_LEVEL)
    sensor = _device(node_id="6")
    sensor.add_value(c.COMMAND_CLASS_SENSOR_BINARY, 1, 0)
    sensor.add_value(c.COMMAND_CLASS_BATTERY, 1, c.BATTERY_INDEX_LEVEL)

    _classify(switch)
    _classify(sensor)

    assert list(switch.properties) == ["on", "batteryLevel"]
    assert list(sensor.properties) == ["on", "batteryLevel"]
    assert sensor.properties["batteryLevel"].description.unit == "percent"
    assert sensor.type is DeviceType.BINARY_SENSOR


def test_multi_sensor_properties_in_detector_order() -> None:
    device = _device()
    for index in (
        c.SENSOR_MULTILEVEL_INDEX_ULTRAVIOLET,
        c.SENSOR_MULTILEVEL_INDEX_RELATIVE_HUMIDITY,
        c.SENSOR_MULTILEVEL_INDEX_LUMINANCE,
        c.SENSOR_MULTILEVEL_INDEX_TEMPERATURE,
    ):
        device.add_value(c.COMMAND_CLASS_SENSOR_MULTILEVEL, 1, index, units="F")
    device.add_value(c.COMMAND_CLASS_ALARM, 1, c.ALARM_INDEX_HOME_SECURITY)

    _classify(device)

    assert list(device.properties) == [
        "motion",
        "tamper",
        "temperature",
        "luminance",
        "humidity",
        "uvIndex",
    ]
    assert device.type is DeviceType.THING


class TestPackagedQuirks:
    @pytest.fixture(autouse=True)
    def _isolated_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    def test_multisensor_motion_via_basic_set(self) -> None:
        device = _device(node_id="9", manufacturer_id="0x0086", product_id="0x0064")
        alarm_id = device.add_value(c.COMMAND_CLASS_ALARM, 1, c.ALARM_INDEX_HOME_SECURITY)

        writer = RecordingConfigWriter()
        Classifier(writer).classify(device)

        assert writer.calls == [ConfigCall("9", c.COMMAND_CLASS_CONFIGURATION, 1, 5, 1)]
        assert device.type is DeviceType.THING
        assert set(device.properties) == {"motion", "tamper"}
        assert device.properties["motion"].value_id == alarm_id
        assert device.properties["tamper"].value_id == alarm_id
        assert device.properties["motion"].parse_transform == c.PARSE_ALARM_MOTION_VALUE
        assert device.properties["tamper"].parse_transform == c.PARSE_ALARM_TAMPER_VALUE
        assert "on" not in device.properties

    def test_multisensor_binary_sensor_is_hidden(self) -> None:
        device = _device(node_id="9", manufacturer_id="0x0086", product_id="0x0064")
        device.add_value(c.COMMAND_CLASS_ALARM, 1, c.ALARM_INDEX_HOME_SECURITY)
        device.add_value(c.COMMAND_CLASS_SENSOR_BINARY, 1, 0)

        writer = RecordingConfigWriter()
        Classifier(writer).classify(device)

        assert set(device.properties) == {"motion", "tamper"}
        assert device.type is DeviceType.THING
        assert device.name == "zwave-9-thing"

    def test_aeotec_smart_plug(self) -> None:
        device = _device(
            node_id="3",
            manufacturer_id="0x0086",
            product_id="0x0060",
            manufacturer="Aeotec",
        )
        device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)
        device.add_value(c.COMMAND_CLASS_SWITCH_MULTILEVEL, 1, 0)
        device.add_value(c.COMMAND_CLASS_METER, 1, c.METER_INDEX_ELECTRIC_INSTANT_POWER)
        device.add_value(c.COMMAND_CLASS_METER, 1, c.METER_INDEX_ELECTRIC_INSTANT_VOLTAGE)
        device.add_value(c.COMMAND_CLASS_METER, 1, c.METER_INDEX_ELECTRIC_INSTANT_CURRENT)

        writer = RecordingConfigWriter()
        Classifier(writer).classify(device)

        assert device.type is DeviceType.SMART_PLUG
        assert list(device.properties) == ["on", "instantaneousPower", "voltage"]
        assert [(call.index, call.value) for call in writer.calls] == [
            (80, "Basic"),
            (90, 1),
            (91, 1),
        ]

    def test_aeotec_switch_only_reports_button_presses(self) -> None:
        device = _device(node_id="4", manufacturer_id="0x0086", product_id="0x0011", manufacturer="Aeotec")
        device.add_value(c.COMMAND_CLASS_SWITCH_BINARY, 1, 0)

        writer = RecordingConfigWriter()
        Classifier(writer).classify(device)

        assert device.type is DeviceType.ON_OFF_SWITCH
        assert writer.calls == [ConfigCall("4", c.COMMAND_CLASS_CONFIGURATION, 1, 80, "Basic")]
