"""Command class, index and transform vocabulary used by the classifier."""

from __future__ import annotations

from enum import Enum

# See http://wiki.micasaverde.com/index.php/ZWave_Command_Classes for a
# complete list of command classes.
COMMAND_CLASS_SWITCH_BINARY = 37  # 0x25
COMMAND_CLASS_SWITCH_MULTILEVEL = 38  # 0x26
COMMAND_CLASS_SENSOR_BINARY = 48  # 0x30
COMMAND_CLASS_SENSOR_MULTILEVEL = 49  # 0x31
COMMAND_CLASS_METER = 50  # 0x32
COMMAND_CLASS_CONFIGURATION = 112  # 0x70
COMMAND_CLASS_ALARM = 113  # 0x71
COMMAND_CLASS_BATTERY = 128  # 0x80

# Notification type 7 ("Home Security") is reported by OpenZWave at index
# type + 3.
ALARM_INDEX_HOME_SECURITY = 10

BATTERY_INDEX_LEVEL = 0

# Meter Table Capability Report bit number times 4.
METER_INDEX_ELECTRIC_INSTANT_POWER = 8  # bit 2
METER_INDEX_ELECTRIC_INSTANT_VOLTAGE = 16  # bit 3
METER_INDEX_ELECTRIC_INSTANT_CURRENT = 20  # bit 5

SENSOR_BINARY_INDEX_SENSOR = 0

# OpenZWave SensorType enum, not part of the Z-Wave specification.
SENSOR_MULTILEVEL_INDEX_TEMPERATURE = 1
SENSOR_MULTILEVEL_INDEX_LUMINANCE = 3
SENSOR_MULTILEVEL_INDEX_RELATIVE_HUMIDITY = 5
SENSOR_MULTILEVEL_INDEX_ULTRAVIOLET = 27

SWITCH_BINARY_INDEX_SWITCH = 0

# OpenZWave SwitchMultilevelIndex enum.
SWITCH_MULTILEVEL_INDEX_LEVEL = 0

PRIMARY_INSTANCE = 1

# Named transforms, resolved by the property value runtime.
SET_LEVEL_VALUE = "set_level_value"
PARSE_LEVEL_VALUE = "parse_level_value"
SET_ON_OFF_LEVEL_VALUE = "set_on_off_level_value"
PARSE_ON_OFF_LEVEL_VALUE = "parse_on_off_level_value"
PARSE_ALARM_MOTION_VALUE = "parse_alarm_motion_value"
PARSE_ALARM_TAMPER_VALUE = "parse_alarm_tamper_value"


class DeviceType(str, Enum):
    THING = "thing"
    ON_OFF_SWITCH = "onOffSwitch"
    MULTI_LEVEL_SWITCH = "multiLevelSwitch"
    SMART_PLUG = "smartPlug"
    BINARY_SENSOR = "binarySensor"
