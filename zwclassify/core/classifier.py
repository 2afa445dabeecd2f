"""Classifier orchestrating quirks and feature detectors for one device."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from zwclassify.core.constants import PRIMARY_INSTANCE, DeviceType
from zwclassify.core.detectors import (
    SENSOR_DETECTORS,
    detect_battery,
    init_switch,
    probe_switch,
    push_config_writes,
)
from zwclassify.core.model import Device, Quirk
from zwclassify.core.quirk_loader import load_quirks
from zwclassify.core.quirks import config_overrides_for
from zwclassify.transports.base import ConfigWriter

LOGGER = logging.getLogger(__name__)


class Classifier:
    """Determines a device's type and properties from its data points.

    `classify` runs a single pass over a freshly discovered device. It is not
    reentrant and must not run twice concurrently on the same device.
    """

    def __init__(
        self,
        writer: ConfigWriter,
        *,
        quirks: Sequence[Quirk] | None = None,
    ) -> None:
        self.writer = writer
        if quirks is None:
            loaded = load_quirks()
            self.quirks: tuple[Quirk, ...] = loaded.quirks
            self.load_warnings = loaded.warnings
        else:
            self.quirks = tuple(quirks)
            self.load_warnings = ()

    def classify(self, device: Device) -> None:
        self._classify_internal(device)

        # Any type of device can be battery powered.
        detect_battery(device, self.quirks)

        LOGGER.debug(
            "Classified device %s as %s with properties %s",
            device.id,
            device.type.value,
            ", ".join(device.properties),
        )

    def _classify_internal(self, device: Device) -> None:
        push_config_writes(device, self.writer, config_overrides_for(self.quirks, device))

        binary_id, level_id = probe_switch(device, PRIMARY_INSTANCE)
        if binary_id is not None or level_id is not None:
            self._classify_switch(device, binary_id, level_id)
            return

        device.type = DeviceType.THING
        for detector in SENSOR_DETECTORS:
            detector(device, self.quirks)

    def _classify_switch(self, device: Device, binary_id: str | None, level_id: str | None) -> None:
        # Numbered instances replace instance 1 entirely: it is only
        # classified when no instance from 2 upward exposes a switch.
        instance = PRIMARY_INSTANCE + 1
        switch_count = 0
        while True:
            inst_binary_id, inst_level_id = probe_switch(device, instance)
            if inst_binary_id is None and inst_level_id is None:
                break
            switch_count += 1
            init_switch(
                device,
                self.quirks,
                self.writer,
                instance,
                inst_binary_id,
                inst_level_id,
                suffix=str(instance),
            )
            instance += 1

        if switch_count > 0:
            return

        init_switch(device, self.quirks, self.writer, PRIMARY_INSTANCE, binary_id, level_id)
