"""Config writer that records writes instead of sending them."""

from __future__ import annotations

import logging
from dataclasses import dataclass

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigCall:
    node_id: str
    command_class: int
    instance: int
    index: int
    value: int | str


class RecordingConfigWriter:
    def __init__(self) -> None:
        self.calls: list[ConfigCall] = []

    def set_config_value(
        self,
        node_id: str,
        command_class: int,
        instance: int,
        index: int,
        value: int | str,
    ) -> None:
        LOGGER.debug(
            "Recording config write node=%s class=%s instance=%s index=%s value=%r",
            node_id,
            command_class,
            instance,
            index,
            value,
        )
        self.calls.append(
            ConfigCall(
                node_id=node_id,
                command_class=command_class,
                instance=instance,
                index=index,
                value=value,
            )
        )
