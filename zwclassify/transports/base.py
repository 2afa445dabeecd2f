"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol


class ConfigWriter(Protocol):
    def set_config_value(
        self,
        node_id: str,
        command_class: int,
        instance: int,
        index: int,
        value: int | str,
    ) -> None:
        """Push a configuration value to a node. Fire-and-forget."""
