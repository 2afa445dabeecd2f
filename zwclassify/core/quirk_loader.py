"""Quirk table loading: packaged YAML files first, then user files from the XDG dirs."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

from zwclassify.core.constants import DeviceType
from zwclassify.core.documents import load_document
from zwclassify.core.errors import QuirkLoadError, QuirkValidationError
from zwclassify.core.model import ConfigWrite, Quirk

LOGGER = logging.getLogger(__name__)

_QUIRK_SUFFIXES = (".yml", ".yaml")


@dataclass(frozen=True)
class LoadedQuirks:
    quirks: tuple[Quirk, ...]
    warnings: tuple[str, ...]


def _config_write(entry: dict[str, Any]) -> ConfigWrite:
    condition = entry.get("device_type")
    return ConfigWrite(
        instance=entry["instance"],
        index=entry["index"],
        value=entry["value"],
        device_type=None if condition is None else DeviceType(condition),
    )


def read_quirk_file(path: Path | Traversable) -> list[Quirk]:
    doc = load_document(
        path,
        "quirk.schema.json",
        load_error=QuirkLoadError,
        validation_error=QuirkValidationError,
    )
    ids = [entry["id"] for entry in doc["quirks"]]
    repeated = sorted({quirk_id for quirk_id in ids if ids.count(quirk_id) > 1})
    if repeated:
        raise QuirkValidationError(f"Quirk ids defined more than once in {path}: {', '.join(repeated)}")

    return [
        Quirk(
            id=entry["id"],
            description=entry.get("description", ""),
            match=dict(entry["match"]),
            exclude_properties=tuple(entry.get("exclude_properties", ())),
            set_configs=tuple(map(_config_write, entry.get("set_configs", ()))),
            switch_configs=tuple(map(_config_write, entry.get("switch_configs", ()))),
        )
        for entry in doc["quirks"]
    ]


def _packaged_quirk_files() -> list[Traversable]:
    files = [f for f in resources.files("zwclassify.quirks").iterdir() if f.name.endswith(_QUIRK_SUFFIXES)]
    return sorted(files, key=lambda f: f.name)


def _user_quirk_files() -> Iterator[Path]:
    home = Path.home()
    for env, fallback in (("XDG_CONFIG_HOME", home / ".config"), ("XDG_DATA_HOME", home / ".local/share")):
        directory = Path(os.environ.get(env, fallback)) / "zwclassify" / "quirks"
        if directory.is_dir():
            yield from sorted(p for p in directory.iterdir() if p.suffix in _QUIRK_SUFFIXES)


def load_quirks() -> LoadedQuirks:
    """Load packaged quirks followed by user quirks, in table order.

    A user quirk reusing an existing id replaces it at the same position.
    """
    table: dict[str, Quirk] = {}
    for path in _packaged_quirk_files():
        table.update((quirk.id, quirk) for quirk in read_quirk_file(path))

    warnings: list[str] = []
    for path in _user_quirk_files():
        for quirk in read_quirk_file(path):
            if quirk.id in table:
                warnings.append(f"User quirk '{quirk.id}' overrides packaged quirk")
                LOGGER.warning("User quirk '%s' from %s overrides packaged quirk", quirk.id, path)
            table[quirk.id] = quirk

    return LoadedQuirks(quirks=tuple(table.values()), warnings=tuple(warnings))
