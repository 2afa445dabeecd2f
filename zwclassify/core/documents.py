"""Strict YAML parsing and JSON-schema validation shared by quirk and device files."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from zwclassify.core.errors import ZWClassifyError

_BOOL_TAG = "tag:yaml.org,2002:bool"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader without yes/no/on/off booleans and with duplicate key detection.

    Property names such as ``on`` must survive as strings.
    """

    yaml_implicit_resolvers = {
        first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
        for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        keys = [self.construct_object(key_node, deep=deep) for key_node, _ in node.value]
        for position, key in enumerate(keys):
            if key in keys[:position]:
                raise yaml.constructor.ConstructorError(
                    None, None, f"duplicate key '{key}'", node.value[position][0].start_mark
                )
        return super().construct_mapping(node, deep=deep)


@lru_cache(maxsize=None)
def _validator(schema_name: str) -> Any:
    schema = json.loads(
        resources.files("zwclassify.schemas").joinpath(schema_name).read_text(encoding="utf-8")
    )
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def validate_document(
    doc: dict[str, Any],
    schema_name: str,
    source: object,
    error: type[ZWClassifyError],
) -> None:
    try:
        _validator(schema_name).validate(doc)
    except ValidationError as exc:
        location = ".".join(str(part) for part in exc.path)
        where = f" ({location})" if location else ""
        raise error(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def load_document(
    path: Path | Traversable,
    schema_name: str,
    *,
    load_error: type[ZWClassifyError],
    validation_error: type[ZWClassifyError],
) -> dict[str, Any]:
    """Read, parse and validate one YAML document whose root must be a mapping."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise load_error(f"Could not read {path}: {exc}") from exc

    try:
        doc = yaml.load(content, Loader=DocumentLoader)
    except yaml.YAMLError as exc:
        raise validation_error(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(doc, dict):
        raise validation_error(f"{path} must contain a mapping at root")
    validate_document(doc, schema_name, path, validation_error)
    return doc
