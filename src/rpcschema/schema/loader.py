"""Read schema documents from disk and build catalogs from them."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from rpcschema.schema.catalog import SchemaCatalog, build_catalog
from rpcschema.schema.errors import SchemaLoadError

_LOGGER = logging.getLogger(__name__)


def load_schema_document(path: Path) -> dict[str, object]:
    """Decode a schema document from JSON or YAML.

    Args:
        path: Schema file path. `.json` is decoded as JSON, anything else as YAML.

    Returns:
        Parsed mapping payload.

    Raises:
        SchemaLoadError: If the file is missing, undecodable, or not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SchemaLoadError(f"Schema file not found: {path}") from exc
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read schema file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaLoadError(f"Schema file {path} is not UTF-8: {exc}") from exc

    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SchemaLoadError(f"Invalid schema JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise SchemaLoadError(f"Invalid schema YAML: {exc}") from exc
    if not isinstance(payload, dict):
        raise SchemaLoadError("Invalid schema document: root must be an object")
    return payload


def load_catalog(path: Path) -> SchemaCatalog:
    """Load a schema file and freeze it into a catalog.

    Args:
        path: Schema file path.

    Returns:
        Immutable schema catalog.

    Raises:
        SchemaLoadError: If the file cannot be decoded or the schema is invalid.
    """
    catalog = build_catalog(load_schema_document(path))
    _LOGGER.debug(
        "Loaded schema %s: %d objects, %d methods, %d tags",
        path,
        len(catalog.objects),
        len(catalog.methods),
        len(catalog.tags),
    )
    dangling = catalog.dangling_references()
    if dangling:
        _LOGGER.warning(
            "Schema %s references undeclared object types: %s",
            path,
            ", ".join(sorted(dangling)),
        )
    return catalog
