"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from rpcschema.schema import SchemaCatalog, SchemaValidator, build_catalog
from tests.unit.schema_fixtures import RPC_SCHEMA


@pytest.fixture
def catalog() -> SchemaCatalog:
    """Catalog built from the Ethereum-style fixture document."""
    return build_catalog(RPC_SCHEMA)


@pytest.fixture
def validator(catalog: SchemaCatalog) -> SchemaValidator:
    """Validator over the fixture catalog with default settings."""
    return SchemaValidator(catalog)


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """Fixture document written to disk as JSON."""
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(RPC_SCHEMA), encoding="utf-8")
    return path
