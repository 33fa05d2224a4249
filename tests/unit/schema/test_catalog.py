"""Unit tests for catalog construction and invariants."""

from __future__ import annotations

import copy

import pytest

from rpcschema.schema import (
    ListOf,
    ObjectRef,
    PrimitiveCode,
    SchemaCatalog,
    SchemaLoadError,
    build_catalog,
)
from tests.unit.schema_fixtures import RPC_SCHEMA


@pytest.mark.unit
def test_catalog_exposes_declarations(catalog: SchemaCatalog) -> None:
    """Catalog carries tags in order, object schemas and method signatures."""
    assert catalog.tags == ("latest", "earliest", "pending")
    assert "Array|D" in catalog.primitives
    assert "D32|Transaction" in catalog.combinations

    shh_filter = catalog.get_object("SHHFilter")
    assert shh_filter is not None
    assert shh_filter.required == frozenset({"topics"})
    assert shh_filter.optional == frozenset({"to"})
    assert shh_filter.fields["topics"] == ListOf(PrimitiveCode("Array|D"))

    balance = catalog.get_method("eth_getBalance")
    assert balance is not None
    assert balance.min_params == 1
    assert len(balance.params) == 2
    assert catalog.get_method("shh_newFilter").min_params == 1
    assert catalog.get_method("eth_getBlockByHash").returns == ObjectRef("Block")
    assert catalog.get_object("Unknown") is None


@pytest.mark.unit
def test_catalog_is_read_only(catalog: SchemaCatalog) -> None:
    """Catalog and nested mappings reject mutation."""
    with pytest.raises(AttributeError):
        catalog.tags = ()  # type: ignore[misc]
    with pytest.raises(TypeError):
        catalog.objects["Extra"] = catalog.objects["Block"]  # type: ignore[index]
    with pytest.raises(TypeError):
        catalog.objects["Block"].fields["x"] = PrimitiveCode("Q")  # type: ignore[index]


@pytest.mark.unit
def test_is_tag_is_exact(catalog: SchemaCatalog) -> None:
    """Only the literal configured tags count."""
    assert catalog.is_tag("latest")
    assert not catalog.is_tag("Latest")
    assert not catalog.is_tag(["latest"])


@pytest.mark.unit
def test_empty_document_builds_empty_catalog() -> None:
    """Every section is optional."""
    empty = build_catalog({})
    assert empty.tags == ()
    assert dict(empty.objects) == {}


@pytest.mark.unit
def test_dangling_references_reported() -> None:
    """References to undeclared objects are reported, not rejected."""
    catalog = build_catalog(
        {"objects": {"Log": {"__required": [], "receipt": "Receipt"}}}
    )
    assert catalog.dangling_references() == frozenset({"Receipt"})


def _mutated(path: tuple[str, ...], value: object) -> dict:
    document = copy.deepcopy(RPC_SCHEMA)
    target = document
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value
    return document


@pytest.mark.unit
@pytest.mark.parametrize(
    "document,match",
    [
        (
            _mutated(("objects", "SHHFilter", "__required"), ["topics", "ttl"]),
            "required fields not declared",
        ),
        (_mutated(("objects", "SHHFilter", "__required"), "topics"), "__required"),
        (_mutated(("objects", "SHHFilter", "topics"), ["D", "Q"]), "exactly one"),
        (_mutated(("combinations",), ["Q|T|B"]), "exactly two branches"),
        (_mutated(("combinations",), ["Q"]), "Not a two-branch combination"),
        (_mutated(("methods", "eth_getBalance"), ["D20"]), "must be \\[params"),
        (_mutated(("methods", "eth_getBalance"), [["D20"], "Q", 3]), "min_params"),
        (_mutated(("tags",), ["latest", "latest"]), "unique"),
        ({"unexpected": 1}, "Invalid schema document"),
    ],
    ids=["required_not_subset", "required_not_list", "list_two_inner",
         "combination_three_branches", "combination_single", "method_shape",
         "method_min_params", "duplicate_tags", "extra_key"],
)
def test_invalid_documents_raise(document: dict, match: str) -> None:
    """Invariant violations fail catalog construction."""
    with pytest.raises(SchemaLoadError, match=match):
        build_catalog(document)
