"""Unit tests for descriptor parsing."""

from __future__ import annotations

import pytest

from rpcschema.schema import (
    Combination,
    ListOf,
    ObjectRef,
    PrimitiveCode,
    SchemaFault,
    is_primitive_code,
    parse_descriptor,
    to_wire,
)


@pytest.mark.unit
def test_primitive_codes_recognised() -> None:
    """Fixed and sized codes are primitive; names are not."""
    for code in ("B", "S", "Q", "T", "D", "D0", "D8", "D32", "D256", "Array|D"):
        assert is_primitive_code(code), code
    for code in ("Q|T", "Transaction", "DX", "d32", "", 5):
        assert not is_primitive_code(code), code


@pytest.mark.unit
def test_parse_shapes() -> None:
    """Each raw shape parses into its tagged variant."""
    assert parse_descriptor("Q") == PrimitiveCode("Q")
    assert parse_descriptor("Array|D") == PrimitiveCode("Array|D")
    assert parse_descriptor("D32|Transaction") == Combination(
        PrimitiveCode("D32"), ObjectRef("Transaction")
    )
    assert parse_descriptor(["Q|T"]) == ListOf(
        Combination(PrimitiveCode("Q"), PrimitiveCode("T"))
    )
    assert parse_descriptor((["D"],)) == ListOf(ListOf(PrimitiveCode("D")))
    assert parse_descriptor("SHHFilter") == ObjectRef("SHHFilter")


@pytest.mark.unit
def test_unknown_codes_are_not_leaves() -> None:
    """Codes outside the known leaf set parse as unions or object names."""
    assert parse_descriptor("X|Y") == Combination(ObjectRef("X"), ObjectRef("Y"))
    assert parse_descriptor("Q|T") == Combination(
        PrimitiveCode("Q"), PrimitiveCode("T")
    )
    assert parse_descriptor("DATA") == ObjectRef("DATA")


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [[], ["Q", "S"], "A|B|C", "|Q", "", 42, None, {"Q": 1}],
    ids=["empty_list", "two_inner", "three_branches", "empty_branch",
         "empty_string", "int", "none", "mapping"],
)
def test_malformed_descriptors_raise(raw: object) -> None:
    """Malformed descriptors raise SchemaFault."""
    with pytest.raises(SchemaFault):
        parse_descriptor(raw)


@pytest.mark.unit
def test_to_wire_renders_document_form() -> None:
    """Parsed descriptors render back to the schema document form."""
    for raw in ("Q", "B|EthSyncing", ["D32|Transaction"], [["Q"]], "Block"):
        assert to_wire(parse_descriptor(raw)) == raw
