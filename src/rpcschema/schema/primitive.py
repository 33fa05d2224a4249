"""Leaf type checks for the RPC primitive codes."""

from __future__ import annotations

from rpcschema.hex import is_hex
from rpcschema.schema.catalog import SchemaCatalog
from rpcschema.schema.descriptors import ARRAY_OR_DATA_CODES, sized_data_length


def _is_quantity(value: object) -> bool:
    # bool subclasses int but is never a quantity
    return isinstance(value, int) and not isinstance(value, bool)


def _is_array_or_data(value: object) -> bool:
    if isinstance(value, (list, tuple)):
        return all(is_hex(item) for item in value)
    return is_hex(value)


def validate_primitive(value: object, code: str, catalog: SchemaCatalog) -> bool:
    """Return whether value satisfies primitive code.

    Codes:
        `B` bool, `S` str, `Q` int quantity, `T` block tag from the catalog,
        `D` hex data, `D<N>` hex data of exactly N bytes, `Array|D` hex data
        or a list of hex data.

    Args:
        value: Candidate value.
        code: Primitive code.
        catalog: Catalog supplying the block tags.

    Returns:
        True when value matches; False for mismatches and unrecognised codes.
    """
    if code == "B":
        return isinstance(value, bool)
    if code == "S":
        return isinstance(value, str)
    if code == "Q":
        return _is_quantity(value)
    if code == "T":
        return catalog.is_tag(value)
    if code == "D":
        return is_hex(value)
    if code in ARRAY_OR_DATA_CODES:
        return _is_array_or_data(value)
    byte_length = sized_data_length(code)
    if byte_length is not None:
        return is_hex(value, byte_length)
    return False
