"""Type descriptor tagged union and its parser.

Raw descriptors arrive as schema JSON: a string (primitive code, `A|B`
combination, or object name) or a one-element list (`[T]`, array of T).
They are parsed once into the frozen dataclasses below and matched
structurally by the validators.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

from rpcschema.schema.errors import SchemaFault

ARRAY_OR_DATA_CODES = frozenset({"Array|D", "Array|DATA"})
_SIMPLE_CODES = frozenset({"B", "S", "Q", "T", "D"})
_SIZED_DATA = re.compile(r"^D(\d+)$")


@dataclass(frozen=True)
class PrimitiveCode:
    """Leaf type identified by a short code (`B`, `Q`, `D32`, ...)."""

    code: str


@dataclass(frozen=True)
class Combination:
    """Two-way union `left|right`."""

    left: TypeDescriptor
    right: TypeDescriptor


@dataclass(frozen=True)
class ListOf:
    """Homogeneous array of `inner`."""

    inner: TypeDescriptor


@dataclass(frozen=True)
class ObjectRef:
    """Reference to a named object schema in the catalog."""

    name: str


TypeDescriptor: TypeAlias = PrimitiveCode | Combination | ListOf | ObjectRef
RawDescriptor: TypeAlias = "str | list[RawDescriptor] | tuple[RawDescriptor, ...]"


def sized_data_length(code: str) -> int | None:
    """Return N for a `D<N>` code, or None when code is not sized data."""
    match = _SIZED_DATA.fullmatch(code)
    if match is None:
        return None
    return int(match.group(1))


def is_primitive_code(code: object) -> bool:
    """Return whether code names a leaf type the primitive validator knows."""
    if not isinstance(code, str):
        return False
    return (
        code in _SIMPLE_CODES
        or code in ARRAY_OR_DATA_CODES
        or sized_data_length(code) is not None
    )


def parse_descriptor(raw: object) -> TypeDescriptor:
    """Parse a raw schema descriptor into the tagged union.

    Only codes the primitive validator knows become leaves; they win over the
    `|` split so `Array|D` stays a leaf. Anything else with a `|` is a union
    and the rest are object names.

    Args:
        raw: Descriptor as found in the schema document or passed by a caller.

    Returns:
        Parsed descriptor.

    Raises:
        SchemaFault: If the descriptor has no valid shape.
    """
    if isinstance(raw, (list, tuple)):
        if len(raw) != 1:
            raise SchemaFault(
                f"List descriptor must have exactly one inner type, got {len(raw)}"
            )
        return ListOf(parse_descriptor(raw[0]))
    if not isinstance(raw, str):
        raise SchemaFault(f"Unsupported descriptor type: {type(raw).__name__}")
    if not raw:
        raise SchemaFault("Descriptor must not be empty")
    if is_primitive_code(raw):
        return PrimitiveCode(raw)
    if "|" in raw:
        branches = raw.split("|")
        if len(branches) != 2 or not all(branches):
            raise SchemaFault(
                f"Combination descriptor must have exactly two branches: {raw!r}"
            )
        left, right = branches
        return Combination(
            parse_descriptor(left),
            parse_descriptor(right),
        )
    return ObjectRef(raw)


def to_wire(descriptor: TypeDescriptor) -> RawDescriptor:
    """Render a parsed descriptor back into schema document form."""
    if isinstance(descriptor, PrimitiveCode):
        return descriptor.code
    if isinstance(descriptor, Combination):
        return f"{to_wire(descriptor.left)}|{to_wire(descriptor.right)}"
    if isinstance(descriptor, ListOf):
        return [to_wire(descriptor.inner)]
    if isinstance(descriptor, ObjectRef):
        return descriptor.name
    raise SchemaFault(f"Unknown descriptor: {descriptor!r}")


def iter_object_refs(descriptor: TypeDescriptor) -> list[str]:
    """Return object names referenced anywhere inside descriptor."""
    if isinstance(descriptor, ObjectRef):
        return [descriptor.name]
    if isinstance(descriptor, Combination):
        return iter_object_refs(descriptor.left) + iter_object_refs(descriptor.right)
    if isinstance(descriptor, ListOf):
        return iter_object_refs(descriptor.inner)
    return []
