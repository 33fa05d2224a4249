"""Immutable catalog of the declared RPC types, built once from a schema document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from rpcschema.schema.descriptors import (
    Combination,
    TypeDescriptor,
    iter_object_refs,
    parse_descriptor,
)
from rpcschema.schema.errors import SchemaFault, SchemaLoadError

REQUIRED_KEY = "__required"


class SchemaDocument(BaseModel):
    """Raw schema document shape as produced by the external schema source."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    primitives: tuple[str, ...] = ()
    combinations: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    methods: dict[str, list[Any]] = {}
    objects: dict[str, dict[str, Any]] = {}

    @field_validator("tags")
    @classmethod
    def _tags_are_unique(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(value)) != len(value):
            raise ValueError("block tags must be unique")
        return value


@dataclass(frozen=True)
class ObjectSchema:
    """Named record type: required subset plus closed optional fields."""

    name: str
    required: frozenset[str]
    fields: Mapping[str, TypeDescriptor]

    @property
    def optional(self) -> frozenset[str]:
        """Declared field names that may be omitted."""
        return frozenset(self.fields) - self.required


@dataclass(frozen=True)
class MethodSignature:
    """Parameter and return descriptors of one RPC method."""

    name: str
    params: tuple[TypeDescriptor, ...]
    returns: TypeDescriptor
    min_params: int


@dataclass(frozen=True)
class SchemaCatalog:
    """Read-only view of every declared type. Safe to share across threads."""

    primitives: frozenset[str] = frozenset()
    combinations: frozenset[str] = frozenset()
    tags: tuple[str, ...] = ()
    objects: Mapping[str, ObjectSchema] = field(
        default_factory=lambda: MappingProxyType({})
    )
    methods: Mapping[str, MethodSignature] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def get_object(self, name: str) -> ObjectSchema | None:
        """Return the object schema for name, or None when undeclared."""
        return self.objects.get(name)

    def get_method(self, name: str) -> MethodSignature | None:
        """Return the method signature for name, or None when undeclared."""
        return self.methods.get(name)

    def is_tag(self, value: object) -> bool:
        """Return whether value is literally one of the block tags."""
        return isinstance(value, str) and value in self.tags

    def dangling_references(self) -> frozenset[str]:
        """Return object names referenced by fields or methods but never declared."""
        referenced: set[str] = set()
        for schema in self.objects.values():
            for descriptor in schema.fields.values():
                referenced.update(iter_object_refs(descriptor))
        for method in self.methods.values():
            for descriptor in (*method.params, method.returns):
                referenced.update(iter_object_refs(descriptor))
        return frozenset(referenced - set(self.objects))


def _parse(raw: object, where: str) -> TypeDescriptor:
    try:
        return parse_descriptor(raw)
    except SchemaFault as exc:
        raise SchemaLoadError(f"Invalid descriptor in {where}: {exc}") from exc


def _build_object(name: str, entry: Mapping[str, Any]) -> ObjectSchema:
    raw_fields = dict(entry)
    required_raw = raw_fields.pop(REQUIRED_KEY, [])
    if not isinstance(required_raw, list) or not all(
        isinstance(item, str) for item in required_raw
    ):
        raise SchemaLoadError(
            f"Object {name!r}: {REQUIRED_KEY} must be a list of field names"
        )
    required = frozenset(required_raw)
    missing = required - set(raw_fields)
    if missing:
        raise SchemaLoadError(
            f"Object {name!r}: required fields not declared: {sorted(missing)}"
        )
    fields = {
        field_name: _parse(raw, f"object {name!r} field {field_name!r}")
        for field_name, raw in raw_fields.items()
    }
    return ObjectSchema(
        name=name, required=required, fields=MappingProxyType(fields)
    )


def _build_method(name: str, entry: list[Any]) -> MethodSignature:
    if len(entry) not in (2, 3) or not isinstance(entry[0], list):
        raise SchemaLoadError(
            f"Method {name!r} must be [params, returns] "
            "or [params, returns, min_params]"
        )
    params = tuple(
        _parse(raw, f"method {name!r} param {index}")
        for index, raw in enumerate(entry[0])
    )
    returns = _parse(entry[1], f"method {name!r} return type")
    min_params = entry[2] if len(entry) == 3 else len(params)
    if (
        isinstance(min_params, bool)
        or not isinstance(min_params, int)
        or not 0 <= min_params <= len(params)
    ):
        raise SchemaLoadError(
            f"Method {name!r}: min_params must be an int between 0 and {len(params)}"
        )
    return MethodSignature(
        name=name, params=params, returns=returns, min_params=min_params
    )


def build_catalog(document: Mapping[str, Any] | SchemaDocument) -> SchemaCatalog:
    """Validate a parsed schema document and freeze it into a catalog.

    Args:
        document: Decoded schema document or an already validated model.

    Returns:
        Immutable schema catalog.

    Raises:
        SchemaLoadError: If the document shape or any declaration is invalid.
    """
    if isinstance(document, SchemaDocument):
        parsed = document
    else:
        try:
            parsed = SchemaDocument.model_validate(document)
        except ValidationError as exc:
            raise SchemaLoadError(f"Invalid schema document: {exc}") from exc

    for raw in parsed.combinations:
        if not isinstance(_parse(raw, "combinations"), Combination):
            raise SchemaLoadError(f"Not a two-branch combination: {raw!r}")

    objects = {
        name: _build_object(name, entry)
        for name, entry in parsed.objects.items()
    }
    methods = {
        name: _build_method(name, entry)
        for name, entry in parsed.methods.items()
    }
    return SchemaCatalog(
        primitives=frozenset(parsed.primitives),
        combinations=frozenset(parsed.combinations),
        tags=parsed.tags,
        objects=MappingProxyType(objects),
        methods=MappingProxyType(methods),
    )
