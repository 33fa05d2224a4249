"""Named record validation with required fields and a closed field set."""

from __future__ import annotations

from collections.abc import Mapping

from rpcschema.schema.context import ValidationContext
from rpcschema.schema.descriptors import ObjectRef
from rpcschema.schema.errors import FailureCode, ValidationResult


def validate_object(
    value: object, object_ref: ObjectRef, ctx: ValidationContext
) -> ValidationResult:
    """Validate a field mapping against the named object schema.

    Checks run in order: required fields present, non-null and valid; no
    undeclared fields; optional fields valid when present and non-null.
    Absent and null optional fields are accepted.

    Args:
        value: Candidate value; must be a mapping.
        object_ref: Reference to the object schema.
        ctx: Evaluation context used to look up the schema and recurse.

    Returns:
        Success, or the first failure found.
    """
    schema = ctx.catalog.get_object(object_ref.name)
    if schema is None:
        return ctx.fail(
            FailureCode.UNKNOWN_TYPE, f"Unknown type descriptor: {object_ref.name!r}"
        )
    if not isinstance(value, Mapping):
        return ctx.fail(
            FailureCode.SHAPE_MISMATCH,
            f"Expected {schema.name} object, got {type(value).__name__}",
        )

    for name in sorted(schema.required):
        field_value = value.get(name)
        if field_value is None:
            return ValidationResult.fail(
                FailureCode.MISSING_REQUIRED,
                f"{schema.name} requires field {name!r}",
                path=(*ctx.path, name),
            )
        result = ctx.check(field_value, schema.fields[name], key=name)
        if not result.valid:
            return result

    undeclared = [key for key in value if key not in schema.fields]
    if undeclared:
        first = undeclared[0]
        return ValidationResult.fail(
            FailureCode.UNDECLARED_FIELD,
            f"{schema.name} does not declare field {first!r}",
            path=(*ctx.path, first),
        )

    for name in sorted(schema.optional):
        field_value = value.get(name)
        if field_value is None:
            continue
        result = ctx.check(field_value, schema.fields[name], key=name)
        if not result.valid:
            return result
    return ValidationResult.ok()
