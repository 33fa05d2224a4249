"""Homogeneous array (`[T]`) validation."""

from __future__ import annotations

from rpcschema.schema.context import ValidationContext
from rpcschema.schema.descriptors import ListOf, to_wire
from rpcschema.schema.errors import FailureCode, ValidationResult


def validate_list(
    value: object, list_of: ListOf, ctx: ValidationContext
) -> ValidationResult:
    """Accept a list or tuple whose every element satisfies the inner type.

    An empty sequence is valid for any inner type.

    Args:
        value: Candidate value.
        list_of: Parsed array descriptor.
        ctx: Evaluation context used to recurse into elements.

    Returns:
        Success, or the first element failure.
    """
    if not isinstance(value, (list, tuple)):
        return ctx.fail(
            FailureCode.SHAPE_MISMATCH,
            f"Expected array of {to_wire(list_of.inner)}, got {type(value).__name__}",
        )
    for index, item in enumerate(value):
        result = ctx.check(item, list_of.inner, key=index)
        if not result.valid:
            return result
    return ValidationResult.ok()
