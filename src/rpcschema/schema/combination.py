"""Two-way union (`A|B`) validation."""

from __future__ import annotations

from rpcschema.schema.context import ValidationContext
from rpcschema.schema.descriptors import Combination, PrimitiveCode, to_wire
from rpcschema.schema.errors import FailureCode, ValidationResult


def validate_combination(
    value: object, combination: Combination, ctx: ValidationContext
) -> ValidationResult:
    """Accept value when either branch accepts it.

    Primitive branches are tried before complex ones; the first match wins.

    Args:
        value: Candidate value; None never matches.
        combination: Parsed union descriptor.
        ctx: Evaluation context used to recurse into each branch.

    Returns:
        Success, or a `no_branch_matched` failure.
    """
    wire = to_wire(combination)
    if value is None:
        return ctx.fail(FailureCode.SHAPE_MISMATCH, f"Expected {wire}, got null")
    branches = (combination.left, combination.right)
    ordered = [b for b in branches if isinstance(b, PrimitiveCode)] + [
        b for b in branches if not isinstance(b, PrimitiveCode)
    ]
    for branch in ordered:
        if ctx.check(value, branch).valid:
            return ValidationResult.ok()
    return ctx.fail(
        FailureCode.NO_BRANCH_MATCHED,
        f"Value matches neither branch of {wire}",
    )
