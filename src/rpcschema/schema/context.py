"""Per-call evaluation context threaded through the recursive validators."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TypeAlias

from rpcschema.schema.catalog import SchemaCatalog
from rpcschema.schema.descriptors import TypeDescriptor
from rpcschema.schema.errors import FailureCode, PathSegment, ValidationResult

Dispatch: TypeAlias = Callable[
    [object, TypeDescriptor, "ValidationContext"], ValidationResult
]


@dataclass(frozen=True)
class ValidationContext:
    """Where the evaluation currently is, and how to recurse from there."""

    catalog: SchemaCatalog
    dispatch: Dispatch
    path: tuple[PathSegment, ...] = ()
    depth: int = 0

    def check(
        self,
        value: object,
        descriptor: TypeDescriptor,
        *,
        key: PathSegment | None = None,
    ) -> ValidationResult:
        """Validate a nested value through the full dispatcher.

        Args:
            value: Nested value (list element, field value, or union candidate).
            descriptor: Descriptor the nested value must satisfy.
            key: Field name or index appended to the failure path.

        Returns:
            Result of the nested evaluation.
        """
        path = self.path if key is None else (*self.path, key)
        return self.dispatch(
            value, descriptor, replace(self, path=path, depth=self.depth + 1)
        )

    def fail(self, code: FailureCode, message: str) -> ValidationResult:
        """Build a failed result located at the current path."""
        return ValidationResult.fail(code, message, path=self.path)
