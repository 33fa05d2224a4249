"""Single validation entry point: classify a descriptor and dispatch."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rpcschema.schema.catalog import SchemaCatalog
from rpcschema.schema.combination import validate_combination
from rpcschema.schema.context import ValidationContext
from rpcschema.schema.descriptors import (
    Combination,
    ListOf,
    ObjectRef,
    PrimitiveCode,
    TypeDescriptor,
    parse_descriptor,
    to_wire,
)
from rpcschema.schema.errors import (
    FailureCode,
    SchemaFault,
    ValidationResult,
)
from rpcschema.schema.list_type import validate_list
from rpcschema.schema.object_type import validate_object
from rpcschema.schema.primitive import validate_primitive

_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64
# Three frames per level must stay under the default recursion limit.
MAX_DEPTH_LIMIT = 200


class SchemaValidator:
    """Validates values against descriptors of one immutable catalog.

    Holds no per-call state, so one instance may serve concurrent callers.
    """

    def __init__(
        self,
        catalog: SchemaCatalog,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        log_failures: bool = False,
    ) -> None:
        """Bind validator to a catalog.

        Args:
            catalog: Shared read-only schema catalog.
            max_depth: Maximum descriptor nesting evaluated before giving up.
            log_failures: Whether to log every rejected value at INFO.

        Raises:
            ValueError: If max_depth is outside 1..MAX_DEPTH_LIMIT.
        """
        if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
            )
        self._catalog = catalog
        self._max_depth = max_depth
        self._log_failures = log_failures

    @property
    def catalog(self) -> SchemaCatalog:
        """Catalog this validator reads from."""
        return self._catalog

    def validate(self, value: object, descriptor: object) -> ValidationResult:
        """Validate value against a raw or parsed descriptor.

        Never raises: malformed descriptors and unexpected faults become
        `internal_fault` failures.

        Args:
            value: Candidate value (decoded JSON-like data).
            descriptor: Raw schema descriptor or parsed `TypeDescriptor`.

        Returns:
            Definite validation result.
        """
        result = self._evaluate(value, descriptor)
        if not result.valid and self._log_failures and result.failure is not None:
            _LOGGER.info(
                "Rejected value at %s: %s",
                result.failure.location(),
                result.failure.message,
            )
        return result

    def is_valid(self, value: object, descriptor: object) -> bool:
        """Return whether value satisfies descriptor; never raises."""
        return self.validate(value, descriptor).valid

    def validate_params(
        self, method: str, params: Sequence[object]
    ) -> ValidationResult:
        """Validate outgoing call parameters against a method signature.

        Args:
            method: RPC method name.
            params: Positional parameters about to be sent.

        Returns:
            Definite validation result; failure paths start with the param index.
        """
        signature = self._catalog.get_method(method)
        if signature is None:
            return ValidationResult.fail(
                FailureCode.UNKNOWN_METHOD, f"Unknown method: {method!r}"
            )
        if isinstance(params, (str, bytes)) or not isinstance(params, Sequence):
            return ValidationResult.fail(
                FailureCode.SHAPE_MISMATCH,
                f"{method} params must be an array, got {type(params).__name__}",
            )
        count = len(params)
        if not signature.min_params <= count <= len(signature.params):
            return ValidationResult.fail(
                FailureCode.PARAM_COUNT,
                f"{method} takes {signature.min_params}..{len(signature.params)} "
                f"params, got {count}",
            )
        for index, (param, descriptor) in enumerate(
            zip(params, signature.params, strict=False)
        ):
            result = self._evaluate(param, descriptor, key=index)
            if not result.valid:
                return result
        return ValidationResult.ok()

    def validate_response(self, method: str, value: object) -> ValidationResult:
        """Validate a decoded response against a method's return type.

        Args:
            method: RPC method name.
            value: Decoded `result` member of the response.

        Returns:
            Definite validation result.
        """
        signature = self._catalog.get_method(method)
        if signature is None:
            return ValidationResult.fail(
                FailureCode.UNKNOWN_METHOD, f"Unknown method: {method!r}"
            )
        return self.validate(value, signature.returns)

    def _evaluate(
        self, value: object, descriptor: object, *, key: int | None = None
    ) -> ValidationResult:
        try:
            parsed = self._parse(descriptor)
            ctx = self._root_context()
            if key is None:
                return self._dispatch(value, parsed, ctx)
            return ctx.check(value, parsed, key=key)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.warning(
                "Internal fault validating against %r", descriptor, exc_info=True
            )
            return ValidationResult.fail(
                FailureCode.INTERNAL_FAULT,
                f"Validation fault: {type(exc).__name__}: {exc}",
            )

    def _root_context(self) -> ValidationContext:
        return ValidationContext(catalog=self._catalog, dispatch=self._dispatch)

    def _parse(self, descriptor: object) -> TypeDescriptor:
        if isinstance(descriptor, (PrimitiveCode, Combination, ListOf, ObjectRef)):
            return descriptor
        return parse_descriptor(descriptor)

    def _dispatch(
        self, value: object, descriptor: TypeDescriptor, ctx: ValidationContext
    ) -> ValidationResult:
        if ctx.depth > self._max_depth:
            return ctx.fail(
                FailureCode.DEPTH_EXCEEDED,
                f"Descriptor nesting exceeds max depth {self._max_depth}",
            )
        if isinstance(descriptor, PrimitiveCode):
            if validate_primitive(value, descriptor.code, ctx.catalog):
                return ValidationResult.ok()
            return ctx.fail(
                FailureCode.SHAPE_MISMATCH,
                f"Expected {descriptor.code}, got {_describe(value)}",
            )
        if isinstance(descriptor, Combination):
            return validate_combination(value, descriptor, ctx)
        if isinstance(descriptor, ListOf):
            return validate_list(value, descriptor, ctx)
        if isinstance(descriptor, ObjectRef):
            return validate_object(value, descriptor, ctx)
        raise SchemaFault(f"Unknown descriptor: {to_wire(descriptor)!r}")


def _describe(value: object) -> str:
    text = repr(value)
    if len(text) > 40:
        text = text[:37] + "..."
    return f"{type(value).__name__} {text}"


def validate(
    value: object, descriptor: object, catalog: SchemaCatalog
) -> ValidationResult:
    """Validate value against descriptor using a throwaway validator."""
    return SchemaValidator(catalog).validate(value, descriptor)


def is_valid(value: object, descriptor: object, catalog: SchemaCatalog) -> bool:
    """Return whether value satisfies descriptor under catalog."""
    return SchemaValidator(catalog).is_valid(value, descriptor)
