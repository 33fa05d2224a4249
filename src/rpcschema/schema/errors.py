"""Schema error contracts and validation result models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class SchemaLoadError(RuntimeError):
    """Raised when a schema document cannot be read, decoded, or accepted."""


class SchemaFault(RuntimeError):
    """Raised inside validation when the schema itself is malformed.

    Never escapes the validator facade; it is downgraded to an
    `internal_fault` failure there.
    """


class FailureCode(StrEnum):
    """Stable machine-readable validation failure codes."""

    UNKNOWN_TYPE = "unknown_type_descriptor"
    SHAPE_MISMATCH = "shape_mismatch"
    MISSING_REQUIRED = "missing_required_field"
    UNDECLARED_FIELD = "undeclared_field"
    NO_BRANCH_MATCHED = "no_branch_matched"
    DEPTH_EXCEEDED = "depth_exceeded"
    UNKNOWN_METHOD = "unknown_method"
    PARAM_COUNT = "param_count"
    INTERNAL_FAULT = "internal_fault"


PathSegment = str | int


class ValidationFailure(BaseModel):
    """Why a value was rejected, and where inside the value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: FailureCode
    message: str
    path: tuple[str | int, ...] = ()

    def location(self) -> str:
        """Render path as a JSON-pointer-like string (`$` for the root)."""
        parts = ["$"]
        for segment in self.path:
            parts.append(f"[{segment}]" if isinstance(segment, int) else f".{segment}")
        return "".join(parts)


class ValidationResult(BaseModel):
    """Definite outcome of one validation call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    failure: ValidationFailure | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        """Return the shared successful result.

        Returns:
            Result with `valid=True` and no failure.
        """
        return VALID

    @classmethod
    def fail(
        cls,
        code: FailureCode,
        message: str,
        *,
        path: tuple[PathSegment, ...] = (),
    ) -> ValidationResult:
        """Construct a failed result.

        Args:
            code: Stable failure code.
            message: Human-readable reason.
            path: Location of the offending value.

        Returns:
            Result with `valid=False` and failure detail.
        """
        return cls(
            valid=False,
            failure=ValidationFailure(code=code, message=message, path=path),
        )

    def __bool__(self) -> bool:
        return self.valid


VALID = ValidationResult(valid=True)
