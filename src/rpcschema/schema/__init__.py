"""RPC schema catalog and recursive value validators."""

from rpcschema.schema.catalog import (
    REQUIRED_KEY,
    MethodSignature,
    ObjectSchema,
    SchemaCatalog,
    SchemaDocument,
    build_catalog,
)
from rpcschema.schema.descriptors import (
    Combination,
    ListOf,
    ObjectRef,
    PrimitiveCode,
    TypeDescriptor,
    is_primitive_code,
    parse_descriptor,
    to_wire,
)
from rpcschema.schema.errors import (
    FailureCode,
    SchemaFault,
    SchemaLoadError,
    ValidationFailure,
    ValidationResult,
)
from rpcschema.schema.facade import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    SchemaValidator,
    is_valid,
    validate,
)
from rpcschema.schema.loader import load_catalog, load_schema_document
from rpcschema.schema.primitive import validate_primitive

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "REQUIRED_KEY",
    "Combination",
    "FailureCode",
    "ListOf",
    "MethodSignature",
    "ObjectRef",
    "ObjectSchema",
    "PrimitiveCode",
    "SchemaCatalog",
    "SchemaDocument",
    "SchemaFault",
    "SchemaLoadError",
    "SchemaValidator",
    "TypeDescriptor",
    "ValidationFailure",
    "ValidationResult",
    "build_catalog",
    "is_primitive_code",
    "is_valid",
    "load_catalog",
    "load_schema_document",
    "parse_descriptor",
    "to_wire",
    "validate",
    "validate_primitive",
]
