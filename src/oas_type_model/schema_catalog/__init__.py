"""Schema catalog exports."""

from .catalog_builder import build_schema_catalog
from .catalog_models import SchemaCatalog, SchemaInfo
from .specification_validation import (
    FindingSeverity,
    SpecificationValidationError,
    ValidationFinding,
    validate_specification,
)

__all__ = [
    "FindingSeverity",
    "SchemaCatalog",
    "SchemaInfo",
    "SpecificationValidationError",
    "ValidationFinding",
    "build_schema_catalog",
    "validate_specification",
]
