"""Schema graph exports."""

from .document_loader import SchemaDocumentError, build_schema_document, load_schema_document
from .schema_nodes import (
    Discriminator,
    SchemaDocument,
    SchemaNode,
    ShapeKind,
    UnresolvedReferenceError,
    unescape_segment,
)

__all__ = [
    "Discriminator",
    "SchemaDocument",
    "SchemaNode",
    "ShapeKind",
    "UnresolvedReferenceError",
    "SchemaDocumentError",
    "build_schema_document",
    "load_schema_document",
    "unescape_segment",
]
