"""Type descriptor resolution service."""

from __future__ import annotations

from oas_type_model.naming.identifier_normalization import to_model_class_name
from oas_type_model.naming.type_namer import canonical_name, path_base_name
from oas_type_model.schema_graph.schema_nodes import SchemaDocument, SchemaNode, ShapeKind

from .type_descriptor_models import ANY_TYPE, TypeDescriptor, TypeKind

_STRING_FORMATS = {
    "date": TypeKind.DATE,
    "date-time": TypeKind.DATE_TIME,
    "uuid": TypeKind.UUID,
    "uri": TypeKind.URI,
    "byte": TypeKind.BYTE_ARRAY,
    "binary": TypeKind.BINARY,
}
_NUMBER_FORMATS = {
    "float": TypeKind.FLOAT,
    "double": TypeKind.DOUBLE,
}


def resolve_type_descriptor(
    node: SchemaNode | None,
    document: SchemaDocument,
    naming_context: SchemaNode | None = None,
) -> TypeDescriptor:
    """Return the type token for ``node``.

    ``naming_context`` names the owner of an anonymous enum or array element so that the
    generated type is scoped to it.
    """
    return _resolve(node, document, naming_context, frozenset())


def _resolve(
    node: SchemaNode | None,
    document: SchemaDocument,
    naming_context: SchemaNode | None,
    seen: frozenset[str],
) -> TypeDescriptor:
    if node is None or not node.is_defined:
        return ANY_TYPE
    target = document.resolve_reference(node)
    if target is None or target.path_from_root in seen:
        return ANY_TYPE
    seen = seen | {target.path_from_root}

    shape = target.shape
    if shape is ShapeKind.ARRAY:
        element = _resolve(target.items, document, naming_context, seen)
        return TypeDescriptor(kind=TypeKind.ARRAY, element=element)
    if shape is ShapeKind.MAP:
        if target.is_schema_less:
            return TypeDescriptor(kind=TypeKind.UNTYPED_OBJECT)
        values = target.additional_properties
        value_node = values if isinstance(values, SchemaNode) else None
        element = _resolve(value_node, document, naming_context, seen)
        return TypeDescriptor(kind=TypeKind.MAP, element=element)
    if shape is ShapeKind.OBJECT:
        return TypeDescriptor(
            kind=TypeKind.OBJECT, model_name=_model_name(target, document, naming_context)
        )
    if target.is_enum:
        return TypeDescriptor(
            kind=TypeKind.ENUM,
            model_name=_model_name(target, document, naming_context),
            format=target.format,
        )
    return _scalar_descriptor(target)


def _model_name(
    node: SchemaNode, document: SchemaDocument, naming_context: SchemaNode | None
) -> str:
    if node.name is None and naming_context is not None and node.path[-1] == "items":
        owner = path_base_name(naming_context.path)
        return to_model_class_name(owner) + to_model_class_name(path_base_name(node.path))
    return canonical_name(node, document)


def _scalar_descriptor(node: SchemaNode) -> TypeDescriptor:
    declared_type = node.declared_type
    node_format = node.format
    if declared_type == "string":
        kind = _STRING_FORMATS.get(node_format or "", TypeKind.STRING)
    elif declared_type == "integer":
        kind = TypeKind.LONG if node_format == "int64" else TypeKind.INTEGER
    elif declared_type == "number":
        kind = _NUMBER_FORMATS.get(node_format or "", TypeKind.DECIMAL)
    elif declared_type == "boolean":
        kind = TypeKind.BOOLEAN
    else:
        kind = TypeKind.ANY
    return TypeDescriptor(kind=kind, format=node_format)
