"""Canonical type naming for schema nodes.

Names are a pure function of a node's position in the document. Nothing is cached here;
memoization belongs to the schema catalog.
"""

from __future__ import annotations

from oas_type_model.schema_graph.schema_nodes import (
    SchemaDocument,
    SchemaNode,
    ShapeKind,
    UnresolvedReferenceError,
    unescape_segment,
)

from .identifier_normalization import to_model_class_name

_STRUCTURAL_SEGMENTS = frozenset(
    {
        "anyOf",
        "oneOf",
        "allOf",
        "items",
        "schema",
        "content",
        "additionalProperties",
        "properties",
    }
)
_ELEMENT_SLOTS = frozenset({"schema", "items", "additionalProperties"})


class NamingError(Exception):
    """Raised when a node sits at a path shape the naming rules do not model."""


def canonical_name(node: SchemaNode, document: SchemaDocument) -> str:
    """Return the canonical type name of ``node``; references are named after their target."""
    return _canonical_name(_dereference(node, document), document, frozenset())


def base_name(
    node: SchemaNode, document: SchemaDocument, seen: frozenset[str] = frozenset()
) -> str:
    """Return the un-normalized base name: envelope member, declared name or path segment.

    An envelope whose member leads back to an envelope already visited keeps its own name.
    """
    visited = seen | {node.path_from_root}
    envelope_member = _polymorphic_envelope_member(node, document)
    if envelope_member is not None and envelope_member.path_from_root not in visited:
        return base_name(envelope_member, document, visited)
    if node.name is not None:
        return node.name
    return path_base_name(node.path)


def path_base_name(path: tuple[str, ...]) -> str:
    """Return the last path segment that is neither structural nor a list index."""
    remaining = _meaningful_segments(path)
    if not remaining:
        raise NamingError(f"Cannot derive a type name from path '{'/'.join(path)}'.")
    return unescape_segment(remaining[-1])


def _canonical_name(node: SchemaNode, document: SchemaDocument, seen: frozenset[str]) -> str:
    if node.shape is ShapeKind.ARRAY:
        return _array_name(node, document, seen)
    if node.is_enum and node.name is None and _parent_segment(node) == "properties":
        return _scoped_name(node)
    return to_model_class_name(base_name(node, document))


def _array_name(node: SchemaNode, document: SchemaDocument, seen: frozenset[str]) -> str:
    path = node.path
    if node.path_from_root in seen:
        raise NamingError(f"Array '{node.path_from_root}' is its own element type.")
    if len(path) < 3:
        raise NamingError(f"Unsupported array location: '{node.path_from_root}'.")
    if path[-2] == "properties":
        return _scoped_name(node)
    if path[-2] == "schemas" or path[-1] in _ELEMENT_SLOTS:
        if node.items is None:
            return to_model_class_name(base_name(node, document))
        element = _dereference(node.items, document)
        return _canonical_name(element, document, seen | {node.path_from_root})
    raise NamingError(f"Unsupported array location: '{node.path_from_root}'.")


def _scoped_name(node: SchemaNode) -> str:
    owner = path_base_name(node.path[:-2])
    return to_model_class_name(owner) + to_model_class_name(unescape_segment(node.key))


def _polymorphic_envelope_member(
    node: SchemaNode, document: SchemaDocument
) -> SchemaNode | None:
    if not node.one_of or node.properties:
        return None
    variants: list[SchemaNode] = []
    for branch in node.one_of:
        variant = document.resolve_reference(branch)
        if variant is None or not variant.all_of:
            return None
        variants.append(variant)
    return document.resolve_reference(variants[0].all_of[0])


def _meaningful_segments(path: tuple[str, ...]) -> list[str]:
    remaining: list[str] = []
    expecting_key = False
    expecting_media_type = False
    for segment in path:
        if expecting_key:
            remaining.append(segment)
            expecting_key = False
        elif expecting_media_type:
            expecting_media_type = False
        elif segment == "properties":
            expecting_key = True
        elif segment == "content":
            expecting_media_type = True
        elif segment in _STRUCTURAL_SEGMENTS or segment.isdigit():
            continue
        else:
            remaining.append(segment)
    return remaining


def _parent_segment(node: SchemaNode) -> str | None:
    return node.path[-2] if len(node.path) >= 2 else None


def _dereference(node: SchemaNode, document: SchemaDocument) -> SchemaNode:
    try:
        return document.dereference(node)
    except UnresolvedReferenceError as exc:
        raise NamingError(str(exc)) from exc
