"""Schema graph entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

def unescape_segment(segment: str) -> str:
    """Undo JSON-pointer escaping of a single path segment."""
    return segment.replace("~1", "/").replace("~0", "~")


class ShapeKind(str, Enum):
    """Structural shape of a schema node."""

    OBJECT = "object"
    ARRAY = "array"
    MAP = "map"
    SCALAR = "scalar"
    REFERENCE = "reference"


@dataclass(frozen=True)
class Discriminator:
    """Discriminating property with its explicit value-to-schema mapping."""

    property_name: str
    mapping: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class SchemaNode:  # pylint: disable=too-many-instance-attributes
    """One immutable node of the specification graph.

    Nodes compare by identity: each path in a document owns exactly one node.
    """

    path: tuple[str, ...]
    name: str | None = None
    reference: str | None = None
    declared_type: str | None = None
    format: str | None = None
    properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    all_of: tuple[SchemaNode, ...] = ()
    one_of: tuple[SchemaNode, ...] = ()
    any_of: tuple[SchemaNode, ...] = ()
    items: SchemaNode | None = None
    additional_properties: SchemaNode | bool | None = None
    discriminator: Discriminator | None = None
    required: tuple[str, ...] = ()
    read_only: bool = False
    write_only: bool = False
    enum: tuple[Any, ...] = ()
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | int | None = None
    maximum: float | int | None = None
    exclusive_minimum: bool | None = None
    exclusive_maximum: bool | None = None
    min_items: int | None = None
    max_items: int | None = None
    is_defined: bool = True

    @property
    def path_from_root(self) -> str:
        """Return the slash-joined path from the document root."""
        return "/".join(self.path)

    @property
    def key(self) -> str:
        """Return the last path segment, the key under which the node is declared."""
        return self.path[-1] if self.path else ""

    @property
    def is_reference(self) -> bool:
        return self.reference is not None

    @property
    def has_composition(self) -> bool:
        return bool(self.all_of or self.one_of or self.any_of)

    @property
    def has_additional_properties_schema(self) -> bool:
        """Return True when extra keys are allowed (a schema or a literal ``true``)."""
        return self.additional_properties is True or isinstance(
            self.additional_properties, SchemaNode
        )

    @property
    def is_enum(self) -> bool:
        return bool(self.enum)

    @property
    def shape(self) -> ShapeKind:
        if self.is_reference:
            return ShapeKind.REFERENCE
        if self.declared_type == "array":
            return ShapeKind.ARRAY
        if self.declared_type == "object" or (
            self.declared_type is None and (self.properties or self.has_composition)
        ):
            if self.is_simple_map or self.is_schema_less:
                return ShapeKind.MAP
            return ShapeKind.OBJECT
        if self.declared_type is None and self.has_additional_properties_schema:
            return ShapeKind.MAP
        return ShapeKind.SCALAR

    @property
    def is_simple_map(self) -> bool:
        """Object without declared properties whose values are described by additionalProperties."""
        return (
            not self.properties
            and not self.has_composition
            and self.has_additional_properties_schema
        )

    @property
    def is_schema_less(self) -> bool:
        """Object that declares nothing about its keys at all."""
        return (
            self.declared_type == "object"
            and not self.properties
            and not self.has_composition
            and self.additional_properties is None
        )

    def __repr__(self) -> str:
        return f"SchemaNode({self.path_from_root!r})"


class UnresolvedReferenceError(Exception):
    """Raised when a ``$ref`` does not lead to a schema node of the document."""


def reference_target_path(reference: str) -> str | None:
    """Return the slash-joined target path of a local ``$ref``, or None for external ones."""
    if not reference.startswith("#"):
        return None
    return reference[1:].strip("/")


@dataclass(frozen=True)
class SchemaDocument:
    """Loaded specification: every schema node by path plus the top-level collections."""

    nodes: Mapping[str, SchemaNode]
    schemas: Mapping[str, SchemaNode]
    parameters: Mapping[str, SchemaNode]
    responses: tuple[tuple[str, SchemaNode], ...] = ()

    def node_at(self, path: str) -> SchemaNode | None:
        return self.nodes.get(path)

    def top_level_entries(self) -> tuple[tuple[str, SchemaNode], ...]:
        """Return component, parameter and response schemas keyed by their declared key."""
        return (
            *self.schemas.items(),
            *self.parameters.items(),
            *self.responses,
        )

    def resolve_reference(self, node: SchemaNode) -> SchemaNode | None:
        """Follow ``$ref`` links until a concrete node is reached; None when that fails."""
        current = node
        visited: set[str] = set()
        while current.reference is not None:
            if current.path_from_root in visited:
                return None
            visited.add(current.path_from_root)
            target_path = reference_target_path(current.reference)
            target = self.nodes.get(target_path) if target_path is not None else None
            if target is None:
                return None
            current = target
        return current

    def dereference(self, node: SchemaNode) -> SchemaNode:
        resolved = self.resolve_reference(node)
        if resolved is None:
            raise UnresolvedReferenceError(
                f"Reference '{node.reference}' at '{node.path_from_root}' cannot be resolved."
            )
        return resolved
