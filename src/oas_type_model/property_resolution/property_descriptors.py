"""Property descriptor entities.

Descriptors form a closed union; consumers dispatch on ``kind``, which each variant fixes at
construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from oas_type_model.naming.identifier_normalization import to_camel_case
from oas_type_model.schema_catalog.catalog_models import SchemaInfo
from oas_type_model.schema_graph.schema_nodes import SchemaNode
from oas_type_model.type_descriptors.type_descriptor_models import ANY_TYPE, TypeDescriptor

ADDITIONAL_PROPERTIES_KEY = "@additionalProperties"
ONE_OF_KEY = "@oneOf"


class PropertyKind(str, Enum):
    SCALAR = "scalar"
    LIST = "list"
    MAP = "map"
    OBJECT_REFERENCE = "object-reference"
    INLINE_OBJECT = "inline-object"
    ADDITIONAL_PROPERTIES = "additional-properties"
    ONE_OF_MARKER = "one-of-marker"


@dataclass(frozen=True)
class DiscriminatorValue:
    """Explicit discriminator mapping entry that selects the enclosing model."""

    value: str
    model_name: str
    enum_constant: str | None = None


@dataclass(frozen=True, kw_only=True)
class PropertyDescriptor:
    """Fields shared by every property variant."""

    kind: PropertyKind = field(init=False)
    key: str
    required: bool = False
    inherited: bool = False
    node: SchemaNode | None
    type_descriptor: TypeDescriptor

    @property
    def name(self) -> str:
        return to_camel_case(self.key)


@dataclass(frozen=True, kw_only=True)
class ScalarProperty(PropertyDescriptor):  # pylint: disable=too-many-instance-attributes
    kind: PropertyKind = field(default=PropertyKind.SCALAR, init=False)
    parent: SchemaInfo
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    minimum: float | int | None = None
    maximum: float | int | None = None
    exclusive_minimum: bool | None = None
    exclusive_maximum: bool | None = None
    is_discriminator: bool = False
    discriminator_value: DiscriminatorValue | None = None
    naming_context: SchemaInfo | None = None


@dataclass(frozen=True, kw_only=True)
class ListProperty(PropertyDescriptor):
    kind: PropertyKind = field(default=PropertyKind.LIST, init=False)
    parent: SchemaInfo
    element_type: TypeDescriptor
    min_items: int | None = None
    max_items: int | None = None
    naming_context: SchemaInfo | None = None


@dataclass(frozen=True, kw_only=True)
class MapProperty(PropertyDescriptor):
    kind: PropertyKind = field(default=PropertyKind.MAP, init=False)
    parent: SchemaInfo
    value_node: SchemaNode | None = None


@dataclass(frozen=True, kw_only=True)
class ObjectReferenceProperty(PropertyDescriptor):
    kind: PropertyKind = field(default=PropertyKind.OBJECT_REFERENCE, init=False)
    parent: SchemaInfo
    schema_info: SchemaInfo


@dataclass(frozen=True, kw_only=True)
class InlineObjectProperty(PropertyDescriptor):
    kind: PropertyKind = field(default=PropertyKind.INLINE_OBJECT, init=False)
    parent: SchemaInfo
    naming_context: SchemaInfo | None = None


@dataclass(frozen=True, kw_only=True)
class AdditionalPropertiesProperty(PropertyDescriptor):
    """Synthetic catch-all for keys described by ``additionalProperties``; always required."""

    kind: PropertyKind = field(default=PropertyKind.ADDITIONAL_PROPERTIES, init=False)
    key: str = field(default=ADDITIONAL_PROPERTIES_KEY, init=False)
    required: bool = field(default=True, init=False)
    parent: SchemaInfo


@dataclass(frozen=True, kw_only=True)
class OneOfMarkerProperty(PropertyDescriptor):
    """Synthetic "any" value standing for the first ``oneOf`` alternative."""

    kind: PropertyKind = field(default=PropertyKind.ONE_OF_MARKER, init=False)
    key: str = field(default=ONE_OF_KEY, init=False)
    type_descriptor: TypeDescriptor = field(default=ANY_TYPE)


@dataclass(frozen=True)
class ResolvedModel:
    """An object-shaped catalog entry with its resolved properties."""

    info: SchemaInfo
    properties: tuple[PropertyDescriptor, ...]
