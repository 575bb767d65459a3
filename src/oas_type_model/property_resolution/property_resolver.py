"""Property resolution service.

Flattens an object schema into its visible properties: allOf branches first, then the oneOf
marker, anyOf branches, own properties and the additionalProperties catch-all. References are
opaque leaves; only composition branches are followed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from oas_type_model.naming.identifier_normalization import to_enum_constant
from oas_type_model.schema_catalog.catalog_models import SchemaCatalog, SchemaInfo
from oas_type_model.schema_graph.schema_nodes import (
    SchemaNode,
    ShapeKind,
    reference_target_path,
)
from oas_type_model.type_descriptors.type_descriptor_models import TypeDescriptor, TypeKind
from oas_type_model.type_descriptors.type_descriptor_resolver import resolve_type_descriptor

from .property_descriptors import (
    AdditionalPropertiesProperty,
    DiscriminatorValue,
    InlineObjectProperty,
    ListProperty,
    MapProperty,
    ObjectReferenceProperty,
    OneOfMarkerProperty,
    PropertyDescriptor,
    ResolvedModel,
    ScalarProperty,
)
from .resolution_settings import DOCUMENT_SETTINGS, ResolutionSettings


class CompositionCycleError(Exception):
    """Raised when a schema reaches itself through its own composition branches."""


def resolve_properties(
    info: SchemaInfo,
    settings: ResolutionSettings,
    catalog: SchemaCatalog,
    enclosing: SchemaInfo | None = None,
) -> tuple[PropertyDescriptor, ...]:
    """Return the ordered, deduplicated properties visible on ``info``'s schema."""
    return _resolve(info, settings, catalog, enclosing, lineage=frozenset())


def resolve_catalog_models(
    catalog: SchemaCatalog, settings: ResolutionSettings = DOCUMENT_SETTINGS
) -> tuple[ResolvedModel, ...]:
    """Resolve every object-shaped schema of the catalog, in catalog order."""
    return tuple(
        ResolvedModel(info=info, properties=resolve_properties(info, settings, catalog))
        for info in catalog.object_schemas()
    )


def _resolve(
    info: SchemaInfo,
    settings: ResolutionSettings,
    catalog: SchemaCatalog,
    enclosing: SchemaInfo | None,
    *,
    lineage: frozenset[str],
) -> tuple[PropertyDescriptor, ...]:
    node = info.node
    if node.path_from_root in lineage:
        raise CompositionCycleError(
            f"Schema '{info.canonical_name}' ({node.path_from_root}) composes itself."
        )
    lineage = lineage | {node.path_from_root}
    collected: list[PropertyDescriptor] = []

    for branch in node.all_of:
        branch_info = catalog.info_for(branch)
        branch_settings = _all_of_branch_settings(settings, branch_info, enclosing)
        collected.extend(_resolve(branch_info, branch_settings, catalog, info, lineage=lineage))

    if node.one_of:
        first = node.one_of[0]
        first_target = catalog.document.resolve_reference(first)
        collected.append(OneOfMarkerProperty(node=first_target or first))

    for branch in node.any_of:
        collected.extend(
            _resolve(
                catalog.info_for(branch),
                replace(settings, mark_all_optional=True),
                catalog,
                info,
                lineage=lineage,
            )
        )

    collected.extend(_own_properties(info, settings, catalog, enclosing))

    if node.has_additional_properties_schema:
        values = node.additional_properties
        value_node = values if isinstance(values, SchemaNode) else None
        collected.append(
            AdditionalPropertiesProperty(
                node=value_node,
                inherited=settings.mark_inherited,
                type_descriptor=TypeDescriptor(
                    kind=TypeKind.MAP,
                    element=resolve_type_descriptor(value_node, catalog.document),
                ),
                parent=info,
            )
        )

    return _deduplicate(collected)


def _all_of_branch_settings(
    settings: ResolutionSettings, branch: SchemaInfo, enclosing: SchemaInfo | None
) -> ResolutionSettings:
    if enclosing is not None and branch.canonical_name == enclosing.canonical_name:
        inherited = False
    elif branch.node.discriminator is None and branch.node.name is None:
        # Inline allOf members merge into whatever is being resolved.
        inherited = settings.mark_inherited
    else:
        inherited = True
    return replace(settings, mark_inherited=inherited)


def _own_properties(
    info: SchemaInfo,
    settings: ResolutionSettings,
    catalog: SchemaCatalog,
    enclosing: SchemaInfo | None,
) -> list[PropertyDescriptor]:
    properties: list[PropertyDescriptor] = []
    for key, child in info.node.properties.items():
        target = catalog.dereference(child)
        if settings.exclude_write_only and target.write_only:
            continue
        properties.append(_classify_property(info, key, child, settings, catalog, enclosing))
    return properties


def _classify_property(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    info: SchemaInfo,
    key: str,
    declared: SchemaNode,
    settings: ResolutionSettings,
    catalog: SchemaCatalog,
    enclosing: SchemaInfo | None,
) -> PropertyDescriptor:
    document = catalog.document
    target = catalog.dereference(declared)
    inline = not declared.is_reference
    required = _is_required(info.node, key, target, settings)
    shape = target.shape

    if shape is ShapeKind.ARRAY:
        naming_context = info if inline and _has_anonymous_element(target, catalog) else None
        element_type = resolve_type_descriptor(
            target.items,
            document,
            naming_context=naming_context.node if naming_context is not None else None,
        )
        return ListProperty(
            key=key,
            required=required,
            inherited=settings.mark_inherited,
            node=target,
            type_descriptor=TypeDescriptor(kind=TypeKind.ARRAY, element=element_type),
            parent=info,
            element_type=element_type,
            min_items=target.min_items,
            max_items=target.max_items,
            naming_context=naming_context,
        )

    if shape is ShapeKind.MAP:
        values = target.additional_properties
        return MapProperty(
            key=key,
            required=required,
            inherited=settings.mark_inherited,
            node=target,
            type_descriptor=resolve_type_descriptor(target, document),
            parent=info,
            value_node=values if isinstance(values, SchemaNode) else None,
        )

    if shape is ShapeKind.OBJECT:
        if target.name is None:
            return InlineObjectProperty(
                key=key,
                required=required,
                inherited=settings.mark_inherited,
                node=target,
                type_descriptor=resolve_type_descriptor(target, document),
                parent=info,
                naming_context=enclosing,
            )
        return ObjectReferenceProperty(
            key=key,
            required=required,
            inherited=settings.mark_inherited,
            node=target,
            type_descriptor=resolve_type_descriptor(target, document),
            parent=info,
            schema_info=catalog.info_for(target),
        )

    return ScalarProperty(
        key=key,
        required=required,
        inherited=settings.mark_inherited,
        node=target,
        type_descriptor=resolve_type_descriptor(target, document),
        parent=info,
        pattern=target.pattern,
        min_length=target.min_length,
        max_length=target.max_length,
        minimum=target.minimum,
        maximum=target.maximum,
        exclusive_minimum=target.exclusive_minimum,
        exclusive_maximum=target.exclusive_maximum,
        is_discriminator=_is_discriminator_property(key, info, enclosing),
        discriminator_value=_discriminator_value(key, target, info, catalog, enclosing),
        naming_context=info if inline and target.is_enum and target.name is None else None,
    )


def _is_required(
    node: SchemaNode, key: str, target: SchemaNode, settings: ResolutionSettings
) -> bool:
    if settings.mark_all_optional:
        return False
    if settings.treat_read_write_only_as_optional and (target.read_only or target.write_only):
        return False
    return key in node.required


def _has_anonymous_element(array: SchemaNode, catalog: SchemaCatalog) -> bool:
    if array.items is None:
        return False
    element = catalog.document.resolve_reference(array.items)
    if element is None or element.name is not None:
        return False
    return element.shape is ShapeKind.OBJECT or element.is_enum


def _is_discriminator_property(key: str, info: SchemaInfo, enclosing: SchemaInfo | None) -> bool:
    for owner in (info, enclosing):
        if owner is not None and owner.node.discriminator is not None:
            if owner.node.discriminator.property_name == key:
                return True
    return False


def _discriminator_value(
    key: str,
    target: SchemaNode,
    info: SchemaInfo,
    catalog: SchemaCatalog,
    enclosing: SchemaInfo | None,
) -> DiscriminatorValue | None:
    discriminator = info.node.discriminator
    if enclosing is None or discriminator is None or discriminator.property_name != key:
        return None
    values = [
        value
        for value, mapped in discriminator.mapping.items()
        if _mapping_target(mapped, catalog) is enclosing.node
    ]
    if len(values) != 1:
        return None
    value = values[0]
    return DiscriminatorValue(
        value=value,
        model_name=enclosing.canonical_name,
        enum_constant=to_enum_constant(value) if target.is_enum else None,
    )


def _mapping_target(mapped: str, catalog: SchemaCatalog) -> SchemaNode | None:
    path = reference_target_path(mapped)
    if path is None:
        path = f"components/schemas/{mapped}"
    node = catalog.document.node_at(path)
    return catalog.document.resolve_reference(node) if node is not None else None


def _deduplicate(descriptors: Iterable[PropertyDescriptor]) -> tuple[PropertyDescriptor, ...]:
    """Keep one descriptor per key at its first position, preferring a non-inherited one."""
    chosen: dict[str, PropertyDescriptor] = {}
    for descriptor in descriptors:
        current = chosen.get(descriptor.key)
        if current is None or (current.inherited and not descriptor.inherited):
            chosen[descriptor.key] = descriptor
    return tuple(chosen.values())
