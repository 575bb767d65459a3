"""Property resolution exports."""

from .property_descriptors import (
    ADDITIONAL_PROPERTIES_KEY,
    ONE_OF_KEY,
    AdditionalPropertiesProperty,
    DiscriminatorValue,
    InlineObjectProperty,
    ListProperty,
    MapProperty,
    ObjectReferenceProperty,
    OneOfMarkerProperty,
    PropertyDescriptor,
    PropertyKind,
    ResolvedModel,
    ScalarProperty,
)
from .property_resolver import CompositionCycleError, resolve_catalog_models, resolve_properties
from .resolution_settings import (
    DOCUMENT_SETTINGS,
    HTTP_SETTINGS,
    RESOLUTION_PROFILES,
    ResolutionSettings,
)

__all__ = [
    "ADDITIONAL_PROPERTIES_KEY",
    "ONE_OF_KEY",
    "AdditionalPropertiesProperty",
    "CompositionCycleError",
    "DOCUMENT_SETTINGS",
    "DiscriminatorValue",
    "HTTP_SETTINGS",
    "InlineObjectProperty",
    "ListProperty",
    "MapProperty",
    "ObjectReferenceProperty",
    "OneOfMarkerProperty",
    "PropertyDescriptor",
    "PropertyKind",
    "RESOLUTION_PROFILES",
    "ResolutionSettings",
    "ResolvedModel",
    "ScalarProperty",
    "resolve_catalog_models",
    "resolve_properties",
]
