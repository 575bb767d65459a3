"""Naming exports."""

from .identifier_normalization import to_camel_case, to_enum_constant, to_model_class_name
from .type_namer import NamingError, base_name, canonical_name, path_base_name

__all__ = [
    "NamingError",
    "base_name",
    "canonical_name",
    "path_base_name",
    "to_camel_case",
    "to_enum_constant",
    "to_model_class_name",
]
