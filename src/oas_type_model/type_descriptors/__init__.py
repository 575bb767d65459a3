"""Type descriptor exports."""

from .type_descriptor_models import ANY_TYPE, TypeDescriptor, TypeKind
from .type_descriptor_resolver import resolve_type_descriptor

__all__ = ["ANY_TYPE", "TypeDescriptor", "TypeKind", "resolve_type_descriptor"]
