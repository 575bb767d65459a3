"""Type descriptor entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TypeKind(str, Enum):
    """Language-neutral type tokens consumed by code emitters."""

    STRING = "string"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATE_TIME = "date-time"
    UUID = "uuid"
    URI = "uri"
    BYTE_ARRAY = "byte"
    BINARY = "binary"
    ENUM = "enum"
    OBJECT = "object"
    UNTYPED_OBJECT = "untyped-object"
    MAP = "map"
    ARRAY = "array"
    ANY = "any"


@dataclass(frozen=True)
class TypeDescriptor:
    """Resolved type token with the model name or element type it refers to."""

    kind: TypeKind
    model_name: str | None = None
    element: TypeDescriptor | None = None
    format: str | None = None

    def render(self) -> str:
        """Return a compact human-readable form such as ``array<map<Pet>>``."""
        if self.kind in (TypeKind.ARRAY, TypeKind.MAP):
            inner = self.element.render() if self.element is not None else TypeKind.ANY.value
            return f"{self.kind.value}<{inner}>"
        if self.model_name:
            return self.model_name
        return self.kind.value


ANY_TYPE = TypeDescriptor(kind=TypeKind.ANY)
