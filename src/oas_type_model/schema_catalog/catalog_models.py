"""Schema catalog entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from oas_type_model.naming.type_namer import canonical_name
from oas_type_model.schema_graph.schema_nodes import (
    SchemaDocument,
    SchemaNode,
    ShapeKind,
    unescape_segment,
)


@dataclass(frozen=True)
class SchemaInfo:
    """A schema node with the key it was declared under and its canonical name."""

    source_key: str
    canonical_name: str
    node: SchemaNode


@dataclass(frozen=True)
class SchemaCatalog:
    """Named schemas of one document keyed by path from root."""

    document: SchemaDocument
    schemas: Mapping[str, SchemaInfo]

    def __len__(self) -> int:
        return len(self.schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(self.schemas)

    def __contains__(self, path: object) -> bool:
        return path in self.schemas

    def __getitem__(self, path: str) -> SchemaInfo:
        return self.schemas[path]

    def get(self, path: str) -> SchemaInfo | None:
        return self.schemas.get(path)

    def dereference(self, node: SchemaNode) -> SchemaNode:
        return self.document.dereference(node)

    def info_for(self, node: SchemaNode) -> SchemaInfo:
        """Return the catalogued info for ``node``'s target, naming it on the fly when absent."""
        target = self.document.dereference(node)
        known = self.schemas.get(target.path_from_root)
        if known is not None:
            return known
        source_key = target.name if target.name is not None else unescape_segment(target.key)
        return SchemaInfo(
            source_key=source_key,
            canonical_name=canonical_name(target, self.document),
            node=target,
        )

    def object_schemas(self) -> tuple[SchemaInfo, ...]:
        """Return the catalogued schemas whose properties can be resolved."""
        return tuple(info for info in self.schemas.values() if info.node.shape is ShapeKind.OBJECT)
