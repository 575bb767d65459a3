"""Specification loading service: raw OpenAPI text into an immutable schema graph."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import yaml

from .schema_nodes import (
    Discriminator,
    SchemaDocument,
    SchemaNode,
    reference_target_path,
    unescape_segment,
)


class SchemaDocumentError(Exception):
    """Raised when specification text cannot be turned into a schema graph."""


def load_schema_document(text: str) -> SchemaDocument:
    """Parse YAML or JSON specification text into a schema document."""
    try:
        root = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaDocumentError(f"Invalid specification document: {exc}") from exc

    if not isinstance(root, Mapping):
        raise SchemaDocumentError("Specification root must be a mapping.")

    return build_schema_document(root)


def build_schema_document(root: Mapping[str, Any]) -> SchemaDocument:
    """Build the schema graph for an already parsed specification tree."""
    builder = _GraphBuilder(root)
    components = root.get("components")
    components = components if isinstance(components, Mapping) else {}

    schemas: dict[str, SchemaNode] = {}
    for key, value in _mapping(components.get("schemas")).items():
        schemas[str(key)] = builder.build(value, ("components", "schemas", _escape(str(key))))

    parameters: dict[str, SchemaNode] = {}
    for key, value in _mapping(components.get("parameters")).items():
        if isinstance(value, Mapping) and "schema" in value:
            path = ("components", "parameters", _escape(str(key)), "schema")
            parameters[str(key)] = builder.build(value["schema"], path)

    responses: list[tuple[str, SchemaNode]] = []
    for key, value in _mapping(components.get("responses")).items():
        content = _mapping(value.get("content")) if isinstance(value, Mapping) else {}
        for media_type, media in content.items():
            if isinstance(media, Mapping) and "schema" in media:
                path = (
                    "components",
                    "responses",
                    _escape(str(key)),
                    "content",
                    _escape(str(media_type)),
                    "schema",
                )
                responses.append((str(key), builder.build(media["schema"], path)))

    builder.build_reference_targets()
    return SchemaDocument(
        nodes=dict(builder.nodes),
        schemas=schemas,
        parameters=parameters,
        responses=tuple(responses),
    )


class _GraphBuilder:
    """Builds nodes bottom-up and registers every node under its path."""

    def __init__(self, root: Mapping[str, Any]) -> None:
        self._root = root
        self.nodes: dict[str, SchemaNode] = {}
        self._pending_references: list[str] = []

    def build(self, value: Any, path: tuple[str, ...]) -> SchemaNode:
        joined = "/".join(path)
        existing = self.nodes.get(joined)
        if existing is not None:
            return existing
        node = self._build_node(value, path)
        self.nodes[joined] = node
        return node

    def build_reference_targets(self) -> None:
        """Materialize nodes for ``$ref`` targets that no top-level collection covers."""
        while self._pending_references:
            target_path = self._pending_references.pop()
            if target_path in self.nodes:
                continue
            segments = tuple(target_path.split("/")) if target_path else ()
            found, value = _lookup_pointer(self._root, segments)
            if found:
                self.build(value, segments)

    def _build_node(self, value: Any, path: tuple[str, ...]) -> SchemaNode:
        if not isinstance(value, Mapping):
            return SchemaNode(path=path, is_defined=False)

        reference = value.get("$ref")
        if isinstance(reference, str):
            target_path = reference_target_path(reference)
            if target_path is not None:
                self._pending_references.append(target_path)
            return SchemaNode(path=path, reference=reference)

        properties = {
            str(key): self.build(child, (*path, "properties", _escape(str(key))))
            for key, child in _mapping(value.get("properties")).items()
        }
        items = value.get("items")
        exclusive_minimum, minimum = _exclusive_bound(value, "exclusiveMinimum", "minimum")
        exclusive_maximum, maximum = _exclusive_bound(value, "exclusiveMaximum", "maximum")

        return SchemaNode(
            path=path,
            name=_declared_name(path),
            declared_type=_declared_type(value.get("type")),
            format=_optional_str(value.get("format")),
            properties=properties,
            all_of=self._build_branches(value, path, "allOf"),
            one_of=self._build_branches(value, path, "oneOf"),
            any_of=self._build_branches(value, path, "anyOf"),
            items=self.build(items, (*path, "items")) if "items" in value else None,
            additional_properties=self._build_additional_properties(value, path),
            discriminator=_discriminator(value.get("discriminator")),
            required=tuple(str(item) for item in _sequence(value.get("required"))),
            read_only=value.get("readOnly") is True,
            write_only=value.get("writeOnly") is True,
            enum=tuple(_sequence(value.get("enum"))),
            pattern=_optional_str(value.get("pattern")),
            min_length=_optional_int(value.get("minLength")),
            max_length=_optional_int(value.get("maxLength")),
            minimum=minimum,
            maximum=maximum,
            exclusive_minimum=exclusive_minimum,
            exclusive_maximum=exclusive_maximum,
            min_items=_optional_int(value.get("minItems")),
            max_items=_optional_int(value.get("maxItems")),
        )

    def _build_branches(
        self, value: Mapping[str, Any], path: tuple[str, ...], keyword: str
    ) -> tuple[SchemaNode, ...]:
        return tuple(
            self.build(branch, (*path, keyword, str(index)))
            for index, branch in enumerate(_sequence(value.get(keyword)))
        )

    def _build_additional_properties(
        self, value: Mapping[str, Any], path: tuple[str, ...]
    ) -> SchemaNode | bool | None:
        additional = value.get("additionalProperties")
        if additional is None or isinstance(additional, bool):
            return additional
        return self.build(additional, (*path, "additionalProperties"))


def _declared_name(path: tuple[str, ...]) -> str | None:
    if len(path) == 3 and path[0] == "components" and path[1] == "schemas":
        return unescape_segment(path[2])
    return None


def _declared_type(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        filtered = [item for item in value if isinstance(item, str) and item != "null"]
        return filtered[0] if filtered else None
    return None


def _discriminator(value: Any) -> Discriminator | None:
    if not isinstance(value, Mapping):
        return None
    property_name = value.get("propertyName")
    if not isinstance(property_name, str):
        return None
    mapping = {str(key): str(target) for key, target in _mapping(value.get("mapping")).items()}
    return Discriminator(property_name=property_name, mapping=mapping)


def _exclusive_bound(
    value: Mapping[str, Any], exclusive_key: str, bound_key: str
) -> tuple[bool | None, float | int | None]:
    exclusive = value.get(exclusive_key)
    bound = _optional_number(value.get(bound_key))
    if isinstance(exclusive, bool):
        return exclusive, bound
    numeric = _optional_number(exclusive)
    if numeric is not None:
        return True, numeric
    return None, bound


def _lookup_pointer(root: Any, segments: tuple[str, ...]) -> tuple[bool, Any]:
    current = root
    for segment in segments:
        token = unescape_segment(segment)
        if isinstance(current, Mapping) and token in current:
            current = current[token]
        elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
            current = current[int(token)]
        else:
            return False, None
    return True, current


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _sequence(value: Any) -> Sequence[Any]:
    return value if isinstance(value, list) else ()


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _optional_number(value: Any) -> float | int | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value
