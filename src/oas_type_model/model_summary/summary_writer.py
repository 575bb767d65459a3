"""Model summary rendering service."""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, cast

import yaml

from oas_type_model.property_resolution.property_descriptors import (
    ListProperty,
    ObjectReferenceProperty,
    PropertyDescriptor,
    PropertyKind,
    ResolvedModel,
    ScalarProperty,
)

_SCALAR_CONSTRAINTS = (
    ("pattern", "pattern"),
    ("minLength", "min_length"),
    ("maxLength", "max_length"),
    ("minimum", "minimum"),
    ("maximum", "maximum"),
    ("exclusiveMinimum", "exclusive_minimum"),
    ("exclusiveMaximum", "exclusive_maximum"),
)


class SummaryWriteError(Exception):
    """Raised when a model summary cannot be written."""


def build_model_summary(models: Sequence[ResolvedModel]) -> list[dict[str, Any]]:
    """Return plain data describing each model and its properties in resolution order."""
    return [
        {
            "name": model.info.canonical_name,
            "source_key": model.info.source_key,
            "path": model.info.node.path_from_root,
            "properties": [_property_entry(descriptor) for descriptor in model.properties],
        }
        for model in models
    ]


def write_model_summary(
    summary: list[dict[str, Any]], output_path: Path | str, output_format: str = "yaml"
) -> Path:
    """Write the summary as YAML or JSON and return the resolved destination."""
    destination = Path(output_path)
    if output_format == "yaml":
        text = yaml.safe_dump({"models": summary}, sort_keys=False, allow_unicode=True)
    elif output_format == "json":
        text = json.dumps({"models": summary}, indent=2, ensure_ascii=False) + "\n"
    else:
        raise SummaryWriteError(f"Unsupported summary format: {output_format}")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise SummaryWriteError(f"Cannot write model summary to {destination}: {exc}") from exc
    return destination.resolve()


def _property_entry(descriptor: PropertyDescriptor) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "key": descriptor.key,
        "name": descriptor.name,
        "kind": descriptor.kind.value,
        "type": descriptor.type_descriptor.render(),
        "required": descriptor.required,
        "inherited": descriptor.inherited,
    }
    entry.update(_variant_details(descriptor))
    return entry


def _scalar_details(descriptor: PropertyDescriptor) -> dict[str, Any]:
    scalar = cast(ScalarProperty, descriptor)
    details: dict[str, Any] = {
        label: getattr(scalar, attribute)
        for label, attribute in _SCALAR_CONSTRAINTS
        if getattr(scalar, attribute) is not None
    }
    if scalar.is_discriminator:
        details["discriminator"] = True
    if scalar.discriminator_value is not None:
        details["discriminatorValue"] = scalar.discriminator_value.value
    return details


def _list_details(descriptor: PropertyDescriptor) -> dict[str, Any]:
    collection = cast(ListProperty, descriptor)
    return {
        label: value
        for label, value in (("minItems", collection.min_items), ("maxItems", collection.max_items))
        if value is not None
    }


def _reference_details(descriptor: PropertyDescriptor) -> dict[str, Any]:
    reference = cast(ObjectReferenceProperty, descriptor)
    return {"ref": reference.schema_info.node.path_from_root}


_VARIANT_DETAILS: dict[PropertyKind, Callable[[PropertyDescriptor], dict[str, Any]]] = {
    PropertyKind.SCALAR: _scalar_details,
    PropertyKind.LIST: _list_details,
    PropertyKind.OBJECT_REFERENCE: _reference_details,
}


def _variant_details(descriptor: PropertyDescriptor) -> dict[str, Any]:
    handler = _VARIANT_DETAILS.get(descriptor.kind)
    return handler(descriptor) if handler is not None else {}
