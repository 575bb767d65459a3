"""Document-wide specification validation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from oas_type_model.schema_graph.schema_nodes import SchemaDocument, SchemaNode

_LOGGER = logging.getLogger(__name__)


class FindingSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationFinding:
    """One problem detected in the specification."""

    severity: FindingSeverity
    message: str

    @property
    def is_error(self) -> bool:
        return self.severity is FindingSeverity.ERROR


class SpecificationValidationError(Exception):
    """Raised once with every validation error found in a document."""

    def __init__(self, findings: Sequence[ValidationFinding]) -> None:
        self.findings = tuple(findings)
        details = "\n\t".join(finding.message for finding in self.findings)
        super().__init__(f"Invalid models or api file:\n\t{details}")


def validate_specification(document: SchemaDocument) -> tuple[ValidationFinding, ...]:
    """Collect findings for every top-level schema without stopping at the first error."""
    findings: list[ValidationFinding] = []
    for key, node in document.top_level_entries():
        if document.resolve_reference(node) is None:
            findings.append(
                _error(f"Schema '{key}' cannot be parsed to a Schema. Check your input")
            )
            continue
        _validate_node(document, key, node, findings, is_root=True)
    return tuple(findings)


def _validate_node(
    document: SchemaDocument,
    key: str,
    node: SchemaNode,
    findings: list[ValidationFinding],
    *,
    is_root: bool = False,
) -> None:
    if node.is_reference or not node.is_defined:
        return

    label = key if is_root else f"{key} ({node.path_from_root})"
    is_object_like = node.declared_type in (None, "object")
    if is_object_like and node.properties and node.has_composition:
        findings.append(
            _error(
                f"'{label}' schema contains an invalid combination of properties and "
                "`oneOf | anyOf | allOf`. Do not use properties and a combiner at the same level."
            )
        )
    elif node.declared_type is None and node.properties:
        _LOGGER.warning(
            "Schema '%s' has 'type: null' but defines properties. Assuming: 'type: object'",
            label,
        )
        findings.append(
            ValidationFinding(
                severity=FindingSeverity.WARNING,
                message=f"Schema '{label}' has no type but defines properties.",
            )
        )

    for property_key, child in node.properties.items():
        findings.extend(_property_findings(document, property_key, child))

    for branch in (*node.all_of, *node.one_of, *node.any_of):
        if document.resolve_reference(branch) is None:
            findings.append(
                _error(
                    f"Composition branch '{branch.path_from_root}' cannot be parsed to a Schema. "
                    "Check your input"
                )
            )

    for child in _children(node):
        _validate_node(document, key, child, findings)


def _property_findings(
    document: SchemaDocument, property_key: str, child: SchemaNode
) -> list[ValidationFinding]:
    target = document.resolve_reference(child) if child.is_defined else None
    if target is None or not target.is_defined:
        return [_error(f"Property '{property_key}' cannot be parsed to a Schema. Check your input")]
    if target.declared_type == "array":
        items = target.items
        if items is None or not items.is_defined or document.resolve_reference(items) is None:
            return [
                _error(f"Array type '{property_key}' cannot be parsed to a Schema. Check your input")
            ]
    return []


def _children(node: SchemaNode) -> list[SchemaNode]:
    children = [*node.properties.values(), *node.all_of, *node.one_of, *node.any_of]
    if node.items is not None:
        children.append(node.items)
    if isinstance(node.additional_properties, SchemaNode):
        children.append(node.additional_properties)
    return children


def _error(message: str) -> ValidationFinding:
    return ValidationFinding(severity=FindingSeverity.ERROR, message=message)
