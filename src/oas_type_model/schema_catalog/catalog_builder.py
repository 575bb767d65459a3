"""Schema catalog construction service."""

from __future__ import annotations

from oas_type_model.naming.type_namer import canonical_name
from oas_type_model.schema_graph.schema_nodes import SchemaDocument

from .catalog_models import SchemaCatalog, SchemaInfo
from .specification_validation import SpecificationValidationError, validate_specification


def build_schema_catalog(document: SchemaDocument) -> SchemaCatalog:
    """Validate ``document`` and name every top-level schema.

    Raises:
      SpecificationValidationError: If validation finds any error; no catalog is built.
      NamingError: If a schema sits at a path the naming rules do not model.
    """
    errors = [finding for finding in validate_specification(document) if finding.is_error]
    if errors:
        raise SpecificationValidationError(errors)

    schemas: dict[str, SchemaInfo] = {}
    for key, node in document.top_level_entries():
        target = document.dereference(node)
        path = target.path_from_root
        if path in schemas:
            continue
        schemas[path] = SchemaInfo(
            source_key=key,
            canonical_name=canonical_name(target, document),
            node=target,
        )
    return SchemaCatalog(document=document, schemas=schemas)
