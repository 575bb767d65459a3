"""Property resolution tests."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

import pytest
from oas_type_model.property_resolution import (
    ADDITIONAL_PROPERTIES_KEY,
    DOCUMENT_SETTINGS,
    HTTP_SETTINGS,
    ONE_OF_KEY,
    AdditionalPropertiesProperty,
    CompositionCycleError,
    DiscriminatorValue,
    InlineObjectProperty,
    ListProperty,
    MapProperty,
    ObjectReferenceProperty,
    PropertyDescriptor,
    PropertyKind,
    ResolutionSettings,
    ScalarProperty,
    resolve_catalog_models,
    resolve_properties,
)
from oas_type_model.schema_catalog import SchemaCatalog, build_schema_catalog
from oas_type_model.schema_graph import build_schema_document
from oas_type_model.type_descriptors import TypeKind

_A = {"type": "object", "properties": {"x": {"type": "string"}}, "required": ["x"]}


def _catalog(schemas: dict[str, Any]) -> SchemaCatalog:
    return build_schema_catalog(build_schema_document({"components": {"schemas": schemas}}))


def _resolve(
    catalog: SchemaCatalog, key: str, settings: ResolutionSettings = DOCUMENT_SETTINGS
) -> tuple[PropertyDescriptor, ...]:
    return resolve_properties(catalog[f"components/schemas/{key}"], settings, catalog)


def _flags(descriptors: tuple[PropertyDescriptor, ...]) -> list[tuple[str, bool, bool]]:
    return [(item.key, item.inherited, item.required) for item in descriptors]


def test_allof_parent_properties_are_inherited() -> None:
    catalog = _catalog(
        {
            "A": _A,
            "B": {
                "allOf": [
                    {"$ref": "#/components/schemas/A"},
                    {"type": "object", "properties": {"y": {"type": "integer"}}, "required": ["y"]},
                ]
            },
        }
    )

    assert _flags(_resolve(catalog, "B")) == [("x", True, True), ("y", False, True)]


def test_inline_merges_inside_an_inherited_parent_stay_inherited() -> None:
    catalog = _catalog(
        {
            "Base": {"type": "object", "properties": {"b": {"type": "string"}}},
            "Mid": {
                "allOf": [
                    {"$ref": "#/components/schemas/Base"},
                    {"type": "object", "properties": {"m": {"type": "string"}}},
                ]
            },
            "Leaf": {
                "allOf": [
                    {"$ref": "#/components/schemas/Mid"},
                    {"type": "object", "properties": {"l": {"type": "string"}}},
                ]
            },
        }
    )

    assert [(item.key, item.inherited) for item in _resolve(catalog, "Leaf")] == [
        ("b", True),
        ("m", True),
        ("l", False),
    ]
    assert [(item.key, item.inherited) for item in _resolve(catalog, "Mid")] == [
        ("b", True),
        ("m", False),
    ]


def test_anyof_branches_are_always_optional() -> None:
    catalog = _catalog(
        {
            "C": {
                "anyOf": [
                    {"type": "object", "properties": {"p": {"type": "string"}}, "required": ["p"]}
                ]
            }
        }
    )

    assert _flags(_resolve(catalog, "C")) == [("p", False, False)]


def test_own_property_wins_over_inherited_property_with_same_key() -> None:
    document = build_schema_document(
        {
            "components": {
                "schemas": {
                    "Named": {"type": "object", "properties": {"name": {"type": "integer"}}},
                    "Override": {
                        "type": "object",
                        "allOf": [{"$ref": "#/components/schemas/Named"}],
                        "properties": {
                            "extra": {"type": "string"},
                            "name": {"type": "string"},
                        },
                    },
                }
            }
        }
    )
    # Own properties next to allOf fail validation, so bypass the catalog builder.
    catalog = SchemaCatalog(document=document, schemas={})
    info = catalog.info_for(document.schemas["Override"])

    resolved = resolve_properties(info, DOCUMENT_SETTINGS, catalog)

    assert [item.key for item in resolved] == ["name", "extra"]
    name = resolved[0]
    assert name.inherited is False
    assert name.type_descriptor.kind is TypeKind.STRING


def test_inline_allof_member_overrides_parent_property() -> None:
    catalog = _catalog(
        {
            "A": _A,
            "D": {
                "allOf": [
                    {"$ref": "#/components/schemas/A"},
                    {"type": "object", "properties": {"x": {"type": "integer"}}},
                ]
            },
        }
    )

    resolved = _resolve(catalog, "D")

    assert len(resolved) == 1
    assert (resolved[0].key, resolved[0].inherited) == ("x", False)


def test_additional_properties_schema_adds_one_required_synthetic_property() -> None:
    catalog = _catalog({"Labels": {"type": "object", "additionalProperties": {"type": "string"}}})

    resolved = _resolve(catalog, "Labels")

    assert len(resolved) == 1
    synthetic = resolved[0]
    assert isinstance(synthetic, AdditionalPropertiesProperty)
    assert synthetic.kind is PropertyKind.ADDITIONAL_PROPERTIES
    assert synthetic.key == ADDITIONAL_PROPERTIES_KEY
    assert synthetic.name == "additionalProperties"
    assert synthetic.required is True
    assert synthetic.type_descriptor.render() == "map<string>"


def test_additional_properties_literals() -> None:
    catalog = _catalog(
        {
            "Open": {
                "type": "object",
                "properties": {"a": {"type": "string"}},
                "additionalProperties": True,
            },
            "Closed": {
                "type": "object",
                "properties": {"a": {"type": "string"}},
                "additionalProperties": False,
            },
        }
    )

    assert [item.kind for item in _resolve(catalog, "Open")] == [
        PropertyKind.SCALAR,
        PropertyKind.ADDITIONAL_PROPERTIES,
    ]
    assert _resolve(catalog, "Open")[1].type_descriptor.render() == "map<any>"
    assert [item.key for item in _resolve(catalog, "Closed")] == ["a"]


def test_oneof_resolves_only_the_first_branch_into_a_marker() -> None:
    catalog = _catalog(
        {
            "First": {"type": "object", "properties": {"f": {"type": "string"}}},
            "Second": {"type": "object", "properties": {"s": {"type": "string"}}},
            "Either": {
                "oneOf": [
                    {"$ref": "#/components/schemas/First"},
                    {"$ref": "#/components/schemas/Second"},
                ]
            },
        }
    )

    resolved = _resolve(catalog, "Either")

    assert len(resolved) == 1
    marker = resolved[0]
    assert marker.kind is PropertyKind.ONE_OF_MARKER
    assert marker.key == ONE_OF_KEY
    assert marker.type_descriptor.kind is TypeKind.ANY
    assert marker.node is catalog["components/schemas/First"].node
    assert marker.required is False


def test_plain_object_resolves_exactly_its_declared_keys() -> None:
    catalog = _catalog(
        {
            "Owner": {"type": "object", "properties": {"name": {"type": "string"}}},
            "Plain": {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string", "pattern": "^[0-9]+$", "maxLength": 8},
                    "tags": {"type": "array", "items": {"type": "string"}, "minItems": 1},
                    "labels": {"type": "object", "additionalProperties": {"type": "integer"}},
                    "anything": {"type": "object"},
                    "address": {"type": "object", "properties": {"street": {"type": "string"}}},
                    "owner": {"$ref": "#/components/schemas/Owner"},
                },
            },
        }
    )

    resolved = _resolve(catalog, "Plain")

    assert [item.key for item in resolved] == [
        "id",
        "tags",
        "labels",
        "anything",
        "address",
        "owner",
    ]
    identifier, tags, labels, anything, address, owner = resolved
    assert isinstance(identifier, ScalarProperty)
    assert (identifier.required, identifier.pattern, identifier.max_length) == (
        True,
        "^[0-9]+$",
        8,
    )
    assert isinstance(tags, ListProperty)
    assert tags.min_items == 1
    assert tags.naming_context is None
    assert tags.type_descriptor.render() == "array<string>"
    assert isinstance(labels, MapProperty)
    assert labels.value_node is not None
    assert isinstance(anything, MapProperty)
    assert anything.type_descriptor.kind is TypeKind.UNTYPED_OBJECT
    assert isinstance(address, InlineObjectProperty)
    assert address.type_descriptor.model_name == "Address"
    assert isinstance(owner, ObjectReferenceProperty)
    assert owner.schema_info is catalog["components/schemas/Owner"]
    assert all(not item.inherited for item in resolved)


def test_anonymous_array_elements_take_the_owner_as_naming_context() -> None:
    catalog = _catalog(
        {
            "Owner": {
                "type": "object",
                "properties": {
                    "contacts": {
                        "type": "array",
                        "items": {"type": "object", "properties": {"email": {"type": "string"}}},
                    },
                    "moods": {"type": "array", "items": {"type": "string", "enum": ["calm"]}},
                },
            }
        }
    )
    owner = catalog["components/schemas/Owner"]

    contacts, moods = _resolve(catalog, "Owner")

    assert isinstance(contacts, ListProperty)
    assert contacts.naming_context is owner
    assert contacts.element_type.model_name == "OwnerContacts"
    assert isinstance(moods, ListProperty)
    assert moods.element_type.kind is TypeKind.ENUM
    assert moods.element_type.model_name == "OwnerMoods"


def test_referenced_array_elements_are_named_independently_of_the_owner() -> None:
    catalog = _catalog(
        {
            "Rows": {
                "type": "array",
                "items": {"type": "object", "properties": {"cell": {"type": "string"}}},
            },
            "Owner": {
                "type": "object",
                "properties": {"rows": {"$ref": "#/components/schemas/Rows"}},
            },
        }
    )

    (rows,) = _resolve(catalog, "Owner")

    assert isinstance(rows, ListProperty)
    assert rows.naming_context is None
    assert rows.element_type.kind is TypeKind.OBJECT
    assert rows.element_type.model_name == catalog["components/schemas/Rows"].canonical_name
    assert rows.element_type.model_name == "Rows"


def test_read_and_write_only_properties_are_optional_by_default() -> None:
    catalog = _catalog(
        {
            "Account": {
                "type": "object",
                "required": ["id", "password", "email"],
                "properties": {
                    "id": {"type": "string", "readOnly": True},
                    "password": {"type": "string", "writeOnly": True},
                    "email": {"type": "string"},
                },
            }
        }
    )
    strict = replace(DOCUMENT_SETTINGS, treat_read_write_only_as_optional=False)

    assert [item.required for item in _resolve(catalog, "Account")] == [False, False, True]
    assert [item.required for item in _resolve(catalog, "Account", strict)] == [True, True, True]


@pytest.mark.parametrize(
    ("settings", "expected_keys"),
    [
        (DOCUMENT_SETTINGS, ["email", "password", "profile"]),
        (ResolutionSettings(exclude_write_only=True), ["email"]),
        (HTTP_SETTINGS, ["email"]),
    ],
)
def test_write_only_policy(settings: ResolutionSettings, expected_keys: list[str]) -> None:
    catalog = _catalog(
        {
            "Account": {
                "type": "object",
                "properties": {
                    "email": {"type": "string"},
                    "password": {"type": "string", "writeOnly": True},
                    "profile": {
                        "type": "object",
                        "writeOnly": True,
                        "properties": {"bio": {"type": "string"}},
                    },
                },
            }
        }
    )

    resolved = _resolve(catalog, "Account", settings)

    assert [item.key for item in resolved] == expected_keys
    if "password" in expected_keys:
        password = resolved[1]
        assert password.node is not None
        assert password.node.write_only is True


def test_discriminator_mapping_selects_the_enclosing_model() -> None:
    catalog = _catalog(
        {
            "Pet": {
                "type": "object",
                "discriminator": {
                    "propertyName": "petType",
                    "mapping": {"cat": "#/components/schemas/Cat", "dog": "Dog"},
                },
                "properties": {
                    "petType": {"type": "string", "enum": ["cat", "dog"]},
                    "name": {"type": "string"},
                },
            },
            "Cat": {"allOf": [{"$ref": "#/components/schemas/Pet"}]},
            "Dog": {"allOf": [{"$ref": "#/components/schemas/Pet"}]},
        }
    )

    pet_type, name = _resolve(catalog, "Cat")
    dog_pet_type = _resolve(catalog, "Dog")[0]
    base_pet_type = _resolve(catalog, "Pet")[0]

    assert isinstance(pet_type, ScalarProperty)
    assert pet_type.is_discriminator is True
    assert pet_type.inherited is True
    assert pet_type.discriminator_value == DiscriminatorValue(
        value="cat", model_name="Cat", enum_constant="CAT"
    )
    assert isinstance(dog_pet_type, ScalarProperty)
    assert dog_pet_type.discriminator_value is not None
    assert dog_pet_type.discriminator_value.value == "dog"
    assert isinstance(base_pet_type, ScalarProperty)
    assert base_pet_type.is_discriminator is True
    assert base_pet_type.discriminator_value is None
    assert base_pet_type.naming_context is catalog["components/schemas/Pet"]
    assert isinstance(name, ScalarProperty)
    assert name.is_discriminator is False


def test_resolution_is_idempotent() -> None:
    catalog = _catalog(
        {
            "A": _A,
            "B": {
                "allOf": [
                    {"$ref": "#/components/schemas/A"},
                    {"type": "object", "properties": {"y": {"type": "integer"}}},
                ],
                "additionalProperties": {"type": "string"},
            },
        }
    )

    assert _resolve(catalog, "B") == _resolve(catalog, "B")


def test_self_composition_is_rejected() -> None:
    catalog = _catalog({"Loop": {"allOf": [{"$ref": "#/components/schemas/Loop"}]}})

    with pytest.raises(CompositionCycleError, match="composes itself"):
        _resolve(catalog, "Loop")


def test_catalog_models_cover_object_schemas_only() -> None:
    catalog = _catalog(
        {
            "A": _A,
            "Names": {"type": "array", "items": {"type": "string"}},
            "Labels": {"type": "object", "additionalProperties": {"type": "string"}},
        }
    )

    models = resolve_catalog_models(catalog)

    assert [model.info.source_key for model in models] == ["A"]
    assert [item.key for item in models[0].properties] == ["x"]
