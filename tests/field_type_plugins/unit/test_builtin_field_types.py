"""Built-in field type tests."""

from __future__ import annotations

import pytest
from field_group_schema.field_type_plugins import (
    SHOW_IN_SCHEMA_CONDITION,
    FieldTypeRegistry,
    register_default_field_types,
)
from field_group_schema.field_type_plugins.builtin_field_types import (
    coerce_list,
    coerce_object_ids,
    coerce_scalar,
)


def _registry() -> FieldTypeRegistry:
    return register_default_field_types(FieldTypeRegistry())


def test_default_field_types_are_registered_without_diagnostics() -> None:
    registry = _registry()

    for key in ("text", "number", "true_false", "select", "group", "repeater", "user", "image"):
        assert key in registry
    assert registry.diagnostics == ()


def test_scalar_field_types_expose_standard_admin_settings() -> None:
    descriptors = {item.name: item for item in _registry().admin_setting_descriptors_for("text")}

    assert list(descriptors) == [
        "show_in_graphql",
        "graphql_description",
        "graphql_field_name",
        "graphql_non_null",
    ]
    assert descriptors["graphql_non_null"].default is False
    assert descriptors["graphql_non_null"].visibility_condition == SHOW_IN_SCHEMA_CONDITION
    assert descriptors["show_in_graphql"].visibility_condition is None


def test_connection_field_types_exclude_non_null_setting() -> None:
    names = [item.name for item in _registry().admin_setting_descriptors_for("user")]

    assert "graphql_non_null" not in names
    assert "show_in_graphql" in names


def test_choice_field_types_expose_resolve_type_setting() -> None:
    registry = _registry()
    select = {item.name: item for item in registry.admin_setting_descriptors_for("select")}
    radio = {item.name: item for item in registry.admin_setting_descriptors_for("radio")}

    assert select["graphql_resolve_type"].default == "list:string"
    assert radio["graphql_resolve_type"].default == "string"
    assert "list:float" in select["graphql_resolve_type"].choices


@pytest.mark.parametrize(
    ("value", "scalar", "expected"),
    [
        ("Hello", "String", "Hello"),
        (12, "String", "12"),
        (["a"], "String", None),
        ("3.5", "Float", 3.5),
        ("abc", "Float", None),
        (True, "Int", None),
        ("7.9", "Int", 7),
        ("1", "Boolean", True),
        ("off", "Boolean", False),
        (0, "Boolean", False),
        (None, "String", None),
    ],
)
def test_coerce_scalar(value: object, scalar: str, expected: object) -> None:
    assert coerce_scalar(value, scalar) == expected


def test_coerce_list_wraps_single_values_and_drops_invalid_items() -> None:
    assert coerce_list("red", "String") == ["red"]
    assert coerce_list(["1", "x", 3], "Int") == [1, 3]
    assert coerce_list(None, "String") is None


def test_coerce_object_ids_accepts_ids_strings_and_records() -> None:
    assert coerce_object_ids([{"ID": 3}, "5", "x", 0, True]) == [3, 5]
    assert coerce_object_ids("") == []
    assert coerce_object_ids(9) == [9]
