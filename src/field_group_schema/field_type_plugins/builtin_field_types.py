"""Default field type plugins.

Each is an ordinary plugin registered through ``FieldTypeRegistry.register``; hosts can
override any of them by registering their own plugin under the same key.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from field_group_schema.field_config import ABSENT, FieldConfig, FieldRow, parse_content_reference
from field_group_schema.field_groups import FieldDefinition
from field_group_schema.schema_registrations import TypeReference

from .plugin_contract import (
    CONNECTION,
    AdminSettingDescriptor,
    FieldOutcome,
    PluginResolver,
    SchemaBuildContext,
    SchemaFieldSpec,
)
from .plugin_registry import FieldTypeRegistry

TypeProducer = Callable[[FieldDefinition, str, SchemaBuildContext], FieldOutcome]

STRING_FIELD_TYPES = ("text", "textarea", "email", "url", "password", "wysiwyg", "oembed")
NUMBER_FIELD_TYPES = ("number", "range")
CHOICE_FIELD_TYPES = {
    "select": "list:string",
    "checkbox": "list:string",
    "radio": "string",
    "button_group": "string",
}
RESOLVE_TYPE_CHOICES = {
    "string": "String",
    "int": "Int",
    "float": "Float",
    "list:string": "[String] (List of Strings)",
    "list:int": "[Int] (List of Integers)",
    "list:float": "[Float] (List of Floats)",
}


def show_in_schema_setting() -> AdminSettingDescriptor:
    return AdminSettingDescriptor(
        name="show_in_graphql",
        kind="true_false",
        label="Show in GraphQL",
        default=True,
        visibility_condition=None,
    )


def non_null_setting() -> AdminSettingDescriptor:
    return AdminSettingDescriptor(
        name="graphql_non_null",
        kind="true_false",
        label="GraphQL NonNull?",
        default=False,
        instructions=(
            "Whether the field should be non-null in the GraphQL Schema. Entries without a "
            "value for this field will result in a GraphQL error."
        ),
    )


def resolve_type_setting(default: str = "list:string") -> AdminSettingDescriptor:
    return AdminSettingDescriptor(
        name="graphql_resolve_type",
        kind="select",
        label="GraphQL Resolve Type",
        default=default,
        instructions="The GraphQL Type the field will show in the Schema as and resolve to.",
        choices=dict(RESOLVE_TYPE_CHOICES),
    )


def _default_admin_settings() -> tuple[AdminSettingDescriptor, ...]:
    return (
        show_in_schema_setting(),
        AdminSettingDescriptor(
            name="graphql_description", kind="text", label="GraphQL Description"
        ),
        AdminSettingDescriptor(name="graphql_field_name", kind="text", label="GraphQL Field Name"),
        non_null_setting(),
    )


@dataclass(frozen=True)
class DeclarativeFieldType:
    """Field type plugin assembled from a static type or a type producer."""

    key: str
    graphql_type: TypeReference | TypeProducer | None = None
    resolve: PluginResolver | None = None
    exclude_admin_fields: tuple[str, ...] = ()
    admin_fields: tuple[AdminSettingDescriptor, ...] = ()
    exempt_from_non_null: bool = False

    def produce_schema_field(
        self,
        definition: FieldDefinition,
        owner_type_name: str,
        context: SchemaBuildContext,
    ) -> FieldOutcome:
        if self.graphql_type is None:
            return None
        if isinstance(self.graphql_type, TypeReference):
            return SchemaFieldSpec(
                type_ref=self.graphql_type,
                exempt_from_non_null=self.exempt_from_non_null,
            )
        return self.graphql_type(definition, owner_type_name, context)

    def admin_setting_descriptors(self) -> tuple[AdminSettingDescriptor, ...]:
        settings = [
            setting
            for setting in (*_default_admin_settings(), *self.admin_fields)
            if setting.name not in self.exclude_admin_fields
        ]
        deduplicated: dict[str, AdminSettingDescriptor] = {}
        for setting in settings:
            deduplicated[setting.name] = setting
        return tuple(deduplicated.values())

    def resolver(
        self,
        content_ref: Any,
        args: Mapping[str, Any],
        execution_context: Any,
        field_config: FieldConfig,
    ) -> Any:
        if self.resolve is not None:
            return self.resolve(content_ref, args, execution_context, field_config)
        value = field_config.resolve_field(content_ref, args, execution_context)
        return None if value is ABSENT else value


def register_default_field_types(registry: FieldTypeRegistry) -> FieldTypeRegistry:
    """Register the built-in field types and return the registry."""
    for key in STRING_FIELD_TYPES:
        registry.register(key, _scalar_field_type(key, "String"))
    for key in NUMBER_FIELD_TYPES:
        registry.register(key, _scalar_field_type(key, "Float"))
    registry.register("true_false", _scalar_field_type("true_false", "Boolean"))
    for key, default in CHOICE_FIELD_TYPES.items():
        registry.register(key, _choice_field_type(key, default))
    registry.register("group", DeclarativeFieldType(key="group", graphql_type=_group_type))
    registry.register(
        "repeater",
        DeclarativeFieldType(key="repeater", graphql_type=_repeater_type),
    )
    registry.register(
        "user",
        DeclarativeFieldType(
            key="user",
            graphql_type=_user_connection,
            exclude_admin_fields=("graphql_non_null",),
            exempt_from_non_null=True,
        ),
    )
    for key in ("image", "file"):
        registry.register(
            key,
            DeclarativeFieldType(
                key=key,
                graphql_type=_media_item_connection,
                exclude_admin_fields=("graphql_non_null",),
                exempt_from_non_null=True,
            ),
        )
    return registry


def _scalar_field_type(key: str, scalar: str) -> DeclarativeFieldType:
    def _resolve(
        content_ref: Any, args: Mapping[str, Any], execution_context: Any, config: FieldConfig
    ) -> Any:
        return coerce_scalar(config.resolve_field(content_ref, args, execution_context), scalar)

    return DeclarativeFieldType(key=key, graphql_type=TypeReference.named(scalar), resolve=_resolve)


def _choice_field_type(key: str, default_resolve_type: str) -> DeclarativeFieldType:
    def _produce(
        definition: FieldDefinition, owner_type_name: str, context: SchemaBuildContext
    ) -> FieldOutcome:
        raw_resolve_type = definition.settings.get("graphql_resolve_type", default_resolve_type)
        resolve_type = str(raw_resolve_type).strip().lower()
        if resolve_type not in RESOLVE_TYPE_CHOICES:
            resolve_type = default_resolve_type
        is_list, _, scalar_key = resolve_type.rpartition(":")
        scalar = RESOLVE_TYPE_CHOICES[scalar_key]
        config = context.field_config(definition, owner_type_name)

        def _resolve(root: Any, args: Mapping[str, Any], execution_context: Any) -> Any:
            value = config.resolve_field(root, args, execution_context)
            if is_list:
                return coerce_list(value, scalar)
            if isinstance(value, list | tuple):
                value = value[0] if value else ABSENT
            return coerce_scalar(value, scalar)

        type_ref = TypeReference.list_of(scalar) if is_list else TypeReference.named(scalar)
        return SchemaFieldSpec(type_ref=type_ref, resolver=_resolve)

    return DeclarativeFieldType(
        key=key,
        graphql_type=_produce,
        admin_fields=(resolve_type_setting(default_resolve_type),),
    )


def _group_type(
    definition: FieldDefinition, owner_type_name: str, context: SchemaBuildContext
) -> FieldOutcome:
    nested_type_name = context.register_nested_type(owner_type_name, definition)
    if nested_type_name is None:
        return None
    config = context.field_config(definition, owner_type_name)

    def _resolve(root: Any, args: Mapping[str, Any], execution_context: Any) -> Any:
        if isinstance(root, FieldRow):
            value = config.resolve_field(root, args, execution_context)
            if isinstance(value, Mapping):
                return FieldRow(content_ref=root.content_ref, values=value)
            return None
        return parse_content_reference(root)

    return SchemaFieldSpec(type_ref=TypeReference.named(nested_type_name), resolver=_resolve)


def _repeater_type(
    definition: FieldDefinition, owner_type_name: str, context: SchemaBuildContext
) -> FieldOutcome:
    nested_type_name = context.register_nested_type(owner_type_name, definition)
    if nested_type_name is None:
        return None
    config = context.field_config(definition, owner_type_name)

    def _resolve(root: Any, args: Mapping[str, Any], execution_context: Any) -> Any:
        rows = config.resolve_field(root, args, execution_context)
        if rows is ABSENT or not isinstance(rows, Sequence) or isinstance(rows, str):
            return None
        content_ref = (
            root.content_ref if isinstance(root, FieldRow) else parse_content_reference(root)
        )
        return [
            FieldRow(content_ref=content_ref, values=row)
            for row in rows
            if isinstance(row, Mapping)
        ]

    return SchemaFieldSpec(
        type_ref=TypeReference.list_of(TypeReference.named(nested_type_name)),
        resolver=_resolve,
    )


def _user_connection(
    definition: FieldDefinition, owner_type_name: str, context: SchemaBuildContext
) -> FieldOutcome:
    config = context.field_config(definition, owner_type_name)
    if not owner_type_name or not config.get_field_name():
        return None

    def _resolve(root: Any, args: Mapping[str, Any], execution_context: Any) -> Any:
        ids = coerce_object_ids(config.resolve_field(root, args, execution_context))
        return ids or None

    context.register_connection(
        owner_type_name, definition, to_type="User", one_to_one=False, resolver=_resolve
    )
    return CONNECTION


def _media_item_connection(
    definition: FieldDefinition, owner_type_name: str, context: SchemaBuildContext
) -> FieldOutcome:
    config = context.field_config(definition, owner_type_name)
    if not owner_type_name or not config.get_field_name():
        return None

    def _resolve(root: Any, args: Mapping[str, Any], execution_context: Any) -> Any:
        ids = coerce_object_ids(config.resolve_field(root, args, execution_context))
        return ids[0] if ids else None

    context.register_connection(
        owner_type_name, definition, to_type="MediaItem", one_to_one=True, resolver=_resolve
    )
    return CONNECTION


def coerce_scalar(value: Any, scalar: str) -> Any:
    """Coerce a raw stored value into the named scalar, or None when it cannot be."""
    if value is ABSENT or value is None:
        return None
    if scalar == "Boolean":
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
    if scalar in {"Int", "Float"}:
        if isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return int(number) if scalar == "Int" else number
    if isinstance(value, str):
        return value
    if isinstance(value, list | tuple | Mapping):
        return None
    return str(value)


def coerce_list(value: Any, scalar: str) -> list[Any] | None:
    if value is ABSENT or value is None:
        return None
    items: Iterable[Any] = value if isinstance(value, list | tuple) else [value]
    coerced = [coerce_scalar(item, scalar) for item in items]
    return [item for item in coerced if item is not None]


def coerce_object_ids(value: Any) -> list[int]:
    """Normalize stored object references (ids, numeric strings, or {"ID": n}) to ids."""
    if value is ABSENT or value is None or value == "":
        return []
    items = value if isinstance(value, list | tuple) else [value]
    ids: list[int] = []
    for item in items:
        raw = item.get("ID") if isinstance(item, Mapping) else item
        if isinstance(raw, bool):
            continue
        try:
            object_id = abs(int(raw))
        except (TypeError, ValueError):
            continue
        if object_id:
            ids.append(object_id)
    return ids
