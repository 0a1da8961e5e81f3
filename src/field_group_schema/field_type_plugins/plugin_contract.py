"""Field type plugin contract."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, TypeAlias

from field_group_schema.field_config import FieldConfig
from field_group_schema.field_groups import FieldDefinition
from field_group_schema.schema_registrations import Resolver, TypeReference

SHOW_IN_SCHEMA_CONDITION: Mapping[str, str] = {
    "field": "show_in_graphql",
    "operator": "==",
    "value": "1",
}


class ConnectionSentinel(Enum):
    """Marker returned by field types that register their own connection field."""

    CONNECTION = "connection"


CONNECTION = ConnectionSentinel.CONNECTION


@dataclass(frozen=True)
class SchemaFieldSpec:
    """Schema type and optional resolver produced for one field definition."""

    type_ref: TypeReference
    resolver: Resolver | None = None
    description: str | None = None
    exempt_from_non_null: bool = False


FieldOutcome: TypeAlias = SchemaFieldSpec | ConnectionSentinel | None


@dataclass(frozen=True)
class AdminSettingDescriptor:
    """Describes one per-field setting rendered by the admin UI."""

    name: str
    kind: str
    label: str = ""
    default: Any = None
    visibility_condition: Mapping[str, str] | None = field(
        default_factory=lambda: dict(SHOW_IN_SCHEMA_CONDITION)
    )
    instructions: str = ""
    choices: Mapping[str, str] = field(default_factory=dict)


class SchemaBuildContext(Protocol):
    """Services a build pass offers to field type plugins."""

    def field_config(self, definition: FieldDefinition, owner_type_name: str) -> FieldConfig:
        """Return the field config adapter for a definition on the owner type."""

    def register_nested_type(
        self, owner_type_name: str, definition: FieldDefinition
    ) -> str | None:
        """Build an object type from the definition's sub-fields and return its name."""

    def register_connection(
        self,
        owner_type_name: str,
        definition: FieldDefinition,
        *,
        to_type: str,
        one_to_one: bool = False,
        resolver: Resolver | None = None,
    ) -> str:
        """Register a connection field from the owner type and return the connection name."""


class FieldTypePlugin(Protocol):
    """Translates one CMS field type into schema fields."""

    key: str

    def produce_schema_field(
        self,
        definition: FieldDefinition,
        owner_type_name: str,
        context: SchemaBuildContext,
    ) -> FieldOutcome:
        """Return a field spec, ``CONNECTION``, or ``None`` to omit the field."""

    def admin_setting_descriptors(self) -> tuple[AdminSettingDescriptor, ...]:
        """Return the settings the admin UI should render for this field type."""


PluginResolver = Callable[[Any, Mapping[str, Any], Any, FieldConfig], Any]
"""Optional plugin resolver: ``(content_ref, args, execution_context, field_config)``."""
