"""Field type plugin exports."""

from .builtin_field_types import DeclarativeFieldType, register_default_field_types
from .plugin_contract import (
    CONNECTION,
    SHOW_IN_SCHEMA_CONDITION,
    AdminSettingDescriptor,
    ConnectionSentinel,
    FieldOutcome,
    FieldTypePlugin,
    PluginResolver,
    SchemaBuildContext,
    SchemaFieldSpec,
)
from .plugin_registry import FieldTypeRegistry, FieldTypeRegistryError

__all__ = [
    "CONNECTION",
    "SHOW_IN_SCHEMA_CONDITION",
    "AdminSettingDescriptor",
    "ConnectionSentinel",
    "DeclarativeFieldType",
    "FieldOutcome",
    "FieldTypePlugin",
    "FieldTypeRegistry",
    "FieldTypeRegistryError",
    "PluginResolver",
    "SchemaBuildContext",
    "SchemaFieldSpec",
    "register_default_field_types",
]
