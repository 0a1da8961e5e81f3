"""Field type plugin registry."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from field_group_schema.schema_registrations import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticSeverity,
)

from .plugin_contract import AdminSettingDescriptor, FieldTypePlugin


class FieldTypeRegistryError(Exception):
    """Raised when the registry is modified after it has been frozen for a build."""


class FieldTypeRegistry:
    """Maps field type keys to plugins.

    Registration happens at host startup. The first build pass freezes the registry;
    later registrations raise ``FieldTypeRegistryError``.
    """

    def __init__(self) -> None:
        self._plugins: dict[str, FieldTypePlugin] = {}
        self._diagnostics: list[Diagnostic] = []
        self._frozen = False

    def register(self, key: str, plugin: FieldTypePlugin) -> None:
        """Register a plugin; re-registering a key warns and the later plugin wins."""
        if self._frozen:
            raise FieldTypeRegistryError(
                f"Cannot register field type '{key}' after the schema build has started."
            )
        if key in self._plugins:
            self._diagnostics.append(
                Diagnostic(
                    severity=DiagnosticSeverity.WARNING,
                    kind=DiagnosticKind.DUPLICATE_REGISTRATION,
                    message=(
                        f"Field type '{key}' was registered more than once; "
                        "the last registration replaced the earlier one."
                    ),
                )
            )
        self._plugins[key] = plugin

    def lookup(self, key: str) -> FieldTypePlugin | None:
        return self._plugins.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._plugins

    def keys(self) -> tuple[str, ...]:
        return tuple(sorted(self._plugins))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def snapshot(self) -> Mapping[str, FieldTypePlugin]:
        """Freeze the registry and return a read-only view of its plugins."""
        self._frozen = True
        return MappingProxyType(dict(self._plugins))

    def admin_setting_descriptors_for(self, key: str) -> tuple[AdminSettingDescriptor, ...]:
        """Return admin settings for a field type, or a not-supported notice."""
        plugin = self._plugins.get(key)
        if plugin is None:
            return (
                AdminSettingDescriptor(
                    name="not_supported",
                    kind="message",
                    label="Not supported in the GraphQL Schema",
                    instructions=(
                        f'The "{key}" Field Type is not set up to map to the GraphQL Schema.'
                    ),
                    visibility_condition=None,
                ),
            )
        return plugin.admin_setting_descriptors()
