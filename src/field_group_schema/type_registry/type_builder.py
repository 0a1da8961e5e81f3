"""Schema type registry build pass."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from field_group_schema.field_config import (
    ABSENT,
    FieldConfig,
    StorageAccessor,
    parse_content_reference,
)
from field_group_schema.field_groups import (
    RESERVED_TYPE_NAMES,
    FieldDefinition,
    FieldGroup,
    compose_type_name,
    format_field_name,
    format_type_name,
    is_valid_schema_name,
)
from field_group_schema.field_type_plugins import (
    CONNECTION,
    FieldTypePlugin,
    FieldTypeRegistry,
)
from field_group_schema.location_catalog import LocationCatalog
from field_group_schema.location_resolution import resolve_locations
from field_group_schema.schema_registrations import (
    BuildResult,
    ConnectionRegistration,
    Diagnostic,
    DiagnosticKind,
    DiagnosticSeverity,
    FieldRegistration,
    Resolver,
    SchemaTypeKind,
    SchemaTypeRegistration,
    TypeReference,
)

FIELDS_INTERFACE_SUFFIX = "_Fields"
LOCATION_INTERFACE_PREFIX = "WithAcf"


def build_schema(
    field_groups: Sequence[FieldGroup],
    catalog: LocationCatalog,
    plugins: FieldTypeRegistry,
    *,
    storage: StorageAccessor | None = None,
) -> BuildResult:
    """Run one build pass over all field groups.

    Field groups are processed in ascending key order and registrations are emitted in
    name order, so identical inputs always produce identical output. Conflicts never
    abort the pass; the offending type or field is left out and reported.
    """
    build = _BuildPass(catalog=catalog, plugins=plugins.snapshot(), storage=storage)
    build.diagnostics.extend(plugins.diagnostics)
    for field_group in sorted(field_groups, key=lambda group: group.key):
        build.add_field_group(field_group)
    return build.result()


def field_group_type_name(field_group: FieldGroup) -> str:
    return format_type_name(field_group.schema_name_source)


def field_group_field_name(field_group: FieldGroup) -> str:
    return format_field_name(field_group.schema_name_source)


def field_group_interfaces(field_group: FieldGroup) -> tuple[str, ...]:
    """Return the interfaces implemented by the field group's own type."""
    type_name = field_group_type_name(field_group)
    return (f"{type_name}{FIELDS_INTERFACE_SUFFIX}",) if type_name else ()


@dataclass
class _GroupStage:
    """Registrations collected for one field group before they are committed."""

    field_group: FieldGroup
    primary_type_name: str = ""
    types: dict[str, SchemaTypeRegistration] = field(default_factory=dict)
    connections: dict[str, ConnectionRegistration] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def report(
        self,
        severity: DiagnosticSeverity,
        kind: DiagnosticKind,
        message: str,
        field_key: str | None = None,
    ) -> None:
        self.diagnostics.append(
            Diagnostic(
                severity=severity,
                kind=kind,
                message=message,
                field_group_key=self.field_group.key,
                field_key=field_key,
            )
        )


@dataclass
class _LocationTypeDraft:
    """Location type accumulated across every field group attached to it."""

    name: str
    interfaces: list[str]
    fields: list[FieldRegistration] = field(default_factory=list)
    field_group_keys: list[str] = field(default_factory=list)

    def get_field(self, name: str) -> FieldRegistration | None:
        for item in self.fields:
            if item.name == name:
                return item
        return None

    def freeze(self) -> SchemaTypeRegistration:
        return SchemaTypeRegistration(
            name=self.name,
            kind=SchemaTypeKind.OBJECT,
            interfaces=tuple(self.interfaces),
            fields=tuple(self.fields),
            field_group_keys=tuple(self.field_group_keys),
        )


class _BuildPass:
    """State for one build pass; discarded when the pass returns."""

    def __init__(
        self,
        *,
        catalog: LocationCatalog,
        plugins: Mapping[str, FieldTypePlugin],
        storage: StorageAccessor | None,
    ) -> None:
        self.catalog = catalog
        self.plugins = plugins
        self.storage = storage
        self.types: dict[str, SchemaTypeRegistration] = {}
        self.connections: dict[str, ConnectionRegistration] = {}
        self.locations: dict[str, _LocationTypeDraft] = {}
        self.diagnostics: list[Diagnostic] = []
        self.catalog_type_names = frozenset(catalog.all_schema_type_names())

    def result(self) -> BuildResult:
        registrations = [*self.types.values(), *(d.freeze() for d in self.locations.values())]
        return BuildResult(
            types=tuple(sorted(registrations, key=lambda registration: registration.name)),
            connections=tuple(
                sorted(self.connections.values(), key=lambda connection: connection.type_name)
            ),
            diagnostics=tuple(self.diagnostics),
        )

    def add_field_group(self, field_group: FieldGroup) -> None:
        if not field_group.show_in_schema:
            return
        stage = _GroupStage(field_group=field_group)
        if not field_group.fields:
            stage.report(
                DiagnosticSeverity.INFO,
                DiagnosticKind.EMPTY_FIELD_SET,
                f"Field group '{field_group.title}' has no fields and was not added "
                "to the schema.",
            )
            self.diagnostics.extend(stage.diagnostics)
            return
        locations = resolve_locations(field_group, self.catalog)
        if not locations:
            stage.report(
                DiagnosticSeverity.INFO,
                DiagnosticKind.EMPTY_LOCATION_SET,
                f"Field group '{field_group.title}' resolves to no schema types "
                "and was not added to the schema.",
            )
            self.diagnostics.extend(stage.diagnostics)
            return

        type_name = field_group_type_name(field_group)
        problem = self._type_name_problem(type_name)
        if problem:
            stage.report(
                DiagnosticSeverity.ERROR,
                DiagnosticKind.INVALID_TYPE_NAME,
                f"Field group '{field_group.title}' cannot be registered: {problem}.",
            )
            self.diagnostics.extend(stage.diagnostics)
            return

        stage.primary_type_name = type_name
        fields = self.build_fields(stage, type_name, field_group.fields)
        if not fields:
            stage.report(
                DiagnosticSeverity.WARNING,
                DiagnosticKind.EMPTY_FIELD_SET,
                f"Field group '{field_group.title}' has no fields that can be shown "
                "in the schema.",
            )
            self.diagnostics.extend(stage.diagnostics)
            return

        location_field = self._stage_field_group_types(stage, type_name, fields)
        conflict = self._find_conflict(stage)
        if conflict is not None:
            self.diagnostics.extend(stage.diagnostics)
            self.diagnostics.append(conflict)
            return
        targets = self._accepted_locations(stage, location_field, locations)
        self.diagnostics.extend(stage.diagnostics)
        if not targets:
            return
        self._commit(stage)
        self._wire_locations(stage, location_field, targets)

    def build_fields(
        self,
        stage: _GroupStage,
        owner_type_name: str,
        definitions: Sequence[FieldDefinition],
    ) -> tuple[FieldRegistration, ...]:
        registrations: list[FieldRegistration] = []
        used_names: set[str] = set()
        for definition in definitions:
            if not definition.show_in_schema:
                continue
            name = format_field_name(definition.name)
            if name in used_names:
                stage.report(
                    DiagnosticSeverity.WARNING,
                    DiagnosticKind.FIELD_NAME_CONFLICT,
                    f"Field '{name}' is declared more than once on '{owner_type_name}'; "
                    "the earlier field was kept.",
                    field_key=definition.key,
                )
                continue
            plugin = self.plugins.get(definition.field_type)
            if plugin is None:
                stage.report(
                    DiagnosticSeverity.WARNING,
                    DiagnosticKind.UNSUPPORTED_FIELD_TYPE,
                    f"Field '{name}' on '{owner_type_name}' uses unsupported field type "
                    f"'{definition.field_type}' and was omitted.",
                    field_key=definition.key,
                )
                continue

            outcome = plugin.produce_schema_field(
                definition, owner_type_name, _PluginContext(self, stage)
            )
            if outcome is None:
                continue
            used_names.add(name)
            if outcome is CONNECTION:
                continue

            type_ref = outcome.type_ref
            if definition.non_null and not outcome.exempt_from_non_null:
                type_ref = TypeReference.non_null(type_ref)
            config = FieldConfig(definition, stage.field_group, owner_type_name, self.storage)
            registrations.append(
                FieldRegistration(
                    name=name,
                    type_ref=type_ref,
                    resolver=outcome.resolver or _bind_plugin_resolver(plugin, config),
                    description=outcome.description or config.get_field_description(),
                    source_field_key=config.get_field_key(),
                )
            )
        return tuple(registrations)

    def _type_name_problem(self, type_name: str) -> str | None:
        if not type_name or not is_valid_schema_name(type_name):
            return "its name does not produce a valid schema type name"
        if type_name in RESERVED_TYPE_NAMES:
            return f"'{type_name}' is a reserved root type name"
        if type_name in self.catalog_type_names or type_name in self.locations:
            return f"'{type_name}' is already the name of a location type"
        return None

    def _stage_field_group_types(
        self,
        stage: _GroupStage,
        type_name: str,
        fields: tuple[FieldRegistration, ...],
    ) -> FieldRegistration:
        field_group = stage.field_group
        keys = (field_group.key,)
        description = field_group.description or (
            f'Fields of the "{field_group.title}" field group.'
        )
        fields_interface = f"{type_name}{FIELDS_INTERFACE_SUFFIX}"
        location_interface = f"{LOCATION_INTERFACE_PREFIX}{type_name}"
        location_field = FieldRegistration(
            name=field_group_field_name(field_group),
            type_ref=TypeReference.named(type_name),
            resolver=_resolve_content_node,
            description=description,
        )
        stage.types[type_name] = SchemaTypeRegistration(
            name=type_name,
            interfaces=(fields_interface,),
            fields=fields,
            field_group_keys=keys,
            description=description,
        )
        stage.types[fields_interface] = SchemaTypeRegistration(
            name=fields_interface,
            kind=SchemaTypeKind.INTERFACE,
            fields=fields,
            field_group_keys=keys,
            description=description,
        )
        stage.types[location_interface] = SchemaTypeRegistration(
            name=location_interface,
            kind=SchemaTypeKind.INTERFACE,
            fields=(location_field,),
            field_group_keys=keys,
            description=f'Provides access to the "{field_group.title}" field group.',
        )
        return location_field

    def _find_conflict(self, stage: _GroupStage) -> Diagnostic | None:
        title = stage.field_group.title
        ordered_names = sorted(stage.types, key=lambda name: name != stage.primary_type_name)
        for name in ordered_names:
            staged = stage.types[name]
            if name in self.locations:
                return _conflict(
                    stage,
                    f"Field group '{title}' would register type '{name}', which is "
                    "already used as a location type.",
                )
            existing = self.types.get(name)
            if existing is not None and existing.signature != staged.signature:
                owners = ", ".join(existing.field_group_keys)
                return _conflict(
                    stage,
                    f"Field group '{title}' would register type '{name}', which field group "
                    f"{owners} already registered with a different field set.",
                )
        for type_name, connection in stage.connections.items():
            existing_connection = self.connections.get(type_name)
            if (
                existing_connection is not None
                and existing_connection.signature != connection.signature
            ):
                return _conflict(
                    stage,
                    f"Field group '{title}' would register connection '{type_name}', "
                    "which is already registered differently.",
                )
        return None

    def _commit(self, stage: _GroupStage) -> None:
        key = stage.field_group.key
        for name, registration in stage.types.items():
            existing = self.types.get(name)
            if existing is None:
                self.types[name] = registration
            else:
                self.types[name] = replace(
                    existing, field_group_keys=(*existing.field_group_keys, key)
                )
        for type_name, connection in stage.connections.items():
            existing_connection = self.connections.get(type_name)
            if existing_connection is None:
                self.connections[type_name] = connection
            else:
                self.connections[type_name] = replace(
                    existing_connection,
                    field_group_keys=(*existing_connection.field_group_keys, key),
                )

    def _accepted_locations(
        self,
        stage: _GroupStage,
        location_field: FieldRegistration,
        locations: Sequence[str],
    ) -> tuple[str, ...]:
        """Return the targets the group can attach to, reporting every skipped one."""
        title = stage.field_group.title
        accepted: list[str] = []
        for location_type in locations:
            if location_type in self.types or location_type in stage.types:
                stage.report(
                    DiagnosticSeverity.WARNING,
                    DiagnosticKind.TYPE_NAME_CONFLICT,
                    f"Field group '{title}' targets '{location_type}', which is a field "
                    "group type rather than a location; the target was skipped.",
                )
                continue
            draft = self.locations.get(location_type)
            existing_field = draft.get_field(location_field.name) if draft else None
            if existing_field is not None and existing_field.type_ref != location_field.type_ref:
                stage.report(
                    DiagnosticSeverity.WARNING,
                    DiagnosticKind.FIELD_NAME_CONFLICT,
                    f"Field '{location_field.name}' already exists on '{location_type}'; "
                    f"field group '{title}' was not attached there.",
                )
                continue
            accepted.append(location_type)
        if not accepted:
            stage.report(
                DiagnosticSeverity.WARNING,
                DiagnosticKind.EMPTY_LOCATION_SET,
                f"Field group '{title}' could not attach to any of its targets and was "
                "not added to the schema.",
            )
        return tuple(accepted)

    def _wire_locations(
        self,
        stage: _GroupStage,
        location_field: FieldRegistration,
        targets: Sequence[str],
    ) -> None:
        key = stage.field_group.key
        location_interface = f"{LOCATION_INTERFACE_PREFIX}{stage.primary_type_name}"
        for location_type in targets:
            draft = self.locations.get(location_type)
            if draft is None:
                draft = _LocationTypeDraft(
                    name=location_type,
                    interfaces=list(self.catalog.interfaces_for_type(location_type)),
                )
                self.locations[location_type] = draft
            if draft.get_field(location_field.name) is None:
                if location_interface not in draft.interfaces:
                    draft.interfaces.append(location_interface)
                draft.fields.append(location_field)
            draft.field_group_keys.append(key)


class _PluginContext:
    """Build services handed to field type plugins for one field group."""

    def __init__(self, build: _BuildPass, stage: _GroupStage) -> None:
        self._build = build
        self._stage = stage

    def field_config(self, definition: FieldDefinition, owner_type_name: str) -> FieldConfig:
        return FieldConfig(
            definition, self._stage.field_group, owner_type_name, self._build.storage
        )

    def register_nested_type(
        self, owner_type_name: str, definition: FieldDefinition
    ) -> str | None:
        name = compose_type_name(owner_type_name, definition.name)
        if (
            not is_valid_schema_name(name)
            or name in RESERVED_TYPE_NAMES
            or name in self._build.catalog_type_names
            or name in self._build.locations
            or name in self._stage.types
        ):
            self._stage.report(
                DiagnosticSeverity.WARNING,
                DiagnosticKind.TYPE_NAME_CONFLICT,
                f"Nested type '{name}' for field '{definition.name}' cannot be registered; "
                "the field was omitted.",
                field_key=definition.key,
            )
            return None
        fields = self._build.build_fields(self._stage, name, definition.sub_fields)
        if not fields:
            self._stage.report(
                DiagnosticSeverity.WARNING,
                DiagnosticKind.EMPTY_FIELD_SET,
                f"Field '{definition.name}' has no sub-fields that can be shown in the schema.",
                field_key=definition.key,
            )
            return None
        self._stage.types[name] = SchemaTypeRegistration(
            name=name,
            fields=fields,
            field_group_keys=(self._stage.field_group.key,),
            description=f"Field group nested under '{owner_type_name}'.",
        )
        return name

    def register_connection(
        self,
        owner_type_name: str,
        definition: FieldDefinition,
        *,
        to_type: str,
        one_to_one: bool = False,
        resolver: Resolver | None = None,
    ) -> str:
        suffix = "ConnectionEdge" if one_to_one else "Connection"
        config = self.field_config(definition, owner_type_name)
        type_name = f"{owner_type_name}{config.get_field_type_name_part()}To{to_type}{suffix}"
        self._stage.connections[type_name] = ConnectionRegistration(
            type_name=type_name,
            from_type=owner_type_name,
            to_type=to_type,
            from_field_name=config.get_field_name(),
            one_to_one=one_to_one,
            resolver=resolver,
            description=config.get_field_description(),
            field_group_keys=(self._stage.field_group.key,),
            source_field_key=definition.key,
        )
        return type_name


def _bind_plugin_resolver(plugin: FieldTypePlugin, config: FieldConfig) -> Resolver:
    plugin_resolver = getattr(plugin, "resolver", None)
    if callable(plugin_resolver):

        def _resolve_with_plugin(root: Any, args: Mapping[str, Any], context: Any) -> Any:
            return plugin_resolver(root, args, context, config)

        return _resolve_with_plugin

    def _resolve_raw(root: Any, args: Mapping[str, Any], context: Any) -> Any:
        value = config.resolve_field(root, args, context)
        return None if value is ABSENT else value

    return _resolve_raw


def _resolve_content_node(root: Any, args: Mapping[str, Any], context: Any) -> Any:
    del args, context
    return parse_content_reference(root)


def _conflict(stage: _GroupStage, message: str) -> Diagnostic:
    return _diagnostic(
        stage, DiagnosticSeverity.ERROR, DiagnosticKind.TYPE_NAME_CONFLICT, message
    )


def _diagnostic(
    stage: _GroupStage,
    severity: DiagnosticSeverity,
    kind: DiagnosticKind,
    message: str,
) -> Diagnostic:
    return Diagnostic(
        severity=severity,
        kind=kind,
        message=message,
        field_group_key=stage.field_group.key,
    )
