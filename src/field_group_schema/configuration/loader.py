"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from field_group_schema.condition_rules import (
    ConditionTree,
    ConditionTreeError,
    parse_condition_tree,
)
from field_group_schema.field_groups import FieldDefinition, FieldGroup, FieldGroupError
from field_group_schema.location_catalog import (
    LocationCatalog,
    LocationCatalogError,
    build_location_catalog,
)

from .runtime_settings import Configuration

_FIELD_KEYS = frozenset(
    {"key", "name", "type", "label", "graphql_non_null", "show_in_graphql", "sub_fields"}
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        catalog=_parse_locations_section(parsed.get("locations")),
        field_groups=_parse_field_groups_section(parsed.get("field_groups")),
    )


def _parse_locations_section(value: Any) -> LocationCatalog:
    rows = _require_sequence(value, "locations")
    try:
        return build_location_catalog(rows)
    except LocationCatalogError as exc:
        raise ConfigurationError(str(exc)) from exc


def _parse_field_groups_section(value: Any) -> tuple[FieldGroup, ...]:
    if value is None:
        return ()
    rows = _require_sequence(value, "field_groups")
    field_groups = tuple(_parse_field_group(row, index) for index, row in enumerate(rows))
    seen: set[str] = set()
    for field_group in field_groups:
        if field_group.key in seen:
            raise ConfigurationError(f"Duplicate field group key: {field_group.key}")
        seen.add(field_group.key)
    return field_groups


def _parse_field_group(value: Any, index: int) -> FieldGroup:
    label = f"field_groups[{index}]"
    section = _require_mapping(value, label)
    manual_types = _optional_bool(
        section.get("manual_types", section.get("map_graphql_types_from_location_rules")),
        f"{label}.manual_types",
        default=False,
    )
    try:
        return FieldGroup(
            key=_require_non_empty_string(section.get("key"), f"{label}.key"),
            title=_require_non_empty_string(section.get("title"), f"{label}.title"),
            fields=_parse_fields(section.get("fields"), f"{label}.fields"),
            location=_parse_location_rules(
                section.get("location"), f"{label}.location", manual_types=manual_types
            ),
            manual_types=manual_types,
            graphql_types=_normalize_string_sequence(
                section.get("graphql_types"), f"{label}.graphql_types"
            ),
            show_in_schema=_optional_bool(
                section.get("show_in_graphql"), f"{label}.show_in_graphql", default=True
            ),
            graphql_field_name=_optional_string(
                section.get("graphql_field_name"), f"{label}.graphql_field_name"
            ),
            description=_optional_string(section.get("description"), f"{label}.description")
            or "",
        )
    except FieldGroupError as exc:
        raise ConfigurationError(f"{label}: {exc}") from exc


def _parse_location_rules(value: Any, label: str, *, manual_types: bool) -> ConditionTree:
    try:
        return parse_condition_tree(value)
    except ConditionTreeError as exc:
        if manual_types:
            # location rules are not consulted for manually typed field groups
            return ConditionTree()
        raise ConfigurationError(f"{label}: {exc}") from exc


def _parse_fields(value: Any, label: str) -> tuple[FieldDefinition, ...]:
    if value is None:
        return ()
    rows = _require_sequence(value, label)
    return tuple(_parse_field(row, f"{label}[{index}]") for index, row in enumerate(rows))


def _parse_field(value: Any, label: str) -> FieldDefinition:
    section = _require_mapping(value, label)
    settings = _optional_mapping(section.get("settings"), f"{label}.settings")
    extra_settings = {key: item for key, item in section.items() if key not in _FIELD_KEYS}
    extra_settings.pop("settings", None)
    try:
        return FieldDefinition(
            key=_require_non_empty_string(section.get("key"), f"{label}.key"),
            name=_require_non_empty_string(section.get("name"), f"{label}.name"),
            field_type=_require_non_empty_string(section.get("type"), f"{label}.type"),
            label=_optional_string(section.get("label"), f"{label}.label") or "",
            settings={**extra_settings, **settings},
            non_null=_optional_bool(
                section.get("graphql_non_null"), f"{label}.graphql_non_null", default=False
            ),
            show_in_schema=_optional_bool(
                section.get("show_in_graphql"), f"{label}.show_in_graphql", default=True
            ),
            sub_fields=_parse_fields(section.get("sub_fields"), f"{label}.sub_fields"),
        )
    except FieldGroupError as exc:
        raise ConfigurationError(f"{label}: {exc}") from exc


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    return _require_mapping(value, section_name)


def _require_sequence(value: Any, section_name: str) -> Sequence[Any]:
    if isinstance(value, str | bytes) or not isinstance(value, Sequence):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a list.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _optional_bool(value: Any, field_name: str, *, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in {"1", "0", "true", "false"}:
        return value.strip().lower() in {"1", "true"}
    raise ConfigurationError(f"{field_name} must be a boolean.")
