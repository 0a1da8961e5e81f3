"""Read-only field group summaries for the admin listing."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from field_group_schema.field_groups import FieldGroup
from field_group_schema.location_catalog import LocationCatalog
from field_group_schema.location_resolution import resolve_locations
from field_group_schema.schema_registrations import BuildResult

from .type_builder import field_group_interfaces, field_group_type_name


@dataclass(frozen=True)
class FieldGroupSummary:
    """Type name, interfaces and location types shown for one field group."""

    field_group_key: str
    title: str
    type_name: str
    interfaces: tuple[str, ...]
    location_types: tuple[str, ...]
    show_in_schema: bool


def describe_field_groups(
    field_groups: Sequence[FieldGroup], catalog: LocationCatalog
) -> tuple[FieldGroupSummary, ...]:
    return tuple(
        FieldGroupSummary(
            field_group_key=field_group.key,
            title=field_group.title,
            type_name=field_group_type_name(field_group),
            interfaces=field_group_interfaces(field_group),
            location_types=resolve_locations(field_group, catalog),
            show_in_schema=field_group.show_in_schema,
        )
        for field_group in sorted(field_groups, key=lambda group: group.key)
    )


def list_registered_types(result: BuildResult) -> tuple[str, ...]:
    """Return the names of every type emitted by a build pass."""
    return result.type_names()


def summarize_names(names: Sequence[str], limit: int = 5) -> str:
    """Join names for display, collapsing everything past ``limit`` into a count."""
    if limit <= 0:
        raise ValueError("limit must be greater than zero.")
    shown = list(names[:limit])
    remaining = len(names) - len(shown)
    if remaining > 0:
        shown.append(f"+{remaining} more")
    return ", ".join(shown)
