"""Static location catalog with forward and reverse lookups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .catalog_models import LocationCatalogError, LocationEntry


class LocationCatalog:
    """Read-only index over location entries, in declaration order."""

    def __init__(self, entries: Iterable[LocationEntry]) -> None:
        ordered: list[LocationEntry] = []
        by_id: dict[str, LocationEntry] = {}
        for entry in entries:
            if entry.location_id in by_id:
                raise LocationCatalogError(f"Duplicate location id: {entry.location_id}")
            if not entry.schema_type_names:
                raise LocationCatalogError(
                    f"Location {entry.location_id} must declare at least one schema type name."
                )
            by_id[entry.location_id] = entry
            ordered.append(entry)
        self._entries = tuple(ordered)
        self._by_id = by_id

    def location_ids(self) -> tuple[str, ...]:
        return tuple(entry.location_id for entry in self._entries)

    def get(self, location_id: str) -> LocationEntry | None:
        return self._by_id.get(location_id)

    def locations_for_param(self, param: str) -> tuple[str, ...]:
        """Return ids of locations produced by the given param."""
        return tuple(entry.location_id for entry in self._entries if entry.match_param == param)

    def locations_matching(self, param: str, value: str) -> tuple[str, ...]:
        """Return ids of locations whose (param, value) pair equals the given pair."""
        return tuple(
            entry.location_id
            for entry in self._entries
            if entry.match_param == param and entry.match_value == value
        )

    def schema_types_for(self, location_id: str) -> tuple[str, ...]:
        entry = self.get(location_id)
        return entry.schema_type_names if entry else ()

    def interfaces_for_type(self, schema_type_name: str) -> tuple[str, ...]:
        """Return interfaces declared by every location producing the schema type."""
        interfaces: list[str] = []
        for entry in self._entries:
            if schema_type_name not in entry.schema_type_names:
                continue
            for interface_name in entry.interface_names:
                if interface_name not in interfaces:
                    interfaces.append(interface_name)
        return tuple(interfaces)

    def locations_for_type(self, schema_type_name: str) -> tuple[str, ...]:
        """Reverse lookup: locations that can produce the schema type."""
        return tuple(
            entry.location_id
            for entry in self._entries
            if schema_type_name in entry.schema_type_names
        )

    def all_schema_type_names(self) -> tuple[str, ...]:
        names: list[str] = []
        for entry in self._entries:
            for name in entry.schema_type_names:
                if name not in names:
                    names.append(name)
        return tuple(names)


def build_location_catalog(rows: Sequence[Mapping[str, Any]]) -> LocationCatalog:
    """Build a catalog from host-supplied table rows."""
    return LocationCatalog(_parse_row(row, index) for index, row in enumerate(rows))


def _parse_row(row: Mapping[str, Any], index: int) -> LocationEntry:
    if not isinstance(row, Mapping):
        raise LocationCatalogError(f"Location row {index} must be a mapping.")
    location_id = _require_string(row.get("location_id"), f"locations[{index}].location_id")
    return LocationEntry(
        location_id=location_id,
        match_param=_require_string(row.get("match_param"), f"locations[{index}].match_param"),
        match_value=_require_string(row.get("match_value"), f"locations[{index}].match_value"),
        schema_type_names=_string_tuple(
            row.get("schema_type_names"), f"locations[{index}].schema_type_names"
        ),
        interface_names=_string_tuple(
            row.get("interface_names"), f"locations[{index}].interface_names"
        ),
    )


def _require_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise LocationCatalogError(f"{field_name} must be a non-empty string.")
    return value.strip()


def _string_tuple(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Sequence):
        raise LocationCatalogError(f"{field_name} must be a list of strings.")
    names: list[str] = []
    for item in value:
        name = _require_string(item, field_name)
        if name not in names:
            names.append(name)
    return tuple(names)
