"""Location catalog entities."""

from __future__ import annotations

from dataclasses import dataclass


class LocationCatalogError(Exception):
    """Raised when the location catalog table is invalid."""


@dataclass(frozen=True)
class LocationEntry:
    """One known location and the schema types it corresponds to."""

    location_id: str
    match_param: str
    match_value: str
    schema_type_names: tuple[str, ...]
    interface_names: tuple[str, ...] = ()
