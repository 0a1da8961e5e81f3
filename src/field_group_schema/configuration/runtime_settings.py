"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from field_group_schema.field_groups import FieldGroup
from field_group_schema.location_catalog import LocationCatalog


@dataclass(frozen=True)
class Configuration:
    """Host startup inputs: the location catalog and the field groups."""

    path: Path
    catalog: LocationCatalog
    field_groups: tuple[FieldGroup, ...]

    def get_field_group(self, key: str) -> FieldGroup | None:
        for field_group in self.field_groups:
            if field_group.key == key:
                return field_group
        return None
