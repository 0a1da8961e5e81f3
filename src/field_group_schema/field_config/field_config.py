"""Uniform read/resolve adapter over one field definition."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from field_group_schema.field_groups import (
    FieldDefinition,
    FieldGroup,
    format_field_name,
    format_type_name,
)

from .content_references import (
    ABSENT,
    FieldRow,
    StorageAccessor,
    parse_content_reference,
)


class FieldConfig:
    """Adapts one field definition and its owning field group for resolvers.

    ``resolve_field`` returns the stored raw value without interpreting it; an unset
    value comes back as ``ABSENT``. Only a malformed content reference raises.
    """

    def __init__(
        self,
        definition: FieldDefinition,
        field_group: FieldGroup,
        owner_type_name: str,
        storage: StorageAccessor | None = None,
    ) -> None:
        self._definition = definition
        self._field_group = field_group
        self._owner_type_name = owner_type_name
        self._storage = storage

    def get_field_key(self) -> str:
        return self._definition.key

    def get_field_name(self) -> str:
        return format_field_name(self._definition.name)

    def get_field_type_name_part(self) -> str:
        return format_type_name(self._definition.name)

    def get_owning_type_name(self) -> str:
        return self._owner_type_name

    def get_raw_settings(self) -> Mapping[str, Any]:
        return self._definition.settings

    def get_field_description(self) -> str:
        description = self._definition.settings.get("graphql_description")
        if isinstance(description, str) and description.strip():
            return description.strip()
        return f'Field added to the schema as part of the "{self._field_group.title}" Field Group'

    def resolve_field(
        self,
        content_ref: Any,
        args: Mapping[str, Any] | None = None,
        execution_context: Any = None,
    ) -> Any:
        """Return the raw stored value for this field on the given content object."""
        del args, execution_context
        if isinstance(content_ref, FieldRow):
            return content_ref.values.get(self._definition.key, ABSENT)
        reference = parse_content_reference(content_ref)
        if self._storage is None:
            return ABSENT
        value = self._storage.read(reference, self._definition.key)
        return ABSENT if value is None else value
