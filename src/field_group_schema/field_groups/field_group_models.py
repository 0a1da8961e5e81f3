"""Field group and field definition entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from field_group_schema.condition_rules import ConditionTree

from .schema_names import format_field_name


class FieldGroupError(Exception):
    """Raised when a field group or field definition is structurally invalid."""


@dataclass(frozen=True)
class FieldDefinition:  # pylint: disable=too-many-instance-attributes
    """One administrator-configured field inside a field group.

    Sub-fields form a tree owned top-down by their parent. Sub-field keys must be
    unique among siblings and must not repeat the key of an ancestor.
    """

    key: str
    name: str
    field_type: str
    label: str = ""
    settings: Mapping[str, object] = field(default_factory=dict)
    non_null: bool = False
    show_in_schema: bool = True
    sub_fields: tuple[FieldDefinition, ...] = ()

    def __post_init__(self) -> None:
        if not self.key.strip():
            raise FieldGroupError("Field definitions require a non-empty key.")
        if not self.field_type.strip():
            raise FieldGroupError(f"Field {self.key} requires a field type.")
        if not format_field_name(self.name):
            raise FieldGroupError(
                f"Field {self.key} name {self.name!r} does not produce a valid schema field name."
            )
        object.__setattr__(self, "settings", MappingProxyType(dict(self.settings)))
        object.__setattr__(self, "sub_fields", tuple(self.sub_fields))
        _reject_repeated_sub_field_keys(self, ancestors=())

    def iter_descendants(self) -> Iterator[FieldDefinition]:
        for sub_field in self.sub_fields:
            yield sub_field
            yield from sub_field.iter_descendants()


@dataclass(frozen=True)
class FieldGroup:  # pylint: disable=too-many-instance-attributes
    """Administrator-defined bundle of fields plus attachment rules."""

    key: str
    title: str
    fields: tuple[FieldDefinition, ...] = ()
    location: ConditionTree = field(default_factory=ConditionTree)
    manual_types: bool = False
    graphql_types: tuple[str, ...] = ()
    show_in_schema: bool = True
    graphql_field_name: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.key.strip():
            raise FieldGroupError("Field groups require a non-empty key.")
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "graphql_types", tuple(self.graphql_types))
        seen: set[str] = set()
        for definition in self.fields:
            for key in (definition.key, *(item.key for item in definition.iter_descendants())):
                if key in seen:
                    raise FieldGroupError(
                        f"Field group {self.key} declares field key {key} twice."
                    )
                seen.add(key)

    @property
    def schema_name_source(self) -> str:
        """Return the raw text the group's schema names are derived from."""
        if self.graphql_field_name and self.graphql_field_name.strip():
            return self.graphql_field_name
        return self.title


def _reject_repeated_sub_field_keys(
    definition: FieldDefinition, *, ancestors: tuple[str, ...]
) -> None:
    lineage = (*ancestors, definition.key)
    sibling_keys: set[str] = set()
    for sub_field in definition.sub_fields:
        if sub_field.key in sibling_keys:
            raise FieldGroupError(
                f"Field {definition.key} declares sub-field key {sub_field.key} twice."
            )
        sibling_keys.add(sub_field.key)
        if sub_field.key in lineage:
            raise FieldGroupError(
                f"Field {sub_field.key} cannot be nested inside its own ancestor chain: "
                + " > ".join(lineage)
            )
        _reject_repeated_sub_field_keys(sub_field, ancestors=lineage)
