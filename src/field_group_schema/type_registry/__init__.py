"""Type registry exports."""

from .field_group_listing import (
    FieldGroupSummary,
    describe_field_groups,
    list_registered_types,
    summarize_names,
)
from .type_builder import (
    FIELDS_INTERFACE_SUFFIX,
    LOCATION_INTERFACE_PREFIX,
    build_schema,
    field_group_field_name,
    field_group_interfaces,
    field_group_type_name,
)

__all__ = [
    "FIELDS_INTERFACE_SUFFIX",
    "LOCATION_INTERFACE_PREFIX",
    "FieldGroupSummary",
    "build_schema",
    "describe_field_groups",
    "field_group_field_name",
    "field_group_interfaces",
    "field_group_type_name",
    "list_registered_types",
    "summarize_names",
]
