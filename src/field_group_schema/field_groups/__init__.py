"""Field group domain exports."""

from .field_group_models import FieldDefinition, FieldGroup, FieldGroupError
from .schema_names import (
    RESERVED_TYPE_NAMES,
    compose_type_name,
    format_field_name,
    format_type_name,
    is_valid_schema_name,
)

__all__ = [
    "FieldDefinition",
    "FieldGroup",
    "FieldGroupError",
    "RESERVED_TYPE_NAMES",
    "compose_type_name",
    "format_field_name",
    "format_type_name",
    "is_valid_schema_name",
]
