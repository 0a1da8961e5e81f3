"""Field config exports."""

from .content_references import (
    ABSENT,
    Absent,
    ContentReference,
    FieldRow,
    InMemoryStorage,
    MalformedContentReferenceError,
    StorageAccessor,
    parse_content_reference,
)
from .field_config import FieldConfig

__all__ = [
    "ABSENT",
    "Absent",
    "ContentReference",
    "FieldConfig",
    "FieldRow",
    "InMemoryStorage",
    "MalformedContentReferenceError",
    "StorageAccessor",
    "parse_content_reference",
]
