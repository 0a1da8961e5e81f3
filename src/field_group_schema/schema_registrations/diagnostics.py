"""Build diagnostics reported as data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticSeverity(str, Enum):
    """Diagnostic severities."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticKind(str, Enum):
    """Problems a build pass can report without aborting."""

    INVALID_TYPE_NAME = "InvalidTypeName"
    TYPE_NAME_CONFLICT = "TypeNameConflict"
    FIELD_NAME_CONFLICT = "FieldNameConflict"
    UNSUPPORTED_FIELD_TYPE = "UnsupportedFieldType"
    DUPLICATE_REGISTRATION = "DuplicateRegistration"
    EMPTY_LOCATION_SET = "EmptyLocationSet"
    EMPTY_FIELD_SET = "EmptyFieldSet"


@dataclass(frozen=True)
class Diagnostic:
    """One reportable build event."""

    severity: DiagnosticSeverity
    kind: DiagnosticKind
    message: str
    field_group_key: str | None = None
    field_key: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "severity": self.severity.value,
            "kind": self.kind.value,
            "message": self.message,
            "field_group_key": self.field_group_key,
            "field_key": self.field_key,
        }
