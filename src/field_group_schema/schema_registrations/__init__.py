"""Schema registration exports."""

from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticSeverity
from .registry_models import (
    BuildResult,
    ConnectionRegistration,
    FieldRegistration,
    Resolver,
    SchemaTypeKind,
    SchemaTypeRegistration,
    TypeReference,
    TypeRefKind,
)

__all__ = [
    "BuildResult",
    "ConnectionRegistration",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSeverity",
    "FieldRegistration",
    "Resolver",
    "SchemaTypeKind",
    "SchemaTypeRegistration",
    "TypeReference",
    "TypeRefKind",
]
