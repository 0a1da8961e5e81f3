"""Schema registration entities produced by a build pass."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .diagnostics import Diagnostic, DiagnosticSeverity

Resolver = Callable[[Any, Mapping[str, Any], Any], Any]


class TypeRefKind(str, Enum):
    """Type reference wrappers."""

    NAMED = "named"
    LIST = "list"
    NON_NULL = "non_null"


@dataclass(frozen=True)
class TypeReference:
    """Reference to a schema type, optionally wrapped as list or non-null."""

    kind: TypeRefKind
    name: str | None = None
    of_type: TypeReference | None = None

    @classmethod
    def named(cls, name: str) -> TypeReference:
        return cls(kind=TypeRefKind.NAMED, name=name)

    @classmethod
    def list_of(cls, of_type: TypeReference | str) -> TypeReference:
        inner = cls.named(of_type) if isinstance(of_type, str) else of_type
        return cls(kind=TypeRefKind.LIST, of_type=inner)

    @classmethod
    def non_null(cls, of_type: TypeReference | str) -> TypeReference:
        inner = cls.named(of_type) if isinstance(of_type, str) else of_type
        if inner.kind == TypeRefKind.NON_NULL:
            return inner
        return cls(kind=TypeRefKind.NON_NULL, of_type=inner)

    @property
    def is_non_null(self) -> bool:
        return self.kind == TypeRefKind.NON_NULL

    def render(self) -> str:
        """Render in schema definition language notation, e.g. ``[String]!``."""
        if self.kind == TypeRefKind.NAMED:
            return self.name or ""
        inner = self.of_type.render() if self.of_type else ""
        if self.kind == TypeRefKind.LIST:
            return f"[{inner}]"
        return f"{inner}!"


class SchemaTypeKind(str, Enum):
    """Kinds of emitted schema types."""

    OBJECT = "object"
    INTERFACE = "interface"


@dataclass(frozen=True)
class FieldRegistration:
    """One field on an emitted schema type."""

    name: str
    type_ref: TypeReference
    resolver: Resolver | None = field(default=None, compare=False, repr=False)
    description: str = ""
    source_field_key: str | None = None

    @property
    def nullable(self) -> bool:
        return not self.type_ref.is_non_null

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type_ref.render(),
            "description": self.description,
            "source_field_key": self.source_field_key,
        }


@dataclass(frozen=True)
class SchemaTypeRegistration:
    """An emitted schema type with its interfaces and ordered fields."""

    name: str
    kind: SchemaTypeKind = SchemaTypeKind.OBJECT
    interfaces: tuple[str, ...] = ()
    fields: tuple[FieldRegistration, ...] = ()
    field_group_keys: tuple[str, ...] = ()
    description: str = ""

    @property
    def signature(self) -> tuple[object, ...]:
        """Structural identity used to compare registrations from different field groups."""
        return (
            self.kind,
            self.name,
            self.interfaces,
            tuple((item.name, item.type_ref.render()) for item in self.fields),
        )

    def get_field(self, name: str) -> FieldRegistration | None:
        for item in self.fields:
            if item.name == name:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "interfaces": list(self.interfaces),
            "fields": [item.to_dict() for item in self.fields],
            "field_group_keys": list(self.field_group_keys),
            "description": self.description,
        }


@dataclass(frozen=True)
class ConnectionRegistration:  # pylint: disable=too-many-instance-attributes
    """A top-level connection field registered by a connection-style field type."""

    type_name: str
    from_type: str
    to_type: str
    from_field_name: str
    one_to_one: bool = False
    resolver: Resolver | None = field(default=None, compare=False, repr=False)
    description: str = ""
    field_group_keys: tuple[str, ...] = ()
    source_field_key: str | None = None

    @property
    def signature(self) -> tuple[object, ...]:
        return (self.type_name, self.from_type, self.to_type, self.from_field_name, self.one_to_one)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type_name": self.type_name,
            "from_type": self.from_type,
            "to_type": self.to_type,
            "from_field_name": self.from_field_name,
            "one_to_one": self.one_to_one,
            "description": self.description,
            "field_group_keys": list(self.field_group_keys),
            "source_field_key": self.source_field_key,
        }


@dataclass(frozen=True)
class BuildResult:
    """Output of one build pass."""

    types: tuple[SchemaTypeRegistration, ...]
    connections: tuple[ConnectionRegistration, ...]
    diagnostics: tuple[Diagnostic, ...]

    def get_type(self, name: str) -> SchemaTypeRegistration | None:
        for registration in self.types:
            if registration.name == name:
                return registration
        return None

    def type_names(self) -> tuple[str, ...]:
        return tuple(registration.name for registration in self.types)

    @property
    def has_errors(self) -> bool:
        return any(item.severity == DiagnosticSeverity.ERROR for item in self.diagnostics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "types": [registration.to_dict() for registration in self.types],
            "connections": [connection.to_dict() for connection in self.connections],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
        }
