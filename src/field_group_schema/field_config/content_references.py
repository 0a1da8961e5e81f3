"""Content reference and storage accessor contracts."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

CONTENT_KINDS = frozenset({"post", "term", "user", "comment", "menu_item", "options", "block"})


class MalformedContentReferenceError(Exception):
    """Raised when a resolver receives something that does not identify a content object."""


class Absent(Enum):
    """Marker for a field with no stored value."""

    ABSENT = "absent"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent.ABSENT


@dataclass(frozen=True)
class ContentReference:
    """Identifies one content object that field values are stored against."""

    kind: str
    object_id: str

    def __str__(self) -> str:
        return f"{self.kind}:{self.object_id}"


@dataclass(frozen=True)
class FieldRow:
    """One row of a repeating field, resolved against its owning content object."""

    content_ref: ContentReference
    values: Mapping[str, Any] = field(default_factory=dict)


class StorageAccessor(Protocol):
    """Read accessor for stored field values."""

    def read(self, content_ref: ContentReference, field_key: str) -> Any:
        """Return the raw stored value, or ``ABSENT``/``None`` when nothing is stored."""


class InMemoryStorage:
    """Dict-backed storage accessor keyed by (content reference, field key)."""

    def __init__(self, values: Mapping[tuple[str, str], Any] | None = None) -> None:
        self._values: dict[tuple[str, str], Any] = {}
        for (raw_ref, field_key), value in (values or {}).items():
            self.write(parse_content_reference(raw_ref), field_key, value)

    def read(self, content_ref: ContentReference, field_key: str) -> Any:
        return self._values.get((str(content_ref), field_key), ABSENT)

    def write(self, content_ref: ContentReference, field_key: str, value: Any) -> None:
        self._values[(str(content_ref), field_key)] = value


def parse_content_reference(value: Any) -> ContentReference:
    """Normalize a resolver root into a content reference.

    Accepts a ``ContentReference``, a ``"kind:id"`` string, or a mapping with
    ``kind`` and ``id`` keys. The ``options`` kind identifies a settings page by name.
    """
    if isinstance(value, ContentReference):
        return _validated(value.kind, value.object_id, raw=value)
    if isinstance(value, str):
        kind, separator, object_id = value.partition(":")
        if not separator:
            raise MalformedContentReferenceError(
                f"Content reference must look like 'kind:id', got {value!r}."
            )
        return _validated(kind, object_id, raw=value)
    if isinstance(value, Mapping):
        return _validated(value.get("kind"), value.get("id"), raw=value)
    raise MalformedContentReferenceError(
        f"Unsupported content reference type: {type(value).__name__}."
    )


def _validated(kind: Any, object_id: Any, *, raw: Any) -> ContentReference:
    if not isinstance(kind, str) or kind.strip() not in CONTENT_KINDS:
        raise MalformedContentReferenceError(f"Unknown content kind in reference {raw!r}.")
    normalized_kind = kind.strip()
    if isinstance(object_id, bool) or object_id is None:
        raise MalformedContentReferenceError(f"Missing content id in reference {raw!r}.")
    text_id = str(object_id).strip()
    if not text_id:
        raise MalformedContentReferenceError(f"Missing content id in reference {raw!r}.")
    if normalized_kind != "options":
        if not text_id.isdigit() or int(text_id) <= 0:
            raise MalformedContentReferenceError(
                f"Content id must be a positive integer in reference {raw!r}."
            )
        text_id = str(int(text_id))
    return ContentReference(kind=normalized_kind, object_id=text_id)
