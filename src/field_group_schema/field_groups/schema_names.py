"""Schema identifier formatting."""

from __future__ import annotations

import re

RESERVED_TYPE_NAMES = frozenset(
    {"Query", "Mutation", "Subscription", "RootQuery", "RootMutation", "RootSubscription"}
)

_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")
_WORD_SPLIT_KEEP_UNDERSCORE = re.compile(r"[^A-Za-z0-9_]+")
_VALID_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def format_type_name(raw: str) -> str:
    """Return a PascalCase schema type name, or "" when nothing valid remains."""
    words = _words(raw, keep_underscores=False)
    return _upper_first(_strip_leading_digits("".join(_upper_first(word) for word in words)))


def format_field_name(raw: str, *, allow_underscores: bool = True) -> str:
    """Return a camelCase schema field name, or "" when nothing valid remains."""
    words = _words(raw, keep_underscores=allow_underscores)
    if not words:
        return ""
    name = _strip_leading_digits("".join(_upper_first(word) for word in words))
    return _lower_first(name)


def is_valid_schema_name(name: str) -> bool:
    return bool(_VALID_NAME.match(name))


def compose_type_name(*parts: str) -> str:
    """Join parts into one PascalCase type name."""
    return "".join(_upper_first(format_type_name(part)) for part in parts if part)


def _words(raw: str, *, keep_underscores: bool) -> list[str]:
    splitter = _WORD_SPLIT_KEEP_UNDERSCORE if keep_underscores else _WORD_SPLIT
    return [word for word in splitter.split(raw.strip()) if word]


def _strip_leading_digits(name: str) -> str:
    return name.lstrip("0123456789_")


def _upper_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def _lower_first(word: str) -> str:
    # keep acronyms like "URL" readable as "url" rather than "uRL"
    match = re.match(r"^[A-Z]+(?=[A-Z][a-z]|$)", word)
    if match and len(match.group(0)) > 1:
        return match.group(0).lower() + word[match.end():]
    return word[:1].lower() + word[1:]
