"""Condition tree entities for field group location rules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

WILDCARD_VALUE = "all"


class ConditionTreeError(Exception):
    """Raised when a condition tree cannot be constructed from raw rules."""


class ConditionOperator(str, Enum):
    """Supported comparison operators."""

    EQUALS = "=="
    NOT_EQUALS = "!="


@dataclass(frozen=True)
class Condition:
    """One (param, operator, value) location rule."""

    param: str
    operator: ConditionOperator
    value: str

    @property
    def is_negated(self) -> bool:
        """Return True when the condition excludes matching locations."""
        return self.operator == ConditionOperator.NOT_EQUALS

    @property
    def is_wildcard(self) -> bool:
        """Return True when the condition names every location of its param."""
        return self.value == WILDCARD_VALUE or self.param == WILDCARD_VALUE


@dataclass(frozen=True)
class ConditionGroup:
    """Conditions that must all hold for the group to match."""

    conditions: tuple[Condition, ...]


@dataclass(frozen=True)
class ConditionTree:
    """Ordered rule groups; a location matches when any group fully matches.

    An empty tree matches nothing.
    """

    groups: tuple[ConditionGroup, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not any(group.conditions for group in self.groups)


def parse_condition_tree(raw_groups: Any) -> ConditionTree:
    """Build a condition tree from nested sequences of rule mappings."""
    if raw_groups is None:
        return ConditionTree()
    if isinstance(raw_groups, str | bytes) or not isinstance(raw_groups, Sequence):
        raise ConditionTreeError("Location rules must be a list of rule groups.")

    groups: list[ConditionGroup] = []
    for group_index, raw_group in enumerate(raw_groups):
        if isinstance(raw_group, str | bytes) or not isinstance(raw_group, Sequence):
            raise ConditionTreeError(f"Rule group {group_index} must be a list of rules.")
        conditions = tuple(
            _parse_condition(raw_rule, group_index=group_index, rule_index=rule_index)
            for rule_index, raw_rule in enumerate(raw_group)
        )
        groups.append(ConditionGroup(conditions=conditions))
    return ConditionTree(groups=tuple(groups))


def _parse_condition(raw_rule: Any, *, group_index: int, rule_index: int) -> Condition:
    label = f"Rule {group_index}.{rule_index}"
    if not isinstance(raw_rule, Mapping):
        raise ConditionTreeError(f"{label} must be a mapping.")
    param = raw_rule.get("param")
    if not isinstance(param, str) or not param.strip():
        raise ConditionTreeError(f"{label} requires a non-empty param.")
    raw_operator = raw_rule.get("operator", ConditionOperator.EQUALS.value)
    try:
        operator = ConditionOperator(raw_operator)
    except ValueError as exc:
        raise ConditionTreeError(f"{label} has unsupported operator: {raw_operator!r}") from exc
    value = raw_rule.get("value")
    if value is None:
        raise ConditionTreeError(f"{label} requires a value.")
    return Condition(param=param.strip(), operator=operator, value=str(value).strip())
