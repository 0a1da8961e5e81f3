"""Condition rule exports."""

from .condition_tree import (
    WILDCARD_VALUE,
    Condition,
    ConditionGroup,
    ConditionOperator,
    ConditionTree,
    ConditionTreeError,
    parse_condition_tree,
)

__all__ = [
    "WILDCARD_VALUE",
    "Condition",
    "ConditionGroup",
    "ConditionOperator",
    "ConditionTree",
    "ConditionTreeError",
    "parse_condition_tree",
]
