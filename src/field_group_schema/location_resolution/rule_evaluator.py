"""Location rule resolution service."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from field_group_schema.condition_rules import (
    WILDCARD_VALUE,
    Condition,
    ConditionGroup,
    ConditionTree,
)
from field_group_schema.field_groups import FieldGroup
from field_group_schema.location_catalog import LocationCatalog

ResolvedLocationSet = Mapping[str, tuple[str, ...]]


def resolve_locations(field_group: FieldGroup, catalog: LocationCatalog) -> tuple[str, ...]:
    """Return the ordered, duplicate-free schema type names a field group attaches to.

    Hidden field groups and field groups without fields never attach anywhere.
    """
    if not field_group.show_in_schema or not field_group.fields:
        return ()
    return resolve_locations_preview(field_group, catalog)


def resolve_locations_preview(
    field_group: FieldGroup, catalog: LocationCatalog
) -> tuple[str, ...]:
    """Resolve target types for an unsaved field group, ignoring visibility and fields."""
    if field_group.manual_types:
        return _unique(name.strip() for name in field_group.graphql_types if name.strip())
    location_ids = resolve_location_ids(field_group.location, catalog)
    return _unique(
        type_name
        for location_id in location_ids
        for type_name in catalog.schema_types_for(location_id)
    )


def resolve_all(
    field_groups: Sequence[FieldGroup], catalog: LocationCatalog
) -> dict[str, tuple[str, ...]]:
    """Resolve every field group, keyed by field group key in ascending order."""
    return {
        field_group.key: resolve_locations(field_group, catalog)
        for field_group in sorted(field_groups, key=lambda group: group.key)
    }


def resolve_location_ids(tree: ConditionTree, catalog: LocationCatalog) -> tuple[str, ...]:
    """Return catalog location ids matched by any fully matching rule group."""
    matched: list[str] = []
    for group in tree.groups:
        for location_id in _evaluate_group(group, catalog):
            if location_id not in matched:
                matched.append(location_id)
    return tuple(matched)


def _evaluate_group(group: ConditionGroup, catalog: LocationCatalog) -> tuple[str, ...]:
    if not group.conditions:
        return ()
    positives = [condition for condition in group.conditions if not condition.is_negated]
    negatives = [condition for condition in group.conditions if condition.is_negated]

    if positives:
        candidates = _intersect(_positive_matches(condition, catalog) for condition in positives)
    else:
        candidates = _intersect(_param_domain(condition, catalog) for condition in negatives)

    for condition in negatives:
        excluded = set(_positive_matches(condition, catalog))
        candidates = tuple(location_id for location_id in candidates if location_id not in excluded)
    return candidates


def _positive_matches(condition: Condition, catalog: LocationCatalog) -> tuple[str, ...]:
    if condition.param == WILDCARD_VALUE:
        return catalog.location_ids()
    if condition.value == WILDCARD_VALUE:
        return catalog.locations_for_param(condition.param)
    return catalog.locations_matching(condition.param, condition.value)


def _param_domain(condition: Condition, catalog: LocationCatalog) -> tuple[str, ...]:
    if condition.param == WILDCARD_VALUE:
        return catalog.location_ids()
    return catalog.locations_for_param(condition.param)


def _intersect(location_sets: Iterable[tuple[str, ...]]) -> tuple[str, ...]:
    result: tuple[str, ...] | None = None
    for location_set in location_sets:
        if result is None:
            result = location_set
            continue
        members = set(location_set)
        result = tuple(location_id for location_id in result if location_id in members)
    return result or ()


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    seen: list[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)
