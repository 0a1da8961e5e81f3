"""Location resolution exports."""

from .rule_evaluator import (
    ResolvedLocationSet,
    resolve_all,
    resolve_location_ids,
    resolve_locations,
    resolve_locations_preview,
)

__all__ = [
    "ResolvedLocationSet",
    "resolve_all",
    "resolve_location_ids",
    "resolve_locations",
    "resolve_locations_preview",
]
