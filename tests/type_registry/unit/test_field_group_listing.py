"""Field group listing tests."""

from __future__ import annotations

import pytest
from field_group_schema.condition_rules import parse_condition_tree
from field_group_schema.field_groups import FieldDefinition, FieldGroup
from field_group_schema.field_type_plugins import FieldTypeRegistry, register_default_field_types
from field_group_schema.location_catalog import LocationCatalog, build_location_catalog
from field_group_schema.type_registry import (
    build_schema,
    describe_field_groups,
    list_registered_types,
    summarize_names,
)


def _catalog() -> LocationCatalog:
    return build_location_catalog(
        [
            {
                "location_id": "page",
                "match_param": "post_type",
                "match_value": "page",
                "schema_type_names": ["Page"],
            },
            {
                "location_id": "post",
                "match_param": "post_type",
                "match_value": "post",
                "schema_type_names": ["Post"],
            },
        ]
    )


def _field_groups() -> list[FieldGroup]:
    headline = FieldDefinition(key="field_headline", name="headline", field_type="text")
    return [
        FieldGroup(
            key="group_seo",
            title="SEO settings",
            fields=(headline,),
            location=parse_condition_tree([[{"param": "post_type", "value": "all"}]]),
        ),
        FieldGroup(
            key="group_hero",
            title="Hero",
            fields=(headline,),
            location=parse_condition_tree([[{"param": "post_type", "value": "page"}]]),
            show_in_schema=False,
        ),
    ]


def test_describe_field_groups_lists_names_and_locations_in_key_order() -> None:
    summaries = describe_field_groups(_field_groups(), _catalog())

    assert [summary.field_group_key for summary in summaries] == ["group_hero", "group_seo"]
    hero, seo = summaries
    assert hero.type_name == "Hero"
    assert hero.location_types == ()
    assert hero.show_in_schema is False
    assert seo.type_name == "SEOSettings"
    assert seo.interfaces == ("SEOSettings_Fields",)
    assert seo.location_types == ("Page", "Post")


def test_list_registered_types_returns_sorted_names() -> None:
    result = build_schema(
        _field_groups(), _catalog(), register_default_field_types(FieldTypeRegistry())
    )

    assert list_registered_types(result) == (
        "Page",
        "Post",
        "SEOSettings",
        "SEOSettings_Fields",
        "WithAcfSEOSettings",
    )


@pytest.mark.parametrize(
    ("names", "limit", "expected"),
    [
        ((), 5, ""),
        (("Page",), 5, "Page"),
        (("Page", "Post", "User"), 2, "Page, Post, +1 more"),
        (("A", "B", "C", "D", "E", "F", "G"), 5, "A, B, C, D, E, +2 more"),
    ],
)
def test_summarize_names(names: tuple[str, ...], limit: int, expected: str) -> None:
    assert summarize_names(names, limit) == expected


def test_summarize_names_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError, match="limit"):
        summarize_names(("Page",), 0)
