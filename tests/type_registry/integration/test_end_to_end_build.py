"""End-to-end build tests from configuration file to resolvers."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest
from field_group_schema.configuration import load_configuration
from field_group_schema.field_config import (
    ContentReference,
    FieldRow,
    InMemoryStorage,
    MalformedContentReferenceError,
)
from field_group_schema.field_type_plugins import FieldTypeRegistry, register_default_field_types
from field_group_schema.schema_registrations import BuildResult, Resolver, SchemaTypeKind
from field_group_schema.type_registry import build_schema


def _write_config(tmp_path: Path) -> Path:
    path = tmp_path / "field-groups.yaml"
    path.write_text(
        dedent(
            """
            locations:
              - location_id: page
                match_param: post_type
                match_value: page
                schema_type_names: [Page]
                interface_names: [ContentNode]
            field_groups:
              - key: group_hero
                title: Hero
                location:
                  - - param: post_type
                      operator: "=="
                      value: page
                fields:
                  - key: field_headline
                    name: headline
                    type: text
                  - key: field_slides
                    name: slides
                    type: repeater
                    sub_fields:
                      - key: field_caption
                        name: caption
                        type: text
                  - key: field_photo
                    name: photo
                    type: image
            """
        ).lstrip(),
        encoding="utf-8",
    )
    return path


def _build(tmp_path: Path, storage: InMemoryStorage | None = None) -> BuildResult:
    configuration = load_configuration(_write_config(tmp_path))
    registry = register_default_field_types(FieldTypeRegistry())
    return build_schema(
        configuration.field_groups, configuration.catalog, registry, storage=storage
    )


def _resolver(result: BuildResult, type_name: str, field_name: str) -> Resolver:
    registration = result.get_type(type_name)
    assert registration is not None
    field = registration.get_field(field_name)
    assert field is not None
    assert field.resolver is not None
    return field.resolver


def test_field_group_attaches_to_location_type(tmp_path: Path) -> None:
    result = _build(tmp_path)

    assert result.diagnostics == ()
    assert result.type_names() == ("Hero", "HeroSlides", "Hero_Fields", "Page", "WithAcfHero")
    page = result.get_type("Page")
    assert page is not None
    assert page.interfaces == ("ContentNode", "WithAcfHero")
    assert [(item.name, item.type_ref.render()) for item in page.fields] == [("hero", "Hero")]
    hero = result.get_type("Hero")
    assert hero is not None
    assert hero.kind == SchemaTypeKind.OBJECT
    assert hero.interfaces == ("Hero_Fields",)
    headline = hero.get_field("headline")
    assert headline is not None
    assert headline.type_ref.render() == "String"
    assert headline.nullable
    assert [connection.type_name for connection in result.connections] == [
        "HeroPhotoToMediaItemConnectionEdge"
    ]


def test_build_result_serializes_for_output(tmp_path: Path) -> None:
    payload = _build(tmp_path).to_dict()

    page = next(item for item in payload["types"] if item["name"] == "Page")
    assert page["fields"][0]["name"] == "hero"
    assert page["fields"][0]["type"] == "Hero"
    assert payload["connections"][0]["to_type"] == "MediaItem"
    assert payload["diagnostics"] == []


def test_resolvers_read_stored_values(tmp_path: Path) -> None:
    storage = InMemoryStorage(
        {
            ("post:5", "field_headline"): "Hello",
            ("post:5", "field_slides"): [
                {"field_caption": "One"},
                {"field_caption": 2},
                "not a row",
            ],
            ("post:5", "field_photo"): {"ID": 12},
        }
    )
    result = _build(tmp_path, storage)

    root = _resolver(result, "Page", "hero")("post:5", {}, None)
    assert root == ContentReference(kind="post", object_id="5")
    assert _resolver(result, "Hero", "headline")(root, {}, None) == "Hello"

    rows = _resolver(result, "Hero", "slides")(root, {}, None)
    assert [type(row) for row in rows] == [FieldRow, FieldRow]
    caption = _resolver(result, "HeroSlides", "caption")
    assert [caption(row, {}, None) for row in rows] == ["One", "2"]

    photo = result.connections[0]
    assert photo.resolver is not None
    assert photo.resolver(root, {}, None) == 12


def test_resolvers_return_none_for_unset_values(tmp_path: Path) -> None:
    result = _build(tmp_path, InMemoryStorage())

    headline = _resolver(result, "Hero", "headline")
    slides = _resolver(result, "Hero", "slides")

    assert headline("post:6", {}, None) is None
    assert slides({"kind": "post", "id": 6}, {}, None) is None


def test_resolvers_reject_malformed_content_references(tmp_path: Path) -> None:
    result = _build(tmp_path, InMemoryStorage())
    headline = _resolver(result, "Hero", "headline")

    with pytest.raises(MalformedContentReferenceError):
        headline("page-5", {}, None)
    with pytest.raises(MalformedContentReferenceError):
        _resolver(result, "Page", "hero")("post:0", {}, None)
