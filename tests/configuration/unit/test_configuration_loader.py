"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from field_group_schema.condition_rules import ConditionOperator
from field_group_schema.configuration.loader import ConfigurationError, load_configuration


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def _base_config() -> dict[str, Any]:
    return {
        "locations": [
            {
                "location_id": "page",
                "match_param": "post_type",
                "match_value": "page",
                "schema_type_names": ["Page"],
                "interface_names": ["ContentNode"],
            }
        ],
        "field_groups": [
            {
                "key": "group_hero",
                "title": "Hero",
                "location": [[{"param": "post_type", "operator": "==", "value": "page"}]],
                "fields": [{"key": "field_headline", "name": "headline", "type": "text"}],
            }
        ],
    }


def _write_config(tmp_path: Path, config: dict[str, Any]) -> Path:
    return _write_file(tmp_path / "config.json", json.dumps(config))


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "field-groups.yaml",
        """
locations:
  - location_id: page
    match_param: post_type
    match_value: page
    schema_type_names: Page
field_groups:
  - key: group_hero
    title: Hero
    location:
      - - param: post_type
          value: page
        - param: page_template
          operator: "!="
          value: landing
    fields:
      - key: field_headline
        name: headline
        type: text
        graphql_non_null: true
        graphql_description: Main heading
      - key: field_cta
        name: cta
        type: group
        sub_fields:
          - key: field_url
            name: url
            type: url
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.catalog.location_ids() == ("page",)
    assert configuration.catalog.schema_types_for("page") == ("Page",)
    field_group = configuration.get_field_group("group_hero")
    assert field_group is not None
    assert field_group.show_in_schema is True
    assert field_group.manual_types is False
    assert field_group.graphql_types == ()
    assert field_group.graphql_field_name is None
    conditions = field_group.location.groups[0].conditions
    assert [condition.operator for condition in conditions] == [
        ConditionOperator.EQUALS,
        ConditionOperator.NOT_EQUALS,
    ]
    headline, cta = field_group.fields
    assert headline.non_null is True
    assert headline.settings["graphql_description"] == "Main heading"
    assert [field.key for field in cta.sub_fields] == ["field_url"]
    assert configuration.get_field_group("missing") is None


def test_loads_manual_types_with_legacy_alias(tmp_path: Path) -> None:
    config = _base_config()
    config["field_groups"][0].update(
        {
            "map_graphql_types_from_location_rules": True,
            "graphql_types": ["Page", " ", "Post"],
            "location": "not rules",
            "show_in_graphql": "0",
        }
    )

    configuration = load_configuration(_write_config(tmp_path, config))

    field_group = configuration.field_groups[0]
    assert field_group.manual_types is True
    assert field_group.graphql_types == ("Page", "Post")
    assert field_group.location.is_empty
    assert field_group.show_in_schema is False


def test_explicit_settings_take_precedence_over_inline_settings(tmp_path: Path) -> None:
    config = _base_config()
    config["field_groups"][0]["fields"][0].update(
        {"graphql_resolve_type": "string", "settings": {"graphql_resolve_type": "list:int"}}
    )

    configuration = load_configuration(_write_config(tmp_path, config))

    settings = configuration.field_groups[0].fields[0].settings
    assert settings["graphql_resolve_type"] == "list:int"
    assert "settings" not in settings


def test_field_groups_section_is_optional(tmp_path: Path) -> None:
    config = _base_config()
    del config["field_groups"]

    configuration = load_configuration(_write_config(tmp_path, config))

    assert configuration.field_groups == ()


def test_errors_when_configuration_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_configuration(tmp_path / "missing.yaml")


def test_errors_when_configuration_root_is_not_mapping(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "- just\n- a list\n")

    with pytest.raises(ConfigurationError, match="Configuration root must be a mapping"):
        load_configuration(config_path)


def test_errors_when_yaml_is_invalid(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "locations: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Failed to parse configuration file"):
        load_configuration(config_path)


def test_errors_when_locations_missing(tmp_path: Path) -> None:
    config = _base_config()
    del config["locations"]

    with pytest.raises(ConfigurationError, match="'locations' must be a list"):
        load_configuration(_write_config(tmp_path, config))


def test_errors_when_location_row_is_invalid(tmp_path: Path) -> None:
    config = _base_config()
    config["locations"][0]["match_param"] = " "

    with pytest.raises(ConfigurationError, match=r"locations\[0\].match_param"):
        load_configuration(_write_config(tmp_path, config))


@pytest.mark.parametrize(
    ("field_group_update", "message"),
    [
        ({"key": ""}, r"field_groups\[0\].key must not be empty"),
        ({"title": 7}, r"field_groups\[0\].title must be a string"),
        ({"show_in_graphql": "maybe"}, r"field_groups\[0\].show_in_graphql must be a boolean"),
        ({"graphql_types": [1]}, "graphql_types entries must be strings"),
        ({"location": [[{"param": "post_type", "operator": "<>", "value": "x"}]]}, "operator"),
        ({"fields": [{"key": "field_a", "name": "a"}]}, r"fields\[0\].type must be a string"),
    ],
)
def test_errors_when_field_group_invalid(
    tmp_path: Path, field_group_update: dict[str, Any], message: str
) -> None:
    config = _base_config()
    config["field_groups"][0].update(field_group_update)

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(_write_config(tmp_path, config))


def test_errors_when_field_group_key_is_duplicated(tmp_path: Path) -> None:
    config = _base_config()
    config["field_groups"].append(dict(config["field_groups"][0], title="Other"))

    with pytest.raises(ConfigurationError, match="Duplicate field group key: group_hero"):
        load_configuration(_write_config(tmp_path, config))


def test_errors_when_field_key_is_duplicated(tmp_path: Path) -> None:
    config = _base_config()
    fields = config["field_groups"][0]["fields"]
    fields.append(dict(fields[0], name="other"))

    with pytest.raises(ConfigurationError, match=r"field_groups\[0\]"):
        load_configuration(_write_config(tmp_path, config))


def test_errors_when_nested_field_key_repeats_a_top_level_key(tmp_path: Path) -> None:
    config = _base_config()
    config["field_groups"][0]["fields"].append(
        {
            "key": "field_cta",
            "name": "cta",
            "type": "group",
            "sub_fields": [{"key": "field_headline", "name": "label", "type": "text"}],
        }
    )

    with pytest.raises(ConfigurationError, match="field_headline twice"):
        load_configuration(_write_config(tmp_path, config))


def test_errors_when_field_name_is_not_a_valid_schema_name(tmp_path: Path) -> None:
    config = _base_config()
    config["field_groups"][0]["fields"][0]["name"] = "???"

    with pytest.raises(ConfigurationError, match=r"fields\[0\]: .*valid schema field name"):
        load_configuration(_write_config(tmp_path, config))
