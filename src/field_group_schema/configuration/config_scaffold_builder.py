"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "field-groups.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Field group configuration template for field-group-schema.
# Replace every <REQUIRED> placeholder before running build or preview-locations.
# Replace <OPTIONAL> placeholders only when your setup needs them.

locations:
  # One row per place in the content model that can host a field group.
  - location_id: "<REQUIRED>"
    match_param: "<REQUIRED>"   # e.g. post_type, taxonomy, user_form, options_page
    match_value: "<REQUIRED>"   # e.g. page
    schema_type_names:
      - "<REQUIRED>"            # e.g. Page
    interface_names:
      - "<OPTIONAL>"            # e.g. ContentNode

field_groups:
  - key: "<REQUIRED>"
    title: "<REQUIRED>"
    graphql_field_name: "<OPTIONAL>"
    show_in_graphql: true
    # Set manual_types to true to use graphql_types instead of the location rules.
    manual_types: false
    graphql_types:
      - "<OPTIONAL>"
    # A list of rule groups; a location matches when every rule in any group matches.
    location:
      - - param: "<REQUIRED>"
          operator: "=="        # "==" or "!="
          value: "<REQUIRED>"
    fields:
      - key: "<REQUIRED>"
        name: "<REQUIRED>"
        type: "<REQUIRED>"      # e.g. text, number, group, repeater, user, image
        graphql_non_null: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
