"""Boundary tests for the schema build core dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_build_core_does_not_import_configuration_or_cli() -> None:
    package_dir = _project_root() / "src" / "field_group_schema"
    core_packages = (
        "condition_rules",
        "location_catalog",
        "location_resolution",
        "field_groups",
        "field_config",
        "field_type_plugins",
        "schema_registrations",
        "type_registry",
    )
    forbidden_import_fragments = (
        "field_group_schema.configuration",
        "field_group_schema.cli",
        "import yaml",
        "import click",
    )

    for package in core_packages:
        for module_path in sorted((package_dir / package).glob("*.py")):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert fragment not in text, (
                    f"Forbidden core dependency in {module_path}: {fragment}"
                )


def test_registration_models_do_not_depend_on_the_builder() -> None:
    models_dir = _project_root() / "src" / "field_group_schema" / "schema_registrations"

    for module_path in sorted(models_dir.glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        assert "field_group_schema.type_registry" not in text
        assert "field_group_schema.field_type_plugins" not in text
