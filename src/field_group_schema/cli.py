"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from field_group_schema.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from field_group_schema.field_type_plugins import (
    FieldTypeRegistry,
    register_default_field_types,
)
from field_group_schema.location_resolution import resolve_locations_preview
from field_group_schema.schema_registrations import BuildResult
from field_group_schema.type_registry import (
    build_schema,
    describe_field_groups,
    list_registered_types,
    summarize_names,
)

_LOGGER = logging.getLogger("field_group_schema.cli")
_LOGGER.addHandler(logging.NullHandler())


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="field-group-schema")
def cli() -> None:
    """Field group schema generator."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML field group configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML field group configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="build")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON field group configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path for the JSON build result; printed to stdout when omitted",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit with status 1 when the build reports error diagnostics.",
)
@click.option("--verbose", is_flag=True, default=False, help="Log build statistics to stderr.")
def build(config_path: str, output_path: str | None, strict: bool, verbose: bool) -> None:
    """Build schema type registrations for every field group."""
    if verbose:
        _enable_verbose_logging()
    configuration = _load(config_path)
    result = _build(configuration)
    _LOGGER.debug(
        "built %d types and %d connections from %d field groups (%d diagnostics)",
        len(result.types),
        len(result.connections),
        len(configuration.field_groups),
        len(result.diagnostics),
    )
    payload = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if output_path:
        destination = Path(output_path)
        try:
            destination.write_text(payload + "\n", encoding="utf-8")
        except OSError as exc:
            raise CliError(str(exc)) from exc
        click.echo(str(destination.resolve()))
    else:
        click.echo(payload)
    _echo_diagnostics(result)
    if strict and result.has_errors:
        raise CliError("Build reported error diagnostics.")


@cli.command(name="preview-locations")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON field group configuration file",
)
@click.option(
    "--field-group",
    "field_group_key",
    required=True,
    help="Key of the field group to preview",
)
def preview_locations(config_path: str, field_group_key: str) -> None:
    """Print the schema types a field group's location rules resolve to."""
    configuration = _load(config_path)
    field_group = configuration.get_field_group(field_group_key)
    if field_group is None:
        raise CliError(f"Field group not found: {field_group_key}")
    for type_name in resolve_locations_preview(field_group, configuration.catalog):
        click.echo(type_name)


@cli.command(name="list-types")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON field group configuration file",
)
def list_types(config_path: str) -> None:
    """List the schema types a build registers."""
    result = _build(_load(config_path))
    for type_name in list_registered_types(result):
        click.echo(type_name)


@cli.command(name="describe")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON field group configuration file",
)
def describe(config_path: str) -> None:
    """Show the type, interfaces and locations of every field group."""
    configuration = _load(config_path)
    for summary in describe_field_groups(configuration.field_groups, configuration.catalog):
        status = "" if summary.show_in_schema else " (hidden)"
        click.echo(f"{summary.field_group_key}: {summary.title}{status}")
        click.echo(f"  type: {summary.type_name}")
        click.echo(f"  interfaces: {summarize_names(summary.interfaces)}")
        click.echo(f"  locations: {summarize_names(summary.location_types)}")


@cli.command(name="field-type-settings")
@click.option("--field-type", "field_type", required=True, help="Field type key, e.g. text")
def field_type_settings(field_type: str) -> None:
    """Print the admin settings a field type exposes."""
    registry = register_default_field_types(FieldTypeRegistry())
    for descriptor in registry.admin_setting_descriptors_for(field_type):
        click.echo(f"{descriptor.name} ({descriptor.kind}): {descriptor.label}")


def _load(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc


def _build(configuration: Configuration) -> BuildResult:
    registry = register_default_field_types(FieldTypeRegistry())
    return build_schema(configuration.field_groups, configuration.catalog, registry)


def _echo_diagnostics(result: BuildResult) -> None:
    for diagnostic in result.diagnostics:
        subject = f" [{diagnostic.field_group_key}]" if diagnostic.field_group_key else ""
        click.echo(
            f"{diagnostic.severity.value}: {diagnostic.kind.value}{subject}: {diagnostic.message}",
            err=True,
        )


def _enable_verbose_logging() -> None:
    if any(isinstance(handler, logging.StreamHandler) for handler in _LOGGER.handlers):
        _LOGGER.setLevel(logging.DEBUG)
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    _LOGGER.addHandler(handler)
    _LOGGER.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
