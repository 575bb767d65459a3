"""Command line interface entry point."""

from __future__ import annotations

import sys

import click

from oas_type_model.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from oas_type_model.model_summary import (
    SummaryWriteError,
    build_model_summary,
    write_model_summary,
)
from oas_type_model.naming import NamingError
from oas_type_model.property_resolution import CompositionCycleError, resolve_catalog_models
from oas_type_model.schema_catalog import (
    SchemaCatalog,
    SpecificationValidationError,
    build_schema_catalog,
)
from oas_type_model.schema_graph import (
    SchemaDocumentError,
    UnresolvedReferenceError,
    load_schema_document,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="oas-type-model")
def cli() -> None:
    """OpenAPI schema resolution and naming utility."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="validate")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file",
)
def validate(config_path: str) -> None:
    """Validate the API specification and report how many schemas were catalogued."""
    _, catalog = _load_catalog(config_path)
    click.echo(f"valid: {len(catalog)} schemas, {len(catalog.object_schemas())} models")


@cli.command(name="describe")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the model summary file to write",
)
def describe(config_path: str, output_path: str) -> None:
    """Resolve every model and write its flattened properties as a summary."""
    configuration, catalog = _load_catalog(config_path)
    try:
        models = resolve_catalog_models(catalog, configuration.resolution.settings)
        destination = write_model_summary(
            build_model_summary(models), output_path, configuration.output.format
        )
    except (NamingError, CompositionCycleError, SummaryWriteError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(destination))


def _load_catalog(config_path: str) -> tuple[Configuration, SchemaCatalog]:
    try:
        configuration = load_configuration(config_path)
        document = load_schema_document(configuration.api.text)
        catalog = build_schema_catalog(document)
    except (
        ConfigurationError,
        SchemaDocumentError,
        SpecificationValidationError,
        UnresolvedReferenceError,
        NamingError,
        OSError,
    ) as exc:
        raise CliError(str(exc)) from exc
    return configuration, catalog


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
