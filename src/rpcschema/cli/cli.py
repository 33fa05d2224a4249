"""Typer CLI entrypoint for rpcschema."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rpcschema.config import ConfigError, RpcSchemaConfig, load_config
from rpcschema.schema import (
    SchemaCatalog,
    SchemaLoadError,
    SchemaValidator,
    ValidationResult,
    load_catalog,
    to_wire,
)

app = typer.Typer(help="Validate values against an RPC type schema.")
_CONSOLE = Console()
_LOGGING_CONFIGURED = False

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_USAGE = 2

SchemaOption = Annotated[
    Path | None,
    typer.Option(
        "--schema",
        file_okay=True,
        dir_okay=False,
        help="Path to schema JSON/YAML document.",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        file_okay=True,
        dir_okay=False,
        help="Path to rpcschema config YAML/JSON file.",
    ),
]


def _configure_logging() -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


def _default_config_file() -> Path:
    """Return default config path for the current directory.

    Returns:
        `rpcschema.yaml` when present, else `rpcschema.json` when present,
        else the YAML path.
    """
    yaml_path = Path.cwd() / "rpcschema.yaml"
    json_path = Path.cwd() / "rpcschema.json"
    if not yaml_path.exists() and json_path.exists():
        return json_path
    return yaml_path


def _fail_usage(message: str) -> typer.Exit:
    _CONSOLE.print(f"[bold red]{escape(message)}[/bold red]")
    return typer.Exit(code=EXIT_USAGE)


def _load_config(config_file: Path | None) -> tuple[RpcSchemaConfig, Path]:
    effective = config_file or _default_config_file()
    try:
        return load_config(effective), effective.parent
    except ConfigError as exc:
        raise _fail_usage(f"Config at {effective} is invalid: {exc}") from exc


def _build_validator(
    schema_file: Path | None, config_file: Path | None
) -> SchemaValidator:
    """Resolve schema/config and construct a validator.

    Args:
        schema_file: Explicit schema path, overriding config.
        config_file: Optional config path override.

    Returns:
        Configured validator.

    Raises:
        Exit: With usage code when no schema is configured or loading fails.
    """
    config, base_dir = _load_config(config_file)
    effective_schema = schema_file or config.resolve_schema_path(base_dir)
    if effective_schema is None:
        raise _fail_usage("No schema configured; pass --schema or set schema_path.")
    try:
        catalog = load_catalog(effective_schema)
    except SchemaLoadError as exc:
        raise _fail_usage(f"Failed to load schema: {exc}") from exc
    return SchemaValidator(
        catalog,
        max_depth=config.validator.max_depth,
        log_failures=config.validator.log_failures,
    )


def _parse_json(text: str, label: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise _fail_usage(f"{label} is not valid JSON: {exc}") from exc


def _parse_descriptor_arg(text: str) -> object:
    """Accept JSON descriptors (`["Q"]`) and bare names (`SHHFilter`)."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _render_result(result: ValidationResult, subject: str) -> int:
    if result.valid:
        _CONSOLE.print(
            Panel(Text(subject), title="Valid", border_style="green", expand=True)
        )
        return EXIT_VALID
    failure = result.failure
    body = subject
    if failure is not None:
        body = (
            f"{subject}\n\n"
            f"Code: {failure.code.value}\n"
            f"At: {failure.location()}\n"
            f"Reason: {failure.message}"
        )
    _CONSOLE.print(
        Panel(Text(body), title="Invalid", border_style="bold red", expand=True)
    )
    return EXIT_INVALID


@app.command("validate")
def validate_command(
    value: Annotated[str, typer.Argument(help="Value to check, as JSON.")],
    descriptor: Annotated[
        str, typer.Argument(help="Type descriptor: JSON or a bare type name.")
    ],
    schema_file: SchemaOption = None,
    config_file: ConfigOption = None,
) -> None:
    """Validate one JSON value against a type descriptor.

    Args:
        value: JSON-encoded value.
        descriptor: Descriptor such as `Q`, `D32|Transaction`, or `["Q"]`.
        schema_file: Optional schema path override.
        config_file: Optional config path override.

    Raises:
        Exit: 0 when valid, 1 when invalid, 2 on usage errors.
    """
    _configure_logging()
    validator = _build_validator(schema_file, config_file)
    parsed_value = _parse_json(value, "VALUE")
    parsed_descriptor = _parse_descriptor_arg(descriptor)
    result = validator.validate(parsed_value, parsed_descriptor)
    raise typer.Exit(code=_render_result(result, f"{value} : {descriptor}"))


@app.command("call")
def call_command(
    method: Annotated[str, typer.Argument(help="RPC method name.")],
    params: Annotated[str, typer.Argument(help="Params array, as JSON.")] = "[]",
    schema_file: SchemaOption = None,
    config_file: ConfigOption = None,
) -> None:
    """Validate a params array against a method signature.

    Args:
        method: RPC method name, e.g. `eth_getBalance`.
        params: JSON-encoded positional params.
        schema_file: Optional schema path override.
        config_file: Optional config path override.

    Raises:
        Exit: 0 when valid, 1 when invalid, 2 on usage errors.
    """
    _configure_logging()
    validator = _build_validator(schema_file, config_file)
    parsed_params = _parse_json(params, "PARAMS")
    if not isinstance(parsed_params, list):
        raise _fail_usage("PARAMS must be a JSON array.")
    result = validator.validate_params(method, parsed_params)
    raise typer.Exit(code=_render_result(result, f"{method}({params})"))


def _types_tables(catalog: SchemaCatalog) -> list[Table]:
    leaves = Table(title="Leaf Types", show_header=True, header_style="bold cyan")
    leaves.add_column("Kind", style="bold")
    leaves.add_column("Values")
    leaves.add_row("primitives", ", ".join(sorted(catalog.primitives)) or "-")
    leaves.add_row("combinations", ", ".join(sorted(catalog.combinations)) or "-")
    leaves.add_row("tags", ", ".join(catalog.tags) or "-")

    objects = Table(title="Objects", show_header=True, header_style="bold cyan")
    objects.add_column("Object", style="bold")
    objects.add_column("Field")
    objects.add_column("Type")
    objects.add_column("Required", style="green")
    for name in sorted(catalog.objects):
        schema = catalog.objects[name]
        for field_name in sorted(schema.fields):
            objects.add_row(
                name,
                field_name,
                Text(json.dumps(to_wire(schema.fields[field_name]))),
                "yes" if field_name in schema.required else "",
            )
    return [leaves, objects]


@app.command("types")
def types_command(
    schema_file: SchemaOption = None,
    config_file: ConfigOption = None,
) -> None:
    """List the leaf types, block tags, and object schemas of a schema.

    Args:
        schema_file: Optional schema path override.
        config_file: Optional config path override.
    """
    _configure_logging()
    validator = _build_validator(schema_file, config_file)
    for table in _types_tables(validator.catalog):
        _CONSOLE.print(table)


def main() -> None:
    """Console script entrypoint."""
    app()
