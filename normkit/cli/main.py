"""CLI entry point.

Provides commands for:
- check-schema: Check that a schema document is well-formed
- validate: Validate a data document against a schema
- satisfies: Check that a new schema can replace an old one
"""

# Configure logging early before other imports
import normkit.logging_config  # noqa: F401

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from normkit.exceptions import NormkitError
from normkit.json_types import parse
from normkit.schema import (
    Schema,
    TypedSchema,
    json_normalizer_with_schema,
    parse_schema,
    satisfies,
)

app = typer.Typer(
    name="normkit",
    help="Validate JSON documents and check JSON Schema compatibility",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _read_document(path: Path) -> Any:
    """Read a JSON (or YAML) document from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Cannot read {escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    try:
        return parse(text)
    except NormkitError as e:
        console.print(Panel(escape(e.message), title=f"[red]{path}[/red]", border_style="red"))
        raise typer.Exit(code=1) from e


def _load_schema(path: Path) -> Schema:
    document = _read_document(path)
    try:
        return parse_schema(document)
    except NormkitError as e:
        console.print(
            Panel(escape(e.message), title=f"[red]Invalid schema: {path}[/red]", border_style="red")
        )
        raise typer.Exit(code=1) from e


@app.command("check-schema")
def check_schema(
    schema_path: Annotated[Path, typer.Argument(help="Schema document (.json or .yaml)")],
) -> None:
    """Check that a schema is well-formed.

    Examples:
        normkit check-schema user.schema.json
    """
    schema = _load_schema(schema_path)
    kind = schema.base_type if isinstance(schema, TypedSchema) else schema.kind.value
    console.print(
        Panel(
            f"Schema is well-formed ([bold]{kind}[/bold]).",
            title=f"[green]{schema_path}[/green]",
            border_style="green",
        )
    )


@app.command()
def validate(
    data_path: Annotated[Path, typer.Argument(help="Data document (.json or .yaml)")],
    schema_path: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Schema to validate against"),
    ],
) -> None:
    """Validate a document against a schema.

    Warnings (unknown properties, format notes) are printed but do not
    fail the command.

    Examples:
        normkit validate user.json --schema user.schema.json
    """
    schema = _load_schema(schema_path)
    data = _read_document(data_path)

    result = json_normalizer_with_schema(schema).normalize(data)

    if result.error_message:
        console.print(
            Panel(escape(result.error_message), title=f"[red]{data_path}: invalid[/red]", border_style="red")
        )
        raise typer.Exit(code=1)

    if result.warning_message:
        console.print(
            Panel(escape(result.warning_message), title="[yellow]Warnings[/yellow]", border_style="yellow")
        )
    console.print(f"[green]Valid:[/green] {escape(str(data_path))}")


@app.command("satisfies")
def satisfies_command(
    provided_path: Annotated[Path, typer.Argument(help="New schema")],
    required_path: Annotated[Path, typer.Argument(help="Old schema")],
) -> None:
    """Check that the new schema accepts every value the old one accepts.

    Exits with code 1 when the replacement would reject values that were
    valid before.

    Examples:
        normkit satisfies v2.schema.json v1.schema.json
    """
    provided = _load_schema(provided_path)
    required = _load_schema(required_path)

    if satisfies(provided, required):
        console.print(f"[green]Compatible:[/green] {provided_path} satisfies {required_path}.")
        return

    console.print(f"[red]Incompatible:[/red] {provided_path} does not satisfy {required_path}.")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
