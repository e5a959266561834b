#!/usr/bin/env python3
"""
Response Schema CLI

Command line interface for inferring and checking response schemas.

    response-schema infer SAMPLE.json [-o OUT]
    response-schema validate FOLDER NAME BODY.json [--schema-dir DIR]

Validation failures exit with code 1, other schema errors with code 2.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from infer_schema import build_schema_document
from schema_errors import SchemaError, SchemaValidationError
from schema_validator import DEFAULT_SCHEMA_DIR, SchemaValidator, ValidatorConfig

app = typer.Typer(help="Infer JSON response schemas from samples and validate against them.")
console = Console()


def _configure_logging(quiet: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_json(path: Path) -> Any:
    """Read a JSON document from disk."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.is_file():
        raise typer.BadParameter(f"Path does not exist: {resolved}")
    try:
        return json.loads(resolved.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise typer.BadParameter(f"Invalid JSON in {resolved}: {e}") from e


@app.command()
def infer(
    sample: Path = typer.Argument(..., help="Sample JSON document to infer from."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the schema here instead of stdout."
    ),
) -> None:
    """Infer a Draft-07 schema from a sample document."""

    schema = build_schema_document(_load_json(sample))
    text = json.dumps(schema, indent=2)

    if output is None:
        console.print_json(text)
        return

    output_path = Path(output).expanduser().resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    console.print(f"Schema written to {output_path}", style="green", markup=False)


@app.command()
def validate(
    folder: str = typer.Argument(..., help="Schema folder, e.g. 'vpp/Asset Manager'."),
    name: str = typer.Argument(..., help="Schema name (without _schema.json)."),
    body: Path = typer.Argument(..., help="JSON document to validate."),
    schema_dir: Path = typer.Option(
        DEFAULT_SCHEMA_DIR,
        "--schema-dir",
        envvar="RESPONSE_SCHEMA_DIR",
        help="Base directory holding the schemas.",
    ),
    create: bool = typer.Option(
        False,
        "--create/--no-create",
        help="Infer and save the schema from the body when it does not exist.",
    ),
    all_errors: bool = typer.Option(False, "--all-errors", help="Report every mismatch."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print the verdict."),
) -> None:
    """Validate a document against a stored schema."""

    _configure_logging(quiet)
    document = _load_json(body)

    config = ValidatorConfig(
        create_schema=create,
        verbose=not quiet,
        throw_on_error=True,
        all_errors=all_errors,
    )
    validator = SchemaValidator(schema_dir, config)

    try:
        validator.validate(folder, name, document)
    except SchemaValidationError as e:
        console.print(f"✗ {e} ({len(e.diagnostics)} mismatch(es))", style="red", markup=False)
        raise typer.Exit(code=1)
    except SchemaError as e:
        console.print(f"✗ {e}", style="red", markup=False)
        raise typer.Exit(code=2)

    console.print(f"✓ {folder}/{name} is valid", style="green", markup=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
