"""Command line interface for DDL Enums."""

import logging
import sys
from collections.abc import Iterable
from json import dumps
from pathlib import Path
from sys import stdin, stdout
from typing import Literal

from cyclopts import App
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text
from sqlalchemy.exc import SQLAlchemyError

from introspect import (
    build_enum_registry,
    enum_columns,
    introspect_database,
    parse_enum_constraints,
    read_only_sqlite,
    schema_to_html,
    schema_to_literals,
)
from introspect.types import DatabaseMetadata, EnumConstraint, EnumRegistry

app = App(help="Discover enum columns from SQL CHECK constraints")


type Format = Literal["table", "json", "html", "python"]


console = Console()
err_console = Console(stderr=True)

# Constants
SQLITE_EXTENSIONS = {".sqlite", ".db", ".sqlite3"}


def configure_logging(*, verbose: bool = False) -> None:
    """Route library logging to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}")


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}")


def validate_database_location(database_location: Path) -> None:
    """Validate that the database file exists."""
    if not database_location.exists():
        print_error(f"Database file does not exist: {database_location}")
        sys.exit(1)


def validate_database_extension(
    database_location: Path,
    file_extensions: Iterable[str],
) -> None:
    """Validate database file extension."""
    if database_location.suffix.lower() not in file_extensions:
        print_error(
            f"Database file has invalid extension: {', '.join(file_extensions)}",
        )
        sys.exit(1)


def read_ddl(ddl_location: Path | None) -> str:
    """Read DDL text from a file, or from stdin when no file is given."""
    if ddl_location is None:
        return stdin.read()
    try:
        return ddl_location.read_text()
    except (PermissionError, OSError) as e:
        print_error(f"Cannot read DDL file: {ddl_location} ({e})")
        sys.exit(1)


def format_enum_table(schema: DatabaseMetadata) -> None:
    """Format enum columns as a rich table."""
    columns = list(enum_columns(schema["tables"]))
    if not columns:
        console.print("No enum columns found.")
        return

    table = Table(title=f"Enum Columns - {escape(schema['name'])}")
    table.add_column("Table", style="bold cyan")
    table.add_column("Column", style="bold")
    table.add_column("Type")
    table.add_column("Values", style="green")

    for table_name, column in columns:
        table.add_row(
            Text(table_name),
            Text(column["name"]),
            Text(column["type"]),
            Text(", ".join(column["enum_values"] or [])),
        )

    console.print(table)


def format_constraint_table(constraints: Iterable[EnumConstraint]) -> None:
    """Format parsed CHECK constraints as a rich table."""
    table = Table(title="CHECK Constraint Enums")
    table.add_column("Column", style="bold cyan")
    table.add_column("Values", style="green")

    for constraint in constraints:
        table.add_row(Text(constraint.column), Text(", ".join(constraint.values)))

    console.print(table)


def format_registry_table(registry: EnumRegistry) -> None:
    """Format registry entries as a rich table."""
    table = Table(title="Enum Registry")
    table.add_column("Key", style="bold cyan")
    table.add_column("Values", style="green")

    for key, values in registry.items():
        table.add_row(Text(key), Text(", ".join(values)))

    console.print(table)


@app.command
def introspect(
    sqlite_location: Path,
    fmt: Format = "table",
    *,
    verbose: bool = False,
) -> None:
    """List enum columns of a SQLite database."""
    configure_logging(verbose=verbose)

    validate_database_location(sqlite_location)
    validate_database_extension(sqlite_location, SQLITE_EXTENSIONS)
    print_info(f"Source database: {sqlite_location}")
    print_info(f"Output format: {fmt}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
    ) as progress:
        progress.add_task("Introspecting database...", total=None)
        try:
            schema_data = introspect_database(read_only_sqlite(sqlite_location))
        except SQLAlchemyError as e:
            print_error(f"Introspection failed: {e}")
            sys.exit(1)

    # Output to stdout in requested format (keep stdout clean for data)
    if fmt == "json":
        stdout.write(dumps(schema_data))
    elif fmt == "html":
        stdout.write(schema_to_html(schema_data))
    elif fmt == "python":
        stdout.write(schema_to_literals(schema_data))
    elif fmt == "table":
        format_enum_table(schema_data)

    print_success("Introspection completed successfully")


@app.command
def parse(
    ddl_location: Path | None = None,
    fmt: Literal["table", "json"] = "table",
    *,
    table: str | None = None,
    verbose: bool = False,
) -> None:
    """Parse CHECK constraint enums from CREATE TABLE text (file or stdin)."""
    configure_logging(verbose=verbose)

    ddl = read_ddl(ddl_location)

    if table is not None:
        registry = build_enum_registry([{"name": table, "sql": ddl}])
        if fmt == "json":
            stdout.write(dumps(registry))
        else:
            format_registry_table(registry)
        return

    constraints = parse_enum_constraints(ddl)
    if fmt == "json":
        stdout.write(dumps([constraint._asdict() for constraint in constraints]))
    else:
        format_constraint_table(constraints)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
