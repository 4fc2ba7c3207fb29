"""Attach enum values from the registry to table metadata."""

from collections.abc import Iterable, Iterator

from introspect.registry import enum_key
from introspect.types import (
    ColumnMetadata,
    EnrichedColumnMetadata,
    EnrichedTableMetadata,
    EnumRegistry,
    TableMetadata,
)


def enrich_column(
    table_name: str,
    column: ColumnMetadata,
    registry: EnumRegistry,
) -> EnrichedColumnMetadata:
    """Return a copy of the column with its enum values, or None if it has none."""
    values = registry.get(enum_key(table_name, column["name"]))
    return {
        **column,
        "enum_values": list(values) if values else None,
    }


def enrich_tables(
    tables: Iterable[TableMetadata],
    registry: EnumRegistry,
) -> list[EnrichedTableMetadata]:
    """Return new table metadata with `enum_values` set on every column.

    The input tables are left untouched.
    """
    return [
        {
            **table,
            "columns": [
                enrich_column(table["name"], column, registry)
                for column in table["columns"]
            ],
        }
        for table in tables
    ]


def enum_columns(
    tables: Iterable[EnrichedTableMetadata],
) -> Iterator[tuple[str, EnrichedColumnMetadata]]:
    """Yield (table name, column) for every column that carries enum values."""
    for table in tables:
        for column in table["columns"]:
            if column["enum_values"] is not None:
                yield table["name"], column
