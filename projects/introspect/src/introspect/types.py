"""TypedDict schemas for introspected table metadata and enum constraints."""

from __future__ import annotations

from typing import NamedTuple, TypedDict


class RawTableDefinition(TypedDict):
    """Table name with the CREATE TABLE text stored in the catalog."""

    name: str
    sql: str | None  # Absent for views and virtual tables


class EnumConstraint(NamedTuple):
    """A parsed `column IN (...)` CHECK clause, values in source order."""

    column: str
    values: list[str]


# Maps "<table>.<column>" to the sorted literal values of its CHECK clause
type EnumRegistry = dict[str, list[str]]


class ColumnMetadata(TypedDict):
    """Schema for a database column as reported by the inspector."""

    name: str
    type: str
    nullable: bool
    default: str | None
    primary_key: bool


class EnrichedColumnMetadata(ColumnMetadata):
    """Column metadata with the discovered enum values attached."""

    enum_values: list[str] | None


class TableMetadata(TypedDict):
    """Schema for a database table."""

    name: str
    columns: list[ColumnMetadata]


class EnrichedTableMetadata(TypedDict):
    """Table whose columns carry enum values."""

    name: str
    columns: list[EnrichedColumnMetadata]


class DatabaseMetadata(TypedDict):
    """Root metadata for an introspected database."""

    name: str
    tables: list[EnrichedTableMetadata]
