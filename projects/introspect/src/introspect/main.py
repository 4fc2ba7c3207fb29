"""Introspect SQLite databases and attach CHECK constraint enums to columns."""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from warnings import catch_warnings, filterwarnings

from sqlalchemy import (
    Engine,
    Enum,
    Inspector,
    MetaData,
    column as column_clause,
    create_engine,
    event,
    inspect,
    select,
    table as table_clause,
)
from sqlalchemy.engine.interfaces import ReflectedColumn
from sqlalchemy.exc import SAWarning
from sqlalchemy.schema import Table
from sqlalchemy.types import NullType, TypeEngine

from introspect.enrichment import enrich_tables
from introspect.registry import build_enum_registry, enum_key
from introspect.types import (
    ColumnMetadata,
    DatabaseMetadata,
    EnumRegistry,
    RawTableDefinition,
    TableMetadata,
)

type ColumnReflectHandler = Callable[[Inspector, Table, ReflectedColumn], None]

SQLITE_MASTER = table_clause(
    "sqlite_master",
    column_clause("type"),
    column_clause("name"),
    column_clause("sql"),
)


def read_only_sqlite(sqlite_location: Path) -> Engine:
    """Create a read-only SQLAlchemy engine for SQLite database."""
    connection_string = f"sqlite:///{sqlite_location}?mode=ro"
    return create_engine(connection_string, connect_args={"uri": True})


def fetch_table_definitions(engine: Engine) -> list[RawTableDefinition]:
    """Fetch the stored CREATE TABLE text of every table."""
    query = select(SQLITE_MASTER.c.name, SQLITE_MASTER.c.sql).where(
        SQLITE_MASTER.c.type == "table",
        SQLITE_MASTER.c.sql.is_not(None),
    )
    with engine.connect() as connection:
        return [
            {"name": row["name"], "sql": row["sql"]}
            for row in connection.execute(query).mappings()
        ]


def type_name(sql_type: TypeEngine[Any], engine: Engine) -> str:
    """Render a reflected column type as SQL, empty for undeclared types."""
    match sql_type:
        case NullType():
            return ""
        case _:
            return str(sql_type.compile(dialect=engine.dialect))


def _column_from_reflection(
    reflected: ReflectedColumn,
    primary_keys: set[str],
    engine: Engine,
) -> ColumnMetadata:
    """Derive ColumnMetadata from an inspector column entry."""
    return {
        "name": reflected["name"],
        "type": type_name(reflected["type"], engine),
        "nullable": bool(reflected["nullable"]),
        "default": reflected.get("default"),
        "primary_key": reflected["name"] in primary_keys,
    }


def fetch_tables(engine: Engine) -> list[TableMetadata]:
    """Fetch table and column metadata through the SQLAlchemy inspector."""
    inspector = inspect(engine)
    tables: list[TableMetadata] = []

    for table_name in inspector.get_table_names():
        primary_key = inspector.get_pk_constraint(table_name)
        primary_keys = set(primary_key["constrained_columns"])
        tables.append(
            {
                "name": table_name,
                "columns": [
                    _column_from_reflection(reflected, primary_keys, engine)
                    for reflected in inspector.get_columns(table_name)
                ],
            },
        )

    return tables


def introspect_database(engine: Engine) -> DatabaseMetadata:
    """Introspect all tables, attaching enum values found in CHECK constraints."""
    tables = fetch_tables(engine)
    registry = build_enum_registry(fetch_table_definitions(engine))

    return {
        "name": engine.url.database or "unknown",
        "tables": enrich_tables(tables, registry),
    }


def enum_reflection_listener(registry: EnumRegistry) -> ColumnReflectHandler:
    """Create a `column_reflect` handler that turns registry columns into Enums."""

    def detect_enum(_inspector: Inspector, table: Table, column: ReflectedColumn) -> None:
        """Event handler to replace the reflected type with our enum type."""
        if values := registry.get(enum_key(table.name, column["name"])):
            column["type"] = Enum(*values)

    return detect_enum


def reflect_tables(engine: Engine) -> MetaData:
    """Reflect database schema with enum-typed columns for CHECK IN constraints."""
    registry = build_enum_registry(fetch_table_definitions(engine))
    metadata = MetaData()
    event.listen(metadata, "column_reflect", enum_reflection_listener(registry))
    with catch_warnings():
        filterwarnings("ignore", category=SAWarning)
        metadata.reflect(bind=engine)
    return metadata
