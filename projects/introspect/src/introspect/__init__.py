"""CHECK constraint enum introspection module for DDL Enums."""

from introspect.check_constraints import (
    parse_enum_constraints,
    recognize_membership,
    scan_check_constraints,
    tokenize_values,
)
from introspect.enrichment import enrich_tables, enum_columns
from introspect.html_export import schema_to_html
from introspect.literal_export import schema_to_literals
from introspect.main import (
    fetch_table_definitions,
    fetch_tables,
    introspect_database,
    read_only_sqlite,
    reflect_tables,
)
from introspect.registry import build_enum_registry, enum_key

__all__ = [
    "build_enum_registry",
    "enrich_tables",
    "enum_columns",
    "enum_key",
    "fetch_table_definitions",
    "fetch_tables",
    "introspect_database",
    "parse_enum_constraints",
    "read_only_sqlite",
    "recognize_membership",
    "reflect_tables",
    "scan_check_constraints",
    "schema_to_html",
    "schema_to_literals",
    "tokenize_values",
]
