"""Python code generation for enum columns as Literal type aliases."""

import keyword
from re import sub

from introspect.enrichment import enum_columns
from introspect.types import DatabaseMetadata


def pascal_case(name: str) -> str:
    """Convert name to PascalCase, keeping Unicode word characters."""
    words = sub(r"\W+", "_", name).split("_")
    return "".join(word[0].upper() + word[1:] for word in words if word)


def alias_name(table_name: str, column_name: str) -> str:
    """Build the Literal alias name for a table-qualified column."""
    name = pascal_case(table_name) + pascal_case(column_name)
    if not name or name[0].isdigit() or keyword.iskeyword(name):
        name = f"_{name}"
    return name


def unique_name(name: str, taken: set[str]) -> str:
    """Suffix `name` with a counter until it is not in `taken`, then claim it."""
    candidate = name
    counter = 2
    while candidate in taken:
        candidate = f"{name}{counter}"
        counter += 1
    taken.add(candidate)
    return candidate


def render_literal(values: list[str]) -> str:
    """Render a Literal type expression for the given values."""
    values_string = ", ".join(repr(value) for value in values)
    return f"Literal[{values_string}]"


def schema_to_literals(schema: DatabaseMetadata) -> str:
    """Generate Literal type aliases for every enum column in the schema.

    Pairs that map to the same alias (`a_b.c` and `a.b_c`) get numbered
    suffixes in schema order.
    """
    taken: set[str] = set()
    aliases = [
        f"type {unique_name(alias_name(table_name, column['name']), taken)} = "
        f"{render_literal(column['enum_values'] or [])}"
        for table_name, column in enum_columns(schema["tables"])
    ]

    parts = [
        f'"""Enum types generated from CHECK constraints in {schema["name"]}."""',
        "",
        "from typing import Literal",
        "",
        *aliases,
    ]

    return "\n".join(parts) + "\n"
