"""Build the enum registry from raw CREATE TABLE text."""

import logging
from collections.abc import Iterable

from introspect.check_constraints import parse_enum_constraints
from introspect.types import EnumRegistry, RawTableDefinition

logger = logging.getLogger(__name__)


def enum_key(table_name: str, column_name: str) -> str:
    """Return the registry key for a table-qualified column."""
    return f"{table_name}.{column_name}"


def build_enum_registry(definitions: Iterable[RawTableDefinition]) -> EnumRegistry:
    """Collect sorted enum values for every `table.column` with an IN constraint.

    A later constraint on the same column replaces an earlier one.
    """
    registry: EnumRegistry = {}

    for definition in definitions:
        if not (sql := definition["sql"]):
            logger.debug("Skipping %s without CREATE TABLE text", definition["name"])
            continue

        for constraint in parse_enum_constraints(sql):
            key = enum_key(definition["name"], constraint.column)
            if key in registry:
                logger.debug("Replacing earlier enum constraint for %s", key)
            # Sort the enum values for consistency
            registry[key] = sorted(constraint.values)

    return registry
