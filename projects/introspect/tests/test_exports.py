"""Tests for Literal code generation and HTML export of enum columns."""

from introspect.html_export import schema_to_html
from introspect.literal_export import alias_name, pascal_case, schema_to_literals
from introspect.types import DatabaseMetadata, EnrichedColumnMetadata


def column(name: str, values: list[str] | None) -> EnrichedColumnMetadata:
    """Build enriched column metadata with defaults."""
    return {
        "name": name,
        "type": "TEXT",
        "nullable": True,
        "default": None,
        "primary_key": False,
        "enum_values": values,
    }


SCHEMA: DatabaseMetadata = {
    "name": "app.sqlite",
    "tables": [
        {
            "name": "users",
            "columns": [
                column("id", None),
                column("status", ["private", "public", "restricted"]),
            ],
        },
        {
            "name": "order_items",
            "columns": [column("item-kind", ["<b>", "it's"])],
        },
    ],
}


def test_pascal_case() -> None:
    """Test name conversion for aliases."""
    assert pascal_case("order_items") == "OrderItems"
    assert pascal_case("item-kind") == "ItemKind"
    assert pascal_case("users") == "Users"


def test_alias_name_is_identifier() -> None:
    """Test that alias names are valid Python identifiers."""
    assert alias_name("users", "status") == "UsersStatus"
    assert alias_name("2fa", "mode") == "_2faMode"
    assert alias_name("2fa", "mode").isidentifier()


def test_schema_to_literals() -> None:
    """Test Literal aliases for every enum column."""
    code = schema_to_literals(SCHEMA)

    assert "from typing import Literal" in code
    assert (
        "type UsersStatus = Literal['private', 'public', 'restricted']" in code
    )
    assert "type OrderItemsItemKind = Literal['<b>', \"it's\"]" in code
    assert "UsersId" not in code


def test_schema_to_literals_without_enums() -> None:
    """Test code generation for a database without enum columns."""
    code = schema_to_literals({"name": "empty", "tables": []})
    assert "from typing import Literal" in code
    assert "= Literal[" not in code


def test_schema_to_html() -> None:
    """Test the HTML report lists enum columns with escaped values."""
    html = schema_to_html(SCHEMA)

    assert "Enum columns - app.sqlite" in html
    assert "<td>users</td>" in html
    assert "<td>status</td>" in html
    assert "<code>restricted</code>" in html
    assert "<code>&lt;b&gt;</code>" in html
    assert "<td>id</td>" not in html


def test_schema_to_html_without_enums() -> None:
    """Test the HTML report for a database without enum columns."""
    html = schema_to_html({"name": "empty", "tables": []})
    assert "No enum columns found." in html


def test_pascal_case_keeps_unicode_letters() -> None:
    """Test that non-ASCII letters survive name conversion."""
    assert pascal_case("café") == "Café"
    assert alias_name("café", "état") == "CaféÉtat"
    assert alias_name("café", "état").isidentifier()


def test_colliding_aliases_are_numbered() -> None:
    """Test that pairs mapping to the same alias get distinct names."""
    schema: DatabaseMetadata = {
        "name": "collide.sqlite",
        "tables": [
            {"name": "a_b", "columns": [column("c", ["c"])]},
            {"name": "a", "columns": [column("b_c", ["b_c"])]},
        ],
    }
    code = schema_to_literals(schema)

    assert "type ABC = Literal['c']" in code
    assert "type ABC2 = Literal['b_c']" in code
    assert code.count("type ABC =") == 1
