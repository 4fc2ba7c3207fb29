"""HTML export functionality for enum columns."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from introspect.enrichment import enum_columns
from introspect.types import DatabaseMetadata


def schema_to_html(schema: DatabaseMetadata) -> str:
    """Create an HTML report listing every enum column and its values."""
    # Get template directory
    template_dir = Path(__file__).parent / "templates"

    # Set up Jinja2 environment
    env = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(),
    )
    template = env.get_template("enums.html")

    return template.render(
        title=f"Enum columns - {schema['name']}",
        table_count=len(schema["tables"]),
        columns=list(enum_columns(schema["tables"])),
    )
