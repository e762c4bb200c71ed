"""Schema documentation: JSON records, Markdown tables and .env.example text."""

from typing import Any, Dict, List

from .schema import Schema, iter_fields


def _render_default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def schema_to_json(schema: Schema) -> List[Dict[str, Any]]:
    """Describe each field as ``{name, type, required, default}``."""
    return [
        {
            "name": name,
            "type": field.type,
            "required": field.required,
            "default": field.default,
        }
        for name, field in iter_fields(schema)
    ]


def schema_to_markdown(schema: Schema) -> str:
    """Render the schema as a Markdown table."""
    rows = []
    for name, field in iter_fields(schema):
        required = "Yes" if field.required else "No"
        default = f"`{_render_default(field.default)}`" if field.default is not None else "-"
        rows.append(f"| `{name}` | `{field.type}` | {required} | {default} |")

    return "\n".join([
        "| Variable | Type | Required | Default |",
        "| -------- | ---- | -------- | ------- |",
        *rows,
    ])


def generate_dotenv_example(schema: Schema) -> str:
    """Render ``.env.example`` content grouped into required and optional sections."""
    required: List[str] = []
    optional: List[str] = []

    for name, field in iter_fields(schema):
        if field.default is not None:
            line = f"{name}={_render_default(field.default)}"
        else:
            line = f"{name}="

        if field.optional:
            optional.append(line)
        else:
            required.append(line)

    sections: List[str] = []

    if required:
        sections.extend(["# Required", *required])

    if optional:
        if sections:
            sections.append("")
        sections.extend(["# Optional", *optional])

    return "\n".join(sections)
