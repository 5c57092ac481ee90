"""
Schema validation for dashboard data.

Annotation objects are checked with validate(). Widgets about to be
annotated are checked with check_widget(), which reports a bad shape as a
MalformedDocument naming the widget's position in the dashboard.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema

from cwnote.lib.errors import CwnoteError, MalformedDocument

ANNOTATION_SCHEMA = "annotation"
METRIC_WIDGET_SCHEMA = "metric_widget"


class ValidationError(CwnoteError):
    """Data does not match a bundled schema."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


_schema_cache: dict[str, dict] = {}


def _load_schema(schema_name: str) -> dict:
    """Load a schema shipped in cwnote/schemas, with caching."""
    if schema_name not in _schema_cache:
        schema_path = Path(__file__).parent.parent / "schemas" / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text())
    return _schema_cache[schema_name]


def validate(data: Any, schema_name: str) -> None:
    """
    Validate data against a named schema.

    Raises:
        ValidationError: With the JSON path of the first failing element
    """
    try:
        jsonschema.validate(instance=data, schema=_load_schema(schema_name))
    except jsonschema.ValidationError as e:
        path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else "(root)"
        raise ValidationError(schema_name, e.message, path) from None


def check_widget(widget: Any, index: int) -> None:
    """
    Check that a metric widget can take a vertical annotation.

    Containers on properties.annotations.vertical may be missing but must
    have the right type when present.

    Raises:
        MalformedDocument: If the widget has an unsupported shape
    """
    try:
        validate(widget, METRIC_WIDGET_SCHEMA)
    except ValidationError as e:
        raise MalformedDocument(f"Unsupported shape for widget {index}: {e}") from None
