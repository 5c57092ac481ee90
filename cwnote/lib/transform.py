"""
Dashboard body transform.

Parses a CloudWatch dashboard body, appends a vertical annotation to every
selected metric widget, and serializes the result back to the wire form.

Only the path properties.annotations.vertical is ever written. Missing
containers on that path are created; containers of the wrong type make the
document unsupported and raise MalformedDocument before anything changes.
"""

import copy
import json
import logging
from datetime import datetime, timezone
from typing import Any

from cwnote.lib.errors import MalformedDocument
from cwnote.lib.selector import WidgetSelector
from cwnote.lib.validate import ANNOTATION_SCHEMA, check_widget, validate

logger = logging.getLogger(__name__)

METRIC_WIDGET_TYPE = "metric"


def utc_now_rfc3339() -> str:
    """Current UTC instant as an RFC 3339 string."""
    return datetime.now(timezone.utc).isoformat()


def build_annotation(label: str, value: str, timestamp: str) -> dict:
    """Build the annotation object placed into each widget.

    The timestamp is passed through as given; callers may supply any literal,
    including an empty string.

    Raises:
        ValidationError: If label, value or timestamp is not a string
    """
    annotation = {"label": f"{label}: {value}", "value": timestamp}
    validate(annotation, ANNOTATION_SCHEMA)
    return annotation


def parse_dashboard_body(body: str, dashboard: str | None = None) -> Any:
    """Parse a dashboard body string into a JSON value."""
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        name = f" {dashboard}" if dashboard else ""
        raise MalformedDocument(f"Failed to parse dashboard{name} body JSON: {e}", dashboard) from e


def serialize_dashboard(document: Any) -> str:
    """Serialize a dashboard document in compact form for PutDashboard.

    Non-ASCII is written as \\u escapes so lone surrogates that came in as
    escapes go back out the same way and the body always encodes as UTF-8.
    """
    return json.dumps(document, separators=(",", ":"))


def is_metric_widget(widget: Any) -> bool:
    return isinstance(widget, dict) and widget.get("type") == METRIC_WIDGET_TYPE


def select_widgets(document: Any, selector: WidgetSelector) -> list[tuple[int, dict]]:
    """Return (index, widget) for each metric widget the selector accepts.

    Widgets are returned in document order. A document without a widgets
    list yields nothing.
    """
    if not isinstance(document, dict):
        return []
    widgets = document.get("widgets")
    if not isinstance(widgets, list):
        return []
    return [
        (i, w) for i, w in enumerate(widgets)
        if is_metric_widget(w) and selector.matches(w)
    ]


def _vertical_list(widget: dict) -> list:
    props = widget.setdefault("properties", {})
    annotations = props.setdefault("annotations", {})
    return annotations.setdefault("vertical", [])


def apply_annotation(
    document: Any,
    annotation: dict,
    selector: WidgetSelector,
) -> tuple[Any, int]:
    """
    Append a copy of annotation to every selected metric widget.

    The document is modified in place and also returned for convenience.
    Repeated calls keep appending; existing annotations are never touched.

    Args:
        document: Parsed dashboard body
        annotation: Object from build_annotation()
        selector: Which metric widgets to annotate

    Returns:
        (document, number of widgets annotated)

    Raises:
        MalformedDocument: If a selected widget has a container of the wrong
            type on the properties.annotations.vertical path
    """
    targets = select_widgets(document, selector)

    # Check every target first so a bad widget leaves the document untouched
    for index, widget in targets:
        check_widget(widget, index)

    for index, widget in targets:
        _vertical_list(widget).append(copy.deepcopy(annotation))
        logger.debug(f"Annotated widget {index} ({widget['properties'].get('title', '')!r})")

    return document, len(targets)
