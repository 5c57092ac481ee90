"""Widget selection for annotation targets."""

from dataclasses import dataclass
from typing import Any


def widget_title(widget: Any) -> str:
    """Return properties.title, or "" when missing or not a string."""
    if not isinstance(widget, dict):
        return ""
    props = widget.get("properties")
    if not isinstance(props, dict):
        return ""
    title = props.get("title")
    return title if isinstance(title, str) else ""


@dataclass(frozen=True)
class WidgetSelector:
    """Decides which widgets receive an annotation.

    With no title filter every widget matches. With a filter, the widget's
    title must contain it as a literal, case-sensitive substring.
    """
    title_contains: str | None = None

    def matches(self, widget: Any) -> bool:
        if self.title_contains is None:
            return True
        return self.title_contains in widget_title(widget)
