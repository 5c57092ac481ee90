"""
Error types for cwnote.

Everything fatal to a run derives from CwnoteError so the CLI can report it
with one handler. Export failures are not errors; see lib/export.py.
"""


class CwnoteError(Exception):
    """Base exception for annotation failures."""

    def __init__(self, message: str, dashboard: str | None = None):
        self.dashboard = dashboard
        super().__init__(message)


class SelectionError(CwnoteError):
    """Target selection is missing or ambiguous."""


class DashboardNotFound(CwnoteError):
    """Dashboard does not exist or has no body."""


class BackendError(CwnoteError):
    """Listing or fetching dashboards failed."""


class MalformedDocument(CwnoteError):
    """Dashboard body is not JSON, or has an unsupported shape."""


class BackendWriteFailure(CwnoteError):
    """Writing the updated dashboard back failed."""
