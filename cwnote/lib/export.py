"""
Export copies of annotated dashboards.

After a successful PutDashboard the body that was sent is written to
<export_dir>/<timestamp>-<sanitized-name>.json. The copy is advisory: a
failed write is logged and reported in ExportResult, never raised.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

EXPORT_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
_UNSAFE_CHARS = re.compile(r"[^a-z0-9-]")


@dataclass
class ExportResult:
    """Outcome of the advisory export step."""
    path: Path | None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and self.path is not None


def sanitize_dashboard_name(name: str) -> str:
    """Lower-case name with every char outside [a-z0-9-] replaced by '-'."""
    return _UNSAFE_CHARS.sub("-", name.lower())


def export_filename(dashboard: str, when: datetime | None = None) -> str:
    when = when or datetime.now(timezone.utc)
    return f"{when.strftime(EXPORT_TIMESTAMP_FORMAT)}-{sanitize_dashboard_name(dashboard)}.json"


def write_export(
    export_dir: Path,
    dashboard: str,
    body: str,
    when: datetime | None = None,
) -> ExportResult:
    """Write body to the export directory.

    Returns ExportResult with error set on failure.
    """
    path = Path(export_dir) / export_filename(dashboard, when)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    except (OSError, ValueError) as e:
        # ValueError covers bodies that cannot be encoded as UTF-8
        logger.warning(f"Failed to export dashboard {dashboard} to {path}: {e}")
        return ExportResult(path=path, error=str(e))

    logger.info(f"Exported dashboard {dashboard} to {path}")
    return ExportResult(path=path)
