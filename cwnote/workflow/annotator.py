"""Annotation runs over one or many dashboards.

Each dashboard goes through:

    fetching -> transforming -> no_op | dry_run | persisting -> done

Dashboards in a batch are processed one at a time in discovery order. The
first fatal error stops the batch; dashboards already written stay written.

Usage:
    from cwnote.workflow.annotator import AnnotationRequest, run_annotation

    results = run_annotation(store, AnnotationRequest("deploy", "v1.2.3"),
                             dashboard_suffix="-prod", export_dir=Path("exports"))
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable

from cwnote.cloudwatch.discovery import (
    list_dashboards_by_prefix,
    list_dashboards_by_suffix,
)
from cwnote.lib.config import DEFAULT_MAX_LIST_PAGES
from cwnote.lib.errors import MalformedDocument, SelectionError
from cwnote.lib.export import ExportResult, write_export
from cwnote.lib.selector import WidgetSelector
from cwnote.lib.transform import (
    apply_annotation,
    build_annotation,
    parse_dashboard_body,
    serialize_dashboard,
    utc_now_rfc3339,
)

logger = logging.getLogger(__name__)


class TargetMode(Enum):
    """How the dashboards to annotate are chosen."""
    DASHBOARD = "dashboard"  # one dashboard by exact name
    SUFFIX = "suffix"
    PREFIX = "prefix"


@dataclass(frozen=True)
class Target:
    mode: TargetMode
    value: str


class Outcome(Enum):
    """Terminal state for one dashboard."""
    NO_OP = "no_op"
    DRY_RUN = "dry_run"
    ANNOTATED = "annotated"


@dataclass
class AnnotationRequest:
    """What to annotate with, shared by every dashboard in a run."""
    label: str
    value: str
    time_override: str | None = None  # Used verbatim; otherwise "now" per dashboard
    dry_run: bool = False
    selector: WidgetSelector = field(default_factory=WidgetSelector)


@dataclass
class DashboardResult:
    """Outcome for one dashboard.

    body is the serialized updated document for dry_run and annotated
    outcomes. export is only set when an export was attempted; its failure
    does not change outcome.
    """
    dashboard: str
    outcome: Outcome
    widgets_annotated: int
    timestamp: str
    body: str | None = None
    export: ExportResult | None = None


def resolve_target(
    dashboard: str | None = None,
    dashboard_suffix: str | None = None,
    dashboard_prefix: str | None = None,
) -> Target:
    """Turn the three selection options into exactly one Target.

    Raises:
        SelectionError: If none or more than one option is given
    """
    given = [
        (mode, value)
        for mode, value in (
            (TargetMode.DASHBOARD, dashboard),
            (TargetMode.SUFFIX, dashboard_suffix),
            (TargetMode.PREFIX, dashboard_prefix),
        )
        if value is not None
    ]
    if not given:
        raise SelectionError(
            "Either --dashboard, --dashboard-suffix or --dashboard-prefix is required"
        )
    if len(given) > 1:
        raise SelectionError(
            "Please specify only one of --dashboard, --dashboard-suffix or --dashboard-prefix"
        )

    mode, value = given[0]
    if mode is TargetMode.DASHBOARD and not value:
        raise SelectionError("Dashboard name must not be empty")
    return Target(mode=mode, value=value)


def annotate_dashboard(
    store,
    name: str,
    request: AnnotationRequest,
    export_dir: Path | None = None,
    clock: Callable[[], str] = utc_now_rfc3339,
    on_written: Callable[[DashboardResult], None] | None = None,
) -> DashboardResult:
    """
    Annotate a single dashboard by name.

    Args:
        store: DashboardStore
        name: Dashboard name
        request: Label, value, time and selector for this run
        export_dir: Where to export the written body; None disables export
        clock: Returns the annotation time when request.time_override is unset
        on_written: Called after PutDashboard succeeds, before the export

    Returns:
        DashboardResult describing what happened

    Raises:
        DashboardNotFound, BackendError: If the dashboard cannot be fetched
        MalformedDocument: If the body cannot be parsed or annotated
        BackendWriteFailure: If the updated body cannot be written
    """
    logger.debug(f"[ANNOTATE] {name}: fetching")
    document = parse_dashboard_body(store.get_dashboard(name), name)

    timestamp = request.time_override if request.time_override is not None else clock()
    annotation = build_annotation(request.label, request.value, timestamp)

    logger.debug(f"[ANNOTATE] {name}: transforming")
    try:
        document, count = apply_annotation(document, annotation, request.selector)
    except MalformedDocument as e:
        raise MalformedDocument(f"Dashboard {name}: {e}", name) from e

    if count == 0:
        logger.debug(f"[ANNOTATE] {name}: no_op")
        return DashboardResult(name, Outcome.NO_OP, 0, timestamp)

    body = serialize_dashboard(document)

    if request.dry_run:
        logger.debug(f"[ANNOTATE] {name}: dry_run")
        return DashboardResult(name, Outcome.DRY_RUN, count, timestamp, body=body)

    logger.debug(f"[ANNOTATE] {name}: persisting")
    store.put_dashboard(name, body)
    logger.info(f"Put dashboard {name} ({count} widget(s) annotated at {timestamp})")

    result = DashboardResult(name, Outcome.ANNOTATED, count, timestamp, body=body)
    if on_written:
        on_written(result)

    if export_dir is not None:
        result.export = write_export(export_dir, name, body)

    return result


def discover_dashboards(store, target: Target, max_pages: int = DEFAULT_MAX_LIST_PAGES) -> list[str]:
    """Names of the dashboards a target refers to, in discovery order."""
    if target.mode is TargetMode.DASHBOARD:
        return [target.value]
    if target.mode is TargetMode.SUFFIX:
        return list_dashboards_by_suffix(store, target.value, max_pages=max_pages)
    return list_dashboards_by_prefix(store, target.value, max_pages=max_pages)


def annotate_target(
    store,
    target: Target,
    request: AnnotationRequest,
    export_dir: Path | None = None,
    clock: Callable[[], str] = utc_now_rfc3339,
    max_pages: int = DEFAULT_MAX_LIST_PAGES,
    on_discovered: Callable[[Target, list[str]], None] | None = None,
    on_result: Callable[[DashboardResult], None] | None = None,
    on_written: Callable[[DashboardResult], None] | None = None,
) -> list[DashboardResult]:
    """
    Annotate every dashboard a target refers to, sequentially.

    on_discovered is called once with the resolved names (batch modes only),
    on_written after each successful write (before its export), and on_result
    after each dashboard finishes. Errors propagate and stop the remaining
    dashboards.
    """
    names = discover_dashboards(store, target, max_pages=max_pages)

    if target.mode is not TargetMode.DASHBOARD:
        logger.info(f"{len(names)} dashboard(s) match {target.mode.value} '{target.value}'")
        if on_discovered:
            on_discovered(target, names)

    results = []
    for name in names:
        result = annotate_dashboard(
            store, name, request, export_dir=export_dir, clock=clock, on_written=on_written,
        )
        results.append(result)
        if on_result:
            on_result(result)
    return results


def run_annotation(
    store,
    request: AnnotationRequest,
    dashboard: str | None = None,
    dashboard_suffix: str | None = None,
    dashboard_prefix: str | None = None,
    **kwargs,
) -> list[DashboardResult]:
    """Validate the selection options, then annotate_target().

    Raises SelectionError before any backend call when the options are
    missing or conflicting.
    """
    target = resolve_target(dashboard, dashboard_suffix, dashboard_prefix)
    return annotate_target(store, target, request, **kwargs)
