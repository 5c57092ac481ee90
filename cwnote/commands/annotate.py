"""
cwnote annotate - Add a vertical annotation to dashboard widgets.
"""

import sys

from cwnote.cloudwatch import DashboardStore, make_client
from cwnote.lib.config import Settings
from cwnote.lib.errors import CwnoteError
from cwnote.lib.selector import WidgetSelector
from cwnote.workflow.annotator import (
    AnnotationRequest,
    DashboardResult,
    Outcome,
    Target,
    annotate_target,
    resolve_target,
)


def format_result(result: DashboardResult, request: AnnotationRequest) -> str:
    """One user-facing line for a dashboard outcome."""
    if result.outcome is Outcome.NO_OP:
        return f"{result.dashboard}: no matching metric widgets found (nothing to annotate)"
    if result.outcome is Outcome.DRY_RUN:
        return (
            f"[dry-run] {result.dashboard}: would annotate {result.widgets_annotated} "
            f"metric widget(s) with {request.label} '{request.value}' at {result.timestamp}"
        )
    return (
        f"Annotated {result.widgets_annotated} metric widget(s) on dashboard "
        f"'{result.dashboard}' with {request.label} '{request.value}'"
    )


def print_discovered(target: Target, names: list[str]) -> None:
    if not names:
        print(f"No dashboards found with {target.mode.value} '{target.value}'")
        return
    print(f"{len(names)} dashboard(s) match {target.mode.value} '{target.value}':")
    for name in names:
        print(f"  - {name}")


def cmd_annotate(args, settings: Settings, store=None) -> int:
    """Annotate the selected dashboard(s). Returns the process exit code."""
    request = AnnotationRequest(
        label=args.label or settings.label,
        value=args.value,
        time_override=args.time,
        dry_run=args.dry_run,
        selector=WidgetSelector(title_contains=args.widget_title_contains),
    )

    try:
        # Reject bad selections before touching the network
        target = resolve_target(args.dashboard, args.dashboard_suffix, args.dashboard_prefix)

        if store is None:
            store = DashboardStore(make_client(args.region or settings.region))

        export_dir = settings.export_dir if settings.export_enabled and not args.no_export else None

        def on_written(result: DashboardResult) -> None:
            print(format_result(result, request))

        def on_result(result: DashboardResult) -> None:
            # Annotated dashboards were already reported by on_written
            if result.outcome is not Outcome.ANNOTATED:
                print(format_result(result, request))
            if result.export is not None and not result.export.success:
                print(f"  [WARN] Export failed: {result.export.error}")
            elif result.export is not None:
                print(f"  Exported to {result.export.path}")

        annotate_target(
            store,
            target,
            request,
            export_dir=export_dir,
            max_pages=settings.max_list_pages,
            on_discovered=print_discovered,
            on_result=on_result,
            on_written=on_written,
        )
    except CwnoteError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0
