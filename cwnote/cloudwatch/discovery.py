"""
Dashboard discovery.

Walks ListDashboards pages and keeps the names that match. Names are
returned in the order the backend lists them.
"""

import logging
from typing import Callable

from cwnote.lib.config import DEFAULT_MAX_LIST_PAGES
from cwnote.lib.errors import BackendError

logger = logging.getLogger(__name__)


def list_dashboards_matching(
    store,
    predicate: Callable[[str], bool],
    name_prefix: str | None = None,
    max_pages: int = DEFAULT_MAX_LIST_PAGES,
) -> list[str]:
    """
    Collect dashboard names accepted by predicate across all pages.

    Paging continues while the backend returns a non-empty NextToken.

    Args:
        store: DashboardStore (or anything with list_dashboards)
        predicate: Called with each dashboard name
        name_prefix: Optional server-side prefix passed to ListDashboards
        max_pages: Stop with an error after this many pages

    Raises:
        BackendError: If a page fails or max_pages is exceeded
    """
    result = []
    next_token = None
    pages = 0

    while True:
        if pages >= max_pages:
            raise BackendError(
                f"Dashboard listing did not finish after {max_pages} pages "
                f"(last NextToken {next_token!r})"
            )
        page = store.list_dashboards(next_token=next_token, name_prefix=name_prefix)
        pages += 1
        logger.debug(f"ListDashboards page {pages}: {len(page.names)} dashboard(s)")

        result.extend(name for name in page.names if predicate(name))

        if not page.next_token:
            break
        next_token = page.next_token

    return result


def list_dashboards_by_suffix(store, suffix: str, max_pages: int = DEFAULT_MAX_LIST_PAGES) -> list[str]:
    """Names ending with suffix (exact, case-sensitive)."""
    return list_dashboards_matching(store, lambda name: name.endswith(suffix), max_pages=max_pages)


def list_dashboards_by_prefix(store, prefix: str, max_pages: int = DEFAULT_MAX_LIST_PAGES) -> list[str]:
    """Names starting with prefix (exact, case-sensitive)."""
    return list_dashboards_matching(
        store,
        lambda name: name.startswith(prefix),
        name_prefix=prefix,
        max_pages=max_pages,
    )
