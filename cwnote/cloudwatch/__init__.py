"""CloudWatch access for cwnote.

Return type conventions:
- DashboardStore methods raise cwnote errors on failure; they never return
  partial results.
- Discovery functions return names in backend listing order; an empty list
  means nothing matched.
"""

from cwnote.cloudwatch.client import (
    DashboardPage,
    DashboardStore,
    make_client,
)
from cwnote.cloudwatch.discovery import (
    list_dashboards_matching,
    list_dashboards_by_suffix,
    list_dashboards_by_prefix,
)

__all__ = [
    # client
    "DashboardPage",
    "DashboardStore",
    "make_client",
    # discovery
    "list_dashboards_matching",
    "list_dashboards_by_suffix",
    "list_dashboards_by_prefix",
]
