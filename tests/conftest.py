"""Test doubles shared by the cwnote tests."""

import json

from cwnote.cloudwatch.client import DashboardPage
from cwnote.lib.errors import DashboardNotFound


class FakeStore:
    """In-memory stand-in for DashboardStore.

    bodies maps dashboard name to body string. Listing returns all names in
    pages of page_size, with tokens "p1", "p2", ...
    """

    def __init__(self, bodies: dict, page_size: int = 100):
        self.bodies = dict(bodies)
        self.page_size = page_size
        self.gets = []
        self.puts = []
        self.list_calls = 0

    def get_dashboard(self, name):
        self.gets.append(name)
        if name not in self.bodies:
            raise DashboardNotFound(f"Dashboard {name} not found", name)
        return self.bodies[name]

    def put_dashboard(self, name, body):
        self.puts.append((name, body))
        self.bodies[name] = body
        return []

    def list_dashboards(self, next_token=None, name_prefix=None):
        self.list_calls += 1
        names = list(self.bodies)
        start = int(next_token[1:]) * self.page_size if next_token else 0
        end = start + self.page_size
        token = f"p{end // self.page_size}" if end < len(names) else None
        return DashboardPage(names[start:end], token)


def metric_body(*titles, extra_widgets=()):
    widgets = [{"type": "metric", "properties": {"title": t}} for t in titles]
    return json.dumps({"widgets": list(extra_widgets) + widgets})
