"""CloudWatch dashboard store backed by boto3."""

import logging
from typing import NamedTuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cwnote.lib.errors import (
    BackendError,
    BackendWriteFailure,
    DashboardNotFound,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"ResourceNotFound", "ResourceNotFoundException"}


class DashboardPage(NamedTuple):
    """One page of ListDashboards results."""
    names: list[str]
    next_token: str | None


def make_client(region: str | None = None):
    """
    Build a CloudWatch client, optionally overriding the region.

    If region is None the SDK default chain applies (AWS_REGION,
    AWS_DEFAULT_REGION, profile config, instance metadata).
    """
    try:
        session = boto3.session.Session(region_name=region) if region else boto3.session.Session()
        client = session.client("cloudwatch")
    except BotoCoreError as e:
        raise BackendError(f"Failed to create CloudWatch client: {e}") from e
    logger.debug(f"CloudWatch client for region {client.meta.region_name}")
    return client


def _error_code(e: ClientError) -> str:
    return e.response.get("Error", {}).get("Code", "")


class DashboardStore:
    """Get, put and list dashboards.

    SDK exceptions are translated to cwnote errors here; callers never see
    botocore types.
    """

    def __init__(self, client):
        self.client = client

    def get_dashboard(self, name: str) -> str:
        """Return the dashboard body string.

        Raises:
            DashboardNotFound: If the dashboard is missing or has no body
            BackendError: On any other failure
        """
        try:
            resp = self.client.get_dashboard(DashboardName=name)
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise DashboardNotFound(f"Dashboard {name} not found", name) from e
            raise BackendError(f"Failed to get dashboard {name}: {e}", name) from e
        except BotoCoreError as e:
            raise BackendError(f"Failed to get dashboard {name}: {e}", name) from e

        body = resp.get("DashboardBody")
        if not body:
            raise DashboardNotFound(f"Dashboard {name} has no body", name)
        return body

    def put_dashboard(self, name: str, body: str) -> list[dict]:
        """Write the dashboard body and return any validation messages.

        Raises:
            BackendWriteFailure: If the write is rejected or fails in transit
        """
        try:
            resp = self.client.put_dashboard(DashboardName=name, DashboardBody=body)
        except (ClientError, BotoCoreError) as e:
            raise BackendWriteFailure(f"Failed to put updated dashboard {name}: {e}", name) from e

        messages = resp.get("DashboardValidationMessages") or []
        for msg in messages:
            logger.warning(
                f"Dashboard {name}: {msg.get('DataPath', '(root)')}: {msg.get('Message', '')}"
            )
        return messages

    def list_dashboards(
        self,
        next_token: str | None = None,
        name_prefix: str | None = None,
    ) -> DashboardPage:
        """Fetch one page of dashboard names.

        Raises:
            BackendError: If the listing call fails
        """
        params = {}
        if next_token:
            params["NextToken"] = next_token
        if name_prefix:
            params["DashboardNamePrefix"] = name_prefix

        try:
            resp = self.client.list_dashboards(**params)
        except (ClientError, BotoCoreError) as e:
            raise BackendError(f"Failed to list dashboards: {e}") from e

        names = [
            entry["DashboardName"]
            for entry in resp.get("DashboardEntries", [])
            if entry.get("DashboardName")
        ]
        return DashboardPage(names=names, next_token=resp.get("NextToken") or None)
