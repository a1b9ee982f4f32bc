"""Pydantic models for GitHub Actions workflow API responses."""

from collections.abc import Sequence
from datetime import datetime

from workflow_control.models.base import Model


class Workflow(Model):
    """A workflow definition from the Actions API."""

    id: int
    name: str
    path: str
    state: str
    created_at: datetime
    updated_at: datetime
    html_url: str | None = None


class WorkflowsResponse(Model):
    """Response from list repository workflows API."""

    total_count: int
    workflows: Sequence[Workflow]
