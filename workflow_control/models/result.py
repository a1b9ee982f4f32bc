"""Typed outcomes of workflow control operations."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from workflow_control.models.content import CommitReference
from workflow_control.models.workflow import Workflow


@dataclass(frozen=True, kw_only=True)
class Dispatched:
    """Dispatch accepted by the forge.

    The API does not return the created run, so no run id is available.
    """

    kind: Literal["dispatched"] = "dispatched"
    workflow: str
    ref: str
    inputs: Mapping[str, str | bool] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class Enabled:
    """Workflow enabled."""

    kind: Literal["enabled"] = "enabled"
    workflow: str


@dataclass(frozen=True, kw_only=True)
class Disabled:
    """Workflow disabled."""

    kind: Literal["disabled"] = "disabled"
    workflow: str


@dataclass(frozen=True, kw_only=True)
class Status:
    """Metadata of a single workflow."""

    kind: Literal["status"] = "status"
    workflow: Workflow


@dataclass(frozen=True, kw_only=True)
class Listed:
    """Every workflow of a repository, in API order."""

    kind: Literal["list"] = "list"
    workflows: Sequence[Workflow]


@dataclass(frozen=True, kw_only=True)
class Published:
    """File content written to the repository."""

    kind: Literal["published"] = "published"
    path: str
    branch: str
    created: bool
    commit: CommitReference
    html_url: str | None = None


type OperationResult = Dispatched | Enabled | Disabled | Status | Listed | Published
