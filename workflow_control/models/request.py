"""Request-side value types handed to the core by the command layer."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class FileTarget:
    """A repository path about to be written.

    ``sha`` is filled by resolution and never reused across invocations.
    """

    path: str
    sha: str | None = None


@dataclass(frozen=True, kw_only=True)
class FileState:
    """Observed state of a repository path."""

    exists: bool
    sha: str | None = None


@dataclass(frozen=True, kw_only=True)
class DispatchRequest:
    """Parameters for a manual workflow run.

    Inputs are sent as given; the forge validates them against the workflow.
    """

    ref: str = "main"
    inputs: Mapping[str, str | bool] = field(default_factory=dict)
