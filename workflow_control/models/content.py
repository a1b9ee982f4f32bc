"""Pydantic models for repository contents API responses."""

from workflow_control.models.base import Model


class ContentFile(Model):
    """A file entry from the contents API.

    ``sha`` is the blob sha used as the optimistic-concurrency token on update.
    """

    sha: str
    path: str
    name: str | None = None
    type: str = "file"
    html_url: str | None = None


class CommitReference(Model):
    """Commit created by a contents write."""

    sha: str
    html_url: str | None = None


class FileCommitResponse(Model):
    """Response from create or update file contents API."""

    content: ContentFile | None = None
    commit: CommitReference
