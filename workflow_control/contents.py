"""Create-or-update of repository file contents."""

import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import quote

from workflow_control.errors import ApiError, ConfigurationError
from workflow_control.models.content import ContentFile, FileCommitResponse
from workflow_control.models.repository import RepositoryCoordinate
from workflow_control.models.request import FileState, FileTarget
from workflow_control.models.result import Published
from workflow_control.transport import HttpTransport

log = logging.getLogger(__name__)


def contents_path(repository: RepositoryCoordinate, path: str) -> str:
    """Return the contents API path for a repository file."""
    return f"{repository.api_path}/contents/{quote(path.lstrip('/'), safe='/')}"


def read_local_file(path: Path) -> bytes:
    """Read the local file to publish.

    Raises:
        ConfigurationError: If the file does not exist

    """
    if not path.is_file():
        raise ConfigurationError(f"Workflow file not found: {path.resolve()}")
    return path.read_bytes()


@dataclass(frozen=True, kw_only=True)
class ContentResolver:
    """Determines whether a repository path exists, and its blob sha."""

    transport: HttpTransport
    repository: RepositoryCoordinate

    async def resolve(self, target: FileTarget) -> FileState:
        """Look up ``target`` on the configured branch.

        Only a 404 means the file is absent. Every other error status is
        raised, since it says nothing about whether the file exists.
        """
        try:
            response = await self.transport.request(
                "GET",
                contents_path(self.repository, target.path),
                params={"ref": self.repository.branch},
            )
        except ApiError as exc:
            if exc.status == 404:
                log.info("File %s does not exist, will create new", target.path)
                return FileState(exists=False)
            raise

        if isinstance(response.body, list):
            raise ConfigurationError(f"{target.path} is a directory, not a file")

        existing = response.validate(ContentFile)
        log.info("File %s exists, will update", target.path)
        return FileState(exists=True, sha=existing.sha)


@dataclass(frozen=True, kw_only=True)
class FilePublisher:
    """Writes file content, creating or updating as the remote state requires."""

    transport: HttpTransport
    repository: RepositoryCoordinate
    resolver: ContentResolver

    @classmethod
    def for_repository(
        cls, transport: HttpTransport, repository: RepositoryCoordinate
    ) -> "FilePublisher":
        """Create a publisher with its own resolver."""
        resolver = ContentResolver(transport=transport, repository=repository)
        return cls(transport=transport, repository=repository, resolver=resolver)

    async def publish(
        self, target: FileTarget, content: bytes, subject: str
    ) -> Published:
        """Create or update ``target`` with ``content``.

        The path is always re-resolved first. When it exists, its sha is sent
        so the forge rejects the write if the file changed in between; when it
        does not, no sha is sent and a concurrent creation fails the write.
        Such conflicts are raised as ``ApiError`` and never retried.
        """
        state = await self.resolver.resolve(target)
        target = FileTarget(path=target.path, sha=state.sha)

        payload: dict[str, Any] = {
            "message": f"{'Update' if state.exists else 'Add'} {subject}",
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self.repository.branch,
        }
        if target.sha is not None:
            payload["sha"] = target.sha

        log.info(
            "Pushing %s to %s@%s (%d bytes)",
            target.path,
            self.repository.full_name,
            self.repository.branch,
            len(content),
        )
        response = await self.transport.request(
            "PUT", contents_path(self.repository, target.path), body=payload
        )
        written = response.validate(FileCommitResponse)

        return Published(
            path=target.path,
            branch=self.repository.branch,
            created=not state.exists,
            commit=written.commit,
            html_url=written.content.html_url if written.content else None,
        )
