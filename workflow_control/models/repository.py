"""Repository coordinate model."""

from pydantic import Field

from workflow_control.models.base import Model


class RepositoryCoordinate(Model):
    """Identifies the target repository and branch."""

    owner: str = Field(..., min_length=1, description="Repository owner")
    repo: str = Field(..., min_length=1, description="Repository name")
    branch: str = Field(default="main", min_length=1, description="Branch or ref")

    @classmethod
    def parse(cls, full_name: str, branch: str = "main") -> "RepositoryCoordinate":
        """Build a coordinate from ``owner/repo`` shorthand.

        Raises:
            ValueError: If ``full_name`` is not exactly two non-empty segments

        """
        owner, sep, repo = full_name.strip().partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"Expected OWNER/REPO, got {full_name!r}")
        return cls(owner=owner, repo=repo, branch=branch)

    @property
    def full_name(self) -> str:
        """Return ``owner/repo``."""
        return f"{self.owner}/{self.repo}"

    @property
    def api_path(self) -> str:
        """Server-relative API path of the repository."""
        return f"/repos/{self.owner}/{self.repo}"
