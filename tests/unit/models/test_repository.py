"""Tests for repository coordinate model."""

import pytest
from pydantic import ValidationError

from workflow_control.models.repository import RepositoryCoordinate


def test_parse_full_name() -> None:
    """Parses OWNER/REPO shorthand."""
    coordinate = RepositoryCoordinate.parse("octo/hello", branch="dev")

    assert coordinate.owner == "octo"
    assert coordinate.repo == "hello"
    assert coordinate.branch == "dev"
    assert coordinate.full_name == "octo/hello"
    assert coordinate.api_path == "/repos/octo/hello"


@pytest.mark.parametrize("full_name", ["", "octo", "octo/", "/hello", "a/b/c"])
def test_parse_rejects_malformed_names(full_name: str) -> None:
    """Rejects anything but two non-empty segments."""
    with pytest.raises(ValueError, match="OWNER/REPO"):
        RepositoryCoordinate.parse(full_name)


@pytest.mark.parametrize("field", ["owner", "repo", "branch"])
def test_fields_must_not_be_empty(field: str) -> None:
    """All coordinate fields are non-empty strings."""
    values = {"owner": "octo", "repo": "hello", "branch": "main", field: ""}

    with pytest.raises(ValidationError):
        RepositoryCoordinate(**values)


def test_is_frozen() -> None:
    """Coordinates are immutable."""
    coordinate = RepositoryCoordinate(owner="octo", repo="hello")

    with pytest.raises(ValidationError):
        coordinate.owner = "other"  # type: ignore[misc]
