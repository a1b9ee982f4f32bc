"""Fixtures for integration tests against a mocked forge API."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from workflow_control.config import ForgeConfig
from workflow_control.models.repository import RepositoryCoordinate
from workflow_control.transport import HttpTransport

API_BASE_URL = "http://github.test"


@pytest.fixture
def repository() -> RepositoryCoordinate:
    """Create the target repository coordinate."""
    return RepositoryCoordinate(owner="test-owner", repo="test-repo", branch="main")


@pytest.fixture
def config(repository: RepositoryCoordinate) -> ForgeConfig:
    """Create test configuration."""
    return ForgeConfig(
        token=SecretStr("test-token"),
        repository=repository,
        api_base_url=API_BASE_URL,
    )


@pytest.fixture
async def transport(
    config: ForgeConfig, aioresponses: aioresponses_cls
) -> AsyncGenerator[HttpTransport, None]:
    """Create transport with managed session."""
    async with HttpTransport.from_config(config) as impl:
        yield impl
