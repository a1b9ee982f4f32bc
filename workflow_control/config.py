"""Configuration for the forge API client."""

from collections.abc import Mapping

from pydantic import BaseModel, SecretStr, ValidationError, field_validator
from yarl import URL

from workflow_control.errors import ConfigurationError
from workflow_control.models.repository import RepositoryCoordinate

TOKEN_ENV = "GITHUB_TOKEN"
REPOSITORY_ENV = "GITHUB_REPOSITORY"
API_URL_ENV = "GITHUB_API_URL"
SERVER_URL_ENV = "GITHUB_SERVER_URL"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_WEB_URL = "https://github.com"
ENTERPRISE_API_SUFFIX = "/api/v3"


class ForgeConfig(BaseModel):
    """Configuration for talking to a forge's Actions API.

    ``api_base_url`` may carry a path prefix (GitHub Enterprise serves the
    API under ``/api/v3``); it is stored without a trailing slash.
    """

    token: SecretStr
    repository: RepositoryCoordinate
    api_base_url: str = DEFAULT_API_URL
    web_base_url: str | None = DEFAULT_WEB_URL
    api_version: str = "2022-11-28"
    user_agent: str = "workflow-control/0.1.0"

    @field_validator("api_base_url", "web_base_url")
    @classmethod
    def check_absolute_url(cls, value: str | None) -> str | None:
        """Require an absolute http(s) URL and drop any trailing slash."""
        if value is None:
            return None
        url = URL(value.strip())
        if url.scheme not in {"http", "https"} or not url.host:
            raise ValueError(f"expected an absolute http(s) URL, got {value!r}")
        if url.query_string or url.fragment:
            raise ValueError(f"URL must not carry a query or fragment: {value!r}")
        return str(url).rstrip("/")


def derive_web_url(api_base_url: str) -> str | None:
    """Guess the web host serving the repositories of an API host.

    Returns None when the API URL follows neither the github.com nor the
    GitHub Enterprise layout.
    """
    url = URL(api_base_url.rstrip("/"))
    if url.host == "api.github.com":
        return DEFAULT_WEB_URL
    if url.path.endswith(ENTERPRISE_API_SUFFIX):
        prefix = url.path.removesuffix(ENTERPRISE_API_SUFFIX)
        return str(url.with_path(prefix or "/")).rstrip("/")
    return None


def load_config(
    environ: Mapping[str, str],
    *,
    repository: str | None = None,
    branch: str = "main",
    api_base_url: str | None = None,
) -> ForgeConfig:
    """Build the configuration from the environment and command-line values.

    The token is only ever read from ``environ``. Explicit arguments win over
    their environment fallbacks. The web URL comes from ``GITHUB_SERVER_URL``
    when set, otherwise it is derived from the API URL.

    Raises:
        ConfigurationError: If the token, repository or URLs are missing or
            invalid

    """
    token = environ.get(TOKEN_ENV, "").strip()
    if not token:
        raise ConfigurationError(
            f"{TOKEN_ENV} environment variable is required "
            f"(set it with: export {TOKEN_ENV}=your_token_here)"
        )

    full_name = repository or environ.get(REPOSITORY_ENV, "")
    if not full_name:
        raise ConfigurationError(
            f"Repository is required: pass --repository OWNER/REPO or set {REPOSITORY_ENV}"
        )

    api_url = api_base_url or environ.get(API_URL_ENV) or DEFAULT_API_URL
    try:
        coordinate = RepositoryCoordinate.parse(full_name, branch=branch)
        return ForgeConfig(
            token=SecretStr(token),
            repository=coordinate,
            api_base_url=api_url,
            web_base_url=environ.get(SERVER_URL_ENV) or derive_web_url(api_url),
        )
    except (ValueError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
