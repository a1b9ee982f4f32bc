"""Authenticated HTTP transport for the forge REST API."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Literal

import aiohttp
from pydantic import BaseModel, ValidationError

from workflow_control.config import ForgeConfig
from workflow_control.errors import ApiError, TransportError

log = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.github.v3+json"

type Method = Literal["GET", "POST", "PUT"]


@dataclass(frozen=True, kw_only=True)
class Response:
    """A successful API response.

    ``body`` is the decoded JSON document, or the raw text when the body is
    not JSON (an empty 204 body gives ``""``). ``text`` always holds the raw
    body as received.
    """

    status: int
    body: Any
    text: str = ""

    def validate[M: BaseModel](self, model: type[M]) -> M:
        """Narrow the decoded body to ``model``.

        Raises:
            ApiError: If the body does not have the expected shape; the
                status and raw body are preserved

        """
        try:
            return model.model_validate(self.body)
        except ValidationError as exc:
            raise ApiError(
                self.status,
                f"Unexpected {model.__name__} payload: "
                f"{exc.error_count()} validation error(s)",
                self.text,
            ) from exc


def decode_body(text: str) -> Any:
    """Parse a response body as JSON, falling back to the raw text."""
    if not text:
        return text
    try:
        return json.loads(text)
    except ValueError:
        return text


@dataclass(frozen=True, kw_only=True)
class HttpTransport:
    """Issues single authenticated requests against the forge API.

    No retries are attempted. Callers interpret statuses through the raised
    ``ApiError``.
    """

    session: aiohttp.ClientSession = field(repr=False)
    base_url: str

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: ForgeConfig
    ) -> AsyncGenerator["HttpTransport", None]:
        """Create transport with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.token.get_secret_value()}",
            "Accept": ACCEPT_HEADER,
            "X-GitHub-Api-Version": config.api_version,
            "User-Agent": config.user_agent,
        }
        async with aiohttp.ClientSession(headers=headers) as session:
            yield cls(session=session, base_url=config.api_base_url)

    async def request(
        self,
        method: Method,
        path: str,
        body: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> Response:
        """Send one request and return the decoded 2xx response.

        Args:
            method: HTTP method
            path: Path relative to ``base_url``, starting with ``/``
            body: JSON-serializable payload, sent only when not None
            params: Optional query string parameters

        Raises:
            TransportError: If the request fails before a status is received
            ApiError: If the status is not 2xx

        """
        log.debug("%s %s", method, path)
        try:
            async with self.session.request(
                method, f"{self.base_url}{path}", json=body, params=params
            ) as response:
                text = await response.text()
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"{method} {path} failed: {exc!r}") from exc

        payload = decode_body(text)
        if not 200 <= status < 300:
            log.debug("%s %s -> %d", method, path, status)
            raise ApiError.from_body(status, text, payload)

        return Response(status=status, body=payload, text=text)
