"""Base Source Module

Provides the abstract base class for the external content sources and the
error types their calls can raise.
"""

import asyncio
import logging
from abc import ABC
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Optional, Sequence, Union

import aiohttp
from pydantic import ValidationError

from devportal.models.enums import ContentSource

logger = logging.getLogger(__name__)

QueryParams = Union[Mapping[str, Any], Sequence[tuple[str, Any]]]


class SourceError(Exception):
    """Base exception for a failed call to an external source."""

    def __init__(self, message: str, source: Optional[ContentSource] = None):
        self.message = message
        self.source = source
        super().__init__(message)


class SourceConfigurationError(SourceError):
    """A credential or identifier the source needs is not configured."""


class ExternalAPIError(SourceError):
    """The upstream answered with a non-2xx status or an unreadable body, or could not be reached."""

    def __init__(
        self,
        message: str,
        source: Optional[ContentSource] = None,
        status: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(message, source)
        self.status = status
        self.reason = reason


@dataclass
class SourceConfig:
    """Connection settings for one source."""

    base_url: str
    timeout_seconds: int = 30
    user_agent: str = "DevPortal/1.0"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class BaseSource(ABC):
    """Shared HTTP plumbing for the source adapters.

    Subclasses set ``source`` and ``display_name``, and may override
    ``_headers`` to add authentication. The aiohttp session is created on
    first use and must be released with ``close()``.
    """

    source: ContentSource
    display_name: str = "Upstream"

    def __init__(self, config: SourceConfig):
        self.config = config
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={
                    "User-Agent": self.config.user_agent,
                    "Accept": "application/json",
                },
            )
        return self._session

    async def close(self):
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _headers(self, token: Optional[str] = None) -> dict[str, str]:
        return {}

    def _error_message(self, status: int, reason: str, body: str) -> str:
        return f"{self.display_name} API error: {status} {reason}"

    def _invalid_response(self, detail: str) -> ExternalAPIError:
        logger.warning(f"{self.display_name} returned an unexpected payload: {detail}")
        return ExternalAPIError(
            f"{self.display_name} API returned an invalid response",
            source=self.source,
        )

    def _list_of(self, data: Any, key: Optional[str] = None) -> list[Any]:
        """The list at ``data[key]`` (or ``data`` itself when no key is given).

        A missing key counts as an empty list.

        Raises:
            ExternalAPIError: If the payload does not have that shape.
        """
        if key is not None:
            if not isinstance(data, dict):
                raise self._invalid_response(f"expected an object with '{key}'")
            data = data.get(key) or []
        if not isinstance(data, list):
            raise self._invalid_response("expected a list")
        return data

    @contextmanager
    def _parsing(self, what: str) -> Iterator[None]:
        """Report payloads that fail schema validation as ``ExternalAPIError``."""
        try:
            yield
        except ValidationError as e:
            raise self._invalid_response(f"{what}: {e.error_count()} validation error(s)") from e

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        json: Optional[dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises:
            ExternalAPIError: On a non-2xx status, a body that is not JSON,
                a transport error or a timeout.
        """
        url = f"{self.config.base_url.rstrip('/')}{path}"
        if params is not None:
            items = params.items() if isinstance(params, Mapping) else params
            params = [(key, _query_value(value)) for key, value in items if value is not None]

        session = await self._get_session()
        try:
            async with session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(token),
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    reason = response.reason or ""
                    logger.warning(
                        f"{self.display_name} request failed: {method} {path} ({response.status})"
                    )
                    raise ExternalAPIError(
                        self._error_message(response.status, reason, body),
                        source=self.source,
                        status=response.status,
                        reason=reason,
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError:
                    raise self._invalid_response(f"non-JSON body for {method} {path}")
        except asyncio.TimeoutError:
            logger.warning(f"{self.display_name} request timed out: {method} {path}")
            raise ExternalAPIError(
                f"{self.display_name} API request timed out",
                source=self.source,
            )
        except aiohttp.ClientError as e:
            logger.warning(f"{self.display_name} request error: {method} {path} - {e}")
            raise ExternalAPIError(
                f"{self.display_name} API request failed: {e}",
                source=self.source,
            )
