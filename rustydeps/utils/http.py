"""
HTTP client utilities for rustydeps.

This module provides an asynchronous HTTP client with optional retries,
concurrency control and uniform error reporting. Retries are disabled by
default; failures surface immediately as :class:`NetworkError`.
"""

from __future__ import annotations

import httpx
import random
import asyncio
from typing import Any, Optional

from rustydeps.utils.logger import get_logger
from rustydeps.__version__ import __version__
from rustydeps.exceptions import NetworkError
from rustydeps.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAX_CONCURRENCY,
    USER_AGENT_TEMPLATE,
)

logger = get_logger("http")


class HTTPClient:
    """Asynchronous HTTP client with optional retries and concurrency control.

    Args:
        timeout: Request timeout in seconds.
        max_retries: Number of extra attempts after a timeout, connection
            error or 5xx response. ``0`` disables retrying.
        verify_ssl: Whether to verify SSL certificates.
        user_agent: Custom User-Agent header value.
        max_concurrency: Maximum number of concurrent requests.

    Example:
        >>> async with HTTPClient() as client:
        ...     text = await client.get_text("https://index.crates.io/se/rd/serde")
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent or USER_AGENT_TEMPLATE.format(version=__version__)
        self.max_concurrency = max_concurrency

        self._client: Optional[httpx.AsyncClient] = None
        self._semaphore = asyncio.Semaphore(max_concurrency)

    async def __aenter__(self) -> "HTTPClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> None:
        """Initialize the underlying httpx client if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                http2=True,
                verify=self.verify_ssl,
                follow_redirects=True,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept-Encoding": "gzip",
                },
            )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Execute an HTTP request, retrying transient failures if enabled."""
        await self._ensure_client()
        assert self._client is not None

        last_exc: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            try:
                async with self._semaphore:
                    response = await self._client.request(method, url, **kwargs)

                response.raise_for_status()
                return response

            except httpx.TimeoutException as exc:
                last_exc = exc
                logger.warning(
                    "Request timeout (%d/%d): %s",
                    attempt + 1,
                    self.max_retries + 1,
                    url,
                )

            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if status < 500:
                    raise NetworkError(
                        f"HTTP {status} error for {url}",
                        url=url,
                        status_code=status,
                        response_body=exc.response.text,
                    ) from exc
                last_exc = exc
                logger.warning(
                    "HTTP %d error (%d/%d): %s",
                    status,
                    attempt + 1,
                    self.max_retries + 1,
                    url,
                )

            except httpx.TransportError as exc:
                last_exc = exc
                logger.warning(
                    "Network error (%d/%d): %s",
                    attempt + 1,
                    self.max_retries + 1,
                    exc,
                )

            if attempt < self.max_retries:
                delay = (2**attempt) + random.uniform(0.0, 0.3)
                logger.debug("Retrying in %.2fs", delay)
                await asyncio.sleep(delay)

        last_status = (
            last_exc.response.status_code
            if isinstance(last_exc, httpx.HTTPStatusError)
            else None
        )
        raise NetworkError(
            f"Request failed after {self.max_retries + 1} attempt(s): {url}",
            url=url,
            status_code=last_status,
        ) from last_exc

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Perform a GET request."""
        return await self._request_with_retry("GET", url, **kwargs)

    async def get_text(self, url: str, **kwargs: Any) -> str:
        """Fetch a URL and return the decoded response body."""
        response = await self.get(url, **kwargs)
        return response.text
