# ABOUTME: HTTP client for the external catalog and text-generation services.
# ABOUTME: Single-shot by default, optional retry with backoff, injectable transport for tests.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

from shelves import __version__

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

DEFAULT_TIMEOUT = 15.0


class CatalogFetchError(Exception):
    """Raised when a request to an external service fails or returns non-JSON."""


@runtime_checkable
class HttpClient(Protocol):
    """JSON-over-HTTP operations used by the catalog and generation adapters."""

    def get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]: ...

    def post(
        self,
        url: str,
        json: dict[str, Any],
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]: ...


class CatalogHttpClient:
    """httpx.Client wrapper that returns decoded JSON bodies.

    Requests are tried once unless max_retries is raised; retries apply only
    to 429 and 5xx responses and back off exponentially.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": f"shelves/{__version__}"},
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    def get(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a GET request and decode the JSON reply.

        Raises:
            CatalogFetchError: On transport errors, non-200 replies, or exhausted retries.
        """
        return self._send("GET", url, params=params)

    def post(
        self,
        url: str,
        json: dict[str, Any],
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a JSON POST request and decode the JSON reply.

        Raises:
            CatalogFetchError: On transport errors, non-200 replies, or exhausted retries.
        """
        return self._send("POST", url, params=params, json=json)

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                raise CatalogFetchError(f"Request failed: {url}: {exc}") from exc
            last_status = response.status_code

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as exc:
                    raise CatalogFetchError(f"Invalid JSON from {url}") from exc

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise CatalogFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise CatalogFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")
