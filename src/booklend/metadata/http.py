# ABOUTME: HTTP client abstraction for metadata provider API calls.
# ABOUTME: Bounded timeout, one retry on transport failures, injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

DEFAULT_TIMEOUT = 3.0
DEFAULT_MAX_RETRIES = 1


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a metadata provider fails.

    ``status_code`` is set when the server answered with a non-success
    status, and is None for transport failures (timeouts, refused
    connections, undecodable bodies).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against metadata APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> Any: ...


class BooklendHttpClient:
    """HTTP client with a per-attempt timeout and bounded retry.

    Wraps httpx.Client. Each attempt is limited to ``timeout`` seconds;
    timeouts, transport errors, and transient statuses (429, 5xx) are
    retried up to ``max_retries`` more times. Every other status fails
    immediately.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = 0.5,
        min_request_interval: float = 0.1,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": "booklend/0.1.0"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._min_interval = min_request_interval
        self._last_request_time: float = 0.0

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request with retry.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataFetchError: On non-retryable HTTP errors or exhausted retries.
        """
        attempts = 1 + self._max_retries
        last_error = ""
        last_status: int | None = None
        for attempt in range(attempts):
            self._rate_limit()
            try:
                response = self._client.get(url, params=params)
            except httpx.TransportError as exc:
                last_error = f"{type(exc).__name__}: {exc}"
                last_status = None
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc
            else:
                last_status = response.status_code
                if response.status_code == 200:
                    try:
                        return response.json()
                    except ValueError as exc:
                        raise MetadataFetchError(f"Invalid JSON from {url}: {exc}") from exc
                if response.status_code not in _RETRYABLE_STATUS_CODES:
                    raise MetadataFetchError(
                        f"HTTP {response.status_code} from {url}",
                        status_code=response.status_code,
                    )
                last_error = f"HTTP {response.status_code}"

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "%s from %s, retrying in %.1fs (attempt %d/%d)",
                    last_error,
                    url,
                    delay,
                    attempt + 1,
                    attempts,
                )
                if delay > 0:
                    time.sleep(delay)

        raise MetadataFetchError(
            f"{last_error} from {url} after {attempts} attempts", status_code=last_status
        )

    def close(self) -> None:
        self._client.close()

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
