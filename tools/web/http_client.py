"""Shared HTTP transport for search and fetch."""

from dataclasses import dataclass

import httpx

from utils.logger import get_logger

from .errors import NetworkError

logger = get_logger(__name__)

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_MAX_RETRIES = 1
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0 Safari/537.36"
)
DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,text/plain;q=0.8,*/*;q=0.5",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass(frozen=True)
class FetchResponse:
    url: str  # final URL after redirects
    status_code: int
    content_type: str
    text: str


class HttpFetchClient:
    """
    Thin wrapper around a pooled httpx.Client.

    Configuration is fixed at construction. Every transport failure is
    re-raised as NetworkError so callers only deal with one error type.
    """

    def __init__(
        self,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        max_retries: int = DEFAULT_MAX_RETRIES,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Args:
            timeout_s: Default timeout for each request
            max_retries: Connection-level retries performed by the transport
            user_agent: User-Agent header sent with every request
            transport: Optional transport override (tests pass httpx.MockTransport)
        """
        self.timeout_s = timeout_s
        self.max_retries = max_retries
        self._client = httpx.Client(
            timeout=timeout_s,
            headers={**DEFAULT_HEADERS, "User-Agent": user_agent},
            follow_redirects=True,
            transport=transport or httpx.HTTPTransport(retries=max_retries),
        )

    def get(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> FetchResponse:
        """
        Issue a GET request.

        Raises:
            NetworkError: invalid URL, unreachable host, timeout or non-2xx status
        """
        self._check_url(url)
        timeout = timeout_s if timeout_s is not None else self.timeout_s
        try:
            response = self._client.get(url, params=params, timeout=timeout)
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout after {timeout}s: {url}")
            raise NetworkError(
                f"GET {url} timed out after {timeout}s", url=url, reason="timeout", retryable=True
            ) from e
        except httpx.InvalidURL as e:
            raise NetworkError(f"Invalid URL: {url}", url=url, reason="invalid_url") from e
        except httpx.UnsupportedProtocol as e:
            raise NetworkError(f"Unsupported URL scheme: {url}", url=url, reason="invalid_url") from e
        except httpx.RequestError as e:
            logger.warning(f"Request failed for {url}: {type(e).__name__}: {e}")
            raise NetworkError(
                f"GET {url} failed: {type(e).__name__}: {e}",
                url=url,
                reason="unreachable",
                retryable=True,
            ) from e

        if not response.is_success:
            raise NetworkError.for_status(url, response.status_code)

        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            content_type=response.headers.get("content-type", "").lower(),
            text=response.text,
        )

    @staticmethod
    def _check_url(url: str) -> None:
        """Only absolute http(s) URLs are fetched."""
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError) as e:
            raise NetworkError(f"Invalid URL: {url}", url=str(url), reason="invalid_url") from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise NetworkError(
                f"Not an absolute http(s) URL: {url}", url=str(url), reason="invalid_url"
            )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpFetchClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
