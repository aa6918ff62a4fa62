"""
Page Fetcher - Single time-boxed HTTP GET per page.

Architecture:
1. Seed URL normalization and origin derivation
2. One GET with redirects followed and a hard per-request timeout
3. Outcome returned as FetchSuccess | FetchFailure (never raised)

There is no retry: a failed fetch is the caller's signal to degrade.
"""

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlparse

import httpx

from auditor.config import settings
from auditor.errors import InvalidSiteUrlError
from auditor.logger import logger


DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_site_url(value: str) -> str:
    """Normalize a bare domain or URL into an absolute http(s) URL.

    Raises:
        InvalidSiteUrlError: if no auditable origin can be derived.
    """
    if value is None or not value.strip():
        raise InvalidSiteUrlError(str(value), "empty input")

    url = value.strip()
    lowered = url.lower()
    if not lowered.startswith(("http://", "https://")):
        if "://" in url:
            raise InvalidSiteUrlError(value, f"unsupported scheme: {url.split('://', 1)[0]}")
        url = "https://" + url

    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        parsed.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidSiteUrlError(value, str(e)) from e

    if not hostname:
        raise InvalidSiteUrlError(value, "missing hostname")
    if any(c.isspace() for c in hostname):
        raise InvalidSiteUrlError(value, "hostname contains whitespace")

    try:
        httpx.URL(url).host  # IDNA-decodes xn-- labels
    except (httpx.InvalidURL, UnicodeError) as e:
        raise InvalidSiteUrlError(value, f"invalid hostname: {e}") from e

    return url


def get_origin(url: str) -> str:
    """Return scheme://host[:port] with default ports dropped."""
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    host = (parsed.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parsed.port
    if port and port != DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


@dataclass(frozen=True)
class FetchSuccess:
    """A response was received (any HTTP status)."""
    url: str
    status_code: int
    html: str
    final_url: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 400


@dataclass(frozen=True)
class FetchFailure:
    """No response was received."""
    url: str
    reason: str  # 'timeout' | 'network_error' | 'invalid_url'
    error: str = ""

    @property
    def is_success(self) -> bool:
        return False


FetchResult = Union[FetchSuccess, FetchFailure]


class PageFetcher:
    """Fetches one URL at a time with a hard timeout."""

    def __init__(
        self,
        timeout_ms: Optional[int] = None,
        user_agent: Optional[str] = None,
        max_redirects: Optional[int] = None,
    ):
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.PAGE_TIMEOUT_MS
        self.user_agent = user_agent or settings.USER_AGENT
        self.max_redirects = max_redirects if max_redirects is not None else settings.HTTP_MAX_REDIRECTS

    async def fetch(self, url: str) -> FetchResult:
        """Fetch a page.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchSuccess with status and body, or FetchFailure on timeout,
            transport error or an unusable URL
        """
        try:
            async with httpx.AsyncClient(
                follow_redirects=True,
                max_redirects=self.max_redirects,
                timeout=self.timeout_ms / 1000,
            ) as client:
                response = await client.get(
                    url,
                    headers={
                        "User-Agent": self.user_agent,
                        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                    }
                )
                logger.debug(f"GET {url} -> {response.status_code}")
                return FetchSuccess(
                    url=url,
                    status_code=response.status_code,
                    html=response.text,
                    final_url=str(response.url),
                )

        except httpx.TimeoutException as e:
            logger.warning(f"Timeout fetching {url} after {self.timeout_ms}ms")
            return FetchFailure(url=url, reason="timeout", error=str(e) or "timeout")
        except (httpx.InvalidURL, httpx.UnsupportedProtocol, UnicodeError) as e:
            # UnicodeError: host labels that fail IDNA decoding
            logger.warning(f"Invalid URL {url}: {e}")
            return FetchFailure(url=url, reason="invalid_url", error=str(e))
        except httpx.HTTPError as e:
            logger.warning(f"HTTP error fetching {url}: {e}")
            return FetchFailure(url=url, reason="network_error", error=str(e))
