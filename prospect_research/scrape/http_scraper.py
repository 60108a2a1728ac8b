"""Async HTTP fetching with browser-like headers and explicit timeouts."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from prospect_research.config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


@dataclass
class FetchedPage:
    """A successfully fetched HTML document."""
    url: str
    status_code: int
    html: str
    headers: dict[str, str] = field(default_factory=dict)


def build_client(
    user_agent: str = DEFAULT_USER_AGENT,
    max_redirects: int = 5,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the shared client used for every research request."""
    return httpx.AsyncClient(
        headers=_get_headers(user_agent),
        follow_redirects=True,
        max_redirects=max_redirects,
        verify=False,
        transport=transport,
    )


def _get_headers(user_agent: str) -> dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Upgrade-Insecure-Requests": "1",
    }


async def fetch_page(
    client: httpx.AsyncClient, url: str, timeout: float = 10.0,
) -> tuple[FetchedPage | None, str | None]:
    """Fetch a URL and return (page, error_message).

    Returns (page, None) on success or (None, error_string) on failure.
    Never raises for network problems: a failed fetch means "no data
    from this source".
    """
    try:
        response = await client.get(url, timeout=timeout)
    except httpx.TimeoutException:
        return None, "timeout"
    except httpx.TooManyRedirects:
        return None, "too_many_redirects"
    except httpx.HTTPError as e:
        return None, str(e)[:100] or type(e).__name__

    if response.status_code >= 400:
        return None, f"HTTP {response.status_code}"

    content_type = response.headers.get("content-type", "")
    if content_type and "html" not in content_type and "text/plain" not in content_type:
        return None, f"Non-HTML content: {content_type[:50]}"

    return FetchedPage(
        url=str(response.url),
        status_code=response.status_code,
        html=response.text,
        headers={k.lower(): v for k, v in response.headers.items()},
    ), None


async def probe_url(
    client: httpx.AsyncClient, url: str, timeout: float = 5.0,
) -> bool:
    """Return True if the URL answers with a status below 400."""
    try:
        response = await client.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        logger.debug("Probe failed for %s: %s", url, e)
        return False
    return response.status_code < 400
