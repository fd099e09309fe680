"""Fetch raw HTML from the source sports site."""

from urllib.parse import quote

import httpx

BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class FetchError(Exception):
    """Raised when HTML fetch fails."""


def proxied_url(url: str, proxy: str | None) -> str:
    """Route a URL through a raw-content CORS proxy (no-op without a proxy)."""
    if not proxy:
        return url
    return proxy + quote(url, safe="")


def fetch_html(
    url: str,
    proxy: str | None = None,
    timeout: float = 20,
    client: httpx.Client | None = None,
) -> str:
    """Fetch HTML from URL.

    Args:
        url: URL to fetch
        proxy: Optional CORS proxy prefix; the target URL is appended encoded
        timeout: Request timeout in seconds
        client: Optional shared client (tests inject a mock transport here)

    Returns:
        HTML content as string

    Raises:
        FetchError: If request fails, returns non-2xx status or an empty body
    """
    target = proxied_url(url, proxy)
    headers = {"User-Agent": BROWSER_USER_AGENT}

    try:
        if client is None:
            response = httpx.get(target, headers=headers, timeout=timeout, follow_redirects=True)
        else:
            response = client.get(target, headers=headers, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"HTTP {e.response.status_code} for {url}") from e
    except httpx.RequestError as e:
        raise FetchError(f"Request failed for {url}: {e}") from e

    if not response.text.strip():
        raise FetchError(f"Empty HTML from {url}")

    return response.text
