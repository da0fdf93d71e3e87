"""
Fetch the page under audit with async httpx and time the response.
"""

import ipaddress
import logging
import time
from urllib.parse import urlparse

import httpx

from .config import FETCH_TIMEOUT, FETCH_USER_AGENT
from .errors import FetchError

log = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": FETCH_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "no-cache",
}

BLOCKED_HOSTS = {"localhost", "localhost.localdomain"}


def is_private_host(hostname: str) -> bool:
    """True for localhost and for literal loopback, private, link-local or reserved IPs."""
    hostname = hostname.lower().rstrip(".")
    if hostname in BLOCKED_HOSTS or hostname.endswith(".localhost"):
        return True
    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return (
        ip.is_private or ip.is_loopback or ip.is_link_local
        or ip.is_reserved or ip.is_unspecified or ip.is_multicast
    )


async def _reject_private_redirect(request: httpx.Request) -> None:
    if is_private_host(request.url.host):
        raise FetchError(str(request.url), "redirected to a private/local address")


async def fetch_page(
    url: str,
    timeout: float = FETCH_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """
    Fetch a single page.

    Returns a dict with the requested url, the final url after redirects,
    status code, decoded body, lowercased response headers and the elapsed
    time in milliseconds. Raises FetchError on network errors, timeouts and
    non-2xx responses.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(url, f"invalid URL scheme: {parsed.scheme or '(none)'}")

    async with httpx.AsyncClient(
        headers=HEADERS,
        follow_redirects=True,
        timeout=timeout,
        transport=transport,
        event_hooks={"request": [_reject_private_redirect]},
    ) as client:
        start = time.perf_counter()
        try:
            resp = await client.get(url)
        except httpx.TimeoutException as e:
            log.warning("Timed out fetching %s: %s", url, e)
            raise FetchError(url, "timed out") from e
        except httpx.HTTPError as e:
            log.warning("Error fetching %s: %s", url, e)
            raise FetchError(url, str(e) or type(e).__name__) from e
        response_time_ms = int((time.perf_counter() - start) * 1000)

    if not resp.is_success:
        log.warning("Fetching %s returned HTTP %s", url, resp.status_code)
        raise FetchError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)

    return {
        "url": url,
        "final_url": str(resp.url),
        "status_code": resp.status_code,
        "html": resp.text,
        "headers": {k.lower(): v for k, v in resp.headers.items()},
        "response_time_ms": response_time_ms,
    }
