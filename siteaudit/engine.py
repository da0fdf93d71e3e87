"""
Main audit engine — orchestrates fetch, extract, analyze, score.
"""

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from urllib.parse import ParseResult, urlparse

from .analyzers import accessibility, mobile, performance, security, seo
from .extractor import extract_resources
from .fetcher import fetch_page
from .scorer import build_report

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageSnapshot:
    """Everything the analyzers see about one fetched page."""

    url: ParseResult
    html: str
    response_time_ms: int
    headers: Mapping[str, str] | None = None

    def __post_init__(self):
        # read-only copy with lowercased names
        headers = MappingProxyType({k.lower(): v for k, v in (self.headers or {}).items()})
        object.__setattr__(self, "headers", headers)

    @classmethod
    def from_fetch(cls, fetch_result: dict) -> "PageSnapshot":
        return cls(
            url=urlparse(fetch_result["url"]),
            html=fetch_result.get("html") or "",
            response_time_ms=int(fetch_result.get("response_time_ms", 0)),
            headers=fetch_result.get("headers", {}),
        )


def analyze_page(page: PageSnapshot) -> dict[str, dict]:
    """Run the five category analyzers over one snapshot."""
    resources = extract_resources(page.html)
    return {
        "performance": performance.analyze(page.response_time_ms, page.html, resources),
        "seo": seo.analyze(page.html, page.url),
        "security": security.analyze(page.url, page.headers, page.html),
        "mobile": mobile.analyze(page.html),
        "accessibility": accessibility.analyze(page.html),
    }


async def run_audit(url: str) -> dict:
    """
    Run a full audit on the given URL.

    Args:
        url: The URL to audit (already validated as http/https)

    Returns:
        The report dict built by scorer.build_report

    Raises:
        FetchError: the page could not be fetched. Analyzer exceptions
        propagate unchanged; no partial report is ever returned.
    """
    start = time.perf_counter()

    fetch_result = await fetch_page(url)
    page = PageSnapshot.from_fetch(fetch_result)
    categories = analyze_page(page)
    report = build_report(categories, url=url, response_time_ms=page.response_time_ms)

    log.info(
        "Audited %s: total=%s in %dms",
        url, report["totalScore"], int((time.perf_counter() - start) * 1000),
    )
    return report
