import asyncio
import dataclasses
from urllib.parse import urlparse

import pytest

from siteaudit import engine
from siteaudit.engine import PageSnapshot, analyze_page, run_audit
from siteaudit.errors import FetchError
from siteaudit.scorer import total_score

BARE_HTTP_PAGE = '<html><body><img src="x.jpg"><p>Nothing here</p></body></html>'


def snapshot(html: str, url: str = "https://acme.example/", headers: dict | None = None) -> PageSnapshot:
    return PageSnapshot.from_fetch({
        "url": url,
        "html": html,
        "headers": headers or {},
        "response_time_ms": 150,
    })


def test_snapshot_is_immutable_with_lowercased_headers() -> None:
    page = snapshot("", headers={"X-Frame-Options": "DENY"})

    assert page.headers == {"x-frame-options": "DENY"}
    assert page.url.scheme == "https"
    with pytest.raises(dataclasses.FrozenInstanceError):
        page.html = "changed"
    with pytest.raises(TypeError):
        page.headers["x-frame-options"] = "SAMEORIGIN"


def test_directly_built_snapshot_copies_and_freezes_headers() -> None:
    headers = {"X-Frame-Options": "DENY"}
    page = PageSnapshot(
        url=urlparse("https://acme.example/"),
        html="",
        response_time_ms=0,
        headers=headers,
    )
    headers["X-Frame-Options"] = "SAMEORIGIN"

    assert page.headers == {"x-frame-options": "DENY"}
    with pytest.raises(TypeError):
        page.headers["x-frame-options"] = "changed"
    assert PageSnapshot(url=page.url, html="", response_time_ms=0).headers == {}


def test_analyze_page_covers_all_categories(good_page: str) -> None:
    categories = analyze_page(snapshot(good_page))

    assert list(categories) == ["performance", "seo", "security", "mobile", "accessibility"]
    for result in categories.values():
        assert isinstance(result["score"], int)
        assert 0 <= result["score"] <= 100


def test_bare_http_page_is_penalized_everywhere() -> None:
    categories = analyze_page(snapshot(BARE_HTTP_PAGE, url="http://acme.example/"))

    assert categories["seo"]["score"] <= 100 - 15 - 12 - 10 - 8 - 8 - 2
    assert categories["security"]["score"] <= 100 - 30 - 12 - 10 - 8 - 6
    assert categories["mobile"]["score"] <= 100 - 25
    # a single image never trips the missing-dimensions rule
    assert not any("width/height" in d["message"] for d in categories["performance"]["details"])
    assert any("alt" in d["message"] for d in categories["accessibility"]["details"] if "severity" in d)


def test_analysis_is_repeatable(good_page: str) -> None:
    page = snapshot(good_page)
    assert analyze_page(page) == analyze_page(page)


def test_run_audit(fake_fetch, good_page: str) -> None:
    fake_fetch(good_page, headers={"Strict-Transport-Security": "max-age=1"}, response_time_ms=250)

    report = asyncio.run(run_audit("https://acme.example/"))

    assert report["url"] == "https://acme.example/"
    assert report["responseTime"] == 250
    scores = {name: c["score"] for name, c in report["categories"].items()}
    assert report["totalScore"] == total_score(scores)
    assert "HSTS is configured" in [d["message"] for d in report["categories"]["security"]["details"]]


def test_run_audit_propagates_fetch_errors(failing_fetch) -> None:
    with pytest.raises(FetchError) as exc:
        asyncio.run(run_audit("https://acme.example/"))
    assert exc.value.status_code == 503


def test_analyzer_fault_fails_the_whole_audit(fake_fetch, monkeypatch) -> None:
    fake_fetch()

    def boom(html):
        raise RuntimeError("unexpected input")

    monkeypatch.setattr(engine.mobile, "analyze", boom)

    with pytest.raises(RuntimeError):
        asyncio.run(run_audit("https://acme.example/"))
