import pytest

from siteaudit import engine
from siteaudit.errors import FetchError

GOOD_PAGE = """<!doctype html>
<html lang="en">
<head>
<title>Acme Widgets | Handmade widgets shipped across Norway</title>
<meta name="description" content="{description}">
<meta name="viewport" content="width=device-width, initial-scale=1">
<link rel="canonical" href="https://acme.example/">
<link rel="manifest" href="/manifest.webmanifest">
<link rel="apple-touch-icon" href="/icon.png">
<meta property="og:title" content="Acme Widgets">
<meta property="og:description" content="Handmade widgets">
<meta property="og:image" content="https://acme.example/og.png">
<meta property="og:url" content="https://acme.example/">
<script type="application/ld+json">{{"@type": "Organization"}}</script>
<style>
@media (max-width: 600px) {{ body {{ margin: 0; }} }}
@media (min-width: 601px) {{ body {{ margin: 1em; }} }}
@media screen and (orientation: landscape) {{ body {{ padding: 0; }} }}
</style>
</head>
<body>
<header><nav><a href="/">Home</a></nav></header>
<main>
<h1>Acme Widgets</h1>
<img src="/hero.webp" alt="A widget" width="800" height="400">
</main>
<footer>Acme</footer>
</body>
</html>
""".format(description="d" * 155)


@pytest.fixture
def good_page() -> str:
    return GOOD_PAGE


@pytest.fixture
def fake_fetch(monkeypatch):
    """Replace the engine's fetcher with one that serves a canned page."""

    def install(html: str = GOOD_PAGE, headers: dict | None = None, response_time_ms: int = 120):
        async def fetch(url: str) -> dict:
            return {
                "url": url,
                "final_url": url,
                "status_code": 200,
                "html": html,
                "headers": headers or {},
                "response_time_ms": response_time_ms,
            }

        monkeypatch.setattr(engine, "fetch_page", fetch)

    return install


@pytest.fixture
def failing_fetch(monkeypatch):
    async def fetch(url: str) -> dict:
        raise FetchError(url, "HTTP 503", status_code=503)

    monkeypatch.setattr(engine, "fetch_page", fetch)
