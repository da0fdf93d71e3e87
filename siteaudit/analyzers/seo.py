"""SEO analyzer — 25% weight."""

import re
from urllib.parse import ParseResult

TITLE = re.compile(r"<title[^>]*>([\s\S]*?)</title>", re.IGNORECASE)
META_DESCRIPTION = (
    re.compile(r"<meta[^>]*name=[\"']description[\"'][^>]*content=[\"']([^\"']*)[\"']", re.IGNORECASE),
    re.compile(r"<meta[^>]*content=[\"']([^\"']*)[\"'][^>]*name=[\"']description[\"']", re.IGNORECASE),
)
H1 = re.compile(r"<h1[^>]*>[\s\S]*?</h1>", re.IGNORECASE)
CANONICAL = re.compile(r"<link[^>]*rel=[\"']canonical[\"'][^>]*href=[\"']([^\"']+)[\"']", re.IGNORECASE)
IMG_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
JSON_LD = re.compile(r"<script[^>]*type=[\"']application/ld\+json[\"']", re.IGNORECASE)
MICRODATA = re.compile(r"itemscope|itemtype", re.IGNORECASE)
HTML_LANG = re.compile(r"<html[^>]*lang=[\"'][^\"']+[\"']", re.IGNORECASE)

OPEN_GRAPH_PROPERTIES = ("og:title", "og:description", "og:image", "og:url")

# (applies, points, severity, message); first matching rule wins, "success" costs nothing
TITLE_LENGTH_RULES = [
    (lambda n: n < 10, 10, "warning", "Title is too short: {n} characters (recommended 50-60)"),
    (lambda n: n > 70, 5, "warning", "Title is too long: {n} characters (recommended 50-60)"),
    (lambda n: 50 <= n <= 60, 0, "success", "Optimal title length: {n} characters"),
]

DESCRIPTION_LENGTH_RULES = [
    (lambda n: n < 70, 6, "warning", "Meta description is too short: {n} characters (recommended 150-160)"),
    (lambda n: n > 160, 3, "info", "Meta description is a bit long: {n} characters (may be truncated)"),
]

H1_COUNT_RULES = [
    (lambda n: n == 0, 10, "critical", "Missing H1 heading"),
    (lambda n: n > 1, 5, "warning", "Multiple H1 headings: {n} (should have exactly one)"),
    (lambda n: n == 1, 0, "success", "Correct use of a single H1 heading"),
]

OPEN_GRAPH_RULES = [
    (lambda n: n == 0, 8, "warning", "Missing Open Graph tags (affects social sharing)"),
    (lambda n: n < len(OPEN_GRAPH_PROPERTIES), 4, "info",
     "Incomplete Open Graph tags ({n}/%d)" % len(OPEN_GRAPH_PROPERTIES)),
    (lambda n: True, 0, "success", "Complete Open Graph implementation"),
]


def _meta_description(html: str) -> str | None:
    for pattern in META_DESCRIPTION:
        m = pattern.search(html)
        if m:
            return m.group(1)
    return None


def analyze(html: str, url: ParseResult) -> dict:
    """
    Score on-page search signals: title, description, headings, canonical,
    Open Graph, image alt text, structured data and document language.

    ``url`` is the audited page's parsed URL; no current rule depends on it.
    """
    score = 100
    successes = []
    issues = []

    def issue(sev, message, pts):
        nonlocal score
        score -= pts
        issues.append({"severity": sev, "message": message})

    def success(message):
        successes.append({"type": "success", "message": message})

    def rule(value, rules):
        for applies, pts, sev, message in rules:
            if applies(value):
                if sev == "success":
                    success(message.format(n=value))
                else:
                    issue(sev, message.format(n=value), pts)
                return

    # Title
    title_match = TITLE.search(html)
    if not title_match:
        issue("critical", "Missing title tag", 15)
    else:
        rule(len(title_match.group(1).strip()), TITLE_LENGTH_RULES)

    # Meta description
    desc = _meta_description(html)
    if desc is None:
        issue("critical", "Missing meta description", 12)
    else:
        rule(len(desc), DESCRIPTION_LENGTH_RULES)

    # H1
    rule(len(H1.findall(html)), H1_COUNT_RULES)

    # Canonical
    if CANONICAL.search(html):
        success("Canonical URL is defined")
    else:
        issue("warning", "Missing canonical URL", 8)

    # Open Graph
    og_count = sum(
        1 for prop in OPEN_GRAPH_PROPERTIES
        if re.search(rf"<meta[^>]*property=[\"']{prop}[\"']", html, re.IGNORECASE)
    )
    rule(og_count, OPEN_GRAPH_RULES)

    # Image alt attributes
    no_alt = sum(1 for tag in IMG_TAG.findall(html) if "alt=" not in tag.lower())
    if no_alt:
        issue("warning", f"{no_alt} images are missing alt text", min(10, no_alt * 2))

    # Structured data
    if JSON_LD.search(html) or MICRODATA.search(html):
        success("Structured data is implemented")
    else:
        issue("info", "Missing structured data (Schema.org)", 5)

    # Language
    if not HTML_LANG.search(html):
        issue("info", "Missing language declaration (lang attribute)", 3)

    return {
        "name": "seo",
        "label": "SEO",
        "score": max(0, min(100, score)),
        "details": successes + issues,
    }
