"""Performance analyzer — 25% weight."""

import math
import re

# (threshold, points, severity, message); first band whose threshold is exceeded applies
RESPONSE_TIME_BANDS = [
    (3000, 25, "critical", "Very slow server response: {n}ms (should be under 600ms)"),
    (1500, 15, "warning", "Slow server response: {n}ms (should be under 600ms)"),
    (600, 8, "info", "Server response could be faster: {n}ms"),
]

HTML_SIZE_BANDS = [
    (500_000, 15, "critical", "HTML document is too large: {n}KB (should be under 100KB)"),
    (200_000, 10, "warning", "HTML document is large: {n}KB"),
    (100_000, 5, "info", "HTML document is somewhat large: {n}KB"),
]

BLOCKING_SCRIPT_BANDS = [
    (5, 12, "critical", "{n} render-blocking scripts (use async/defer)"),
    (2, 6, "warning", "{n} render-blocking scripts"),
]

SCRIPT_COUNT_BANDS = [
    (25, 8, "warning", "Too many scripts: {n} (consider bundling)"),
    (15, 4, "info", "Many scripts: {n}"),
]

STYLESHEET_BANDS = [
    (8, 8, "warning", "Too many CSS files: {n} (consider combining)"),
    (4, 4, "info", "Several CSS files: {n}"),
]

STYLE_TAG = re.compile(r"<style[^>]*>", re.IGNORECASE)

# Images before this index are treated as above the fold
ABOVE_FOLD_IMAGES = 3


def analyze(response_time_ms: int, html: str, resources: dict) -> dict:
    score = 100
    successes = []
    issues = []

    def issue(sev, message, pts):
        nonlocal score
        score -= pts
        issues.append({"severity": sev, "message": message})

    def banded(value, bands, shown=None):
        for limit, pts, sev, message in bands:
            if value > limit:
                issue(sev, message.format(n=value if shown is None else shown), pts)
                return True
        return False

    # Server response time
    if not banded(response_time_ms, RESPONSE_TIME_BANDS):
        successes.append({"type": "success", "message": f"Fast server response: {response_time_ms}ms"})

    # Document size
    html_size = len(html)
    html_size_kb = math.floor(html_size / 1024 + 0.5)
    banded(html_size, HTML_SIZE_BANDS, shown=html_size_kb)

    # Scripts
    scripts = resources["scripts"]
    total_scripts = len(scripts)
    blocking_scripts = sum(
        1 for s in scripts
        if not s["is_inline"] and not s["is_async"] and not s["is_defer"]
    )
    banded(blocking_scripts, BLOCKING_SCRIPT_BANDS)
    banded(total_scripts, SCRIPT_COUNT_BANDS)

    # Stylesheets
    external_stylesheets = len(resources["stylesheets"])
    inline_styles = len(STYLE_TAG.findall(html))
    banded(external_stylesheets, STYLESHEET_BANDS)

    # Images
    images = resources["images"]
    if images:
        no_dimensions = sum(1 for img in images if not img["has_dimensions"])
        not_lazy = sum(
            1 for img in images[ABOVE_FOLD_IMAGES:] if not img["has_lazy_loading"]
        )
        legacy_format = sum(
            1 for img in images if img["src"] and not img["is_modern_format"]
        )

        if no_dimensions > 3:
            issue("warning", f"{no_dimensions} images are missing width/height (causes layout shift)", 6)
        if not_lazy > 5:
            issue("warning", f"{not_lazy} below-the-fold images are missing lazy loading", 5)
        if legacy_format > 5 and len(images) > 3:
            issue("info", f"{legacy_format} images do not use modern formats (WebP/AVIF)", 5)

    # Iframes
    iframes_not_lazy = sum(1 for f in resources["iframes"] if not f["has_lazy_loading"])
    if iframes_not_lazy:
        issue("info", f"{iframes_not_lazy} iframes are missing lazy loading", 3)

    return {
        "name": "performance",
        "label": "Performance",
        "score": max(0, min(100, score)),
        "details": successes + issues,
        "metrics": {
            "responseTime": response_time_ms,
            "htmlSize": html_size_kb,
            "totalScripts": total_scripts,
            "blockingScripts": blocking_scripts,
            "totalStylesheets": external_stylesheets + inline_styles,
            "totalImages": len(images),
        },
    }
