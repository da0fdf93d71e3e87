"""
Score aggregator — builds the final audit report from category results.

Weights:
  performance: 25%, seo: 25%, security: 20%,
  mobile: 15%, accessibility: 15%
"""

import math
from datetime import datetime, timezone

WEIGHTS = {
    "performance": 0.25,
    "seo": 0.25,
    "security": 0.20,
    "mobile": 0.15,
    "accessibility": 0.15,
}

# Reference scores shown next to each category; not part of the scoring math
BENCHMARKS = {
    "performance": 68,
    "seo": 72,
    "security": 65,
    "mobile": 78,
    "accessibility": 62,
}

SEVERITY_ORDER = {"critical": 0, "warning": 1, "info": 2}

TOP_FIXES = 10


def get_status(score: int) -> str:
    if score >= 90:
        return "green"
    if score >= 70:
        return "yellow"
    if score >= 50:
        return "orange"
    return "red"


def total_score(scores: dict[str, int]) -> int:
    """Weighted sum of the category scores, rounded half up."""
    weighted = sum(scores[name] * weight for name, weight in WEIGHTS.items())
    return math.floor(weighted + 0.5)


def top_fixes(categories: dict[str, dict]) -> list[dict]:
    """Issues across all categories, most severe first, heavier categories first."""
    fixes = [
        {"category": name, "severity": d["severity"], "message": d["message"]}
        for name, cat in categories.items()
        for d in cat["details"]
        if "severity" in d
    ]
    fixes.sort(key=lambda f: (SEVERITY_ORDER.get(f["severity"], 3), -WEIGHTS.get(f["category"], 0)))
    return fixes[:TOP_FIXES]


def build_report(
    categories: dict[str, dict],
    url: str,
    response_time_ms: int,
    analyzed_at: datetime | None = None,
) -> dict:
    """Aggregate the five category results into the final audit output."""
    analyzed_at = analyzed_at or datetime.now(timezone.utc)

    report_categories = {}
    for name in WEIGHTS:
        result = categories[name]
        entry = {
            "label": result.get("label", name),
            "score": result["score"],
            "status": get_status(result["score"]),
            "details": result["details"],
            "benchmark": BENCHMARKS[name],
        }
        if result.get("metrics"):
            entry["metrics"] = result["metrics"]
        report_categories[name] = entry

    return {
        "url": url,
        "analyzedAt": analyzed_at.isoformat().replace("+00:00", "Z"),
        "responseTime": response_time_ms,
        "totalScore": total_score({n: c["score"] for n, c in categories.items()}),
        "benchmarks": dict(BENCHMARKS),
        "categories": report_categories,
        "topFixes": top_fixes(categories),
    }
