"""Security analyzer — 20% weight."""

import re
from collections.abc import Mapping
from urllib.parse import ParseResult

# (header, points, missing message, present message)
SECURITY_HEADERS = [
    ("strict-transport-security", 12,
     "Missing HSTS header (Strict-Transport-Security)", "HSTS is configured"),
    ("content-security-policy", 10,
     "Missing Content-Security-Policy header", "Content-Security-Policy is in place"),
]

HTTP_REFERENCE = re.compile(r"http://(?!localhost)[^\"'\s>]+", re.IGNORECASE)


def analyze(url: ParseResult, headers: Mapping[str, str], html: str) -> dict:
    score = 100
    successes = []
    issues = []

    def issue(sev, message, pts):
        nonlocal score
        score -= pts
        issues.append({"severity": sev, "message": message})

    def success(message):
        successes.append({"type": "success", "message": message})

    headers_lower = {k.lower(): v for k, v in headers.items()}
    is_https = url.scheme == "https"

    # Transport
    if is_https:
        success("HTTPS is enabled")
    else:
        issue("critical", "Site is not served over HTTPS", 30)

    # HSTS + CSP
    for header_name, pts, missing, present in SECURITY_HEADERS:
        if headers_lower.get(header_name):
            success(present)
        else:
            issue("warning", missing, pts)

    # Clickjacking
    csp = headers_lower.get("content-security-policy") or ""
    xfo = headers_lower.get("x-frame-options")
    if xfo or "frame-ancestors" in csp:
        success("Clickjacking protection is active")
    else:
        issue("warning", "Missing clickjacking protection (X-Frame-Options)", 8)

    # MIME sniffing
    xcto = headers_lower.get("x-content-type-options")
    if not xcto:
        issue("warning", "Missing X-Content-Type-Options: nosniff", 6)

    # Mixed content
    if is_https:
        http_refs = len(HTTP_REFERENCE.findall(html))
        if http_refs:
            issue("warning", f"{http_refs} resources are loaded over HTTP (mixed content)", 5)

    return {
        "name": "security",
        "label": "Security",
        "score": max(0, min(100, score)),
        "details": successes + issues,
        "metrics": {
            "https": is_https,
            "hsts": bool(headers_lower.get("strict-transport-security")),
            "csp": bool(csp),
            "xfo": bool(xfo),
            "xcto": bool(xcto),
        },
    }
