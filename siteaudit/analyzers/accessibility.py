"""Accessibility analyzer — 15% weight."""

import re

HTML_LANG = re.compile(r"<html[^>]*lang=[\"']([^\"']+)[\"']", re.IGNORECASE)
IMG_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
H1_OPEN = re.compile(r"<h1[^>]*>", re.IGNORECASE)

# Each landmark counts when either the HTML5 element or its ARIA role is present
LANDMARKS = {
    "main": re.compile(r"<main[^>]*>|role=[\"']main[\"']", re.IGNORECASE),
    "nav": re.compile(r"<nav[^>]*>|role=[\"']navigation[\"']", re.IGNORECASE),
    "header": re.compile(r"<header[^>]*>|role=[\"']banner[\"']", re.IGNORECASE),
    "footer": re.compile(r"<footer[^>]*>|role=[\"']contentinfo[\"']", re.IGNORECASE),
}

# (applies, points, severity, message); first matching rule wins, "success" costs nothing
LANDMARK_RULES = [
    (lambda n: n < 2, 6, "warning", "Few ARIA landmarks (main, nav, header, footer)"),
    (lambda n: n == len(LANDMARKS), 0, "success", "Good use of semantic landmarks"),
]


def analyze(html: str) -> dict:
    score = 100
    successes = []
    issues = []

    def issue(sev, message, pts):
        nonlocal score
        score -= pts
        issues.append({"severity": sev, "message": message})

    def success(message):
        successes.append({"type": "success", "message": message})

    # Document language
    lang = HTML_LANG.search(html)
    if lang:
        success(f"Language is declared: {lang.group(1)}")
    else:
        issue("warning", "Missing lang attribute on the html element", 8)

    # Alt attributes
    img_tags = IMG_TAG.findall(html)
    no_alt = sum(1 for tag in img_tags if "alt=" not in tag.lower())
    if no_alt:
        issue("warning", f"{no_alt} images are missing the alt attribute", min(15, no_alt * 3))
    elif img_tags:
        success("All images have an alt attribute")

    # Landmarks
    landmarks = sum(1 for pattern in LANDMARKS.values() if pattern.search(html))
    for applies, pts, sev, message in LANDMARK_RULES:
        if applies(landmarks):
            if sev == "success":
                success(message)
            else:
                issue(sev, message, pts)
            break

    # Headings
    if not H1_OPEN.search(html):
        issue("warning", "Missing H1 heading", 5)

    return {
        "name": "accessibility",
        "label": "Accessibility",
        "score": max(0, min(100, score)),
        "details": successes + issues,
    }
