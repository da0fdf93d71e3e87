"""Mobile-friendliness analyzer — 15% weight."""

import re

VIEWPORT = re.compile(
    r"<meta[^>]*name=[\"']viewport[\"'][^>]*content=[\"']([^\"']+)[\"']", re.IGNORECASE
)
IMG_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
MEDIA_QUERY = re.compile(r"@media[^{]*\{", re.IGNORECASE)
RESPONSIVE_QUERY = re.compile(r"max-width|min-width|screen", re.IGNORECASE)
MANIFEST = re.compile(r"<link[^>]*rel=[\"']manifest[\"']", re.IGNORECASE)
APPLE_TOUCH_ICON = re.compile(r"<link[^>]*rel=[\"']apple-touch-icon[\"']", re.IGNORECASE)

ZOOM_BLOCKERS = ("maximum-scale=1", "user-scalable=no")

# (applies, points, severity, message); first matching rule wins, "success" costs nothing
MEDIA_QUERY_RULES = [
    (lambda n: n == 0, 10, "warning", "No CSS media queries for responsive design"),
    (lambda n: n >= 3, 0, "success", "{n} responsive media queries"),
]

# (pattern, points, severity, missing message, present message)
HEAD_LINKS = [
    (MANIFEST, 5, "info", "Missing Web App Manifest (PWA support)", "Web App Manifest is present"),
    (APPLE_TOUCH_ICON, 3, "info", "Missing Apple Touch Icon", None),
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

    # Viewport
    viewport_match = VIEWPORT.search(html)
    if not viewport_match:
        issue("critical", "Missing viewport meta tag", 25)
    else:
        viewport = viewport_match.group(1).lower()
        if "width=device-width" in viewport:
            success("Viewport is configured correctly")
        else:
            issue("warning", "Viewport is missing width=device-width", 10)

        if any(blocker in viewport for blocker in ZOOM_BLOCKERS):
            issue("warning", "Viewport blocks zooming (bad for accessibility)", 5)

    # Responsive images
    img_tags = IMG_TAG.findall(html)
    responsive = sum(1 for tag in img_tags if "srcset=" in tag.lower())
    if len(img_tags) > 5 and responsive == 0:
        issue("warning", "No responsive images (srcset/picture)", 8)

    # Media queries
    mobile_queries = sum(
        1 for mq in MEDIA_QUERY.findall(html) if RESPONSIVE_QUERY.search(mq)
    )
    for applies, pts, sev, message in MEDIA_QUERY_RULES:
        if applies(mobile_queries):
            if sev == "success":
                success(message.format(n=mobile_queries))
            else:
                issue(sev, message.format(n=mobile_queries), pts)
            break

    # Installability
    for pattern, pts, sev, missing, present in HEAD_LINKS:
        if not pattern.search(html):
            issue(sev, missing, pts)
        elif present:
            success(present)

    return {
        "name": "mobile",
        "label": "Mobile",
        "score": max(0, min(100, score)),
        "details": successes + issues,
    }
