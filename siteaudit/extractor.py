"""
Extract the page's resource inventory from raw HTML.

This is deliberately a set of tolerant regular expressions rather than an HTML
parser: unmatched patterns fall back to None/False and nothing here raises.
Known gaps kept as-is:
  - stylesheets are only found when rel="stylesheet" precedes href
  - no rule populates "fonts"; the list is always empty
"""

import re

SCRIPT_TAG = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
STYLESHEET_TAG = re.compile(
    r"<link[^>]*rel=[\"']stylesheet[\"'][^>]*href=[\"']([^\"']+)[\"'][^>]*>",
    re.IGNORECASE,
)
IMG_TAG = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
IFRAME_TAG = re.compile(r"<iframe\b[^>]*>", re.IGNORECASE)

SRC_ATTR = re.compile(r"src=[\"']([^\"']+)[\"']", re.IGNORECASE)
ALT_ATTR = re.compile(r"alt=[\"']([^\"']*)[\"']", re.IGNORECASE)
WIDTH_ATTR = re.compile(r"width=[\"']?(\d+)", re.IGNORECASE)
HEIGHT_ATTR = re.compile(r"height=[\"']?(\d+)", re.IGNORECASE)
LOADING_ATTR = re.compile(r"loading=[\"']([^\"']+)[\"']", re.IGNORECASE)
LAZY_LOADING = re.compile(r"loading=[\"']lazy[\"']", re.IGNORECASE)
PRELOAD_REL = re.compile(r"rel=[\"']preload[\"']", re.IGNORECASE)
MODULE_TYPE = re.compile(r"type=[\"']module[\"']", re.IGNORECASE)


def _has(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None


def _group(pattern: re.Pattern, text: str) -> str | None:
    m = pattern.search(text)
    return m.group(1) if m else None


def extract_resources(html: str) -> dict:
    """Build the inventory of scripts, stylesheets, images, fonts and iframes."""
    resources = {
        "scripts": [],
        "stylesheets": [],
        "images": [],
        "fonts": [],
        "iframes": [],
    }

    # Scripts
    for m in SCRIPT_TAG.finditer(html):
        tag = m.group(0)
        src = _group(SRC_ATTR, tag)
        resources["scripts"].append({
            "src": src,
            "is_inline": src is None,
            "is_async": _has("async", tag),
            "is_defer": _has("defer", tag),
            "is_module": MODULE_TYPE.search(tag) is not None,
        })

    # Stylesheets
    for m in STYLESHEET_TAG.finditer(html):
        resources["stylesheets"].append({
            "href": m.group(1),
            "is_preload": PRELOAD_REL.search(m.group(0)) is not None,
        })

    # Images
    for m in IMG_TAG.finditer(html):
        resources["images"].append(_image(m.group(0)))

    # Iframes
    for m in IFRAME_TAG.finditer(html):
        tag = m.group(0)
        resources["iframes"].append({
            "src": _group(SRC_ATTR, tag),
            "has_lazy_loading": LAZY_LOADING.search(tag) is not None,
        })

    return resources


def _image(tag: str) -> dict:
    src = _group(SRC_ATTR, tag)
    alt = _group(ALT_ATTR, tag)
    width = _group(WIDTH_ATTR, tag)
    height = _group(HEIGHT_ATTR, tag)
    loading = _group(LOADING_ATTR, tag)

    is_webp = bool(src) and _has(r"\.webp", src)
    is_avif = bool(src) and _has(r"\.avif", src)

    return {
        "src": src,
        "has_alt": alt is not None,
        "alt_text": alt,
        "has_empty_alt": alt == "",
        "has_dimensions": width is not None and height is not None,
        "width": int(width) if width is not None else None,
        "height": int(height) if height is not None else None,
        "has_lazy_loading": loading == "lazy",
        "has_srcset": _has("srcset=", tag),
        "is_webp": is_webp,
        "is_avif": is_avif,
        "is_modern_format": is_webp or is_avif,
    }
