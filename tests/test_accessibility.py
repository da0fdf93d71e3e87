from urllib.parse import urlparse

from siteaudit.analyzers import accessibility, seo


def issues(result: dict) -> list[dict]:
    return [d for d in result["details"] if "severity" in d]


def test_accessible_page(good_page: str) -> None:
    result = accessibility.analyze(good_page)

    assert result["score"] == 100
    assert [d["message"] for d in result["details"]] == [
        "Language is declared: en",
        "All images have an alt attribute",
        "Good use of semantic landmarks",
    ]


def test_bare_page() -> None:
    result = accessibility.analyze("<html><body><p>Hi</p></body></html>")

    assert result["score"] == 100 - 8 - 6 - 5
    assert result["details"][0]["severity"] == "warning"


def test_alt_penalty_is_capped() -> None:
    assert accessibility.analyze('<h1>x</h1><main></main><nav></nav><html lang="en"><img src="a">')["score"] == 97
    assert accessibility.analyze('<h1>x</h1><main></main><nav></nav><html lang="en">' + '<img src="a">' * 6)["score"] == 85


def test_aria_roles_count_as_landmarks() -> None:
    html = (
        '<html lang="nb"><div role="banner"></div><div role="navigation"></div>'
        '<div role="main"><h1>x</h1></div><div role="contentinfo"></div></html>'
    )
    result = accessibility.analyze(html)

    assert result["score"] == 100
    assert "Language is declared: nb" in [d["message"] for d in result["details"]]


def test_two_or_three_landmarks_are_neutral() -> None:
    result = accessibility.analyze('<html lang="en"><main><h1>x</h1></main><footer></footer></html>')

    assert result["score"] == 100
    assert "Good use of semantic landmarks" not in [d["message"] for d in result["details"]]


def test_missing_h1_is_reported_by_both_seo_and_accessibility() -> None:
    html = '<html lang="en"><main></main><nav></nav><p>No heading</p></html>'

    a11y = accessibility.analyze(html)
    seo_result = seo.analyze(html, urlparse("https://acme.example/"))

    assert {"severity": "warning", "message": "Missing H1 heading"} in a11y["details"]
    assert {"severity": "critical", "message": "Missing H1 heading"} in seo_result["details"]
