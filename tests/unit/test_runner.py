from pathlib import Path

from tests.helpers.detector_imports import DetectorConfig, StrictnessMode, fetcher, runner

LOGIN_HTML = '<form><input type="email" name="e"><input type="password" name="p"></form>'


def _config(**overrides):
    values = {"report_path": Path("/tmp/report.json")}
    values.update(overrides)
    return DetectorConfig(**values)


def test_analyze_url_detects_form():
    def fake_fetch(url, timeout):
        return fetcher.FetchResult(url=url, html=LOGIN_HTML, status=200, content_type="text/html")

    artifact = runner.analyze_url("https://example.com/login", _config(), fetcher=fake_fetch)

    assert artifact.detected
    assert artifact.status == 200
    assert artifact.formatted_markup.startswith("<form>")
    assert artifact.summary.startswith("Found 1 authentication input(s)")


def test_analyze_url_inspects_error_pages():
    def fake_fetch(url, timeout):
        return fetcher.FetchResult(
            url=url,
            html=LOGIN_HTML,
            status=401,
            error="Failed to fetch URL: 401 Unauthorized",
            error_kind=fetcher.FetchErrorKind.HTTP_STATUS,
        )

    artifact = runner.analyze_url("https://example.com/admin", _config(), fetcher=fake_fetch)

    assert artifact.detected
    assert artifact.fetch_error == "Failed to fetch URL: 401 Unauthorized"


def test_analyze_url_without_html_is_negative():
    def fake_fetch(url, timeout):
        return fetcher.FetchResult(url=url, error="boom", error_kind=fetcher.FetchErrorKind.NETWORK)

    artifact = runner.analyze_url("https://example.com", _config(), fetcher=fake_fetch)

    assert not artifact.detected
    assert artifact.formatted_markup == ""
    assert artifact.summary == "No authentication forms detected"


def test_analyze_urls_keeps_submission_order():
    pages = {
        "https://a.test": LOGIN_HTML,
        "https://b.test": "<p>nothing</p>",
        "https://c.test": '<div>Sign up<input name="email"></div>',
    }
    timeouts = []

    def fake_fetch(url, timeout):
        timeouts.append(timeout)
        return fetcher.FetchResult(url=url, html=pages[url], status=200)

    batch = runner.analyze_urls(list(pages), _config(fetch_timeout=9), fetcher=fake_fetch)

    assert [artifact.source for artifact in batch.artifacts] == list(pages)
    assert batch.detected_sources == ("https://a.test", "https://c.test")
    assert set(timeouts) == {9}


def test_analyze_urls_respects_strict_mode():
    def fake_fetch(url, timeout):
        return fetcher.FetchResult(url=url, html='<div>Sign up<input name="email"></div>', status=200)

    batch = runner.analyze_urls(["https://c.test"], _config(mode=StrictnessMode.STRICT), fetcher=fake_fetch)

    assert batch.detected_sources == ()


def test_analyze_urls_with_no_targets():
    assert runner.analyze_urls([], _config()).artifacts == []
