from __future__ import annotations

import pytest
import requests

from ampd.scrape import http
from ampd.scrape.http import StoreFetchError, fetch_json, fetch_page


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", payload=None):
        self.status_code = status_code
        self.text = text
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeScraper:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, *, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


@pytest.fixture()
def scraper(monkeypatch):
    fake = FakeScraper(FakeResponse())
    monkeypatch.setattr(http.cloudscraper, "create_scraper", lambda **kwargs: fake)
    return fake


def test_fetch_page_sends_browser_headers(scraper):
    scraper.response = FakeResponse(200, "<html><title>Hi</title></html>")

    page = fetch_page("https://apps.apple.com/us/app/x/id1", user_agent="UA/1.0", timeout=5)

    assert page.url == "https://apps.apple.com/us/app/x/id1"
    assert page.soup.title.get_text() == "Hi"
    call = scraper.calls[0]
    assert call["headers"]["User-Agent"] == "UA/1.0"
    assert call["headers"]["Accept-Language"].startswith("en-US")
    assert call["timeout"] == 5


def test_fetch_page_non_2xx_is_a_transport_error(scraper):
    scraper.response = FakeResponse(404, "missing")

    with pytest.raises(StoreFetchError) as exc:
        fetch_page("https://play.google.com/store/apps/details?id=a", user_agent="UA")

    assert exc.value.status_code == 404
    assert exc.value.url == "https://play.google.com/store/apps/details?id=a"
    assert exc.value.partial.is_empty


def test_fetch_page_network_error_is_a_transport_error(scraper):
    scraper.error = requests.ConnectionError("connection refused")

    with pytest.raises(StoreFetchError) as exc:
        fetch_page("https://play.google.com/store/apps/details?id=a", user_agent="UA")

    assert exc.value.status_code is None
    assert isinstance(exc.value.__cause__, requests.ConnectionError)


def test_fetch_json_passes_params(scraper):
    scraper.response = FakeResponse(200, payload={"resultCount": 1, "results": [{"trackName": "T"}]})

    data = fetch_json("https://itunes.apple.com/lookup", params={"id": "42"})

    assert data["results"][0]["trackName"] == "T"
    assert scraper.calls[0]["params"] == {"id": "42"}


def test_fetch_json_bad_body_raises_value_error(scraper):
    scraper.response = FakeResponse(200, text="<html>")
    with pytest.raises(ValueError):
        fetch_json("https://itunes.apple.com/lookup", params={"id": "42"})
