from __future__ import annotations

from typing import Any, Callable

import pytest
from bs4 import BeautifulSoup

from ampd.scrape.http import FetchedPage, StoreFetchError


def make_page(url: str, html: str) -> FetchedPage:
    return FetchedPage(url=url, html=html, soup=BeautifulSoup(html, "html.parser"))


class FakeStore:
    """
    Stands in for fetch_page / fetch_json.

    pages: url -> html (or an int status to fail with)
    lookups: app id -> JSON payload (or an exception to raise)
    """

    def __init__(self) -> None:
        self.pages: dict[str, Any] = {}
        self.lookups: dict[str, Any] = {}
        self.page_calls: list[tuple[str, str]] = []
        self.json_calls: list[tuple[str, dict]] = []

    def fetch_page(self, url: str, *, user_agent: str, timeout: float = 20) -> FetchedPage:
        self.page_calls.append((url, user_agent))
        html = self.pages.get(url, 404)
        if isinstance(html, int):
            raise StoreFetchError(url, f"Failed to fetch: {html}", status_code=html)
        return make_page(url, html)

    def fetch_json(self, url: str, *, params=None, timeout: float = 20):
        self.json_calls.append((url, dict(params or {})))
        payload = self.lookups.get(str((params or {}).get("id")), {"resultCount": 0, "results": []})
        if isinstance(payload, Exception):
            raise payload
        return payload


@pytest.fixture()
def store(monkeypatch) -> FakeStore:
    fake = FakeStore()
    monkeypatch.setattr("ampd.scrape.app_store.fetch_page", fake.fetch_page)
    monkeypatch.setattr("ampd.scrape.app_store.fetch_json", fake.fetch_json)
    monkeypatch.setattr("ampd.scrape.google_play.fetch_page", fake.fetch_page)
    return fake


@pytest.fixture()
def no_network(monkeypatch) -> Callable[..., None]:
    def _boom(*args, **kwargs):
        raise AssertionError("network access attempted")

    for target in (
        "ampd.scrape.app_store.fetch_page",
        "ampd.scrape.app_store.fetch_json",
        "ampd.scrape.google_play.fetch_page",
    ):
        monkeypatch.setattr(target, _boom)
    return _boom


@pytest.fixture()
def page() -> Callable[[str, str], FetchedPage]:
    return make_page
