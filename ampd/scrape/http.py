# ampd/scrape/http.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

import cloudscraper
import requests
from bs4 import BeautifulSoup
from cloudscraper.exceptions import CloudflareException

from ampd.config import ACCEPT_LANGUAGE, FETCH_TIMEOUT, HTML_ACCEPT
from ampd.models import GameListingResult
from ampd.utils_debug import dbg


class StoreFetchError(Exception):
    """
    The storefront could not be fetched (network failure or non-2xx).

    `partial` holds whatever had been extracted before the failure so the
    API layer can still answer with it.
    """

    def __init__(
        self,
        url: str,
        message: str,
        *,
        status_code: Optional[int] = None,
        partial: Optional[GameListingResult] = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.partial = partial or GameListingResult()


@dataclass(frozen=True)
class FetchedPage:
    url: str
    html: str
    soup: BeautifulSoup = field(repr=False, compare=False)


def _create_scraper():
    return cloudscraper.create_scraper(
        browser={"browser": "chrome", "platform": "darwin", "mobile": False}
    )


def _get(url: str, *, headers: dict[str, str], params: Optional[dict[str, Any]], timeout: float):
    try:
        scraper = _create_scraper()
        resp = scraper.get(url, headers=headers, params=params, timeout=timeout)
    except (requests.RequestException, CloudflareException) as e:
        raise StoreFetchError(url, f"Failed to fetch: {e}") from e

    if not resp.ok:
        raise StoreFetchError(url, f"Failed to fetch: {resp.status_code}", status_code=resp.status_code)
    return resp


def fetch_page(
    url: str,
    *,
    user_agent: str,
    timeout: float = FETCH_TIMEOUT,
) -> FetchedPage:
    """
    Fetch a storefront listing and return its HTML plus a BeautifulSoup.

    - cloudscraper session, single attempt, no retry
    - desktop User-Agent chosen by the caller
    - raises StoreFetchError on network failure or non-2xx
    """
    headers = {
        "User-Agent": user_agent,
        "Accept": HTML_ACCEPT,
        "Accept-Language": ACCEPT_LANGUAGE,
    }
    resp = _get(url, headers=headers, params=None, timeout=timeout)
    html = resp.text
    dbg("fetch", url=url, status=resp.status_code, size=len(html))
    return FetchedPage(url=url, html=html, soup=BeautifulSoup(html, "html.parser"))


def fetch_json(
    url: str,
    *,
    params: Optional[dict[str, Any]] = None,
    timeout: float = FETCH_TIMEOUT,
) -> Any:
    """
    GET a JSON API. Raises StoreFetchError on transport failure and
    ValueError when the body is not JSON.
    """
    resp = _get(url, headers={"Accept": "application/json"}, params=params, timeout=timeout)
    dbg("fetch", url=url, status=resp.status_code, params=params)
    return resp.json()
