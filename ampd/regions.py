# ampd/regions.py
from __future__ import annotations

import re
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from .config import APP_STORE, GOOGLE_PLAY, REGION_TO_STORE_CODES
from .sources import platform_from_url

_APP_STORE_LISTING = re.compile(r"^https?://(apps\.apple\.com|itunes\.apple\.com)/([a-z]{2}/)?app/", re.IGNORECASE)
_GOOGLE_PLAY_LISTING = re.compile(r"^https?://play\.google\.com/", re.IGNORECASE)


def _app_store_for_region(url: str, country: str) -> str:
    if not _APP_STORE_LISTING.match(url):
        return url
    u = urlparse(url)
    if re.match(r"^/[a-z]{2}/app/", u.path, re.IGNORECASE):
        path = re.sub(r"^/[a-z]{2}/app/", f"/{country}/app/", u.path, count=1, flags=re.IGNORECASE)
    else:
        path = re.sub(r"^/app/", f"/{country}/app/", u.path, count=1, flags=re.IGNORECASE)
    return urlunparse(u._replace(path=path))


def _google_play_for_region(url: str, language: str) -> str:
    if not _GOOGLE_PLAY_LISTING.match(url):
        return url
    u = urlparse(url)
    params = [(k, v) for k, v in parse_qsl(u.query, keep_blank_values=True) if k != "hl"]
    params.append(("hl", language))
    return urlunparse(u._replace(query=urlencode(params)))


def convert_store_url(url: Optional[str], region: Optional[str]) -> Optional[str]:
    """
    Point a storefront URL at a regional storefront.

    App Store: /{country}/app/... (replaced or inserted)
    Google Play: hl={language}

    Unknown regions and unrecognized URLs come back unchanged.
    """
    if not url or not region:
        return url or None

    codes = REGION_TO_STORE_CODES.get(region.upper())
    if not codes:
        return url

    platform = platform_from_url(url)
    if platform == APP_STORE:
        return _app_store_for_region(url, codes["country"])
    if platform == GOOGLE_PLAY:
        return _google_play_for_region(url, codes["language"])
    return url
