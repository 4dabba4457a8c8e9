# ampd/sources.py
from __future__ import annotations

from typing import Optional

from .config import (
    APP_STORE,
    APP_STORE_HOSTS,
    FAVICON_URLS,
    GOOGLE_PLAY,
    GOOGLE_PLAY_HOSTS,
    UNRECOGNIZED,
)


def platform_from_url(url: str) -> str:
    """
    Returns a stable platform label for a storefront URL.

    Rules:
    - apps.apple.com / itunes.apple.com anywhere in the URL -> "app_store"
    - play.google.com anywhere in the URL -> "google_play"
    - Else "unrecognized"
    """
    u = (url or "").lower()
    if any(h in u for h in APP_STORE_HOSTS):
        return APP_STORE
    if any(h in u for h in GOOGLE_PLAY_HOSTS):
        return GOOGLE_PLAY
    return UNRECOGNIZED


def store_favicon_url(url: str) -> Optional[str]:
    return FAVICON_URLS.get(platform_from_url(url))
