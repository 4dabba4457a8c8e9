# ampd/scrape/orchestrator.py
from __future__ import annotations

from typing import Callable, Dict, List, Optional

from ..config import APP_STORE, CACHE_MAX_AGE_S, GOOGLE_PLAY
from ..models import CachedListing, GameListingResult
from ..regions import convert_store_url
from ..sources import platform_from_url
from ..storage.csv_cache import is_fresh, listing_from_row
from ..utils import _now_iso_z, normalize_url
from ..utils_debug import dbg, log_error
from .app_store import scrape_app_store_page
from .google_play import scrape_google_play_page
from .http import StoreFetchError


ProgressCB = Callable[[int, int, str], None]


def resolve(url: str) -> GameListingResult:
    """
    Resolve a storefront listing URL to name / package id / icon.

    - Unrecognized URLs: empty result, no network
    - Raises ValueError for a missing or non-string url
    - Raises StoreFetchError when the listing page can't be fetched
    """
    if not isinstance(url, str) or not url.strip():
        raise ValueError("URL is required")

    url = normalize_url(url)
    platform = platform_from_url(url)

    if platform == APP_STORE:
        result = scrape_app_store_page(url)
    elif platform == GOOGLE_PLAY:
        result = scrape_google_play_page(url)
    else:
        dbg("resolve", url=url, platform=platform, skipped=True)
        return GameListingResult()

    dbg("resolve", url=url, platform=platform, **result.to_dict())
    return result


def resolve_regional(url: str, region: Optional[str]) -> GameListingResult:
    """Resolve the listing as seen from a regional storefront (KR, JP, TW, US)."""
    if not isinstance(url, str) or not url.strip():
        raise ValueError("URL is required")
    return resolve(convert_store_url(normalize_url(url), region) or url)


def resolve_all(
    *,
    urls: List[str],
    region: Optional[str] = None,
    previous: Optional[Dict[str, dict]] = None,
    max_age_s: int = CACHE_MAX_AGE_S,
    progress_cb: Optional[ProgressCB] = None,
) -> List[CachedListing]:
    """
    Resolve many URLs one after another.

    Rows in `previous` (url -> cached row) fetched within `max_age_s`
    are reused as-is. A failing listing becomes a row carrying its
    partial result and the error instead of stopping the batch.
    """
    previous = previous or {}
    items = [u for u in (normalize_url(x) for x in urls) if u]
    results: List[CachedListing] = []
    total = len(items)

    for idx, url in enumerate(items, start=1):
        if region:
            url = convert_store_url(url, region) or url
        platform = platform_from_url(url)

        prev_row = previous.get(url)
        if prev_row and is_fresh(prev_row, max_age_s):
            dbg("cache", url=url, hit=True)
            results.append(listing_from_row(prev_row))
            if progress_cb:
                progress_cb(idx, total, f"Cached ({idx}/{total})\n{url}")
            continue

        if progress_cb:
            progress_cb(idx, total, f"Fetching ({idx}/{total})\n{url}")

        error = ""
        try:
            result = resolve(url)
        except StoreFetchError as e:
            log_error("resolve", url=url, error=str(e), status=e.status_code)
            result = e.partial
            error = str(e)

        results.append(
            CachedListing(
                url=url,
                platform=platform,
                result=result,
                fetched_utc_iso=_now_iso_z(),
                error=error,
            )
        )

        if progress_cb:
            label = result.game_name or url
            progress_cb(idx, total, f"Processed ({idx}/{total}) • {'ERROR' if error else 'OK'}\n{label}")

    if progress_cb:
        progress_cb(total, total, f"Done ({total}/{total})")

    return results
