# ampd/storage/csv_cache.py
from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Dict, List

import pandas as pd

from ampd.config import CSV_COLUMNS
from ampd.models import CachedListing, GameListingResult
from ampd.utils import _now_utc, _strip_na, iso_to_dt


def load_previous(cache_file: Path) -> Dict[str, dict]:
    """
    Load previous CSV cache and index by URL.

    Returns:
      { url -> row_dict }
    """
    if not cache_file.exists():
        return {}

    try:
        df = pd.read_csv(cache_file, dtype=str)
    except (OSError, ValueError, pd.errors.ParserError):
        return {}

    out: Dict[str, dict] = {}
    for _, row in df.iterrows():
        url = _strip_na(row.get("url")).strip()
        if url:
            out[url] = row.to_dict()
    return out


def is_fresh(row: dict, max_age_s: int) -> bool:
    """A row is reusable when it fetched cleanly within the window."""
    if _strip_na(row.get("error")):
        return False
    fetched = iso_to_dt(_strip_na(row.get("fetched_utc_iso")))
    if fetched is None:
        return False
    return _now_utc() - fetched <= timedelta(seconds=max_age_s)


def listing_from_row(row: dict) -> CachedListing:
    return CachedListing(
        url=_strip_na(row.get("url")),
        platform=_strip_na(row.get("platform")),
        result=GameListingResult(
            game_name=_strip_na(row.get("game_name")) or None,
            package_identifier=_strip_na(row.get("package_identifier")) or None,
            logo_url=_strip_na(row.get("logo_url")) or None,
        ),
        fetched_utc_iso=_strip_na(row.get("fetched_utc_iso")),
        error=_strip_na(row.get("error")),
    )


def write_cache(cache_file: Path, results: List[CachedListing]) -> None:
    """
    Write results to CSV in a stable column order.
    """
    rows = []
    for item in results:
        rows.append(
            {
                "url": item.url,
                "platform": item.platform,
                "game_name": item.result.game_name or "",
                "package_identifier": item.result.package_identifier or "",
                "logo_url": item.result.logo_url or "",
                "fetched_utc_iso": item.fetched_utc_iso,
                "error": item.error,
            }
        )

    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    df.to_csv(cache_file, index=False)
