# ampd/utils.py
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import parse_qs, urlparse

import pandas as pd

from .config import APP_ID_PATTERNS, HTML_ENTITIES


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _now_iso_z() -> str:
    return _now_utc().strftime("%Y-%m-%dT%H:%M:%SZ")


def _strip_na(x: Any) -> str:
    """Fix for pandas sometimes giving float NaN etc."""
    if x is None:
        return ""
    if isinstance(x, float):
        if pd.isna(x):
            return ""
        return str(x)
    return str(x)


def safe_read_text_path(path) -> str:
    """Read a Path-like object as utf-8, replacing errors."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def normalize_url(url: str) -> str:
    return (url or "").strip()


def origin(url: str) -> str:
    u = urlparse(url)
    return f"{u.scheme}://{u.netloc}"


def app_id_from_url(url: str) -> Optional[str]:
    """
    Numeric App Store id. Tries, in order:
      /id123456
      ?id=123456 or &id=123456
      /app/id123456
    """
    for pat in APP_ID_PATTERNS:
        m = re.search(pat, url or "")
        if m:
            return m.group(1)
    return None


def query_param(url: str, name: str) -> Optional[str]:
    """First value of a query parameter, URL-decoded."""
    values = parse_qs(urlparse(url or "").query).get(name)
    if not values:
        return None
    return values[0] or None


def decode_entities(text: str) -> str:
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def clean_title(raw: str, suffix_pattern: str) -> str:
    """
    "<span>Cool &amp; Fun</span> - App Store" -> "Cool & Fun"

    Strips tags, decodes the common entities, trims, then drops the
    storefront suffix (any dash variant, case-insensitive).
    """
    text = re.sub(r"<[^>]+>", "", raw or "")
    text = decode_entities(text).strip()
    return re.sub(suffix_pattern, "", text, flags=re.IGNORECASE).strip()


def first_srcset_url(srcset: str) -> str:
    """
    "https://a/1x.png 1x, https://a/2x.png 2x" -> "https://a/1x.png"
    """
    first = (srcset or "").split(",")[0].strip()
    return first.split()[0] if first else ""


def absolute_logo_url(value: str, page_url: str) -> str:
    """
    //host/x.png -> https://host/x.png
    /x.png       -> <page origin>/x.png
    """
    value = (value or "").strip()
    if value.startswith("//"):
        return "https:" + value
    if value.startswith("/"):
        return origin(page_url) + value
    return value


def iso_to_dt(iso: str) -> Optional[datetime]:
    iso = (iso or "").strip()
    if not iso:
        return None
    try:
        return datetime.fromisoformat(iso.replace("Z", "+00:00")).astimezone(timezone.utc)
    except ValueError:
        return None
