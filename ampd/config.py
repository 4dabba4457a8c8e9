# ampd/config.py
from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(x.strip() for x in raw.split(",") if x.strip())


# -----------------------------
# Platforms
# -----------------------------

APP_STORE = "app_store"
GOOGLE_PLAY = "google_play"
UNRECOGNIZED = "unrecognized"

APP_STORE_HOSTS = ("apps.apple.com", "itunes.apple.com")
GOOGLE_PLAY_HOSTS = ("play.google.com",)


# -----------------------------
# HTTP / scraping
# -----------------------------

# Storefronts vary markup by client, so each pipeline presents a desktop browser.
APP_STORE_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
GOOGLE_PLAY_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
ACCEPT_LANGUAGE = "en-US,en;q=0.9"

FETCH_TIMEOUT = _env_int("AMPD_FETCH_TIMEOUT", 20)

ITUNES_LOOKUP_URL = "https://itunes.apple.com/lookup"

# Largest first
ITUNES_ARTWORK_KEYS = ("artworkUrl512", "artworkUrl100", "artworkUrl60")

APP_ID_PATTERNS = (
    r"/id(\d+)",
    r"[?&]id=(\d+)",
    r"/app/id(\d+)",
)

APP_STORE_TITLE_SUFFIX = r"\s*[-–—]\s*App\s*Store.*$"
GOOGLE_PLAY_TITLE_SUFFIX = r"\s*[-–—]\s*Google\s*Play.*$"

HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&apos;", "'"),
    # BeautifulSoup has already turned single-encoded &nbsp; into U+00A0
    ("\xa0", " "),
)

FAVICON_URLS = {
    APP_STORE: "https://www.google.com/s2/favicons?domain=apps.apple.com&sz=32",
    GOOGLE_PLAY: "https://www.google.com/s2/favicons?domain=play.google.com&sz=32",
}


# -----------------------------
# Regional storefronts
# -----------------------------

REGION_TO_STORE_CODES = {
    "KR": {"country": "kr", "language": "ko"},
    "JP": {"country": "jp", "language": "ja"},
    "TW": {"country": "tw", "language": "zh-TW"},
    "US": {"country": "us", "language": "en"},
}


# -----------------------------
# Roles
# -----------------------------

ROLE_ADMIN = "admin"
ROLE_AM = "am"


# -----------------------------
# Cache (CLI)
# -----------------------------

DEFAULT_CACHE_FILE = "results.csv"

# Matches the dashboard's five minute stale time for game info.
CACHE_MAX_AGE_S = _env_int("AMPD_CACHE_MAX_AGE", 300)

CSV_COLUMNS = [
    "url",
    "platform",
    "game_name",
    "package_identifier",
    "logo_url",
    "fetched_utc_iso",
    "error",
]


# -----------------------------
# API server
# -----------------------------

API_HOST = os.getenv("AMPD_HOST", "127.0.0.1")
API_PORT = _env_int("AMPD_PORT", 8000)
CORS_ORIGINS = _env_list("AMPD_CORS_ORIGINS", "*")

URL_REQUIRED_MESSAGE = "URL is required"
FETCH_FAILED_MESSAGE = "Failed to fetch game information"
