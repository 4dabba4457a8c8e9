# ampd/scrape/app_store.py
from __future__ import annotations

from typing import Any, Optional

from ampd.config import (
    APP_STORE_TITLE_SUFFIX,
    APP_STORE_UA,
    ITUNES_ARTWORK_KEYS,
    ITUNES_LOOKUP_URL,
)
from ampd.models import GameListingResult
from ampd.scrape.http import FetchedPage, StoreFetchError, fetch_json, fetch_page
from ampd.scrape.rules import (
    Rule,
    first_match,
    first_srcset,
    has_class,
    heading,
    img_src,
    inline_scripts,
    inner_html,
    ld_image,
    ld_json_blocks,
    ld_name,
    meta_content,
    search,
    title_tag,
)
from ampd.utils import absolute_logo_url, app_id_from_url, clean_title, first_srcset_url
from ampd.utils_debug import dbg


def _title(raw: Optional[str]) -> Optional[str]:
    return clean_title(raw, APP_STORE_TITLE_SUFFIX) if raw else None


def _nested_title_span(page: FetchedPage) -> Optional[str]:
    h1 = page.soup.find("h1", class_=has_class("product-header__title"))
    return inner_html(h1.find("span")) if h1 else None


NAME_RULES: tuple[Rule, ...] = (
    ("product-header__title", lambda p: _title(heading(p.soup, {"class": has_class("product-header__title")}))),
    ("data-test=product-title", lambda p: _title(heading(p.soup, {"data-test": "product-title"}))),
    ("product-header__title span", lambda p: _title(_nested_title_span(p))),
    ("og:title", lambda p: _title(meta_content(p.soup, prop="og:title"))),
    ("<title>", lambda p: _title(title_tag(p.soup))),
)


def _data_bundle_id(page: FetchedPage) -> Optional[str]:
    tag = page.soup.find(attrs={"data-bundle-id": True})
    return tag.get("data-bundle-id") if tag else None


def _script_bundle_id(page: FetchedPage) -> Optional[str]:
    for text in inline_scripts(page.soup):
        found = (
            search(r'bundleId["\s:=]+"([^"]+)"', text)
            or search(r'bundle-id["\s:=]+"([^"]+)"', text)
            or search(r'bundleIdentifier["\s:=]+"([^"]+)"', text)
        )
        if found:
            return found
    return None


PACKAGE_RULES: tuple[Rule, ...] = (
    ("data-bundle-id", _data_bundle_id),
    ("script bundleId", _script_bundle_id),
    ('"bundleId" json', lambda p: search(r'"bundleId"\s*:\s*"([^"]+)"', p.html)),
)


def _artwork_img(page: FetchedPage) -> Optional[str]:
    picture = page.soup.find("picture", class_=has_class("product-header__artwork"))
    return img_src(picture.find("img", src=True)) if picture else None


LOGO_RULES: tuple[Rule, ...] = (
    ("og:image property", lambda p: meta_content(p.soup, prop="og:image")),
    ("og:image name", lambda p: meta_content(p.soup, name="og:image")),
    ("product-header__artwork", _artwork_img),
    ("product-header__icon", lambda p: img_src(p.soup.find("img", class_=has_class("product-header__icon")))),
    ("srcset", lambda p: first_srcset_url(first_srcset(p.soup) or "")),
)


def _artwork_url(app: dict[str, Any]) -> Optional[str]:
    for key in ITUNES_ARTWORK_KEYS:
        if app.get(key):
            return app[key]
    return None


def lookup_app(app_id: str) -> GameListingResult:
    """
    Ask the iTunes lookup API about an app id.

    Never raises: any failure just means an empty result.
    """
    try:
        data = fetch_json(ITUNES_LOOKUP_URL, params={"id": app_id})
    except (StoreFetchError, ValueError) as e:
        dbg("lookup", app_id=app_id, error=str(e))
        return GameListingResult()

    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        dbg("lookup", app_id=app_id, error="no results")
        return GameListingResult()

    app = results[0]
    return GameListingResult().fill(
        game_name=app.get("trackName"),
        package_identifier=app.get("bundleId"),
        logo_url=_artwork_url(app),
    )


def extract_from_page(page: FetchedPage, result: GameListingResult) -> GameListingResult:
    """Fill whatever `result` is still missing from the listing HTML."""
    for data in ld_json_blocks(page.soup):
        result = result.fill(game_name=ld_name(data), logo_url=ld_image(data))

    if result.missing("game_name"):
        _, name = first_match(NAME_RULES, page)
        result = result.fill(game_name=name)

    if result.missing("package_identifier"):
        _, bundle_id = first_match(PACKAGE_RULES, page)
        result = result.fill(package_identifier=bundle_id)

    if result.missing("logo_url"):
        _, logo = first_match(LOGO_RULES, page)
        if logo:
            result = result.fill(logo_url=absolute_logo_url(logo, page.url))

    return result


def scrape_app_store_page(url: str) -> GameListingResult:
    """
    Resolve an App Store listing.

    Priority, highest first:
      1) iTunes lookup API (when the URL carries an app id)
      2) JSON-LD blocks (all of them)
      3) HTML patterns for name / bundle id / icon

    Raises StoreFetchError when the listing page itself can't be fetched.
    """
    page = fetch_page(url, user_agent=APP_STORE_UA)

    app_id = app_id_from_url(url)
    result = lookup_app(app_id) if app_id else GameListingResult()

    return extract_from_page(page, result)
