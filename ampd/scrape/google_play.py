# ampd/scrape/google_play.py
from __future__ import annotations

from typing import Optional

from ampd.config import GOOGLE_PLAY_TITLE_SUFFIX, GOOGLE_PLAY_UA
from ampd.models import GameListingResult
from ampd.scrape.http import FetchedPage, fetch_page
from ampd.scrape.rules import (
    Rule,
    first_match,
    first_srcset,
    has_class,
    heading,
    img_src,
    ld_image,
    ld_name,
    meta_content,
    parse_json,
    title_tag,
)
from ampd.utils import absolute_logo_url, clean_title, first_srcset_url, query_param


def _title(raw: Optional[str]) -> Optional[str]:
    return clean_title(raw, GOOGLE_PLAY_TITLE_SUFFIX) if raw else None


def _icon_alt(alt: Optional[str]) -> bool:
    return bool(alt) and "icon" in alt.lower()


NAME_RULES: tuple[Rule, ...] = (
    ("itemprop=name", lambda p: _title(heading(p.soup, {"itemprop": "name"}))),
    ("Fd93Bb", lambda p: _title(heading(p.soup, {"class": has_class("Fd93Bb")}))),
    ("og:title", lambda p: _title(meta_content(p.soup, prop="og:title"))),
    ("meta title", lambda p: _title(meta_content(p.soup, name="title"))),
    ("<title>", lambda p: _title(title_tag(p.soup))),
)

LOGO_RULES: tuple[Rule, ...] = (
    ("og:image property", lambda p: meta_content(p.soup, prop="og:image")),
    ("og:image name", lambda p: meta_content(p.soup, name="og:image")),
    ("img alt icon", lambda p: img_src(p.soup.find("img", alt=_icon_alt, src=True))),
    ("T75of", lambda p: img_src(p.soup.find("img", class_=has_class("T75of")))),
    ("srcset", lambda p: first_srcset_url(first_srcset(p.soup) or "")),
)


def _first_ld_json(page: FetchedPage) -> Optional[dict]:
    # Only the first block is consulted on Play listings.
    tag = page.soup.find("script", attrs={"type": "application/ld+json"})
    if tag is None:
        return None
    data = parse_json(tag.string or tag.get_text())
    return data if isinstance(data, dict) else None


def extract_from_page(page: FetchedPage) -> GameListingResult:
    result = GameListingResult()

    data = _first_ld_json(page)
    if data:
        result = result.fill(game_name=ld_name(data), logo_url=ld_image(data))

    if result.missing("game_name"):
        _, name = first_match(NAME_RULES, page)
        result = result.fill(game_name=name)

    # Play always encodes the package name in the URL.
    result = result.fill(package_identifier=query_param(page.url, "id"))

    if result.missing("logo_url"):
        _, logo = first_match(LOGO_RULES, page)
        if logo:
            result = result.fill(logo_url=absolute_logo_url(logo, page.url))

    return result


def scrape_google_play_page(url: str) -> GameListingResult:
    """
    Resolve a Google Play listing.

    Same layering as the App Store pipeline minus the lookup API:
    first JSON-LD block, then HTML patterns. The package name comes
    from the `id` query parameter.

    Raises StoreFetchError when the listing page itself can't be fetched.
    """
    page = fetch_page(url, user_agent=GOOGLE_PLAY_UA)
    return extract_from_page(page)
