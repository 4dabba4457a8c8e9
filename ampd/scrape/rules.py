# ampd/scrape/rules.py
from __future__ import annotations

import json
import re
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from ampd.scrape.http import FetchedPage
from ampd.utils_debug import dbg


Extractor = Callable[[FetchedPage], Optional[str]]
Rule = Tuple[str, Extractor]


def first_match(rules: Iterable[Rule], page: FetchedPage) -> Tuple[str, Optional[str]]:
    """
    Run rules in order; the first one returning a non-empty value wins.

    Returns (label, value), or ("", None) when nothing matched.
    """
    for label, extract in rules:
        value = extract(page)
        if value:
            dbg("rule", url=page.url, rule=label, value=value)
            return label, value
    return "", None


def parse_json(text: Optional[str]) -> Optional[Any]:
    """json.loads that answers None instead of raising."""
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


# -----------------------------
# Building blocks for extractors
# -----------------------------

def _script_text(tag: Tag) -> str:
    return tag.string or tag.get_text() or ""


def ld_json_blocks(soup: BeautifulSoup) -> Iterator[dict]:
    """Parsed `application/ld+json` objects; unparsable blocks are skipped."""
    for tag in soup.find_all("script", attrs={"type": "application/ld+json"}):
        data = parse_json(_script_text(tag))
        if isinstance(data, dict):
            yield data


def ld_image(data: dict) -> Optional[str]:
    image = data.get("image")
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, dict):
        image = image.get("url")
    return image if isinstance(image, str) else None


def ld_name(data: dict) -> Optional[str]:
    name = data.get("name")
    return name if isinstance(name, str) else None


def inner_html(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    return tag.decode_contents()


def heading(soup: BeautifulSoup, attrs: dict[str, Any]) -> Optional[str]:
    return inner_html(soup.find("h1", attrs=attrs))


def meta_content(soup: BeautifulSoup, *, prop: str = "", name: str = "") -> Optional[str]:
    attrs = {"property": prop} if prop else {"name": name}
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    return tag.get("content") or None


def title_tag(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find("title")
    return tag.get_text() if tag else None


def img_src(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    return tag.get("src") or None


def first_srcset(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find("img", srcset=True)
    return tag.get("srcset") if tag else None


def has_class(fragment: str) -> Callable[[Any], bool]:
    """class_ filter matching any class containing `fragment`."""
    def _match(value: Any) -> bool:
        return bool(value) and fragment in value
    return _match


def inline_scripts(soup: BeautifulSoup) -> Iterator[str]:
    for tag in soup.find_all("script"):
        text = _script_text(tag)
        if text:
            yield text


def search(pattern: str, text: str, flags: int = re.IGNORECASE) -> Optional[str]:
    m = re.search(pattern, text or "", flags)
    return m.group(1) if m else None
