from __future__ import annotations

import pytest

from ampd.config import APP_STORE_TITLE_SUFFIX, GOOGLE_PLAY_TITLE_SUFFIX
from ampd.models import AuthorizationSubject, GameListingResult
from ampd.scrape.rules import parse_json
from ampd.sources import platform_from_url, store_favicon_url
from ampd.utils import (
    absolute_logo_url,
    app_id_from_url,
    clean_title,
    decode_entities,
    first_srcset_url,
    query_param,
)


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://apps.apple.com/us/app/x/id1", "app_store"),
        ("https://itunes.apple.com/app/id1", "app_store"),
        ("https://play.google.com/store/apps/details?id=a.b", "google_play"),
        ("https://example.com/game", "unrecognized"),
        ("", "unrecognized"),
    ],
)
def test_platform_from_url(url, expected):
    assert platform_from_url(url) == expected


def test_store_favicon_url():
    assert "apps.apple.com" in store_favicon_url("https://apps.apple.com/app/id1")
    assert "play.google.com" in store_favicon_url("https://play.google.com/store/apps/details?id=a")
    assert store_favicon_url("https://example.com") is None


@pytest.mark.parametrize(
    "url",
    [
        "https://apps.apple.com/us/app/some-game/id123456",
        "https://apps.apple.com/us/app/some-game?id=123456",
        "https://apps.apple.com/us/app/some-game?mt=8&id=123456",
        "https://itunes.apple.com/app/id123456",
    ],
)
def test_app_id_forms_are_equivalent(url):
    assert app_id_from_url(url) == "123456"


def test_app_id_missing():
    assert app_id_from_url("https://apps.apple.com/us/app/some-game") is None


def test_decode_entities():
    assert decode_entities("A &amp; B &quot;C&quot; D&#39;s E&apos;s &lt;F&gt;&nbsp;G") == "A & B \"C\" D's E's <F> G"


@pytest.mark.parametrize("dash", ["-", "–", "—"])
def test_clean_title_strips_store_suffix(dash):
    assert clean_title(f"Cool &amp; Fun {dash} App Store", APP_STORE_TITLE_SUFFIX) == "Cool & Fun"
    assert clean_title(f"Cool &amp; Fun {dash} app store", APP_STORE_TITLE_SUFFIX) == "Cool & Fun"
    assert clean_title(f"Cool Fun {dash} GOOGLE PLAY", GOOGLE_PLAY_TITLE_SUFFIX) == "Cool Fun"


def test_clean_title_keeps_unrelated_dashes():
    assert clean_title("<b>Half-Life</b> - App Store", APP_STORE_TITLE_SUFFIX) == "Half-Life"
    assert clean_title("Half-Life", GOOGLE_PLAY_TITLE_SUFFIX) == "Half-Life"


def test_first_srcset_url():
    assert first_srcset_url("https://a/1.png 1x, https://a/2.png 2x") == "https://a/1.png"
    assert first_srcset_url("  https://a/only.png  ") == "https://a/only.png"
    assert first_srcset_url("") == ""


def test_absolute_logo_url():
    page = "https://apps.apple.com/us/app/x/id1"
    assert absolute_logo_url("//cdn/a.png", page) == "https://cdn/a.png"
    assert absolute_logo_url("/a.png", page) == "https://apps.apple.com/a.png"
    assert absolute_logo_url("https://cdn/a.png", page) == "https://cdn/a.png"


def test_query_param():
    assert query_param("https://play.google.com/store/apps/details?id=com.a&hl=en", "id") == "com.a"
    assert query_param("https://play.google.com/store/apps/details?hl=en", "id") is None


def test_parse_json_never_raises():
    assert parse_json('{"a": 1}') == {"a": 1}
    assert parse_json("{broken") is None
    assert parse_json("") is None
    assert parse_json(None) is None


def test_result_fill_is_first_writer_wins():
    r = GameListingResult().fill(game_name="First")
    r2 = r.fill(game_name="Second", logo_url="https://img/x.png", package_identifier="")

    assert r.game_name == "First"
    assert r.logo_url is None
    assert r2.game_name == "First"
    assert r2.logo_url == "https://img/x.png"
    assert r2.package_identifier is None
    assert r2.to_dict() == {"game_name": "First", "logo_url": "https://img/x.png"}


def test_result_flags():
    assert GameListingResult().is_empty
    assert GameListingResult().to_dict() == {}
    full = GameListingResult("a", "b", "c")
    assert not full.is_empty


def test_subject_from_profile():
    assert AuthorizationSubject.from_profile(None) is None
    s = AuthorizationSubject.from_profile({"id": "p1", "role": "am", "is_active": True, "email": "x@y"})
    assert s == AuthorizationSubject(id="p1", role="am", is_active=True)
