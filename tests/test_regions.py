from __future__ import annotations

import pytest

from ampd.regions import convert_store_url


@pytest.mark.parametrize(
    "url,region,expected",
    [
        ("https://apps.apple.com/us/app/x/id1", "KR", "https://apps.apple.com/kr/app/x/id1"),
        ("https://apps.apple.com/app/x/id1", "JP", "https://apps.apple.com/jp/app/x/id1"),
        ("https://itunes.apple.com/gb/app/x/id1?mt=8", "tw", "https://itunes.apple.com/tw/app/x/id1?mt=8"),
        ("https://apps.apple.com/us/developer/y/id2", "KR", "https://apps.apple.com/us/developer/y/id2"),
    ],
)
def test_app_store_country_segment(url, region, expected):
    assert convert_store_url(url, region) == expected


def test_google_play_language_param():
    assert (
        convert_store_url("https://play.google.com/store/apps/details?id=com.a&hl=en", "JP")
        == "https://play.google.com/store/apps/details?id=com.a&hl=ja"
    )
    assert (
        convert_store_url("https://play.google.com/store/apps/details?id=com.a", "TW")
        == "https://play.google.com/store/apps/details?id=com.a&hl=zh-TW"
    )


def test_unchanged_when_not_applicable():
    assert convert_store_url("https://example.com/x", "KR") == "https://example.com/x"
    assert convert_store_url("https://apps.apple.com/us/app/x/id1", "FR") == "https://apps.apple.com/us/app/x/id1"
    assert convert_store_url("https://apps.apple.com/us/app/x/id1", None) == "https://apps.apple.com/us/app/x/id1"
    assert convert_store_url(None, "KR") is None
    assert convert_store_url("", "KR") is None
