# File: tests/test_normalizer.py
import pytest

from link_audit.checker.normalizer import (
    is_link_text_proper,
    normalize_text,
    split_scripts,
    strip_link_suffix,
    strip_site_name,
)


def test_suffix_and_site_name_stripping():
    assert is_link_text_proper("資料一覧", "資料 | Example Corp")


def test_mixed_script_runs():
    assert is_link_text_proper("Newsお知らせ", "お知らせページ")


@pytest.mark.parametrize(
    "link,target",
    [
        ("", "Title"),
        ("Text", ""),
        ("   ", "Title"),
    ],
)
def test_empty_inputs(link, target):
    assert not is_link_text_proper(link, target)


def test_url_as_own_text():
    assert is_link_text_proper("https://example.com/docs", "Something unrelated")


def test_fullwidth_folding():
    assert normalize_text("ＡＢＣ　１２３") == "abc 123"
    assert is_link_text_proper("ＦＡＱ", "FAQ - Example")


def test_containment_both_ways():
    assert is_link_text_proper("Contact", "Contact Us | Example")
    assert is_link_text_proper("About our company history", "About")


def test_unrelated_text():
    assert not is_link_text_proper("Click here", "Annual Report 2023 | Example")


def test_short_runs_ignored():
    # only the single letter "a" would match
    assert not is_link_text_proper("a資料", "Catalog")


def test_strip_link_suffix():
    assert strip_link_suffix("製品一覧") == "製品"
    assert strip_link_suffix("Site TOP") == "Site"
    assert strip_link_suffix("News index ") == "News"
    assert strip_link_suffix("Desktop") == "Desktop"
    assert strip_link_suffix("トップ") == "トップ"


def test_strip_site_name():
    assert strip_site_name("Contact Us | Example") == "Contact Us"
    assert strip_site_name("Pricing - Example - Tools") == "Pricing"
    assert strip_site_name("Blog — Example") == "Blog"
    assert strip_site_name("Well-known page") == "Well-known page"
    assert strip_site_name("| Example") == "| Example"


def test_split_scripts():
    assert split_scripts("newsお知らせ") == ["news", "お知らせ"]
    assert split_scripts("abc 日本 x1") == ["abc", "日本", "x1"]
