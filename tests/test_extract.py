"""Unit tests for the shared extraction primitives in vlr_scraper.extract."""

import logging

import pytest
from bs4 import BeautifulSoup

from vlr_scraper.exceptions import SelectorError
from vlr_scraper.extract import (
    class_token,
    find_section_after_heading,
    first_text,
    get_attr,
    has_class,
    infer_platform,
    joined_text,
    last_text,
    make_soup,
    normalize_url,
    parse_float,
    parse_id_slug,
    parse_int,
    report_diagnostics,
    select,
    select_attr,
    select_one,
    select_text,
    text_nodes,
    zip_padded,
)

HTML = """
<div id="root">
  <div class="card mod-win mod-kr">
    <span class="name">
      Sentinels
    </span>
    <span class="tag">SEN</span>
  </div>
  <div class="card">
    <span class="name">Cloud9</span>
  </div>
  <a class="link" href=" /team/2/sentinels ">link</a>
  <h2 class="heading">Current Teams</h2>
  <div class="section">current</div>
  <h2 class="heading">Past Teams</h2>
</div>
"""


@pytest.fixture
def soup() -> BeautifulSoup:
    return make_soup(HTML)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------
class TestSelection:

    def test_make_soup_passes_parsed_document_through(self, soup):
        assert make_soup(soup) is soup

    def test_select_returns_document_order(self, soup):
        names = [first_text(el) for el in select(soup, "span.name")]
        assert names == ["Sentinels", "Cloud9"]

    def test_select_one_returns_none_when_absent(self, soup):
        assert select_one(soup, "table.missing") is None

    def test_invalid_selector_raises_selector_error(self, soup):
        with pytest.raises(SelectorError):
            select(soup, "div[")

    def test_invalid_selector_in_select_one_raises_selector_error(self, soup):
        with pytest.raises(SelectorError):
            select_one(soup, "div:unknown-pseudo")

    def test_select_text_defaults_to_empty(self, soup):
        assert select_text(soup, "span.nothing") == ""

    def test_select_attr_strips_value(self, soup):
        assert select_attr(soup, "a.link", "href") == "/team/2/sentinels"

    def test_select_attr_defaults_to_empty(self, soup):
        assert select_attr(soup, "a.link", "title") == ""

    def test_get_attr_joins_multi_valued_attributes(self, soup):
        card = select_one(soup, "div.card")
        assert get_attr(card, "class") == "card mod-win mod-kr"

    def test_get_attr_on_none(self):
        assert get_attr(None, "href") == ""


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------
class TestText:

    def test_text_nodes_are_trimmed(self, soup):
        card = select_one(soup, "div.card")
        assert text_nodes(card) == ["Sentinels", "SEN"]

    def test_first_and_last_text(self, soup):
        card = select_one(soup, "div.card")
        assert first_text(card) == "Sentinels"
        assert last_text(card) == "SEN"

    def test_joined_text_with_separator(self, soup):
        card = select_one(soup, "div.card")
        assert joined_text(card, " ") == "Sentinels SEN"

    def test_text_helpers_on_none(self):
        assert text_nodes(None) == []
        assert first_text(None) == ""
        assert last_text(None) == ""
        assert joined_text(None) == ""


# ---------------------------------------------------------------------------
# Class tokens
# ---------------------------------------------------------------------------
class TestClassTokens:

    def test_has_class(self, soup):
        card = select_one(soup, "div.card")
        assert has_class(card, "mod-win")
        assert not has_class(card, "mod-loss")

    def test_class_token_strips_prefix(self):
        flag = make_soup('<i class="flag mod-kr"></i>').i
        assert class_token(flag) == "kr"

    def test_class_token_none_without_match(self):
        flag = make_soup('<i class="flag"></i>').i
        assert class_token(flag) is None
        assert class_token(None) is None

    def test_has_class_on_none(self):
        assert has_class(None, "mod-win") is False


# ---------------------------------------------------------------------------
# Numbers and links
# ---------------------------------------------------------------------------
class TestNumbers:

    @pytest.mark.parametrize("text,expected", [
        ("13", 13),
        (" +6 ", 6),
        ("-4", -4),
        ("1,234", 1234),
        ("", None),
        ("–", None),
        (None, None),
    ])
    def test_parse_int(self, text, expected):
        assert parse_int(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("1.25", 1.25),
        ("74%", 74.0),
        ("+0.5", 0.5),
        ("", None),
        ("n/a", None),
        (None, None),
    ])
    def test_parse_float(self, text, expected):
        assert parse_float(text) == expected


class TestParseIdSlug:

    def test_relative_link(self):
        assert parse_id_slug("/team/2593/fnatic", "/team/") == (2593, "fnatic")

    def test_absolute_link_reduced_to_path(self):
        assert parse_id_slug("https://www.vlr.gg/player/9/tenz", "/player/") == (9, "tenz")

    def test_match_link_with_root_prefix(self):
        assert parse_id_slug("/427991/sentinels-vs-100-thieves") == (427991, "sentinels-vs-100-thieves")

    def test_query_string_removed(self):
        assert parse_id_slug("/event/2282/?page=2", "/event/") == (2282, "")

    def test_missing_slug(self):
        assert parse_id_slug("/team/2", "/team/") == (2, "")

    def test_wrong_prefix(self):
        assert parse_id_slug("/event/2282/x", "/team/") == (None, "")

    def test_non_numeric_id(self):
        assert parse_id_slug("/event/abc/broken", "/event/") == (None, "")

    def test_empty_href(self):
        assert parse_id_slug("", "/") == (None, "")


class TestLinks:

    def test_protocol_relative_url(self):
        assert normalize_url("//owcdn.net/img/x.png") == "https://owcdn.net/img/x.png"

    def test_site_relative_url(self):
        assert normalize_url("/img/vlr/tmp/vlr.png") == "https://www.vlr.gg/img/vlr/tmp/vlr.png"

    def test_absolute_url_unchanged(self):
        assert normalize_url("https://example.com/a") == "https://example.com/a"

    def test_empty_url_unchanged(self):
        assert normalize_url("") == ""

    def test_custom_base_url(self):
        assert normalize_url("/x", "https://mirror.test/") == "https://mirror.test/x"

    @pytest.mark.parametrize("url,platform", [
        ("https://twitter.com/FNATIC", "twitter"),
        ("https://x.com/FNATIC", "twitter"),
        ("https://www.twitch.tv/tenz", "twitch"),
        ("https://m.youtube.com/@vct", "youtube"),
        ("https://discord.gg/abc", "discord"),
        ("https://liquipedia.net/valorant/FNATIC", "liquipedia"),
        ("https://fnatic.com", "website"),
        ("//instagram.com/fnatic", "instagram"),
    ])
    def test_infer_platform(self, url, platform):
        assert infer_platform(url) == platform


# ---------------------------------------------------------------------------
# Structural scans
# ---------------------------------------------------------------------------
class TestStructure:

    def test_zip_padded_pads_short_sequences(self):
        assert zip_padded(3, [1, 2, 3], ["a"]) == [(1, "a"), (2, None), (3, None)]

    def test_zip_padded_truncates_long_sequences(self):
        assert zip_padded(1, [1, 2], ["a", "b"]) == [(1, "a")]

    def test_zip_padded_zero_length(self):
        assert zip_padded(0, [1]) == []

    def test_find_section_after_heading(self, soup):
        section = find_section_after_heading(soup, "h2.heading", "current teams")
        assert section is not None
        assert first_text(section) == "current"

    def test_find_section_heading_without_sibling(self, soup):
        assert find_section_after_heading(soup, "h2.heading", "Past Teams") is None

    def test_find_section_missing_heading(self, soup):
        assert find_section_after_heading(soup, "h2.heading", "Latest News") is None


class TestReportDiagnostics:

    def test_messages_logged_and_collected(self, caplog):
        sink: list[str] = []
        log = logging.getLogger("vlr_scraper.test")
        with caplog.at_level(logging.WARNING, logger="vlr_scraper.test"):
            report_diagnostics(log, "match 1", ["round 3 unknown"], sink)
        assert sink == ["match 1: round 3 unknown"]
        assert "match 1: round 3 unknown" in caplog.text

    def test_without_sink_only_logs(self, caplog):
        log = logging.getLogger("vlr_scraper.test")
        with caplog.at_level(logging.WARNING, logger="vlr_scraper.test"):
            report_diagnostics(log, "team 2", ["no name"])
        assert "team 2: no name" in caplog.text
