"""Tests for the match detail parser against a saved Bo3 match page.

Tests cover: header, streams and VODs, per-map teams and scoreboards,
round outcomes (ordering, unplayed and undecidable rounds), head-to-head,
recent form, and the optional performance and economy tabs.
"""

from datetime import datetime
from pathlib import Path

import pytest

from vlr_scraper.exceptions import ElementNotFound, FieldParseError
from vlr_scraper.extract import make_soup
from vlr_scraper.match_detail_parser import (
    parse_match_detail,
    parse_player_row,
    parse_rounds,
)
from vlr_scraper.models import UNKNOWN_PLAYER_ID, RoundSide

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures"

MATCH_ID = 429519
SEN, C9 = 2, 188


def load_fixture(filename: str) -> str:
    """Load an HTML fixture from tests/fixtures."""
    return (FIXTURE_DIR / filename).read_text(encoding="utf-8")


def _minimal_match(date_ts: str = "2025-01-04 18:00:00", with_icon: bool = True) -> str:
    icon = "<img src='//owcdn.net/img/e.png'>" if with_icon else ""
    return (
        "<div class='col mod-3'><div class='match-header'>"
        "<div class='match-header-super'>"
        f"<a class='match-header-event' href='/event/1/e'>{icon}<div><div>Event</div></div></a>"
        "<div class='match-header-date'>"
        f"<div class='moment-tz-convert' data-utc-ts='{date_ts}'></div>"
        "</div></div>"
        "<div class='match-header-vs'>"
        "<a class='match-header-link' href='/team/10/a'><div class='wf-title-med'>A</div></a>"
        "<a class='match-header-link' href='/team/20/b'><div class='wf-title-med'>B</div></a>"
        "</div></div></div>"
    )


# ---------------------------------------------------------------------------
# TestHeader
# ---------------------------------------------------------------------------
class TestHeader:
    """Event block, timestamp and the two header teams."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.result = parse_match_detail(load_fixture("match_detail.html"), MATCH_ID)
        self.header = self.result.header

    def test_match_id(self):
        assert self.result.id == MATCH_ID

    def test_event_fields(self):
        assert self.header.event_icon == "https://owcdn.net/img/63067806d167d.png"
        assert self.header.event_title == "Champions Tour 2025: Americas Kickoff"
        assert self.header.event_series_name == "Upper Final"
        assert self.header.event_id == 2282
        assert self.header.event_slug == "champions-tour-2025-americas-kickoff"

    def test_date_from_utc_timestamp(self):
        assert self.header.date == datetime(2025, 1, 4, 18, 0, 0)

    def test_patch_prefix_stripped(self):
        assert self.header.patch == "10.0"

    def test_status_and_format(self):
        assert self.header.status == "final"
        assert self.header.format == "Bo3"

    def test_teams(self):
        sen, c9 = self.header.teams
        assert (sen.id, sen.slug, sen.name, sen.score) == (SEN, "sentinels", "Sentinels", 2)
        assert (c9.id, c9.slug, c9.name, c9.score) == (C9, "cloud9", "Cloud9", 1)

    def test_team_links_and_icons_absolutized(self):
        sen, c9 = self.header.teams
        assert sen.href == "https://www.vlr.gg/team/2/sentinels"
        assert sen.icon == "https://owcdn.net/img/sentinels.png"
        assert c9.icon == "https://www.vlr.gg/img/vlr/tmp/vlr.png"


# ---------------------------------------------------------------------------
# TestStreamsAndVods
# ---------------------------------------------------------------------------
class TestStreamsAndVods:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.result = parse_match_detail(load_fixture("match_detail.html"), MATCH_ID)

    def test_streams(self):
        assert [(s.name, s.link) for s in self.result.streams] == [
            ("Valorant_Americas", "https://www.twitch.tv/valorant_americas"),
            ("Tarik", "https://www.twitch.tv/tarik"),
        ]

    def test_vods(self):
        assert [(v.name, v.link) for v in self.result.vods] == [
            ("Map 1", "https://www.youtube.com/watch?v=map1"),
            ("Map 2", "https://www.youtube.com/watch?v=map2"),
        ]


# ---------------------------------------------------------------------------
# TestGames
# ---------------------------------------------------------------------------
class TestGames:
    """Per-map containers, excluding the aggregate section."""

    @pytest.fixture(autouse=True)
    def setup(self):
        self.diagnostics: list[str] = []
        self.result = parse_match_detail(
            load_fixture("match_detail.html"), MATCH_ID, diagnostics=self.diagnostics
        )
        self.ascent, self.lotus = self.result.games

    def test_aggregate_section_excluded(self):
        assert [g.map for g in self.result.games] == ["Ascent", "Lotus"]

    def test_pick_resolved_to_header_team(self):
        assert self.ascent.picked_by == SEN
        assert self.lotus.picked_by == C9

    def test_duration(self):
        assert self.ascent.duration == "49:53"
        assert self.lotus.duration is None

    def test_game_teams(self):
        sen, c9 = self.ascent.teams
        assert (sen.name, sen.score, sen.score_t, sen.score_ct, sen.is_winner) == (
            "Sentinels", 13, 8, 5, True,
        )
        assert (c9.name, c9.score, c9.score_t, c9.score_ct, c9.is_winner) == (
            "Cloud9", 11, 7, 4, False,
        )

    def test_rosters_follow_team_order(self):
        sen, c9 = self.ascent.teams
        assert [p.name for p in sen.players] == ["TenZ", "zekken"]
        assert [p.name for p in c9.players] == ["OXY", "Xeppaa"]

    def test_rounds(self):
        assert [(r.round, r.winning_team, r.winning_side) for r in self.ascent.rounds] == [
            (1, SEN, RoundSide.T),
            (2, C9, RoundSide.CT),
            (3, SEN, RoundSide.CT),
            (4, C9, RoundSide.T),
        ]

    def test_unplayed_round_dropped(self):
        assert 5 not in [r.round for r in self.ascent.rounds]

    def test_rounds_sorted_and_undecidable_kept(self):
        assert [r.round for r in self.lotus.rounds] == [1, 2]
        first, second = self.lotus.rounds
        assert first.winning_team == C9
        assert first.winning_side is RoundSide.CT
        assert second.is_unknown
        assert second.winning_side is None

    def test_single_team_block_gives_no_teams(self):
        assert self.lotus.teams == []

    def test_degradations_reported(self):
        assert len(self.diagnostics) == 2
        assert all(d.startswith(f"match {MATCH_ID}: map 'Lotus'") for d in self.diagnostics)
        assert any("round 2" in d for d in self.diagnostics)
        assert any("team blocks" in d for d in self.diagnostics)

    def test_optional_tabs_absent(self):
        assert self.result.performance is None
        assert self.result.economy is None


# ---------------------------------------------------------------------------
# TestScoreboard
# ---------------------------------------------------------------------------
class TestScoreboard:

    @pytest.fixture(autouse=True)
    def setup(self):
        result = parse_match_detail(load_fixture("match_detail.html"), MATCH_ID)
        sen, c9 = result.games[0].teams
        self.tenz, self.zekken = sen.players
        self.oxy, self.xeppaa = c9.players

    def test_identity(self):
        assert self.tenz.id == 9
        assert self.tenz.slug == "tenz"
        assert self.tenz.nation == "Canada"
        assert self.tenz.agent == "Jett"

    def test_full_stat_line(self):
        p = self.tenz
        assert p.rating == 1.25
        assert p.acs == 260
        assert (p.kills, p.deaths, p.assists, p.kd_diff) == (20, 14, 5, 6)
        assert p.kast == pytest.approx(0.74)
        assert p.adr == 160.5
        assert p.hs_pct == pytest.approx(0.28)
        assert (p.first_kills, p.first_deaths, p.fk_diff) == (4, 2, 2)

    def test_stats_independently_optional(self):
        p = self.zekken
        assert p.rating == 0.98
        assert p.acs is None
        assert p.kills == 15
        assert p.kd_diff == -1
        assert p.kast is None
        assert p.adr is None
        assert p.fk_diff is None

    def test_short_row_fills_none(self):
        p = self.xeppaa
        assert p.id == 1001
        assert p.rating == 0.85
        assert p.acs is None and p.kills is None

    def test_player_row_requires_name_cell(self):
        row = make_soup("<table><tr><td class='mod-stat'>1</td></tr></table>").tr
        with pytest.raises(ElementNotFound):
            parse_player_row(row)

    def test_player_row_without_link_has_unknown_id(self):
        row = make_soup(
            "<table><tr><td class='mod-player'><a><div>Ghost</div></a></td></tr></table>"
        ).tr
        player = parse_player_row(row)
        assert player.id == UNKNOWN_PLAYER_ID
        assert player.name == "Ghost"


# ---------------------------------------------------------------------------
# TestParseRounds -- direct
# ---------------------------------------------------------------------------
class TestParseRounds:

    @staticmethod
    def _game(columns: str):
        html = (
            "<div class='game'><div class='vlr-rounds'><div class='vlr-rounds-row'>"
            f"<div class='vlr-rounds-row-col'></div>{columns}"
            "</div></div></div>"
        )
        return make_soup(html).find("div", class_="game")

    @staticmethod
    def _col(number: str, first: str = "", second: str = "") -> str:
        return (
            "<div class='vlr-rounds-row-col'>"
            f"<div class='rnd-num'>{number}</div>"
            f"<div class='rnd-sq {first}'></div><div class='rnd-sq {second}'></div>"
            "</div>"
        )

    def test_out_of_order_columns_sorted(self):
        game = self._game(
            self._col("3", "mod-win mod-t") + self._col("1", "", "mod-win mod-ct")
            + self._col("2", "mod-win mod-ct")
        )
        rounds, notes = parse_rounds(game, [10, 20])
        assert [r.round for r in rounds] == [1, 2, 3]
        assert [r.winning_team for r in rounds] == [20, 10, 10]
        assert notes == []

    def test_unparsable_number_dropped_with_note(self):
        game = self._game(self._col("?", "mod-win"))
        rounds, notes = parse_rounds(game, [10, 20])
        assert rounds == []
        assert len(notes) == 1

    def test_winner_beyond_known_teams_is_unknown(self):
        game = self._game(self._col("1", "", "mod-win mod-t"))
        rounds, notes = parse_rounds(game, [10])
        assert rounds[0].is_unknown
        assert len(notes) == 1

    def test_spacer_column_ignored(self):
        game = self._game(
            "<div class='vlr-rounds-row-col mod-spacing'><div class='rnd-sq mod-win'></div></div>"
            + self._col("1", "mod-win")
        )
        rounds, _ = parse_rounds(game, [10, 20])
        assert [r.round for r in rounds] == [1]
        assert rounds[0].winning_side is RoundSide.CT


# ---------------------------------------------------------------------------
# TestHeadToHeadAndForm
# ---------------------------------------------------------------------------
class TestHeadToHeadAndForm:

    @pytest.fixture(autouse=True)
    def setup(self):
        self.result = parse_match_detail(load_fixture("match_detail.html"), MATCH_ID)

    def test_incomplete_h2h_skipped(self):
        assert [m.match_id for m in self.result.head_to_head] == [378829, 350000]

    def test_h2h_fields(self):
        first, second = self.result.head_to_head
        assert first.event_name == "Champions Tour 2024: Americas Stage 2"
        assert first.event_series == "Playoffs: Lower Final"
        assert first.event_icon == "https://owcdn.net/img/stage2.png"
        assert (first.team1_score, first.team2_score, first.winner_index) == (1, 2, 1)
        assert first.date == "2024/07/20"
        assert (second.team1_score, second.team2_score, second.winner_index) == (2, 0, 0)
        assert second.event_series == ""

    def test_past_matches_per_header_team(self):
        assert [p.team_id for p in self.result.past_matches] == [SEN, C9]

    def test_past_match_fields(self):
        mibr, loud = self.result.past_matches[0].matches
        assert (mibr.match_id, mibr.score_for, mibr.score_against, mibr.is_win) == (420000, 2, 0, True)
        assert mibr.opponent_name == "MIBR"
        assert mibr.opponent_logo == "https://owcdn.net/img/mibr.png"
        assert mibr.date == "2024/12/20"
        assert (loud.score_for, loud.score_against, loud.is_win) == (1, 2, False)
        assert loud.opponent_logo == ""

    def test_past_match_without_id_skipped(self):
        assert [m.match_id for m in self.result.past_matches[1].matches] == [420010]


# ---------------------------------------------------------------------------
# TestOptionalTabs
# ---------------------------------------------------------------------------
class TestOptionalTabs:

    def test_both_tabs_parsed(self):
        result = parse_match_detail(
            load_fixture("match_detail.html"),
            MATCH_ID,
            perf_doc=load_fixture("match_performance.html"),
            econ_doc=load_fixture("match_economy.html"),
        )
        assert result.performance is not None
        assert len(result.performance.player_performances) == 2
        assert result.economy is not None
        assert [t.team_name for t in result.economy.teams] == ["Sentinels", "Cloud9"]

    def test_unusable_performance_tab_degrades(self):
        diagnostics: list[str] = []
        result = parse_match_detail(
            load_fixture("match_detail.html"),
            MATCH_ID,
            perf_doc="<html><body>rate limited</body></html>",
            econ_doc=load_fixture("match_economy.html"),
            diagnostics=diagnostics,
        )
        assert result.performance is None
        assert result.economy is not None
        assert any("performance tab unusable" in d for d in diagnostics)

    def test_unusable_economy_tab_degrades(self):
        diagnostics: list[str] = []
        result = parse_match_detail(
            load_fixture("match_detail.html"),
            MATCH_ID,
            econ_doc="<div class='vm-stats'></div>",
            diagnostics=diagnostics,
        )
        assert result.economy is None
        assert any("economy tab unusable" in d for d in diagnostics)


# ---------------------------------------------------------------------------
# TestRequiredMarkup
# ---------------------------------------------------------------------------
class TestRequiredMarkup:

    def test_minimal_match_parses(self):
        result = parse_match_detail(_minimal_match(), 1)
        assert [t.id for t in result.header.teams] == [10, 20]
        assert [t.score for t in result.header.teams] == [None, None]
        assert result.games == []

    def test_missing_column_raises(self):
        with pytest.raises(ElementNotFound):
            parse_match_detail("<html><body></body></html>", 1)

    def test_missing_header_raises(self):
        with pytest.raises(ElementNotFound):
            parse_match_detail("<div class='col mod-3'></div>", 1)

    def test_missing_event_icon_raises(self):
        with pytest.raises(ElementNotFound):
            parse_match_detail(_minimal_match(with_icon=False), 1)

    def test_bad_timestamp_raises(self):
        with pytest.raises(FieldParseError):
            parse_match_detail(_minimal_match(date_ts="tomorrow"), 1)

    def test_header_team_without_id_reported(self):
        html = _minimal_match().replace("/team/20/b", "/search/?q=b")
        diagnostics: list[str] = []
        result = parse_match_detail(html, 1, diagnostics=diagnostics)
        assert [t.id for t in result.header.teams] == [10, 0]
        assert len(diagnostics) == 1
