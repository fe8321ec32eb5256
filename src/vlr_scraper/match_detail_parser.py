"""Match detail parser for vlr.gg match pages (``/<match_id>``).

Provides:
- parse_match_detail: pure function building a MatchDetail from the main
  page plus the optional performance and economy tab documents
- parse_header, parse_games, parse_rounds, parse_player_row,
  parse_head_to_head, parse_past_matches: the sub-extractions

Sub-parsers return ``(value, notes)`` where ``notes`` lists degradations
(missing optional markup, undecidable rounds). parse_match_detail logs
them and copies them into the caller's ``diagnostics`` list; they never
fail the parse. Only the page column, the match header, the event icon,
the header timestamp and a player row's name cell are required.
"""

import logging

from bs4 import BeautifulSoup, Tag

from vlr_scraper.dates import MATCH_DETAIL_TIMESTAMP_FORMATS, parse_required
from vlr_scraper.economy_parser import parse_economy
from vlr_scraper.exceptions import ElementNotFound, ParseError
from vlr_scraper.extract import (
    first_text,
    get_attr,
    has_class,
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
    zip_padded,
)
from vlr_scraper.models import (
    UNKNOWN_PLAYER_ID,
    HeadToHeadMatch,
    MatchDetail,
    MatchEconomy,
    MatchGame,
    MatchGamePlayer,
    MatchGameRound,
    MatchGameTeam,
    MatchHeader,
    MatchHeaderTeam,
    MatchPerformance,
    MatchStream,
    PastMatch,
    RoundSide,
    TeamPastMatches,
)
from vlr_scraper.performance_parser import parse_performance

logger = logging.getLogger(__name__)

_GAMES = "div.vm-stats div.vm-stats-container div.vm-stats-game:not([data-game-id='all'])"
_ROUND_COLUMNS = "div.vlr-rounds div.vlr-rounds-row-col:not(:first-child,.mod-spacing)"
_HEADER_SCORES = (
    "div.match-header-vs div.match-header-vs-score div.match-header-vs-score "
    "span:not(.match-header-vs-score-colon)"
)

# td.mod-stat columns, in page order
_STAT_COLUMNS = (
    "rating", "acs", "kills", "deaths", "assists", "kd_diff",
    "kast", "adr", "hs_pct", "first_kills", "first_deaths", "fk_diff",
)
_FLOAT_STATS = {"rating", "adr"}
_PERCENT_STATS = {"kast", "hs_pct"}


def parse_match_detail(
    doc: str | BeautifulSoup,
    match_id: int,
    perf_doc: str | BeautifulSoup | None = None,
    econ_doc: str | BeautifulSoup | None = None,
    diagnostics: list[str] | None = None,
) -> MatchDetail:
    """Parse a match page and its optional tabs into a MatchDetail.

    Pure function: documents in, MatchDetail out. The performance and
    economy sections are best effort: a missing tab document or a tab
    that fails to parse leaves the section None.

    Args:
        doc: Raw HTML or a parsed document of ``/<match_id>``.
        match_id: vlr.gg match id (for inclusion in the result).
        perf_doc: Document of ``/<match_id>/?tab=performance``, if fetched.
        econ_doc: Document of ``/<match_id>/?tab=economy``, if fetched.
        diagnostics: Optional list that receives degradation messages.

    Returns:
        MatchDetail with header, streams, games and auxiliary sections.

    Raises:
        ElementNotFound: If the page column, match header, event icon or
            header date element is missing.
        FieldParseError: If the header timestamp cannot be parsed.
    """
    soup = make_soup(doc)
    column = select_one(soup, "div.col.mod-3")
    if column is None:
        raise ElementNotFound(f"match {match_id}", "div.col.mod-3")
    header_el = select_one(column, "div.match-header")
    if header_el is None:
        raise ElementNotFound(f"match {match_id}", "div.match-header")

    notes: list[str] = []

    header, header_notes = parse_header(header_el)
    notes.extend(header_notes)

    games, game_notes = parse_games(column, header)
    notes.extend(game_notes)

    performance: MatchPerformance | None = None
    if perf_doc is not None:
        try:
            performance = parse_performance(perf_doc, games)
        except ParseError as exc:
            notes.append(f"performance tab unusable: {exc}")

    economy: MatchEconomy | None = None
    if econ_doc is not None:
        try:
            economy = parse_economy(econ_doc)
        except ParseError as exc:
            notes.append(f"economy tab unusable: {exc}")

    result = MatchDetail(
        id=match_id,
        header=header,
        streams=parse_streams(column),
        vods=parse_vods(column),
        games=games,
        head_to_head=parse_head_to_head(column),
        past_matches=parse_past_matches(column, header),
        performance=performance,
        economy=economy,
    )

    report_diagnostics(logger, f"match {match_id}", notes, diagnostics)
    logger.debug(
        "Parsed match %d: %d games, performance=%s, economy=%s",
        match_id, len(result.games),
        result.performance is not None, result.economy is not None,
    )
    return result


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

def parse_header(header: Tag) -> tuple[MatchHeader, list[str]]:
    """Event block, timestamp, patch, notes and the two header teams."""
    notes: list[str] = []

    icon = select_one(header, "div.match-header-super a.match-header-event img")
    if icon is None:
        raise ElementNotFound("match header", "a.match-header-event img")

    date_el = select_one(
        header, "div.match-header-super div.match-header-date div.moment-tz-convert"
    )
    if date_el is None:
        raise ElementNotFound("match header", "div.moment-tz-convert")
    date = parse_required(
        get_attr(date_el, "data-utc-ts"), MATCH_DETAIL_TIMESTAMP_FORMATS, "match date"
    )

    event_href = select_attr(header, "div.match-header-super a.match-header-event", "href")
    event_id, event_slug = parse_id_slug(event_href, "/event/")
    if event_id is None:
        notes.append(f"event link {event_href!r} has no event id")

    patch = select_text(
        header, "div.match-header-super div.match-header-date > div:nth-child(3)"
    )
    patch = patch.removeprefix("Patch ")

    vs_notes = [first_text(el) for el in select(header, "div.match-header-vs-note")]

    teams, team_notes = _parse_header_teams(header)
    notes.extend(team_notes)

    return MatchHeader(
        event_icon=normalize_url(get_attr(icon, "src")),
        event_title=select_text(
            header, "div.match-header-super a.match-header-event div div:first-child"
        ),
        event_series_name=select_text(
            header,
            "div.match-header-super a.match-header-event div div.match-header-event-series",
        ),
        event_id=event_id,
        event_slug=event_slug,
        date=date,
        patch=patch,
        status=vs_notes[0] if vs_notes else "",
        format=vs_notes[1] if len(vs_notes) > 1 else "",
        note=select_text(
            header, "div.match-header-super div.match-header-date *:not(.moment-tz-convert)"
        ),
        teams=teams,
    ), notes


def _parse_header_teams(header: Tag) -> tuple[list[MatchHeaderTeam], list[str]]:
    """Zip team links, names, icons and scores, bounded by the link count."""
    notes: list[str] = []
    links = [get_attr(a, "href") for a in select(header, "div.match-header-vs a.match-header-link")]
    names = [
        first_text(el)
        for el in select(header, "div.match-header-vs a.match-header-link div.wf-title-med")
    ]
    icons = [
        normalize_url(get_attr(img, "src"))
        for img in select(header, "div.match-header-vs a.match-header-link img")
    ]
    scores = [parse_int(first_text(el)) for el in select(header, _HEADER_SCORES)]
    if len(scores) != 2:
        scores = [None, None]
    if len(links) != 2:
        notes.append(f"expected 2 header teams, found {len(links)}")

    teams: list[MatchHeaderTeam] = []
    for href, name, icon, score in zip_padded(min(len(links), 2), links, names, icons, scores):
        team_id, slug = parse_id_slug(href, "/team/")
        if team_id is None:
            notes.append(f"header team link {href!r} has no team id")
            team_id = 0
        teams.append(
            MatchHeaderTeam(
                id=team_id,
                slug=slug,
                href=normalize_url(href),
                name=name or "",
                score=score,
                icon=icon or "",
            )
        )
    return teams, notes


# ---------------------------------------------------------------------------
# Streams / VODs
# ---------------------------------------------------------------------------

def parse_streams(column: Tag) -> list[MatchStream]:
    return [
        MatchStream(
            name=select_text(btn, "div.match-streams-btn-embed span"),
            link=select_attr(btn, "a.match-streams-btn-external", "href"),
        )
        for btn in select(
            column, "div.match-streams div.match-streams-container div.match-streams-btn"
        )
    ]


def parse_vods(column: Tag) -> list[MatchStream]:
    return [
        MatchStream(name=first_text(a), link=get_attr(a, "href"))
        for a in select(column, "div.match-vods div.match-streams-container a")
    ]


# ---------------------------------------------------------------------------
# Games, rounds and players
# ---------------------------------------------------------------------------

def parse_games(column: Tag, header: MatchHeader) -> tuple[list[MatchGame], list[str]]:
    """Every non-aggregate map container, in page order."""
    games: list[MatchGame] = []
    notes: list[str] = []
    for game_el in select(column, _GAMES):
        game, game_notes = _parse_game(game_el, header)
        games.append(game)
        notes.extend(game_notes)
    return games, notes


def _parse_game(game: Tag, header: MatchHeader) -> tuple[MatchGame, list[str]]:
    notes: list[str] = []
    team_ids = [t.id for t in header.teams]

    map_name = select_text(game, "div.vm-stats-game-header div.map div:first-child span")

    picked_by = None
    picked = select_one(game, "div.vm-stats-game-header div.map span.picked")
    if picked is not None:
        if has_class(picked, "mod-1") and len(team_ids) > 0:
            picked_by = team_ids[0]
        elif has_class(picked, "mod-2") and len(team_ids) > 1:
            picked_by = team_ids[1]

    duration = select_text(game, "div.vm-stats-game-header div.map-duration") or None

    rounds, round_notes = parse_rounds(game, team_ids)
    notes.extend(f"map {map_name!r}: {n}" for n in round_notes)

    player_tables = [t for t in select(game, "table") if select_one(t, "td.mod-player")]
    rosters = [
        [parse_player_row(row) for row in select(table, "tr:has(td.mod-player)")]
        for table in player_tables[:2]
    ]

    team_blocks = select(game, "div.vm-stats-game-header div.team")
    teams: list[MatchGameTeam] = []
    if len(team_blocks) == 2:
        for block, players in zip_padded(2, team_blocks, rosters):
            teams.append(_parse_game_team(block, players or []))
    else:
        notes.append(f"map {map_name!r}: expected 2 team blocks, found {len(team_blocks)}")

    return MatchGame(
        map=map_name,
        picked_by=picked_by,
        duration=duration,
        teams=teams,
        rounds=rounds,
    ), notes


def _parse_game_team(block: Tag, players: list[MatchGamePlayer]) -> MatchGameTeam:
    return MatchGameTeam(
        name=select_text(block, "div.team-name"),
        score=parse_int(select_text(block, "div.score")),
        score_t=parse_int(select_text(block, "span.mod-t")),
        score_ct=parse_int(select_text(block, "span.mod-ct")),
        is_winner=has_class(select_one(block, "div.score"), "mod-win"),
        players=players,
    )


def parse_rounds(game: Tag, team_ids: list[int]) -> tuple[list[MatchGameRound], list[str]]:
    """Round outcomes of one map, ordered by round number.

    The winner is the header team at the position of the single outcome
    square marked ``mod-win``; ``mod-t`` on that square means the round
    was won on the attacking side. Columns without a win square (unplayed
    rounds) are dropped. Columns with several win squares, or a win
    square beyond the known header teams, are kept with no winner.
    """
    rounds: list[MatchGameRound] = []
    notes: list[str] = []
    for col in select(game, _ROUND_COLUMNS):
        squares = select(col, "div.rnd-sq")
        winners = [i for i, sq in enumerate(squares) if has_class(sq, "mod-win")]
        if not winners:
            continue

        number = parse_int(select_text(col, "div.rnd-num"))
        if number is None or number < 1:
            notes.append(f"round column with unparsable number {select_text(col, 'div.rnd-num')!r}")
            continue

        if len(winners) > 1 or winners[0] >= len(team_ids):
            notes.append(f"round {number}: outcome undecidable, recorded as unknown")
            rounds.append(MatchGameRound(round=number))
            continue

        square = squares[winners[0]]
        rounds.append(
            MatchGameRound(
                round=number,
                winning_team=team_ids[winners[0]],
                winning_side=RoundSide.T if has_class(square, "mod-t") else RoundSide.CT,
            )
        )

    rounds.sort(key=lambda r: r.round)
    return rounds, notes


def parse_player_row(row: Tag) -> MatchGamePlayer:
    """One scoreboard row. Stats are independently optional.

    Raises:
        ElementNotFound: If the row has no ``td.mod-player`` cell.
    """
    name_cell = select_one(row, "td.mod-player")
    if name_cell is None:
        raise ElementNotFound("game player row", "td.mod-player")

    player_id, slug = parse_id_slug(select_attr(name_cell, "a", "href"), "/player/")

    cells = select(row, "td.mod-stat")
    stats: dict[str, int | float | None] = {}
    for idx, field in enumerate(_STAT_COLUMNS):
        raw = select_text(cells[idx], "span.side.mod-both") if idx < len(cells) else ""
        if field in _PERCENT_STATS:
            value = parse_float(raw)
            stats[field] = value / 100 if value is not None else None
        elif field in _FLOAT_STATS:
            stats[field] = parse_float(raw)
        else:
            stats[field] = parse_int(raw)

    return MatchGamePlayer(
        nation=select_attr(name_cell, "i.flag", "title"),
        id=player_id if player_id is not None else UNKNOWN_PLAYER_ID,
        slug=slug,
        name=select_text(name_cell, "a div:first-child"),
        agent=select_attr(row, "td.mod-agents div span img", "title"),
        **stats,
    )


# ---------------------------------------------------------------------------
# Head-to-head / recent form
# ---------------------------------------------------------------------------

def _score_pair(item: Tag) -> tuple[Tag, Tag, int, int] | None:
    rf = select_one(item, "span.rf")
    ra = select_one(item, "span.ra")
    if rf is None or ra is None:
        return None
    score_for = parse_int(first_text(rf))
    score_against = parse_int(first_text(ra))
    if score_for is None or score_against is None:
        return None
    return rf, ra, score_for, score_against


def parse_head_to_head(column: Tag) -> list[HeadToHeadMatch]:
    """Previous meetings of the two teams; incomplete entries are skipped."""
    matches: list[HeadToHeadMatch] = []
    for item in select(column, "div.match-h2h a.wf-module-item.mod-h2h"):
        match_id, slug = parse_id_slug(get_attr(item, "href"), "/")
        scores = _score_pair(item)
        if match_id is None or scores is None:
            continue
        rf, _, team1_score, team2_score = scores
        matches.append(
            HeadToHeadMatch(
                match_id=match_id,
                match_slug=slug,
                event_name=select_text(item, "div.match-h2h-matches-event-name"),
                event_series=select_text(item, "div.match-h2h-matches-event-series"),
                event_icon=normalize_url(
                    select_attr(item, "div.match-h2h-matches-event img", "src")
                ),
                team1_score=team1_score,
                team2_score=team2_score,
                winner_index=0 if has_class(rf, "mod-win") else 1,
                date=select_text(item, "div.match-h2h-matches-date"),
            )
        )
    return matches


def parse_past_matches(column: Tag, header: MatchHeader) -> list[TeamPastMatches]:
    """Recent form cards; the i-th card belongs to the i-th header team."""
    result: list[TeamPastMatches] = []
    for idx, card in enumerate(select(column, "div.match-histories")):
        team_id = header.teams[idx].id if idx < len(header.teams) else 0
        matches: list[PastMatch] = []
        for item in select(card, "a.match-histories-item"):
            match_id, slug = parse_id_slug(get_attr(item, "href"), "/")
            scores = _score_pair(item)
            if match_id is None or scores is None:
                continue
            _, _, score_for, score_against = scores
            matches.append(
                PastMatch(
                    match_id=match_id,
                    match_slug=slug,
                    score_for=score_for,
                    score_against=score_against,
                    is_win=has_class(item, "mod-win"),
                    opponent_name=select_text(item, "span.match-histories-item-opponent-name"),
                    opponent_logo=normalize_url(
                        select_attr(item, "img.match-histories-item-opponent-logo", "src")
                    ),
                    date=select_text(item, "div.match-histories-item-date"),
                )
            )
        result.append(TeamPastMatches(team_id=team_id, matches=matches))
    return result
