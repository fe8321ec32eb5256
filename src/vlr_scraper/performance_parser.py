"""Performance tab parser for vlr.gg match pages (``/<id>/?tab=performance``).

Provides:
- build_player_name_map: display name -> player id over already-parsed games
- parse_performance: kill matrix + advanced stats from the aggregate section

The performance tables carry player names but no player links, so ids are
resolved by exact name match against the games parsed from the main page.
This join is best effort: two players with the same display name resolve
to whichever was seen last, and names missing from the games resolve to
UNKNOWN_PLAYER_ID.

Kill matrix layout (table.mod-normal in the "all" game section)::

    row 0:       [corner, victim 1, victim 2, ...]
    row 1..N:    [killer, (kills, deaths, diff), (kills, deaths, diff), ...]

Advanced stats layout (table.mod-adv-stats), one row per player::

    [name, agent, 2K, 3K, 4K, 5K, 1v1, 1v2, 1v3, 1v4, 1v5, ECON, PL, DE]
"""

import logging
from typing import Iterable

from bs4 import BeautifulSoup, Tag

from vlr_scraper.exceptions import ElementNotFound
from vlr_scraper.extract import first_text, make_soup, parse_int, select, select_one, select_text
from vlr_scraper.models import (
    UNKNOWN_PLAYER_ID,
    KillMatrixEntry,
    MatchGame,
    MatchPerformance,
    PlayerPerformance,
)

logger = logging.getLogger(__name__)

AGGREGATE_SECTION = "div.vm-stats div.vm-stats-game[data-game-id='all']"

_ADV_STATS_MIN_CELLS = 14
_NAME = "div.team > div"


def build_player_name_map(games: Iterable[MatchGame]) -> dict[str, int]:
    """Map each player's exact display name to their id.

    Players with an unknown id or an empty name are left out. The result
    depends only on ``games``, so rebuilding it is idempotent.
    """
    name_map: dict[str, int] = {}
    for game in games:
        for team in game.teams:
            for player in team.players:
                if player.id != UNKNOWN_PLAYER_ID and player.name:
                    name_map[player.name] = player.id
    return name_map


def parse_performance(
    doc: str | BeautifulSoup, games: Iterable[MatchGame]
) -> MatchPerformance:
    """Parse the aggregate performance tables of a match.

    Args:
        doc: Raw HTML or a parsed document of the performance tab.
        games: Games parsed from the main match page, used for name -> id.

    Returns:
        MatchPerformance with one kill matrix entry per (killer, victim)
        cell and one PlayerPerformance per advanced stats row.

    Raises:
        ElementNotFound: If the aggregate section or either table is missing.
    """
    soup = make_soup(doc)
    name_map = build_player_name_map(games)

    section = select_one(soup, AGGREGATE_SECTION)
    if section is None:
        raise ElementNotFound("performance tab", AGGREGATE_SECTION)

    matrix = select_one(section, "table.mod-normal")
    if matrix is None:
        raise ElementNotFound("performance tab", "table.mod-normal")
    adv_stats = select_one(section, "table.mod-adv-stats")
    if adv_stats is None:
        raise ElementNotFound("performance tab", "table.mod-adv-stats")

    kill_matrix = _parse_kill_matrix(matrix, name_map)
    performances = _parse_adv_stats(adv_stats, name_map)

    logger.debug(
        "Parsed performance: %d matrix cells, %d players",
        len(kill_matrix), len(performances),
    )
    return MatchPerformance(kill_matrix=kill_matrix, player_performances=performances)


def _resolve(name_map: dict[str, int], name: str) -> int:
    return name_map.get(name, UNKNOWN_PLAYER_ID)


def _parse_kill_matrix(table: Tag, name_map: dict[str, int]) -> list[KillMatrixEntry]:
    rows = select(table, "tr")
    if not rows:
        return []

    victim_ids = [
        _resolve(name_map, select_text(cell, _NAME))
        for cell in select(rows[0], "td")[1:]
    ]

    entries: list[KillMatrixEntry] = []
    for row in rows[1:]:
        cells = select(row, "td")
        if not cells:
            continue
        killer_id = _resolve(name_map, select_text(cells[0], _NAME))

        for col, cell in enumerate(cells[1:]):
            squares = [first_text(sq) for sq in select(cell, "div.stats-sq")]
            kills = parse_int(squares[0]) if squares else None
            deaths = parse_int(squares[1]) if len(squares) > 1 else None
            entries.append(
                KillMatrixEntry(
                    killer_id=killer_id,
                    victim_id=victim_ids[col] if col < len(victim_ids) else UNKNOWN_PLAYER_ID,
                    kills=kills or 0,
                    deaths=deaths or 0,
                )
            )
    return entries


def _parse_adv_stats(table: Tag, name_map: dict[str, int]) -> list[PlayerPerformance]:
    performances: list[PlayerPerformance] = []
    for row in select(table, "tr"):
        cells = select(row, "td")
        if len(cells) < _ADV_STATS_MIN_CELLS:
            continue

        name = select_text(cells[0], _NAME)
        if not name:
            continue

        def count(idx: int) -> int:
            return parse_int(first_text(cells[idx])) or 0

        performances.append(
            PlayerPerformance(
                player_id=_resolve(name_map, name),
                player_name=name,
                multi_kills_2k=count(2),
                multi_kills_3k=count(3),
                multi_kills_4k=count(4),
                multi_kills_5k=count(5),
                clutch_1v1=count(6),
                clutch_1v2=count(7),
                clutch_1v3=count(8),
                clutch_1v4=count(9),
                clutch_1v5=count(10),
                econ_rating=count(11),
                plants=count(12),
                defuses=count(13),
            )
        )
    return performances
