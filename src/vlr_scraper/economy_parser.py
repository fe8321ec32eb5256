"""Economy tab parser for vlr.gg match pages (``/<id>/?tab=economy``).

Provides:
- parse_rounds_won: split a ``"<total> (<won>)"`` cell into a pair
- parse_economy: per-team buy breakdown from the aggregate section

Economy table rows (table.mod-econ), one per team::

    [team name, pistols won, eco, semi-eco, semi-buy, full buy]

Each buy-tier cell reads like ``"9 (3)"``: 9 rounds played on that buy,
3 of them won.
"""

import logging

from bs4 import BeautifulSoup, Tag

from vlr_scraper.exceptions import ElementNotFound
from vlr_scraper.extract import joined_text, make_soup, parse_int, select, select_one
from vlr_scraper.models import MatchEconomy, TeamEconomy
from vlr_scraper.performance_parser import AGGREGATE_SECTION

logger = logging.getLogger(__name__)

_MIN_CELLS = 6


def parse_rounds_won(text: str) -> tuple[int, int]:
    """``"9 (3)"`` -> ``(9, 3)``. Text without a parenthesis gives ``(0, 0)``."""
    total, sep, won = text.partition("(")
    if not sep:
        return 0, 0
    return (
        parse_int(total) or 0,
        parse_int(won.rstrip().rstrip(")")) or 0,
    )


def parse_economy(doc: str | BeautifulSoup) -> MatchEconomy:
    """Parse the aggregate economy table of a match.

    Rows with fewer than six cells or an empty team name are skipped.

    Raises:
        ElementNotFound: If the aggregate section or the table is missing.
    """
    soup = make_soup(doc)

    section = select_one(soup, AGGREGATE_SECTION)
    if section is None:
        raise ElementNotFound("economy tab", AGGREGATE_SECTION)
    table = select_one(section, "table.mod-econ")
    if table is None:
        raise ElementNotFound("economy tab", "table.mod-econ")

    teams: list[TeamEconomy] = []
    for row in select(table, "tr"):
        cells = select(row, "td")
        if len(cells) < _MIN_CELLS:
            continue
        team_name = joined_text(cells[0], " ")
        if not team_name:
            continue

        eco = parse_rounds_won(_square_text(cells[2]))
        semi_eco = parse_rounds_won(_square_text(cells[3]))
        semi_buy = parse_rounds_won(_square_text(cells[4]))
        full_buy = parse_rounds_won(_square_text(cells[5]))

        teams.append(
            TeamEconomy(
                team_name=team_name,
                pistol_won=parse_int(_square_text(cells[1])) or 0,
                eco_rounds=eco[0],
                eco_won=eco[1],
                semi_eco_rounds=semi_eco[0],
                semi_eco_won=semi_eco[1],
                semi_buy_rounds=semi_buy[0],
                semi_buy_won=semi_buy[1],
                full_buy_rounds=full_buy[0],
                full_buy_won=full_buy[1],
            )
        )

    logger.debug("Parsed economy for %d teams", len(teams))
    return MatchEconomy(teams=teams)


def _square_text(cell: Tag) -> str:
    return joined_text(select_one(cell, "div.stats-sq"), " ")
