"""Match history parser for vlr.gg player and team match lists.

Provides:
- parse_match_items: pure function extracting MatchItem rows from
  ``/player/matches/<id>/?page=N`` or ``/team/matches/<id>/?page=N``

Both pages share the same ``a.m-item`` card markup.
"""

import logging

from bs4 import BeautifulSoup, Tag

from vlr_scraper.dates import combine, parse_date, parse_time
from vlr_scraper.extract import (
    get_attr,
    last_text,
    make_soup,
    normalize_url,
    parse_id_slug,
    parse_int,
    select,
    select_attr,
    select_text,
    zip_padded,
)
from vlr_scraper.models import MatchItem, MatchItemTeam

logger = logging.getLogger(__name__)


def parse_match_items(doc: str | BeautifulSoup) -> list[MatchItem]:
    """Parse every match card of a history page.

    Cards whose link carries no numeric match id are skipped with a warning.
    """
    soup = make_soup(doc)
    items: list[MatchItem] = []
    for card in select(soup, "div#wrapper div.col a.m-item"):
        item = _parse_match_item(card)
        if item is not None:
            items.append(item)
    logger.debug("Parsed %d match history items", len(items))
    return items


def _parse_match_item(card: Tag) -> MatchItem | None:
    href = get_attr(card, "href")
    match_id, slug = parse_id_slug(href, "/")
    if not match_id:
        logger.warning("Skipping match history item with href %r", href)
        return None

    series = [last_text(el) for el in select(card, "div.m-item-event")]
    clock = [last_text(el) for el in select(card, "div.m-item-date")]

    team_els = select(card, "div.m-item-team")
    teams = [
        MatchItemTeam(
            name=select_text(team, "span.m-item-team-name"),
            tag=select_text(team, "span.m-item-team-tag"),
            logo_url=normalize_url(get_attr(logo, "src")),
            score=parse_int(last_text(score)),
        )
        for team, logo, score in zip_padded(
            len(team_els),
            team_els,
            select(card, "div.m-item-logo img"),
            select(card, "div.m-item-result span"),
        )
    ]

    vods = [
        text
        for text in (last_text(el) for el in select(card, "div.m-item-vods div.wf-tag span.full"))
        if text
    ]

    return MatchItem(
        id=match_id,
        slug=slug,
        league_icon=normalize_url(select_attr(card, "div.m-item-thumb img", "src")),
        league_name=select_text(card, "div.m-item-event div"),
        league_series_name=series[-1] if series else "",
        teams=teams,
        vods=vods,
        match_start=combine(
            parse_date(select_text(card, "div.m-item-date div")),
            parse_time(clock[-1] if clock else ""),
        ),
    )
