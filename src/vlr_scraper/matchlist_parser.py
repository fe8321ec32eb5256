"""Match schedule parser for vlr.gg ``/event/matches/<event_id>`` pages.

Provides:
- parse_match_list: pure function extracting every MatchListItem on the page

Day labels and match cards are siblings, not nested: a label applies to
every card that follows it until the next label. The parser walks both
in document order carrying the current day as loop state.
"""

import logging
from datetime import date

from bs4 import BeautifulSoup, Tag

from vlr_scraper.dates import (
    MATCH_LIST_DATE_FORMATS,
    combine,
    parse_required,
    parse_time,
)
from vlr_scraper.extract import (
    first_text,
    get_attr,
    has_class,
    last_text,
    make_soup,
    normalize_url,
    parse_id_slug,
    parse_int,
    select,
    select_text,
)
from vlr_scraper.models import MatchListItem, MatchListTeam

logger = logging.getLogger(__name__)

_SCAN_SELECTOR = "div#wrapper :is(div.wf-label.mod-large,div.wf-card a.match-item)"


def parse_match_list(doc: str | BeautifulSoup) -> list[MatchListItem]:
    """Parse an event's match schedule.

    Args:
        doc: Raw HTML or a parsed document of ``/event/matches/<id>``.

    Returns:
        One MatchListItem per match card, in page order. A card's
        ``date_time`` is None when its day or clock time is unknown.

    Raises:
        FieldParseError: If a day label is not in a known date format.
    """
    soup = make_soup(doc)

    items: list[MatchListItem] = []
    current_date: date | None = None
    for element in select(soup, _SCAN_SELECTOR):
        if has_class(element, "wf-label"):
            label = first_text(element)
            if label:
                current_date = parse_required(
                    label, MATCH_LIST_DATE_FORMATS, "match list date label"
                ).date()
            continue

        item = _parse_match_item(element, current_date)
        if item is not None:
            items.append(item)

    logger.debug("Parsed %d match list items", len(items))
    return items


def _parse_match_item(element: Tag, day: date | None) -> MatchListItem | None:
    href = get_attr(element, "href")
    match_id, slug = parse_id_slug(href, "/")
    if not match_id:
        logger.warning("Skipping unparsable match item with href %r", href)
        return None

    clock = parse_time(select_text(element, "div.match-item-time"))

    teams = [
        MatchListTeam(
            name=select_text(team, "div.match-item-vs-team-name div.text-of"),
            is_winner=has_class(team, "mod-winner"),
            score=parse_int(select_text(team, "div.match-item-vs-team-score")),
        )
        for team in select(element, "div.match-item-vs div.match-item-vs-team")
    ]

    tags = [
        text
        for text in (last_text(tag) for tag in select(element, "div.match-item-vod div.wf-tag"))
        if text
    ]

    event_texts = [
        last_text(el) for el in select(element, "div.match-item-event.text-of")
    ]

    return MatchListItem(
        id=match_id,
        slug=slug,
        href=normalize_url(href),
        date_time=combine(day, clock),
        teams=teams,
        tags=tags,
        event_text=event_texts[-1] if event_texts else "",
        event_series_text=select_text(
            element, "div.match-item-event.text-of div.match-item-event-series.text-of"
        ),
    )
