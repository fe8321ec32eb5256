"""Events listing parser for vlr.gg ``/events/<region>`` pages.

Provides:
- parse_events: pure function extracting one EventsPage from listing HTML
- parse_total_pages: pager lookup for the upcoming or completed column

The page renders upcoming events in the first column and completed
events in the last column; each column has its own pager.
"""

import logging

from bs4 import BeautifulSoup, Tag

from vlr_scraper.extract import (
    class_token,
    first_text,
    get_attr,
    make_soup,
    normalize_url,
    parse_id_slug,
    parse_int,
    report_diagnostics,
    select,
    select_attr,
    select_one,
    select_text,
)
from vlr_scraper.models import Event, EventsPage, EventStatus, EventType, Region

logger = logging.getLogger(__name__)

_COLUMN = {
    EventType.UPCOMING: "first-child",
    EventType.COMPLETED: "last-child",
}

_ITEM_SELECTOR = "div#wrapper div.events-container div.events-container-col:{col} a.event-item"
_PAGER_SELECTOR = "div#wrapper div.action-container div.action-container-pages:{col} :is(span,a)"


def parse_events(
    doc: str | BeautifulSoup,
    event_type: EventType,
    region: Region = Region.ALL,
    page: int = 1,
    diagnostics: list[str] | None = None,
) -> EventsPage:
    """Parse an events listing page into an EventsPage.

    Pure function: document in, EventsPage out. Items whose link does not
    carry a numeric event id are skipped with a warning.

    Args:
        doc: Raw HTML or a parsed document of ``/events/<region>?page=N``.
        event_type: Which column to read.
        region: Region the page was requested for (logged only).
        page: Page number the document corresponds to.
        diagnostics: Optional list that receives degradation messages.

    Returns:
        EventsPage with the column's events and its total page count.
    """
    soup = make_soup(doc)
    col = _COLUMN[event_type]

    events: list[Event] = []
    notes: list[str] = []
    for item in select(soup, _ITEM_SELECTOR.format(col=col)):
        event, item_notes = _parse_event(item)
        notes.extend(item_notes)
        if event is not None:
            events.append(event)

    total_pages = parse_total_pages(soup, event_type)
    report_diagnostics(logger, f"events {region.value} p{page}", notes, diagnostics)
    logger.debug(
        "Parsed %d %s events (region=%s, page %d/%d)",
        len(events), event_type.value, region.value, page, total_pages,
    )
    return EventsPage(events=events, page=page, total_pages=total_pages)


def parse_total_pages(soup: BeautifulSoup, event_type: EventType) -> int:
    """Last pager entry of the column as an int; 1 when there is no pager."""
    links = select(soup, _PAGER_SELECTOR.format(col=_COLUMN[event_type]))
    if not links:
        return 1
    total = parse_int(first_text(links[-1]))
    return total if total and total > 0 else 1


def _parse_event(item: Tag) -> tuple[Event | None, list[str]]:
    notes: list[str] = []
    href = get_attr(item, "href")
    event_id, slug = parse_id_slug(href, "/event/")
    if not event_id:
        logger.warning("Skipping event item with unparsable href %r", href)
        return None, notes

    status_text = select_text(
        item,
        "div.event-item-inner div.event-item-desc-item span.event-item-desc-item-status",
    )
    status = EventStatus.from_text(status_text)
    if status is EventStatus.UNKNOWN:
        notes.append(f"event {event_id}: unrecognized status {status_text!r}")

    region_icon = select_one(item, "div.event-item-inner div.event-item-desc-item.mod-location i")
    event = Event(
        id=event_id,
        slug=slug,
        href=normalize_url(href),
        title=select_text(item, "div.event-item-inner div.event-item-title"),
        status=status,
        region=class_token(region_icon) or "",
        dates=select_text(item, "div.event-item-inner div.event-item-desc-item.mod-dates"),
        price=select_text(item, "div.event-item-inner div.event-item-desc-item.mod-prize"),
        icon_url=normalize_url(select_attr(item, "div.event-item-thumb img", "src")),
    )
    return event, notes
