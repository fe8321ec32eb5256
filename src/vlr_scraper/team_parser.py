"""Team profile and transactions parsers for vlr.gg.

Provides:
- parse_team: header, roster and event placements from ``/team/<id>``
- parse_transactions: roster changes from ``/team/transactions/<id>/``
- parse_socials, parse_event_placements, parse_total_winnings: shared
  with the player profile parser
"""

import logging

from bs4 import BeautifulSoup, Tag

from vlr_scraper.dates import parse_date
from vlr_scraper.exceptions import ElementNotFound
from vlr_scraper.extract import (
    class_token,
    get_attr,
    infer_platform,
    joined_text,
    make_soup,
    normalize_url,
    parse_id_slug,
    report_diagnostics,
    select,
    select_attr,
    select_one,
    select_text,
)
from vlr_scraper.models import (
    PLAYER_ROLE,
    EventPlacement,
    PlacementEntry,
    Social,
    Team,
    TeamInfo,
    TeamRosterMember,
    TeamTransaction,
)

logger = logging.getLogger(__name__)

_STAGE_SEPARATOR = "–"  # en dash between stage and placement
_UNKNOWN_DATE = "Unknown"


def parse_team(
    doc: str | BeautifulSoup, team_id: int, diagnostics: list[str] | None = None
) -> Team:
    """Parse a team overview page.

    Raises:
        ElementNotFound: If the ``.team-header`` block is missing.
    """
    soup = make_soup(doc)
    header = select_one(soup, ".team-header")
    if header is None:
        raise ElementNotFound(f"team {team_id}", ".team-header")

    notes: list[str] = []
    info = _parse_team_header(header, team_id)
    if not info.name:
        notes.append("team header has no name")

    roster, roster_notes = _parse_roster(soup)
    notes.extend(roster_notes)

    team = Team(
        info=info,
        roster=roster,
        event_placements=parse_event_placements(soup),
        total_winnings=parse_total_winnings(soup),
    )
    report_diagnostics(logger, f"team {team_id}", notes, diagnostics)
    logger.debug(
        "Parsed team %d (%s): %d players, %d staff, %d placements",
        team_id, info.name, len(team.players), len(team.staff), len(team.event_placements),
    )
    return team


def _optional(text: str) -> str | None:
    return text or None


def _parse_team_header(header: Tag, team_id: int) -> TeamInfo:
    logo = select_attr(header, ".team-header-logo img", "src")
    return TeamInfo(
        id=team_id,
        name=select_text(header, "h1.wf-title"),
        tag=_optional(select_text(header, "h2.wf-title.team-header-tag")),
        logo_url=normalize_url(logo) if logo else None,
        country=_optional(joined_text(select_one(header, ".team-header-country"), " ")),
        country_code=class_token(select_one(header, ".team-header-country i.flag")),
        socials=parse_socials(select(header, ".team-header-links a")),
    )


def parse_socials(links: list[Tag]) -> list[Social]:
    """Header links with both an href and visible text, platform inferred."""
    socials: list[Social] = []
    for a in links:
        href = get_attr(a, "href")
        text = joined_text(a)
        if not href or not text:
            continue
        socials.append(Social(platform=infer_platform(href), url=href, display_text=text))
    return socials


def _parse_roster(soup: BeautifulSoup) -> tuple[list[TeamRosterMember], list[str]]:
    roster: list[TeamRosterMember] = []
    notes: list[str] = []
    for item in select(soup, ".team-roster-item"):
        href = select_attr(item, "a[href]", "href")
        player_id, slug = parse_id_slug(href, "/player/")
        if player_id is None:
            notes.append(f"roster entry with unusable link {href!r}")
            continue

        avatar = select_attr(item, ".team-roster-item-img img", "src")
        roster.append(
            TeamRosterMember(
                id=player_id,
                slug=slug,
                href=normalize_url(href),
                alias=joined_text(select_one(item, ".team-roster-item-name-alias")),
                real_name=_optional(joined_text(select_one(item, ".team-roster-item-name-real"))),
                country_code=class_token(select_one(item, "i.flag")),
                avatar_url=normalize_url(avatar) if avatar else None,
                role=joined_text(select_one(item, ".team-roster-item-name-role")) or PLAYER_ROLE,
                is_captain=select_one(item, "i.fa-star") is not None,
            )
        )
    return roster, notes


def _split_stage(series: str) -> tuple[str, str]:
    stage, sep, placement = series.partition(_STAGE_SEPARATOR)
    if not sep:
        return series.strip(), ""
    return stage.strip(), placement.strip()


def parse_event_placements(
    root: BeautifulSoup | Tag,
    item_selector: str = "a.team-event-item",
    series_selector: str = "span.team-event-item-series",
    team_selector: str | None = None,
) -> list[EventPlacement]:
    """One EventPlacement per event link.

    Each series element inside the link becomes a PlacementEntry with its
    stage and placement split on the en dash. The bold prize span belongs
    to the last (deepest) stage of the event.
    """
    placements: list[EventPlacement] = []
    for a in select(root, item_selector):
        href = get_attr(a, "href")
        event_id, event_slug = parse_id_slug(href, "/event/")
        if event_id is None:
            continue

        prize = None
        for span in select(a, "span[style]"):
            if "font-weight" in get_attr(span, "style"):
                prize = _optional(joined_text(span))
                break
        team_name = _optional(select_text(a, team_selector)) if team_selector else None

        series = [joined_text(el, " ") for el in select(a, series_selector)] or [""]
        entries = []
        for idx, text in enumerate(series):
            stage, placement = _split_stage(text)
            entries.append(
                PlacementEntry(
                    stage=stage,
                    placement=placement,
                    prize=prize if idx == len(series) - 1 else None,
                    team_name=team_name,
                )
            )

        child_divs = a.find_all("div", recursive=False)
        year = joined_text(child_divs[-1]) if child_divs else ""

        placements.append(
            EventPlacement(
                event_id=event_id,
                event_slug=event_slug,
                event_href=normalize_url(href),
                event_name=select_text(a, "div.text-of"),
                placements=entries,
                year=year,
            )
        )
    return placements


def parse_total_winnings(root: BeautifulSoup | Tag) -> str | None:
    """Text of the element right after the "Total Winnings" label."""
    for label in select(root, "div.wf-module-label"):
        if "Total Winnings" in joined_text(label, " "):
            value = label.find_next_sibling()
            return _optional(joined_text(value)) if value is not None else None
    return None


def parse_transactions(doc: str | BeautifulSoup) -> list[TeamTransaction]:
    """Parse a team's roster transactions, one per ``tr.txn-item`` row.

    A date cell reading "Unknown" (or empty) yields ``date=None``.
    """
    soup = make_soup(doc)
    transactions = [_parse_transaction_row(row) for row in select(soup, "tr.txn-item")]
    logger.debug("Parsed %d team transactions", len(transactions))
    return transactions


def _parse_transaction_row(row: Tag) -> TeamTransaction:
    cells = select(row, "td")

    date_text = joined_text(cells[0]) if cells else ""
    date = None if date_text in ("", _UNKNOWN_DATE) else parse_date(date_text)

    link = select_one(row, 'a[href^="/player/"]')
    player_id, player_slug = parse_id_slug(get_attr(link, "href"), "/player/")

    reference = select_attr(cells[-1], "a[href]", "href") if cells else ""

    return TeamTransaction(
        date=date,
        action=joined_text(select_one(row, "td.txn-item-action")),
        player_id=player_id or 0,
        player_slug=player_slug,
        player_alias=joined_text(link),
        player_real_name=_optional(joined_text(select_one(row, "div.ge-text-light"))),
        player_country_code=class_token(select_one(row, "i.flag")),
        position=joined_text(cells[4]) if len(cells) > 4 else "",
        reference_url=reference or None,
    )
