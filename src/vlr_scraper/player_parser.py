"""Player profile parser for vlr.gg ``/player/<id>`` pages.

Provides:
- parse_player: pure function building a Player from the overview page
- parse_usage: split an agent usage cell like ``"(95) 20%"``

Profile sections are not wrapped in identifiable containers. Each one is
found by its heading text ("Current Teams", "Past Teams", "Latest News",
"Event Placements") and read from the element that follows the heading.
A section whose heading is absent yields an empty list.

Agent statistics table columns::

    Agent, Use, RND, Rating, ACS, K:D, ADR, KAST, KPR, APR,
    FKPR, FDPR, K, D, A, FK, FD
"""

import logging

from bs4 import BeautifulSoup, Tag

from vlr_scraper.exceptions import ElementNotFound
from vlr_scraper.extract import (
    class_token,
    find_section_after_heading,
    first_text,
    get_attr,
    joined_text,
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
)
from vlr_scraper.models import (
    Player,
    PlayerAgentStats,
    PlayerInfo,
    PlayerNewsItem,
    PlayerTeam,
)
from vlr_scraper.team_parser import parse_event_placements, parse_socials, parse_total_winnings

logger = logging.getLogger(__name__)

_HEADING = "h2.wf-label.mod-large"
_AGENT_STATS_COLUMNS = 17
_AVATAR_PLACEHOLDER = "/ph/sil.png"


def parse_usage(text: str) -> tuple[int, float]:
    """``"(95) 20%"`` -> ``(95, 0.2)``; anything unparsable -> ``(0, 0.0)``."""
    count_part, sep, pct_part = text.partition(")")
    if not sep:
        return 0, 0.0
    count = parse_int(count_part.strip().lstrip("("))
    pct = parse_float(pct_part)
    return count or 0, pct / 100 if pct is not None else 0.0


def parse_player(
    doc: str | BeautifulSoup, player_id: int, diagnostics: list[str] | None = None
) -> Player:
    """Parse a player overview page.

    Args:
        doc: Raw HTML or a parsed document of ``/player/<id>``.
        player_id: vlr.gg player id (for inclusion in the result).
        diagnostics: Optional list that receives degradation messages.

    Raises:
        ElementNotFound: If the ``div.player-header`` block is missing.
    """
    soup = make_soup(doc)
    header = select_one(soup, "div.player-header")
    if header is None:
        raise ElementNotFound(f"player {player_id}", "div.player-header")

    notes: list[str] = []
    info = _parse_info(header, player_id)

    agent_stats, stat_notes = _parse_agent_stats(soup)
    notes.extend(stat_notes)

    placements_section = find_section_after_heading(soup, _HEADING, "Event Placements")
    player = Player(
        info=info,
        current_teams=_parse_teams(find_section_after_heading(soup, _HEADING, "Current Teams")),
        past_teams=_parse_teams(find_section_after_heading(soup, _HEADING, "Past Teams")),
        agent_stats=agent_stats,
        news=_parse_news(find_section_after_heading(soup, _HEADING, "Latest News")),
        event_placements=(
            parse_event_placements(
                placements_section,
                item_selector="a.player-event-item",
                series_selector="div.player-event-item-series",
                team_selector="div.player-event-item-team",
            )
            if placements_section is not None
            else []
        ),
        total_winnings=parse_total_winnings(soup),
    )

    report_diagnostics(logger, f"player {player_id}", notes, diagnostics)
    logger.debug(
        "Parsed player %d (%s): %d current teams, %d agents",
        player_id, info.name, len(player.current_teams), len(player.agent_stats),
    )
    return player


def _parse_info(header: Tag, player_id: int) -> PlayerInfo:
    avatar = select_attr(header, "div.wf-avatar img", "src")
    if _AVATAR_PLACEHOLDER in avatar:
        avatar = ""

    flag = select_one(header, "i.flag")
    country = joined_text(flag.parent, " ") if flag is not None else ""

    return PlayerInfo(
        id=player_id,
        name=select_text(header, "h1.wf-title"),
        real_name=select_text(header, "h2.player-real-name") or None,
        avatar_url=normalize_url(avatar) if avatar else None,
        country=country or None,
        country_code=class_token(flag),
        socials=parse_socials(select(header, "a[href^='http']")),
    )


def _parse_teams(section: Tag | None) -> list[PlayerTeam]:
    if section is None:
        return []
    teams: list[PlayerTeam] = []
    for a in select(section, "a.wf-module-item"):
        href = get_attr(a, "href")
        team_id, slug = parse_id_slug(href, "/team/")
        if team_id is None:
            continue
        logo = select_attr(a, "img", "src")
        teams.append(
            PlayerTeam(
                id=team_id,
                slug=slug,
                href=normalize_url(href),
                name=select_text(a, "div.text-of"),
                logo_url=normalize_url(logo) if logo else None,
                info=" ".join(joined_text(el, " ") for el in select(a, "div.ge-text-light")),
            )
        )
    return teams


def _parse_news(section: Tag | None) -> list[PlayerNewsItem]:
    if section is None:
        return []
    news: list[PlayerNewsItem] = []
    for a in select(section, "a.wf-module-item"):
        href = get_attr(a, "href")
        child_divs = a.find_all("div", recursive=False)
        title = joined_text(child_divs[-1], " ") if child_divs else ""
        if not href or not title:
            continue
        news_id, _ = parse_id_slug(href, "/")
        news.append(
            PlayerNewsItem(
                id=news_id,
                href=normalize_url(href),
                title=title,
                date=select_text(a, "div.ge-text-light"),
            )
        )
    return news


def _parse_agent_stats(soup: BeautifulSoup) -> tuple[list[PlayerAgentStats], list[str]]:
    table = select_one(soup, "table.wf-table")
    if table is None:
        return [], []

    stats: list[PlayerAgentStats] = []
    notes: list[str] = []
    for row in select(table, "tr"):
        cells = select(row, "td")
        if not cells:
            continue  # header row
        if len(cells) < _AGENT_STATS_COLUMNS:
            notes.append(f"agent stats row with {len(cells)} columns rejected")
            continue

        icon = select_one(cells[0], "img")
        agent = get_attr(icon, "title") or get_attr(icon, "alt")
        if not agent:
            notes.append("agent stats row without an agent name rejected")
            continue

        text = [first_text(cell) for cell in cells]
        usage_count, usage_pct = parse_usage(joined_text(cells[1], " "))
        kast = parse_float(text[7])

        stats.append(
            PlayerAgentStats(
                agent=agent,
                agent_icon=normalize_url(get_attr(icon, "src")),
                usage_count=usage_count,
                usage_pct=usage_pct,
                rounds=parse_int(text[2]),
                rating=parse_float(text[3]),
                acs=parse_float(text[4]),
                kd=parse_float(text[5]),
                adr=parse_float(text[6]),
                kast=kast / 100 if kast is not None else None,
                kpr=parse_float(text[8]),
                apr=parse_float(text[9]),
                fkpr=parse_float(text[10]),
                fdpr=parse_float(text[11]),
                kills=parse_int(text[12]),
                deaths=parse_int(text[13]),
                assists=parse_int(text[14]),
                first_kills=parse_int(text[15]),
                first_deaths=parse_int(text[16]),
            )
        )
    return stats, notes
