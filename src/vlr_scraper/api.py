"""Async fetch-and-parse operations for every vlr.gg page type.

Each function takes a started VlrClient, builds the page URL, fetches it
and hands the document to the matching pure parser. Transport errors
propagate unchanged, except for the match detail performance and economy
tabs, which are best effort.

Usage:
    async with VlrClient() as client:
        page = await get_events(client, EventType.UPCOMING)
        match = await get_match(client, page.events[0].id)
"""

import logging

from vlr_scraper.events_parser import parse_events
from vlr_scraper.exceptions import TransportError
from vlr_scraper.http_client import VlrClient
from vlr_scraper.match_detail_parser import parse_match_detail
from vlr_scraper.match_items_parser import parse_match_items
from vlr_scraper.matchlist_parser import parse_match_list
from vlr_scraper.models import (
    AgentStatsTimespan,
    EventsPage,
    EventType,
    MatchDetail,
    MatchItem,
    MatchListItem,
    Player,
    Region,
    Team,
    TeamTransaction,
)
from vlr_scraper.player_parser import parse_player
from vlr_scraper.team_parser import parse_team, parse_transactions

logger = logging.getLogger(__name__)


async def get_events(
    client: VlrClient,
    event_type: EventType,
    region: Region = Region.ALL,
    page: int = 1,
) -> EventsPage:
    url = client.url(f"/events/{region.path_segment}?page={page}")
    return parse_events(await client.fetch(url), event_type, region, page)


async def get_match_list(client: VlrClient, event_id: int) -> list[MatchListItem]:
    items = parse_match_list(await client.fetch(client.url(f"/event/matches/{event_id}")))
    logger.info("Event %d: %d matches", event_id, len(items))
    return items


async def get_match(
    client: VlrClient, match_id: int, diagnostics: list[str] | None = None
) -> MatchDetail:
    """Fetch a match page, then its performance and economy tabs concurrently.

    The main page is required. Both tabs are requested together once the
    main page is in hand; a tab whose request fails is logged and its
    section is left None without affecting the other tab.

    Raises:
        TransportError: If the main match page cannot be fetched.
        ParseError: If the main match page lacks required markup.
    """
    main = await client.fetch(client.url(f"/{match_id}"))

    perf, econ = await client.fetch_many([
        client.url(f"/{match_id}/?tab=performance"),
        client.url(f"/{match_id}/?tab=economy"),
    ])
    tabs = {"performance": perf, "economy": econ}
    for name, result in tabs.items():
        if isinstance(result, TransportError):
            logger.warning("Match %d: %s tab unavailable: %s", match_id, name, result)
            if diagnostics is not None:
                diagnostics.append(f"match {match_id}: {name} tab unavailable: {result}")

    return parse_match_detail(
        main,
        match_id,
        perf_doc=None if isinstance(perf, TransportError) else perf,
        econ_doc=None if isinstance(econ, TransportError) else econ,
        diagnostics=diagnostics,
    )


async def get_player(
    client: VlrClient,
    player_id: int,
    timespan: AgentStatsTimespan = AgentStatsTimespan.ALL,
) -> Player:
    url = client.url(f"/player/{player_id}/?timespan={timespan.value}")
    return parse_player(await client.fetch(url), player_id)


async def get_player_match_list(
    client: VlrClient, player_id: int, page: int = 1
) -> list[MatchItem]:
    url = client.url(f"/player/matches/{player_id}/?page={page}")
    return parse_match_items(await client.fetch(url))


async def get_team(client: VlrClient, team_id: int) -> Team:
    return parse_team(await client.fetch(client.url(f"/team/{team_id}")), team_id)


async def get_team_match_list(
    client: VlrClient, team_id: int, page: int = 1
) -> list[MatchItem]:
    url = client.url(f"/team/matches/{team_id}/?page={page}")
    return parse_match_items(await client.fetch(url))


async def get_team_transactions(client: VlrClient, team_id: int) -> list[TeamTransaction]:
    url = client.url(f"/team/transactions/{team_id}/")
    return parse_transactions(await client.fetch(url))
