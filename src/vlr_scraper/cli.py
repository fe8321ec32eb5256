"""CLI entry point for the vlr.gg scraper.

Provides ``main()`` as the sync entry point for the ``vlr-scraper``
console script, and ``async_main(args)`` which sets up logging, fetches
and parses a single page, and prints the entity as JSON on stdout.

Usage::

    vlr-scraper events --type completed --region europe --page 2
    vlr-scraper matches 2097          # an event's match schedule
    vlr-scraper match 429519          # match detail incl. perf/economy tabs
    vlr-scraper player 9 --timespan 90d
    vlr-scraper team-matches 2593 --page 3
    vlr-scraper transactions 2593
"""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import BaseModel

from vlr_scraper import api
from vlr_scraper.config import ScraperConfig
from vlr_scraper.exceptions import VlrScraperError
from vlr_scraper.http_client import VlrClient
from vlr_scraper.logging_config import setup_logging
from vlr_scraper.models import AgentStatsTimespan, EventType, Region

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the vlr-scraper CLI."""
    parser = argparse.ArgumentParser(
        prog="vlr-scraper",
        description="Extract Valorant esports data from vlr.gg as JSON",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show DEBUG output on the console",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write a DEBUG log file into this directory",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=3,
        help="Attempts per request for transient failures (default: 3)",
    )
    parser.add_argument(
        "--proxy",
        default=None,
        help="HTTP(S) proxy URL",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    events = sub.add_parser("events", help="List upcoming or completed events")
    events.add_argument(
        "--type",
        dest="event_type",
        choices=[t.value for t in EventType],
        default=EventType.UPCOMING.value,
    )
    events.add_argument(
        "--region",
        choices=[r.value for r in Region],
        default=Region.ALL.value,
    )
    events.add_argument("--page", type=int, default=1)

    matches = sub.add_parser("matches", help="An event's match schedule")
    matches.add_argument("event_id", type=int)

    match = sub.add_parser("match", help="Full match detail")
    match.add_argument("match_id", type=int)

    player = sub.add_parser("player", help="Player profile")
    player.add_argument("player_id", type=int)
    player.add_argument(
        "--timespan",
        choices=[t.value for t in AgentStatsTimespan],
        default=AgentStatsTimespan.ALL.value,
    )

    player_matches = sub.add_parser("player-matches", help="A player's match history")
    player_matches.add_argument("player_id", type=int)
    player_matches.add_argument("--page", type=int, default=1)

    team = sub.add_parser("team", help="Team profile")
    team.add_argument("team_id", type=int)

    team_matches = sub.add_parser("team-matches", help="A team's match history")
    team_matches.add_argument("team_id", type=int)
    team_matches.add_argument("--page", type=int, default=1)

    transactions = sub.add_parser("transactions", help="A team's roster transactions")
    transactions.add_argument("team_id", type=int)

    return parser


def _to_json(result: BaseModel | list[BaseModel]) -> str:
    if isinstance(result, list):
        return json.dumps([item.model_dump(mode="json") for item in result], indent=2)
    return result.model_dump_json(indent=2)


async def _run_command(client: VlrClient, args: argparse.Namespace):
    if args.command == "events":
        return await api.get_events(
            client, EventType(args.event_type), Region(args.region), args.page
        )
    if args.command == "matches":
        return await api.get_match_list(client, args.event_id)
    if args.command == "match":
        return await api.get_match(client, args.match_id)
    if args.command == "player":
        return await api.get_player(
            client, args.player_id, AgentStatsTimespan(args.timespan)
        )
    if args.command == "player-matches":
        return await api.get_player_match_list(client, args.player_id, args.page)
    if args.command == "team":
        return await api.get_team(client, args.team_id)
    if args.command == "team-matches":
        return await api.get_team_match_list(client, args.team_id, args.page)
    if args.command == "transactions":
        return await api.get_team_transactions(client, args.team_id)
    raise ValueError(f"unknown command {args.command!r}")


async def async_main(args: argparse.Namespace) -> int:
    """Run one command and print its result. Returns the process exit code."""
    config = ScraperConfig(max_retries=args.max_retries, proxy=args.proxy, log_dir=args.log_dir)
    log_file = setup_logging(
        config.log_dir, console_level=logging.DEBUG if args.verbose else logging.INFO
    )
    if log_file is not None:
        logger.debug("Logging to %s", log_file)

    async with VlrClient(config) as client:
        try:
            result = await _run_command(client, args)
        except VlrScraperError as exc:
            logger.error("%s failed: %s", args.command, exc)
            return 1
        logger.debug("Client stats: %s", client.stats)

    print(_to_json(result))
    return 0


def main() -> None:
    """Sync entry point for the vlr-scraper console script."""
    args = build_parser().parse_args()
    try:
        code = asyncio.run(async_main(args))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
