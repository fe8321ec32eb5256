"""Pydantic v2 models for every vlr.gg entity.

Re-exports all model classes for convenient import::

    from vlr_scraper.models import MatchDetail, Player, Team, ...
"""

from .common import EventPlacement, FrozenModel, PlacementEntry, Social
from .event import Event, EventsPage, EventStatus, EventType, Region
from .match_detail import (
    UNKNOWN_PLAYER_ID,
    HeadToHeadMatch,
    KillMatrixEntry,
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
    PlayerPerformance,
    RoundSide,
    TeamEconomy,
    TeamPastMatches,
)
from .match_item import MatchItem, MatchItemTeam
from .matchlist import MatchListItem, MatchListTeam
from .player import (
    AgentStatsTimespan,
    Player,
    PlayerAgentStats,
    PlayerInfo,
    PlayerNewsItem,
    PlayerTeam,
)
from .team import PLAYER_ROLE, Team, TeamInfo, TeamRosterMember, TeamTransaction

__all__ = [
    "FrozenModel",
    "Social",
    "PlacementEntry",
    "EventPlacement",
    "Event",
    "EventsPage",
    "EventStatus",
    "EventType",
    "Region",
    "MatchListItem",
    "MatchListTeam",
    "MatchDetail",
    "MatchHeader",
    "MatchHeaderTeam",
    "MatchStream",
    "MatchGame",
    "MatchGameTeam",
    "MatchGameRound",
    "MatchGamePlayer",
    "RoundSide",
    "HeadToHeadMatch",
    "TeamPastMatches",
    "PastMatch",
    "MatchPerformance",
    "KillMatrixEntry",
    "PlayerPerformance",
    "MatchEconomy",
    "TeamEconomy",
    "UNKNOWN_PLAYER_ID",
    "MatchItem",
    "MatchItemTeam",
    "Player",
    "PlayerInfo",
    "PlayerTeam",
    "PlayerAgentStats",
    "PlayerNewsItem",
    "AgentStatsTimespan",
    "Team",
    "TeamInfo",
    "TeamRosterMember",
    "TeamTransaction",
    "PLAYER_ROLE",
]
