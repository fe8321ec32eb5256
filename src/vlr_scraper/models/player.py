"""Pydantic v2 models for player profiles."""

from enum import Enum

from pydantic import Field

from .common import EventPlacement, FrozenModel, Social


class AgentStatsTimespan(str, Enum):
    """``?timespan=`` values accepted by the player overview page."""

    DAYS_30 = "30d"
    DAYS_60 = "60d"
    DAYS_90 = "90d"
    ALL = "all"


class PlayerInfo(FrozenModel):
    id: int = Field(gt=0)
    name: str
    real_name: str | None = None
    avatar_url: str | None = None
    country: str | None = None
    country_code: str | None = None
    socials: list[Social] = []


class PlayerTeam(FrozenModel):
    """A current or past team membership."""

    id: int
    slug: str
    href: str
    name: str
    logo_url: str | None = None
    info: str = ""  # e.g. "joined in March 2024" or "May 2022 - January 2023"


class PlayerAgentStats(FrozenModel):
    """One row of the 17-column agent statistics table."""

    agent: str
    agent_icon: str = ""
    usage_count: int = 0
    usage_pct: float = 0.0  # fraction
    rounds: int | None = None
    rating: float | None = None
    acs: float | None = None
    kd: float | None = None
    adr: float | None = None
    kast: float | None = None  # fraction
    kpr: float | None = None
    apr: float | None = None
    fkpr: float | None = None
    fdpr: float | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    first_kills: int | None = None
    first_deaths: int | None = None


class PlayerNewsItem(FrozenModel):
    id: int | None = None
    href: str
    title: str
    date: str = ""


class Player(FrozenModel):
    info: PlayerInfo
    current_teams: list[PlayerTeam] = []
    past_teams: list[PlayerTeam] = []
    agent_stats: list[PlayerAgentStats] = []
    news: list[PlayerNewsItem] = []
    event_placements: list[EventPlacement] = []
    total_winnings: str | None = None
