"""Pydantic v2 models for team profiles and roster transactions."""

import datetime as dt

from pydantic import Field

from .common import EventPlacement, FrozenModel, Social

PLAYER_ROLE = "player"


class TeamInfo(FrozenModel):
    id: int = Field(gt=0)
    name: str
    tag: str | None = None
    logo_url: str | None = None
    country: str | None = None
    country_code: str | None = None
    socials: list[Social] = []


class TeamRosterMember(FrozenModel):
    """A player or staff member listed on the team page."""

    id: int
    slug: str
    href: str
    alias: str
    real_name: str | None = None
    country_code: str | None = None
    avatar_url: str | None = None
    role: str = PLAYER_ROLE
    is_captain: bool = False

    @property
    def is_player(self) -> bool:
        return self.role == PLAYER_ROLE


class Team(FrozenModel):
    info: TeamInfo
    roster: list[TeamRosterMember] = []
    event_placements: list[EventPlacement] = []
    total_winnings: str | None = None

    @property
    def players(self) -> list[TeamRosterMember]:
        return [m for m in self.roster if m.is_player]

    @property
    def staff(self) -> list[TeamRosterMember]:
        return [m for m in self.roster if not m.is_player]


class TeamTransaction(FrozenModel):
    """One roster change (join, leave or inactive)."""

    date: dt.date | None = None
    action: str
    player_id: int
    player_slug: str
    player_alias: str
    player_real_name: str | None = None
    player_country_code: str | None = None
    position: str = ""
    reference_url: str | None = None
