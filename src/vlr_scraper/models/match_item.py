"""Pydantic v2 models for player and team match history lists."""

from datetime import datetime

from pydantic import Field

from .common import FrozenModel


class MatchItemTeam(FrozenModel):
    name: str
    tag: str = ""
    logo_url: str = ""
    score: int | None = None


class MatchItem(FrozenModel):
    """One row of ``/player/matches/<id>`` or ``/team/matches/<id>``."""

    id: int = Field(gt=0)
    slug: str
    league_icon: str = ""
    league_name: str = ""
    league_series_name: str = ""
    teams: list[MatchItemTeam] = []
    vods: list[str] = []
    match_start: datetime | None = None
