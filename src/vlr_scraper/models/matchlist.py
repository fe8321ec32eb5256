"""Pydantic v2 models for an event's match schedule."""

from datetime import datetime

from pydantic import Field

from .common import FrozenModel


class MatchListTeam(FrozenModel):
    name: str
    is_winner: bool = False
    score: int | None = None


class MatchListItem(FrozenModel):
    """A match inside an event's schedule."""

    id: int = Field(gt=0)
    slug: str
    href: str
    date_time: datetime | None = None  # absent when the time cell is unparsable
    teams: list[MatchListTeam] = []
    tags: list[str] = []
    event_text: str = ""
    event_series_text: str = ""
