"""Shared pydantic v2 models used by several vlr.gg entities."""

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Base for every parsed entity: built once by a parser, never mutated."""

    model_config = ConfigDict(frozen=True)


class Social(FrozenModel):
    """A social media link from a player or team header."""

    platform: str  # inferred from the link host, "website" when unknown
    url: str
    display_text: str


class PlacementEntry(FrozenModel):
    """A single stage result within an event."""

    stage: str
    placement: str
    prize: str | None = None
    team_name: str | None = None


class EventPlacement(FrozenModel):
    """Placement history at a single event."""

    event_id: int
    event_slug: str
    event_href: str
    event_name: str
    placements: list[PlacementEntry] = []
    year: str = ""
