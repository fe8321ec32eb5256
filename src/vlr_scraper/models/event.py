"""Pydantic v2 models for the events listing page."""

from enum import Enum

from pydantic import Field

from .common import FrozenModel


class EventType(str, Enum):
    """Which column of the events page to read."""

    UPCOMING = "upcoming"
    COMPLETED = "completed"


class EventStatus(str, Enum):
    COMPLETED = "completed"
    ONGOING = "ongoing"
    UPCOMING = "upcoming"
    UNKNOWN = "unknown"

    @classmethod
    def from_text(cls, text: str) -> "EventStatus":
        """Case-insensitive lookup; unrecognized text maps to UNKNOWN."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class Region(str, Enum):
    """Region filter for the events listing, valued by URL slug."""

    ALL = "all"
    NORTH_AMERICA = "north-america"
    EUROPE = "europe"
    BRAZIL = "brazil"
    ASIA_PACIFIC = "asia-pacific"
    KOREA = "korea"
    JAPAN = "japan"
    LATIN_AMERICA = "latin-america"
    OCEANIA = "oceania"
    MENA = "mena"
    GAME_CHANGERS = "game-changers"
    COLLEGIATE = "collegiate"

    @property
    def path_segment(self) -> str:
        """Segment used in ``/events/<segment>``; empty for ALL."""
        return "" if self is Region.ALL else self.value


class Event(FrozenModel):
    """A tournament or league listing."""

    id: int = Field(gt=0)
    slug: str
    href: str
    title: str
    status: EventStatus = EventStatus.UNKNOWN
    region: str = ""  # flag code from the location icon, e.g. "eu"
    dates: str = ""
    price: str = ""
    icon_url: str = ""


class EventsPage(FrozenModel):
    """One page of the events listing."""

    events: list[Event] = []
    page: int = 1
    total_pages: int = 1
