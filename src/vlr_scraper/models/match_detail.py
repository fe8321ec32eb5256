"""Pydantic v2 models for the match detail page and its tabs.

MatchDetail is the root; performance and economy are optional sections
that are absent whenever their tab could not be fetched or parsed.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field, model_validator
from typing_extensions import Self

from .common import FrozenModel

# Player id used when a performance-table name does not resolve
UNKNOWN_PLAYER_ID = 0


class RoundSide(str, Enum):
    """Side the round winner was playing."""

    T = "t"
    CT = "ct"


class MatchHeaderTeam(FrozenModel):
    id: int
    slug: str
    href: str
    name: str
    score: int | None = None
    icon: str = ""


class MatchHeader(FrozenModel):
    event_icon: str
    event_title: str = ""
    event_series_name: str = ""
    event_id: int | None = None
    event_slug: str = ""
    date: datetime
    patch: str = ""
    format: str = ""
    status: str = ""
    note: str = ""
    teams: list[MatchHeaderTeam] = Field(default_factory=list, max_length=2)


class MatchStream(FrozenModel):
    name: str
    link: str


class MatchGamePlayer(FrozenModel):
    """A player's stat line in one game. Every stat is independently optional."""

    nation: str = ""
    id: int
    slug: str = ""
    name: str
    agent: str = ""
    rating: float | None = None
    acs: int | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    kd_diff: int | None = None
    kast: float | None = None  # fraction, 0.74 for "74%"
    adr: float | None = None
    hs_pct: float | None = None  # fraction
    first_kills: int | None = None
    first_deaths: int | None = None
    fk_diff: int | None = None


class MatchGameTeam(FrozenModel):
    name: str
    score: int | None = None
    score_t: int | None = None
    score_ct: int | None = None
    is_winner: bool = False
    players: list[MatchGamePlayer] = []


class MatchGameRound(FrozenModel):
    """Outcome of a single round.

    A round whose outcome squares are ambiguous keeps both winner fields
    unset instead of guessing.
    """

    round: int = Field(ge=1)
    winning_team: int | None = None
    winning_side: RoundSide | None = None

    @property
    def is_unknown(self) -> bool:
        return self.winning_team is None


class MatchGame(FrozenModel):
    """One map played within a match."""

    map: str
    picked_by: int | None = None  # header team id
    duration: str | None = None
    teams: list[MatchGameTeam] = []
    rounds: list[MatchGameRound] = []

    @model_validator(mode="after")
    def check_shape(self) -> Self:
        """Teams come in pairs or not at all; rounds ascend by number."""
        if len(self.teams) not in (0, 2):
            raise ValueError(f"game on {self.map!r} has {len(self.teams)} teams, expected 0 or 2")
        numbers = [r.round for r in self.rounds]
        if numbers != sorted(numbers):
            raise ValueError(f"rounds on {self.map!r} are not ordered by number")
        return self


class HeadToHeadMatch(FrozenModel):
    match_id: int
    match_slug: str
    event_name: str = ""
    event_series: str = ""
    event_icon: str = ""
    team1_score: int
    team2_score: int
    winner_index: int = Field(ge=0, le=1)
    date: str = ""


class PastMatch(FrozenModel):
    match_id: int
    match_slug: str
    score_for: int
    score_against: int
    is_win: bool
    opponent_name: str = ""
    opponent_logo: str = ""
    date: str = ""


class TeamPastMatches(FrozenModel):
    """Recent form for one header team."""

    team_id: int
    matches: list[PastMatch] = []


class KillMatrixEntry(FrozenModel):
    killer_id: int
    victim_id: int
    kills: int
    deaths: int


class PlayerPerformance(FrozenModel):
    """Multi-kill and clutch counts from the advanced stats table."""

    player_id: int
    player_name: str
    multi_kills_2k: int = 0
    multi_kills_3k: int = 0
    multi_kills_4k: int = 0
    multi_kills_5k: int = 0
    clutch_1v1: int = 0
    clutch_1v2: int = 0
    clutch_1v3: int = 0
    clutch_1v4: int = 0
    clutch_1v5: int = 0
    econ_rating: int = 0
    plants: int = 0
    defuses: int = 0


class MatchPerformance(FrozenModel):
    kill_matrix: list[KillMatrixEntry] = []
    player_performances: list[PlayerPerformance] = []


class TeamEconomy(FrozenModel):
    """Round-buy breakdown for one team; each tier is (rounds, won)."""

    team_name: str
    pistol_won: int = 0
    eco_rounds: int = 0
    eco_won: int = 0
    semi_eco_rounds: int = 0
    semi_eco_won: int = 0
    semi_buy_rounds: int = 0
    semi_buy_won: int = 0
    full_buy_rounds: int = 0
    full_buy_won: int = 0


class MatchEconomy(FrozenModel):
    teams: list[TeamEconomy] = []


class MatchDetail(FrozenModel):
    """Full record of a single match."""

    id: int = Field(gt=0)
    header: MatchHeader
    streams: list[MatchStream] = []
    vods: list[MatchStream] = []
    games: list[MatchGame] = []
    head_to_head: list[HeadToHeadMatch] = []
    past_matches: list[TeamPastMatches] = []
    performance: MatchPerformance | None = None
    economy: MatchEconomy | None = None

    @model_validator(mode="after")
    def check_round_winners(self) -> Self:
        """Every decided round must be won by one of the header teams."""
        team_ids = {t.id for t in self.header.teams}
        for game in self.games:
            for rnd in game.rounds:
                if rnd.winning_team is not None and rnd.winning_team not in team_ids:
                    raise ValueError(
                        f"round {rnd.round} on {game.map!r} won by {rnd.winning_team}, "
                        f"not a header team {sorted(team_ids)}"
                    )
        return self
