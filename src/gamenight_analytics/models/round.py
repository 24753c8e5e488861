"""
Round-related Pydantic models.

A Round is one raw record from the games table: a single game that was
played and resolved, either with explicit tiers or a declared winning team.
"""

from datetime import UTC, date, datetime
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from gamenight_analytics.models.result import GameResult


class GameFamily(str, Enum):
    """How rounds of a game type are turned into outcomes."""

    INDIVIDUAL = "individual"
    THRESHOLD = "threshold"
    TEAM = "team"


class GameType(str, Enum):
    """Games tracked on game night."""

    BLACKJACK = "Blackjack"
    MONOPOLY = "Monopoly"
    TAI_TI = "Tai Ti"
    SHITHEAD = "Shithead"
    RUNG = "Rung"

    @property
    def family(self) -> GameFamily:
        return GAME_FAMILIES[self]


GAME_FAMILIES: dict[GameType, GameFamily] = {
    GameType.BLACKJACK: GameFamily.INDIVIDUAL,
    GameType.SHITHEAD: GameFamily.INDIVIDUAL,
    GameType.MONOPOLY: GameFamily.THRESHOLD,
    GameType.TAI_TI: GameFamily.THRESHOLD,
    GameType.RUNG: GameFamily.TEAM,
}


class Tier(str, Enum):
    """Outcome tier, valued by the letter used in recent-result trails."""

    WINNER = "W"
    RUNNER_UP = "R"
    SURVIVOR = "S"
    LOSER = "L"


class TierSets(BaseModel):
    """Players of one round or session partitioned into outcome tiers."""

    model_config = ConfigDict(frozen=True)

    winners: list[str] = Field(default_factory=list)
    runners_up: list[str] = Field(default_factory=list)
    survivors: list[str] = Field(default_factory=list)
    losers: list[str] = Field(default_factory=list)

    def by_priority(self) -> list[tuple[Tier, list[str]]]:
        """Tier lists from best to worst."""
        return [
            (Tier.WINNER, self.winners),
            (Tier.RUNNER_UP, self.runners_up),
            (Tier.SURVIVOR, self.survivors),
            (Tier.LOSER, self.losers),
        ]

    def members(self) -> list[str]:
        """Every classified entry in priority order, duplicates included."""
        return [p for _, players in self.by_priority() for p in players]


class Round(BaseModel):
    """A single resolved game as stored in the games table."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    game_type: GameType
    game_date: date = Field(description="Calendar day, used for session grouping")
    created_at: datetime = Field(description="Ordering timestamp within a day")
    players_in_game: list[str] = Field(default_factory=list)
    winners: list[str] = Field(default_factory=list)
    runners_up: list[str] = Field(default_factory=list)
    survivors: list[str] = Field(default_factory=list)
    losers: list[str] = Field(default_factory=list)
    team1: list[str] = Field(default_factory=list)
    team2: list[str] = Field(default_factory=list)
    winning_team: int | None = Field(default=None, description="1 or 2 for team games")
    threshold: int | None = Field(
        default=None, description="Session-ending win count override"
    )
    session_id: str | None = None
    created_by: str | None = None

    @field_validator(
        "players_in_game",
        "winners",
        "runners_up",
        "survivors",
        "losers",
        "team1",
        "team2",
        mode="before",
    )
    @classmethod
    def _null_to_empty(cls, value):
        return [] if value is None else value

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def is_team_round(self) -> bool:
        return bool(self.team1) and bool(self.team2)

    @property
    def participants(self) -> list[str]:
        """Players present, falling back to both teams for team rounds."""
        if self.players_in_game:
            return list(self.players_in_game)
        return list(dict.fromkeys(self.team1 + self.team2))

    @property
    def winning_side(self) -> list[str] | None:
        """Members of the declared winning team, if any."""
        if self.winning_team == 1:
            return list(self.team1)
        if self.winning_team == 2:
            return list(self.team2)
        return None

    @property
    def tiers(self) -> TierSets:
        return TierSets(
            winners=self.winners,
            runners_up=self.runners_up,
            survivors=self.survivors,
            losers=self.losers,
        )

    def to_result(self) -> "GameResult":
        """Treat this round as a complete outcome on its own."""
        from gamenight_analytics.models.result import GameResult

        return GameResult(
            source_id=self.id,
            game_type=self.game_type,
            game_date=self.game_date,
            ended_at=self.created_at,
            participants=self.participants,
            tiers=self.tiers,
        )
