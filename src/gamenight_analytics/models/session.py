"""
Session-related Pydantic models.
"""

from datetime import UTC, date, datetime, time

from pydantic import BaseModel, ConfigDict, Field

from gamenight_analytics.models.result import GameResult
from gamenight_analytics.models.round import GameType, Round, TierSets


class Session(BaseModel):
    """A run of same-day rounds closed when someone reaches the threshold."""

    model_config = ConfigDict(frozen=True)

    key: str
    game_type: GameType
    game_date: date
    rounds: list[Round] = Field(description="Member rounds, oldest to newest")
    win_counts: dict[str, int] = Field(
        description="Player (or team key) -> wins within this session"
    )
    threshold: int
    tiers: TierSets
    is_complete: bool
    end_at: datetime | None = None

    @property
    def round_count(self) -> int:
        return len(self.rounds)

    @property
    def start_at(self) -> datetime | None:
        return self.rounds[0].created_at if self.rounds else None

    @property
    def participants(self) -> list[str]:
        """Every player seen in the session, in order of first appearance."""
        seen: dict[str, None] = {}
        for round_ in self.rounds:
            for player in round_.participants:
                seen.setdefault(player, None)
        return list(seen)

    @property
    def sort_key(self) -> datetime:
        return self.end_at or datetime.combine(self.game_date, time.min, tzinfo=UTC)

    def to_result(self) -> GameResult:
        return GameResult(
            source_id=self.key,
            game_type=self.game_type,
            game_date=self.game_date,
            ended_at=self.end_at,
            participants=self.participants,
            tiers=self.tiers,
        )


class PlayerBest(BaseModel):
    """A player's strongest team within one team session."""

    team_key: str
    wins: int


class TeamSession(Session):
    """Team-game session; win_counts is keyed by canonical team key."""

    player_best: dict[str, PlayerBest] = Field(default_factory=dict)

    @property
    def team_scores(self) -> dict[str, int]:
        return self.win_counts


class RoundLine(BaseModel):
    """Display line for one team round with running scores."""

    round_id: str
    left: str = Field(description="e.g. 'A & B (3)'")
    right: str = Field(description="e.g. '(1) C & D'")
    left_losing: bool
    right_losing: bool
