"""
Tier-resolved game outcomes.

A GameResult is what the statistics engine consumes: either an individual
round that carried its own tiers, or a session whose tiers were derived
from accumulated wins.
"""

from datetime import UTC, date, datetime, time

from pydantic import BaseModel, ConfigDict, Field

from gamenight_analytics.models.round import GameFamily, GameType, TierSets


class GameResult(BaseModel):
    """One completed, tier-resolved outcome."""

    model_config = ConfigDict(frozen=True)

    source_id: str = Field(description="Round id or session key")
    game_type: GameType
    game_date: date
    ended_at: datetime | None = None
    participants: list[str] = Field(default_factory=list)
    tiers: TierSets = Field(default_factory=TierSets)

    @property
    def is_team_game(self) -> bool:
        return self.game_type.family is GameFamily.TEAM

    @property
    def sort_key(self) -> tuple[date, datetime]:
        """Chronological key: game date first, then end timestamp."""
        ended = self.ended_at or datetime.combine(self.game_date, time.min, tzinfo=UTC)
        return (self.game_date, ended)
