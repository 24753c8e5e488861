"""
Leaderboard and statistics models.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field

from gamenight_analytics.models.round import GameType


class PlayerStats(BaseModel):
    """Aggregate results for one player over a set of completed games."""

    player: str
    games_played: int = 0
    wins: int = 0
    runner_ups: int = 0
    survivals: int = 0
    losses: int = 0
    weighted_score: float = Field(default=0.0, description="Tier-weighted points")
    win_rate: int = Field(default=0, description="weighted_score / games_played, %")
    recent: list[str] = Field(
        default_factory=list, description="Latest results as W/R/S/L, oldest first"
    )
    best_streak: int = 0
    penalty_losses: int = Field(
        default=0, description="Losses in the penalty game (e.g. Shithead)"
    )


class TeamComboStats(BaseModel):
    """Raw round record for one team pairing in a team game."""

    team: str = Field(description="Members joined with ' + '")
    members: list[str]
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: int = 0


class TeamPlayerStats(BaseModel):
    """Raw team-game round record for a single player."""

    player: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    win_rate: int = 0


class LeaderboardReport(BaseModel):
    """Ranked player stats with Hall of Fame and Hall of Shame."""

    game_type: GameType | None = Field(default=None, description="None = all games")
    players: list[str] = Field(default_factory=list)
    results_analyzed: int
    standings: list[PlayerStats]
    hall_of_fame: list[PlayerStats]
    hall_of_shame: list[PlayerStats]
    min_games: int


class LosingStreak(BaseModel):
    """Consecutive bottom finishes in one game."""

    player: str
    streak: int
    game_type: GameType


class BannerType(str, Enum):
    DOMINATED = "dominated"
    SHAME = "shame"
    NORMAL = "normal"
    LOSING_STREAK = "losing_streak"


class Banner(BaseModel):
    """A one-line announcement shown above the leaderboard."""

    type: BannerType
    game_type: GameType
    game_date: date | None = None
    player: str
    headline: str


class BannerReport(BaseModel):
    """Every banner currently worth showing."""

    latest: Banner | None = None
    losing_streak: Banner | None = None
    perfect_game_id: str | None = Field(
        default=None, description="Source id of the latest flawless game"
    )
