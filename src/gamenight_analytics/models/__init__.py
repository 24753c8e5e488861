"""Pydantic models and schemas."""

from gamenight_analytics.models.result import GameResult
from gamenight_analytics.models.round import (
    GAME_FAMILIES,
    GameFamily,
    GameType,
    Round,
    Tier,
    TierSets,
)
from gamenight_analytics.models.session import (
    PlayerBest,
    RoundLine,
    Session,
    TeamSession,
)
from gamenight_analytics.models.stats import (
    Banner,
    BannerReport,
    BannerType,
    LeaderboardReport,
    LosingStreak,
    PlayerStats,
    TeamComboStats,
    TeamPlayerStats,
)

__all__ = [
    # Round
    "GAME_FAMILIES",
    "GameFamily",
    "GameType",
    "Round",
    "Tier",
    "TierSets",
    # Result
    "GameResult",
    # Session
    "PlayerBest",
    "RoundLine",
    "Session",
    "TeamSession",
    # Stats
    "Banner",
    "BannerReport",
    "BannerType",
    "LeaderboardReport",
    "LosingStreak",
    "PlayerStats",
    "TeamComboStats",
    "TeamPlayerStats",
]
