"""Scoring engine and business logic services."""

from gamenight_analytics.services.individual import (
    dedupe_tiers,
    has_unique_tiers,
    process_individual_rounds,
)
from gamenight_analytics.services.leaderboard import LeaderboardService
from gamenight_analytics.services.sessions import build_threshold_sessions, participant_key
from gamenight_analytics.services.statistics import (
    calculate_per_game_stats,
    calculate_player_stats,
)
from gamenight_analytics.services.team_sessions import build_team_sessions, team_key
from gamenight_analytics.services.tiers import classify_tiers

__all__ = [
    # Tiers
    "classify_tiers",
    # Individual games
    "dedupe_tiers",
    "has_unique_tiers",
    "process_individual_rounds",
    # Sessions
    "build_threshold_sessions",
    "build_team_sessions",
    "participant_key",
    "team_key",
    # Statistics
    "calculate_player_stats",
    "calculate_per_game_stats",
    # Pipeline
    "LeaderboardService",
]
