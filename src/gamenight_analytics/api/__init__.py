"""API package - FastAPI routes and dependencies."""

from gamenight_analytics.api.dependencies import (
    ClientManager,
    LeaderboardServiceDep,
    get_leaderboard_service,
    get_rounds,
)

__all__ = [
    "ClientManager",
    "get_rounds",
    "get_leaderboard_service",
    "LeaderboardServiceDep",
]
