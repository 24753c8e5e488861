"""API route handlers."""

from gamenight_analytics.api.routes import banners, leaderboard, rounds, sessions

__all__ = [
    "banners",
    "leaderboard",
    "rounds",
    "sessions",
]
