"""Game Night Analytics - leaderboards, sessions and banners for recurring game nights."""

__version__ = "0.1.0"
