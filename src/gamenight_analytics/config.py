"""
Configuration module using pydantic-settings.

Loads settings from environment variables with sensible defaults.
The scoring engine itself only ever sees an EngineConfig, passed in
explicitly, so other rosters or seasons can be analysed side by side.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gamenight_analytics.models.round import GameType

DEFAULT_ROSTER = ("Riz", "Mobz", "T", "Saf", "Faizan", "Yusuf")


class TierWeights(BaseModel):
    """Points awarded per tier when computing weighted scores."""

    model_config = ConfigDict(frozen=True)

    winner: float = 1.0
    runner_up: float = 0.4
    survivor: float = 0.1
    loser: float = 0.0


class EngineConfig(BaseModel):
    """Roster, thresholds and weights consumed by every engine component."""

    model_config = ConfigDict(frozen=True)

    roster: tuple[str, ...] = DEFAULT_ROSTER
    solo_threshold: int = Field(default=3, ge=1)
    team_threshold: int = Field(default=5, ge=1)
    weights: TierWeights = Field(default_factory=TierWeights)
    recent_limit: int = Field(default=10, ge=0)
    hall_min_games: int = Field(default=5, ge=0)
    hall_size: int = Field(default=3, ge=0)
    losing_streak_min: int = Field(default=3, ge=1)
    penalty_game_type: GameType = GameType.SHITHEAD


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GAMENIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_title: str = "Game Night Analytics API"
    api_version: str = "0.1.0"
    api_description: str = "Leaderboards, sessions and banners for game night"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None

    # Round store (PostgREST-style REST endpoint)
    records_base_url: str | None = None
    records_api_key: str | None = None
    records_table: str = "games"
    records_timeout: float = 30.0

    # Local JSON export, used instead of the store when set
    rounds_file: str | None = None

    # Engine
    roster: list[str] = Field(default_factory=lambda: list(DEFAULT_ROSTER))
    solo_threshold: int = 3
    team_threshold: int = 5
    winner_weight: float = 1.0
    runner_up_weight: float = 0.4
    survivor_weight: float = 0.1
    loser_weight: float = 0.0
    recent_limit: int = 10
    hall_min_games: int = 5
    hall_size: int = 3
    losing_streak_min: int = 3
    penalty_game_type: GameType = GameType.SHITHEAD

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True

    def engine_config(self) -> EngineConfig:
        """Build the engine configuration from these settings."""
        return EngineConfig(
            roster=tuple(self.roster),
            solo_threshold=self.solo_threshold,
            team_threshold=self.team_threshold,
            weights=TierWeights(
                winner=self.winner_weight,
                runner_up=self.runner_up_weight,
                survivor=self.survivor_weight,
                loser=self.loser_weight,
            ),
            recent_limit=self.recent_limit,
            hall_min_games=self.hall_min_games,
            hall_size=self.hall_size,
            losing_streak_min=self.losing_streak_min,
            penalty_game_type=self.penalty_game_type,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_engine_config() -> EngineConfig:
    """Get cached engine configuration built from settings."""
    return get_settings().engine_config()
