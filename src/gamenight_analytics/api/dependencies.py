"""
API Dependencies

Shared dependencies for FastAPI route handlers including round store
client management and leaderboard service creation.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Query

from gamenight_analytics.clients.records import RecordsAPIError, RecordsClient, load_rounds_file
from gamenight_analytics.config import EngineConfig, Settings, get_engine_config, get_settings
from gamenight_analytics.models.round import GameType, Round
from gamenight_analytics.services.leaderboard import LeaderboardService

logger = logging.getLogger(__name__)


class ClientManager:
    """
    Manages RecordsClient lifecycle for the application.

    Creates a single client instance that can be reused across requests.
    """

    _client: RecordsClient | None = None

    @classmethod
    async def get_client(cls) -> RecordsClient:
        """Get or create the RecordsClient instance."""
        if cls._client is None:
            client = RecordsClient()
            await client.__aenter__()
            cls._client = client
        return cls._client

    @classmethod
    async def close_client(cls) -> None:
        """Close the RecordsClient instance."""
        if cls._client is not None:
            await cls._client.__aexit__(None, None, None)
            cls._client = None


async def get_rounds(
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[Round]:
    """
    Dependency to load the current snapshot of rounds.

    Reads the local export when rounds_file is set, otherwise the round store.
    Raises HTTPException if no source is configured or the store fails.
    """
    if settings.rounds_file:
        try:
            return load_rounds_file(settings.rounds_file)
        except (OSError, ValueError) as e:
            raise HTTPException(
                status_code=503,
                detail=f"Could not read rounds file {settings.rounds_file}: {e}",
            )

    if not settings.records_base_url:
        raise HTTPException(
            status_code=503,
            detail="No round source configured (set GAMENIGHT_ROUNDS_FILE or GAMENIGHT_RECORDS_BASE_URL)",
        )

    try:
        client = await ClientManager.get_client()
        return await client.get_rounds()
    except RecordsAPIError as e:
        logger.error("Round store request failed: %s (status %s)", e.message, e.status_code)
        raise HTTPException(status_code=502, detail=f"Round store error: {e.message}")


def get_leaderboard_service(
    rounds: Annotated[list[Round], Depends(get_rounds)],
    config: Annotated[EngineConfig, Depends(get_engine_config)],
) -> LeaderboardService:
    """Dependency to create a LeaderboardService over the current rounds."""
    return LeaderboardService(rounds, config)


# Type alias for cleaner route signatures
LeaderboardServiceDep = Annotated[LeaderboardService, Depends(get_leaderboard_service)]


# Common query parameters
GameTypeQuery = Annotated[
    GameType | None,
    Query(description="Restrict to one game (omit for all games)"),
]

PlayersQuery = Annotated[
    list[str] | None,
    Query(description="Only games played by exactly these players"),
]
