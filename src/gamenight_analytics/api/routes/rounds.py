"""
Individual Round API Routes

Endpoints for Blackjack / Shithead rounds, which are never grouped.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query

from gamenight_analytics.api.dependencies import LeaderboardServiceDep
from gamenight_analytics.models.round import GameFamily, GameType, Round

router = APIRouter()


@router.get(
    "/{game_type}",
    response_model=list[Round],
    summary="Get individual rounds",
    description="Rounds of an individual game with duplicate tier entries removed, newest first.",
)
async def list_individual_rounds(
    service: LeaderboardServiceDep,
    game_type: Annotated[GameType, Path(description="Individual game")],
    limit: Annotated[int, Query(description="Maximum rounds to return", ge=1, le=500)] = 20,
) -> list[Round]:
    """Get normalized individual rounds."""
    if game_type.family is not GameFamily.INDIVIDUAL:
        raise HTTPException(
            status_code=400,
            detail=f"{game_type.value} rounds are grouped into sessions; use /api/sessions",
        )
    return service.individual_rounds(game_type)[:limit]
