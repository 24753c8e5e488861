"""
Session API Routes

Endpoints for Monopoly / Tai Ti threshold sessions and Rung team sessions.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Path, Query

from gamenight_analytics.api.dependencies import LeaderboardServiceDep
from gamenight_analytics.models.round import GameFamily, GameType
from gamenight_analytics.models.session import RoundLine, Session, TeamSession
from gamenight_analytics.services.team_sessions import running_score_lines

router = APIRouter()

GameTypePath = Annotated[GameType, Path(description="Threshold or team game")]


@router.get(
    "/{game_type}",
    response_model=list[TeamSession | Session],
    summary="Get sessions for a game",
    description="Sessions built from the game's rounds, most recently ended first.",
)
async def get_sessions(
    service: LeaderboardServiceDep,
    game_type: GameTypePath,
    complete_only: Annotated[
        bool, Query(description="Hide sessions still in progress")
    ] = False,
) -> list[Session]:
    """Get threshold or team sessions."""
    try:
        sessions = service.sessions(game_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if complete_only:
        sessions = [s for s in sessions if s.is_complete]
    return sessions


@router.get(
    "/{game_type}/{session_key:path}/lines",
    response_model=list[RoundLine],
    summary="Get running scores for a team session",
    description="One line per round with both teams' running scores.",
)
async def get_session_lines(
    service: LeaderboardServiceDep,
    game_type: GameTypePath,
    session_key: str,
) -> list[RoundLine]:
    """Get the round-by-round drill-down of a team session."""
    if game_type.family is not GameFamily.TEAM:
        raise HTTPException(
            status_code=400,
            detail=f"{game_type.value} is not a team game",
        )

    for session in service.team_sessions(game_type):
        if session.key == session_key:
            return running_score_lines(session)

    raise HTTPException(status_code=404, detail=f"Session not found: {session_key}")
