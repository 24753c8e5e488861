"""
Leaderboard API Routes

Endpoints for player standings, Hall of Fame / Shame and team records.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from gamenight_analytics.api.dependencies import (
    GameTypeQuery,
    LeaderboardServiceDep,
    PlayersQuery,
)
from gamenight_analytics.models.stats import LeaderboardReport, TeamComboStats, TeamPlayerStats

router = APIRouter()


@router.get(
    "",
    response_model=LeaderboardReport,
    summary="Get player leaderboard",
    description=(
        "Rank players by weighted win rate over completed games, with "
        "Hall of Fame and Hall of Shame."
    ),
)
async def get_leaderboard(
    service: LeaderboardServiceDep,
    game_type: GameTypeQuery = None,
    players: PlayersQuery = None,
    min_games: Annotated[
        int | None,
        Query(description="Games needed to enter either hall", ge=0),
    ] = None,
) -> LeaderboardReport:
    """Get the leaderboard, optionally for one game or one group of players."""
    return service.leaderboard(game_type, players, min_games)


@router.get(
    "/teams",
    response_model=list[TeamComboStats],
    summary="Get team combination records",
    description="Round-by-round win/loss record of every Rung team pairing.",
)
async def get_team_combos(service: LeaderboardServiceDep) -> list[TeamComboStats]:
    """Get team pairing records."""
    return service.team_combo_stats()


@router.get(
    "/team-players",
    response_model=list[TeamPlayerStats],
    summary="Get individual team-game records",
    description="Round-by-round Rung win/loss record for each player.",
)
async def get_team_players(
    service: LeaderboardServiceDep,
    players: PlayersQuery = None,
) -> list[TeamPlayerStats]:
    """Get per-player team-game records."""
    return service.team_player_stats(players)
