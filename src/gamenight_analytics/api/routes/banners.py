"""
Banner API Routes

Endpoint for the announcements shown above the leaderboard.
"""

from fastapi import APIRouter

from gamenight_analytics.api.dependencies import LeaderboardServiceDep
from gamenight_analytics.models.stats import BannerReport

router = APIRouter()


@router.get(
    "",
    response_model=BannerReport,
    summary="Get leaderboard banners",
    description="Latest-result banner, flawless game and losing streak announcements.",
)
async def get_banners(service: LeaderboardServiceDep) -> BannerReport:
    """Get current banners."""
    return service.banners()
