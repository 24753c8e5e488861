"""
Individual Round Normalization

Blackjack and Shithead rounds are complete outcomes on their own and are
never grouped into sessions. They only need ordering and a guard against
players listed in more than one tier.
"""

import logging
from collections.abc import Iterable

from gamenight_analytics.models.round import GameType, Round

logger = logging.getLogger(__name__)


def sort_newest_first(rounds: Iterable[Round]) -> list[Round]:
    """Order rounds by created_at, newest first."""
    return sorted(rounds, key=lambda r: r.created_at, reverse=True)


def dedupe_tiers(round_: Round) -> Round:
    """
    Drop repeated players so each appears in one tier only.

    Tiers are scanned winners > runners-up > survivors > losers and a player
    keeps the first (best) tier they were listed in.

    Returns:
        The same round if nothing needed repair, otherwise a repaired copy
    """
    if has_unique_tiers(round_):
        return round_

    seen: set[str] = set()
    repaired: dict[str, list[str]] = {}
    for field in ("winners", "runners_up", "survivors", "losers"):
        kept = []
        for player in getattr(round_, field):
            if player in seen:
                continue
            seen.add(player)
            kept.append(player)
        repaired[field] = kept

    logger.debug("Repaired duplicate tier entries in round %s", round_.id)
    return round_.model_copy(update=repaired)


def has_unique_tiers(round_: Round) -> bool:
    """Check that no player is listed twice across the round's tiers."""
    members = round_.tiers.members()
    return len(members) == len(set(members))


def process_individual_rounds(rounds: Iterable[Round], game_type: GameType) -> list[Round]:
    """
    Get the rounds of one individual game, repaired and newest first.

    Args:
        rounds: All rounds, any game and order
        game_type: Individual game to keep (e.g. Blackjack, Shithead)

    Returns:
        Filtered rounds with duplicate-free tiers
    """
    return sort_newest_first(
        dedupe_tiers(r) for r in rounds if r.game_type == game_type
    )
