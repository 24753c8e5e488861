"""
Tier Classification

Turns accumulated win counts into winner / runner-up / survivor / loser
tiers. Shared by the threshold and team session builders.
"""

from collections.abc import Mapping

from gamenight_analytics.models.round import TierSets


def classify_tiers(
    win_counts: Mapping[str, int], threshold: int, gated: bool = False
) -> TierSets:
    """
    Partition every key of win_counts into exactly one tier.

    Winners are the keys on the top count. In gated mode (team games) the
    top count must also reach the threshold, otherwise nobody is crowned.
    When the keys left after the winners are all tied they are all losers:
    there is no runner-up in a sweep, and with no winner and a flat field
    there is no ranking information at all. Otherwise the best of the rest
    are runners-up, the worst are losers and anyone in between survived.

    Args:
        win_counts: Player (or team) key -> wins, non-negative
        threshold: Win count required to be crowned in gated mode
        gated: Require the top count to reach the threshold

    Returns:
        TierSets, each list ordered by wins descending then input order
    """
    if not win_counts:
        return TierSets()

    ranked = sorted(win_counts.items(), key=lambda item: item[1], reverse=True)
    top = ranked[0][1]
    crowned = not gated or top >= threshold

    if crowned:
        winners = [key for key, wins in ranked if wins == top]
        rest = [(key, wins) for key, wins in ranked if wins != top]
    else:
        winners = []
        rest = ranked

    if not rest:
        return TierSets(winners=winners)

    rest_top = rest[0][1]
    rest_bottom = rest[-1][1]

    if rest_top == rest_bottom:
        return TierSets(winners=winners, losers=[key for key, _ in rest])

    return TierSets(
        winners=winners,
        runners_up=[key for key, wins in rest if wins == rest_top],
        survivors=[key for key, wins in rest if rest_bottom < wins < rest_top],
        losers=[key for key, wins in rest if wins == rest_bottom],
    )
