"""
Leaderboard Highlights

Hall of Fame / Hall of Shame slices, flawless games, losing streaks and the
banner announcing the latest result.
"""

from collections.abc import Iterable, Sequence

from gamenight_analytics.models.result import GameResult
from gamenight_analytics.models.round import GameType
from gamenight_analytics.models.stats import Banner, BannerType, LosingStreak, PlayerStats


def _qualified(stats: Iterable[PlayerStats], min_games: int) -> list[PlayerStats]:
    return [s for s in stats if s.games_played >= min_games]


def hall_of_fame(
    stats: Sequence[PlayerStats], min_games: int = 5, size: int = 3
) -> list[PlayerStats]:
    """Top players from ranked stats, among those with enough games."""
    return _qualified(stats, min_games)[:size]


def hall_of_shame(
    stats: Sequence[PlayerStats], min_games: int = 5, size: int = 3
) -> list[PlayerStats]:
    """Bottom players from ranked stats, worst first."""
    return list(reversed(_qualified(stats, min_games)))[:size]


def newest_first(results: Iterable[GameResult]) -> list[GameResult]:
    return sorted(results, key=lambda r: r.sort_key, reverse=True)


def latest_individual_result(results: Iterable[GameResult]) -> GameResult | None:
    """Most recent result that is not a team game."""
    for result in newest_first(results):
        if not result.is_team_game:
            return result
    return None


def is_perfect_game(result: GameResult) -> bool:
    """One winner, no runners-up and at least two losers."""
    tiers = result.tiers
    return len(tiers.winners) == 1 and not tiers.runners_up and len(tiers.losers) >= 2


def detect_perfect_game(results: Iterable[GameResult]) -> GameResult | None:
    """The latest non-team result, if it was a flawless win."""
    latest = latest_individual_result(results)
    if latest is not None and is_perfect_game(latest):
        return latest
    return None


def designated_loser(result: GameResult) -> str | None:
    """The player listed last among the losers, i.e. who finished bottom."""
    return result.tiers.losers[-1] if result.tiers.losers else None


def detect_losing_streak(
    results: Iterable[GameResult],
    game_type: GameType,
    roster: Sequence[str],
    min_streak: int = 3,
) -> LosingStreak | None:
    """
    Find the longest current run of bottom finishes in one game.

    For each player the game's results are walked newest to oldest: finishing
    bottom extends the run, playing without finishing bottom ends it, and
    games the player sat out are skipped.

    Args:
        results: Completed results, any game and order
        game_type: Game whose bottom finishes count
        roster: Players to check; earlier players win ties
        min_streak: Shortest run worth reporting

    Returns:
        LosingStreak for the longest qualifying run, or None
    """
    game_results = newest_first(r for r in results if r.game_type == game_type)
    best: LosingStreak | None = None

    for player in roster:
        streak = 0
        for result in game_results:
            if designated_loser(result) == player:
                streak += 1
            elif player in result.participants:
                break

        if streak >= min_streak and (best is None or streak > best.streak):
            best = LosingStreak(player=player, streak=streak, game_type=game_type)

    return best


def select_banner(
    results: Iterable[GameResult], penalty_game_type: GameType = GameType.SHITHEAD
) -> Banner | None:
    """
    Pick the banner for the latest non-team result with a single winner.

    Returns:
        A dominated banner for a flawless game, a shame banner for the
        penalty game, otherwise a normal victory banner; None when the
        latest result had no single winner
    """
    latest = latest_individual_result(results)
    if latest is None or len(latest.tiers.winners) != 1:
        return None

    winner = latest.tiers.winners[0]
    game_name = latest.game_type.value.upper()

    if is_perfect_game(latest):
        return Banner(
            type=BannerType.DOMINATED,
            game_type=latest.game_type,
            game_date=latest.game_date,
            player=winner,
            headline=f"FLAWLESS VICTORY IN {game_name} BY {winner.upper()}",
        )

    loser = designated_loser(latest)
    if latest.game_type == penalty_game_type and loser is not None:
        return Banner(
            type=BannerType.SHAME,
            game_type=latest.game_type,
            game_date=latest.game_date,
            player=loser,
            headline=f"BREAKING NEWS: {loser.upper()} IS THE {game_name}",
        )

    return Banner(
        type=BannerType.NORMAL,
        game_type=latest.game_type,
        game_date=latest.game_date,
        player=winner,
        headline=f"{winner.upper()} WON {game_name}. IT WASN'T PRETTY!",
    )


def losing_streak_banner(streak: LosingStreak) -> Banner:
    return Banner(
        type=BannerType.LOSING_STREAK,
        game_type=streak.game_type,
        player=streak.player,
        headline=(
            f"{streak.player.upper()} IS ON A {streak.streak} GAME "
            f"{streak.game_type.value.upper()} LOSING STREAK!"
        ),
    )
