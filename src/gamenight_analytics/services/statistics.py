"""
Player Statistics

Folds completed games into per-player leaderboard rows: tier counts,
weighted score, win rate, recent form and best winning streak.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from gamenight_analytics.config import EngineConfig
from gamenight_analytics.models.result import GameResult
from gamenight_analytics.models.round import GameType, Round, Tier
from gamenight_analytics.models.stats import PlayerStats, TeamComboStats, TeamPlayerStats
from gamenight_analytics.services.team_sessions import team_key


def win_rate(points: float, games: int) -> int:
    """Percentage of points per game, rounded half-up; 0 with no games."""
    if games <= 0:
        return 0
    pct = Decimal(str(points)) / Decimal(games) * 100
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class _PlayerTally:
    player: str
    games_played: int = 0
    counts: dict[Tier, int] = field(default_factory=lambda: dict.fromkeys(Tier, 0))
    weighted_score: float = 0.0
    recent: list[str] = field(default_factory=list)
    current_streak: int = 0
    best_streak: int = 0
    penalty_losses: int = 0


def _tier_weight(tier: Tier, config: EngineConfig) -> float:
    weights = config.weights
    return {
        Tier.WINNER: weights.winner,
        Tier.RUNNER_UP: weights.runner_up,
        Tier.SURVIVOR: weights.survivor,
        Tier.LOSER: weights.loser,
    }[tier]


def rank_players(stats: Iterable[PlayerStats]) -> list[PlayerStats]:
    """Sort by win rate, then weighted score; ties keep their order."""
    return sorted(stats, key=lambda s: (-s.win_rate, -s.weighted_score))


def calculate_player_stats(
    results: Iterable[GameResult],
    config: EngineConfig,
    players: Sequence[str] | None = None,
) -> list[PlayerStats]:
    """
    Calculate leaderboard stats from completed games.

    Results are replayed oldest first. A player's games played counts every
    game they took part in; each tier listing adds to the tier count, the
    weighted score and the recent trail. A win extends the winning streak,
    any other result in a game they played resets it, and games they sat
    out leave it untouched.

    Args:
        results: Completed, tier-resolved games in any order
        config: Roster, weights and penalty game
        players: Players to report on (default: full roster)

    Returns:
        PlayerStats ranked by win rate then weighted score
    """
    active = list(players) if players else list(config.roster)
    tallies = {p: _PlayerTally(player=p) for p in active}

    for result in sorted(results, key=lambda r: r.sort_key):
        for player in dict.fromkeys(result.participants):
            if player in tallies:
                tallies[player].games_played += 1

        for tier, tier_players in result.tiers.by_priority():
            for player in tier_players:
                tally = tallies.get(player)
                if tally is None:
                    continue
                tally.counts[tier] += 1
                tally.weighted_score += _tier_weight(tier, config)
                tally.recent.append(tier.value)
                if tier is Tier.LOSER and result.game_type == config.penalty_game_type:
                    tally.penalty_losses += 1

        for player, tally in tallies.items():
            if player in result.tiers.winners:
                tally.current_streak += 1
                tally.best_streak = max(tally.best_streak, tally.current_streak)
            elif player in result.participants:
                tally.current_streak = 0

    stats = [
        PlayerStats(
            player=t.player,
            games_played=t.games_played,
            wins=t.counts[Tier.WINNER],
            runner_ups=t.counts[Tier.RUNNER_UP],
            survivals=t.counts[Tier.SURVIVOR],
            losses=t.counts[Tier.LOSER],
            weighted_score=round(t.weighted_score, 2),
            win_rate=win_rate(t.weighted_score, t.games_played),
            recent=t.recent[-config.recent_limit :] if config.recent_limit else [],
            best_streak=t.best_streak,
            penalty_losses=t.penalty_losses,
        )
        for t in tallies.values()
    ]
    return rank_players(stats)


def filter_results_by_type(
    results: Iterable[GameResult], game_type: GameType | None
) -> list[GameResult]:
    """Keep results of one game; None keeps everything."""
    if game_type is None:
        return list(results)
    return [r for r in results if r.game_type == game_type]


def filter_results_by_players(
    results: Iterable[GameResult], players: Sequence[str] | None
) -> list[GameResult]:
    """Keep results played by exactly this group of players."""
    if not players:
        return list(results)
    wanted = set(players)
    return [r for r in results if set(r.participants) == wanted]


def calculate_per_game_stats(
    results: Iterable[GameResult],
    game_type: GameType,
    config: EngineConfig,
    players: Sequence[str] | None = None,
) -> list[PlayerStats]:
    """Leaderboard stats for a single game."""
    return calculate_player_stats(
        filter_results_by_type(results, game_type), config, players
    )


def calculate_team_combo_stats(
    rounds: Iterable[Round], game_type: GameType = GameType.RUNG
) -> list[TeamComboStats]:
    """
    Win/loss record of every team pairing, round by round.

    Args:
        rounds: All rounds, any game and order
        game_type: Team game to count

    Returns:
        TeamComboStats sorted by win rate then wins
    """
    combos: dict[str, TeamComboStats] = {}

    for round_ in rounds:
        if round_.game_type != game_type or not round_.is_team_round:
            continue
        if round_.winning_team not in (1, 2):
            continue

        for number, team in ((1, round_.team1), (2, round_.team2)):
            key = team_key(team)
            combo = combos.setdefault(
                key, TeamComboStats(team=" + ".join(sorted(team)), members=sorted(team))
            )
            combo.games_played += 1
            if round_.winning_team == number:
                combo.wins += 1
            else:
                combo.losses += 1

    for combo in combos.values():
        combo.win_rate = win_rate(combo.wins, combo.games_played)

    return sorted(combos.values(), key=lambda c: (-c.win_rate, -c.wins))


def calculate_team_player_stats(
    rounds: Iterable[Round],
    config: EngineConfig,
    players: Sequence[str] | None = None,
    game_type: GameType = GameType.RUNG,
) -> list[TeamPlayerStats]:
    """
    Individual win/loss record in a team game, round by round.

    Returns:
        TeamPlayerStats sorted by win rate then wins
    """
    active = list(players) if players else list(config.roster)
    stats = {p: TeamPlayerStats(player=p) for p in active}

    for round_ in rounds:
        if round_.game_type != game_type or not round_.is_team_round:
            continue
        winners = round_.winning_side
        if winners is None:
            continue
        losers = round_.team2 if round_.winning_team == 1 else round_.team1

        for player in winners:
            if player in stats:
                stats[player].games_played += 1
                stats[player].wins += 1
        for player in losers:
            if player in stats:
                stats[player].games_played += 1
                stats[player].losses += 1

    for row in stats.values():
        row.win_rate = win_rate(row.wins, row.games_played)

    return sorted(stats.values(), key=lambda s: (-s.win_rate, -s.wins))
