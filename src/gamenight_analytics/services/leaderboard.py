"""
Leaderboard Service

Runs the full pipeline over a snapshot of rounds: normalize individual
rounds, build sessions, classify tiers and aggregate statistics.
"""

import logging
from collections.abc import Iterable, Sequence

from gamenight_analytics.config import EngineConfig
from gamenight_analytics.models.result import GameResult
from gamenight_analytics.models.round import GameFamily, GameType, Round
from gamenight_analytics.models.session import Session, TeamSession
from gamenight_analytics.models.stats import (
    BannerReport,
    LeaderboardReport,
    PlayerStats,
    TeamComboStats,
    TeamPlayerStats,
)
from gamenight_analytics.services.highlights import (
    detect_losing_streak,
    detect_perfect_game,
    hall_of_fame,
    hall_of_shame,
    losing_streak_banner,
    newest_first,
    select_banner,
)
from gamenight_analytics.services.individual import dedupe_tiers, process_individual_rounds
from gamenight_analytics.services.sessions import build_threshold_sessions
from gamenight_analytics.services.statistics import (
    calculate_player_stats,
    calculate_team_combo_stats,
    calculate_team_player_stats,
    filter_results_by_players,
)
from gamenight_analytics.services.team_sessions import build_team_sessions

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Service for turning raw rounds into leaderboards.

    Provides methods to:
    - Normalize individual rounds and build threshold / team sessions
    - Collect completed, tier-resolved results
    - Rank players with Hall of Fame and Hall of Shame
    - Pick the banners for the latest results

    Every method recomputes from the rounds snapshot given at construction;
    nothing is cached between calls.
    """

    def __init__(self, rounds: Iterable[Round], config: EngineConfig):
        self.rounds: tuple[Round, ...] = tuple(rounds)
        self.config = config

    def individual_rounds(self, game_type: GameType) -> list[Round]:
        """Repaired rounds of an individual game, newest first."""
        return process_individual_rounds(self.rounds, game_type)

    def threshold_sessions(self, game_type: GameType) -> list[Session]:
        return build_threshold_sessions(
            self.rounds, game_type, self.config.solo_threshold
        )

    def team_sessions(self, game_type: GameType = GameType.RUNG) -> list[TeamSession]:
        return build_team_sessions(self.rounds, game_type, self.config.team_threshold)

    def sessions(self, game_type: GameType) -> list[Session]:
        """
        Sessions for a threshold or team game, most recent first.

        Raises:
            ValueError: If the game has no sessions (individual games)
        """
        if game_type.family is GameFamily.THRESHOLD:
            return self.threshold_sessions(game_type)
        if game_type.family is GameFamily.TEAM:
            return list(self.team_sessions(game_type))
        raise ValueError(f"{game_type.value} rounds are not grouped into sessions")

    def completed_results(
        self,
        game_type: GameType | None = None,
        players: Sequence[str] | None = None,
    ) -> list[GameResult]:
        """
        Every completed outcome, newest first.

        Individual rounds count as they are; sessions only once complete.

        Args:
            game_type: Restrict to one game (default: all games)
            players: Restrict to games with exactly these players
        """
        game_types = [game_type] if game_type else list(GameType)
        results: list[GameResult] = []

        for gt in game_types:
            if gt.family is GameFamily.INDIVIDUAL:
                results.extend(r.to_result() for r in self.individual_rounds(gt))
            else:
                results.extend(
                    s.to_result() for s in self.sessions(gt) if s.is_complete
                )

        return newest_first(filter_results_by_players(results, players))

    def player_stats(
        self,
        game_type: GameType | None = None,
        players: Sequence[str] | None = None,
    ) -> list[PlayerStats]:
        results = self.completed_results(game_type, players)
        return calculate_player_stats(results, self.config, players)

    def leaderboard(
        self,
        game_type: GameType | None = None,
        players: Sequence[str] | None = None,
        min_games: int | None = None,
    ) -> LeaderboardReport:
        """
        Ranked standings with Hall of Fame and Hall of Shame.

        Args:
            game_type: Restrict to one game (default: all games)
            players: Restrict to games with exactly these players
            min_games: Games needed to enter either hall (default from config)

        Returns:
            LeaderboardReport
        """
        results = self.completed_results(game_type, players)
        standings = calculate_player_stats(results, self.config, players)
        gate = self.config.hall_min_games if min_games is None else min_games

        logger.debug(
            "Leaderboard for %s: %d results, %d players",
            game_type.value if game_type else "all games",
            len(results),
            len(standings),
        )

        return LeaderboardReport(
            game_type=game_type,
            players=list(players or []),
            results_analyzed=len(results),
            standings=standings,
            hall_of_fame=hall_of_fame(standings, gate, self.config.hall_size),
            hall_of_shame=hall_of_shame(standings, gate, self.config.hall_size),
            min_games=gate,
        )

    def round_results(self) -> list[GameResult]:
        """
        Every non-team round as a result of its own, newest first.

        Threshold-game rounds are included whether or not their session has
        finished; individual rounds are repaired first.
        """
        return newest_first(
            (dedupe_tiers(r) if r.game_type.family is GameFamily.INDIVIDUAL else r).to_result()
            for r in self.rounds
            if r.game_type.family is not GameFamily.TEAM
        )

    def banners(self) -> BannerReport:
        """
        Latest-round banner, flawless game and penalty-game losing streak.

        The banner and flawless game look at the most recent non-team round;
        the losing streak runs over completed results.
        """
        latest_rounds = self.round_results()
        perfect = detect_perfect_game(latest_rounds)
        streak = detect_losing_streak(
            self.completed_results(),
            self.config.penalty_game_type,
            self.config.roster,
            self.config.losing_streak_min,
        )

        return BannerReport(
            latest=select_banner(latest_rounds, self.config.penalty_game_type),
            losing_streak=losing_streak_banner(streak) if streak else None,
            perfect_game_id=perfect.source_id if perfect else None,
        )

    def team_combo_stats(self, game_type: GameType = GameType.RUNG) -> list[TeamComboStats]:
        return calculate_team_combo_stats(self.rounds, game_type)

    def team_player_stats(
        self,
        players: Sequence[str] | None = None,
        game_type: GameType = GameType.RUNG,
    ) -> list[TeamPlayerStats]:
        return calculate_team_player_stats(self.rounds, self.config, players, game_type)
