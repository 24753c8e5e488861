"""
Threshold Session Builder

Groups solo rounds of Monopoly / Tai Ti style games into sessions: same day,
same players, closed as soon as one player reaches the win threshold.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from gamenight_analytics.models.round import GameType, Round
from gamenight_analytics.models.session import Session
from gamenight_analytics.services.tiers import classify_tiers

logger = logging.getLogger(__name__)


def participant_key(players: Iterable[str]) -> str:
    """Canonical, order-independent key for a set of players."""
    return "&".join(sorted(set(players)))


def _is_threshold_round(round_: Round, game_type: GameType) -> bool:
    return (
        round_.game_type == game_type
        and bool(round_.players_in_game)
        and bool(round_.winners)
    )


@dataclass
class _SessionScan:
    """Accumulator carried while folding rounds into one session."""

    opening: Round
    threshold: int
    rounds: list[Round] = field(default_factory=list)
    win_counts: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.win_counts = {p: 0 for p in self.opening.players_in_game}
        self.add(self.opening)

    @property
    def key(self) -> str:
        return participant_key(self.opening.players_in_game)

    @property
    def reached(self) -> bool:
        return max(self.win_counts.values(), default=0) >= self.threshold

    def accepts(self, round_: Round) -> bool:
        return (
            round_.game_date == self.opening.game_date
            and participant_key(round_.players_in_game) == self.key
        )

    def add(self, round_: Round) -> None:
        self.rounds.append(round_)
        for player in round_.winners:
            self.win_counts[player] = self.win_counts.get(player, 0) + 1

    def close(self) -> Session:
        start_iso = self.opening.created_at.isoformat()
        return Session(
            key=f"{self.opening.game_type.value}-{self.opening.game_date.isoformat()}__{start_iso}",
            game_type=self.opening.game_type,
            game_date=self.opening.game_date,
            rounds=self.rounds,
            win_counts=self.win_counts,
            threshold=self.threshold,
            tiers=classify_tiers(self.win_counts, self.threshold),
            is_complete=self.reached,
            end_at=self.rounds[-1].created_at,
        )


def build_threshold_sessions(
    rounds: Iterable[Round], game_type: GameType, default_threshold: int = 3
) -> list[Session]:
    """
    Build sessions for one threshold game.

    Rounds are walked oldest first. Each round not yet used opens a session
    and pulls in later unused rounds from the same day with the same players
    until somebody reaches the threshold. A session that runs out of rounds
    first is returned incomplete.

    Args:
        rounds: All rounds, any game and order
        game_type: Threshold game to build (e.g. Monopoly)
        default_threshold: Used when the opening round sets no threshold

    Returns:
        Sessions, most recently ended first
    """
    eligible = sorted(
        (r for r in rounds if _is_threshold_round(r, game_type)),
        key=lambda r: (r.created_at, r.id),
    )

    sessions: list[Session] = []
    used: set[int] = set()

    for index, opening in enumerate(eligible):
        if index in used:
            continue
        used.add(index)

        scan = _SessionScan(opening, opening.threshold or default_threshold)
        for later_index in range(index + 1, len(eligible)):
            if scan.reached:
                break
            candidate = eligible[later_index]
            if later_index in used or not scan.accepts(candidate):
                continue
            used.add(later_index)
            scan.add(candidate)

        sessions.append(scan.close())

    logger.debug(
        "Built %d %s sessions from %d rounds", len(sessions), game_type.value, len(eligible)
    )
    return sorted(sessions, key=lambda s: s.sort_key, reverse=True)
