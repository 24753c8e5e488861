"""
Team Session Builder

Groups Rung-style team rounds into first-to-N sessions per day and ranks
individual players by the best team they played on.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date

from gamenight_analytics.models.round import GameType, Round
from gamenight_analytics.models.session import PlayerBest, RoundLine, TeamSession
from gamenight_analytics.services.tiers import classify_tiers

logger = logging.getLogger(__name__)


def team_key(team: Iterable[str]) -> str:
    """Canonical, order-independent key for a team."""
    return "&".join(sorted(team))


def _is_team_round(round_: Round, game_type: GameType) -> bool:
    return (
        round_.game_type == game_type
        and round_.is_team_round
        and round_.winning_team in (1, 2)
    )


def _winning_key(round_: Round) -> str:
    return team_key(round_.team1 if round_.winning_team == 1 else round_.team2)


def best_team_by_player(
    team_scores: dict[str, int], team_members: dict[str, list[str]]
) -> dict[str, PlayerBest]:
    """
    Find each player's highest-scoring team.

    Teams are considered in the order they were first seen; a later team
    only replaces the current best with strictly more wins.

    Args:
        team_scores: Team key -> wins in the session
        team_members: Team key -> members

    Returns:
        Player -> PlayerBest
    """
    best: dict[str, PlayerBest] = {}
    for key, members in team_members.items():
        wins = team_scores.get(key, 0)
        for player in members:
            current = best.get(player)
            if current is None or wins > current.wins:
                best[player] = PlayerBest(team_key=key, wins=wins)
    return best


def _close_team_session(
    game_type: GameType,
    game_date: date,
    session_rounds: Sequence[Round],
    index: int,
    threshold: int,
) -> TeamSession:
    team_scores: dict[str, int] = {}
    team_members: dict[str, list[str]] = {}
    for round_ in session_rounds:
        for team in (round_.team1, round_.team2):
            key = team_key(team)
            team_scores.setdefault(key, 0)
            team_members.setdefault(key, sorted(team))
        team_scores[_winning_key(round_)] += 1

    player_best = best_team_by_player(team_scores, team_members)
    tiers = classify_tiers(
        {player: best.wins for player, best in player_best.items()},
        threshold,
        gated=True,
    )
    start_iso = session_rounds[0].created_at.isoformat()

    return TeamSession(
        key=f"{game_date.isoformat()}__{start_iso}__{index}",
        game_type=game_type,
        game_date=game_date,
        rounds=list(session_rounds),
        win_counts=team_scores,
        threshold=threshold,
        tiers=tiers,
        is_complete=any(wins >= threshold for wins in team_scores.values()),
        end_at=session_rounds[-1].created_at,
        player_best=player_best,
    )


def build_team_sessions(
    rounds: Iterable[Round],
    game_type: GameType = GameType.RUNG,
    default_threshold: int = 5,
) -> list[TeamSession]:
    """
    Build first-to-N team sessions.

    Rounds are grouped by day and walked oldest first. The winning team of
    each round gains a point; once any team reaches the threshold the
    session closes on that round and counting restarts with the next one.
    Rounds left after the last closure form an incomplete session.

    Args:
        rounds: All rounds, any game and order
        game_type: Team game to build
        default_threshold: Used when the opening round sets no threshold

    Returns:
        TeamSessions, most recently ended first
    """
    by_date: dict[date, list[Round]] = defaultdict(list)
    for round_ in rounds:
        if _is_team_round(round_, game_type):
            by_date[round_.game_date].append(round_)

    sessions: list[TeamSession] = []

    for game_date in sorted(by_date):
        day_rounds = sorted(by_date[game_date], key=lambda r: (r.created_at, r.id))
        start = 0
        team_wins: dict[str, int] = {}
        session_index = 1

        for i, round_ in enumerate(day_rounds):
            threshold = day_rounds[start].threshold or default_threshold
            winner = _winning_key(round_)
            team_wins[winner] = team_wins.get(winner, 0) + 1

            if team_wins[winner] >= threshold:
                sessions.append(
                    _close_team_session(
                        game_type, game_date, day_rounds[start : i + 1], session_index, threshold
                    )
                )
                start = i + 1
                team_wins = {}
                session_index += 1

        if start < len(day_rounds):
            threshold = day_rounds[start].threshold or default_threshold
            sessions.append(
                _close_team_session(
                    game_type, game_date, day_rounds[start:], session_index, threshold
                )
            )

    logger.debug("Built %d %s sessions", len(sessions), game_type.value)
    return sorted(sessions, key=lambda s: s.sort_key, reverse=True)


def running_score_lines(session: TeamSession) -> list[RoundLine]:
    """
    Describe each round of a team session with the score after it.

    Returns:
        One RoundLine per round, oldest first, e.g. "A & B (2)" vs "(1) C & D"
    """
    scores: dict[str, int] = {}
    lines: list[RoundLine] = []

    for round_ in session.rounds:
        left_key = team_key(round_.team1)
        right_key = team_key(round_.team2)
        winner = _winning_key(round_)
        scores[winner] = scores.get(winner, 0) + 1

        left_score = scores.get(left_key, 0)
        right_score = scores.get(right_key, 0)
        lines.append(
            RoundLine(
                round_id=round_.id,
                left=f"{' & '.join(round_.team1)} ({left_score})",
                right=f"({right_score}) {' & '.join(round_.team2)}",
                left_losing=left_score < right_score,
                right_losing=right_score < left_score,
            )
        )

    return lines
