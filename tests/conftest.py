"""Shared fixtures: round factories and a default engine config."""

import itertools
from datetime import UTC, date, datetime, time, timedelta

import pytest

from gamenight_analytics.config import EngineConfig
from gamenight_analytics.models.result import GameResult
from gamenight_analytics.models.round import GameType, Round, TierSets

GAME_DAY = date(2025, 1, 4)
ROSTER = ("Riz", "Mobz", "T", "Saf", "Faizan", "Yusuf")


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(roster=ROSTER)


@pytest.fixture
def make_round():
    """
    Build Rounds with unique ids and increasing timestamps.

    Each call is one minute after the previous one unless `minute` is given.
    """
    counter = itertools.count(1)

    def _make(game_type=GameType.MONOPOLY, *, game_date=GAME_DAY, minute=None, **fields):
        n = next(counter)
        offset = n if minute is None else minute
        created_at = datetime.combine(game_date, time(19, 0), tzinfo=UTC) + timedelta(minutes=offset)
        return Round(
            id=fields.pop("id", f"r{n}"),
            game_type=game_type,
            game_date=game_date,
            created_at=created_at,
            **fields,
        )

    return _make


@pytest.fixture
def solo_round(make_round):
    """Monopoly-style round won by one player."""

    def _make(winner, players=("Riz", "Mobz", "T"), game_type=GameType.MONOPOLY, **fields):
        return make_round(game_type, players_in_game=list(players), winners=[winner], **fields)

    return _make


@pytest.fixture
def team_round(make_round):
    """Rung round between two teams."""

    def _make(team1, team2, winning_team, **fields):
        return make_round(
            GameType.RUNG,
            team1=list(team1),
            team2=list(team2),
            players_in_game=list(team1) + list(team2),
            winning_team=winning_team,
            **fields,
        )

    return _make


@pytest.fixture
def make_result():
    """Build GameResults directly, one minute apart."""
    counter = itertools.count(1)

    def _make(
        participants,
        winners=(),
        runners_up=(),
        survivors=(),
        losers=(),
        game_type=GameType.BLACKJACK,
        game_date=GAME_DAY,
    ):
        n = next(counter)
        return GameResult(
            source_id=f"g{n}",
            game_type=game_type,
            game_date=game_date,
            ended_at=datetime.combine(game_date, time(19, 0), tzinfo=UTC) + timedelta(minutes=n),
            participants=list(participants),
            tiers=TierSets(
                winners=list(winners),
                runners_up=list(runners_up),
                survivors=list(survivors),
                losers=list(losers),
            ),
        )

    return _make
