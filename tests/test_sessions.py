import random
from datetime import date

from gamenight_analytics.models.round import GameType
from gamenight_analytics.services.sessions import build_threshold_sessions, participant_key

PLAYERS = ("P1", "P2", "P3")


class TestParticipantKey:
    def test_order_independent(self):
        assert participant_key(["B", "A", "C"]) == participant_key(["C", "B", "A"]) == "A&B&C"


class TestBuildThresholdSessions:
    def test_session_closes_when_threshold_reached(self, solo_round):
        rounds = [solo_round(w, PLAYERS) for w in ("P1", "P1", "P2", "P1", "P3")]

        sessions = build_threshold_sessions(rounds, GameType.MONOPOLY)

        assert len(sessions) == 2
        latest, first = sessions
        assert [r.id for r in first.rounds] == ["r1", "r2", "r3", "r4"]
        assert first.is_complete
        assert first.win_counts == {"P1": 3, "P2": 1, "P3": 0}
        assert first.tiers.winners == ["P1"]
        assert first.tiers.runners_up == ["P2"]
        assert first.tiers.losers == ["P3"]

        assert [r.id for r in latest.rounds] == ["r5"]
        assert not latest.is_complete

    def test_groups_by_exact_player_set(self, solo_round):
        trio = ("P1", "P2", "P3")
        pair = ("P1", "P2")
        rounds = [
            solo_round("P1", trio),
            solo_round("P2", pair),
            solo_round("P1", ("P3", "P2", "P1")),
            solo_round("P2", pair),
        ]

        sessions = build_threshold_sessions(rounds, GameType.MONOPOLY)
        by_players = {participant_key(s.rounds[0].players_in_game): s for s in sessions}

        assert [r.id for r in by_players["P1&P2&P3"].rounds] == ["r1", "r3"]
        assert [r.id for r in by_players["P1&P2"].rounds] == ["r2", "r4"]
        assert by_players["P1&P2"].win_counts == {"P1": 0, "P2": 2}

    def test_different_days_never_share_a_session(self, solo_round):
        rounds = [
            solo_round("P1", PLAYERS, game_date=date(2025, 1, 4)),
            solo_round("P1", PLAYERS, game_date=date(2025, 1, 5)),
        ]

        sessions = build_threshold_sessions(rounds, GameType.MONOPOLY)

        assert len(sessions) == 2
        assert [s.game_date for s in sessions] == [date(2025, 1, 5), date(2025, 1, 4)]
        assert all(not s.is_complete for s in sessions)

    def test_opening_round_threshold_override(self, solo_round):
        rounds = [solo_round("P1", PLAYERS, threshold=5)] + [
            solo_round("P1", PLAYERS) for _ in range(4)
        ]

        sessions = build_threshold_sessions(rounds, GameType.TAI_TI, default_threshold=3)

        assert sessions == []

        tai_ti = [solo_round("P1", PLAYERS, game_type=GameType.TAI_TI, threshold=5)] + [
            solo_round("P1", PLAYERS, game_type=GameType.TAI_TI) for _ in range(4)
        ]
        sessions = build_threshold_sessions(tai_ti, GameType.TAI_TI, default_threshold=3)

        assert len(sessions) == 1
        assert sessions[0].threshold == 5
        assert sessions[0].round_count == 5
        assert sessions[0].is_complete

    def test_rounds_without_winner_or_players_are_ignored(self, make_round, solo_round):
        rounds = [
            make_round(GameType.MONOPOLY, players_in_game=list(PLAYERS), winners=[]),
            make_round(GameType.MONOPOLY, players_in_game=[], winners=["P1"]),
            solo_round("P2", PLAYERS),
        ]

        sessions = build_threshold_sessions(rounds, GameType.MONOPOLY)

        assert len(sessions) == 1
        assert sessions[0].win_counts == {"P1": 0, "P2": 1, "P3": 0}

    def test_session_key_and_bounds(self, solo_round):
        rounds = [solo_round("P1", PLAYERS) for _ in range(3)]

        (session,) = build_threshold_sessions(rounds, GameType.MONOPOLY)

        assert session.key == f"Monopoly-2025-01-04__{rounds[0].created_at.isoformat()}"
        assert session.start_at == rounds[0].created_at
        assert session.end_at == rounds[-1].created_at
        assert session.participants == list(PLAYERS)

    def test_rebuilding_is_idempotent_and_order_independent(self, solo_round):
        rounds = [
            solo_round(w, PLAYERS)
            for w in ("P1", "P2", "P2", "P3", "P2", "P1", "P1", "P3", "P1")
        ]
        shuffled = rounds[:]
        random.Random(7).shuffle(shuffled)

        first = [s.model_dump() for s in build_threshold_sessions(rounds, GameType.MONOPOLY)]
        second = [s.model_dump() for s in build_threshold_sessions(rounds, GameType.MONOPOLY)]
        from_shuffled = [
            s.model_dump() for s in build_threshold_sessions(shuffled, GameType.MONOPOLY)
        ]

        assert first == second == from_shuffled
