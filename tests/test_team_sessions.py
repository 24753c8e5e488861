from datetime import date

from gamenight_analytics.models.round import GameType
from gamenight_analytics.services.team_sessions import (
    best_team_by_player,
    build_team_sessions,
    running_score_lines,
    team_key,
)

AB = ("A", "B")
CD = ("C", "D")


class TestTeamKey:
    def test_order_independent(self):
        assert team_key(["B", "A"]) == team_key(["A", "B"]) == "A&B"


class TestBestTeamByPlayer:
    def test_first_team_wins_ties(self):
        best = best_team_by_player(
            {"A&B": 2, "A&C": 2},
            {"A&B": ["A", "B"], "A&C": ["A", "C"]},
        )

        assert best["A"].team_key == "A&B"
        assert best["A"].wins == 2
        assert best["C"].team_key == "A&C"


class TestBuildTeamSessions:
    def test_first_to_five_closes_session(self, team_round):
        winners = [1, 2, 1, 1, 2, 1, 1, 2]
        rounds = [team_round(AB, CD, w) for w in winners]

        sessions = build_team_sessions(rounds)

        assert len(sessions) == 2
        latest, first = sessions
        assert first.round_count == 7
        assert first.is_complete
        assert first.team_scores == {"A&B": 5, "C&D": 2}
        assert first.tiers.winners == ["A", "B"]
        assert first.tiers.losers == ["C", "D"]
        assert first.tiers.runners_up == []
        assert first.tiers.survivors == []
        assert first.player_best["C"].wins == 2

        assert latest.round_count == 1
        assert not latest.is_complete
        assert latest.key.endswith("__2")

    def test_incomplete_session_has_no_winners(self, team_round):
        rounds = [team_round(AB, CD, w) for w in (1, 2, 1)]

        (session,) = build_team_sessions(rounds)

        assert not session.is_complete
        assert session.tiers.winners == []
        assert session.tiers.runners_up == ["A", "B"]
        assert session.tiers.losers == ["C", "D"]

    def test_players_ranked_by_best_team(self, team_round):
        rounds = [team_round(AB, CD, 1) for _ in range(3)]
        rounds += [team_round(("C", "A"), ("D", "B"), 1) for _ in range(5)]

        (session,) = build_team_sessions(rounds)

        assert session.is_complete
        assert session.team_scores == {"A&B": 3, "C&D": 0, "A&C": 5, "B&D": 0}
        assert session.player_best["A"].team_key == "A&C"
        assert session.player_best["B"].wins == 3
        assert session.player_best["D"].team_key == "C&D"
        assert session.tiers.winners == ["A", "C"]
        assert session.tiers.runners_up == ["B"]
        assert session.tiers.losers == ["D"]

    def test_team_member_order_does_not_matter(self, team_round):
        rounds = [team_round(("B", "A"), CD, 1), team_round(AB, ("D", "C"), 1)]

        (session,) = build_team_sessions(rounds)

        assert session.team_scores == {"A&B": 2, "C&D": 0}

    def test_sessions_do_not_span_days(self, team_round):
        rounds = [team_round(AB, CD, 1, game_date=date(2025, 1, 4)) for _ in range(3)]
        rounds += [team_round(AB, CD, 1, game_date=date(2025, 1, 5)) for _ in range(3)]

        sessions = build_team_sessions(rounds)

        assert [s.game_date for s in sessions] == [date(2025, 1, 5), date(2025, 1, 4)]
        assert all(s.team_scores == {"A&B": 3, "C&D": 0} for s in sessions)
        assert all(s.key.endswith("__1") for s in sessions)

    def test_rounds_without_result_are_ignored(self, make_round, team_round):
        rounds = [
            make_round(GameType.RUNG, team1=list(AB), team2=list(CD), winning_team=None),
            make_round(GameType.RUNG, team1=list(AB), team2=[], winning_team=1),
            team_round(AB, CD, 2),
        ]

        (session,) = build_team_sessions(rounds)

        assert session.round_count == 1
        assert session.team_scores == {"A&B": 0, "C&D": 1}

    def test_opening_round_threshold_override(self, team_round):
        rounds = [team_round(AB, CD, 1, threshold=3)] + [team_round(AB, CD, 1) for _ in range(3)]

        sessions = build_team_sessions(rounds)

        assert [s.round_count for s in sessions] == [1, 3]
        assert sessions[1].is_complete
        assert sessions[1].tiers.winners == ["A", "B"]


class TestRunningScoreLines:
    def test_lines_show_score_after_each_round(self, team_round):
        rounds = [team_round(AB, CD, 1), team_round(CD, AB, 1), team_round(CD, AB, 1)]
        (session,) = build_team_sessions(rounds)

        lines = running_score_lines(session)

        assert [(line.left, line.right) for line in lines] == [
            ("A & B (1)", "(0) C & D"),
            ("C & D (1)", "(1) A & B"),
            ("C & D (2)", "(1) A & B"),
        ]
        assert lines[0].right_losing and not lines[0].left_losing
        assert not lines[1].left_losing and not lines[1].right_losing
        assert lines[2].right_losing
