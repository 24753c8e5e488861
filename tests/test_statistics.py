import pytest

from gamenight_analytics.config import EngineConfig
from gamenight_analytics.models.round import GameType
from gamenight_analytics.services.statistics import (
    calculate_per_game_stats,
    calculate_player_stats,
    calculate_team_combo_stats,
    calculate_team_player_stats,
    filter_results_by_players,
    filter_results_by_type,
    win_rate,
)

TRIO = ("Riz", "Mobz", "T")


def _by_player(stats):
    return {s.player: s for s in stats}


class TestWinRate:
    def test_no_games_is_zero(self):
        assert win_rate(0.0, 0) == 0

    @pytest.mark.parametrize(
        ("points", "games", "expected"),
        [(1.0, 1, 100), (1.5, 4, 38), (0.4, 3, 13), (0.1, 8, 1)],
    )
    def test_rounded_half_up(self, points, games, expected):
        assert win_rate(points, games) == expected


class TestCalculatePlayerStats:
    def test_tier_counts_and_weighted_score(self, make_result, config):
        results = [
            make_result(TRIO, winners=["Riz"], runners_up=["Mobz"], losers=["T"]),
            make_result(TRIO, winners=["Mobz"], survivors=["Riz"], losers=["T"]),
            make_result(TRIO, winners=["T"], runners_up=["Riz"], losers=["Mobz"]),
            make_result(TRIO, winners=["Mobz"], runners_up=["T"], losers=["Riz"]),
        ]

        riz = _by_player(calculate_player_stats(results, config))["Riz"]

        assert riz.games_played == 4
        assert (riz.wins, riz.runner_ups, riz.survivals, riz.losses) == (1, 1, 1, 1)
        assert riz.weighted_score == pytest.approx(1.5)
        assert riz.win_rate == 38
        assert riz.recent == ["W", "S", "R", "L"]

    def test_games_played_counts_untiered_participants(self, make_result, config):
        results = [make_result(("Riz", "Saf"), winners=["Riz"])]

        saf = _by_player(calculate_player_stats(results, config))["Saf"]

        assert saf.games_played == 1
        assert saf.wins == 0
        assert saf.win_rate == 0

    def test_sitting_out_does_not_break_a_streak(self, make_result, config):
        results = [
            make_result(TRIO, winners=["Riz"], losers=["Mobz", "T"]),
            make_result(TRIO, winners=["Riz"], losers=["Mobz", "T"]),
            make_result(("Mobz", "T"), winners=["Mobz"], losers=["T"]),
            make_result(TRIO, winners=["Riz"], losers=["Mobz", "T"]),
            make_result(TRIO, winners=["T"], losers=["Riz", "Mobz"]),
            make_result(TRIO, winners=["Riz"], losers=["Mobz", "T"]),
        ]

        riz = _by_player(calculate_player_stats(results, config))["Riz"]

        assert riz.best_streak == 3

    def test_input_order_does_not_matter(self, make_result, config):
        results = [
            make_result(TRIO, winners=["Riz"], losers=["Mobz", "T"]),
            make_result(TRIO, winners=["Mobz"], losers=["Riz", "T"]),
            make_result(TRIO, winners=["Riz"], losers=["Mobz", "T"]),
        ]

        forward = calculate_player_stats(results, config)
        backward = calculate_player_stats(list(reversed(results)), config)

        assert forward == backward
        assert _by_player(forward)["Riz"].recent == ["W", "L", "W"]

    def test_recent_keeps_latest_results(self, make_result):
        config = EngineConfig(roster=TRIO, recent_limit=10)
        results = [make_result(TRIO, losers=["Riz"]) for _ in range(2)]
        results.append(make_result(TRIO, runners_up=["Riz"]))
        results += [make_result(TRIO, winners=["Riz"]) for _ in range(9)]

        riz = _by_player(calculate_player_stats(results, config))["Riz"]

        assert riz.recent == ["R"] + ["W"] * 9
        assert riz.games_played == 12

    def test_penalty_losses_only_count_penalty_game(self, make_result, config):
        results = [
            make_result(TRIO, winners=["Riz"], losers=["T"], game_type=GameType.SHITHEAD),
            make_result(TRIO, winners=["Riz"], losers=["T"], game_type=GameType.BLACKJACK),
            make_result(TRIO, winners=["Mobz"], losers=["T"], game_type=GameType.SHITHEAD),
        ]

        t = _by_player(calculate_player_stats(results, config))["T"]

        assert t.losses == 3
        assert t.penalty_losses == 2

    def test_ranked_by_win_rate_then_weighted_score(self, make_result, config):
        results = [
            make_result(TRIO, winners=["Riz"], runners_up=["Mobz"], losers=["T"]),
            make_result(TRIO, winners=["Mobz"], runners_up=["Riz"], losers=["T"]),
            make_result(("T", "Saf"), winners=["T"], losers=["Saf"]),
        ]

        ranked = [s.player for s in calculate_player_stats(results, config)]

        # Riz and Mobz tie on 70%, T has 33%, the rest keep roster order
        assert ranked == ["Riz", "Mobz", "T", "Saf", "Faizan", "Yusuf"]

    def test_players_subset(self, make_result, config):
        results = [make_result(TRIO, winners=["Riz"], losers=["Mobz", "T"])]

        stats = calculate_player_stats(results, config, players=["T", "Mobz"])

        assert sorted(s.player for s in stats) == ["Mobz", "T"]

    def test_no_results(self, config):
        stats = calculate_player_stats([], config)

        assert [s.player for s in stats] == list(config.roster)
        assert all(s.win_rate == 0 and s.games_played == 0 for s in stats)

    def test_per_game_stats(self, make_result, config):
        results = [
            make_result(TRIO, winners=["Riz"], losers=["T"], game_type=GameType.SHITHEAD),
            make_result(TRIO, winners=["T"], losers=["Riz"], game_type=GameType.BLACKJACK),
        ]

        stats = _by_player(calculate_per_game_stats(results, GameType.SHITHEAD, config))

        assert stats["Riz"].wins == 1
        assert stats["T"].wins == 0


class TestFilters:
    def test_filter_by_type(self, make_result):
        results = [
            make_result(TRIO, game_type=GameType.SHITHEAD),
            make_result(TRIO, game_type=GameType.BLACKJACK),
        ]

        assert len(filter_results_by_type(results, None)) == 2
        assert [r.game_type for r in filter_results_by_type(results, GameType.BLACKJACK)] == [
            GameType.BLACKJACK
        ]

    def test_filter_by_players_is_exact(self, make_result):
        trio = make_result(TRIO)
        pair = make_result(("Riz", "Mobz"))

        assert filter_results_by_players([trio, pair], ["Mobz", "Riz"]) == [pair]
        assert filter_results_by_players([trio, pair], []) == [trio, pair]


class TestTeamStats:
    def test_team_combo_records(self, team_round):
        rounds = [
            team_round(("Riz", "Mobz"), ("T", "Saf"), 1),
            team_round(("Mobz", "Riz"), ("Saf", "T"), 1),
            team_round(("Riz", "T"), ("Mobz", "Saf"), 2),
        ]

        combos = {c.team: c for c in calculate_team_combo_stats(rounds)}

        assert combos["Mobz + Riz"].wins == 2
        assert combos["Mobz + Riz"].win_rate == 100
        assert combos["Saf + T"].losses == 2
        assert combos["Mobz + Saf"].wins == 1
        assert combos["Riz + T"].win_rate == 0

    def test_team_player_records(self, team_round, config):
        rounds = [
            team_round(("Riz", "Mobz"), ("T", "Saf"), 1),
            team_round(("Riz", "T"), ("Mobz", "Saf"), 2),
        ]

        stats = _by_player(calculate_team_player_stats(rounds, config))

        assert (stats["Mobz"].wins, stats["Mobz"].losses) == (2, 0)
        assert (stats["Riz"].wins, stats["Riz"].losses) == (1, 1)
        assert stats["Riz"].win_rate == 50
        assert stats["Yusuf"].games_played == 0
