"""
Game Night Analytics CLI

Command-line interface for printing leaderboards, sessions and banners
without running the API server.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any

from gamenight_analytics.clients.records import RecordsClient, load_rounds_file
from gamenight_analytics.config import EngineConfig, get_settings
from gamenight_analytics.logging_config import setup_logging
from gamenight_analytics.models.round import GameFamily, GameType, Round
from gamenight_analytics.services.leaderboard import LeaderboardService

logger = logging.getLogger(__name__)


class GameNightAnalytics:
    """
    Main class for analyzing game night results.

    Can be used as a library or via CLI.

    Example:
        async with GameNightAnalytics(rounds_file="games.json") as analytics:
            standings = analytics.get_standings()
            banners = analytics.get_banners()
    """

    def __init__(self, rounds_file: str | None = None, config: EngineConfig | None = None):
        self.settings = get_settings()
        self.rounds_file = rounds_file or self.settings.rounds_file
        self.config = config or self.settings.engine_config()
        self.rounds: list[Round] = []
        self.service: LeaderboardService | None = None

    async def __aenter__(self):
        await self.refresh()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def refresh(self) -> int:
        """Reload rounds from the configured source and rebuild the service."""
        if self.rounds_file:
            self.rounds = load_rounds_file(self.rounds_file)
        else:
            async with RecordsClient(self.settings) as client:
                self.rounds = await client.get_rounds()

        self.service = LeaderboardService(self.rounds, self.config)
        logger.debug("Loaded %d rounds", len(self.rounds))
        return len(self.rounds)

    def _require_service(self) -> LeaderboardService:
        if self.service is None:
            raise RuntimeError("Rounds not loaded. Use 'async with' context.")
        return self.service

    def get_standings(
        self, game_type: GameType | None = None, players: list[str] | None = None
    ) -> dict[str, Any]:
        """Get the leaderboard report."""
        return self._require_service().leaderboard(game_type, players).model_dump(mode="json")

    def get_sessions(self, game_type: GameType) -> list[dict[str, Any]]:
        """Get sessions for a threshold or team game."""
        sessions = self._require_service().sessions(game_type)
        return [s.model_dump(mode="json") for s in sessions]

    def get_banners(self) -> dict[str, Any]:
        """Get current banners."""
        return self._require_service().banners().model_dump(mode="json")

    def get_team_combos(self) -> list[dict[str, Any]]:
        """Get team pairing records."""
        return [c.model_dump() for c in self._require_service().team_combo_stats()]


def _print_standings(report: dict[str, Any]) -> None:
    print(f"{'Rank':<5} {'Player':<12} {'GP':<5} {'W':<4} {'R':<4} {'S':<4} {'L':<4} "
          f"{'Win %':<7} {'Streak':<7} {'Recent'}")
    print("-" * 75)
    for rank, s in enumerate(report["standings"], 1):
        print(
            f"{rank:<5} {s['player']:<12} {s['games_played']:<5} {s['wins']:<4} "
            f"{s['runner_ups']:<4} {s['survivals']:<4} {s['losses']:<4} "
            f"{s['win_rate']:<7} {s['best_streak']:<7} {''.join(s['recent'])}"
        )

    for title, key in (("Hall of Fame", "hall_of_fame"), ("Hall of Shame", "hall_of_shame")):
        names = ", ".join(s["player"] for s in report[key]) or "nobody qualifies"
        print(f"\n{title} (min {report['min_games']} games): {names}")


async def cli_main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Game Night Analytics CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Overall leaderboard from a JSON export
  gamenight-cli --file games.json leaderboard

  # Leaderboard for one game and one group of players
  gamenight-cli --file games.json leaderboard --game-type Monopoly --players Riz Mobz T

  # Monopoly sessions
  gamenight-cli --file games.json sessions Monopoly

  # Current banners
  gamenight-cli banners
        """,
    )

    parser.add_argument(
        "--file", "-f",
        default=None,
        help="JSON export of rounds (default: GAMENIGHT_ROUNDS_FILE or the round store)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    game_choices = [g.value for g in GameType]

    # leaderboard command
    leaderboard_parser = subparsers.add_parser("leaderboard", help="Show player standings")
    leaderboard_parser.add_argument(
        "--game-type", "-g", choices=game_choices, default=None, help="Restrict to one game"
    )
    leaderboard_parser.add_argument(
        "--players", "-p", nargs="+", default=None, help="Only games with exactly these players"
    )

    # sessions command
    sessions_parser = subparsers.add_parser("sessions", help="Show sessions for a game")
    sessions_parser.add_argument(
        "game_type",
        choices=[g.value for g in GameType if g.family is not GameFamily.INDIVIDUAL],
        help="Threshold or team game",
    )

    # banners command
    subparsers.add_parser("banners", help="Show current banners")

    # teams command
    subparsers.add_parser("teams", help="Show Rung team pairing records")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    async with GameNightAnalytics(rounds_file=args.file) as analytics:
        if args.command == "leaderboard":
            game_type = GameType(args.game_type) if args.game_type else None
            label = game_type.value if game_type else "All Games"
            print(f"🏆 Leaderboard - {label}\n")
            _print_standings(analytics.get_standings(game_type, args.players))

        elif args.command == "sessions":
            game_type = GameType(args.game_type)
            print(f"🎲 {game_type.value} Sessions\n")

            sessions = analytics.get_sessions(game_type)
            if not sessions:
                print("No sessions found.")
                return

            for session in sessions:
                status = "complete" if session["is_complete"] else "in progress"
                scores = ", ".join(f"{k}: {v}" for k, v in session["win_counts"].items())
                tiers = session["tiers"]
                print(f"{session['game_date']} ({len(session['rounds'])} rounds, {status})")
                print(f"  Scores: {scores}")
                print(f"  Winners: {', '.join(tiers['winners']) or '-'}")
                if tiers["runners_up"]:
                    print(f"  Runners-up: {', '.join(tiers['runners_up'])}")
                if tiers["survivors"]:
                    print(f"  Survivors: {', '.join(tiers['survivors'])}")
                print(f"  Losers: {', '.join(tiers['losers']) or '-'}")
                print()

        elif args.command == "banners":
            banners = analytics.get_banners()
            shown = [b for b in (banners["latest"], banners["losing_streak"]) if b]
            if not shown:
                print("Nothing to announce.")
                return
            for banner in shown:
                print(banner["headline"])

        elif args.command == "teams":
            print("🎴 Rung - Team Combos\n")
            print(f"{'Team':<25} {'GP':<5} {'W':<5} {'L':<5} {'Win %'}")
            print("-" * 50)
            for combo in analytics.get_team_combos():
                print(
                    f"{combo['team']:<25} {combo['games_played']:<5} "
                    f"{combo['wins']:<5} {combo['losses']:<5} {combo['win_rate']}"
                )


def run_cli():
    """Entry point for CLI."""
    asyncio.run(cli_main())


if __name__ == "__main__":
    run_cli()
