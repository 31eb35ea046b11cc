"""Match Center developer CLI.

Generates, checks and benchmarks random tournaments. Without arguments it
starts an interactive shell.

Usage:
    matchcenter-test
    matchcenter-test generate --format rotating --players 9 --scoring americano
    matchcenter-test check --format fixed --courts 2
    matchcenter-test benchmark --format playoff --players 32
"""

# Match Center
# Copyright (C) 2025  Match Center developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import random
import shlex
import statistics
import sys
import time
from pathlib import Path
from typing import Dict, List

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from matchcenter.constants import (
    BEST_OF_OPTIONS,
    PARTICIPANT_BOUNDS,
    PLAYOFF_MODES,
    PLAYOFF_SEEDED,
    SCORING_MODES,
    SCORING_SETS,
    TOURNAMENT_FORMATS,
)
from matchcenter.exceptions import MatchCenterException
from matchcenter.models.player import create_player
from matchcenter.models.tournament import TournamentConfig
from matchcenter.testing.checks import CheckResult, run_checks
from matchcenter.testing.rtg import RandomTournamentGenerator, ResultPattern, RTGConfig
from matchcenter.tournament import TournamentOrchestrator
from matchcenter.utils import setup_logger

logger = setup_logger(__name__)

PROG = "matchcenter-test"

CLI_STYLE = Style.from_dict(
    {
        "prompt": "#00aa00 bold",
        "title": "#5f87ff bold",
        "key": "#00afaf",
        "ok": "#00aa00 bold",
        "fail": "#d70000 bold",
        "warn": "#d7af00",
        "dim": "#888888",
    }
)

EXIT_WORDS = ("exit", "quit", "q")


def say(*fragments) -> None:
    """Print styled output.

    Each fragment is either plain text or a ``(style_class, text)`` tuple.
    """
    parts = []
    for fragment in fragments:
        if isinstance(fragment, tuple):
            parts.append((f"class:{fragment[0]}", fragment[1]))
        else:
            parts.append(("", fragment))
    print_formatted_text(FormattedText(parts), style=CLI_STYLE)


# ========== Arguments ==========


def add_generate_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", choices=TOURNAMENT_FORMATS, default="rotating")
    parser.add_argument("--players", type=int, default=8, help="Number of players")
    parser.add_argument("--courts", type=int, default=2, help="Courts available")
    parser.add_argument("--scoring", choices=SCORING_MODES, default=SCORING_SETS)
    parser.add_argument("--sets", type=int, choices=BEST_OF_OPTIONS, default=3)
    parser.add_argument(
        "--points", type=int, default=24, help="Americano points per match"
    )
    parser.add_argument("--playoff-mode", choices=PLAYOFF_MODES, default=PLAYOFF_SEEDED)
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in ResultPattern],
        default=ResultPattern.BALANCED.value,
        help="How simulated results follow player levels",
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--output", help="Write the JSON report to this file")
    parser.set_defaults(func=run_generate_command)


def add_check_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", choices=TOURNAMENT_FORMATS, default="rotating")
    parser.add_argument("--courts", type=int, default=1, help="Courts available")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.set_defaults(func=run_check_command)


def add_benchmark_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", choices=TOURNAMENT_FORMATS, default="rotating")
    parser.add_argument("--players", type=int, default=16, help="Number of players")
    parser.add_argument("--courts", type=int, default=2, help="Courts available")
    parser.add_argument("--iterations", type=int, default=10, help="Repetitions")
    parser.set_defaults(func=run_benchmark_command)


# command name -> (summary, argument builder)
SUBCOMMANDS: Dict[str, tuple] = {
    "generate": (
        "Build a random tournament, play it out and show the standings",
        add_generate_arguments,
    ),
    "check": (
        "Verify generated schedules for every allowed player count",
        add_check_arguments,
    ),
    "benchmark": (
        "Time complete random tournaments",
        add_benchmark_arguments,
    ),
}


def create_subcommand_parser(command: str) -> argparse.ArgumentParser:
    """Standalone parser for one subcommand, used by the interactive shell."""
    summary, add_arguments = SUBCOMMANDS[command]
    parser = argparse.ArgumentParser(prog=command, description=summary)
    add_arguments(parser)
    return parser


def create_main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Developer tools for the Match Center scheduling engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="examples:" + __doc__.split("Usage:")[1],
    )
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="Open the interactive shell"
    )
    subparsers = parser.add_subparsers(dest="command")
    for command, (summary, add_arguments) in SUBCOMMANDS.items():
        add_arguments(subparsers.add_parser(command, help=summary, description=summary))
    return parser


# ========== Commands ==========


def print_checks(results: List[CheckResult]) -> bool:
    """Show check outcomes; True when every check passed."""
    for result in results:
        if result.passed:
            say("  ", ("ok", "ok  "), f" {result.name}")
            continue
        say("  ", ("fail", "FAIL"), f" {result.name}")
        for problem in result.problems[:5]:
            say(("dim", f"        {problem}"))
        if len(result.problems) > 5:
            say(("dim", f"        ... {len(result.problems) - 5} more"))
    return all(result.passed for result in results)


def run_generate_command(args: argparse.Namespace) -> int:
    config = RTGConfig(
        tournament_format=args.format,
        num_players=args.players,
        courts=args.courts,
        scoring_mode=args.scoring,
        sets_to_play=args.sets,
        americano_points=args.points,
        playoff_mode=args.playoff_mode,
        result_pattern=ResultPattern(args.pattern),
        seed=args.seed,
    )
    rtg = RandomTournamentGenerator(config)
    report = rtg.generate_complete_tournament()
    tournament = report["tournament"]

    say(("title", f"{args.format} tournament, {args.players} players"))
    say(
        f"  {len(tournament.schedule)} rounds, "
        f"{report['matches_played']} matches played on {args.courts} courts"
    )
    if report["champion"] is not None:
        say("  Champion: ", ("ok", report["champion"].name))
    for position, entry in enumerate(report["ranking"], start=1):
        say(
            ("key", f"  {position:>2}. "),
            f"{entry.name:<28} {entry.wins}W {entry.losses}L  {entry.points} pts",
        )

    say(("title", "Schedule checks"))
    print_checks(report["checks"])

    if args.output:
        Path(args.output).write_text(rtg.export_json_format(report), encoding="utf-8")
        say("Report written to ", ("key", args.output))
    return 0


def run_check_command(args: argparse.Namespace) -> int:
    """Create a tournament for every allowed player count and check it."""
    minimum, maximum, must_be_even = PARTICIPANT_BOUNDS[args.format]
    orchestrator = TournamentOrchestrator(rng=random.Random(args.seed))
    failures = 0

    for count in range(minimum, maximum + 1):
        if must_be_even and count % 2:
            continue
        players = [create_player(f"P{i:02d}") for i in range(1, count + 1)]
        config = TournamentConfig(courts=args.courts, playoff_mode=PLAYOFF_SEEDED)
        try:
            tournament = orchestrator.create_tournament(args.format, players, config)
        except MatchCenterException as e:
            say(("fail", f"{count} players: {e}"))
            failures += 1
            continue

        say(("title", f"{count} players"))
        if not print_checks(run_checks(tournament)):
            failures += 1

    if failures:
        say(("fail", f"{failures} player counts failed"))
        return 1
    say(("ok", "All player counts passed"))
    return 0


def run_benchmark_command(args: argparse.Namespace) -> int:
    say(
        ("title", "Benchmark: "),
        f"{args.format}, {args.players} players, {args.courts} courts, "
        f"{args.iterations} runs",
    )
    timings = []
    for run in range(args.iterations):
        rtg = RandomTournamentGenerator(
            RTGConfig(
                tournament_format=args.format,
                num_players=args.players,
                courts=args.courts,
                seed=run,
            )
        )
        started = time.perf_counter()
        rtg.generate_complete_tournament()
        timings.append((time.perf_counter() - started) * 1000)
        say(("dim", f"  run {run + 1}: {timings[-1]:.2f} ms"))

    if timings:
        say(
            f"  mean {statistics.mean(timings):.2f} ms, "
            f"min {min(timings):.2f} ms, max {max(timings):.2f} ms"
        )
    return 0


# ========== Interactive shell ==========


def show_help(command: str = "") -> None:
    if not command:
        say(("title", "Commands"))
        for name, (summary, _) in SUBCOMMANDS.items():
            say(("key", f"  {name:<11}"), summary)
        say(("key", f"  {'help':<11}"), "Show this list, or help <command>")
        say(("key", f"  {'exit':<11}"), "Leave the shell")
        return
    if command not in SUBCOMMANDS:
        say(("fail", f"Unknown command: {command}"))
        return
    create_subcommand_parser(command).print_help()


def create_completer() -> NestedCompleter:
    """Complete command names, then their option flags."""
    tree: Dict[str, object] = {}
    for command in SUBCOMMANDS:
        parser = create_subcommand_parser(command)
        flags = [
            flag
            for action in parser._actions
            for flag in action.option_strings
            if flag.startswith("--")
        ]
        tree[command] = WordCompleter(flags)
    tree["help"] = WordCompleter(list(SUBCOMMANDS))
    for word in EXIT_WORDS:
        tree[word] = None
    return NestedCompleter.from_nested_dict(tree)


def dispatch(line: str) -> bool:
    """Run one shell line; False when the shell should close."""
    try:
        words = shlex.split(line)
    except ValueError as e:
        say(("fail", f"Cannot parse input: {e}"))
        return True
    if not words:
        return True

    command = words[0].lstrip("/")
    if command in EXIT_WORDS:
        return False
    if command in ("help", "?"):
        show_help(words[1].lstrip("/") if len(words) > 1 else "")
        return True
    if command not in SUBCOMMANDS:
        say(("fail", f"Unknown command: {command}"), " (type help)")
        return True

    try:
        args = create_subcommand_parser(command).parse_args(words[1:])
    except SystemExit:
        # argparse already printed the usage error
        return True
    try:
        args.func(args)
    except MatchCenterException as e:
        say(("fail", f"{type(e).__name__}: {e}"))
        logger.debug("Command failed", exc_info=True)
    return True


def run_interactive_mode() -> int:
    say(("title", "Match Center developer shell"))
    say(("dim", "Type help for the command list, exit to leave."))
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=CLI_STYLE,
    )
    prompt = FormattedText([("class:prompt", f"{PROG}> ")])

    while True:
        try:
            line = session.prompt(prompt)
        except KeyboardInterrupt:
            say(("warn", "Interrupted, type exit to leave"))
            continue
        except EOFError:
            break
        if not dispatch(line):
            break
    return 0


# ========== Entry point ==========


def main() -> int:
    """Entry point for the matchcenter-test script."""
    if len(sys.argv) == 1:
        return run_interactive_mode()

    parser = create_main_parser()
    args = parser.parse_args()
    if args.interactive:
        return run_interactive_mode()
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except MatchCenterException as e:
        say(("fail", f"{type(e).__name__}: {e}"))
        return 1


if __name__ == "__main__":
    sys.exit(main())
