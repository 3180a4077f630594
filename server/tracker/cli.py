"""Interactive console for the life tracker."""
from __future__ import annotations
import argparse
import logging
import random
import sys
from typing import TextIO

from .commands import CommandError, CommandType, parse_command
from .config import MatchConfig
from .orchestrator import MatchOrchestrator
from .render import BANNER, HELP_TEXT, render_history, render_state
from .settings import settings

PROMPT = "\n(Type 'help' for commands)\n> "


def run_console(orchestrator: MatchOrchestrator, stdin: TextIO, stdout: TextIO) -> None:
    """Read commands until 'quit' or end of input."""
    def say(text: str = ""):
        print(text, file=stdout)

    say(BANNER)
    say(HELP_TEXT)
    say(render_state(orchestrator.current))

    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            break

        try:
            command = parse_command(line)
        except CommandError as e:
            say(str(e))
            continue
        if command is None:
            continue

        result = orchestrator.execute(command)
        status = result["status"]

        if status == "quit":
            break
        elif status == "help":
            say(HELP_TEXT)
        elif status == "show":
            say(render_state(orchestrator.current))
        elif status == "history":
            say(render_history(orchestrator.timeline.entries(), orchestrator.timeline.cursor))
        elif status == "ok" and command.type == CommandType.ROLL:
            say(f"Rolled d{result['sides']}: {result['value']}")
        elif command.type == CommandType.COIN:
            say(f"You flipped: {result['result']}")
        elif status == "ok":
            say(render_state(orchestrator.current))
        else:
            say(result["message"])

    say("\nThanks for playing!")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifetracker",
        description="Life, poison and commander damage tracker with undo/redo.",
    )
    parser.add_argument("--players", type=int, default=settings.DEFAULT_PLAYERS,
                        help="Number of players (2-4)")
    parser.add_argument("--standard", action="store_true",
                        help="Constructed match at 20 life instead of commander")
    parser.add_argument("--capacity", type=int, default=settings.HISTORY_CAPACITY,
                        help="Number of undo steps kept")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for dice and coins")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = MatchConfig(
        players=args.players,
        commander=settings.COMMANDER and not args.standard,
    )
    try:
        orchestrator = MatchOrchestrator(config, capacity=args.capacity,
                                         rng=random.Random(args.seed))
    except ValueError as e:
        print(f"lifetracker: {e}", file=sys.stderr)
        return 2
    orchestrator.initialize()

    run_console(orchestrator, sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
