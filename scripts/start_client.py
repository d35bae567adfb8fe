#!/usr/bin/env python3
"""
Console front end for MoodGrid.
Usage: python scripts/start_client.py [--api URL] [--query "year=2024&month=2"] [--timezone TZ]
"""

import argparse
import asyncio
import logging
import shlex
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.enums import ViewShift
from services.sync_client import DEFAULT_API_URL, SyncClient, TransportError
from ui.messages import HELP_TEXT, grid_message, header_message
from ui.prompts import ConsolePrompter
from ui.tracker import Tracker
from ui.view import ViewState
from utils import datetime_utils
from utils.logger import setup_logger

logger = logging.getLogger(__name__)

SHIFT_COMMANDS = {
    "<": ViewShift.MONTH_BACK,
    ">": ViewShift.MONTH_FORWARD,
    "[": ViewShift.FOCUS_BACK,
    "]": ViewShift.FOCUS_FORWARD,
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="MoodGrid console client")
    parser.add_argument("--api", default=DEFAULT_API_URL, help=f"API base URL (default: {DEFAULT_API_URL})")
    parser.add_argument("--query", default="", help="initial view, e.g. 'year=2024&month=2&focus=today'")
    parser.add_argument("--timezone", help="timezone used for 'today', e.g. Europe/Copenhagen")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def show(tracker: Tracker) -> None:
    print(header_message(tracker.view))
    if tracker.grid is not None:
        print(grid_message(tracker.grid.rows()))


async def handle(tracker: Tracker, command: str, args, timezone=None) -> bool:
    """Run one command line; returns False when the user quits."""
    grid = tracker.grid

    if command in ("q", "quit", "exit"):
        return False
    if command == "help":
        print(HELP_TEXT)
    elif command in SHIFT_COMMANDS:
        if await tracker.shift(SHIFT_COMMANDS[command]):
            show(tracker)
    elif command == "open":
        tracker.view = ViewState.from_query(args[0] if args else "", today=datetime_utils.today(timezone))
        await tracker.load()
        show(tracker)
    elif command == "c" and len(args) == 2:
        await grid.toggle_check(int(args[0]), int(args[1]))
        show(tracker)
    elif command in ("a", "s", "n") and len(args) == 1:
        edit = {"a": grid.edit_anxiety, "s": grid.edit_hours_slept, "n": grid.edit_comment}[command]
        if await edit(int(args[0])):
            show(tracker)
    else:
        print("Unknown command, try 'help'.")
    return True


async def handle_line(tracker: Tracker, line: str, timezone=None) -> bool:
    """Parse and run one input line, reporting errors instead of raising."""
    try:
        command, *rest = shlex.split(line)
        return await handle(tracker, command, rest, timezone)
    except TransportError as e:
        print(f"⚠️ Server unreachable, change not saved: {e}")
    except (ValueError, LookupError) as e:
        print(f"⚠️ {e}")
    return True


async def run(args) -> int:
    prompter = ConsolePrompter()
    view = ViewState.from_query(args.query, today=datetime_utils.today(args.timezone))

    async with SyncClient(args.api) as client:
        tracker = Tracker(view, client, prompter, on_navigate=lambda query: logger.info(f"?{query}"))
        try:
            await tracker.load()
        except TransportError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        show(tracker)

        while True:
            try:
                line = input("> ").strip()
            except EOFError:
                return 0
            if line and not await handle_line(tracker, line, args.timezone):
                return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logger(level="DEBUG" if args.verbose else "WARNING")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
