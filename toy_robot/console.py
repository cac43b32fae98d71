#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Toy Robot Simulator — Interactive console
-----------------------------------------
Terminal front-end for a robot session.

Features:
- Simple REPL: type a command, see the table redrawn.
- Talks to the history API over HTTP (default) or straight to a local
  history file with --local, so it also works without a server.
- Restores the last saved robot on start-up.
- Key-style aliases (UP / A / D / SPACE) work like the arrow keys of a
  browser front-end and are ignored until a robot is on the table.

Commands:
    PLACE X,Y   put the robot at X,Y facing NORTH (PLACE X Y also works)
    MOVE        one step forward
    LEFT/RIGHT  quarter turn
    REPORT      show X,Y,DIRECTION
    HISTORY     list saved states, newest first
    GRID        redraw the table
    CLEAR       dismiss the current error / report
    HELP, QUIT
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Callable, List, Optional, Sequence, Tuple

from toy_robot.core import grid
from toy_robot.core.config import settings
from toy_robot.models.robot_model import Direction, GRID_MAX, GRID_MIN, RobotState
from toy_robot.runtime_state import HistoryStore
from toy_robot.session import RobotSessionController
from toy_robot.storage import HttpStorage, LocalStorage, StoragePort
from toy_robot.utils import get_logger, setup_logging

logger = get_logger(__name__)

Writer = Callable[[str], None]

PROMPT = "robot> "

HELP_TEXT = """\
    PLACE X,Y   put the robot at X,Y facing NORTH (PLACE X Y also works)
    MOVE        one step forward          (UP, W)
    LEFT/RIGHT  quarter turn              (A, D)
    REPORT      show X,Y,DIRECTION        (SPACE, R)
    HISTORY     list saved states, newest first
    GRID        redraw the table
    CLEAR       dismiss the current error / report
    HELP, QUIT"""

ROBOT_GLYPHS = {
    Direction.NORTH: "^",
    Direction.EAST: ">",
    Direction.SOUTH: "v",
    Direction.WEST: "<",
}

# Canonical command for every accepted word.
COMMANDS = {
    "PLACE": "PLACE",
    "MOVE": "MOVE",
    "LEFT": "LEFT",
    "RIGHT": "RIGHT",
    "REPORT": "REPORT",
    "HISTORY": "HISTORY",
    "GRID": "GRID",
    "CLEAR": "CLEAR",
    "HELP": "HELP",
    "QUIT": "QUIT",
    "EXIT": "QUIT",
}

# Keyboard-style shortcuts; only active once a robot has been placed.
KEY_BINDINGS = {
    "UP": "MOVE",
    "W": "MOVE",
    "A": "LEFT",
    "D": "RIGHT",
    "SPACE": "REPORT",
    "R": "REPORT",
}


class CommandError(ValueError):
    """A line that could not be understood as a command."""


# ---------------------------------------------------------------------------
# Parsing / rendering
# ---------------------------------------------------------------------------


def parse_command(line: str) -> Tuple[str, Optional[Tuple[int, int]], bool]:
    """
    Split an input line into (command, place_args, is_key_binding).

    >>> parse_command("place 2,3")
    ('PLACE', (2, 3), False)
    >>> parse_command("a")
    ('LEFT', None, True)
    """
    text = line.strip()
    if not text:
        raise CommandError("Empty command")

    word, _, rest = text.partition(" ")
    word = word.upper()

    if word in KEY_BINDINGS:
        return KEY_BINDINGS[word], None, True

    if word not in COMMANDS:
        raise CommandError(f"Unknown command: {word}")

    command = COMMANDS[word]
    if command != "PLACE":
        if rest.strip():
            raise CommandError(f"{command} takes no arguments")
        return command, None, False

    fields = [f for f in rest.replace(",", " ").split() if f]
    if len(fields) != 2:
        raise CommandError("Usage: PLACE X,Y")
    try:
        x, y = int(fields[0]), int(fields[1])
    except ValueError as exc:
        raise CommandError("PLACE coordinates must be whole numbers") from exc
    return "PLACE", (x, y), False


def render_grid(robot: Optional[RobotState]) -> str:
    """Draw the table with y=4 on top and the robot as an arrow."""
    rows: List[str] = []
    for y in range(GRID_MAX, GRID_MIN - 1, -1):
        cells = []
        for x in range(GRID_MIN, GRID_MAX + 1):
            if robot is not None and robot.x == x and robot.y == y:
                cells.append(ROBOT_GLYPHS[robot.direction])
            else:
                cells.append(".")
        rows.append(f"{y} " + " ".join(cells))
    rows.append("  " + " ".join(str(x) for x in range(GRID_MIN, GRID_MAX + 1)))
    return "\n".join(rows)


def describe_report(report: str) -> str:
    """Turn "2,3,NORTH" into "X: 2  Y: 3  Direction: NORTH"; odd text is shown as-is."""
    try:
        state = grid.parse_report(report)
    except ValueError:
        return report
    return f"X: {state.x}  Y: {state.y}  Direction: {state.direction.value}"


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


async def execute(
    session: RobotSessionController,
    line: str,
    write: Writer = print,
) -> bool:
    """
    Run one input line against `session`.

    Returns False when the console should stop.
    """
    try:
        command, args, is_key = parse_command(line)
    except CommandError as exc:
        write(f"? {exc}")
        return True

    if is_key and session.robot is None:
        return True

    if command == "QUIT":
        return False

    if command == "PLACE":
        assert args is not None
        if session.place(*args) is None and session.last_error:
            # Rejected placements are reported right away, every time.
            write(render_grid(session.robot))
            write(f"! {session.last_error}")
            return True
    elif command == "MOVE":
        session.move()
    elif command == "LEFT":
        session.turn_left()
    elif command == "RIGHT":
        session.turn_right()
    elif command == "REPORT":
        report = session.report()
        if report:
            write(describe_report(report))
        else:
            write("No robot placed yet.")
        return True
    elif command == "HISTORY":
        records = await session.load_history()
        if session.last_error:
            write(f"! {session.last_error}")
            return True
        if not records:
            write("(no history)")
        for record in records:
            write(f"#{record.id:<4} {grid.format_report(record)}  {record.created_at.isoformat()}")
        return True
    elif command == "CLEAR":
        session.clear_error()
        session.clear_report()
        return True
    elif command == "HELP":
        write(HELP_TEXT)
        return True

    write(render_grid(session.robot))
    return True


async def run_console(
    session: RobotSessionController,
    lines: Optional[Sequence[str]] = None,
    write: Writer = print,
) -> None:
    """
    Drive `session` from `lines`, or from stdin when `lines` is None.

    Waits for outstanding saves before returning.
    """
    await session.initialize()
    write(render_grid(session.robot))

    shown_error = ""
    feed = iter(lines) if lines is not None else None

    while True:
        # Save failures arrive in the background; show each new one once.
        if session.last_error and session.last_error != shown_error:
            write(f"! {session.last_error}")
        shown_error = session.last_error

        if feed is not None:
            line = next(feed, None)
            if line is None:
                break
        else:
            try:
                line = await asyncio.to_thread(input, PROMPT)
            except EOFError:
                break

        if not line.strip():
            continue
        if not await execute(session, line, write):
            break
        shown_error = session.last_error
        await asyncio.sleep(0)

    await session.wait_for_saves()
    if session.last_error and session.last_error != shown_error:
        write(f"! {session.last_error}")


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Toy Robot Simulator — interactive console",
    )
    parser.add_argument(
        "--server",
        type=str,
        default=settings.api_base_url,
        help=f"History API base URL (default: {settings.api_base_url})",
    )
    parser.add_argument(
        "--local",
        type=str,
        default=None,
        metavar="PATH",
        help="Use a local history file instead of the HTTP API.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.request_timeout_s,
        help=f"HTTP request timeout in seconds (default: {settings.request_timeout_s})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.debug,
        help="Verbose logging.",
    )
    return parser.parse_args(argv)


def build_storage(args: argparse.Namespace) -> StoragePort:
    if args.local:
        return LocalStorage(HistoryStore(args.local))
    return HttpStorage(base_url=args.server, timeout_s=args.timeout)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    storage = build_storage(args)
    logger.debug("Console using %s", type(storage).__name__)
    session = RobotSessionController(storage)

    try:
        asyncio.run(run_console(session))
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
