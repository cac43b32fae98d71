from __future__ import annotations

import asyncio
from typing import List

import pytest

from conftest import FakeStorage

from toy_robot.console import (
    CommandError,
    build_storage,
    describe_report,
    parse_args,
    parse_command,
    render_grid,
    run_console,
)
from toy_robot.models.robot_model import Direction, RobotState
from toy_robot.runtime_state import HistoryStore
from toy_robot.session import RobotSessionController
from toy_robot.storage import HttpStorage, LocalStorage, StorageError


def test_parse_command_variants():
    assert parse_command("place 2,3") == ("PLACE", (2, 3), False)
    assert parse_command("PLACE 4 0") == ("PLACE", (4, 0), False)
    assert parse_command("move") == ("MOVE", None, False)
    assert parse_command("up") == ("MOVE", None, True)
    assert parse_command("SPACE") == ("REPORT", None, True)
    assert parse_command("exit") == ("QUIT", None, False)


@pytest.mark.parametrize("line", ["", "jump", "place", "place 1", "place a,b", "move 3"])
def test_parse_command_errors(line):
    with pytest.raises(CommandError):
        parse_command(line)


def test_render_grid_puts_origin_bottom_left():
    rows = render_grid(RobotState(x=0, y=0, direction=Direction.EAST)).splitlines()
    assert rows[0] == "4 . . . . ."
    assert rows[4] == "0 > . . . ."
    assert rows[5] == "  0 1 2 3 4"


def test_render_grid_without_robot():
    assert ">" not in render_grid(None) and "^" not in render_grid(None)


def test_describe_report():
    assert describe_report("2,3,NORTH") == "X: 2  Y: 3  Direction: NORTH"
    assert describe_report("garbage") == "garbage"


def _run(storage, lines: List[str]) -> List[str]:
    out: List[str] = []
    session = RobotSessionController(storage)
    asyncio.run(run_console(session, lines=lines, write=out.append))
    return out


def test_console_session_against_local_store(history_path):
    store = HistoryStore(history_path)
    out = _run(LocalStorage(store), ["PLACE 1,2", "RIGHT", "MOVE", "REPORT", "QUIT"])

    assert "X: 2  Y: 2  Direction: EAST" in out
    assert [r.to_payload() for r in store.history()] == [
        {"x": 2, "y": 2, "direction": "EAST"},
        {"x": 1, "y": 2, "direction": "EAST"},
        {"x": 1, "y": 2, "direction": "NORTH"},
    ]


def test_console_restores_previous_robot(history_path):
    HistoryStore(history_path).append(RobotState(x=3, y=3, direction=Direction.WEST))
    out = _run(LocalStorage(HistoryStore(history_path)), ["REPORT"])
    assert "X: 3  Y: 3  Direction: WEST" in out


def test_console_key_bindings_ignored_before_place():
    storage = FakeStorage()
    out = _run(storage, ["UP", "A", "SPACE"])
    assert storage.saved == []
    # only the initial board was drawn
    assert len(out) == 1


def test_console_shows_placement_error():
    out = _run(FakeStorage(), ["PLACE 7,7"])
    assert "! Position is out of bounds" in out


def test_console_history_listing():
    storage = FakeStorage()
    out = _run(storage, ["PLACE 0,0", "MOVE", "HISTORY"])
    listing = [line for line in out if line.startswith("#")]
    assert listing[0].startswith("#2") and "0,1,NORTH" in listing[0]
    assert listing[1].startswith("#1") and "0,0,NORTH" in listing[1]


def test_build_storage_picks_adapter(tmp_path):
    assert isinstance(build_storage(parse_args(["--local", str(tmp_path / "h.json")])), LocalStorage)
    http = build_storage(parse_args(["--server", "http://robot.test:9000", "--timeout", "2"]))
    assert isinstance(http, HttpStorage)
    assert http.base_url == "http://robot.test:9000"
    assert http.timeout_s == 2.0


def test_console_shows_history_fetch_failure():
    storage = FakeStorage(fail_fetch=StorageError("Failed to fetch robot history"))
    out = _run(storage, ["HISTORY"])

    assert "! Failed to fetch robot history" in out
    assert "(no history)" not in out


def test_console_shows_repeated_history_failure_each_time():
    storage = FakeStorage(fail_fetch=StorageError("Failed to fetch robot history"))
    out = _run(storage, ["HISTORY", "HISTORY"])
    assert out.count("! Failed to fetch robot history") == 2


def test_console_empty_history_message():
    assert "(no history)" in _run(FakeStorage(), ["HISTORY"])


def test_console_does_not_repeat_cleared_placement_error():
    out = _run(FakeStorage(), ["PLACE 7,7", "PLACE 1,1", "MOVE"])
    assert out.count("! Position is out of bounds") == 1


def test_console_reports_every_rejected_placement():
    out = _run(FakeStorage(), ["PLACE 7,7", "PLACE 8,8"])
    assert out.count("! Position is out of bounds") == 2


def test_console_shows_save_failure_once():
    storage = FakeStorage(fail_save=StorageError("y: Input should be less than or equal to 4"))
    out = _run(storage, ["PLACE 0,0", "LEFT"])
    assert out.count("! y: Input should be less than or equal to 4") == 1
