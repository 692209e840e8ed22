# tests/test_play.py
import json
import logging

import pytest

import play
from session import RouteSession


def scripted(*lines):
    """Feed canned answers to play_round, then end input."""
    answers = iter(lines)

    def read(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    return read


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def session(europe, clock):
    s = RouteSession.from_neighbors(europe, clock=clock)
    s.start("Portugal", "Germany")
    return s


def test_play_round_to_completion(session, capsys):
    play.play_round(session, read=scripted("Spain", ":route", "Italy", "France"))
    assert session.finished
    assert session.outcome.correct
    assert session.outcome.par_diff == 0

    out = capsys.readouterr().out
    assert "✅" in out
    assert "❌ Italy doesn't border any country on your route" in out
    assert "💡 The optimal route needs 2 countries in between" in out
    assert "Portugal → Spain → ? → Germany" in out


def test_play_round_commands(session, capsys):
    play.play_round(session, read=scripted(":hint", "Spain", "Andorra", ":undo", ":giveup"))
    assert session.finished
    assert session.outcome.correct is False
    assert session.engine.current_path == ["Portugal", "Spain"]

    out = capsys.readouterr().out
    assert "💡 Hint 1/3: Try Spain" in out
    assert "↶ Removed Andorra" in out


def test_end_of_input_gives_up(session):
    play.play_round(session, read=scripted())
    assert session.finished
    assert session.outcome.correct is False


def test_report(session, capsys):
    play.play_round(session, read=scripted("Spain", "France"))
    play.report(session)
    out = capsys.readouterr().out
    assert "Steps: 2 (par 2, +0)" in out
    assert "Points: 7  Stars: 5" in out


def test_main_with_named_countries(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr("builtins.input", scripted("espana", "France"))
    drawing = tmp_path / "route.png"
    play.main(["--start", "portugal", "--end", "Deutschland", "--draw", str(drawing)])

    out = capsys.readouterr().out
    assert "Connect Portugal → Germany. Par: 2 countries." in out
    assert "Points:" in out
    assert drawing.exists()


def test_main_daily_saves_history(monkeypatch, capsys, tmp_path):
    history = tmp_path / "history.json"
    monkeypatch.setattr("builtins.input", scripted(":giveup"))
    play.main(["--daily", "2026-02-06", "--history", str(history)])

    saved = json.loads(history.read_text(encoding="utf-8"))
    assert saved["history"]["2026-02-06"]["stars"] == 0
    out = capsys.readouterr().out
    assert "#37" in out
    assert "gave up" in out

    play.main(["--daily", "2026-02-06", "--history", str(history)])
    assert "already completed" in capsys.readouterr().out


def test_main_passes_route_length_bounds(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", scripted(":giveup"))
    play.main(["--min-intermediates", "2", "--max-intermediates", "2"])
    assert "Par: 2 countries." in capsys.readouterr().out


def test_parse_args_route_length_defaults():
    args = play.parse_args([])
    assert (args.min_intermediates, args.max_intermediates) == (1, 8)


def test_main_reads_data_files_from_given_paths(monkeypatch, capsys, tmp_path, neighbors_file, aliases_file):
    neighbors = tmp_path / "borders.json"
    neighbors.write_text(neighbors_file.read_text(encoding="utf-8"), encoding="utf-8")
    aliases = tmp_path / "aliases.json"
    aliases.write_text(aliases_file.read_text(encoding="utf-8"), encoding="utf-8")

    monkeypatch.setattr("builtins.input", scripted(":giveup"))
    play.main([
        "--neighbors", str(neighbors),
        "--aliases", str(aliases),
        "--positions", str(tmp_path / "missing.json"),
        "--start", "Portugal",
        "--end", "Deutschland",
    ])
    assert "Connect Portugal → Germany" in capsys.readouterr().out
