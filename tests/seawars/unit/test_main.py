import io
import logging
import random

import pytest

from seawars.app.session import GameSession
from seawars.engine.scheduler import Scheduler
from seawars.infra.config import GameSettings
from seawars.main import apply_cli_overrides, build_parser, drain_scheduler, main, run_console
from seawars.results.repository import ResultRepository
from seawars.results.service import ResultService
from seawars.ui.text_view import TextPresentation


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def test_drain_scheduler_sleeps_through_delays() -> None:
    scheduler = Scheduler()
    calls: list[str] = []
    slept: list[float] = []
    scheduler.call_later(0.7, lambda: calls.append("cpu"))
    drain_scheduler(scheduler, sleep=slept.append)
    assert calls == ["cpu"]
    assert slept == [0.7]


def test_run_console_handles_commands(tmp_path) -> None:
    stdout = io.StringIO()
    scheduler = Scheduler()
    results = ResultService(ResultRepository(tmp_path / "results.jsonl"))
    session = GameSession(
        rng=random.Random(3),
        scheduler=scheduler,
        result_sink=results,
        presentation=TextPresentation(stdout),
        settings=GameSettings(cpu_shot_delay=0.0),
    )
    stdin = io.StringIO("help\n9Z\nA1\nstats\nnew\nquit\nB2\n")
    run_console(session, scheduler, results, stdin=stdin, stdout=stdout, sleep=lambda _: None)

    output = stdout.getvalue()
    assert "[info] New game: Ships are placed. Your turn!" in output
    assert "Enter a target such as B7" in output
    assert "Malformed coordinate" in output
    assert "Games: 0" in output
    assert output.count("New game:") == 2
    assert session.battle is not None
    assert session.battle.player_shots == 0
    assert scheduler.pending_count == 0


def test_build_parser_options() -> None:
    args = build_parser().parse_args(["--name", "Ani", "--seed", "9", "--stats"])
    assert args.name == "Ani"
    assert args.seed == 9
    assert args.stats


@pytest.mark.parametrize(("name", "expected"), [(None, "Env"), ("   ", "Env"), (" Ani ", "Ani")])
def test_cli_name_override_ignores_blank_names(name, expected) -> None:
    settings = apply_cli_overrides(GameSettings(player_name="Env", cpu_shot_delay=0.3), name=name)
    assert settings.player_name == expected
    assert settings.cpu_shot_delay == 0.3


def test_main_stats_prints_summary(tmp_path, monkeypatch, capsys, restore_root_logging) -> None:
    monkeypatch.setenv("SEAWARS_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.delenv("SEAWARS_LOG_DIR", raising=False)
    monkeypatch.delenv("SEAWARS_RESULTS_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    assert main(["--stats"]) == 0
    assert "Games: 0" in capsys.readouterr().out
    assert (tmp_path / "appdata" / "logs").is_dir()
