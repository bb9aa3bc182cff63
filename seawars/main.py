"""Console entry point."""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from collections.abc import Sequence
from dataclasses import replace
from typing import TextIO

from seawars.app.session import GameSession
from seawars.core.models import parse_coord
from seawars.engine.logging import shutdown_logging
from seawars.engine.scheduler import Scheduler
from seawars.infra.app_data import ensure_app_data_dirs
from seawars.infra.config import GameSettings, load_default_env_files
from seawars.infra.logging import setup_logging
from seawars.results.repository import ResultRepository
from seawars.results.service import ResultService
from seawars.ui.text_view import TextPresentation, render_leaderboard

logger = logging.getLogger(__name__)

HELP_TEXT = "Enter a target such as B7, or: new, stats, help, quit."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="seawars", description="Sea battle against the computer.")
    parser.add_argument("--name", help="Player name stored with results.")
    parser.add_argument("--seed", type=int, help="Seed for fleet placement and CPU targeting.")
    parser.add_argument("--stats", action="store_true", help="Print recent results and exit.")
    return parser


def apply_cli_overrides(settings: GameSettings, *, name: str | None) -> GameSettings:
    """Apply `--name`; a blank name keeps the configured one."""
    if name is None or not name.strip():
        return settings
    return replace(settings, player_name=name.strip())


def drain_scheduler(scheduler: Scheduler, *, sleep=time.sleep) -> None:
    """Run pending continuations, sleeping through their delays."""
    while True:
        due = scheduler.next_due_seconds
        if due is None:
            return
        sleep(max(0.0, due - scheduler.now_seconds))
        scheduler.run_due(max(due, scheduler.now_seconds))


def run_console(
    session: GameSession,
    scheduler: Scheduler,
    results: ResultService,
    *,
    stdin: TextIO,
    stdout: TextIO,
    sleep=time.sleep,
) -> None:
    """Read commands until quit or end of input."""
    session.new_game()
    stdout.write(HELP_TEXT + "\n")
    for raw_line in stdin:
        command = raw_line.strip()
        if not command:
            continue
        lowered = command.lower()
        if lowered in {"quit", "exit", "q"}:
            return
        if lowered == "new":
            session.new_game()
            continue
        if lowered == "stats":
            stdout.write(render_leaderboard(results.summary(), results.recent()) + "\n")
            continue
        if lowered == "help":
            stdout.write(HELP_TEXT + "\n")
            continue
        try:
            coord = parse_coord(command)
        except ValueError as exc:
            stdout.write(f"{exc}\n")
            continue
        if session.player_fire(coord) is None:
            stdout.write("Wait for your turn or start a new game.\n")
            continue
        drain_scheduler(scheduler, sleep=sleep)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SeaWars console game."""
    args = build_parser().parse_args(argv)
    load_default_env_files()
    paths = ensure_app_data_dirs()
    setup_logging()
    logger.info("app_data_paths root=%s logs=%s results=%s", paths["root"], paths["logs"], paths["results"])

    results = ResultService(ResultRepository(paths["results"]))
    if args.stats:
        sys.stdout.write(render_leaderboard(results.summary(), results.recent()) + "\n")
        shutdown_logging()
        return 0

    settings = apply_cli_overrides(GameSettings.from_env(), name=args.name)
    seed = args.seed if args.seed is not None else settings.seed
    scheduler = Scheduler()
    session = GameSession(
        rng=random.Random(seed),
        scheduler=scheduler,
        result_sink=results,
        presentation=TextPresentation(sys.stdout),
        settings=settings,
    )
    try:
        run_console(session, scheduler, results, stdin=sys.stdin, stdout=sys.stdout)
    except KeyboardInterrupt:
        logger.info("interrupted")
    finally:
        shutdown_logging()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
