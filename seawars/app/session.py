"""Game session orchestration over the battle rules."""

from __future__ import annotations

import logging
import random
import time
from collections.abc import Callable

from seawars.ai.random_target import RandomTargetPolicy
from seawars.ai.strategy import TargetingPolicy
from seawars.app.ports import (
    BattleView,
    BoardView,
    Notice,
    NoticeKind,
    NullPresentation,
    PresentationSurface,
    ResultSink,
)
from seawars.core.errors import NoTargetsError
from seawars.core.models import Coord, ShotResult, Side
from seawars.core.rules import Battle, CpuTurn, GameOver, PlayerTurn, create_battle, fire
from seawars.core.shot_resolution import ShotResolution
from seawars.engine.errors import log_recoverable
from seawars.engine.scheduler import Scheduler
from seawars.infra.config import GameSettings

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the current battle and drives the CPU through scheduled continuations.

    Every `new_game()` bumps the session generation; a CPU continuation that
    was scheduled for an older generation does nothing when it fires.
    """

    def __init__(
        self,
        *,
        rng: random.Random,
        scheduler: Scheduler,
        result_sink: ResultSink,
        presentation: PresentationSurface | None = None,
        policy: TargetingPolicy | None = None,
        settings: GameSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._rng = rng
        self._scheduler = scheduler
        self._result_sink = result_sink
        self._presentation = presentation or NullPresentation()
        self._policy = policy or RandomTargetPolicy(rng)
        self._settings = settings or GameSettings()
        self._clock = clock
        self._battle: Battle | None = None
        self._generation = 0
        self._started_at = 0.0
        self._pending_task: int | None = None
        self._result_recorded = False

    @property
    def battle(self) -> Battle | None:
        return self._battle

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def settings(self) -> GameSettings:
        return self._settings

    def new_game(self) -> Battle:
        """Replace any current game with a freshly placed one."""
        if self._pending_task is not None:
            self._scheduler.cancel(self._pending_task)
            self._pending_task = None
        self._generation += 1
        self._battle = create_battle(self._rng)
        self._started_at = self._clock()
        self._result_recorded = False
        logger.info("new_game generation=%d", self._generation)
        self._presentation.notify(
            Notice(NoticeKind.INFO, "New game", "Ships are placed. Your turn!")
        )
        self._render()
        return self._battle

    def player_fire(self, coord: Coord) -> ShotResult | None:
        """Fire at the CPU board; returns None when the player may not fire now."""
        battle = self._battle
        if battle is None or not isinstance(battle.turn, PlayerTurn):
            logger.debug("player_fire_rejected coord=%s", coord)
            return None

        updated, resolution = fire(battle, Side.PLAYER, coord)
        if resolution.result is ShotResult.REPEAT:
            return resolution.result

        self._battle = updated
        self._announce_player_shot(coord, resolution)
        self._after_shot()
        return resolution.result

    def view(self) -> BattleView | None:
        """Build a snapshot for the presentation surface."""
        battle = self._battle
        if battle is None:
            return None
        if isinstance(battle.turn, PlayerTurn):
            targetable = frozenset(battle.cpu_board.unfired_cells())
        else:
            targetable = frozenset()
        return BattleView(
            player=BoardView(owner=Side.PLAYER, board=battle.player_board, reveal_ships=True),
            cpu=BoardView(owner=Side.CPU, board=battle.cpu_board, reveal_ships=battle.is_over),
            turn=battle.turn,
            outcome=battle.outcome,
            player_ships_remaining=battle.player_fleet.remaining(),
            cpu_ships_remaining=battle.cpu_fleet.remaining(),
            player_shots=battle.player_shots,
            cpu_shots=battle.cpu_shots,
            targetable=targetable,
        )

    def _after_shot(self) -> None:
        battle = self._battle
        if battle is None:
            return
        if isinstance(battle.turn, GameOver):
            self._finish(battle.turn.winner)
        elif isinstance(battle.turn, CpuTurn):
            self._schedule_cpu_step()
        self._render()

    def _schedule_cpu_step(self) -> None:
        generation = self._generation
        self._pending_task = self._scheduler.call_later(
            self._settings.cpu_shot_delay, lambda: self._cpu_step(generation)
        )

    def _cpu_step(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("cpu_step_stale generation=%d current=%d", generation, self._generation)
            return
        self._pending_task = None
        battle = self._battle
        if battle is None or not isinstance(battle.turn, CpuTurn):
            return

        try:
            coord = self._policy.select_target(battle.player_board)
        except NoTargetsError:
            logger.error("cpu_no_targets generation=%d", generation)
            return

        updated, resolution = fire(battle, Side.CPU, coord)
        if resolution.result is ShotResult.REPEAT:
            logger.warning("cpu_repeat_target coord=%s", coord.label)
            self._schedule_cpu_step()
            return

        self._battle = updated
        self._announce_cpu_shot(coord, resolution)
        self._after_shot()

    def _finish(self, winner: Side) -> None:
        battle = self._battle
        if battle is None or self._result_recorded:
            return
        self._result_recorded = True
        duration = max(0, int(self._clock() - self._started_at))
        logger.info(
            "game_over winner=%s player_shots=%d cpu_shots=%d duration=%d",
            winner.value,
            battle.player_shots,
            battle.cpu_shots,
            duration,
        )
        if winner is Side.PLAYER:
            self._presentation.notify(
                Notice(NoticeKind.SUCCESS, "Victory", "You sank every enemy ship!")
            )
        else:
            self._presentation.notify(
                Notice(NoticeKind.ERROR, "Defeat", "The enemy sank all of your ships.")
            )

        try:
            self._result_sink.record_result(
                winner=winner,
                player_shots=battle.player_shots,
                cpu_shots=battle.cpu_shots,
                duration_seconds=duration,
                player_name=self._settings.player_name,
            )
        except Exception:  # pylint: disable=broad-exception-caught
            log_recoverable(logger, "result_record_failed", level=logging.ERROR)
            self._presentation.notify(
                Notice(NoticeKind.ERROR, "Error", "Could not save the game result.")
            )
            return
        self._presentation.notify(
            Notice(NoticeKind.SUCCESS, "Saved", "The game result was recorded.")
        )

    def _announce_player_shot(self, coord: Coord, resolution: ShotResolution) -> None:
        if resolution.result is ShotResult.HIT:
            notice = Notice(NoticeKind.INFO, "Hit", f"{coord.label}: good shot!")
        elif resolution.result is ShotResult.SUNK:
            notice = Notice(NoticeKind.SUCCESS, "Ship sunk", f"{coord.label}: keep going.")
        else:
            notice = Notice(NoticeKind.INFO, "Miss", f"{coord.label}: water.")
        self._presentation.notify(notice)

    def _announce_cpu_shot(self, coord: Coord, resolution: ShotResolution) -> None:
        if resolution.result in (ShotResult.HIT, ShotResult.SUNK):
            self._presentation.notify(
                Notice(NoticeKind.ERROR, "Enemy hit", f"{coord.label}: your ship was hit.")
            )

    def _render(self) -> None:
        view = self.view()
        if view is not None:
            self._presentation.render(view)
