"""Cooperative deferred-task queue with a virtual clock."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from heapq import heappop, heappush

TaskCallback = Callable[[], None]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Task:
    task_id: int
    due_seconds: float
    callback: TaskCallback
    cancelled: bool = False


class Scheduler:
    """Single-threaded scheduler for delayed continuations.

    Nothing runs on its own: the host advances the clock and due callbacks
    execute in due-time order (ties in scheduling order).
    """

    def __init__(self) -> None:
        self._now_seconds = 0.0
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}
        self._queue: list[tuple[float, int]] = []

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def pending_count(self) -> int:
        """Return count of active queued tasks."""
        return sum(1 for task in self._tasks.values() if not task.cancelled)

    @property
    def next_due_seconds(self) -> float | None:
        """Return due time of the earliest active task, if any."""
        due = [task.due_seconds for task in self._tasks.values() if not task.cancelled]
        return min(due) if due else None

    def call_later(self, delay_seconds: float, callback: TaskCallback) -> int:
        """Schedule a one-shot callback after delay."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        task_id = self._next_task_id
        self._next_task_id += 1
        task = _Task(task_id=task_id, due_seconds=self._now_seconds + delay_seconds, callback=callback)
        self._tasks[task_id] = task
        heappush(self._queue, (task.due_seconds, task_id))
        return task_id

    def cancel(self, task_id: int) -> None:
        """Cancel a scheduled task if it exists."""
        task = self._tasks.get(task_id)
        if task is not None:
            task.cancelled = True

    def advance(self, delta_seconds: float) -> int:
        """Advance scheduler clock and run due callbacks."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Run callbacks due at or before `now_seconds`."""
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        executed = 0
        while self._queue and self._queue[0][0] <= now_seconds:
            due_seconds, task_id = heappop(self._queue)
            task = self._tasks.pop(task_id, None)
            if task is None or task.cancelled:
                continue
            # Continuations scheduled from a callback are relative to its due time.
            self._now_seconds = max(self._now_seconds, due_seconds)
            task.callback()
            executed += 1
        self._now_seconds = now_seconds
        if executed:
            logger.debug("scheduler_run executed=%d now=%.3f", executed, now_seconds)
        return executed

    def run_until_idle(self, *, max_tasks: int = 10_000) -> int:
        """Jump the clock forward until no tasks remain."""
        executed = 0
        while executed < max_tasks:
            due = self.next_due_seconds
            if due is None:
                break
            executed += self.run_due(max(due, self._now_seconds))
        return executed
