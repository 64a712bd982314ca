"""
Scheduling module for timed game behavior.

The battle engine and Summit Mode never touch timers directly. They receive
a Scheduler and ask it for one-shot callbacks (pacing pause, wall collapse)
or repeating callbacks (Summit Mode rounds). Every request returns a
TaskHandle, and cancelling the handle is the only cancellation primitive.

ManualScheduler drives a virtual clock, which lets tests and the terminal
driver step time explicitly. AsyncioScheduler hands the same requests to a
running asyncio event loop.
"""

import asyncio
import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class TaskHandle:
    """
    Handle to a scheduled callback.

    Attributes:
        callback (Callable[[], Any]):
            The function invoked when the task fires.
        interval (float | None):
            Repeat interval in seconds, None for one-shot tasks.
        due (float):
            Next firing time on the owning scheduler's clock.

    """

    def __init__(
        self,
        callback: Callable[[], Any],
        due: float,
        interval: float | None = None,
    ) -> None:
        self.callback = callback
        self.due = due
        self.interval = interval
        self._cancelled = False
        self._finished = False
        self._timer: asyncio.TimerHandle | None = None

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        """True while the task may still fire."""
        return not self._cancelled and not self._finished

    def cancel(self) -> None:
        """Stop the task. Safe to call repeatedly, also from its own callback."""
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _finish(self) -> None:
        self._finished = True
        self._timer = None


class Scheduler(ABC):
    """Interface of the timing collaborators used by the combat core."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], Any]) -> TaskHandle:
        """Run callback once, delay seconds from now."""

    @abstractmethod
    def call_every(self, interval: float, callback: Callable[[], Any]) -> TaskHandle:
        """Run callback every interval seconds until the handle is cancelled."""


class ManualScheduler(Scheduler):
    """
    Scheduler with a virtual clock that only moves when advance() is called.

    Tasks due at the same instant fire in the order they were scheduled.
    When a sleep function is given (e.g. time.sleep), advancing the clock
    also waits the matching real time, which paces the terminal driver.
    """

    def __init__(self, sleep: Callable[[float], Any] | None = None) -> None:
        self.now: float = 0.0
        self._sleep = sleep
        self._tasks: list[tuple[int, TaskHandle]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TaskHandle:
        handle = TaskHandle(callback, self.now + max(delay, 0.0))
        self._tasks.append((next(self._counter), handle))
        return handle

    def call_every(self, interval: float, callback: Callable[[], Any]) -> TaskHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        handle = TaskHandle(callback, self.now + interval, interval)
        self._tasks.append((next(self._counter), handle))
        return handle

    @property
    def pending(self) -> list[TaskHandle]:
        """Active tasks, in firing order."""
        self._prune()
        return [handle for _, handle in sorted(self._tasks, key=self._order)]

    def has_pending_one_shots(self) -> bool:
        return any(not handle.repeating for handle in self.pending)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, firing every task that falls due.

        Args:
            seconds (float):
                How far to move the clock.

        Returns:
            int:
                The number of callbacks that fired.

        """
        target = self.now + max(seconds, 0.0)
        fired = 0
        while True:
            task = self._next_due(target)
            if task is None:
                break
            self._wait(task.due - self.now)
            self.now = max(self.now, task.due)
            self._fire(task)
            fired += 1
        self._wait(target - self.now)
        self.now = target
        return fired

    def run_pending(self) -> int:
        """Fire the tasks that are already due, without moving the clock."""
        return self.advance(0.0)

    def settle(self, max_steps: int = 10_000) -> int:
        """
        Advance until no one-shot task is left.

        Repeating tasks keep firing along the way if they fall due first.

        Returns:
            int:
                The number of callbacks that fired.

        """
        fired = 0
        for _ in range(max_steps):
            one_shots = [h for h in self.pending if not h.repeating]
            if not one_shots:
                return fired
            fired += self.advance(min(h.due for h in one_shots) - self.now)
        raise RuntimeError("ManualScheduler.settle() did not converge.")

    def _order(self, entry: tuple[int, TaskHandle]) -> tuple[float, int]:
        sequence, handle = entry
        return handle.due, sequence

    def _prune(self) -> None:
        self._tasks = [entry for entry in self._tasks if entry[1].active]

    def _next_due(self, target: float) -> TaskHandle | None:
        self._prune()
        due = [entry for entry in self._tasks if entry[1].due <= target]
        if not due:
            return None
        entry = min(due, key=self._order)
        self._tasks.remove(entry)
        return entry[1]

    def _fire(self, task: TaskHandle) -> None:
        if task.repeating:
            assert task.interval is not None
            task.due += task.interval
            self._tasks.append((next(self._counter), task))
        else:
            task._finish()
        task.callback()

    def _wait(self, seconds: float) -> None:
        if self._sleep is not None and seconds > 0:
            self._sleep(seconds)


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callable[[], Any]) -> TaskHandle:
        loop = self.loop
        handle = TaskHandle(callback, loop.time() + delay)

        def run() -> None:
            handle._finish()
            callback()

        handle._timer = loop.call_later(delay, run)
        return handle

    def call_every(self, interval: float, callback: Callable[[], Any]) -> TaskHandle:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        loop = self.loop
        handle = TaskHandle(callback, loop.time() + interval, interval)

        def run() -> None:
            if not handle.active:
                return
            handle.due += interval
            handle._timer = loop.call_at(handle.due, run)
            callback()

        handle._timer = loop.call_at(handle.due, run)
        return handle
