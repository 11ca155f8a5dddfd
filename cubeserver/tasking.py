"""Scheduling of repeating and delayed tasks, driven by a millisecond clock."""

from __future__ import annotations

import itertools
import threading
import time
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional

from cubeserver.funcs import attempt

TaskFunction = Callable[["Task"], Any]


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _milliseconds(unit: timedelta) -> int:
    return unit // timedelta(milliseconds=1)


class Task:
    """A scheduled function; it receives the task itself when run."""

    def __init__(
        self,
        tasker: "Tasking",
        uuid: int,
        function: TaskFunction,
        period: int,
        paused: int,
    ) -> None:
        self.tasker = tasker
        self.uuid = uuid
        self.function = function
        self.period = period
        self.paused = paused
        self.cancelled = False

    def cancel(self) -> None:
        """Stop the task from running again."""
        self.cancelled = True

    def _run(self):
        return attempt(lambda: self.function(self))


class Tasking:
    """Runs tasks when their time comes; periods and delays are in milliseconds."""

    def __init__(self, mpt: int) -> None:
        self.mpt = mpt
        self._lock = threading.RLock()
        self._tasks: Dict[int, Task] = {}
        self._ticks: Dict[Task, int] = {}
        self._queue: Dict[int, List[Task]] = {}
        self._ids = itertools.count(1)
        self._done = False
        self._stop: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    def load(self) -> None:
        """Start a background thread that processes tasks every millisecond."""
        stop = threading.Event()
        with self._lock:
            self._done = False
            self._stop = stop
        self._thread = threading.Thread(target=self._loop, args=(stop,), daemon=True)
        self._thread.start()

    def kill(self) -> None:
        """Stop processing, forget every task and cancel them all."""
        with self._lock:
            if self._done:
                return
            self._done = True
            if self._stop is not None:
                self._stop.set()
            self._ticks.clear()
            self._queue.clear()
            tasks = list(self._tasks.values())
            self._tasks.clear()
        for task in tasks:
            task.cancel()

    def _loop(self, stop: threading.Event) -> None:
        while not stop.wait(0.001):
            self.process(_now_ms())

    def process(self, now_ms: int) -> None:
        """Move due delayed tasks to the run list, then run every task that is due."""
        with self._lock:
            self._process_queue(now_ms)
            self._process_ticks(now_ms)

    def _process_queue(self, now_ms: int) -> None:
        for when in [when for when in self._queue if now_ms >= when]:
            for task in self._queue.pop(when, ()):
                self._ticks[task] = 0

    def _process_ticks(self, now_ms: int) -> None:
        for task, last in list(self._ticks.items()):
            if task not in self._ticks:
                continue
            if now_ms - last < task.period:
                continue

            error = task._run()
            if error is not None:
                task.cancel()
                print(error)

            if task.cancelled or task.period <= 0:
                self._ticks.pop(task, None)
            else:
                self._ticks[task] = now_ms

    def _new_task(self, period: int, paused: int, function: TaskFunction) -> Task:
        return Task(self, next(self._ids), function, period, paused)

    def _repeats(self, period: int, function: TaskFunction) -> Task:
        task = self._new_task(period, 0, function)
        with self._lock:
            self._ticks[task] = 0
            self._tasks[task.uuid] = task
        return task

    def _delayed(self, paused: int, function: TaskFunction) -> Task:
        task = self._new_task(0, paused, function)
        when = _now_ms() + paused
        with self._lock:
            self._queue.setdefault(when, []).append(task)
            self._tasks[task.uuid] = task
        return task

    def every(self, period: int, function: TaskFunction) -> Task:
        """Run ``function`` every ``period`` ticks."""
        return self._repeats(period * self.mpt, function)

    def after(self, paused: int, function: TaskFunction) -> Task:
        """Run ``function`` once, ``paused`` ticks from now."""
        return self._delayed(paused * self.mpt, function)

    def every_time(self, period: int, unit: timedelta, function: TaskFunction) -> Task:
        """Run ``function`` every ``period`` units of time."""
        return self._repeats(period * _milliseconds(unit), function)

    def after_time(self, paused: int, unit: timedelta, function: TaskFunction) -> Task:
        """Run ``function`` once, ``paused`` units of time from now."""
        return self._delayed(paused * _milliseconds(unit), function)