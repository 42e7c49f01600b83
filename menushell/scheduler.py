"""Schedulers that run posted tasks on the thread that drives them."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Optional

Task = Callable[[], object]


class Scheduler(ABC):
    """Something that accepts tasks to run later, on its own thread."""

    @abstractmethod
    def post(self, task: Optional[Task]) -> None:
        """Queue ``task`` for execution; safe to call from any thread."""


class LoopScheduler(Scheduler):
    """A simple thread-safe scheduler running tasks in the order they were posted."""

    def __init__(self) -> None:
        self._tasks: deque[Optional[Task]] = deque()
        self._running = True
        self._cond = threading.Condition()

    def stop(self) -> None:
        """Stop the scheduler, waking any thread waiting in :meth:`exec_one`."""
        with self._cond:
            self._running = False
            self._cond.notify_all()

    def run(self) -> None:
        """Execute tasks until :meth:`stop` is called."""
        while self.exec_one():
            pass

    def stopped(self) -> bool:
        with self._cond:
            return not self._running

    def post(self, task: Optional[Task]) -> None:
        with self._cond:
            self._tasks.append(task)
            self._cond.notify_all()

    def exec_one(self) -> bool:
        """Wait for a task and run it; return False once the scheduler is stopped."""
        with self._cond:
            self._cond.wait_for(lambda: not self._running or bool(self._tasks))
            if not self._running:
                return False
            task = self._tasks.popleft()
        if task is not None:
            task()
        return True

    def poll_one(self) -> bool:
        """Run a task if one is ready; return whether one was run."""
        with self._cond:
            if not self._running or not self._tasks:
                return False
            task = self._tasks.popleft()
        if task is not None:
            task()
        return True