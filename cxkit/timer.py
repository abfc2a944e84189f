"""Background timer that runs scheduled functions on its own thread."""

from __future__ import annotations

import math
import sys
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

NANOSECS_PER_SEC = 1_000_000_000

Timespec = Tuple[int, int]
TimerFunc = Callable[["Timer", Any], Any]


def ts_from_secs(secs: float) -> Timespec:
    """Split a number of seconds into (seconds, nanoseconds)."""
    frac, whole = math.modf(secs)
    return int(whole), int(frac * NANOSECS_PER_SEC)


def secs_from_ts(ts: Timespec) -> float:
    """Return the number of seconds held by a (seconds, nanoseconds) pair."""
    sec, nsec = ts
    return float(sec) + float(nsec) / NANOSECS_PER_SEC


def cmp_ts(t1: Timespec, t2: Timespec) -> int:
    """Compare two (seconds, nanoseconds) pairs, returning -1, 0 or 1."""
    if t1 < t2:
        return -1
    if t1 > t2:
        return 1
    return 0


@dataclass
class _Task:
    id: int
    due: float
    fn: TimerFunc
    arg: Any


class Timer:
    """Runs functions after a delay on a dedicated background thread.

    Tasks are kept ordered by due time; a task stays counted until its
    function has returned. Functions are called as ``fn(timer, arg)``
    and may schedule further tasks.
    """

    def __init__(self, userdata: Any = None) -> None:
        self.userdata = userdata
        self._cond = threading.Condition()
        self._tasks: List[_Task] = []
        self._next_id = 1
        self._closed = False
        self._thread = threading.Thread(target=self._run, name="timer", daemon=True)
        self._thread.start()

    def _remove(self, task_id: int) -> bool:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[index]
                return True
        return False

    def _run(self) -> None:
        with self._cond:
            while not self._closed:
                if not self._tasks:
                    self._cond.wait()
                    continue
                task = self._tasks[0]
                remaining = task.due - time.monotonic()
                if remaining > 0:
                    self._cond.wait(remaining)
                    continue
                self._cond.release()
                try:
                    task.fn(self, task.arg)
                except Exception:
                    sys.excepthook(*sys.exc_info())
                finally:
                    self._cond.acquire()
                self._remove(task.id)

    def set(
        self,
        delay: Union[float, int, Timespec],
        fn: TimerFunc,
        arg: Any = None,
    ) -> int:
        """Schedule ``fn(self, arg)`` after ``delay`` and return the task id.

        ``delay`` is a number of seconds or a (seconds, nanoseconds) pair.
        """
        secs = float(delay) if isinstance(delay, (int, float)) else secs_from_ts(delay)
        with self._cond:
            if self._closed:
                raise RuntimeError("timer is closed")
            task_id = self._next_id
            self._next_id += 1
            task = _Task(task_id, time.monotonic() + secs, fn, arg)
            for index, current in enumerate(self._tasks):
                if task.due <= current.due:
                    self._tasks.insert(index, task)
                    break
            else:
                self._tasks.append(task)
            self._cond.notify_all()
        return task_id

    def clear(self, task_id: int) -> bool:
        """Cancel the task with ``task_id``; return True if it was pending."""
        with self._cond:
            found = self._remove(task_id)
            self._cond.notify_all()
        return found

    def clear_all(self) -> None:
        """Cancel all pending tasks."""
        with self._cond:
            self._tasks.clear()
            self._cond.notify_all()

    def count(self) -> int:
        """Return the number of pending or running tasks."""
        with self._cond:
            return len(self._tasks)

    def close(self) -> None:
        """Stop the timer thread and wait for it to finish."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        if threading.current_thread() is not self._thread:
            self._thread.join()

    def __enter__(self) -> "Timer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()