"""Fixed-size pool of worker threads fed by a bounded work queue."""

from __future__ import annotations

import sys
import threading
from collections import deque
from typing import Any, Callable, Deque, List, Tuple


class PoolClosedError(RuntimeError):
    """Raised when work is submitted to a closed pool."""


class ThreadPool:
    """Runs submitted work functions on a fixed number of threads.

    Work waits in a queue of at most ``wsize`` entries; submitting to a
    full queue blocks until a worker takes an entry. Closing the pool
    lets the workers finish all queued work and then joins them.
    """

    def __init__(self, nthreads: int, wsize: int) -> None:
        if nthreads < 1:
            raise ValueError("number of threads must be positive")
        if wsize < 1:
            raise ValueError("work queue size must be positive")
        self._wsize = wsize
        self._work: Deque[Tuple[Callable[[Any], Any], Any]] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._threads: List[threading.Thread] = [
            threading.Thread(target=self._worker, name=f"tpool-{i}", daemon=True)
            for i in range(nthreads)
        ]
        for thread in self._threads:
            thread.start()

    def _worker(self) -> None:
        while True:
            with self._cond:
                while not self._work and not self._closed:
                    self._cond.wait()
                if not self._work:
                    return
                fn, param = self._work.popleft()
                self._cond.notify_all()
            try:
                fn(param)
            except Exception:
                sys.excepthook(*sys.exc_info())

    def run(self, worker: Callable[[Any], Any], param: Any = None) -> None:
        """Queue ``worker(param)`` to run on a pool thread."""
        with self._cond:
            while len(self._work) >= self._wsize and not self._closed:
                self._cond.wait()
            if self._closed:
                raise PoolClosedError("thread pool is closed")
            self._work.append((worker, param))
            self._cond.notify_all()

    def work_len(self) -> int:
        """Return the number of queued, not yet started, work items."""
        with self._cond:
            return len(self._work)

    def close(self) -> None:
        """Stop accepting work, drain the queue and join the threads."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        current = threading.current_thread()
        for thread in self._threads:
            if thread is not current:
                thread.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()