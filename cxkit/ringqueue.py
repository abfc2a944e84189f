"""Growable FIFO queue stored in a circular buffer."""

from __future__ import annotations

from typing import Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


class RingQueue(Generic[T]):
    """First-in first-out queue backed by a circular buffer.

    The buffer starts at the requested capacity and doubles whenever
    there is not enough free room for the elements being put.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._buf: List[Optional[T]] = [None] * capacity
        self._len = 0
        self._in = 0
        self._out = 0

    def __len__(self) -> int:
        return self._len

    def __repr__(self) -> str:
        return f"RingQueue({self._snapshot()!r})"

    def _snapshot(self) -> List[T]:
        cap = len(self._buf)
        end = self._out + self._len
        if end <= cap:
            items = self._buf[self._out:end]
        else:
            items = self._buf[self._out:] + self._buf[: end - cap]
        return items  # type: ignore[return-value]

    def _grow(self, needed: int) -> None:
        new_cap = len(self._buf)
        while new_cap - self._len < needed:
            new_cap *= 2
        items = self._snapshot()
        self._buf = list(items) + [None] * (new_cap - len(items))
        self._out = 0
        self._in = self._len % new_cap

    def capacity(self) -> int:
        """Return the capacity in elements."""
        return len(self._buf)

    def empty(self) -> bool:
        """Return True if the queue holds no elements."""
        return self._len == 0

    def put(self, value: T) -> None:
        """Put one element at the input end of the queue."""
        self.put_many([value])

    def put_many(self, values: Iterable[T]) -> None:
        """Put all ``values`` at the input end of the queue, in order."""
        values = list(values)
        n = len(values)
        if n == 0:
            return
        if len(self._buf) - self._len < n:
            self._grow(n)
        cap = len(self._buf)
        space = cap - self._in
        head, tail = values[:space], values[space:]
        self._buf[self._in:self._in + len(head)] = head
        self._buf[: len(tail)] = tail
        self._in = (self._in + n) % cap
        self._len += n

    def get(self) -> T:
        """Remove and return the oldest element."""
        items = self.get_many(1)
        if not items:
            raise IndexError("queue empty")
        return items[0]

    def get_many(self, n: int) -> List[T]:
        """Remove and return up to ``n`` of the oldest elements."""
        if n < 0:
            raise ValueError("count must not be negative")
        n = min(n, self._len)
        if n == 0:
            return []
        cap = len(self._buf)
        space = cap - self._out
        if n <= space:
            items = self._buf[self._out:self._out + n]
            self._buf[self._out:self._out + n] = [None] * n
        else:
            items = self._buf[self._out:] + self._buf[: n - space]
            self._buf[self._out:] = [None] * space
            self._buf[: n - space] = [None] * (n - space)
        self._out = (self._out + n) % cap
        self._len -= n
        return items  # type: ignore[return-value]

    def clear(self) -> None:
        """Remove all elements, keeping the capacity."""
        self._buf = [None] * len(self._buf)
        self._len = 0
        self._in = 0
        self._out = 0