"""Growable array with explicit capacity management and element release hooks."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

T = TypeVar("T")

_MIN_CAPACITY = 4


class DynArray(Generic[T]):
    """Dynamic array that tracks a capacity separately from its length.

    Capacity grows by doubling, starting from at least four elements.
    An optional ``free_el`` callable is invoked on every element that is
    removed or overwritten by ``clear``, ``free``, ``delete``,
    ``delete_swap`` and item assignment.
    """

    def __init__(
        self,
        items: Optional[Iterable[T]] = None,
        free_el: Optional[Callable[[T], Any]] = None,
    ) -> None:
        self._data: List[T] = []
        self._cap = 0
        self._free_el = free_el
        if items is not None:
            self.push_many(items)

    def _grow(self, add_len: int, min_cap: int) -> None:
        min_len = len(self._data) + add_len
        if min_len > min_cap:
            min_cap = min_len
        if min_cap <= self._cap:
            return
        if min_cap < 2 * self._cap:
            min_cap = 2 * self._cap
        elif min_cap < _MIN_CAPACITY:
            min_cap = _MIN_CAPACITY
        self._cap = min_cap

    def _release(self, value: T) -> None:
        if self._free_el is not None:
            self._free_el(value)

    def _normalize(self, index: int) -> int:
        if not isinstance(index, int):
            raise TypeError(f"array index must be int, not {type(index).__name__}")
        size = len(self._data)
        if index < 0:
            index += size
        if not 0 <= index < size:
            raise IndexError("invalid index")
        return index

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._data))

    def __getitem__(self, index: int) -> T:
        return self._data[self._normalize(index)]

    def __setitem__(self, index: int, value: T) -> None:
        index = self._normalize(index)
        self._release(self._data[index])
        self._data[index] = value

    def __repr__(self) -> str:
        return f"DynArray({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DynArray):
            return self._data == other._data
        if isinstance(other, list):
            return self._data == other
        return NotImplemented

    def capacity(self) -> int:
        """Return the current capacity in elements."""
        return self._cap

    def empty(self) -> bool:
        """Return True if the array holds no elements."""
        return not self._data

    def set_capacity(self, cap: int) -> None:
        """Ensure the capacity is at least ``cap``."""
        if cap < 0:
            raise ValueError("capacity must not be negative")
        self._grow(0, cap)

    def set_length(self, length: int, fill: Optional[T] = None) -> None:
        """Set the length, padding new slots with ``fill`` or truncating."""
        if length < 0:
            raise ValueError("length must not be negative")
        if self._cap < length:
            self._grow(length, 0)
        current = len(self._data)
        if length < current:
            del self._data[length:]
        else:
            self._data.extend([fill] * (length - current))  # type: ignore[list-item]

    def push(self, value: T) -> None:
        """Append one element."""
        if len(self._data) >= self._cap:
            self._grow(1, 0)
        self._data.append(value)

    def push_many(self, values: Iterable[T]) -> None:
        """Append every element of ``values``."""
        values = list(values)
        if len(self._data) + len(values) > self._cap:
            self._grow(len(values), 0)
        self._data.extend(values)

    def pop(self) -> T:
        """Remove and return the last element."""
        if not self._data:
            raise IndexError("array empty")
        return self._data.pop()

    def last(self) -> T:
        """Return the last element without removing it."""
        if not self._data:
            raise IndexError("array empty")
        return self._data[-1]

    def reserve(self, n: int) -> None:
        """Ensure room for at least ``n`` more elements."""
        if n < 0:
            raise ValueError("reserve count must not be negative")
        if len(self._data) + n > self._cap:
            self._grow(n, 0)

    def insert(self, index: int, value: T) -> None:
        """Insert ``value`` before position ``index``."""
        self.insert_many(index, [value])

    def insert_many(self, index: int, values: Iterable[T]) -> None:
        """Insert all ``values`` before position ``index``."""
        if not 0 <= index <= len(self._data):
            raise IndexError("invalid index")
        values = list(values)
        if len(self._data) + len(values) > self._cap:
            self._grow(len(values), 0)
        self._data[index:index] = values

    def delete(self, index: int, count: int = 1) -> None:
        """Delete up to ``count`` elements starting at ``index``."""
        if not 0 <= index < len(self._data):
            raise IndexError("invalid index")
        if count < 0:
            raise ValueError("count must not be negative")
        end = min(index + count, len(self._data))
        for value in self._data[index:end]:
            self._release(value)
        del self._data[index:end]

    def delete_swap(self, index: int) -> None:
        """Delete the element at ``index`` by moving the last element into it."""
        if not 0 <= index < len(self._data):
            raise IndexError("invalid index")
        self._release(self._data[index])
        self._data[index] = self._data[-1]
        self._data.pop()

    def sort(self, key: Optional[Callable[[T], Any]] = None, reverse: bool = False) -> None:
        """Sort the elements in place."""
        self._data.sort(key=key, reverse=reverse)

    def find(self, value: T) -> int:
        """Return the index of the first element equal to ``value`` or -1."""
        for index, item in enumerate(self._data):
            if item == value:
                return index
        return -1

    def clear(self) -> None:
        """Remove all elements, keeping the capacity."""
        for value in self._data:
            self._release(value)
        self._data.clear()

    def free(self) -> None:
        """Remove all elements and drop the capacity to zero."""
        self.clear()
        self._cap = 0

    def copy(self) -> "DynArray[T]":
        """Return a shallow copy with the same capacity and release hook."""
        clone: DynArray[T] = DynArray(free_el=self._free_el)
        clone._data = list(self._data)
        clone._cap = self._cap
        return clone