"""Open-addressing hash map with linear probing and FNV-1a hashing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple

DEFAULT_NBUCKETS = 17
RESIZE_LOAD = 0.8

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_EMPTY = 0
_FULL = 1
_DELETED = 2


def fnv1a32(data: bytes) -> int:
    """Return the 32-bit FNV-1a hash of ``data``."""
    h = _FNV_OFFSET
    for byte in bytes(data):
        h ^= byte
        h = (h * _FNV_PRIME) & _MASK32
    return h


def _default_hash(key: Any) -> int:
    if isinstance(key, (bytes, bytearray, memoryview)):
        data = bytes(key)
    elif isinstance(key, str):
        data = key.encode("utf-8")
    else:
        data = (hash(key) & _MASK64).to_bytes(8, "little")
    return fnv1a32(data)


@dataclass
class MapStats:
    """Bucket usage and probing statistics of a map."""

    nbuckets: int
    count: int
    deleted: int
    empty: int
    probes: int
    max_probe: int
    min_probe: int
    avg_probe: float
    load_factor: float

    def __str__(self) -> str:
        return (
            f"nbuckets...: {self.nbuckets}\n"
            f"count......: {self.count}\n"
            f"deleted....: {self.deleted}\n"
            f"empty......: {self.empty}\n"
            f"probes.....: {self.probes}\n"
            f"max_probe..: {self.max_probe}\n"
            f"min_probe..: {self.min_probe}\n"
            f"avg_probe..: {self.avg_probe:.2f}\n"
            f"load_factor: {self.load_factor:.2f}\n"
        )


class HashMap:
    """Hash map using open addressing with linear probing.

    The table doubles when the number of used plus deleted buckets
    reaches 80 % of the bucket count. Optional ``free_key`` and
    ``free_val`` callables are invoked on entries that are deleted,
    cleared or freed.
    """

    def __init__(
        self,
        nbuckets: int = 0,
        hash_fn: Optional[Callable[[Any], int]] = None,
        free_key: Optional[Callable[[Any], Any]] = None,
        free_val: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        if nbuckets < 0:
            raise ValueError("number of buckets must not be negative")
        self._nbuckets = nbuckets or DEFAULT_NBUCKETS
        self._hash_fn = hash_fn or _default_hash
        self._free_key = free_key
        self._free_val = free_val
        self._count = 0
        self._deleted = 0
        self._status: Optional[bytearray] = None
        self._keys: List[Any] = []
        self._vals: List[Any] = []

    # Internal helpers

    def _allocate(self) -> None:
        self._status = bytearray(self._nbuckets)
        self._keys = [None] * self._nbuckets
        self._vals = [None] * self._nbuckets

    def _check_resize(self) -> None:
        if self._count + self._deleted + 1 < self._nbuckets * RESIZE_LOAD:
            return
        entries = [
            (self._keys[i], self._vals[i])
            for i, st in enumerate(self._status or b"")
            if st == _FULL
        ]
        self._nbuckets *= 2
        self._count = 0
        self._deleted = 0
        self._allocate()
        for key, value in entries:
            idx = self._set_slot(key)
            self._vals[idx] = value

    def _probe(self, key: Any) -> Tuple[Optional[int], int, Optional[int], int]:
        """Return (index of key or None, start index, first empty index, probes)."""
        assert self._status is not None
        start = self._hash_fn(key) % self._nbuckets
        idx = start
        probes = 0
        while True:
            status = self._status[idx]
            if status == _EMPTY:
                return None, start, idx, probes
            if status == _FULL and self._keys[idx] == key:
                return idx, start, None, probes
            idx = (idx + 1) % self._nbuckets
            probes += 1
            if idx == start:
                return None, start, None, probes

    def _set_slot(self, key: Any) -> int:
        if self._status is None:
            self._allocate()
        self._check_resize()
        assert self._status is not None
        found, start, empty, _ = self._probe(key)
        if found is not None:
            if self._free_key is not None:
                self._free_key(self._keys[found])
                self._keys[found] = key
            return found
        if self._status[start] == _DELETED:
            self._deleted -= 1
            target = start
        elif empty is not None:
            target = empty
        else:
            raise RuntimeError("hash map overflow")
        self._keys[target] = key
        self._status[target] = _FULL
        self._count += 1
        return target

    def _find(self, key: Any) -> Optional[int]:
        if self._status is None:
            return None
        return self._probe(key)[0]

    def _free_entries(self) -> None:
        if self._status is None or self._count == 0:
            return
        if self._free_key is None and self._free_val is None:
            return
        for i, status in enumerate(self._status):
            if status == _FULL:
                if self._free_key is not None:
                    self._free_key(self._keys[i])
                if self._free_val is not None:
                    self._free_val(self._vals[i])

    # Public interface

    def __setitem__(self, key: Any, value: Any) -> None:
        idx = self._set_slot(key)
        self._vals[idx] = value

    def __getitem__(self, key: Any) -> Any:
        idx = self._find(key)
        if idx is None:
            raise KeyError(key)
        return self._vals[idx]

    def __delitem__(self, key: Any) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self.items())

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"HashMap({{{body}}})"

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value for ``key`` or ``default`` if absent."""
        idx = self._find(key)
        return default if idx is None else self._vals[idx]

    def delete(self, key: Any) -> bool:
        """Delete ``key``; return True if it was present."""
        idx = self._find(key)
        if idx is None:
            return False
        assert self._status is not None
        if self._free_key is not None:
            self._free_key(self._keys[idx])
        if self._free_val is not None:
            self._free_val(self._vals[idx])
        self._keys[idx] = None
        self._vals[idx] = None
        self._status[idx] = _DELETED
        self._count -= 1
        self._deleted += 1
        return True

    def items(self) -> List[Tuple[Any, Any]]:
        """Return (key, value) pairs in bucket order."""
        if self._status is None:
            return []
        return [
            (self._keys[i], self._vals[i])
            for i, status in enumerate(self._status)
            if status == _FULL
        ]

    def nbuckets(self) -> int:
        """Return the current number of buckets."""
        return self._nbuckets

    def clear(self) -> None:
        """Remove all entries, keeping the bucket count."""
        self._free_entries()
        if self._count == 0:
            return
        self._allocate()
        self._count = 0
        self._deleted = 0

    def free(self) -> None:
        """Remove all entries and release the bucket storage."""
        self._free_entries()
        self._status = None
        self._keys = []
        self._vals = []
        self._count = 0
        self._deleted = 0

    def stats(self) -> MapStats:
        """Return bucket and probing statistics."""
        count = deleted = probes = max_probe = 0
        min_probe: Optional[int] = None
        empty = 0
        if self._status is None:
            empty = self._nbuckets
        else:
            for i, status in enumerate(self._status):
                if status == _EMPTY:
                    empty += 1
                elif status == _DELETED:
                    deleted += 1
                else:
                    nprobes = self._probe(self._keys[i])[3]
                    probes += nprobes
                    max_probe = max(max_probe, nprobes)
                    min_probe = nprobes if min_probe is None else min(min_probe, nprobes)
                    count += 1
        return MapStats(
            nbuckets=self._nbuckets,
            count=count,
            deleted=deleted,
            empty=empty,
            probes=probes,
            max_probe=max_probe,
            min_probe=min_probe or 0,
            avg_probe=probes / count if count else math.nan,
            load_factor=count / self._nbuckets,
        )