"""Event tracer that records begin, end and instant events in trace-event JSON."""

from __future__ import annotations

import enum
import json
import os
import threading
import time
from dataclasses import dataclass
from typing import List, Optional, TextIO

EVNAME_MAX_SIZE = 32
EVCAT_MAX_SIZE = 32


class TracerScope(enum.Enum):
    """Scope of an instant event."""

    DEFAULT = ""
    GLOBAL = "g"
    PROCESS = "p"
    THREAD = "t"


class TracerError(Exception):
    """Raised when trace events cannot be written."""


@dataclass
class TracerEvent:
    """One recorded event; ``ts`` is a monotonic time in nanoseconds."""

    name: str
    cat: str
    pid: int
    tid: int
    ph: str
    scope: TracerScope
    ts: int

    def to_json(self) -> str:
        text = (
            f'{{"name":{json.dumps(self.name, ensure_ascii=False)},'
            f'"cat":{json.dumps(self.cat, ensure_ascii=False)},'
            f'"ph":"{self.ph}","ts":{self.ts // 1000},'
            f'"pid":{self.pid},"tid":{self.tid}'
        )
        if self.scope is TracerScope.DEFAULT:
            return text + "}"
        return text + f',"s":"{self.scope.value}"}}'


def _fit(text: str, limit: int) -> str:
    return text if len(text.encode("utf-8")) < limit else "?"


class Tracer:
    """Thread-safe recorder of at most ``cap`` trace events.

    Each thread that records an event gets a small sequential id the
    first time it does so. Events beyond the capacity are dropped.
    """

    def __init__(self, cap: int) -> None:
        if cap < 0:
            raise ValueError("capacity must not be negative")
        self._cap = cap
        self._events: List[TracerEvent] = []
        self._lock = threading.Lock()
        self._local = threading.local()
        self._next_tid = 1

    def _append(
        self, name: str, cat: str, ph: str, scope: TracerScope
    ) -> Optional[TracerEvent]:
        with self._lock:
            tid = getattr(self._local, "tid", 0)
            if tid == 0:
                tid = self._next_tid
                self._next_tid += 1
                self._local.tid = tid
            if len(self._events) >= self._cap:
                return None
            event = TracerEvent(
                name=_fit(name, EVNAME_MAX_SIZE),
                cat=_fit(cat, EVCAT_MAX_SIZE),
                pid=os.getpid(),
                tid=tid,
                ph=ph,
                scope=scope,
                ts=time.monotonic_ns(),
            )
            self._events.append(event)
            return event

    def count(self) -> int:
        """Return the number of recorded events."""
        with self._lock:
            return len(self._events)

    def clear(self) -> None:
        """Discard all recorded events."""
        with self._lock:
            self._events.clear()

    def begin(self, name: str, cat: str) -> None:
        """Record the beginning of a duration event."""
        self._append(name, cat, "B", TracerScope.DEFAULT)

    def end(self, name: str, cat: str) -> None:
        """Record the end of a duration event."""
        self._append(name, cat, "E", TracerScope.DEFAULT)

    def instant(self, name: str, cat: str, scope: TracerScope = TracerScope.DEFAULT) -> None:
        """Record an instant event with the given scope."""
        self._append(name, cat, "i", TracerScope(scope))

    def events(self) -> List[TracerEvent]:
        """Return a copy of the recorded events in recording order."""
        with self._lock:
            return list(self._events)

    def write_json(self, out: TextIO) -> None:
        """Write the events as a JSON array to the text stream ``out``."""
        body = ",\n".join(event.to_json() for event in self.events())
        text = f"[{body}]"
        try:
            written = out.write(text)
        except (OSError, ValueError) as exc:
            raise TracerError("Error writing events") from exc
        if isinstance(written, int) and written < len(text):
            raise TracerError("Error writing events")

    def write_json_file(self, path: "str | os.PathLike[str]") -> None:
        """Write the events as a JSON array to the file at ``path``."""
        try:
            handle = open(path, "w", encoding="utf-8")
        except OSError as exc:
            raise TracerError("Error opening file") from exc
        with handle:
            self.write_json(handle)