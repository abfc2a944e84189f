"""Containers (array, hash map, ring queue), a variant value type, a timer, a thread pool and an event tracer."""

__version__ = "0.1.0"