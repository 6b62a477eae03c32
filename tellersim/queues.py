# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Minimal discrete‑event primitives: Event and the Future Event List (FEL)
#   used by the teller simulator, plus the engine's error types.
#
# Design notes:
#   - Event kinds form a closed set (arrival | departure | end); the engine
#     dispatches on `kind` instead of subclassing.
#   - Events with equal times come out in insertion order (FIFO).
#
# Usage:
#   from tellersim.queues import Event, EventQueue, ARRIVAL
# -----------------------------------------------------------------------------

from __future__ import annotations
import heapq, itertools
from typing import List, Optional, Tuple

ARRIVAL = "arrival"
DEPARTURE = "departure"
END = "end"
EVENT_KINDS = (ARRIVAL, DEPARTURE, END)

class EmptyQueueError(IndexError):
    """Raised when popping from an empty event list."""

class InvalidTellerError(IndexError):
    """Raised when a teller index falls outside [0, N)."""

class ClockRegressionError(RuntimeError):
    """Raised when an event would move the simulation clock backwards."""

class Event:
    """Minimal event object for the FEL; departures carry their teller index."""
    __slots__ = ("t", "kind", "teller")
    def __init__(self, t: float, kind: str, teller: Optional[int] = None):
        if kind not in EVENT_KINDS:
            raise ValueError(f"unknown event kind {kind!r}")
        if kind == DEPARTURE and teller is None:
            raise ValueError("departure events need a teller index")
        self.t = t; self.kind = kind; self.teller = teller
    def __lt__(self, other: "Event"):
        return self.t < other.t
    def __repr__(self):
        return f"{self.kind.upper()} at {self.t:g}"

def arrival(t: float) -> Event:
    return Event(t, ARRIVAL)

def departure(t: float, teller: int) -> Event:
    return Event(t, DEPARTURE, teller)

def end(t: float) -> Event:
    return Event(t, END)

class EventQueue:
    """Min‑heap of scheduled events ordered by (time, insertion order)."""
    def __init__(self):
        self._heap: List[Tuple[float, int, Event]] = []
        self._seq = itertools.count()

    def push(self, ev: Event):
        heapq.heappush(self._heap, (ev.t, next(self._seq), ev))

    def pop(self) -> Event:
        if not self._heap:
            raise EmptyQueueError("pop from an empty event queue")
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Event:
        if not self._heap:
            raise EmptyQueueError("peek at an empty event queue")
        return self._heap[0][2]

    def __len__(self):
        return len(self._heap)

    def __bool__(self):
        return bool(self._heap)
