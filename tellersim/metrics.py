# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Collect and summarize KPIs for one replication: time‑weighted queue
#   length per teller and the customer delay sample with its interval.
#
# Design notes:
#   - Keep side‑effect methods (note_*) for instrumentation from the engine.
#   - One Metrics object per replication; the simulator receives it
#     explicitly, nothing is shared between runs.
#   - Summaries return JSON‑serializable dicts for easy tabulation.
#
# Usage:
#   M = Metrics(n_tellers); M.summary()
# -----------------------------------------------------------------------------

from __future__ import annotations
import math, statistics
from typing import Dict, Any, List, Optional, Tuple

class InsufficientDataError(ValueError):
    """Raised when a mean or interval is requested from too few samples."""

class TimeAverage:
    """
    Time‑weighted running average of an integer step function (queue length).

    Every sample closes the previous step: (t - last_t) * last_value is added
    to the integral before the new value is remembered. The (t, value) steps
    are kept so the integral can also be clipped at an arbitrary time.
    """
    def __init__(self):
        self.area = 0.0
        self.last_time = 0.0
        self.last_value = 0
        self.samples = 0
        self.maximum: Optional[int] = None
        self.minimum: Optional[int] = None
        self.steps: List[Tuple[float, int]] = []

    def note(self, value: int, t: float):
        self.area += (t - self.last_time) * self.last_value
        self.last_time = t
        self.last_value = value
        self.samples += 1
        self.steps.append((t, value))
        if self.minimum is None or value < self.minimum:
            self.minimum = value
        if self.maximum is None or value > self.maximum:
            self.maximum = value

    def area_until(self, until: float) -> float:
        """Integral of the step function over [0, until]."""
        area = 0.0
        prev_t, prev_v = 0.0, 0
        for t, v in self.steps:
            if t >= until:
                break
            area += (t - prev_t) * prev_v
            prev_t, prev_v = t, v
        return area + (until - prev_t) * prev_v

    def mean(self, until: Optional[float] = None) -> float:
        """
        Time average of the step function.

        With `until=None` the integral is divided by the last sample time.
        Passing `until` (e.g. the horizon) integrates over [0, until] only,
        holding the last value before `until` up to it, and divides by `until`.
        """
        if until is not None:
            if until <= 0:
                raise InsufficientDataError("time average needs a positive normalization time")
            return self.area_until(until) / until
        if self.last_time <= 0:
            raise InsufficientDataError("time average needs a sample after t=0")
        return self.area / self.last_time

class SampleAverage:
    """Plain sample mean with a standard‑error interval (no critical value applied)."""
    def __init__(self):
        self.total = 0.0
        self.values: List[float] = []

    def note(self, value: float):
        self.total += value
        self.values.append(value)

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def maximum(self) -> Optional[float]:
        return max(self.values) if self.values else None

    @property
    def minimum(self) -> Optional[float]:
        return min(self.values) if self.values else None

    def mean(self) -> float:
        if not self.values:
            raise InsufficientDataError("mean of an empty sample")
        return self.total / len(self.values)

    def variance(self) -> float:
        """Unbiased sample variance."""
        n = len(self.values)
        if n < 2:
            raise InsufficientDataError(f"variance needs at least 2 samples, got {n}")
        return statistics.variance(self.values, self.mean())

    def half_width(self) -> float:
        """Standard error sqrt(s^2 / n); the reported interval is mean ± this."""
        return math.sqrt(self.variance() / len(self.values))

class Metrics:
    def __init__(self, n_tellers: int):
        self.queue_lengths = [TimeAverage() for _ in range(n_tellers)]
        self.delays = SampleAverage()
        self.created = 0
        self.disposed = 0
        self.jockeys = 0

    def note_queue_length(self, teller: int, length: int, t: float):
        self.queue_lengths[teller].note(length, t)

    def note_arrival(self):
        self.created += 1

    def note_departure(self, customer):
        """Customer left the serving slot: record its delay."""
        self.disposed += 1
        self.delays.note(customer.delay())

    def note_jockey(self):
        self.jockeys += 1

    def summary(self, horizon: Optional[float] = None) -> Dict[str, Any]:
        """
        Parameters
        ----------
        horizon : float, optional
            When given, queue lengths are normalized by the horizon instead
            of by each teller's last sample time.

        Notes
        -----
        avg_queue_length is the sum of per‑teller time averages. A teller with
        no sample after t=0 contributes 0 (its integral is 0). avg_delay and
        delay_half_width are None when there are too few delay samples.
        """
        per_teller = []
        for acc in self.queue_lengths:
            try:
                per_teller.append(acc.mean(until=horizon))
            except InsufficientDataError:
                per_teller.append(0.0)
        avg_delay = self.delays.mean() if self.delays.count >= 1 else None
        half = self.delays.half_width() if self.delays.count >= 2 else None
        return {
            "avg_queue_length": sum(per_teller),
            "queue_length_by_teller": per_teller,
            "max_queue_length": max((acc.maximum or 0) for acc in self.queue_lengths) if self.queue_lengths else 0,
            "avg_delay": avg_delay,
            "delay_half_width": half,
            "min_delay": self.delays.minimum,
            "max_delay": self.delays.maximum,
            "customers_created": self.created,
            "customers_disposed": self.disposed,
            "jockeys": self.jockeys,
        }
