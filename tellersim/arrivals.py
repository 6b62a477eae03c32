# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Random duration streams for the M/M/N bank: exponential inter-arrival and
#   service times, plus a fixed stream for deterministic scenarios.
#
# Design notes:
#   - Each stream owns its own random.Random so replications never share RNG
#     state; seeds are derived from the replication seed.
#   - The arrival process itself is self-scheduling (see network.on_arrival),
#     so nothing is pre-generated here.
#
# Usage:
#   from tellersim.arrivals import ExponentialStream, make_streams
# -----------------------------------------------------------------------------

from __future__ import annotations
import random
from typing import Optional, Tuple

class ExponentialStream:
    """Exponentially distributed durations with a fixed mean (mean = 1/lambda)."""
    def __init__(self, mean: float, rng: Optional[random.Random] = None):
        if mean <= 0:
            raise ValueError(f"mean must be positive, got {mean}")
        self.mean = mean
        self.rng = rng or random.Random()

    def next(self) -> float:
        return self.rng.expovariate(1.0 / self.mean)

class FixedStream:
    """Deterministic stream: cycles through the given values forever."""
    def __init__(self, *values: float):
        if not values:
            raise ValueError("FixedStream needs at least one value")
        self.values: Tuple[float, ...] = tuple(float(v) for v in values)
        self._i = 0

    def next(self) -> float:
        v = self.values[self._i % len(self.values)]
        self._i += 1
        return v

def make_streams(cfg: dict, seed: int) -> Tuple[ExponentialStream, ExponentialStream]:
    """
    Build (interarrival, service) streams for one replication.

    Parameters
    ----------
    cfg : dict
        Config with sim.interarrival_mean and sim.service_mean (minutes).
    seed : int
        Replication seed; the two streams get independent child seeds.
    """
    parent = random.Random(seed)
    inter = ExponentialStream(cfg["sim"]["interarrival_mean"], random.Random(parent.getrandbits(32)))
    svc = ExponentialStream(cfg["sim"]["service_mean"], random.Random(parent.getrandbits(32)))
    return inter, svc
