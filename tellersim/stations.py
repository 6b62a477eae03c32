# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# stations.py
# -----------------------------------------------------------------------------
# Purpose:
#   Teller stations: a single serving slot in front of an owned FIFO line.
#
# Design notes:
#   - Tellers hold state only. Clock, statistics and event scheduling live in
#     the Simulator (network.py), which is the only caller of these methods.
#   - busy is derived from the serving slot so the two can never disagree.
#
# Usage:
#   from tellersim.stations import make_tellers
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import deque
from typing import Deque, List, Optional
from .entities import Customer

class Teller:
    """
    Single-capacity server with its own waiting line.

    Parameters
    ----------
    tid : int
        Index of this teller in [0, N).
    """
    def __init__(self, tid: int):
        self.tid = tid
        self.line: Deque[Customer] = deque()
        self.serving: Optional[Customer] = None

    @property
    def busy(self) -> bool:
        return self.serving is not None

    @property
    def occupancy(self) -> int:
        """Customers waiting plus the one in service (if any)."""
        return len(self.line) + (1 if self.busy else 0)

    def join(self, customer: Customer):
        self.line.append(customer)

    def take_head(self, now: float) -> Customer:
        # only ever called on an idle teller with a nonempty line
        customer = self.line.popleft()
        customer.service_start = now
        self.serving = customer
        return customer

    def take_tail(self) -> Customer:
        return self.line.pop()

    def release(self, now: float) -> Customer:
        customer = self.serving
        customer.departure_time = now
        self.serving = None
        return customer

    def __repr__(self):
        state = "busy" if self.busy else "idle"
        return f"Teller({self.tid}, {state}, line={len(self.line)})"

def make_tellers(n: int) -> List[Teller]:
    if n < 1:
        raise ValueError(f"need at least one teller, got {n}")
    return [Teller(i) for i in range(n)]
