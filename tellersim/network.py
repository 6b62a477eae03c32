# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# network.py
# -----------------------------------------------------------------------------
# Purpose:
#   The teller network simulator: clock, FEL, tellers and the state
#   transitions for arrivals, departures and jockeying.
#
# Design notes:
#   - Every change to a line length is sampled into Metrics at the current
#     clock, before anything else observes the line.
#   - A teller only becomes busy by taking the head of its own line; arriving
#     and jockeying customers always join a line first.
#   - Departures are the only jockeying trigger.
#
# Usage:
#   sim = Simulator(4, inter, svc, Metrics(4))
#   sim.schedule(arrival(0.0)); sim.set_horizon(480.0); sim.run()
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from typing import List, Optional
from .entities import Customer
from .metrics import Metrics
from .policies import free_teller, shortest_line, jockey_source
from .queues import (
    ARRIVAL, DEPARTURE, END, ClockRegressionError, Event, EventQueue,
    InvalidTellerError, arrival, departure, end,
)
from .stations import Teller, make_tellers

logger = logging.getLogger(__name__)

class Simulator:
    """Simulation environment for N tellers with per-teller lines and jockeying.

    Attributes
    ----------
    t : float
        Simulation clock (minutes).
    FEL : EventQueue
        Scheduled events, earliest first.
    tellers : list[Teller]
        Teller stations, indexed 0..N-1.
    M : Metrics
        Accumulators for this replication.
    horizon : float or None
        Time after which no new arrivals are scheduled.
    """
    def __init__(self, n_tellers: int, interarrival, service, metrics: Optional[Metrics] = None):
        self.t: float = 0.0
        self.FEL = EventQueue()
        self.tellers: List[Teller] = make_tellers(n_tellers)
        self.M = metrics if metrics is not None else Metrics(n_tellers)
        if len(self.M.queue_lengths) != n_tellers:
            raise ValueError("metrics were built for a different number of tellers")
        self.interarrival = interarrival
        self.service = service
        self.horizon: Optional[float] = None
        self._last_cid = 0

    @property
    def n(self) -> int:
        return len(self.tellers)

    def now(self) -> float:
        return self.t

    def next_customer_id(self) -> int:
        self._last_cid += 1
        return self._last_cid

    def _teller(self, tid: int) -> Teller:
        if not 0 <= tid < len(self.tellers):
            raise InvalidTellerError(f"teller {tid} out of range [0, {len(self.tellers)})")
        return self.tellers[tid]

    # ------------------------------------------------------------------ events
    def schedule(self, ev: Event):
        self.FEL.push(ev)

    def set_horizon(self, end_time: float):
        if self.horizon is not None:
            raise RuntimeError("simulation horizon already set")
        self.schedule(end(end_time))
        self.horizon = end_time

    def run(self):
        if self.horizon is None:
            raise RuntimeError("call set_horizon() before run()")
        while self.FEL:
            ev = self.FEL.pop()
            if ev.t < self.t:
                raise ClockRegressionError(f"{ev!r} is earlier than clock {self.t}")
            self.t = ev.t
            logger.debug("%r", ev)
            if ev.kind == ARRIVAL:
                self.on_arrival()
            elif ev.kind == DEPARTURE:
                self.on_departure(ev.teller)
            elif ev.kind == END:
                self.on_end()

    def _schedule_departure(self, tid: int):
        self.schedule(departure(self.t + self.service.next(), tid))

    # ------------------------------------------------------------- transitions
    def on_arrival(self):
        # The arrival process keeps itself going until the horizon
        next_t = self.t + self.interarrival.next()
        if next_t <= self.horizon:
            self.schedule(arrival(next_t))

        customer = Customer(self.next_customer_id(), self.t)
        self.M.note_arrival()

        tid = self.get_free_teller_id()
        if tid is not None:
            self.admit_to_queue(customer, tid)
            self.start_service_if_possible(tid)
            self._schedule_departure(tid)
        else:
            self.admit_to_queue(customer, self.get_shortest_queued_teller_id())

    def on_departure(self, tid: int):
        self.end_service(tid)
        if self.start_service_if_possible(tid):
            self._schedule_departure(tid)
        self.jockey(tid)

    def on_end(self):
        """Horizon marker: nothing to do, the FEL drains on its own."""
        logger.debug("horizon reached at %g with %d events pending", self.t, len(self.FEL))

    # ------------------------------------------------------------------ queries
    def get_free_teller_id(self) -> Optional[int]:
        return free_teller(self.tellers)

    def get_shortest_queued_teller_id(self) -> int:
        return shortest_line(self.tellers)

    def get_jockey_target(self, tid: int) -> Optional[int]:
        self._teller(tid)
        return jockey_source(self.tellers, tid)

    def is_busy(self, tid: int) -> bool:
        return self._teller(tid).busy

    # -------------------------------------------------------------- mutations
    def admit_to_queue(self, customer: Customer, tid: int):
        teller = self._teller(tid)
        teller.join(customer)
        self.M.note_queue_length(tid, len(teller.line), self.t)

    def start_service_if_possible(self, tid: int) -> bool:
        """Move the head of the line into service; returns True if it did."""
        teller = self._teller(tid)
        if teller.busy or not teller.line:
            return False
        teller.take_head(self.t)
        self.M.note_queue_length(tid, len(teller.line), self.t)
        return True

    def end_service(self, tid: int) -> Optional[Customer]:
        teller = self._teller(tid)
        if not teller.busy:
            return None
        customer = teller.release(self.t)
        self.M.note_departure(customer)
        return customer

    def jockey(self, tid: int) -> Optional[int]:
        """
        Let the tail customer of the nearest much-longer line switch to `tid`.

        Returns the index the customer came from, or None if nobody moved.
        """
        src = self.get_jockey_target(tid)
        if src is None:
            return None
        source = self.tellers[src]
        customer = source.take_tail()
        self.M.note_queue_length(src, len(source.line), self.t)
        self.admit_to_queue(customer, tid)
        self.M.note_jockey()
        logger.debug("customer %d jockeys %d -> %d at %g", customer.cid, src, tid, self.t)
        if not self.tellers[tid].busy:
            self.start_service_if_possible(tid)
            self._schedule_departure(tid)
        return src

    def active_customers(self) -> int:
        """Customers currently waiting or in service."""
        return sum(t.occupancy for t in self.tellers)
