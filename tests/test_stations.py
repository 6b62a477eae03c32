"""
Tests for tellersim/stations.py module.

Tests cover:
- Teller state (busy, occupancy, head/tail removal, release)
- make_tellers
"""

import pytest

from tellersim.entities import Customer
from tellersim.stations import Teller, make_tellers


def load(teller, waiting, busy=False):
    """Put `waiting` customers in line and optionally one in service."""
    base = teller.tid * 100
    if busy:
        teller.serving = Customer(base, arrival_time=0.0, service_start=0.0)
    for i in range(waiting):
        teller.join(Customer(base + i + 1, arrival_time=0.0))


class TestTeller:
    """Tests for Teller."""

    def test_starts_idle_and_empty(self):
        t = Teller(0)
        assert not t.busy
        assert t.occupancy == 0

    def test_occupancy_counts_customer_in_service(self):
        t = Teller(1)
        load(t, waiting=2, busy=True)
        assert t.busy
        assert t.occupancy == 3

    def test_take_head_stamps_service_start(self):
        t = Teller(0)
        load(t, waiting=2)
        c = t.take_head(now=4.0)
        assert c.cid == 1
        assert c.service_start == 4.0
        assert t.serving is c
        assert [x.cid for x in t.line] == [2]

    def test_take_tail_removes_last_joined(self):
        t = Teller(0)
        load(t, waiting=3)
        assert t.take_tail().cid == 3
        assert len(t.line) == 2

    def test_release_stamps_departure(self):
        t = Teller(0)
        load(t, waiting=1)
        t.take_head(now=1.0)
        c = t.release(now=6.0)
        assert c.departure_time == 6.0
        assert not t.busy

    def test_make_tellers_requires_one(self):
        with pytest.raises(ValueError):
            make_tellers(0)
        assert [t.tid for t in make_tellers(3)] == [0, 1, 2]
