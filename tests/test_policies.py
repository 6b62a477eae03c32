"""
Tests for tellersim/policies.py module.

Tests cover:
- free_teller, shortest_line and jockey_source decisions
"""

from tellersim.entities import Customer
from tellersim.policies import free_teller, jockey_source, shortest_line
from tellersim.stations import make_tellers


def load(teller, waiting, busy=False):
    """Put `waiting` customers in line and optionally one in service."""
    base = teller.tid * 100
    if busy:
        teller.serving = Customer(base, arrival_time=0.0, service_start=0.0)
    for i in range(waiting):
        teller.join(Customer(base + i + 1, arrival_time=0.0))


class TestFreeTeller:
    """Tests for free_teller."""

    def test_lowest_free_index(self):
        tellers = make_tellers(3)
        assert free_teller(tellers) == 0
        load(tellers[0], waiting=0, busy=True)
        assert free_teller(tellers) == 1

    def test_none_when_all_busy(self):
        tellers = make_tellers(2)
        for t in tellers:
            load(t, waiting=0, busy=True)
        assert free_teller(tellers) is None


class TestShortestLine:
    """Tests for shortest_line."""

    def test_fewest_waiting(self):
        tellers = make_tellers(3)
        load(tellers[0], waiting=2, busy=True)
        load(tellers[1], waiting=3, busy=True)
        load(tellers[2], waiting=1, busy=True)
        assert shortest_line(tellers) == 2

    def test_ties_go_to_lowest_index(self):
        tellers = make_tellers(3)
        load(tellers[0], waiting=2, busy=True)
        load(tellers[1], waiting=1, busy=True)
        load(tellers[2], waiting=1, busy=True)
        assert shortest_line(tellers) == 1


class TestJockeySource:
    """Tests for jockey_source."""

    def test_requires_margin_greater_than_one(self):
        tellers = make_tellers(2)
        load(tellers[0], waiting=1, busy=True)    # occupancy 2
        load(tellers[1], waiting=0, busy=True)    # occupancy 1
        assert jockey_source(tellers, 1) is None
        load(tellers[0], waiting=1)               # occupancy 3
        assert jockey_source(tellers, 1) == 0

    def test_single_waiting_customer_does_not_jockey_to_empty_teller(self):
        tellers = make_tellers(2)
        load(tellers[0], waiting=1)
        assert jockey_source(tellers, 1) is None

    def test_prefers_nearest_teller(self):
        tellers = make_tellers(5)
        load(tellers[0], waiting=4, busy=True)
        load(tellers[3], waiting=2, busy=True)
        assert jockey_source(tellers, 2) == 3

    def test_equal_distance_prefers_lower_index(self):
        tellers = make_tellers(5)
        load(tellers[1], waiting=2, busy=True)
        load(tellers[3], waiting=5, busy=True)
        assert jockey_source(tellers, 2) == 1

    def test_never_picks_itself(self):
        tellers = make_tellers(1)
        load(tellers[0], waiting=5, busy=True)
        assert jockey_source(tellers, 0) is None
