# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# policies.py
# -----------------------------------------------------------------------------
# Purpose:
#   Line‑selection and jockeying policies for the teller bank.
#
# Design notes:
#   - Keep pure functions to ease testing (tellers -> decision).
#   - All scans run in ascending index order so results are reproducible.
#
# Usage:
#   from tellersim.policies import free_teller, shortest_line, jockey_source
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Optional, Sequence
from .stations import Teller

def free_teller(tellers: Sequence[Teller]) -> Optional[int]:
    """First teller that is idle with an empty line, or None."""
    for t in tellers:
        if not t.busy and not t.line:
            return t.tid
    return None

def shortest_line(tellers: Sequence[Teller]) -> int:
    """Teller with the fewest customers waiting; lowest index wins ties."""
    best = 0
    fewest = len(tellers[0].line)
    for t in tellers[1:]:
        if len(t.line) < fewest:
            fewest = len(t.line)
            best = t.tid
    return best

def jockey_source(tellers: Sequence[Teller], tid: int) -> Optional[int]:
    """
    Nearest teller whose occupancy exceeds teller `tid`'s by more than one.

    Occupancy counts the customer in service. Among qualifying tellers the
    one with the smallest |index - tid| wins; on equal distance the lower
    index (found first) wins. Returns None when no teller qualifies.
    """
    here = tellers[tid].occupancy
    source = None
    min_distance = len(tellers) * len(tellers)
    for other in tellers:
        if other.tid == tid:
            continue
        distance = abs(tid - other.tid)
        if distance < min_distance and other.occupancy > here + 1:
            source = other.tid
            min_distance = distance
    return source
