# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the bank DES: the Customer that moves from a
#   teller's line into service and then out of the system.
#
# Design notes:
#   - A customer is owned by exactly one place at a time: a teller's line,
#     then that teller's serving slot, then disposal (delay recorded).
#   - Timestamps stay None until the corresponding transition happens.
#
# Usage:
#   from tellersim.entities import Customer
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass
class Customer:
    cid: int                                 # 1, 2, 3, ... within one simulator
    arrival_time: float
    service_start: Optional[float] = None    # set when taken off the head of a line
    departure_time: Optional[float] = None   # set when service completes

    def delay(self) -> float:
        """Time spent waiting in line before service began."""
        if self.service_start is None:
            raise ValueError(f"customer {self.cid} never started service")
        return abs(self.service_start - self.arrival_time)
