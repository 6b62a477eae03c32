"""
experiments/scenarios.py

Holds scenario definitions (config overrides) to sweep during experiments.
Add load levels, horizons, or statistics options here.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

# Same load, queue length averaged over the whole day instead of up to the
# last line change.
HORIZON_NORMALIZED = {
    "name": "horizon_normalized",
    "overrides": {
        "sim": {"queue_normalization": "horizon"},
    },
}

LUNCH_RUSH = {
    "name": "lunch_rush",
    "overrides": {
        "sim": {
            "interarrival_mean": 0.75,
            "horizon_minutes": 120,
        },
        "experiments": {"tellers": [5, 6, 7, 8, 9, 10]},
    },
}

SLOW_SERVICE = {
    "name": "slow_service",
    "overrides": {
        "sim": {"service_mean": 6.0},
        "experiments": {"tellers": [6, 7, 8, 9, 10, 11]},
    },
}

SCENARIOS = [BASELINE, HORIZON_NORMALIZED, LUNCH_RUSH, SLOW_SERVICE]
