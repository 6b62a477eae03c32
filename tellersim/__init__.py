"""
tellersim package initializer.

This package contains the discrete‑event engine, teller stations, line
selection and jockeying policies, and statistics accumulators used by the
multi‑teller bank (M/M/N with jockeying) model.
"""
__all__ = [
    "entities", "queues", "stations", "network",
    "arrivals", "policies", "metrics", "simulation", "config",
]
