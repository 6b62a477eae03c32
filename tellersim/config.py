# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Load the YAML experiment config, merge scenario overrides, and validate
#   the parameters the simulator depends on.
#
# Design notes:
#   - Configs stay plain nested dicts (cfg["sim"]["service_mean"]) so
#     scenario overrides are a recursive merge.
#   - Times are in minutes throughout.
#
# Usage:
#   cfg = load_cfg(); cfg = apply_overrides(cfg, {"sim": {"seed": 7}})
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy, os
from typing import Dict, Optional
import yaml

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CFG_PATH = os.path.join(ROOT, "config", "baseline.yaml")

QUEUE_NORMALIZATIONS = ("last_sample", "horizon")

DEFAULT_CONFIG: Dict = {
    "sim": {
        "horizon_minutes": 480.0,       # one 8 hour banking day
        "interarrival_mean": 1.0,
        "service_mean": 4.5,
        "seed": 0,
        "queue_normalization": "last_sample",
    },
    "experiments": {
        "tellers": [4, 5, 6, 7, 8, 9],
        "replications": 100,
        "plot": False,
    },
}

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply scenario overrides (recursive merge) on top of the base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides or {})
    return new

def validate_cfg(cfg: Dict) -> Dict:
    sim = cfg.get("sim", {})
    for key in ("horizon_minutes", "interarrival_mean", "service_mean"):
        val = sim.get(key)
        if not isinstance(val, (int, float)) or val <= 0:
            raise ValueError(f"sim.{key} must be a positive number, got {val!r}")
    if sim.get("queue_normalization") not in QUEUE_NORMALIZATIONS:
        raise ValueError(
            f"sim.queue_normalization must be one of {QUEUE_NORMALIZATIONS}, "
            f"got {sim.get('queue_normalization')!r}"
        )
    exp = cfg.get("experiments", {})
    tellers = exp.get("tellers", [])
    if not tellers or any(int(n) < 1 for n in tellers):
        raise ValueError(f"experiments.tellers must list counts >= 1, got {tellers!r}")
    if int(exp.get("replications", 0)) < 1:
        raise ValueError("experiments.replications must be at least 1")
    return cfg

def load_cfg(path: Optional[str] = None) -> Dict:
    """
    Read a YAML config and merge it over DEFAULT_CONFIG.

    A missing default file is fine (defaults are used); a missing explicit
    path is an error.
    """
    if path is None and not os.path.exists(DEFAULT_CFG_PATH):
        return validate_cfg(copy.deepcopy(DEFAULT_CONFIG))
    with open(path or DEFAULT_CFG_PATH, "r") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"config root must be a mapping, got {type(raw).__name__}")
    return validate_cfg(apply_overrides(DEFAULT_CONFIG, raw))
