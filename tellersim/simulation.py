# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate replications ("one banking day" each): build streams, metrics and
#   the simulator, schedule the first arrival and the horizon, run the event
#   loop, and average the results over many replications.
#
# Design notes:
#   - Replication r uses seed cfg["sim"]["seed"] + r, so runs are iid yet
#     reproducible, and no state is shared between them.
#   - The delay interval is mean ± average standard error; no t/z critical
#     value is applied.
#
# Usage:
#   from tellersim.simulation import run_replications
#   row = run_replications(cfg, n_tellers=5)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from typing import Dict, List, Optional
from .arrivals import make_streams
from .metrics import Metrics
from .network import Simulator
from .queues import arrival

logger = logging.getLogger(__name__)

def run_one_replication(cfg: Dict, n_tellers: int, seed: Optional[int] = None) -> Dict:
    sim_cfg = cfg["sim"]
    if seed is None:
        seed = sim_cfg.get("seed", 0)
    horizon = float(sim_cfg["horizon_minutes"])

    inter, svc = make_streams(cfg, seed)
    M = Metrics(n_tellers)
    sim = Simulator(n_tellers, inter, svc, M)

    sim.schedule(arrival(0.0))
    sim.set_horizon(horizon)
    sim.run()

    if M.created != M.disposed or sim.active_customers():
        raise RuntimeError(
            f"customer conservation violated: created={M.created} "
            f"disposed={M.disposed} still active={sim.active_customers()}"
        )
    normalize_by = horizon if sim_cfg.get("queue_normalization") == "horizon" else None
    res = M.summary(horizon=normalize_by)
    res["seed"] = seed
    res["end_time"] = sim.now()
    return res

def _mean(values: List[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None

def run_replications(cfg: Dict, n_tellers: int, replications: Optional[int] = None) -> Dict:
    """
    Run independent replications for one teller count and average them.

    Returns
    -------
    dict
        tellers, replications, avg_queue_length, avg_delay, avg_half_width,
        ci_lower, ci_upper (None when no replication had enough delays),
        and the per-replication results under "runs".
    """
    if replications is None:
        replications = int(cfg.get("experiments", {}).get("replications", 1))
    base_seed = cfg["sim"].get("seed", 0)

    runs = []
    for rep in range(replications):
        res = run_one_replication(cfg, n_tellers, seed=base_seed + rep)
        if res["delay_half_width"] is None:
            logger.warning("tellers=%d seed=%d: insufficient delay samples (%d)",
                           n_tellers, res["seed"], res["customers_disposed"])
        runs.append(res)

    qlen = _mean([r["avg_queue_length"] for r in runs])
    usable = [r for r in runs if r["delay_half_width"] is not None]
    delay = _mean([r["avg_delay"] for r in usable])
    half = _mean([r["delay_half_width"] for r in usable])
    logger.info("tellers=%d: %d replications, %d with usable delay samples",
                n_tellers, replications, len(usable))
    return {
        "tellers": n_tellers,
        "replications": replications,
        "avg_queue_length": qlen,
        "avg_delay": delay,
        "avg_half_width": half,
        "ci_lower": delay - half if delay is not None else None,
        "ci_upper": delay + half if delay is not None else None,
        "runs": runs,
    }
