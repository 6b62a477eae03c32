"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies a scenario's
overrides, runs the replications for every teller count, and prints the
queue length / delay table with the delay interval. Optionally saves a plot.

Run as a module from the repository root:
    python -m experiments.run_experiments --scenario baseline
"""

from __future__ import annotations
import argparse, logging, os
from typing import Dict, List, Optional

from tellersim.config import ROOT, apply_overrides, load_cfg, validate_cfg
from tellersim.simulation import run_replications
from .scenarios import SCENARIOS

logger = logging.getLogger(__name__)

RULE = "_" * 80

def _fmt(val: Optional[float]) -> str:
    return f"{val:<10.6f}" if val is not None else f"{'n/a':<10}"

def print_header(cfg: Dict, scenario_name: str):
    sim = cfg["sim"]
    tellers = cfg["experiments"]["tellers"]
    print("Multi-teller bank with jockeying ")
    print(RULE)
    print(f"Scenario:\t\t\t\t{scenario_name}")
    print(f"Total tellers:\t\t\t\t{min(tellers)} to {max(tellers)}")
    print(f"Mean inter-arrival time:\t\t{sim['interarrival_mean']:g} minutes")
    print(f"Mean service time:\t\t\t{sim['service_mean']:g} minutes")
    print(f"Duration:\t\t\t\t{sim['horizon_minutes'] / 60.0:g} hours")
    print(f"Replications:\t\t\t\t{cfg['experiments']['replications']}")
    print()
    print()
    print("#tellers\tAvg q len\tAvg delay\tLeft boundary\tRight boundary")
    print(RULE)

def print_row(row: Dict):
    print(f"{row['tellers']}\t\t{_fmt(row['avg_queue_length'])}\t{_fmt(row['avg_delay'])}\t"
          f"{_fmt(row['ci_lower'])}\t{_fmt(row['ci_upper'])}")

def plot_delays(rows: List[Dict], scenario_name: str) -> Optional[str]:
    """
    Persist a PNG of average delay versus teller count with the
    ± standard-error band drawn around it.
    """
    rows = [r for r in rows if r["avg_delay"] is not None]
    if not rows:
        return None
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    x = [r["tellers"] for r in rows]
    y = [r["avg_delay"] for r in rows]
    lo = [r["ci_lower"] for r in rows]
    hi = [r["ci_upper"] for r in rows]
    plt.figure(figsize=(9, 5))
    plt.plot(x, y, marker="o", label="Avg delay", color="#2563eb")
    plt.fill_between(x, lo, hi, color="#2563eb", alpha=0.2, label="± std. error")
    plt.xlabel("Tellers")
    plt.ylabel("Delay (minutes)")
    plt.title(f"{scenario_name}: customer delay by teller count")
    plt.xticks(x)
    plt.legend()
    plt.grid(True, linestyle="--", alpha=0.4)
    out_dir = os.path.join(ROOT, "experiments", "output")
    os.makedirs(out_dir, exist_ok=True)
    safe_name = scenario_name.lower().replace(" ", "_")
    out_path = os.path.join(out_dir, f"{safe_name}_delay.png")
    plt.tight_layout()
    plt.savefig(out_path, dpi=160)
    plt.close()
    return out_path

def run_scenario(cfg: Dict, scenario: Dict) -> List[Dict]:
    sc_cfg = validate_cfg(apply_overrides(cfg, scenario["overrides"]))
    print_header(sc_cfg, scenario["name"])
    rows = []
    for n in sc_cfg["experiments"]["tellers"]:
        row = run_replications(sc_cfg, int(n))
        print_row(row)
        rows.append(row)
    if sc_cfg["experiments"].get("plot"):
        path = plot_delays(rows, scenario["name"])
        if path:
            print(f"\nDelay plot saved to: {path}")
    return rows

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Multi-teller bank with jockeying")
    p.add_argument("--config", default=None, help="YAML config (default: config/baseline.yaml)")
    p.add_argument("--scenario", default="baseline",
                   choices=[s["name"] for s in SCENARIOS] + ["all"])
    p.add_argument("--replications", type=int, default=None, help="override experiments.replications")
    p.add_argument("--seed", type=int, default=None, help="override sim.seed")
    p.add_argument("--plot", action="store_true", help="save a delay plot per scenario")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p.parse_args(argv)

def main(argv=None):
    """Entry point: drive the selected scenarios and print the tables."""
    args = parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    cfg = load_cfg(args.config)
    cli = {"sim": {}, "experiments": {}}
    if args.replications is not None:
        cli["experiments"]["replications"] = args.replications
    if args.seed is not None:
        cli["sim"]["seed"] = args.seed
    if args.plot:
        cli["experiments"]["plot"] = True
    cfg = apply_overrides(cfg, cli)

    selected = SCENARIOS if args.scenario == "all" else [s for s in SCENARIOS if s["name"] == args.scenario]
    for i, sc in enumerate(selected):
        if i:
            print()
        logger.info("running scenario %s", sc["name"])
        run_scenario(cfg, sc)

if __name__ == "__main__":
    main()
