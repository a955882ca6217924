"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
runs the queue and waitlist Monte Carlo engines for the selected presets, and
reports KPIs with plain-language insights. The script is intentionally
lightweight so we can tweak scenarios or plug in other front ends as needed.

Run with: python -m experiments.run_experiments
"""

from __future__ import annotations
import copy, logging, os
from typing import Dict, List, Optional, Tuple
import yaml

from clinicsim.montecarlo import simulate_queue_scenario
from clinicsim.waitlist import simulate_waitlist_scenario
from clinicsim.entities import QueueSummary, WaitlistSummary
from clinicsim.insights import queue_insight, stat_delta, waitlist_insight
from experiments.scenarios import QUEUE_SCENARIOS, WAITLIST_SCENARIOS

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

QUEUE_KEYS = (
    "staff_count", "dropout_threshold", "arrival_rate_per_hour",
    "mean_service_time", "runs", "day_minutes", "sample_interval",
)
WAITLIST_KEYS = (
    "daily_inquiries", "daily_capacity", "shortage",
    "horizon_days", "runs", "initial_backlog",
)

def load_cfg(path: Optional[str] = None) -> Dict:
    with open(path or os.path.join(ROOT, "config", "baseline.yaml"), "r") as f:
        return yaml.safe_load(f)

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply scenario overrides (recursive merge) on top of the base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides)
    return new

def _engine_kwargs(cfg: Dict, section: str, keys: Tuple[str, ...]) -> Dict:
    sec = cfg.get(section, {})
    kwargs = {k: sec[k] for k in keys if k in sec}
    sim = cfg.get("sim", {})
    kwargs["seed"] = sim.get("seed")
    kwargs["workers"] = int(sim.get("workers", 1))
    return kwargs

def queue_kwargs(cfg: Dict) -> Dict:
    """Keyword arguments for simulate_queue_scenario from a merged config."""
    return _engine_kwargs(cfg, "queue", QUEUE_KEYS)

def waitlist_kwargs(cfg: Dict) -> Dict:
    """Keyword arguments for simulate_waitlist_scenario from a merged config."""
    return _engine_kwargs(cfg, "waitlist", WAITLIST_KEYS)

def select_scenarios(scenarios: List[Dict], names: Optional[List[str]]) -> List[Dict]:
    """Pick presets by name in the order given; None keeps every preset."""
    if names is None:
        return list(scenarios)
    by_name = {sc["name"]: sc for sc in scenarios}
    out = []
    for name in names:
        sc = by_name.get(name)
        if sc is None:
            print(f"[warn] unknown scenario: {name}")
            continue
        out.append(sc)
    return out

def run_queue_scenarios(cfg: Dict, scenarios: List[Dict]) -> List[Tuple[Dict, QueueSummary]]:
    out = []
    for sc in scenarios:
        sc_cfg = apply_overrides(cfg, sc["overrides"])
        out.append((sc, simulate_queue_scenario(**queue_kwargs(sc_cfg))))
    return out

def run_waitlist_scenarios(cfg: Dict, scenarios: List[Dict]) -> List[Tuple[Dict, WaitlistSummary]]:
    out = []
    for sc in scenarios:
        sc_cfg = apply_overrides(cfg, sc["overrides"])
        out.append((sc, simulate_waitlist_scenario(**waitlist_kwargs(sc_cfg))))
    return out

def print_queue_report(results: List[Tuple[Dict, QueueSummary]], baseline_name: str = "baseline"):
    baseline = next((s for sc, s in results if sc["name"] == baseline_name), None)
    if baseline is None and results:
        print(f"[warn] baseline scenario not found: {baseline_name}")
    for sc, stats in results:
        is_base = stats is baseline
        print(f"Queue scenario: {sc['label']} (runs={stats.runs})")
        print(f"  Staff: {stats.staff_count}  Arrivals/hour: {stats.arrival_rate_per_hour}  "
              f"Avg service: {stats.mean_service_time} min")
        delta = "" if is_base or baseline is None else f" {stat_delta(stats.avg_wait, baseline.avg_wait)}"
        print(f"  Avg wait: {stats.avg_wait:.1f} min{delta}")
        print(f"  Median wait: {stats.median_wait:.1f} min   95th pct wait: {stats.p95_wait:.1f} min")
        print(f"  Wait variance: {stats.wait_variance:.1f}")
        delta = "" if is_base or baseline is None else f" {stat_delta(stats.dropout_rate, baseline.dropout_rate)}"
        print(f"  Dropouts: {stats.dropout_count} ({stats.dropout_rate:.1f}%){delta}")
        print(f"  Throughput: {stats.throughput} of {stats.total_clients} clients")
        print(f"  Wait percentiles: { {p: round(w, 1) for p, w in stats.percentiles} }")
        peak = max(stats.time_series, key=lambda pt: pt.queue_length)
        print(f"  Peak mean queue: {peak.queue_length:.2f} clients at {peak.time:.0f} min")
        print(f"  Insight: {queue_insight(stats, None if is_base else baseline)}")
        print("-")

def print_waitlist_report(results: List[Tuple[Dict, WaitlistSummary]], horizon_days: int):
    for sc, stats in results:
        print(f"Waitlist scenario: {sc['label']} (runs={stats.runs}, start={stats.initial_backlog})")
        print(f"  Most likely waitlist size: {stats.median}")
        print(f"  95% interval: {stats.ci_lower} - {stats.ci_upper}")
        print(f"  Growth probability: {stats.growth_probability:.1f}%")
        print(f"  Histogram (bin: count): {dict(stats.histogram)}")
        print(f"  Insight: {waitlist_insight(sc['name'], stats, horizon_days)}")
        print("-")

def main(cfg_path: Optional[str] = None):
    """Entry point: drive the configured presets (all by default) and report KPIs."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    cfg = load_cfg(cfg_path)
    exp_cfg = cfg.get("experiments", {})
    if exp_cfg.get("run_queue", True):
        queue_presets = select_scenarios(QUEUE_SCENARIOS, exp_cfg.get("queue_presets"))
        results = run_queue_scenarios(cfg, queue_presets)
        print_queue_report(results, exp_cfg.get("baseline_queue", "baseline"))
    if exp_cfg.get("run_waitlist", True):
        waitlist_presets = select_scenarios(WAITLIST_SCENARIOS, exp_cfg.get("waitlist_presets"))
        results = run_waitlist_scenarios(cfg, waitlist_presets)
        print_waitlist_report(results, int(cfg.get("waitlist", {}).get("horizon_days", 90)))

if __name__ == "__main__":
    main()
