# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# montecarlo.py
# -----------------------------------------------------------------------------
# Purpose:
#   Generic replication scaffolding (run a trial function N times with
#   independent random streams) and the queue-model aggregator built on it.
#
# Design notes:
#   - Trial i runs on random.Random(seed + i), so a replication set is
#     reproducible and identical whether run serially or on a process pool.
#     With seed=None every trial gets an OS-seeded stream.
#   - Fan-out/fan-in: trials share no state; the reduction (concatenate,
#     per-grid sums, sorting) only starts once every trial has returned.
#
# Usage:
#   from clinicsim.montecarlo import replicate, simulate_queue_scenario
#   summary = simulate_queue_scenario(10, 30, 15, 60, runs=1000, seed=7)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import random
from functools import partial
from multiprocessing import Pool
from typing import Callable, Dict, List, Optional, Sequence, TypeVar
from .errors import require_positive_int
from .entities import QueueSummary, TimeSeriesSample, TrialResult
from .simulation import QueueParams, run_one_day, DAY_MINUTES, SAMPLE_INTERVAL
from .metrics import sampling_grid
from .stats import mean, pvariance, percentiles_of, quantile_index, value_at

logger = logging.getLogger(__name__)

T = TypeVar("T")

def trial_seeds(runs: int, seed: Optional[int]) -> List[Optional[int]]:
    if seed is None:
        return [None] * runs
    return [seed + rep for rep in range(runs)]

def _run_seeded(trial: Callable[[random.Random], T], seed: Optional[int]) -> T:
    return trial(random.Random(seed))

def replicate(trial: Callable[[random.Random], T], runs: int,
              seed: Optional[int] = None, workers: int = 1) -> List[T]:
    """
    Run `trial` `runs` times, each on its own random stream.

    Parameters
    trial: callable(random.Random) -> T
        One independent realization. Must be picklable (a module-level
        function or functools.partial of one) when workers > 1.
    runs: int
        Number of trials (>= 1).
    seed: int | None
        Base seed; trial i is seeded with seed + i.
    workers: int
        1 runs in-process; more fans out over a multiprocessing.Pool.

    Returns
    list[T]
        Trial results in trial order, independent of completion order.
    """
    require_positive_int("runs", runs)
    require_positive_int("workers", workers)
    seeds = trial_seeds(runs, seed)
    logger.debug("replicating %d trials (seed=%s, workers=%d)", runs, seed, workers)
    if workers == 1:
        return [_run_seeded(trial, s) for s in seeds]
    chunksize = max(1, runs // (workers * 4))
    with Pool(processes=workers) as pool:
        return pool.starmap(_run_seeded, [(trial, s) for s in seeds], chunksize)

def merge_time_series(series_list: Sequence[Sequence[TimeSeriesSample]],
                      grid: Sequence[float]) -> List[TimeSeriesSample]:
    """
    Average per-trial series point by point on a common grid.

    Every trial must contribute exactly one sample per grid point; a series
    with a missing or off-grid timestamp raises ValueError.
    """
    sums: Dict[float, List[float]] = {t: [0.0, 0.0, 0] for t in grid}
    for series in series_list:
        for pt in series:
            bucket = sums.get(pt.time)
            if bucket is None:
                raise ValueError(f"sample at t={pt.time} is not on the sampling grid")
            bucket[0] += pt.queue_length
            bucket[1] += pt.busy_servers
            bucket[2] += 1
    expected = len(series_list)
    out = []
    for t in grid:
        q_sum, b_sum, count = sums[t]
        if count != expected:
            raise ValueError(f"grid point t={t} has {count} contributions, expected {expected}")
        out.append(TimeSeriesSample(
            t,
            q_sum / count if count else 0.0,
            b_sum / count if count else 0.0,
        ))
    return out

def summarize_queue_trials(results: Sequence[TrialResult], params: QueueParams) -> QueueSummary:
    """Reduce per-day results into the scenario KPIs."""
    clients = [c for res in results for c in res.clients]
    served = [c for c in clients if not c.dropout]
    dropouts = len(clients) - len(served)

    waits = sorted(c.wait_time for c in served)
    n = len(waits)
    grid = sampling_grid(params.day_minutes, params.sample_interval)
    return QueueSummary(
        avg_wait=mean(waits),
        median_wait=value_at(waits, quantile_index(n, 0.5)),
        p95_wait=value_at(waits, quantile_index(n, 0.95)),
        wait_variance=pvariance(waits),
        dropout_count=dropouts,
        dropout_rate=(dropouts / len(clients) * 100.0) if clients else 0.0,
        throughput=n,
        total_clients=len(clients),
        time_series=merge_time_series([res.time_series for res in results], grid),
        wait_times=[c.wait_time for c in served],
        percentiles=percentiles_of(waits),
        staff_count=params.staff_count,
        arrival_rate_per_hour=params.arrival_rate_per_hour,
        mean_service_time=params.mean_service_time,
        runs=len(results),
    )

def simulate_queue_scenario(staff_count: int, dropout_threshold: float,
                            arrival_rate_per_hour: float, mean_service_time: float,
                            runs: int = 1000, *, seed: Optional[int] = None, workers: int = 1,
                            day_minutes: float = DAY_MINUTES,
                            sample_interval: float = SAMPLE_INTERVAL) -> QueueSummary:
    params = QueueParams(
        staff_count=staff_count,
        dropout_threshold=dropout_threshold,
        arrival_rate_per_hour=arrival_rate_per_hour,
        mean_service_time=mean_service_time,
        day_minutes=day_minutes,
        sample_interval=sample_interval,
    ).validate()
    require_positive_int("runs", runs)

    results = replicate(partial(run_one_day, params), runs, seed=seed, workers=workers)
    summary = summarize_queue_trials(results, params)
    logger.info(
        "queue scenario staff=%d rate=%.1f/h service=%.1f min: %d clients, avg wait %.1f min, dropout %.1f%%",
        staff_count, arrival_rate_per_hour, mean_service_time,
        summary.total_clients, summary.avg_wait, summary.dropout_rate,
    )
    return summary
