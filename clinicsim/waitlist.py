# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# waitlist.py
# -----------------------------------------------------------------------------
# Purpose:
#   Day-stepped waitlist projection: a scalar backlog advanced over a fixed
#   horizon under noisy demand and capacity, replicated many times and
#   summarised into a histogram, an empirical 95% interval and the chance
#   that the waitlist ends larger than it started.
#
# Design notes:
#   - Per day the random stream is consumed in a fixed order: leave-day
#     draw, demand draw, then the capacity draw (skipped on leave days).
#   - The daily clamps (15 new, 6 seen) bound a single day's swing.
#
# Usage:
#   from clinicsim.waitlist import simulate_waitlist_scenario
#   summary = simulate_waitlist_scenario(2.8, 2.0, seed=1)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Mapping, Optional, Sequence, Union
from .errors import InvalidParameter, require_non_negative, require_positive, require_positive_int
from .entities import ShortageWindow, WaitlistSummary
from .montecarlo import replicate
from .stats import clamp, histogram, quantile_index, round_half_up, value_at
from .variates import normal

logger = logging.getLogger(__name__)

LEAVE_DAY_PROB = 0.05          # whole-team absence, zero capacity
PEAK_SEASON = (60, 75)         # inclusive day range
PEAK_DEMAND_FACTOR = 1.5
DEMAND_CV = 0.2
CAPACITY_CV = 0.1
MAX_NEW_PER_DAY = 15
MAX_SEEN_PER_DAY = 6
BIN_WIDTH = 2

HORIZON_DAYS = 90
RUNS = 5000
INITIAL_BACKLOG = 50

@dataclass(frozen=True)
class WaitlistParams:
    daily_inquiries: float
    daily_capacity: float
    shortage: ShortageWindow = field(default_factory=ShortageWindow)
    horizon_days: int = HORIZON_DAYS
    initial_backlog: int = INITIAL_BACKLOG

    def validate(self) -> "WaitlistParams":
        require_positive("daily_inquiries", self.daily_inquiries)
        require_positive("daily_capacity", self.daily_capacity)
        require_positive_int("horizon_days", self.horizon_days)
        require_non_negative("initial_backlog", self.initial_backlog)
        if not isinstance(self.shortage, ShortageWindow):
            raise InvalidParameter(f"shortage must be a ShortageWindow, got {self.shortage!r}")
        if self.shortage.length_days < 0:
            raise InvalidParameter(f"shortage length_days must be >= 0, got {self.shortage.length_days!r}")
        require_non_negative("shortage capacity_factor", self.shortage.capacity_factor)
        return self

def as_shortage(shortage: Union[ShortageWindow, Mapping, None]) -> ShortageWindow:
    """Accept a ShortageWindow, a config mapping, or None (no shortage)."""
    if shortage is None:
        return ShortageWindow()
    if isinstance(shortage, ShortageWindow):
        return shortage
    try:
        return ShortageWindow(**shortage)
    except TypeError as exc:
        raise InvalidParameter(f"malformed shortage window {shortage!r}: {exc}") from exc

def is_peak_season(day: int) -> bool:
    return PEAK_SEASON[0] <= day <= PEAK_SEASON[1]

def project_waitlist(params: WaitlistParams, rng) -> int:
    """Advance one backlog trajectory over the horizon; return the rounded final size."""
    params.validate()
    backlog = float(params.initial_backlog)
    for day in range(params.horizon_days):
        leave_day = rng.random() < LEAVE_DAY_PROB

        demand_mean = params.daily_inquiries * PEAK_DEMAND_FACTOR if is_peak_season(day) else params.daily_inquiries
        new_clients = clamp(normal(demand_mean, demand_mean * DEMAND_CV, rng), 0, MAX_NEW_PER_DAY)

        capacity = params.daily_capacity
        if params.shortage.covers(day):
            capacity *= params.shortage.capacity_factor
        if leave_day:
            seen = 0.0
        else:
            seen = clamp(normal(capacity, capacity * CAPACITY_CV, rng), 0, MAX_SEEN_PER_DAY)

        backlog = max(0.0, backlog + new_clients - seen)
    return round_half_up(backlog)

def summarize_waitlist(final_values: Sequence[int], initial_backlog: int) -> WaitlistSummary:
    ordered = sorted(final_values)
    n = len(ordered)
    grew = sum(1 for v in ordered if v > initial_backlog)
    return WaitlistSummary(
        histogram=histogram(ordered, BIN_WIDTH),
        median=value_at(ordered, quantile_index(n, 0.5), default=0),
        ci_lower=value_at(ordered, quantile_index(n, 0.025), default=0),
        ci_upper=value_at(ordered, quantile_index(n, 0.975), default=0),
        growth_probability=(grew / n * 100.0) if n else 0.0,
        runs=n,
        initial_backlog=initial_backlog,
        final_values=list(final_values),
    )

def simulate_waitlist_scenario(daily_inquiries: float, daily_capacity: float,
                               shortage: Union[ShortageWindow, Mapping, None] = None,
                               horizon_days: int = HORIZON_DAYS, runs: int = RUNS,
                               initial_backlog: int = INITIAL_BACKLOG, *,
                               seed: Optional[int] = None, workers: int = 1) -> WaitlistSummary:
    params = WaitlistParams(
        daily_inquiries=daily_inquiries,
        daily_capacity=daily_capacity,
        shortage=as_shortage(shortage),
        horizon_days=horizon_days,
        initial_backlog=initial_backlog,
    ).validate()
    require_positive_int("runs", runs)

    finals = replicate(partial(project_waitlist, params), runs, seed=seed, workers=workers)
    summary = summarize_waitlist(finals, initial_backlog)
    logger.info(
        "waitlist scenario demand=%.2f capacity=%.2f: median %d, 95%% CI %d-%d, growth %.1f%%",
        daily_inquiries, daily_capacity, summary.median,
        summary.ci_lower, summary.ci_upper, summary.growth_probability,
    )
    return summary
