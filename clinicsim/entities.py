# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Record types flowing through the clinic models: per-client outcomes,
#   occupancy samples, single-day results and scenario summaries.
#
# Design notes:
#   - Client outcomes and samples are frozen; a trial creates each one once.
#   - Summaries expose to_dict() so experiment scripts can tabulate or dump
#     them as JSON.
#
# Usage:
#   from clinicsim.entities import ClientOutcome, TimeSeriesSample
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional, Tuple

@dataclass(frozen=True)
class ClientOutcome:
    arrival_time: float                       # minutes from opening
    wait_time: float                          # observed wait, or projected wait for dropouts
    service_time: Optional[float] = None      # None for dropouts
    dropout: bool = False
    service_end_time: Optional[float] = None  # None for dropouts

@dataclass(frozen=True)
class TimeSeriesSample:
    time: float
    queue_length: float
    busy_servers: float

@dataclass
class TrialResult:
    clients: List[ClientOutcome]              # sorted by arrival time
    time_series: List[TimeSeriesSample]       # step-held onto the sampling grid

    @property
    def served(self) -> List[ClientOutcome]:
        return [c for c in self.clients if not c.dropout]

    @property
    def dropouts(self) -> List[ClientOutcome]:
        return [c for c in self.clients if c.dropout]

@dataclass(frozen=True)
class ShortageWindow:
    """Days [start_day, start_day + length_days) run at capacity * capacity_factor."""
    start_day: int = -1
    length_days: int = 0
    capacity_factor: float = 1.0

    def covers(self, day: int) -> bool:
        return self.start_day <= day < self.start_day + self.length_days

@dataclass
class QueueSummary:
    avg_wait: float
    median_wait: float
    p95_wait: float
    wait_variance: float
    dropout_count: int
    dropout_rate: float                       # percent of all clients
    throughput: int                           # served clients across all runs
    total_clients: int
    time_series: List[TimeSeriesSample]       # per grid point means across runs
    wait_times: List[float]                   # served waits, for percentile charts
    percentiles: List[Tuple[int, float]]
    staff_count: int
    arrival_rate_per_hour: float
    mean_service_time: float
    runs: int

    def to_dict(self) -> Dict:
        return asdict(self)

@dataclass
class WaitlistSummary:
    histogram: List[Tuple[int, int]]          # sparse (bin, count), ascending
    median: int
    ci_lower: int
    ci_upper: int
    growth_probability: float                 # percent of runs ending above the start
    runs: int
    initial_backlog: int
    final_values: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)
