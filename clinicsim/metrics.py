# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Collect one simulated day's client outcomes and occupancy samples, and
#   resample the irregular sample stream onto the fixed reporting grid.
#
# Design notes:
#   - Keep side-effect methods (note_*) for instrumentation from the clinic.
#   - Resampling is a step function (last sample at or before each grid
#     point), never an interpolation.
#
# Usage:
#   M = DayMetrics(540, 10); ...; M.summary()
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from typing import List, Sequence
from .entities import ClientOutcome, TimeSeriesSample, TrialResult

logger = logging.getLogger(__name__)

def sampling_grid(day_minutes: float, interval: float) -> List[float]:
    """Grid points 0, interval, ..., up to and including day_minutes."""
    return [i * interval for i in range(int(day_minutes // interval) + 1)]

def resample(samples: Sequence[TimeSeriesSample], grid: Sequence[float]) -> List[TimeSeriesSample]:
    """
    Carry the most recent sample at or before each grid point forward.

    Parameters
    samples: sequence[TimeSeriesSample]
        Raw samples, non-decreasing in time, the first at or before grid[0].
    grid: sequence[float]
        Ascending grid times.

    Returns
    list[TimeSeriesSample]
        One sample per grid point, stamped with the grid time.
    """
    out: List[TimeSeriesSample] = []
    if not samples:
        return [TimeSeriesSample(t, 0, 0) for t in grid]
    idx = 0
    for t in grid:
        while idx < len(samples) - 1 and samples[idx + 1].time <= t:
            idx += 1
        s = samples[idx]
        out.append(TimeSeriesSample(t, s.queue_length, s.busy_servers))
    return out

class DayMetrics:
    def __init__(self, day_minutes: float, sample_interval: float):
        self.day_minutes = day_minutes
        self.sample_interval = sample_interval
        self.clients: List[ClientOutcome] = []
        self.samples: List[TimeSeriesSample] = []
        self.served = 0
        self.dropouts = 0

    def note_served(self, arrival_time: float, wait: float, service_time: float, end_time: float):
        self.served += 1
        self.clients.append(ClientOutcome(
            arrival_time=arrival_time,
            wait_time=wait,
            service_time=service_time,
            dropout=False,
            service_end_time=end_time,
        ))

    def note_dropout(self, arrival_time: float, projected_wait: float):
        self.dropouts += 1
        self.clients.append(ClientOutcome(arrival_time=arrival_time, wait_time=projected_wait, dropout=True))

    def note_state(self, t: float, queue_length: int, busy_servers: int):
        self.samples.append(TimeSeriesSample(t, queue_length, busy_servers))

    def summary(self) -> TrialResult:
        clients = sorted(self.clients, key=lambda c: c.arrival_time)
        grid = sampling_grid(self.day_minutes, self.sample_interval)
        logger.debug("day done: %d served, %d dropouts, %d raw samples",
                     self.served, self.dropouts, len(self.samples))
        return TrialResult(clients=clients, time_series=resample(self.samples, grid))
