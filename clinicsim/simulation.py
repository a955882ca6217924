# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate a single replication ("one day"): build the clinic, schedule
#   arrivals, run the event loop, and return the day's TrialResult.
#
# Design notes:
#   - Replication and aggregation live in clinicsim.montecarlo.
#   - Parameters are validated before the first random draw.
#
# Usage:
#   from clinicsim.simulation import QueueParams, run_one_day
#   result = run_one_day(QueueParams(10, 30, 15, 60), random.Random(0))
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from dataclasses import dataclass
from .errors import InvalidParameter, require_positive, require_positive_int
from .entities import TrialResult
from .queues import Env
from .clinic import Clinic
from .metrics import DayMetrics
from .arrivals import schedule_arrivals

logger = logging.getLogger(__name__)

DAY_MINUTES = 540.0      # 9:00 to 18:00
SAMPLE_INTERVAL = 10.0

@dataclass(frozen=True)
class QueueParams:
    staff_count: int
    dropout_threshold: float       # minutes
    arrival_rate_per_hour: float
    mean_service_time: float       # minutes
    day_minutes: float = DAY_MINUTES
    sample_interval: float = SAMPLE_INTERVAL

    def validate(self) -> "QueueParams":
        require_positive_int("staff_count", self.staff_count)
        require_positive("dropout_threshold", self.dropout_threshold)
        require_positive("arrival_rate_per_hour", self.arrival_rate_per_hour)
        require_positive("mean_service_time", self.mean_service_time)
        require_positive("day_minutes", self.day_minutes)
        require_positive("sample_interval", self.sample_interval)
        if self.sample_interval > self.day_minutes:
            raise InvalidParameter(
                f"sample_interval ({self.sample_interval}) exceeds day_minutes ({self.day_minutes})"
            )
        return self

def run_one_day(params: QueueParams, rng) -> TrialResult:
    params.validate()

    M = DayMetrics(params.day_minutes, params.sample_interval)
    clinic = Clinic(params, rng, M)
    env = Env(clinic)

    # Opening state, then exogenous arrivals, then run to empty
    clinic.observe(env)
    n = schedule_arrivals(env, params, rng)
    logger.debug("day scheduled %d arrivals", n)
    env.run(params.day_minutes)

    return M.summary()
