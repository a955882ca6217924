"""
clinicsim package initializer.

This package contains the two Monte Carlo engines used to plan a
counselling service: a one-day event-driven queue model (Poisson intake,
exponential sessions, c counsellors, abandonment at intake) replicated over
many days, and a 90-day stochastic waitlist projection replicated over many
trajectories. Shared variates, order statistics and the replication
scaffolding live alongside them.
"""
from .errors import InvalidParameter
from .entities import (
    ClientOutcome, TimeSeriesSample, TrialResult, ShortageWindow,
    QueueSummary, WaitlistSummary,
)
from .simulation import QueueParams, run_one_day
from .montecarlo import replicate, simulate_queue_scenario
from .waitlist import WaitlistParams, project_waitlist, simulate_waitlist_scenario
from .stats import percentiles_of

__all__ = [
    "InvalidParameter",
    "ClientOutcome", "TimeSeriesSample", "TrialResult", "ShortageWindow",
    "QueueSummary", "WaitlistSummary",
    "QueueParams", "run_one_day", "replicate", "simulate_queue_scenario",
    "WaitlistParams", "project_waitlist", "simulate_waitlist_scenario",
    "percentiles_of",
]
