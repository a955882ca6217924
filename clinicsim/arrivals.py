# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Generate the day's client requests as a homogeneous Poisson process and
#   schedule them on the FEL.
#
# Design notes:
#   - "Generate then schedule": all arrivals are drawn before the event loop
#     starts, so they consume the random stream first.
#   - Only arrivals strictly before closing time are kept.
#
# Usage:
#   schedule_arrivals(env, params, rng)
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import List
from .queues import Event
from .variates import exponential

def generate_arrivals(rate_per_hour: float, day_minutes: float, rng) -> List[float]:
    # exponential gaps with mean 60 / rate minutes until the day is over
    mean_gap = 60.0 / rate_per_hour
    t = 0.0
    arr = []
    while t < day_minutes:
        t += exponential(mean_gap, rng)
        if t < day_minutes:
            arr.append(t)
    return arr

def schedule_arrivals(env, params, rng) -> int:
    times = generate_arrivals(params.arrival_rate_per_hour, params.day_minutes, rng)
    for cid, ts in enumerate(times):
        env.schedule(Event(ts, "arrival", {"client_id": cid, "arrival_time": ts}))
    return len(times)
