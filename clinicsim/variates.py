# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# variates.py
# -----------------------------------------------------------------------------
# Purpose:
#   Exponential and normal variates built from a uniform source. Used for
#   inter-arrival gaps, session lengths and daily demand/capacity noise.
#
# Design notes:
#   - The uniform source is injected (random.Random or anything exposing
#     .random()) so every trial can be seeded on its own.
#   - normal() may return negative values; callers clamp physical counts.
#
# Usage:
#   from clinicsim.variates import exponential, normal
#   gap = exponential(4.0, rng)
# -----------------------------------------------------------------------------

from __future__ import annotations
import math


def exponential(mean_interval: float, rng) -> float:
    """Inverse-CDF exponential draw with the given mean."""
    tail = 1.0 - rng.random()
    if tail <= 0.0:
        # u == 1 is outside [0, 1) but custom sources may still produce it
        tail = math.ulp(0.0)
    return -math.log(tail) * mean_interval


def normal(mean: float, std_dev: float, rng) -> float:
    """Box-Muller normal draw consuming exactly two uniforms."""
    u = 1.0 - rng.random()
    v = rng.random()
    if u <= 0.0:
        u = math.ulp(0.0)
    return mean + std_dev * math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
