# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# stats.py
# -----------------------------------------------------------------------------
# Purpose:
#   Sorting-based order statistics, mean/variance and fixed-width histogram
#   binning shared by the queue and waitlist aggregators.
#
# Design notes:
#   - Order statistics index a sorted list directly (sorted[floor(n*q)])
#     and clamp into [0, n-1]; no interpolation between neighbours.
#   - Rounding is half-up so bins and backlogs land where a JavaScript
#     Math.round front end expects them (Python's round() is half-even).
#
# Usage:
#   from clinicsim.stats import percentiles_of, histogram
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
import statistics
from typing import Dict, Iterable, List, Sequence, Tuple

PERCENTILE_MARKS = (0, 10, 25, 50, 75, 90, 95, 99, 100)

def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def clamp(x: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, x))

def value_at(sorted_values: Sequence[float], index: int, default: float = 0.0) -> float:
    """Return sorted_values[index] with the index clamped into [0, n-1]."""
    n = len(sorted_values)
    if n == 0:
        return default
    return sorted_values[max(0, min(index, n - 1))]

def quantile_index(n: int, fraction: float) -> int:
    """floor(n * fraction), e.g. n // 2 for the median, n * 0.95 for p95."""
    return int(math.floor(n * fraction))

def percentiles_of(values: Iterable[float]) -> List[Tuple[int, float]]:
    """
    Values at the fixed percentile marks of an observation series.

    For each mark p the index is floor((p/100) * n), minus one for p == 100,
    clamped into [0, n-1] on the ascending-sorted input. So for 1..10 the
    50th percentile is 6 and the 100th is 10.

    Returns
    list[(int, float)]
        (percentile mark, value) pairs; empty when there are no observations.
    """
    ordered = sorted(values)
    n = len(ordered)
    if n == 0:
        return []
    out = []
    for p in PERCENTILE_MARKS:
        idx = int(math.floor((p / 100.0) * n)) - (1 if p == 100 else 0)
        out.append((p, value_at(ordered, idx)))
    return out

def mean(values: Sequence[float]) -> float:
    return statistics.fmean(values) if values else 0.0

def pvariance(values: Sequence[float]) -> float:
    """Population variance (divide by n); zero for an empty sample."""
    return statistics.pvariance(values) if values else 0.0

def histogram(values: Iterable[float], width: float) -> List[Tuple[int, int]]:
    """
    Sparse fixed-width histogram keyed by round_half_up(v / width) * width.
    Empty bins are omitted; bins come back in ascending order.
    """
    bins: Dict[int, int] = {}
    for v in values:
        key = round_half_up(v / width) * width
        bins[key] = bins.get(key, 0) + 1
    return sorted(bins.items())
