# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# insights.py
# -----------------------------------------------------------------------------
# Purpose:
#   Plain-language readouts of scenario summaries for service planners:
#   a one-line verdict per queue scenario, a delta against the baseline
#   and the waitlist growth sentence for each named preset.
#
# Usage:
#   from clinicsim.insights import queue_insight, stat_delta, waitlist_insight
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
from typing import Optional
from .entities import QueueSummary, WaitlistSummary
from .stats import round_half_up

EXCESSIVE_WAIT_MINUTES = 60.0
HIGH_DROPOUT_PCT = 25.0

WAITLIST_INSIGHTS = {
    "baseline": "With current capacity, there's a {p}% chance the waitlist will be larger in {days} days, indicating an unsustainable model.",
    "hire_therapist": "By adding one therapist, the probability of waitlist growth drops to just {p}%, creating a more resilient and predictable service.",
    "crisis": "A demand surge creates a near-certainty ({p}%) of overwhelming the waitlist, highlighting a critical need for a crisis response plan.",
    "staff_shortage": "A 2-week staff shortage period causes waitlist growth probability to rise to {p}%, highlighting the impact of temporary capacity loss.",
}

def _shown(x: float) -> float:
    # comparisons use the one-decimal value the report prints
    return round(float(x), 1)

def queue_insight(stats: QueueSummary, baseline: Optional[QueueSummary] = None) -> str:
    # checks run in priority order; the first that fires wins
    avg_wait = _shown(stats.avg_wait)
    if avg_wait > EXCESSIVE_WAIT_MINUTES:
        return "Clients are waiting excessively long; capacity is likely insufficient."
    if _shown(stats.dropout_rate) > HIGH_DROPOUT_PCT:
        return "Dropout rate is high; wait time may be impacting retention."
    if baseline is not None and avg_wait < _shown(baseline.avg_wait):
        return "Improved average wait time compared to baseline."
    return "System performance is balanced under current settings."

def stat_delta(current: float, baseline: float) -> str:
    """Arrow-and-magnitude change against the baseline, e.g. '↓3.2'."""
    try:
        cur, base = float(current), float(baseline)
    except (TypeError, ValueError):
        return "N/A"
    if math.isnan(cur) or math.isnan(base):
        return "N/A"
    delta = _shown(cur) - _shown(base)
    if delta < 0:
        return f"↓{abs(delta):.1f}"
    if delta > 0:
        return f"↑{delta:.1f}"
    return "–"

def waitlist_insight(key: str, stats: WaitlistSummary, horizon_days: int = 90) -> str:
    template = WAITLIST_INSIGHTS.get(key)
    p = round_half_up(stats.growth_probability)
    if template is None:
        return f"There's a {p}% chance the waitlist will be larger in {horizon_days} days."
    return template.format(p=p, days=horizon_days)
