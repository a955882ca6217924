# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# policies.py
# -----------------------------------------------------------------------------
# Purpose:
#   Client abandonment policy applied at intake when every counsellor is
#   busy.
#
# Design notes:
#   - Keep pure functions to ease testing (policy -> decision).
#   - The decision uses a projected wait computed from the queue length at
#     intake, not the wait the client would eventually observe.
#
# Usage:
#   from clinicsim.policies import projected_wait, abandons
# -----------------------------------------------------------------------------

from __future__ import annotations

def projected_wait(queue_length: int, mean_service_time: float, staff_count: int) -> float:
    """Rough wait estimate (minutes) for the client at the back of the queue."""
    return queue_length * mean_service_time / staff_count

def abandons(projected: float, dropout_threshold: float) -> bool:
    return projected > dropout_threshold
