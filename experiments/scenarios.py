"""
experiments/scenarios.py

Holds the named planning scenarios to sweep during experiments. Each entry
overrides part of config/baseline.yaml; the harness merges the overrides and
passes the resulting parameters to the engines unchanged.
"""

from __future__ import annotations

# --- Queue model (one working day, replicated) ---

BASELINE = {
    "name": "baseline",
    "label": "Baseline",
    "overrides": {},
}

INCREASED_STAFF = {
    "name": "increased_staff",
    "label": "Increased Staff",
    "overrides": {"queue": {"staff_count": 20}},
}

REDUCED_INTAKE = {
    "name": "reduced_intake",
    "label": "Reduced Intake",
    "overrides": {"queue": {"arrival_rate_per_hour": 10}},
}

HIGH_DEMAND = {
    "name": "high_demand",
    "label": "High Demand",
    "overrides": {"queue": {"arrival_rate_per_hour": 25}},
}

UNDERSTAFFED_SHIFT = {
    "name": "understaffed_shift",
    "label": "Understaffed Shift",
    "overrides": {"queue": {"staff_count": 5}},
}

FASTER_COUNSELLING = {
    "name": "faster_counselling",
    "label": "Faster Counselling",
    "overrides": {"queue": {"mean_service_time": 45}},
}

QUEUE_SCENARIOS = [
    BASELINE, INCREASED_STAFF, REDUCED_INTAKE,
    HIGH_DEMAND, UNDERSTAFFED_SHIFT, FASTER_COUNSELLING,
]

# --- Waitlist projection (90 days, replicated) ---

CURRENT_STATE = {
    "name": "baseline",
    "label": "Current State",
    "overrides": {},
}

HIRE_THERAPIST = {
    "name": "hire_therapist",
    "label": "Hire 1 New Therapist",
    "overrides": {"waitlist": {"daily_capacity": 3.0}},
}

CRISIS = {
    "name": "crisis",
    "label": "Crisis Hits",
    "overrides": {"waitlist": {"daily_inquiries": 4.5}},
}

STAFF_SHORTAGE = {
    "name": "staff_shortage",
    "label": "Staff Shortage (Sick Leave)",
    "overrides": {
        "waitlist": {
            "shortage": {
                "start_day": 30,
                "length_days": 14,
                "capacity_factor": 0.3,
            },
        },
    },
}

WAITLIST_SCENARIOS = [CURRENT_STATE, HIRE_THERAPIST, CRISIS, STAFF_SHORTAGE]
