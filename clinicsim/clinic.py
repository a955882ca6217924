# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# clinic.py
# -----------------------------------------------------------------------------
# Purpose:
#   Clinic wiring for one day. Decides what happens to a client on arrival
#   (start a session, wait, or drop out) and who a freed counsellor sees
#   next, and feeds the day's metrics.
#
# Design notes:
#   - One FIFO waiting queue in front of a StaffPool.
#   - Each processed event schedules at most one completion.
#   - A completion for a counsellor that was re-occupied at the same
#     instant is stale: that counsellor already has a later completion.
#
# Usage:
#   clinic = Clinic(params, rng, metrics)
#   env = Env(clinic)
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import deque
from typing import Deque
from .queues import Event, StaffPool
from .variates import exponential
from . import policies

class Clinic:
    def __init__(self, params, rng, metrics):
        self.params = params
        self.rng = rng
        self.M = metrics
        self.staff = StaffPool(params.staff_count)
        self.queue: Deque[float] = deque()   # arrival times of waiting clients

    # Incoming requests (already created by arrivals.py)
    def on_arrival(self, env, client_id: int, arrival_time: float):
        idx = self.staff.first_free(env.t)
        if idx is not None:
            self._start_session(env, idx, arrival_time)
            return
        self.queue.append(arrival_time)
        projected = policies.projected_wait(
            len(self.queue), self.params.mean_service_time, self.params.staff_count
        )
        if policies.abandons(projected, self.params.dropout_threshold):
            self.queue.pop()
            self.M.note_dropout(arrival_time, projected)

    # A counsellor finished a session
    def on_completion(self, env, server: int):
        if self.staff.is_busy(server, env.t):
            return
        if self.queue:
            arrival_time = self.queue.popleft()
            self._start_session(env, server, arrival_time)

    def observe(self, env):
        self.M.note_state(env.t, len(self.queue), self.staff.busy(env.t))

    def on_close(self, env):
        self.observe(env)

    def _start_session(self, env, idx: int, arrival_time: float):
        duration = exponential(self.params.mean_service_time, self.rng)
        end = self.staff.occupy(idx, env.t, duration)
        self.M.note_served(arrival_time, env.t - arrival_time, duration, end)
        env.schedule(Event(end, "completion", {"server": idx}))
