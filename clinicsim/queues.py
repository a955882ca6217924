# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Minimal discrete-event primitives: Event, Env (clock + Future Event
#   List) and StaffPool, the per-counsellor "next free at" table of a
#   c-server station.
#
# Design notes:
#   - The FEL is a heap ordered by (time, insertion sequence), so equal-time
#     events run in the order they were scheduled. Arrivals are all
#     scheduled up front and therefore win ties against completions.
#   - Event handling is delegated to env.clinic (defined in clinicsim.clinic).
#   - The run drains every event, including completions after closing time;
#     the clinic's on_close hook fires once when the clock reaches T_end.
#
# Usage:
#   from clinicsim.queues import Env, Event, StaffPool
# -----------------------------------------------------------------------------

from __future__ import annotations
import heapq
from typing import List, Optional

class Event:
    """Minimal event object for the Future Event List (FEL)."""
    __slots__ = ("t", "kind", "data", "seq")
    def __init__(self, t: float, kind: str, data: dict):
        self.t = t; self.kind = kind; self.data = data; self.seq = 0
    def __lt__(self, other: "Event"):
        return (self.t, self.seq) < (other.t, other.seq)

class Env:
    """Simulation environment holding the clock, FEL, and a clinic hook.

    Attributes
    ----------
    t : float
        Simulation time (minutes from opening).
    FEL : list[Event]
        Min-heap of scheduled events.
    clinic : object
        Object with on_arrival/on_completion/observe/on_close used by the model.
    """
    def __init__(self, clinic):
        self.t: float = 0.0
        self.FEL: List[Event] = []
        self.clinic = clinic
        self._seq = 0

    def schedule(self, ev: Event):
        ev.seq = self._seq
        self._seq += 1
        heapq.heappush(self.FEL, ev)

    def run(self, T_end: float):
        closed = False
        while self.FEL:
            ev = heapq.heappop(self.FEL)
            if not closed and ev.t > T_end:
                self.t = T_end
                self.clinic.on_close(self)
                closed = True
            self.t = ev.t
            kind, data = ev.kind, ev.data
            if kind == "arrival":
                self.clinic.on_arrival(self, **data)
            elif kind == "completion":
                self.clinic.on_completion(self, **data)
            self.clinic.observe(self)
        if not closed:
            self.t = T_end
            self.clinic.on_close(self)

class StaffPool:
    """c parallel counsellors, each tracked by the time it next becomes free.

    Parameters
    ----------
    c : int
        Number of counsellors on shift.

    Notes
    -----
    - free_at[i] only changes through occupy(), so it never moves backwards
      without a new assignment.
    - Assignment is first-fit by index, not load balanced.
    """
    def __init__(self, c: int):
        self.c = c
        self.free_at: List[float] = [0.0] * c

    def first_free(self, now: float) -> Optional[int]:
        for idx, t_free in enumerate(self.free_at):
            if t_free <= now:
                return idx
        return None

    def occupy(self, idx: int, start: float, duration: float) -> float:
        end = start + duration
        self.free_at[idx] = end
        return end

    def is_busy(self, idx: int, now: float) -> bool:
        return self.free_at[idx] > now

    def busy(self, now: float) -> int:
        return sum(1 for t_free in self.free_at if t_free > now)
