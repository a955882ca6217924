from clinicsim.queues import Env, Event, StaffPool


class Recorder:
    def __init__(self):
        self.log = []
        self.observed = []

    def on_arrival(self, env, tag):
        self.log.append(("arrival", env.t, tag))

    def on_completion(self, env, tag):
        self.log.append(("completion", env.t, tag))

    def observe(self, env):
        self.observed.append(env.t)

    def on_close(self, env):
        self.log.append(("close", env.t, None))


def test_events_run_in_time_then_insertion_order():
    rec = Recorder()
    env = Env(rec)
    env.schedule(Event(5.0, "completion", {"tag": "a"}))
    env.schedule(Event(5.0, "arrival", {"tag": "b"}))
    env.schedule(Event(1.0, "arrival", {"tag": "c"}))
    env.schedule(Event(600.0, "completion", {"tag": "d"}))
    env.run(540.0)
    assert rec.log == [
        ("arrival", 1.0, "c"),
        ("completion", 5.0, "a"),
        ("arrival", 5.0, "b"),
        ("close", 540.0, None),
        ("completion", 600.0, "d"),
    ]
    # every processed event is observed, in non-decreasing time
    assert rec.observed == [1.0, 5.0, 5.0, 600.0]


def test_close_fires_once_when_no_late_events():
    rec = Recorder()
    env = Env(rec)
    env.schedule(Event(3.0, "arrival", {"tag": "x"}))
    env.run(540.0)
    assert rec.log[-1] == ("close", 540.0, None)
    assert sum(1 for kind, _, _ in rec.log if kind == "close") == 1
    assert env.t == 540.0


def test_close_fires_on_empty_day():
    rec = Recorder()
    env = Env(rec)
    env.run(540.0)
    assert rec.log == [("close", 540.0, None)]


def test_staff_pool_first_fit_lowest_index():
    pool = StaffPool(3)
    assert pool.first_free(0.0) == 0
    pool.occupy(0, 0.0, 10.0)
    assert pool.first_free(1.0) == 1
    pool.occupy(1, 1.0, 2.0)
    # server 1 is free again at t=3 and wins over idle server 2
    assert pool.first_free(3.0) == 1


def test_staff_pool_busy_counts_future_free_times():
    pool = StaffPool(2)
    assert pool.busy(0.0) == 0
    end = pool.occupy(0, 5.0, 20.0)
    assert end == 25.0
    assert pool.busy(10.0) == 1
    assert pool.is_busy(0, 24.9)
    # free exactly at its end time
    assert not pool.is_busy(0, 25.0)
    assert pool.first_free(10.0) == 1
