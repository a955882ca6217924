import random

import pytest

from clinicsim.arrivals import generate_arrivals
from clinicsim.errors import InvalidParameter
from clinicsim.metrics import resample, sampling_grid
from clinicsim.entities import TimeSeriesSample
from clinicsim.simulation import QueueParams, run_one_day


GRID = [10 * i for i in range(55)]

SCENARIOS = [
    QueueParams(10, 30, 15, 60),
    QueueParams(1, 30, 30, 60),
    QueueParams(5, 45, 25, 45),
    QueueParams(3, 10, 6, 20),
]


def test_sampling_grid_has_55_points():
    grid = sampling_grid(540, 10)
    assert len(grid) == 55
    assert grid == GRID


def test_resample_step_holds_last_sample():
    samples = [
        TimeSeriesSample(0, 0, 0),
        TimeSeriesSample(4.0, 1, 2),
        TimeSeriesSample(10.0, 2, 2),
        TimeSeriesSample(10.0, 3, 2),
        TimeSeriesSample(27.5, 0, 1),
    ]
    out = resample(samples, [0, 10, 20, 30])
    assert [(p.time, p.queue_length, p.busy_servers) for p in out] == [
        (0, 0, 0), (10, 3, 2), (20, 3, 2), (30, 0, 1),
    ]


def test_generate_arrivals_inside_day():
    arr = generate_arrivals(15, 540, random.Random(1))
    assert arr == sorted(arr)
    assert all(0 < t < 540 for t in arr)
    # 135 expected arrivals
    assert 90 < len(arr) < 180


@pytest.mark.parametrize("params", SCENARIOS)
def test_trial_invariants(params):
    for seed in range(15):
        res = run_one_day(params, random.Random(seed))

        assert [pt.time for pt in res.time_series] == GRID
        for pt in res.time_series:
            assert pt.queue_length >= 0
            assert 0 <= pt.busy_servers <= params.staff_count

        served = [c for c in res.clients if not c.dropout]
        dropouts = [c for c in res.clients if c.dropout]
        assert len(served) + len(dropouts) == len(res.clients)

        arrivals = [c.arrival_time for c in res.clients]
        assert arrivals == sorted(arrivals)
        assert len(set(arrivals)) == len(arrivals)

        for c in served:
            assert c.wait_time >= 0
            assert c.service_end_time == pytest.approx(c.arrival_time + c.wait_time + c.service_time)
        for c in dropouts:
            assert c.service_time is None
            assert c.wait_time > params.dropout_threshold


def test_trial_is_deterministic_for_a_seed():
    params = QueueParams(10, 30, 15, 60)
    a = run_one_day(params, random.Random(99))
    b = run_one_day(params, random.Random(99))
    assert a == b


def test_zero_arrival_day_is_not_an_error():
    params = QueueParams(2, 30, 1e-6, 60)
    res = run_one_day(params, random.Random(0))
    assert res.clients == []
    assert len(res.time_series) == 55
    assert all(pt.queue_length == 0 and pt.busy_servers == 0 for pt in res.time_series)


@pytest.mark.parametrize("bad", [
    dict(staff_count=0),
    dict(staff_count=-2),
    dict(staff_count=2.5),
    dict(dropout_threshold=0),
    dict(arrival_rate_per_hour=-1),
    dict(mean_service_time=0),
    dict(sample_interval=0),
])
def test_invalid_parameters_raise_before_any_draw(bad, exploding):
    kwargs = dict(staff_count=3, dropout_threshold=30, arrival_rate_per_hour=15, mean_service_time=60)
    kwargs.update(bad)
    with pytest.raises(InvalidParameter):
        run_one_day(QueueParams(**kwargs), exploding)


def test_invalid_parameter_is_a_value_error():
    with pytest.raises(ValueError):
        QueueParams(0, 30, 15, 60).validate()
