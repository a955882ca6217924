from clinicsim.policies import abandons, projected_wait


def test_projected_wait_scales_with_queue_and_staff():
    assert projected_wait(3, 60.0, 10) == 18.0
    assert projected_wait(1, 60.0, 1) == 60.0
    assert projected_wait(0, 60.0, 4) == 0.0


def test_abandons_strictly_above_threshold():
    assert abandons(30.1, 30.0)
    assert not abandons(30.0, 30.0)
    assert not abandons(5.0, 30.0)
