from liftsim.control import ProportionalLaw, clamp, step_toward


def test_proportional_law_closes_fraction_of_error_per_call():
    law = ProportionalLaw(gain=0.1)
    value = 0.0
    for _ in range(100):
        value = law.approach(10.0, value)
    assert abs(value - 10.0 * (1.0 - 0.9**100)) < 1e-9


def test_proportional_correction_is_signed():
    law = ProportionalLaw(gain=0.5)
    assert law.correction(4.0, 2.0) == 1.0
    assert law.correction(-4.0, 0.0) == -2.0


def test_step_toward_respects_band():
    assert abs(step_toward(80.0, 75.0, 0.4, 2.0) - 79.6) < 1e-9
    assert abs(step_toward(70.0, 75.0, 0.4, 2.0) - 70.4) < 1e-9
    assert step_toward(76.9, 75.0, 0.4, 2.0) == 76.9
    assert step_toward(73.0, 75.0, 0.4, 2.0) == 73.0


def test_clamp():
    assert clamp(5.0, -2.0, 15.0) == 5.0
    assert clamp(-9.0, -2.0, 15.0) == -2.0
    assert clamp(99.0, -2.0, 15.0) == 15.0
