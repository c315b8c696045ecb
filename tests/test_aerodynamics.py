import math

from liftsim.aerodynamics import (
    FlightParameters,
    base_lift_coefficient,
    display_takeoff_speed,
    evaluate,
    evaluate_at_density,
    lift_coefficient,
    lift_curve,
    load_factor,
    target_angle_of_attack,
)
from liftsim.atmosphere import air_density
from liftsim.config import WingType


def a380(**overrides) -> FlightParameters:
    params = FlightParameters(weight=575000.0, wing_span=79.75, chord_length=10.6, angle_of_attack=4.0, wing_type=WingType.AIRBUS)
    for name, value in overrides.items():
        setattr(params, name, value)
    return params


def test_base_offsets_per_wing_type():
    assert base_lift_coefficient(WingType.SYMMETRIC) == 0.0
    assert base_lift_coefficient(WingType.FLAT_BOTTOM) == 0.55
    assert base_lift_coefficient(WingType.THIN) == 0.15
    assert base_lift_coefficient(WingType.STEALTH) == 0.12
    assert base_lift_coefficient(WingType.CAMBERED) == 0.45
    assert base_lift_coefficient(WingType.AIRBUS) == 0.45


def test_lift_coefficient_increases_up_to_stall():
    for wing_type in WingType:
        prev = lift_coefficient(-5.0, wing_type)
        aoa = -4.5
        while aoa <= 16.0:
            cl = lift_coefficient(aoa, wing_type)
            assert cl >= prev
            if prev > 0.0:
                assert cl > prev
            prev = cl
            aoa += 0.5


def test_lift_coefficient_decays_past_stall_until_zero():
    prev = lift_coefficient(16.0, WingType.AIRBUS)
    aoa = 16.5
    while aoa < 21.0:
        cl = lift_coefficient(aoa, WingType.AIRBUS)
        assert cl < prev
        prev = cl
        aoa += 0.5

    # stall factor 1 - (aoa - 16) * 0.2 reaches zero at 21 degrees
    assert lift_coefficient(21.0, WingType.AIRBUS) == 0.0
    assert lift_coefficient(24.0, WingType.AIRBUS) == 0.0


def test_lift_coefficient_is_floored_at_zero():
    assert lift_coefficient(-5.0, WingType.SYMMETRIC) == 0.0


def test_reference_example_at_approach_speed_is_grounded():
    res = evaluate_at_density(a380(velocity=75.0), 1.225)

    assert abs(res.lift_coefficient - (2 * math.pi * math.radians(4.0) + 0.45)) < 1e-12
    assert abs(res.lift_coefficient - 0.8886) < 1e-3
    assert abs(a380().wing_area - 845.35) < 1e-9
    assert abs(res.lift_force - 2.59e6) / 2.59e6 < 0.01
    assert abs(res.weight_force - 575000.0 * 9.80665) < 1e-6
    assert res.is_flying is False


def test_reference_example_at_high_speed_is_flying():
    res = evaluate_at_density(a380(velocity=220.0), 1.225)

    assert abs(res.lift_force - 22.29e6) / 22.29e6 < 0.01
    assert res.lift_force > res.weight_force
    assert res.is_flying is True


def test_not_flying_at_or_below_minimum_airspeed():
    # Very light wing with huge lift still cannot count as flying at 25 m/s.
    params = FlightParameters(weight=1.0, wing_span=30.0, chord_length=5.0, velocity=20.0, head_wind=5.0, angle_of_attack=10.0)
    res = evaluate_at_density(params, 1.225)
    assert res.lift_force > res.weight_force
    assert res.total_airspeed == 25.0
    assert res.is_flying is False


def test_drag_proxy_switches_above_250_m_s():
    low = evaluate_at_density(a380(velocity=250.0), 1.225)
    high = evaluate_at_density(a380(velocity=251.0), 1.225)
    assert abs(low.drag_force - 0.05 * low.lift_force) < 1e-6
    assert abs(high.drag_force - 0.15 * high.lift_force) < 1e-6


def test_required_takeoff_speed_subtracts_headwind_and_may_go_negative():
    calm = evaluate_at_density(a380(), 1.225)
    expected = math.sqrt(2 * 575000.0 * 9.80665 / (1.225 * 845.35 * calm.lift_coefficient))
    assert abs(calm.required_takeoff_speed - expected) < 1e-9

    windy = evaluate_at_density(a380(head_wind=expected + 20.0), 1.225)
    assert windy.required_takeoff_speed < 0.0
    assert display_takeoff_speed(windy) == 0.0


def test_required_takeoff_speed_uses_floored_coefficient():
    res = evaluate_at_density(a380(angle_of_attack=23.0), 1.225)
    assert res.lift_coefficient == 0.0
    expected = math.sqrt(2 * res.weight_force / (1.225 * 845.35 * 0.1))
    assert abs(res.required_takeoff_speed - expected) < 1e-9


def test_flow_visualisation_values():
    res = evaluate_at_density(a380(velocity=100.0, head_wind=10.0), 1.0)
    assert abs(res.velocity_top - 132.0) < 1e-9
    assert abs(res.velocity_bottom - 88.0) < 1e-9
    assert abs(res.pressure_top - (-0.5 * (132.0**2 - 110.0**2))) < 1e-9
    assert abs(res.pressure_bottom - (-0.5 * (88.0**2 - 110.0**2))) < 1e-9
    assert res.pressure_top < 0.0 < res.pressure_bottom


def test_evaluate_uses_altitude_density():
    params = a380(velocity=150.0)
    res = evaluate(params, 5000.0)
    assert abs(res.air_density - air_density(5000.0)) < 1e-12
    assert res.altitude == 5000.0
    # Pure: no mutation of the inputs.
    assert params.velocity == 150.0


def test_load_factor_and_target_aoa_balance_weight():
    params = a380(velocity=120.0)
    target = target_angle_of_attack(params, 1.225)
    assert target is not None
    params.angle_of_attack = target
    res = evaluate_at_density(params, 1.225)
    assert abs(load_factor(res) - 1.0) < 1e-9


def test_target_aoa_undefined_without_airflow():
    assert target_angle_of_attack(a380(velocity=0.0), 1.225) is None


def test_lift_curve_samples_dashboard_range():
    params = a380(head_wind=5.0)
    curve = lift_curve(params, 1.225)
    speeds = [speed for speed, _ in curve]
    assert speeds == [float(v) for v in range(0, 651, 50)]
    assert curve[0][1] > 0.0  # headwind alone produces lift at zero ground speed
    lifts = [lift for _, lift in curve]
    assert lifts == sorted(lifts)
