from liftsim.aerodynamics import FlightParameters, evaluate
from liftsim.dynamics import FlightIntegrator, ModeFlags, SimulationState, mass_damping, vertical_speed


def heavy_state(**kwargs) -> SimulationState:
    params = FlightParameters(velocity=kwargs.pop("velocity", 0.0), angle_of_attack=kwargs.pop("aoa", 4.0))
    return SimulationState(params=params, **kwargs)


def test_mass_damping_floor_for_light_aircraft():
    assert mass_damping(550.0) == 10000.0
    assert mass_damping(575000.0) == 23000.0


def test_altitude_never_negative_for_any_dt():
    integrator = FlightIntegrator()
    for altitude in (0.0, 0.3, 5.0, 120.0):
        for dt in (0.0, 1.0 / 120.0, 1.0 / 60.0, 0.5, 3.0, 60.0):
            state = heavy_state(altitude=altitude, velocity=10.0, aoa=-5.0)
            results = evaluate(state.params, state.altitude)
            assert results.lift_force < results.weight_force
            nxt = integrator.step(state, results, dt)
            assert nxt.altitude >= 0.0


def test_climb_rate_integrates_net_force():
    integrator = FlightIntegrator()
    state = heavy_state(altitude=100.0, velocity=220.0)
    results = evaluate(state.params, state.altitude)
    rate = vertical_speed(results, state.params.weight)
    assert rate > 0.0

    nxt = integrator.step(state, results, 0.1)
    assert abs(nxt.altitude - (100.0 + rate * 0.1)) < 1e-9
    assert abs(nxt.distance_traveled - 22.0) < 1e-9
    assert abs(nxt.flight_time - 0.1) < 1e-12


def test_step_does_not_mutate_input_state():
    integrator = FlightIntegrator()
    state = heavy_state(altitude=100.0, velocity=220.0)
    results = evaluate(state.params, state.altitude)
    integrator.step(state, results, 1.0)
    assert state.altitude == 100.0
    assert state.distance_traveled == 0.0


def test_ceiling_clamp_only_during_auto_mission():
    integrator = FlightIntegrator()
    free = heavy_state(altitude=9990.0, velocity=250.0, aoa=12.0)
    results = evaluate(free.params, free.altitude)
    assert integrator.step(free, results, 1.0).altitude > 10000.0

    mission = heavy_state(altitude=9990.0, velocity=250.0, aoa=12.0, modes=ModeFlags(auto_mission=True))
    assert integrator.step(mission, results, 1.0).altitude == 10000.0


def test_flight_time_only_advances_when_moving_or_flying():
    integrator = FlightIntegrator()
    parked = heavy_state()
    results = evaluate(parked.params, parked.altitude)
    nxt = integrator.step(parked, results, 1.0)
    assert nxt.flight_time == 0.0
    assert nxt.distance_traveled == 0.0

    rolling = heavy_state(velocity=5.0)
    results = evaluate(rolling.params, rolling.altitude)
    nxt = integrator.step(rolling, results, 2.0)
    assert nxt.flight_time == 2.0
    assert nxt.distance_traveled == 10.0


def test_flight_time_advances_on_headwind_lift_at_zero_ground_speed():
    integrator = FlightIntegrator()
    # A light trainer held aloft by a strong headwind.
    params = FlightParameters(weight=550.0, wing_span=10.7, chord_length=1.6, velocity=0.0, head_wind=60.0, angle_of_attack=6.0)
    state = SimulationState(params=params, altitude=200.0)
    results = evaluate(params, state.altitude)
    assert results.is_flying
    nxt = integrator.step(state, results, 0.5)
    assert nxt.flight_time == 0.5
    assert nxt.distance_traveled == 0.0


def test_zero_dt_leaves_state_unchanged():
    integrator = FlightIntegrator()
    state = heavy_state(altitude=50.0, velocity=150.0)
    results = evaluate(state.params, state.altitude)
    nxt = integrator.step(state, results, 0.0)
    assert nxt.altitude == 50.0
    assert nxt.distance_traveled == 0.0
    assert nxt.flight_time == 0.0
