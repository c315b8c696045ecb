from liftsim.autopilot import LandingPhase
from liftsim.session import FlightSession


DT = 1.0 / 60.0


def test_auto_mission_takes_off_climbs_and_settles_at_ceiling():
    session = FlightSession()
    session.toggle_auto_mission()

    takeoff_time = None
    max_altitude = 0.0
    for i in range(int(90.0 / DT)):
        session.advance(DT)
        max_altitude = max(max_altitude, session.state.altitude)
        if takeoff_time is None and session.state.altitude > 1.0:
            takeoff_time = i * DT

    state = session.state
    assert takeoff_time is not None
    assert takeoff_time < 10.0
    assert max_altitude <= 10000.0
    assert state.altitude > 9900.0
    assert state.modes.auto_mission is True
    assert state.modes.altitude_hold is True
    assert session.mission_status == "STABLE CRUISE"
    assert abs(state.params.velocity - 700.0 / 3.6) < 1.0
    assert state.distance_traveled > 0.0
    assert state.flight_time > 80.0


def test_autoland_from_pattern_altitude_to_full_stop():
    session = FlightSession()
    session.set_parameter("velocity", 75.0)
    session.state.altitude = 500.0
    session.advance(0.0)
    assert session.toggle_landing() is True

    phases = []
    for _ in range(int(300.0 / DT)):
        session.advance(DT)
        phase = session.autopilot.phase
        if phase is not LandingPhase.INACTIVE and (not phases or phases[-1] is not phase):
            phases.append(phase)
        assert session.state.altitude >= 0.0
        if not session.state.modes.landing:
            break

    state = session.state
    assert state.modes.landing is False
    assert state.params.velocity == 0.0
    assert state.altitude == 0.0
    assert phases[:3] == [LandingPhase.GLIDESLOPE, LandingPhase.FLARE, LandingPhase.TOUCHDOWN]
    assert session.landing_status == ""
