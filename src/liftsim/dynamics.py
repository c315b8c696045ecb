from __future__ import annotations

from dataclasses import dataclass, field, replace

from .aerodynamics import AeroResults, FlightParameters
from .config import AutopilotParameters


@dataclass
class ModeFlags:
    auto_mission: bool = False
    altitude_hold: bool = False
    landing: bool = False

    def any_active(self) -> bool:
        return self.auto_mission or self.altitude_hold or self.landing

    def active_names(self) -> list[str]:
        names = []
        if self.auto_mission:
            names.append("auto_mission")
        if self.altitude_hold:
            names.append("altitude_hold")
        if self.landing:
            names.append("landing")
        return names


@dataclass
class SimulationState:
    params: FlightParameters = field(default_factory=FlightParameters)

    # Height above ground (m); 0 is the runway and the only terminal boundary.
    altitude: float = 0.0
    distance_traveled: float = 0.0
    flight_time: float = 0.0

    modes: ModeFlags = field(default_factory=ModeFlags)

    def copy(self) -> SimulationState:
        return replace(self, params=replace(self.params), modes=replace(self.modes))


def mass_damping(weight_kg: float, ap: AutopilotParameters = AutopilotParameters()) -> float:
    """Empirical inertia proxy; keeps very light aircraft from blowing up the climb rate."""
    return max(ap.min_mass_damping, weight_kg / ap.mass_damping_divisor)


def vertical_speed(results: AeroResults, weight_kg: float, ap: AutopilotParameters = AutopilotParameters()) -> float:
    return (results.lift_force - results.weight_force) / mass_damping(weight_kg, ap)


class FlightIntegrator:
    def __init__(self, params: AutopilotParameters | None = None) -> None:
        self.p = params or AutopilotParameters()

    def step(self, state: SimulationState, results: AeroResults, dt: float) -> SimulationState:
        """Advance altitude, distance and flight time by one explicit Euler step.

        ``results`` must be evaluated from ``state`` in the same tick. The input
        state is left untouched.
        """
        dt = max(0.0, dt)
        params = state.params
        climb_rate = vertical_speed(results, params.weight, self.p)

        altitude = max(0.0, state.altitude + climb_rate * dt)
        if state.modes.auto_mission:
            altitude = min(altitude, self.p.ceiling_m)

        flight_time = state.flight_time
        if params.velocity > 0.0 or results.is_flying:
            flight_time += dt

        next_state = state.copy()
        next_state.altitude = altitude
        next_state.distance_traveled = state.distance_traveled + max(0.0, params.velocity) * dt
        next_state.flight_time = flight_time
        return next_state
