from __future__ import annotations

from dataclasses import dataclass, replace
import math

from .atmosphere import air_density
from .config import (
    DEFAULT_PRESET,
    AerodynamicParameters,
    AircraftPreset,
    AtmosphereParameters,
    SimConfig,
    WingType,
)


_BASE_LIFT_COEFFICIENT = {
    WingType.SYMMETRIC: 0.0,
    WingType.FLAT_BOTTOM: 0.55,
    WingType.THIN: 0.15,
    WingType.STEALTH: 0.12,
}
# Cambered and airbus sections share the default camber offset.
_DEFAULT_BASE_LIFT_COEFFICIENT = 0.45


@dataclass
class FlightParameters:
    weight: float = DEFAULT_PRESET.weight_kg
    wing_span: float = DEFAULT_PRESET.wing_span_m
    chord_length: float = DEFAULT_PRESET.chord_length_m

    # Ground speed and headwind component (m/s)
    velocity: float = 0.0
    head_wind: float = 0.0

    angle_of_attack: float = 4.0
    wing_type: WingType = DEFAULT_PRESET.wing_type

    @property
    def wing_area(self) -> float:
        return self.wing_span * self.chord_length

    @property
    def total_airspeed(self) -> float:
        return self.velocity + self.head_wind

    def with_preset(self, preset: AircraftPreset) -> FlightParameters:
        return replace(
            self,
            wing_type=preset.wing_type,
            weight=preset.weight_kg,
            wing_span=preset.wing_span_m,
            chord_length=preset.chord_length_m,
        )


@dataclass(frozen=True)
class AeroResults:
    lift_force: float
    drag_force: float
    weight_force: float
    lift_coefficient: float
    required_takeoff_speed: float
    is_flying: bool
    pressure_top: float
    pressure_bottom: float
    velocity_top: float
    velocity_bottom: float
    total_airspeed: float
    air_density: float
    altitude: float


def base_lift_coefficient(wing_type: WingType) -> float:
    return _BASE_LIFT_COEFFICIENT.get(WingType(wing_type), _DEFAULT_BASE_LIFT_COEFFICIENT)


def lift_coefficient(
    angle_of_attack_deg: float,
    wing_type: WingType,
    aero: AerodynamicParameters = AerodynamicParameters(),
) -> float:
    cl = aero.lift_slope_per_rad * math.radians(angle_of_attack_deg) + base_lift_coefficient(wing_type)

    # Post-stall: lift collapses linearly past the critical angle.
    if angle_of_attack_deg > aero.stall_onset_deg:
        cl *= max(0.0, 1.0 - (angle_of_attack_deg - aero.stall_onset_deg) * aero.stall_decay_per_deg)
    return max(0.0, cl)


def lift_force(params: FlightParameters, density: float, airspeed: float | None = None) -> float:
    v = params.total_airspeed if airspeed is None else airspeed
    cl = lift_coefficient(params.angle_of_attack, params.wing_type)
    return 0.5 * density * v * v * params.wing_area * cl


def weight_force(weight_kg: float, atmo: AtmosphereParameters = AtmosphereParameters()) -> float:
    return weight_kg * atmo.gravity_m_s2


def surface_pressure(density: float, surface_speed: float, airspeed: float) -> float:
    """Bernoulli pressure difference relative to free stream (illustrative only)."""
    return -0.5 * density * (surface_speed * surface_speed - airspeed * airspeed)


def evaluate(
    params: FlightParameters,
    altitude: float,
    aero: AerodynamicParameters = AerodynamicParameters(),
    atmo: AtmosphereParameters = AtmosphereParameters(),
) -> AeroResults:
    """Instantaneous forces and flow values. Pure: depends only on its inputs."""
    density = air_density(altitude, atmo)
    return evaluate_at_density(params, density, altitude, aero, atmo)


def evaluate_at_density(
    params: FlightParameters,
    density: float,
    altitude: float = 0.0,
    aero: AerodynamicParameters = AerodynamicParameters(),
    atmo: AtmosphereParameters = AtmosphereParameters(),
) -> AeroResults:
    area = params.wing_area
    airspeed = params.total_airspeed
    cl = lift_coefficient(params.angle_of_attack, params.wing_type, aero)

    lift = 0.5 * density * airspeed * airspeed * area * cl
    drag_ratio = aero.drag_ratio_high_speed if airspeed > aero.high_speed_drag_threshold_m_s else aero.drag_ratio_low_speed
    weight = weight_force(params.weight, atmo)

    # Negative when the headwind alone exceeds the requirement; display clamps.
    takeoff_cl = max(aero.min_lift_coefficient_for_takeoff, cl)
    required_takeoff_speed = math.sqrt((2.0 * weight) / (density * area * takeoff_cl)) - params.head_wind

    v_top = airspeed * aero.upper_surface_speed_ratio
    v_bottom = airspeed * aero.lower_surface_speed_ratio

    return AeroResults(
        lift_force=lift,
        drag_force=lift * drag_ratio,
        weight_force=weight,
        lift_coefficient=cl,
        required_takeoff_speed=required_takeoff_speed,
        is_flying=lift > weight and airspeed > aero.flying_min_airspeed_m_s,
        pressure_top=surface_pressure(density, v_top, airspeed),
        pressure_bottom=surface_pressure(density, v_bottom, airspeed),
        velocity_top=v_top,
        velocity_bottom=v_bottom,
        total_airspeed=airspeed,
        air_density=density,
        altitude=altitude,
    )


def display_takeoff_speed(results: AeroResults) -> float:
    return max(0.0, results.required_takeoff_speed)


def load_factor(results: AeroResults) -> float:
    if results.weight_force <= 0.0:
        return 0.0
    return results.lift_force / results.weight_force


def target_angle_of_attack(
    params: FlightParameters,
    density: float,
    aero: AerodynamicParameters = AerodynamicParameters(),
    atmo: AtmosphereParameters = AtmosphereParameters(),
) -> float | None:
    """Angle of attack (deg) whose pre-stall lift exactly balances weight.

    Returns None when there is no airflow to work with.
    """
    airspeed = params.total_airspeed
    dynamic_force = 0.5 * density * airspeed * airspeed * params.wing_area
    if dynamic_force <= 0.0:
        return None
    target_cl = weight_force(params.weight, atmo) / dynamic_force
    return math.degrees((target_cl - base_lift_coefficient(params.wing_type)) / aero.lift_slope_per_rad)


def lift_curve(
    params: FlightParameters,
    density: float,
    cfg: SimConfig = SimConfig(),
) -> list[tuple[float, float]]:
    """(ground speed m/s, lift N) samples from 0 to max velocity for the dashboard."""
    samples: list[tuple[float, float]] = []
    steps = int(cfg.max_velocity_m_s // cfg.lift_curve_step_m_s)
    for i in range(steps + 1):
        speed = i * cfg.lift_curve_step_m_s
        samples.append((speed, lift_force(params, density, speed + params.head_wind)))
    return samples
