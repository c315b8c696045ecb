from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import os


class WingType(str, Enum):
    SYMMETRIC = "symmetric"
    CAMBERED = "cambered"
    FLAT_BOTTOM = "flat-bottom"
    THIN = "thin"
    AIRBUS = "airbus"
    STEALTH = "stealth"


@dataclass(frozen=True)
class AtmosphereParameters:
    sea_level_density_kg_m3: float = 1.225
    # Linear density drop per metre; not ISA, tuned so the ceiling stays flyable.
    density_lapse_per_m: float = 0.00008
    min_density_kg_m3: float = 0.35
    gravity_m_s2: float = 9.80665


@dataclass(frozen=True)
class AerodynamicParameters:
    lift_slope_per_rad: float = 2.0 * math.pi
    stall_onset_deg: float = 16.0
    stall_decay_per_deg: float = 0.2
    min_lift_coefficient_for_takeoff: float = 0.1
    flying_min_airspeed_m_s: float = 25.0
    high_speed_drag_threshold_m_s: float = 250.0
    drag_ratio_low_speed: float = 0.05
    drag_ratio_high_speed: float = 0.15
    upper_surface_speed_ratio: float = 1.2
    lower_surface_speed_ratio: float = 0.8


@dataclass(frozen=True)
class AutopilotParameters:
    # Integrator inertia proxy: max(min_mass_damping, weight / mass_damping_divisor).
    min_mass_damping: float = 10000.0
    mass_damping_divisor: float = 25.0
    ceiling_m: float = 10000.0

    # Altitude hold
    hold_min_airspeed_m_s: float = 10.0
    hold_gain: float = 0.02
    hold_min_aoa_deg: float = -5.0
    hold_max_aoa_deg: float = 15.0

    # Autoland
    approach_speed_m_s: float = 75.0
    approach_speed_band_m_s: float = 2.0
    approach_speed_step_m_s: float = 0.4
    glideslope_floor_m: float = 15.0
    steep_descent_above_m: float = 50.0
    steep_descent_rate_m_s: float = -6.0
    shallow_descent_rate_m_s: float = -2.0
    glideslope_gain: float = 0.08
    touchdown_altitude_m: float = 0.5
    flare_aoa_deg: float = 8.5
    flare_gain: float = 0.1
    flare_speed_decay: float = 0.99
    touchdown_aoa_deg: float = 2.0
    braking_step_m_s: float = 2.5
    landing_min_aoa_deg: float = -2.0
    landing_max_aoa_deg: float = 15.0

    # Auto-mission
    mission_period_s: float = 0.05
    rotation_altitude_m: float = 50.0
    takeoff_speed_step_m_s: float = 1.5
    climb_speed_step_m_s: float = 1.0
    climb_aoa_deg: float = 12.0
    cruise_speed_m_s: float = 700.0 / 3.6
    cruise_gain: float = 0.1
    cruise_altitude_m: float = 9900.0
    cruise_status_altitude_m: float = 9999.0


@dataclass(frozen=True)
class SimConfig:
    screen_w: int = 1280
    screen_h: int = 760
    fps: int = 60
    max_velocity_m_s: float = 650.0
    max_head_wind_m_s: float = 100.0
    min_user_aoa_deg: float = -5.0
    max_user_aoa_deg: float = 25.0
    default_aoa_deg: float = 4.0
    min_zoom: float = 0.1
    max_zoom: float = 2.0
    lift_curve_step_m_s: float = 50.0
    particle_count: int = 420


@dataclass(frozen=True)
class AnalysisConfig:
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
    model: str = "gemini-2.0-flash"
    timeout_s: float = 20.0
    temperature: float = 0.7
    top_p: float = 0.95
    api_key: str = ""

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY") or ""
        model = os.environ.get("LIFTSIM_ANALYSIS_MODEL", cls.model)
        return cls(model=model, api_key=key)


@dataclass(frozen=True)
class AircraftPreset:
    wing_type: WingType
    label: str
    weight_kg: float
    wing_span_m: float
    chord_length_m: float


PRESETS: tuple[AircraftPreset, ...] = (
    AircraftPreset(WingType.AIRBUS, "Airbus A380 (Super Heavy)", 575000.0, 79.75, 10.6),
    AircraftPreset(WingType.STEALTH, "F-35 Lightning (Fighter)", 29900.0, 10.7, 5.5),
    AircraftPreset(WingType.CAMBERED, "Cessna 172 (General)", 1111.0, 11.0, 1.6),
    AircraftPreset(WingType.SYMMETRIC, "Extra 300 (Aerobatic)", 950.0, 7.5, 1.4),
    AircraftPreset(WingType.FLAT_BOTTOM, "Piper Cub (Trainer)", 550.0, 10.7, 1.6),
    AircraftPreset(WingType.THIN, "F-16 Falcon (Supersonic)", 12000.0, 9.96, 3.5),
)

DEFAULT_PRESET = PRESETS[0]
