from __future__ import annotations

from dataclasses import replace
import logging
import math

from .aerodynamics import AeroResults, FlightParameters, evaluate, lift_curve
from .autopilot import Autopilot, mission_status
from .config import PRESETS, AerodynamicParameters, AircraftPreset, AtmosphereParameters, AutopilotParameters, SimConfig
from .control import clamp
from .dynamics import FlightIntegrator, SimulationState, vertical_speed

logger = logging.getLogger(__name__)

_POSITIVE_FIELDS = ("weight", "wing_span", "chord_length")
_EDITABLE_FIELDS = _POSITIVE_FIELDS + ("velocity", "head_wind", "angle_of_attack")

# Floating-point slack so three 1/60 s frames count as one 50 ms mission period.
_TIMER_EPS = 1e-9


class FlightSession:
    """Owns the simulation state and serialises every update into one tick pipeline.

    ``advance(dt)`` is the deterministic fixed-step entry point. ``frame(t)``
    is the wall-clock driver used by the interactive app.
    """

    def __init__(
        self,
        cfg: SimConfig | None = None,
        autopilot_params: AutopilotParameters | None = None,
        aero: AerodynamicParameters | None = None,
        atmo: AtmosphereParameters | None = None,
        params: FlightParameters | None = None,
    ) -> None:
        self.cfg = cfg or SimConfig()
        self.aero = aero or AerodynamicParameters()
        self.atmo = atmo or AtmosphereParameters()
        self.integrator = FlightIntegrator(autopilot_params)
        self.autopilot = Autopilot(autopilot_params, self.cfg)
        self.state = SimulationState(params=params or FlightParameters(angle_of_attack=self.cfg.default_aoa_deg))
        self.paused = False
        self._last_timestamp: float | None = None
        self._mission_clock = 0.0
        self.results = self._evaluate()

    def _evaluate(self) -> AeroResults:
        return evaluate(self.state.params, self.state.altitude, self.aero, self.atmo)

    # -- ticking ------------------------------------------------------------

    def advance(self, dt: float) -> AeroResults:
        if self.paused:
            return self.results
        dt = max(0.0, dt)

        results = self._evaluate()
        state = self.integrator.step(self.state, results, dt)
        self.state = self.autopilot.update(state, results)

        if self.state.modes.auto_mission:
            self._mission_clock += dt
            period = self.autopilot.p.mission_period_s
            while self._mission_clock + _TIMER_EPS >= period:
                self._mission_clock -= period
                self.state = self.autopilot.mission_tick(self.state, self._evaluate())
        else:
            self._mission_clock = 0.0

        self.results = self._evaluate()
        return self.results

    def frame(self, timestamp_s: float) -> AeroResults:
        if self.paused:
            self._last_timestamp = None
            return self.results
        if self._last_timestamp is None:
            dt = 0.0
        else:
            dt = max(0.0, timestamp_s - self._last_timestamp)
        self._last_timestamp = timestamp_s
        return self.advance(dt)

    def pause(self) -> None:
        self.paused = True
        self._last_timestamp = None

    def resume(self) -> None:
        self.paused = False
        self._last_timestamp = None

    def toggle_pause(self) -> bool:
        if self.paused:
            self.resume()
        else:
            self.pause()
        logger.info(f"Simulation {'frozen' if self.paused else 'resumed'}")
        return self.paused

    def reset(self) -> None:
        params = replace(self.state.params, velocity=0.0, angle_of_attack=self.cfg.default_aoa_deg)
        self.state = SimulationState(params=params)
        self.autopilot.reset()
        self._mission_clock = 0.0
        self._last_timestamp = None
        self.results = self._evaluate()
        logger.info("Session reset")

    # -- autopilot toggles --------------------------------------------------

    def toggle_altitude_hold(self) -> bool:
        engaged = self.autopilot.toggle_altitude_hold(self.state)
        self._mission_clock = 0.0
        return engaged

    def toggle_landing(self) -> bool:
        return self.autopilot.toggle_landing(self.state, self.results)

    def toggle_auto_mission(self) -> bool:
        engaged = self.autopilot.toggle_auto_mission(self.state)
        self._mission_clock = 0.0
        return engaged

    # -- user edits ---------------------------------------------------------

    def is_locked(self, name: str) -> bool:
        modes = self.state.modes
        if name == "angle_of_attack":
            return modes.any_active()
        if name == "velocity":
            return modes.landing or modes.auto_mission
        return False

    def set_parameter(self, name: str, value: float) -> bool:
        """Apply a user edit. Returns False when an autopilot mode owns the field."""
        if name not in _EDITABLE_FIELDS:
            raise ValueError(f"Unknown flight parameter: {name!r}")
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be a finite number, got {value}")
        if name in _POSITIVE_FIELDS and value <= 0.0:
            raise ValueError(f"{name} must be positive, got {value}")
        if name in ("velocity", "head_wind") and value < 0.0:
            raise ValueError(f"{name} cannot be negative, got {value}")
        if self.is_locked(name):
            logger.info(f"Ignoring {name} edit: owned by {', '.join(self.state.modes.active_names())}")
            return False

        if name == "angle_of_attack":
            value = clamp(value, self.cfg.min_user_aoa_deg, self.cfg.max_user_aoa_deg)
        elif name == "velocity":
            value = min(value, self.cfg.max_velocity_m_s)
        elif name == "head_wind":
            value = min(value, self.cfg.max_head_wind_m_s)

        setattr(self.state.params, name, value)
        self.results = self._evaluate()
        return True

    def select_preset(self, preset: AircraftPreset | int) -> AircraftPreset:
        if isinstance(preset, int):
            preset = PRESETS[preset]
        self.state.params = self.state.params.with_preset(preset)
        self.results = self._evaluate()
        logger.info(f"Preset selected: {preset.label}")
        return preset

    # -- read-only views ----------------------------------------------------

    @property
    def params(self) -> FlightParameters:
        return self.state.params

    @property
    def landing_status(self) -> str:
        return self.autopilot.landing_status

    @property
    def mission_status(self) -> str:
        if not self.state.modes.auto_mission:
            return ""
        return mission_status(self.state.altitude, self.autopilot.p)

    @property
    def vertical_speed(self) -> float:
        return vertical_speed(self.results, self.state.params.weight, self.autopilot.p)

    def lift_curve(self) -> list[tuple[float, float]]:
        return lift_curve(self.state.params, self.results.air_density, self.cfg)
