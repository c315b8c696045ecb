from __future__ import annotations

from enum import Enum
import logging

from .aerodynamics import AeroResults, target_angle_of_attack
from .config import AutopilotParameters, SimConfig
from .control import ProportionalLaw, clamp, step_toward
from .dynamics import ModeFlags, SimulationState, vertical_speed

logger = logging.getLogger(__name__)


class LandingPhase(Enum):
    INACTIVE = ""
    GLIDESLOPE = "GLIDESLOPE INTERCEPT"
    FLARE = "FLARE / REDUCE THRUST"
    TOUCHDOWN = "TOUCHDOWN / BRAKING"

    @property
    def status(self) -> str:
        return self.value


class MissionPhase(Enum):
    TAKEOFF = "TAKEOFF ROLL"
    CLIMB = "CLIMBING TO 10K"
    CRUISE = "STABLE CRUISE"


def landing_phase(altitude: float, active: bool, ap: AutopilotParameters = AutopilotParameters()) -> LandingPhase:
    if not active:
        return LandingPhase.INACTIVE
    if altitude > ap.glideslope_floor_m:
        return LandingPhase.GLIDESLOPE
    if altitude > ap.touchdown_altitude_m:
        return LandingPhase.FLARE
    return LandingPhase.TOUCHDOWN


def mission_phase(altitude: float, ap: AutopilotParameters = AutopilotParameters()) -> MissionPhase:
    if altitude < ap.rotation_altitude_m:
        return MissionPhase.TAKEOFF
    if altitude < ap.cruise_altitude_m:
        return MissionPhase.CLIMB
    return MissionPhase.CRUISE


def mission_status(altitude: float, ap: AutopilotParameters = AutopilotParameters()) -> str:
    return MissionPhase.CRUISE.value if altitude >= ap.cruise_status_altitude_m else MissionPhase.CLIMB.value


class Autopilot:
    """Altitude hold, autoland and auto-mission laws over a shared SimulationState.

    Only one mode may be engaged by the user at a time. The render-tick laws
    (altitude hold, autoland) run from ``update``; the auto-mission sequencer
    runs from ``mission_tick`` on its own fixed period.
    """

    def __init__(self, params: AutopilotParameters | None = None, cfg: SimConfig | None = None) -> None:
        self.p = params or AutopilotParameters()
        self.cfg = cfg or SimConfig()
        self.hold_law = ProportionalLaw(self.p.hold_gain)
        self.glideslope_law = ProportionalLaw(self.p.glideslope_gain)
        self.flare_law = ProportionalLaw(self.p.flare_gain)
        self.cruise_law = ProportionalLaw(self.p.cruise_gain)
        self.phase = LandingPhase.INACTIVE

    def reset(self) -> None:
        self.phase = LandingPhase.INACTIVE

    @property
    def landing_status(self) -> str:
        return self.phase.status

    # -- mode transitions ---------------------------------------------------

    def _disengage(self, modes: ModeFlags, *, altitude_hold: bool = False, landing: bool = False, auto_mission: bool = False) -> None:
        if altitude_hold and modes.altitude_hold:
            modes.altitude_hold = False
        if landing and modes.landing:
            modes.landing = False
            self.phase = LandingPhase.INACTIVE
        if auto_mission and modes.auto_mission:
            modes.auto_mission = False

    def toggle_altitude_hold(self, state: SimulationState) -> bool:
        modes = state.modes
        if modes.altitude_hold:
            self._disengage(modes, altitude_hold=True)
        else:
            self._disengage(modes, landing=True, auto_mission=True)
            modes.altitude_hold = True
        logger.info(f"Altitude hold {'engaged' if modes.altitude_hold else 'released'}")
        return modes.altitude_hold

    def toggle_landing(self, state: SimulationState, results: AeroResults) -> bool:
        modes = state.modes
        if not results.is_flying and state.altitude <= 0.0:
            logger.info("Autoland unavailable on the ground")
            return modes.landing

        if modes.landing:
            self._disengage(modes, landing=True)
        else:
            self._disengage(modes, altitude_hold=True, auto_mission=True)
            modes.landing = True
            self.phase = landing_phase(state.altitude, True, self.p)
        logger.info(f"Autoland {'armed' if modes.landing else 'cancelled'} at {state.altitude:.1f} m")
        return modes.landing

    def toggle_auto_mission(self, state: SimulationState) -> bool:
        modes = state.modes
        if modes.auto_mission:
            self._disengage(modes, auto_mission=True)
        else:
            self._disengage(modes, altitude_hold=True, landing=True)
            modes.auto_mission = True
        logger.info(f"Auto-mission {'started' if modes.auto_mission else 'stopped'}")
        return modes.auto_mission

    # -- control laws -------------------------------------------------------

    def update(self, state: SimulationState, results: AeroResults) -> SimulationState:
        """Render-tick correction; ``results`` come from the same tick's model evaluation."""
        next_state = state.copy()
        if next_state.modes.landing:
            self._autoland(next_state, results)
        elif next_state.modes.altitude_hold and results.is_flying:
            self._altitude_hold(next_state, results)
        return next_state

    def _altitude_hold(self, state: SimulationState, results: AeroResults) -> None:
        params = state.params
        if params.total_airspeed <= self.p.hold_min_airspeed_m_s:
            return
        target = target_angle_of_attack(params, results.air_density)
        if target is None:
            return
        target = clamp(target, self.p.hold_min_aoa_deg, self.p.hold_max_aoa_deg)
        # First-order lag toward the trim angle damps the altitude oscillation.
        params.angle_of_attack = self.hold_law.approach(target, params.angle_of_attack)

    def _autoland(self, state: SimulationState, results: AeroResults) -> None:
        p = self.p
        params = state.params
        phase = landing_phase(state.altitude, True, p)
        if phase is not self.phase:
            logger.info(f"Autoland phase: {phase.name} at {state.altitude:.1f} m, {params.velocity:.1f} m/s")
            self.phase = phase

        velocity = step_toward(params.velocity, p.approach_speed_m_s, p.approach_speed_step_m_s, p.approach_speed_band_m_s)
        aoa = params.angle_of_attack

        if phase is LandingPhase.GLIDESLOPE:
            target_rate = p.steep_descent_rate_m_s if state.altitude > p.steep_descent_above_m else p.shallow_descent_rate_m_s
            current_rate = vertical_speed(results, params.weight, p)
            aoa += self.glideslope_law.correction(target_rate, current_rate)
        elif phase is LandingPhase.FLARE:
            aoa = self.flare_law.approach(p.flare_aoa_deg, aoa)
            velocity *= p.flare_speed_decay
        else:
            aoa = p.touchdown_aoa_deg
            velocity = max(0.0, velocity - p.braking_step_m_s)

        params.velocity = velocity
        params.angle_of_attack = clamp(aoa, p.landing_min_aoa_deg, p.landing_max_aoa_deg)

        if phase is LandingPhase.TOUCHDOWN and velocity == 0.0:
            self._disengage(state.modes, landing=True)
            logger.info(f"Autoland complete after {state.distance_traveled / 1000.0:.2f} km")

    def mission_tick(self, state: SimulationState, results: AeroResults) -> SimulationState:
        """Fixed-period auto-mission sequencer: takeoff roll, climb, cruise."""
        next_state = state.copy()
        modes = next_state.modes
        if not modes.auto_mission or modes.landing:
            return next_state

        p = self.p
        params = next_state.params
        phase = mission_phase(next_state.altitude, p)

        if phase is MissionPhase.TAKEOFF:
            params.velocity = min(params.velocity + p.takeoff_speed_step_m_s, self.cfg.max_velocity_m_s)
            if results.is_flying:
                params.angle_of_attack = p.climb_aoa_deg
        elif phase is MissionPhase.CLIMB:
            if params.velocity < p.cruise_speed_m_s:
                params.velocity += p.climb_speed_step_m_s
            params.angle_of_attack = p.climb_aoa_deg
            if modes.altitude_hold:
                self._disengage(modes, altitude_hold=True)
        else:
            params.velocity = self.cruise_law.approach(p.cruise_speed_m_s, params.velocity)
            # Mission-owned sub-mode: not a user toggle, so auto_mission stays engaged.
            if not modes.altitude_hold:
                logger.info(f"Auto-mission reached cruise at {next_state.altitude:.0f} m")
                modes.altitude_hold = True
        return next_state
