from __future__ import annotations

import pathlib
import sys
from dataclasses import dataclass

ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from liftsim.aerodynamics import load_factor
from liftsim.autopilot import MissionPhase, mission_phase
from liftsim.config import PRESETS
from liftsim.session import FlightSession


@dataclass
class MissionMetrics:
    preset: str
    liftoff_time_s: float | None
    cruise_time_s: float | None
    max_altitude_m: float
    final_altitude_m: float
    max_load_factor: float
    altitude_band_m: float


def evaluate_mission(preset_index: int = 0, duration_s: float = 180.0, dt: float = 1.0 / 60.0) -> MissionMetrics:
    session = FlightSession()
    preset = session.select_preset(preset_index)
    session.toggle_auto_mission()

    liftoff_time = None
    cruise_time = None
    max_alt = 0.0
    max_n = 0.0
    cruise_alts: list[float] = []

    total_steps = int(duration_s / dt)
    for i in range(total_steps):
        t = i * dt
        results = session.advance(dt)
        alt = session.state.altitude
        max_alt = max(max_alt, alt)
        max_n = max(max_n, load_factor(results))

        if liftoff_time is None and results.is_flying:
            liftoff_time = t
        if mission_phase(alt, session.autopilot.p) is MissionPhase.CRUISE:
            if cruise_time is None:
                cruise_time = t
            cruise_alts.append(alt)

    # Peak-to-peak altitude once cruise is reached.
    band = max(cruise_alts) - min(cruise_alts) if cruise_alts else 0.0

    return MissionMetrics(
        preset=preset.label,
        liftoff_time_s=liftoff_time,
        cruise_time_s=cruise_time,
        max_altitude_m=max_alt,
        final_altitude_m=session.state.altitude,
        max_load_factor=max_n,
        altitude_band_m=band,
    )


if __name__ == "__main__":
    for index in range(len(PRESETS)):
        print(evaluate_mission(index))
