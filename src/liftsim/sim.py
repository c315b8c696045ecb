from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
import logging
import time

import pygame

from .analysis import FALLBACK_MESSAGE, FlightAnalyst
from .config import PRESETS, SimConfig
from .control import clamp
from .session import FlightSession
from .ui import FlightDisplay

logger = logging.getLogger(__name__)

_PRESET_KEYS = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
    pygame.K_5: 4,
    pygame.K_6: 5,
    pygame.K_KP1: 0,
    pygame.K_KP2: 1,
    pygame.K_KP3: 2,
    pygame.K_KP4: 3,
    pygame.K_KP5: 4,
    pygame.K_KP6: 5,
}

# key -> (parameter, multiplicative step) for airframe edits.
_SCALE_KEYS = {
    pygame.K_LEFTBRACKET: ("weight", 1.0 / 1.05),
    pygame.K_RIGHTBRACKET: ("weight", 1.05),
    pygame.K_COMMA: ("wing_span", 1.0 / 1.02),
    pygame.K_PERIOD: ("wing_span", 1.02),
    pygame.K_SEMICOLON: ("chord_length", 1.0 / 1.02),
    pygame.K_QUOTE: ("chord_length", 1.02),
}

_LOCK_NOTICES = {
    "angle_of_attack": "AoA under autopilot control",
    "velocity": "Ground speed under autopilot control",
}


class LiftSimulatorApp:
    def __init__(self, analyst: FlightAnalyst | None = None) -> None:
        self.cfg = SimConfig()
        self.session = FlightSession(self.cfg)
        self.display = FlightDisplay(self.cfg.screen_w, self.cfg.screen_h, self.cfg)
        self.analyst = analyst or FlightAnalyst()
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="analysis")
        self.analysis_future: Future | None = None
        self.analysis_text = ""
        self.zoom = 1.0
        self.notice_text = ""
        self.notice_time_s = 0.0

        # Continuous rates for held keys, per second.
        self.aoa_rate_deg_s = 6.0
        self.velocity_rate_m_s2 = 40.0
        self.wind_rate_m_s2 = 10.0

    def _notify(self, text: str, duration_s: float = 1.4) -> None:
        self.notice_text = text
        self.notice_time_s = duration_s

    def _edit(self, name: str, value: float) -> None:
        try:
            if not self.session.set_parameter(name, value):
                self._notify(_LOCK_NOTICES.get(name, f"{name} locked"))
        except ValueError as exc:
            self._notify(str(exc))

    def _nudge(self, name: str, delta: float) -> None:
        current = getattr(self.session.params, name)
        lower = 0.0 if name in ("velocity", "head_wind") else self.cfg.min_user_aoa_deg
        self._edit(name, max(lower, current + delta))

    def _request_analysis(self) -> None:
        if self.analysis_future is not None and not self.analysis_future.done():
            return
        self.analysis_text = "Analysing..."
        snapshot_params = self.session.state.copy().params
        self.analysis_future = self.executor.submit(self.analyst.analyze, snapshot_params, self.session.results)

    def _poll_analysis(self) -> None:
        if self.analysis_future is None or not self.analysis_future.done():
            return
        try:
            self.analysis_text = self.analysis_future.result()
        except Exception:
            logger.exception("Analysis worker failed")
            self.analysis_text = FALLBACK_MESSAGE
        self.analysis_future = None

    def _handle_keydown(self, key: int) -> None:
        session = self.session
        if key == pygame.K_r:
            session.reset()
            self._notify("Session reset")
        elif key == pygame.K_p or key == pygame.K_SPACE:
            paused = session.toggle_pause()
            self._notify("FROZEN" if paused else "Resumed")
        elif key == pygame.K_h:
            on = session.toggle_altitude_hold()
            self._notify(f"Altitude hold {'ON' if on else 'OFF'}")
        elif key == pygame.K_l:
            was = session.state.modes.landing
            on = session.toggle_landing()
            if on == was and not on:
                self._notify("Autoland needs the aircraft airborne")
            else:
                self._notify(f"Autoland {'ARMED' if on else 'OFF'}")
        elif key == pygame.K_m:
            on = session.toggle_auto_mission()
            self._notify(f"Auto-mission {'ON' if on else 'OFF'}")
        elif key == pygame.K_i:
            self._request_analysis()
        elif key == pygame.K_z:
            self.zoom = clamp(self.zoom - 0.05, self.cfg.min_zoom, self.cfg.max_zoom)
        elif key == pygame.K_x:
            self.zoom = clamp(self.zoom + 0.05, self.cfg.min_zoom, self.cfg.max_zoom)
        elif key in _PRESET_KEYS:
            preset = session.select_preset(_PRESET_KEYS[key])
            self._notify(f"Preset: {preset.label}")
        elif key in _SCALE_KEYS:
            name, factor = _SCALE_KEYS[key]
            self._edit(name, getattr(session.params, name) * factor)

    def _process_input(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                self._handle_keydown(event.key)

        keys = pygame.key.get_pressed()
        dt = 1.0 / self.cfg.fps
        if keys[pygame.K_UP]:
            self._nudge("angle_of_attack", self.aoa_rate_deg_s * dt)
        if keys[pygame.K_DOWN]:
            self._nudge("angle_of_attack", -self.aoa_rate_deg_s * dt)
        if keys[pygame.K_w]:
            self._nudge("velocity", self.velocity_rate_m_s2 * dt)
        if keys[pygame.K_s]:
            self._nudge("velocity", -self.velocity_rate_m_s2 * dt)
        if keys[pygame.K_q]:
            self._nudge("head_wind", self.wind_rate_m_s2 * dt)
        if keys[pygame.K_a]:
            self._nudge("head_wind", -self.wind_rate_m_s2 * dt)
        return True

    def run(self) -> None:
        running = True
        clock = pygame.time.Clock()
        logger.info(f"Starting with {PRESETS[0].label}")

        try:
            while running:
                running = self._process_input()
                results = self.session.frame(time.perf_counter())
                self._poll_analysis()

                frame_dt = 1.0 / self.cfg.fps
                if self.notice_time_s > 0.0:
                    self.notice_time_s = max(0.0, self.notice_time_s - frame_dt)
                notice = self.notice_text if self.notice_time_s > 0.0 else ""

                self.display.render(
                    self.session.state,
                    results,
                    simulating=not self.session.paused,
                    zoom=self.zoom,
                    vsi=self.session.vertical_speed,
                    curve=self.session.lift_curve(),
                    landing_status=self.session.landing_status,
                    mission_status=self.session.mission_status,
                    notice=notice,
                    analysis=self.analysis_text,
                )
                clock.tick(self.cfg.fps)
        finally:
            self.executor.shutdown(wait=False)
            self.display.close()
