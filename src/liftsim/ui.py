from __future__ import annotations

import importlib
import math
import random

import pygame

from .aerodynamics import AeroResults, FlightParameters, display_takeoff_speed, load_factor
from .config import SimConfig, WingType
from .dynamics import SimulationState


SKY_LOW = (40, 92, 170)
SKY_HIGH = (6, 10, 30)
GROUND = (46, 58, 44)
RUNWAY = (70, 70, 76)
WHITE = (240, 240, 240)
MUTED = (150, 160, 180)
PANEL = (15, 23, 42)
BLUE = (59, 130, 246)
HIGH_PRESSURE = (239, 68, 68)
LOW_PRESSURE = (96, 165, 250)
LIFT_VECTOR = (34, 197, 94)
WEIGHT_VECTOR = (245, 158, 11)
AIRFOIL = (203, 213, 225)

# Fraction of chord used as half-thickness for (upper, lower) surfaces.
_PROFILE_THICKNESS = {
    WingType.SYMMETRIC: (0.12, 0.12),
    WingType.FLAT_BOTTOM: (0.16, 0.0),
    WingType.THIN: (0.05, 0.05),
    WingType.AIRBUS: (0.11, 0.05),
    WingType.STEALTH: (0.08, 0.08),
    WingType.CAMBERED: (0.14, 0.03),
}


def format_flight_time(total_seconds: float) -> str:
    total = max(0, int(total_seconds))
    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def airfoil_outline(wing_type: WingType, chord_px: float, samples: int = 24) -> list[tuple[float, float]]:
    """Closed airfoil outline centred on the origin, leading edge at -chord/2, y down."""
    upper, lower = _PROFILE_THICKNESS.get(wing_type, (0.12, 0.04))
    top: list[tuple[float, float]] = []
    bottom: list[tuple[float, float]] = []
    for i in range(samples + 1):
        s = i / samples
        x = -chord_px / 2.0 + s * chord_px
        if wing_type == WingType.STEALTH:
            # Faceted diamond section.
            shape = 1.0 - abs(2.0 * s - 0.7) / 1.3
        else:
            shape = 2.6 * math.sqrt(s) * (1.0 - s)
        top.append((x, -upper * chord_px * shape))
        bottom.append((x, lower * chord_px * shape))
    return top + list(reversed(bottom))


def _rotate(points: list[tuple[float, float]], angle_rad: float, cx: float, cy: float) -> list[tuple[float, float]]:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    return [(cx + x * c - y * s, cy + x * s + y * c) for x, y in points]


def _blend(a: tuple[int, int, int], b: tuple[int, int, int], t: float) -> tuple[int, int, int]:
    t = max(0.0, min(1.0, t))
    return (int(a[0] + (b[0] - a[0]) * t), int(a[1] + (b[1] - a[1]) * t), int(a[2] + (b[2] - a[2]) * t))


class _FontAdapter:
    def __init__(self, backend: str, font_obj) -> None:
        self.backend = backend
        self.font_obj = font_obj

    def render(self, text: str, color: tuple[int, int, int]):
        if self.backend == "freetype":
            surface, _ = self.font_obj.render(text, fgcolor=color)
            return surface
        return self.font_obj.render(text, True, color)


def _load_font(size: int) -> _FontAdapter | None:
    for backend, module in (("freetype", "pygame.freetype"), ("font", "pygame.font")):
        try:
            mod = importlib.import_module(module)
            if hasattr(mod, "init"):
                mod.init()
            return _FontAdapter(backend, mod.SysFont("Consolas", size))
        except Exception:
            continue
    return None


class AirflowParticles:
    """Cosmetic flow field: particles stream past the wing at surface speeds."""

    def __init__(self, width: int, height: int, count: int, rng: random.Random | None = None) -> None:
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.particles: list[list[float]] = [
            [self.rng.uniform(0, width), self.rng.uniform(0, height), self.rng.uniform(0.9, 1.1)] for _ in range(count)
        ]

    def update(self, results: AeroResults, center_y: float, dt: float, zoom: float) -> None:
        px_per_m = 6.0 * zoom
        for particle in self.particles:
            above = particle[1] < center_y
            speed = results.velocity_top if above else results.velocity_bottom
            near = math.exp(-abs(particle[1] - center_y) / 140.0)
            local = results.total_airspeed + (speed - results.total_airspeed) * near
            particle[0] -= local * particle[2] * px_per_m * dt
            if particle[0] < 0.0:
                particle[0] += self.width
                particle[1] = self.rng.uniform(0, self.height)

    def draw(self, screen: pygame.Surface, results: AeroResults, center_y: float) -> None:
        for x, y, _ in self.particles:
            color = LOW_PRESSURE if y < center_y else HIGH_PRESSURE
            if results.total_airspeed <= 0.0:
                color = MUTED
            screen.fill(color, (int(x), int(y), 2, 2))


class FlightDisplay:
    def __init__(self, width: int, height: int, cfg: SimConfig | None = None) -> None:
        pygame.init()
        self.cfg = cfg or SimConfig()
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Aerodynamic Lift Simulator")
        self.font = _load_font(20)
        self.small_font = _load_font(15)
        self.width = width
        self.height = height
        self.view_w = int(width * 0.66)
        self.particles = AirflowParticles(self.view_w, height, self.cfg.particle_count)
        self._last_ticks = pygame.time.get_ticks()

    def _text(self, text: str, pos: tuple[float, float], color=WHITE, small: bool = True) -> None:
        font = self.small_font if small else self.font
        if font is None:
            return
        self.screen.blit(font.render(text, color), pos)

    def _draw_background(self, state: SimulationState, zoom: float) -> None:
        self.screen.fill(_blend(SKY_LOW, SKY_HIGH, state.altitude / 10000.0), (0, 0, self.view_w, self.height))

        # Ground drops out of view as the aircraft climbs.
        ground_y = self.height * 0.62 + 60.0 + state.altitude * 4.0 * zoom
        if ground_y < self.height:
            pygame.draw.rect(self.screen, GROUND, (0, ground_y, self.view_w, self.height - ground_y))
            pygame.draw.rect(self.screen, RUNWAY, (0, ground_y, self.view_w, 14))
            offset = -(state.distance_traveled * 6.0 * zoom) % 80.0
            x = offset - 80.0
            while x < self.view_w:
                pygame.draw.line(self.screen, WHITE, (x, ground_y + 7), (x + 36, ground_y + 7), 2)
                x += 80.0

    def _draw_airfoil(self, params: FlightParameters, results: AeroResults, zoom: float) -> tuple[float, float]:
        cx = self.view_w * 0.5
        cy = self.height * 0.45
        chord_px = 300.0 * zoom
        outline = _rotate(airfoil_outline(params.wing_type, chord_px), math.radians(-params.angle_of_attack), cx, cy)
        pygame.draw.polygon(self.screen, AIRFOIL, outline)
        pygame.draw.polygon(self.screen, WHITE, outline, 2)

        # Vectors scale with load factor, capped so they stay on screen.
        n = load_factor(results)
        weight_len = 90.0 * zoom
        lift_len = weight_len * min(3.0, n)
        pygame.draw.line(self.screen, LIFT_VECTOR, (cx, cy), (cx, cy - lift_len), 4)
        pygame.draw.line(self.screen, WEIGHT_VECTOR, (cx, cy), (cx, cy + weight_len), 4)
        return cx, cy

    def _draw_hud(self, state: SimulationState, results: AeroResults, vsi: float, simulating: bool) -> None:
        params = state.params
        x = 18
        y = 14
        lines = [
            f"Airspeed : {results.total_airspeed * 3.6:7.1f} km/h  (GS {params.velocity * 3.6:6.1f})",
            f"AoA      : {params.angle_of_attack:7.2f} deg   CL {results.lift_coefficient:5.3f}",
            f"Lift     : {results.lift_force / 1000.0:9.0f} kN",
            f"Drag     : {results.drag_force / 1000.0:9.0f} kN",
            f"VSI      : {vsi:+7.1f} m/s",
            f"Density  : {results.air_density:7.3f} kg/m3",
        ]
        for line in lines:
            self._text(line, (x, y), small=False)
            y += 24

        status = "AIRBORNE" if results.is_flying else "GROUNDED"
        self._text(status, (x, self.height - 34), LIFT_VECTOR if results.is_flying else HIGH_PRESSURE, small=False)
        if not simulating:
            self._text("FROZEN", (x + 140, self.height - 34), WEIGHT_VECTOR, small=False)

        readouts = [
            ("DISTANCE", f"{state.distance_traveled / 1000.0:.2f} km"),
            ("FLIGHT TIME", format_flight_time(state.flight_time)),
            ("ALTITUDE", f"{state.altitude:.0f} m"),
        ]
        rx = self.view_w - 420
        for label, value in readouts:
            pygame.draw.rect(self.screen, PANEL, (rx, self.height - 64, 130, 50), border_radius=8)
            self._text(label, (rx + 10, self.height - 60), MUTED)
            self._text(value, (rx + 10, self.height - 40), WHITE, small=False)
            rx += 140

    def _draw_dashboard(self, state: SimulationState, results: AeroResults, curve: list[tuple[float, float]]) -> None:
        px = self.view_w
        pw = self.width - self.view_w
        pygame.draw.rect(self.screen, PANEL, (px, 0, pw, self.height))
        x = px + 16
        y = 14

        self._text(f"Takeoff V : {display_takeoff_speed(results) * 3.6:6.0f} km/h", (x, y))
        self._text(f"Load factor: {load_factor(results):5.2f}", (x, y + 18))
        self._text(f"Weight {state.params.weight:,.0f} kg  span {state.params.wing_span:g} m  chord {state.params.chord_length:g} m", (x, y + 36), MUTED)
        self._text(f"Wind {state.params.head_wind * 3.6:5.1f} km/h  profile {state.params.wing_type.value}", (x, y + 54), MUTED)

        # Lift profile chart (N vs ground speed).
        chart = pygame.Rect(x, y + 84, pw - 32, 170)
        pygame.draw.rect(self.screen, (2, 6, 23), chart, border_radius=6)
        pygame.draw.rect(self.screen, (51, 65, 85), chart, 1, border_radius=6)
        self._text("Lift profile (N vs km/h)", (chart.x + 8, chart.y + 6), MUTED)
        if len(curve) >= 2:
            max_speed = curve[-1][0] or 1.0
            max_lift = max(lift for _, lift in curve) or 1.0
            points = [
                (chart.x + 8 + (speed / max_speed) * (chart.w - 16), chart.bottom - 8 - (lift / max_lift) * (chart.h - 34))
                for speed, lift in curve
            ]
            pygame.draw.lines(self.screen, BLUE, False, points, 2)
            weight_frac = min(1.0, results.weight_force / max_lift)
            wy = chart.bottom - 8 - weight_frac * (chart.h - 34)
            pygame.draw.line(self.screen, WEIGHT_VECTOR, (chart.x + 8, wy), (chart.right - 8, wy), 1)
            cur_x = chart.x + 8 + min(1.0, state.params.velocity / max_speed) * (chart.w - 16)
            pygame.draw.line(self.screen, LIFT_VECTOR, (cur_x, chart.y + 24), (cur_x, chart.bottom - 8), 1)

    def _draw_modes(self, state: SimulationState, landing_status: str, mission_status: str) -> None:
        x = self.view_w + 16
        y = 290
        modes = state.modes
        rows = [
            ("ALT HOLD", "HOLD ON" if modes.altitude_hold else "HOLD OFF", modes.altitude_hold),
            ("AUTO LAND", landing_status or "OFF", modes.landing),
            ("AUTO MISSION", mission_status or "OFF", modes.auto_mission),
        ]
        for label, value, on in rows:
            pygame.draw.rect(self.screen, BLUE if on else (30, 41, 59), (x, y, 18, 18), border_radius=4)
            self._text(f"{label:<13}{value}", (x + 28, y + 1), WHITE if on else MUTED)
            y += 26

    def _draw_key_panel(self) -> None:
        x = self.view_w + 16
        y = 380
        rows = [
            "Up/Down: angle of attack   W/S: ground speed",
            "Q/A: headwind   [ ]: weight   , .: span   ; ': chord",
            "1-6: aircraft presets   Z/X: zoom",
            "H: altitude hold   L: autoland   M: auto-mission",
            "P: freeze/resume   R: reset   I: analysis   Esc: quit",
        ]
        for row in rows:
            self._text(row, (x, y), MUTED)
            y += 18

    def _draw_analysis(self, text: str) -> None:
        if not text:
            return
        x = self.view_w + 16
        y = 480
        max_chars = max(20, (self.width - self.view_w - 32) // 8)
        self._text("Analysis", (x, y), WHITE)
        y += 20
        for paragraph in text.splitlines():
            words = paragraph.split()
            line = ""
            for word in words:
                if len(line) + len(word) + 1 > max_chars:
                    self._text(line, (x, y), MUTED)
                    y += 16
                    line = word
                else:
                    line = f"{line} {word}".strip()
            if line:
                self._text(line, (x, y), MUTED)
                y += 16
            if y > self.height - 20:
                return

    def _draw_notice(self, notice: str) -> None:
        if not notice or self.small_font is None:
            return
        surface = self.small_font.render(notice, WHITE)
        x = self.view_w // 2 - surface.get_width() // 2
        y = 54
        box = (x - 10, y - 4, surface.get_width() + 20, surface.get_height() + 8)
        pygame.draw.rect(self.screen, (25, 25, 30), box, border_radius=6)
        pygame.draw.rect(self.screen, WHITE, box, 1, border_radius=6)
        self.screen.blit(surface, (x, y))

    def render(
        self,
        state: SimulationState,
        results: AeroResults,
        *,
        simulating: bool,
        zoom: float,
        vsi: float = 0.0,
        curve: list[tuple[float, float]] | None = None,
        landing_status: str = "",
        mission_status: str = "",
        notice: str = "",
        analysis: str = "",
    ) -> None:
        now = pygame.time.get_ticks()
        frame_dt = (now - self._last_ticks) / 1000.0
        self._last_ticks = now

        self._draw_background(state, zoom)
        center_y = self.height * 0.45
        if simulating:
            self.particles.update(results, center_y, frame_dt, zoom)
        self.particles.draw(self.screen, results, center_y)
        self._draw_airfoil(state.params, results, zoom)
        self._draw_hud(state, results, vsi, simulating)
        self._draw_dashboard(state, results, curve or [])
        self._draw_modes(state, landing_status, mission_status)
        self._draw_key_panel()
        self._draw_analysis(analysis)
        self._draw_notice(notice)
        pygame.display.flip()

    def close(self) -> None:
        pygame.quit()
