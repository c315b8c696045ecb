"""Free-text commentary on the current flight state from a hosted language model.

The call never touches simulation state; every failure degrades to
``FALLBACK_MESSAGE`` so the caller can display the return value as-is.
"""

from __future__ import annotations

import logging

import requests

from .aerodynamics import AeroResults, FlightParameters
from .config import AnalysisConfig

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Flight analysis is unavailable right now."


def build_prompt(params: FlightParameters, results: AeroResults) -> str:
    status = "airborne" if results.is_flying else "not yet able to lift off"
    return "\n".join(
        [
            "As an aeronautical engineer, analyse this flight simulation snapshot.",
            "",
            "Design parameters:",
            f"- Aircraft weight: {params.weight:g} kg",
            f"- Wing span: {params.wing_span:g} m",
            f"- Chord length: {params.chord_length:g} m",
            f"- Wing profile: {params.wing_type.value}",
            f"- Ground speed: {params.velocity:.2f} m/s (headwind {params.head_wind:.2f} m/s)",
            f"- Angle of attack: {params.angle_of_attack:.2f} deg",
            "",
            "Computed results:",
            f"- Lift: {results.lift_force:.2f} N",
            f"- Required takeoff speed: {results.required_takeoff_speed:.2f} m/s",
            f"- Status: {status}",
            f"- Upper surface pressure: {results.pressure_top:.2f} Pa",
            f"- Lower surface pressure: {results.pressure_bottom:.2f} Pa",
            "",
            "Summarise:",
            "1. How efficient this wing is aerodynamically.",
            "2. Suggested improvements (angle of attack, span, chord).",
            "3. A short explanation of the Bernoulli effect in this case.",
            "",
            "Answer in concise Markdown.",
        ]
    )


class FlightAnalyst:
    def __init__(self, config: AnalysisConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or AnalysisConfig.from_env()
        self.http = session or requests.Session()

    def _payload(self, prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.config.temperature,
                "topP": self.config.top_p,
            },
        }

    @staticmethod
    def _extract_text(data: dict) -> str:
        parts = data["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts).strip()
        if not text:
            raise ValueError("empty analysis response")
        return text

    def analyze(self, params: FlightParameters, results: AeroResults) -> str:
        if not self.config.api_key:
            logger.warning("No analysis API key configured (set GEMINI_API_KEY)")
            return FALLBACK_MESSAGE

        url = self.config.endpoint.format(model=self.config.model)
        try:
            response = self.http.post(
                url,
                json=self._payload(build_prompt(params, results)),
                headers={"x-goog-api-key": self.config.api_key},
                timeout=self.config.timeout_s,
            )
            response.raise_for_status()
            return self._extract_text(response.json())
        except requests.RequestException as exc:
            logger.warning(f"Flight analysis request failed: {exc}")
        except (KeyError, IndexError, TypeError, ValueError):
            logger.exception("Unexpected flight analysis response")
        return FALLBACK_MESSAGE
