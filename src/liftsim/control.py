from dataclasses import dataclass


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


@dataclass(frozen=True)
class ProportionalLaw:
    """Per-tick proportional correction.

    Gains are applied once per call, not per second: the laws this drives are
    tuned in "fraction of error per tick" and keep that behaviour at any
    frame rate.
    """

    gain: float

    def correction(self, target: float, measured: float) -> float:
        return self.gain * (target - measured)

    def approach(self, target: float, measured: float) -> float:
        return measured + self.correction(target, measured)


def step_toward(value: float, target: float, step: float, band: float = 0.0) -> float:
    """Move ``value`` by a fixed ``step`` toward ``target`` unless within ``band``."""
    if value > target + band:
        return value - step
    if value < target - band:
        return value + step
    return value
