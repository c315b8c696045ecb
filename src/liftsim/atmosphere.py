from .config import AtmosphereParameters


def air_density(altitude_m: float, atmo: AtmosphereParameters = AtmosphereParameters()) -> float:
    """Air density (kg/m^3) from a linear lapse model, floored for high altitude."""
    altitude = max(0.0, altitude_m)
    return max(atmo.min_density_kg_m3, atmo.sea_level_density_kg_m3 - altitude * atmo.density_lapse_per_m)
