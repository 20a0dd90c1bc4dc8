import math
from dataclasses import dataclass

from .errors import InvalidScenarioData
from .schemas import Scenario


@dataclass(frozen=True)
class DerivedScenario:
    mass_kg: float
    velocity_m_s: float


def sphere_mass_kg(diameter_m: float, density_kg_m3: float) -> float:
    radius = diameter_m / 2.0
    volume = (4.0 / 3.0) * math.pi * radius * radius * radius
    return volume * density_kg_m3


def derive(scenario: Scenario) -> DerivedScenario:
    """
    Validate the physical fields and derive mass and SI velocity.

    The asteroid is a uniform-density sphere. Non-positive or non-finite
    diameter, density or velocity raise InvalidScenarioData.
    """
    for field in ("diameter_meters", "density_kg_m3", "velocity_km_s"):
        value = getattr(scenario, field)
        if not math.isfinite(value) or value <= 0:
            raise InvalidScenarioData(
                f"Scenario {field} must be a positive number, got {value!r}"
            )
    mass_kg = sphere_mass_kg(scenario.diameter_meters, scenario.density_kg_m3)
    if not math.isfinite(mass_kg) or mass_kg <= 0:
        raise InvalidScenarioData(f"Scenario mass is not positive: {mass_kg!r}")
    return DerivedScenario(
        mass_kg=mass_kg, velocity_m_s=scenario.velocity_km_s * 1000.0
    )
