import numpy as np
from typing import Tuple

from .constants import DEFAULT_IMPACT_CONSTANTS, ImpactConstants
from .errors import InvalidScenarioData
from .log import get_logger
from .scenario import derive
from .schemas import BlastRing, ImpactResult, Scenario

logger = get_logger(__name__)


def kinetic_energy_joules(mass_kg: float, velocity_m_s: float) -> float:
    return 0.5 * mass_kg * velocity_m_s * velocity_m_s


def crater_diameter_meters(
    energy_joules: float, constants: ImpactConstants = DEFAULT_IMPACT_CONSTANTS
) -> float:
    """
    Pi-scaling for a competent rock target:
      D = K * (E / (rho_t * g))^n

    No water/sediment targets and no obliquity correction.
    """
    energy_per_gravity = energy_joules / (constants.target_density * constants.gravity)
    return constants.pi_scaling_k * energy_per_gravity**constants.pi_scaling_n


def blast_rings(
    tnt_megatons: float,
    crater_diameter_m: float,
    constants: ImpactConstants = DEFAULT_IMPACT_CONSTANTS,
) -> Tuple[BlastRing, ...]:
    # cube-root yield scaling, R = C * Y^(1/3)
    coeffs = np.array([spec.coefficient for spec in constants.blast_rings])
    radii = coeffs * np.cbrt(max(0.0, float(tnt_megatons)))
    rings = [
        BlastRing(
            type="crater",
            overpressure_psi=0.0,
            radius_km=crater_diameter_m / 2.0 / 1000.0,
            description=constants.crater_description,
        )
    ]
    for spec, radius in zip(constants.blast_rings, radii):
        rings.append(
            BlastRing(
                type=spec.type,
                overpressure_psi=spec.overpressure_psi,
                radius_km=float(radius),
                description=spec.description,
            )
        )
    rings.sort(key=lambda r: r.radius_km)
    return tuple(rings)


def compute_impact(
    scenario: Scenario, constants: ImpactConstants = DEFAULT_IMPACT_CONSTANTS
) -> ImpactResult:
    derived = derive(scenario)
    energy = kinetic_energy_joules(derived.mass_kg, derived.velocity_m_s)
    tnt_megatons = energy / constants.tnt_energy_joules
    crater_m = crater_diameter_meters(energy, constants)

    if not np.all(np.isfinite([energy, tnt_megatons, crater_m])):
        raise InvalidScenarioData(
            f"Scenario {scenario.id or scenario.name!r} overflows impact energy"
        )

    result = ImpactResult(
        mass_kg=derived.mass_kg,
        velocity_m_s=derived.velocity_m_s,
        kinetic_energy_joules=energy,
        tnt_megatons=tnt_megatons,
        crater_diameter_meters=crater_m,
        blast_rings=blast_rings(tnt_megatons, crater_m, constants),
    )
    logger.debug(
        "impact_computed",
        scenario_id=scenario.id,
        tnt_megatons=tnt_megatons,
        crater_diameter_meters=crater_m,
    )
    return result
