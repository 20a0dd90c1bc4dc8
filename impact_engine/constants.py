from dataclasses import dataclass, field
from typing import Tuple

# Divisor applied to kinetic energy to get the stored "megaton" figure.
# 4.184e9 J is one *ton* of TNT; stored tnt_megatons values depend on it.
TNT_ENERGY_JOULES = 4.184e9
PI_SCALING_K = 0.074
PI_SCALING_N = 0.34
GRAVITY = 9.81
TARGET_DENSITY = 2600.0

BETA_DEFAULT = 3.6
GRAVITY_TRACTOR_FORCE = 1e-4
SECONDS_PER_YEAR = 365.25 * 24 * 60 * 60


@dataclass(frozen=True)
class BlastRingSpec:
    type: str
    coefficient: float
    overpressure_psi: float
    description: str


@dataclass(frozen=True)
class ImpactConstants:
    tnt_energy_joules: float = TNT_ENERGY_JOULES
    pi_scaling_k: float = PI_SCALING_K
    pi_scaling_n: float = PI_SCALING_N
    gravity: float = GRAVITY
    target_density: float = TARGET_DENSITY
    # R = C * yield^(1/3), ordered from most to least severe
    blast_rings: Tuple[BlastRingSpec, ...] = (
        BlastRingSpec(
            "severe_damage", 0.8, 20.0,
            "Severe structural damage, near-total casualties",
        ),
        BlastRingSpec(
            "moderate_damage", 2.2, 5.0,
            "Moderate structural damage, significant casualties",
        ),
        BlastRingSpec(
            "light_damage", 6.0, 1.0,
            "Light damage, broken windows, minor injuries",
        ),
        BlastRingSpec(
            "thermal_radiation", 8.5, 0.0,
            "3rd degree burns from thermal radiation",
        ),
    )
    crater_description: str = "Excavated crater, total destruction"


@dataclass(frozen=True)
class KineticImpactorConstants:
    beta: float = BETA_DEFAULT
    impactor_masses_kg: Tuple[float, ...] = (500.0, 1000.0, 5000.0, 10000.0)
    success_threshold_m_s: float = 0.01
    success_above: float = 0.95
    success_below: float = 0.85
    lead_time_per_m_s: float = 100.0
    base_cost_billions: float = 0.5
    cost_per_tonne_billions: float = 0.2
    readiness: str = "Proven technology"


@dataclass(frozen=True)
class GravityTractorConstants:
    force_n: float = GRAVITY_TRACTOR_FORCE
    durations_years: Tuple[float, ...] = (5.0, 10.0, 15.0, 20.0)
    seconds_per_year: float = SECONDS_PER_YEAR
    spacecraft_mass_kg: float = 1000.0
    success_probability: float = 0.75
    base_cost_billions: float = 1.5
    cost_per_5_years_billions: float = 0.5
    readiness: str = "Requires development"


@dataclass(frozen=True)
class NuclearDeflectionConstants:
    # yield is carried for display only and does not scale delta_v
    yield_megatons: float = 1.0
    delta_v_m_s: float = 0.1
    min_lead_time_years: int = 5
    success_probability: float = 0.70
    cost_billions: float = 3.0
    readiness: str = "Requires international approval"
    risks: str = "Fragmentation risk"


@dataclass(frozen=True)
class MitigationConstants:
    kinetic: KineticImpactorConstants = field(default_factory=KineticImpactorConstants)
    tractor: GravityTractorConstants = field(default_factory=GravityTractorConstants)
    nuclear: NuclearDeflectionConstants = field(default_factory=NuclearDeflectionConstants)


DEFAULT_IMPACT_CONSTANTS = ImpactConstants()
DEFAULT_MITIGATION_CONSTANTS = MitigationConstants()
