import math
from typing import List, Sequence

from .constants import (
    DEFAULT_MITIGATION_CONSTANTS,
    GravityTractorConstants,
    KineticImpactorConstants,
    MitigationConstants,
    NuclearDeflectionConstants,
)
from .errors import InvalidScenarioData
from .log import get_logger
from .scenario import derive
from .schemas import MitigationEvaluation, MitigationOption, Scenario

logger = get_logger(__name__)


def kinetic_impactor_delta_v(
    impactor_mass_kg: float, asteroid_mass_kg: float, v_rel_m_s: float, beta: float
) -> float:
    # dv = beta * (m_impactor / m_asteroid) * v_rel
    return beta * (impactor_mass_kg / asteroid_mass_kg) * v_rel_m_s


def gravity_tractor_delta_v(
    force_n: float, duration_s: float, asteroid_mass_kg: float
) -> float:
    return (force_n * duration_s) / asteroid_mass_kg


def kinetic_impactor_sweep(
    asteroid_mass_kg: float,
    velocity_m_s: float,
    consts: KineticImpactorConstants = DEFAULT_MITIGATION_CONSTANTS.kinetic,
) -> List[MitigationOption]:
    options = []
    for m_impactor in consts.impactor_masses_kg:
        dv = kinetic_impactor_delta_v(
            m_impactor, asteroid_mass_kg, velocity_m_s, consts.beta
        )
        if not math.isfinite(dv):
            raise InvalidScenarioData(
                f"Kinetic impactor delta-v is not finite for asteroid mass {asteroid_mass_kg!r}"
            )
        # rule of thumb, not derived from orbital geometry
        lead_time = max(1, math.ceil(dv * consts.lead_time_per_m_s))
        p = (
            consts.success_above
            if dv > consts.success_threshold_m_s
            else consts.success_below
        )
        options.append(
            MitigationOption(
                strategy="kinetic_impactor",
                label="Kinetic Impactor",
                impactor_mass_kg=m_impactor,
                delta_v_m_s=dv,
                min_lead_time_years=lead_time,
                success_probability=p,
                cost_billions=consts.base_cost_billions
                + (m_impactor / 1000.0) * consts.cost_per_tonne_billions,
                readiness=consts.readiness,
                effectiveness_score=dv * p,
            )
        )
    return options


def gravity_tractor_sweep(
    asteroid_mass_kg: float,
    consts: GravityTractorConstants = DEFAULT_MITIGATION_CONSTANTS.tractor,
) -> List[MitigationOption]:
    options = []
    for years in consts.durations_years:
        dv = gravity_tractor_delta_v(
            consts.force_n, years * consts.seconds_per_year, asteroid_mass_kg
        )
        options.append(
            MitigationOption(
                strategy="gravity_tractor",
                label="Gravity Tractor",
                duration_years=years,
                delta_v_m_s=dv,
                spacecraft_mass_kg=consts.spacecraft_mass_kg,
                success_probability=consts.success_probability,
                cost_billions=consts.base_cost_billions
                + (years / 5.0) * consts.cost_per_5_years_billions,
                readiness=consts.readiness,
                effectiveness_score=dv * consts.success_probability,
            )
        )
    return options


def nuclear_deflection_option(
    consts: NuclearDeflectionConstants = DEFAULT_MITIGATION_CONSTANTS.nuclear,
) -> MitigationOption:
    return MitigationOption(
        strategy="nuclear_deflection",
        label="Nuclear Deflection",
        yield_megatons=consts.yield_megatons,
        delta_v_m_s=consts.delta_v_m_s,
        min_lead_time_years=consts.min_lead_time_years,
        success_probability=consts.success_probability,
        cost_billions=consts.cost_billions,
        readiness=consts.readiness,
        risks=consts.risks,
        effectiveness_score=consts.delta_v_m_s * consts.success_probability,
    )


def rank_options(options: Sequence[MitigationOption]) -> List[MitigationOption]:
    # sorted() is stable under reverse=True, so equal scores keep input order
    return sorted(options, key=lambda o: o.effectiveness_score, reverse=True)


def evaluate_mitigations(
    scenario: Scenario,
    constants: MitigationConstants = DEFAULT_MITIGATION_CONSTANTS,
) -> MitigationEvaluation:
    derived = derive(scenario)
    kinetic = kinetic_impactor_sweep(
        derived.mass_kg, derived.velocity_m_s, constants.kinetic
    )
    tractor = gravity_tractor_sweep(derived.mass_kg, constants.tractor)
    nuclear = nuclear_deflection_option(constants.nuclear)

    ranked = rank_options([*kinetic, *tractor, nuclear])
    logger.debug(
        "mitigations_ranked",
        scenario_id=scenario.id,
        top_strategy=ranked[0].strategy,
        top_score=ranked[0].effectiveness_score,
    )
    return MitigationEvaluation(
        asteroid_mass_kg=derived.mass_kg,
        velocity_m_s=derived.velocity_m_s,
        kinetic_impactor=tuple(kinetic),
        gravity_tractor=tuple(tractor),
        nuclear=nuclear,
        recommendations=tuple(ranked),
        # persisted summaries use the last sweep entry, not the top score
        best_kinetic_impactor=kinetic[-1],
        best_gravity_tractor=tractor[-1],
    )
