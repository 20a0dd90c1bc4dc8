from typing import Any, Dict, List, Optional, Union

from .errors import InvalidScenarioId, PersistenceFailure, StoreError
from .impact import compute_impact
from .log import get_logger, scenario_context
from .mitigation import evaluate_mitigations
from .schemas import (
    ImpactPayload,
    ImpactResponse,
    MitigationOption,
    MitigationResponse,
    ScenarioSummary,
)
from .store import ScenarioStore

logger = get_logger(__name__)


def _require_id(scenario_id: Optional[Union[str, int]]) -> str:
    if not scenario_id or not str(scenario_id).strip():
        raise InvalidScenarioId("scenarioId is required")
    return str(scenario_id).strip()


def _sweep_payload(options: List[MitigationOption]) -> List[Dict[str, Any]]:
    return [o.model_dump(mode="json", exclude_none=True) for o in options]


async def run_impact(
    scenario_id: Optional[Union[str, int]], store: ScenarioStore
) -> ImpactResponse:
    scenario_id = _require_id(scenario_id)
    with scenario_context(scenario_id, "impact"):
        return await _impact(scenario_id, store)


async def _impact(scenario_id: str, store: ScenarioStore) -> ImpactResponse:
    logger.info("impact_requested")

    scenario = await store.get_scenario(scenario_id)
    result = compute_impact(scenario)
    rings = [r.model_dump(mode="json") for r in result.blast_rings]

    try:
        row = await store.insert_sim_result(
            {
                "scenario_id": scenario_id,
                "mass_kg": result.mass_kg,
                "kinetic_energy_joules": result.kinetic_energy_joules,
                "tnt_megatons": result.tnt_megatons,
                "crater_diameter_meters": result.crater_diameter_meters,
                "blast_rings": rings,
            }
        )
    except PersistenceFailure as e:
        logger.error("impact_persist_failed", error=str(e))
        raise
    if "id" not in row:
        raise PersistenceFailure("Failed to insert sim_results: no id returned")

    logger.info("impact_computed", result_id=row["id"], tnt_megatons=result.tnt_megatons)
    return ImpactResponse(
        result=ImpactPayload(
            id=row["id"],
            mass_kg=result.mass_kg,
            kinetic_energy_joules=result.kinetic_energy_joules,
            tnt_megatons=result.tnt_megatons,
            crater_diameter_meters=result.crater_diameter_meters,
            blast_rings=list(result.blast_rings),
        )
    )


async def run_mitigation(
    scenario_id: Optional[Union[str, int]], store: ScenarioStore
) -> MitigationResponse:
    scenario_id = _require_id(scenario_id)
    with scenario_context(scenario_id, "mitigation"):
        return await _mitigation(scenario_id, store)


async def _mitigation(scenario_id: str, store: ScenarioStore) -> MitigationResponse:
    logger.info("mitigation_requested")

    scenario = await store.get_scenario(scenario_id)
    evaluation = evaluate_mitigations(scenario)

    best_kinetic = evaluation.best_kinetic_impactor
    best_tractor = evaluation.best_gravity_tractor
    runs = [
        {
            "scenario_id": scenario_id,
            "strategy_type": "kinetic_impactor",
            "delta_v_m_s": best_kinetic.delta_v_m_s,
            "impactor_mass_kg": best_kinetic.impactor_mass_kg,
            "recommendations": _sweep_payload(list(evaluation.kinetic_impactor)),
        },
        {
            "scenario_id": scenario_id,
            "strategy_type": "gravity_tractor",
            "delta_v_m_s": best_tractor.delta_v_m_s,
            "duration_years": best_tractor.duration_years,
            "recommendations": _sweep_payload(list(evaluation.gravity_tractor)),
        },
    ]

    # each run row is written independently; one failing does not skip the other
    failures = []
    for run in runs:
        with scenario_context(scenario_id, "mitigation", run["strategy_type"]):
            try:
                await store.insert_mitigation_run(run)
            except StoreError as e:
                logger.error("mitigation_persist_failed", error=str(e))
                failures.append(f"{run['strategy_type']}: {e}")
    if failures:
        raise PersistenceFailure(
            "Failed to insert mitigation_run: " + "; ".join(failures)
        )

    logger.info(
        "mitigation_computed",
        asteroid_mass_kg=evaluation.asteroid_mass_kg,
        top_strategy=evaluation.recommendations[0].strategy,
    )
    return MitigationResponse(
        scenario=ScenarioSummary(
            name=scenario.name,
            asteroid_mass_kg=evaluation.asteroid_mass_kg,
            time_to_impact_years=scenario.time_to_impact_years,
        ),
        recommendations=list(evaluation.recommendations),
    )
