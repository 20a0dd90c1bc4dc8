"""
Shared fixtures and factories for the impact engine test suite.
"""

import os

import pytest

os.environ.setdefault("IMPACT_STORE_BACKEND", "memory")

from impact_engine.errors import PersistenceFailure
from impact_engine.schemas import Scenario
from impact_engine.store import InMemoryStore


def make_scenario(
    diameter_meters: float = 100.0,
    density_kg_m3: float = 3000.0,
    velocity_km_s: float = 20.0,
    **overrides,
) -> Scenario:
    """Factory for the reference 100 m / 3000 kg/m^3 / 20 km/s scenario."""
    defaults = dict(
        id="scn-test-001",
        name="Reference impactor",
        diameter_meters=diameter_meters,
        density_kg_m3=density_kg_m3,
        velocity_km_s=velocity_km_s,
        impact_angle_deg=45.0,
        time_to_impact_years=12.0,
    )
    defaults.update(overrides)
    return Scenario(**defaults)


class FlakyStore(InMemoryStore):
    """In-memory store whose writes fail for the listed tables/strategies."""

    def __init__(self, fail_sim_results=False, fail_strategies=()):
        super().__init__()
        self.fail_sim_results = fail_sim_results
        self.fail_strategies = set(fail_strategies)
        self.attempted_runs = []

    async def insert_sim_result(self, record):
        if self.fail_sim_results:
            raise PersistenceFailure("sim_results unavailable")
        return await super().insert_sim_result(record)

    async def insert_mitigation_run(self, record):
        self.attempted_runs.append(record["strategy_type"])
        if record["strategy_type"] in self.fail_strategies:
            raise PersistenceFailure(f"{record['strategy_type']} write rejected")
        return await super().insert_mitigation_run(record)


@pytest.fixture
def scenario() -> Scenario:
    return make_scenario()


@pytest.fixture
def memory_store() -> InMemoryStore:
    store = InMemoryStore()
    ref = make_scenario()
    store.tables["scenarios"][ref.id] = ref.model_dump()
    return store
