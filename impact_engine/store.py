import uuid
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Dict, Optional

import httpx

from .errors import PersistenceFailure, ScenarioNotFound, StoreError
from .log import get_logger
from .schemas import Scenario
from .settings import get_settings

logger = get_logger(__name__)

SCENARIOS = "scenarios"
SIM_RESULTS = "sim_results"
MITIGATION_RUN = "mitigation_run"


class ScenarioStore(ABC):
    """Record store keyed by scenario id. Rows are plain JSON-able dicts."""

    @abstractmethod
    async def get_scenario(self, scenario_id: str) -> Scenario: ...

    @abstractmethod
    async def save_scenario(self, scenario: Scenario) -> Scenario: ...

    @abstractmethod
    async def insert_sim_result(self, record: Dict[str, Any]) -> Dict[str, Any]: ...

    @abstractmethod
    async def insert_mitigation_run(self, record: Dict[str, Any]) -> Dict[str, Any]: ...


class InMemoryStore(ScenarioStore):
    def __init__(self):
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = {
            SCENARIOS: {},
            SIM_RESULTS: {},
            MITIGATION_RUN: {},
        }

    def _insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        self.tables[table][row["id"]] = row
        return dict(row)

    async def get_scenario(self, scenario_id: str) -> Scenario:
        row = self.tables[SCENARIOS].get(scenario_id)
        if row is None:
            raise ScenarioNotFound(f"Scenario '{scenario_id}' not found")
        return Scenario(**row)

    async def save_scenario(self, scenario: Scenario) -> Scenario:
        row = self._insert(SCENARIOS, scenario.model_dump(exclude_none=True))
        return Scenario(**row)

    async def insert_sim_result(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(SIM_RESULTS, record)

    async def insert_mitigation_run(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return self._insert(MITIGATION_RUN, record)


class SupabaseStore(ScenarioStore):
    """
    PostgREST access to the Supabase tables backing the web app.

    Reads go through GET /rest/v1/<table>?id=eq.<id>, writes through
    POST /rest/v1/<table> asking for the inserted row back.
    """

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout: float = 20.0,
        http: Optional[httpx.AsyncClient] = None,
    ):
        if not base_url:
            raise StoreError("Supabase URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
            "Content-Type": "application/json",
        }
        self.timeout = timeout
        self.http = http

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    async def _request(
        self, method: str, table: str, prefer: Optional[str] = None, **kwargs
    ) -> httpx.Response:
        headers = dict(self.headers)
        if prefer:
            headers["Prefer"] = prefer
        owns_client = self.http is None
        http = self.http or httpx.AsyncClient(timeout=self.timeout)
        try:
            return await http.request(
                method, self._url(table), headers=headers, **kwargs
            )
        finally:
            if owns_client:
                await http.aclose()

    async def _insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        try:
            r = await self._request(
                "POST", table, prefer="return=representation", json=record
            )
        except httpx.HTTPError as e:
            raise PersistenceFailure(f"Failed to insert {table}: {e}") from e
        if r.status_code >= 300:
            raise PersistenceFailure(
                f"Failed to insert {table}: {r.status_code} {r.text[:200]}"
            )
        try:
            rows = r.json()
        except ValueError as e:
            raise PersistenceFailure(f"Failed to insert {table}: invalid JSON reply") from e
        if isinstance(rows, list):
            if not rows:
                raise PersistenceFailure(f"Failed to insert {table}: no row returned")
            return rows[0]
        return rows

    async def get_scenario(self, scenario_id: str) -> Scenario:
        try:
            r = await self._request(
                "GET", SCENARIOS, params={"id": f"eq.{scenario_id}", "select": "*"}
            )
        except httpx.HTTPError as e:
            raise StoreError(f"Failed to fetch scenario: {e}") from e
        if r.status_code >= 300:
            raise StoreError(
                f"Failed to fetch scenario: {r.status_code} {r.text[:200]}"
            )
        try:
            rows = r.json()
        except ValueError as e:
            raise StoreError("Failed to fetch scenario: invalid JSON reply") from e
        if not rows:
            raise ScenarioNotFound(f"Scenario '{scenario_id}' not found")
        return Scenario(**rows[0])

    async def save_scenario(self, scenario: Scenario) -> Scenario:
        row = await self._insert(SCENARIOS, scenario.model_dump(exclude_none=True))
        return Scenario(**row)

    async def insert_sim_result(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self._insert(SIM_RESULTS, record)

    async def insert_mitigation_run(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return await self._insert(MITIGATION_RUN, record)


@lru_cache
def get_store() -> ScenarioStore:
    settings = get_settings()
    if settings.store_backend == "supabase":
        logger.info("store_selected", backend="supabase", url=settings.supabase_url)
        return SupabaseStore(
            settings.supabase_url,
            settings.supabase_service_role_key,
            timeout=settings.store_timeout_s,
        )
    logger.info("store_selected", backend="memory")
    return InMemoryStore()
