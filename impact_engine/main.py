from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from typing import Optional

from .errors import ImpactEngineError
from .log import configure_logging, get_logger
from .schemas import (
    ErrorResponse,
    ImpactResponse,
    MitigationResponse,
    Scenario,
    ScenarioCreate,
    ScenarioRequest,
)
from .service import run_impact, run_mitigation
from .settings import get_settings
from .store import ScenarioStore, get_store

configure_logging()
logger = get_logger(__name__)
settings = get_settings()

app = FastAPI(title="Asteroid Impact & Mitigation API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

ERRORS = {code: {"model": ErrorResponse} for code in (400, 404, 422, 502)}


@app.exception_handler(ImpactEngineError)
async def engine_error_handler(request: Request, exc: ImpactEngineError):
    logger.warning(
        "request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    msg = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in errors
    )
    return JSONResponse(status_code=422, content={"error": msg or "Invalid request"})


@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(
        "request_crashed", path=request.url.path, error_type=type(exc).__name__
    )
    return JSONResponse(
        status_code=500, content={"error": str(exc) or "Unknown error"}
    )


@app.get("/healthz")
def healthz():
    return {"ok": True}


@app.post("/api/impact", response_model=ImpactResponse, responses=ERRORS)
async def post_impact(
    req: Optional[ScenarioRequest] = None,
    store: ScenarioStore = Depends(get_store),
):
    return await run_impact(req.scenarioId if req else None, store)


@app.post("/api/mitigation", response_model=MitigationResponse, responses=ERRORS)
async def post_mitigation(
    req: Optional[ScenarioRequest] = None,
    store: ScenarioStore = Depends(get_store),
):
    return await run_mitigation(req.scenarioId if req else None, store)


@app.post("/api/scenarios", response_model=Scenario, status_code=201, responses=ERRORS)
async def post_scenario(
    body: ScenarioCreate, store: ScenarioStore = Depends(get_store)
):
    return await store.save_scenario(Scenario(**body.model_dump()))


@app.get("/api/scenarios/{scenario_id}", response_model=Scenario, responses=ERRORS)
async def get_scenario(scenario_id: str, store: ScenarioStore = Depends(get_store)):
    return await store.get_scenario(scenario_id)
