from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional, Tuple, Union

RingType = Literal[
    "crater", "severe_damage", "moderate_damage", "light_damage", "thermal_radiation"
]
Strategy = Literal["kinetic_impactor", "gravity_tractor", "nuclear_deflection"]


class Scenario(BaseModel):
    # physical fields are validated by derive(), not here
    id: Optional[str] = None
    name: str = "Unnamed scenario"
    diameter_meters: float
    density_kg_m3: float = 3000.0
    velocity_km_s: float
    impact_angle_deg: float = 45.0
    time_to_impact_years: Optional[float] = None


class ScenarioCreate(BaseModel):
    name: str
    diameter_meters: float = Field(gt=0)
    density_kg_m3: float = Field(gt=0, default=3000.0)
    velocity_km_s: float = Field(gt=0)
    impact_angle_deg: float = Field(ge=0, le=90, default=45.0)
    time_to_impact_years: Optional[float] = Field(ge=0, default=None)


class BlastRing(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: RingType
    overpressure_psi: float = Field(ge=0)
    radius_km: float = Field(ge=0)
    description: str


class ImpactResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    mass_kg: float
    velocity_m_s: float
    kinetic_energy_joules: float
    tnt_megatons: float
    crater_diameter_meters: float
    blast_rings: Tuple[BlastRing, ...]


class MitigationOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    strategy: Strategy
    label: str
    delta_v_m_s: float = Field(ge=0)
    success_probability: float = Field(ge=0, le=1)
    cost_billions: float = Field(ge=0)
    readiness: str
    effectiveness_score: float = Field(ge=0)
    min_lead_time_years: Optional[int] = None
    duration_years: Optional[float] = None
    impactor_mass_kg: Optional[float] = None
    spacecraft_mass_kg: Optional[float] = None
    yield_megatons: Optional[float] = None
    risks: Optional[str] = None


class MitigationEvaluation(BaseModel):
    model_config = ConfigDict(frozen=True)

    asteroid_mass_kg: float
    velocity_m_s: float
    kinetic_impactor: Tuple[MitigationOption, ...]
    gravity_tractor: Tuple[MitigationOption, ...]
    nuclear: MitigationOption
    recommendations: Tuple[MitigationOption, ...]
    best_kinetic_impactor: MitigationOption
    best_gravity_tractor: MitigationOption


class ScenarioRequest(BaseModel):
    scenarioId: Optional[Union[str, int]] = None


class ImpactPayload(BaseModel):
    id: str
    mass_kg: float
    kinetic_energy_joules: float
    tnt_megatons: float
    crater_diameter_meters: float
    blast_rings: List[BlastRing]


class ImpactResponse(BaseModel):
    success: bool = True
    result: ImpactPayload


class ScenarioSummary(BaseModel):
    name: str
    asteroid_mass_kg: float
    time_to_impact_years: Optional[float] = None


class MitigationResponse(BaseModel):
    success: bool = True
    scenario: ScenarioSummary
    recommendations: List[MitigationOption]


class ErrorResponse(BaseModel):
    error: str
