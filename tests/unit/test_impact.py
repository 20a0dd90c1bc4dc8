import math

import pytest

from impact_engine.constants import DEFAULT_IMPACT_CONSTANTS, ImpactConstants
from impact_engine.errors import InvalidScenarioData
from impact_engine.impact import (
    blast_rings,
    compute_impact,
    crater_diameter_meters,
    kinetic_energy_joules,
)
from impact_engine.scenario import derive, sphere_mass_kg
from tests.conftest import make_scenario

RING_ORDER = [
    "crater",
    "severe_damage",
    "moderate_damage",
    "light_damage",
    "thermal_radiation",
]


class TestDerive:
    def test_reference_mass_and_velocity(self, scenario):
        derived = derive(scenario)
        assert derived.mass_kg == pytest.approx(1.5708e9, rel=1e-4)
        assert derived.velocity_m_s == 20000.0

    def test_sphere_mass_matches_closed_form(self):
        assert sphere_mass_kg(2.0, 1.0) == pytest.approx(4.0 / 3.0 * math.pi)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("diameter_meters", 0.0),
            ("diameter_meters", -5.0),
            ("density_kg_m3", -3000.0),
            ("density_kg_m3", 0.0),
            ("velocity_km_s", 0.0),
            ("velocity_km_s", float("nan")),
            ("diameter_meters", float("inf")),
        ],
    )
    def test_rejects_non_positive_or_non_finite(self, field, value):
        with pytest.raises(InvalidScenarioData):
            derive(make_scenario(**{field: value}))


class TestComputeImpact:
    def test_reference_scenario(self, scenario):
        result = compute_impact(scenario)
        assert result.mass_kg == pytest.approx(1.5708e9, rel=1e-4)
        assert result.kinetic_energy_joules == pytest.approx(3.1416e17, rel=1e-4)
        assert result.tnt_megatons == pytest.approx(7.5086e7, rel=1e-4)
        assert result.crater_diameter_meters == pytest.approx(2089.3, rel=1e-2)

    def test_tnt_divisor_is_substitutable(self, scenario):
        corrected = ImpactConstants(tnt_energy_joules=4.184e15)
        result = compute_impact(scenario, corrected)
        assert result.tnt_megatons == pytest.approx(75.086, rel=1e-4)

    def test_ring_types_in_order(self, scenario):
        rings = compute_impact(scenario).blast_rings
        assert [r.type for r in rings] == RING_ORDER

    def test_ring_radii_strictly_increase(self, scenario):
        radii = [r.radius_km for r in compute_impact(scenario).blast_rings]
        assert all(a < b for a, b in zip(radii, radii[1:]))

    def test_severe_ring_cube_root_scaling(self, scenario):
        result = compute_impact(scenario)
        severe = next(r for r in result.blast_rings if r.type == "severe_damage")
        assert severe.radius_km == pytest.approx(0.8 * result.tnt_megatons ** (1 / 3))
        assert severe.overpressure_psi == 20.0

    def test_overpressure_labels(self, scenario):
        psi = {r.type: r.overpressure_psi for r in compute_impact(scenario).blast_rings}
        assert psi == {
            "crater": 0.0,
            "severe_damage": 20.0,
            "moderate_damage": 5.0,
            "light_damage": 1.0,
            "thermal_radiation": 0.0,
        }

    def test_crater_ring_is_half_diameter_in_km(self, scenario):
        result = compute_impact(scenario)
        crater = result.blast_rings[0]
        assert crater.radius_km == pytest.approx(result.crater_diameter_meters / 2000.0)

    def test_tiny_impactor_degrades_to_small_radii(self):
        result = compute_impact(make_scenario(diameter_meters=0.001))
        for ring in result.blast_rings:
            assert math.isfinite(ring.radius_km)
            assert ring.radius_km >= 0.0
        assert result.blast_rings[-1].radius_km < 1.0

    def test_impact_angle_is_ignored(self):
        shallow = compute_impact(make_scenario(impact_angle_deg=10.0))
        steep = compute_impact(make_scenario(impact_angle_deg=90.0))
        assert shallow == steep

    def test_result_is_frozen(self, scenario):
        result = compute_impact(scenario)
        with pytest.raises(Exception):
            result.tnt_megatons = 0.0

    def test_overflowing_energy_is_rejected(self):
        with pytest.raises(InvalidScenarioData):
            compute_impact(make_scenario(velocity_km_s=1e200))

    def test_zero_diameter_fails(self):
        with pytest.raises(InvalidScenarioData):
            compute_impact(make_scenario(diameter_meters=0.0))


def test_kinetic_energy_formula():
    assert kinetic_energy_joules(2.0, 3.0) == 9.0


def test_crater_formula_uses_pi_scaling_constants():
    c = DEFAULT_IMPACT_CONSTANTS
    e = 1e15
    expected = c.pi_scaling_k * (e / (c.target_density * c.gravity)) ** c.pi_scaling_n
    assert crater_diameter_meters(e) == pytest.approx(expected)


def test_blast_rings_zero_yield():
    rings = blast_rings(0.0, 0.0)
    assert [r.radius_km for r in rings] == [0.0] * 5
