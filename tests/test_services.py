"""
Tests for the service layer: StellaRegistry, the shared payload readers
(read_float, read_mass, read_stage_index), and the validate/compute
contracts of the evolution and comparison services.
"""

import pytest

from data.reference_stars import REFERENCE_CATALOG
from physics.evolution import compute_stellar_properties
from physics.services import (
    StellaRegistry,
    read_float,
    read_mass,
    read_stage_index,
    SIM_MASS_MIN,
    SIM_MASS_MAX,
)
from physics.services.evolution import EvolutionService
from physics.services.comparison import ComparisonService
from physics.similarity import rank_for_stage


class TestRegistry:

    def test_register_and_get(self):
        reg = StellaRegistry()
        svc = EvolutionService()
        reg.register(svc)
        assert reg.get("evolution") is svc
        assert reg.get("missing") is None

    def test_duplicate_rejected(self):
        reg = StellaRegistry()
        reg.register(EvolutionService())
        with pytest.raises(ValueError, match="already registered"):
            reg.register(EvolutionService())

    def test_iterates_in_registration_order(self):
        reg = StellaRegistry()
        reg.register(ComparisonService())
        reg.register(EvolutionService())
        assert [s.id for s in reg] == ["comparison", "evolution"]
        assert [m["id"] for m in reg.list_all()] == ["comparison", "evolution"]
        assert len(reg) == 2

    def test_metadata_keys(self):
        meta = ComparisonService().metadata()
        assert set(meta) == {"id", "name", "description", "category", "route"}


class TestReadFloat:

    def test_value_and_default(self):
        assert read_float({"mass": "3"}, "mass") == 3.0
        assert read_float({}, "metallicity", 0.02) == 0.02
        assert read_float(None, "metallicity", 0.02) == 0.02

    def test_required(self):
        with pytest.raises(ValueError, match="required"):
            read_float({}, "mass")

    @pytest.mark.parametrize("value", ["abc", [1], {"a": 1}, float("inf"),
                                       float("nan")])
    def test_bad_values(self, value):
        with pytest.raises(ValueError):
            read_float({"mass": value}, "mass")

    def test_non_dict_body(self):
        with pytest.raises(ValueError, match="JSON object"):
            read_float([1, 2], "mass")


class TestReadMass:

    def test_range_edges(self):
        assert read_mass({"mass": SIM_MASS_MIN}) == 0.1
        assert read_mass({"mass": SIM_MASS_MAX}) == 100.0

    @pytest.mark.parametrize("mass", [0.099, 100.1, 0, -1, 1e-250, 1e300])
    def test_out_of_range(self, mass):
        with pytest.raises(ValueError, match="between"):
            read_mass({"mass": mass})


class TestReadStageIndex:

    def test_default_is_zero(self):
        assert read_stage_index({}, 3) == 0

    @pytest.mark.parametrize("raw,expected", [(2, 2), (2.0, 2), ("1", 1)])
    def test_accepted(self, raw, expected):
        assert read_stage_index({"stage_index": raw}, 3) == expected

    @pytest.mark.parametrize("raw", [1.7, True, False, "last", None, [0],
                                     -1, 3, float("inf")])
    def test_rejected(self, raw):
        with pytest.raises(ValueError, match="stage_index"):
            read_stage_index({"stage_index": raw}, 3)


class TestEvolutionService:

    def test_validate_normalizes(self):
        cfg = EvolutionService().validate({"mass": 2})
        assert cfg == {"mass": 2.0, "metallicity": 0.02}

    @pytest.mark.parametrize("mass", [0.099, 100.1])
    def test_mass_range(self, mass):
        with pytest.raises(ValueError, match="between"):
            EvolutionService().validate({"mass": mass})

    def test_compute_adds_star_class(self):
        svc = EvolutionService()
        result = svc.compute(svc.validate({"mass": 0.3}))
        assert result["star_class"] == "Red Dwarf"
        assert len(result["stages"]) == 2

    def test_compute_stage_rejects_fractional_index(self):
        svc = EvolutionService()
        raw = {"mass": 1.0, "stage_index": 1.7}
        with pytest.raises(ValueError):
            svc.compute_stage(svc.validate(raw), raw)

    def test_track_defaults(self):
        cfg = EvolutionService().validate_track({})
        assert cfg == {"mass_min": 0.1, "mass_max": 100.0,
                       "metallicity": 0.02, "n_points": 100}


class TestComparisonService:

    def test_explicit_candidate(self):
        cfg = ComparisonService().validate(
            {"mass": 1, "temperature": 5778, "luminosity": 1})
        assert cfg == {"mass": 1.0, "temperature": 5778.0,
                       "luminosity": 1.0, "star": None, "stage": None}

    def test_stage_candidate(self):
        cfg = ComparisonService().validate({"mass": 1.0, "stage_index": 1})
        assert cfg["stage"].name == "Red Giant"
        assert cfg["temperature"] == 3000
        assert cfg["star"].mass == 1.0

    @pytest.mark.parametrize("payload", [
        {"mass": 1.0, "stage_index": 1.7},
        {"mass": 1.0, "stage_index": True},
        {"mass": 1e-250},
        {"mass": 1e300, "temperature": 5778, "luminosity": 1.0},
    ])
    def test_rejected(self, payload):
        with pytest.raises(ValueError):
            ComparisonService().validate(payload)

    def test_stage_ranking_matches_rank_for_stage(self):
        svc = ComparisonService()
        result = svc.compute(svc.validate({"mass": 20.0, "stage_index": 1}))
        star = compute_stellar_properties(20.0)
        expected = rank_for_stage(star, star.stages[1])
        assert [m["name"] for m in result["matches"]] == [m.name for m in expected]
        assert result["candidate"]["stage"] == "Red Supergiant"

    def test_custom_catalog(self):
        svc = ComparisonService(catalog=REFERENCE_CATALOG[2:3])
        result = svc.compute(svc.validate(
            {"mass": 1.0, "temperature": 5778, "luminosity": 1.0}))
        assert result == {
            "candidate": {"mass": 1.0, "temperature": 5778.0,
                          "luminosity": 1.0, "stage": None},
            "matches": [],
            "count": 0,
        }
