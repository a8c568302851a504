"""
Tests for the stellar property relations (physics.properties).

Covers the piecewise mass-radius and mass-luminosity laws, the
Stefan-Boltzmann temperature, lifetime and its metallicity factor,
evolution-path classification, the derived quantities (mass loss,
rotation, magnetic field, density, element production) and the
InvalidInput failure policy.
"""

import math
import pytest

from physics.constants import M_SUN, R_SUN
from physics.properties import (
    InvalidInput,
    radius,
    luminosity,
    temperature,
    lifetime,
    metallicity_factor,
    evolution_path,
    mass_loss_rate,
    rotation_period,
    magnetic_field,
    density,
    element_production,
    schwarzschild_radius_km,
    star_color,
    star_class_name,
    power_law,
    WHITE_DWARF,
    NEUTRON_STAR,
    BLACK_HOLE,
    LOW_MASS,
    INTERMEDIATE_MASS,
    HIGH_MASS,
    VERY_HIGH_MASS,
)


class TestRadius:
    """R = M^p with p by mass band."""

    def test_solar_mass(self):
        assert radius(1.0) == 1.0

    @pytest.mark.parametrize("mass,exponent", [
        (0.2, 0.8), (0.49, 0.8), (0.5, 0.8), (1.5, 0.8),
        (2.0, 0.6), (10.0, 0.6), (19.99, 0.6),
        (20.0, 0.5), (60.0, 0.5),
    ])
    def test_band_exponents(self, mass, exponent):
        assert radius(mass) == pytest.approx(mass ** exponent, rel=1e-12)

    def test_continuous_at_half_solar_mass(self):
        """Both sub-bands below 2 M_sun share the same exponent."""
        below = radius(0.5 - 1e-9)
        above = radius(0.5)
        assert abs(above - below) < 1e-8

    @pytest.mark.parametrize("lo,hi", [(0.1, 0.49), (0.5, 1.99),
                                       (2.0, 19.9), (20.0, 100.0)])
    def test_monotonic_within_band(self, lo, hi):
        masses = [lo + (hi - lo) * i / 20.0 for i in range(21)]
        values = [radius(m) for m in masses]
        for a, b in zip(values, values[1:]):
            assert b >= a


class TestLuminosity:
    """L = M^q with q by mass band."""

    def test_solar_mass(self):
        assert luminosity(1.0) == 1.0

    @pytest.mark.parametrize("mass,exponent", [
        (0.1, 2.3), (0.42, 2.3),
        (0.43, 4), (1.0, 4), (1.99, 4),
        (2.0, 3.5), (15.0, 3.5),
        (20.0, 3), (100.0, 3),
    ])
    def test_band_exponents(self, mass, exponent):
        assert luminosity(mass) == pytest.approx(mass ** exponent, rel=1e-12)

    @pytest.mark.parametrize("lo,hi", [(0.1, 0.42), (0.43, 1.99),
                                       (2.0, 19.9), (20.0, 100.0)])
    def test_monotonic_within_band(self, lo, hi):
        masses = [lo + (hi - lo) * i / 20.0 for i in range(21)]
        values = [luminosity(m) for m in masses]
        for a, b in zip(values, values[1:]):
            assert b >= a


class TestTemperature:
    """Stefan-Boltzmann effective temperature."""

    def test_sun_like(self):
        t = temperature(1.0)
        assert 5700 < t < 5850

    def test_uses_si_scaling(self):
        l_w = luminosity(5.0) * 3.828e26
        r_m = radius(5.0) * R_SUN
        expected = (l_w / (4 * math.pi * 5.67e-8 * r_m ** 2)) ** 0.25
        assert temperature(5.0) == pytest.approx(expected, rel=1e-12)

    def test_massive_stars_hotter(self):
        assert temperature(10.0) > temperature(1.0) > temperature(0.3)


class TestLifetime:
    """t = 1e10 * M^-2.5 * (Z/0.02)^0.1."""

    def test_sun(self):
        assert lifetime(1.0) == pytest.approx(1e10, rel=1e-12)

    def test_reference_metallicity_factor_is_one(self):
        assert metallicity_factor(0.02) == 1.0
        assert lifetime(3.0, 0.02) == lifetime(3.0)

    def test_mass_scaling(self):
        assert lifetime(10.0) == pytest.approx(1e10 * 10 ** -2.5, rel=1e-12)

    def test_higher_metallicity_lives_longer(self):
        assert lifetime(1.0, 0.04) == pytest.approx(1e10 * 2 ** 0.1, rel=1e-12)
        assert lifetime(1.0, 0.001) < lifetime(1.0)

    def test_zero_metallicity_rejected(self):
        with pytest.raises(InvalidInput):
            lifetime(1.0, 0.0)


class TestEvolutionPath:
    """Classification by the 0.5 / 8 / 20 M_sun thresholds."""

    @pytest.mark.parametrize("mass,ptype,final,sn", [
        (0.1, LOW_MASS, WHITE_DWARF, False),
        (0.49, LOW_MASS, WHITE_DWARF, False),
        (0.5, INTERMEDIATE_MASS, WHITE_DWARF, False),
        (7.99, INTERMEDIATE_MASS, WHITE_DWARF, False),
        (8.0, HIGH_MASS, NEUTRON_STAR, True),
        (19.99, HIGH_MASS, NEUTRON_STAR, True),
        (20.0, VERY_HIGH_MASS, BLACK_HOLE, True),
        (100.0, VERY_HIGH_MASS, BLACK_HOLE, True),
    ])
    def test_thresholds(self, mass, ptype, final, sn):
        path = evolution_path(mass)
        assert path.type == ptype
        assert path.final_state == final
        assert path.supernova is sn

    def test_supernova_iff_mass_at_least_eight(self):
        for m in [0.2, 1.0, 4.0, 7.9, 8.0, 12.0, 25.0, 80.0]:
            assert evolution_path(m).supernova == (m >= 8)

    def test_immutable(self):
        path = evolution_path(1.0)
        with pytest.raises(AttributeError):
            path.final_state = BLACK_HOLE

    def test_description_mentions_remnant(self):
        assert evolution_path(1.0).description.endswith("White dwarf")
        assert evolution_path(30.0).description.endswith("Black hole")

    def test_to_dict(self):
        d = evolution_path(10.0).to_dict()
        assert d == {
            "type": HIGH_MASS,
            "final_state": NEUTRON_STAR,
            "description": evolution_path(10.0).description,
            "supernova": True,
        }


class TestDerivedQuantities:
    """Mass loss, rotation, magnetic field, density."""

    def test_reimers_sun(self):
        assert mass_loss_rate(1.0, 1.0, 1.0) == pytest.approx(4e-13)

    def test_reimers_scaling(self):
        assert mass_loss_rate(2.0, 100.0, 50.0) == pytest.approx(
            4e-13 * 100 * 50 / 2)

    def test_reimers_floored_at_zero(self):
        assert mass_loss_rate(1.0, 0.0, 1.0) == 0.0
        assert mass_loss_rate(1.0, -5.0, 1.0) == 0.0

    def test_rotation_sun_today(self):
        assert rotation_period(1.0, 4.6e9) == pytest.approx(25.0)

    def test_rotation_spins_down_with_age(self):
        assert rotation_period(1.0, 9e9) > rotation_period(1.0, 1e9)

    def test_rotation_zero_age(self):
        assert rotation_period(1.0, 0.0) == 0.0

    def test_rotation_negative_age_rejected(self):
        with pytest.raises(InvalidInput):
            rotation_period(1.0, -1.0)

    def test_magnetic_field_sun(self):
        assert magnetic_field(1.0, 25.0) == pytest.approx(1e-4)

    def test_magnetic_field_faster_rotation_stronger(self):
        assert magnetic_field(1.0, 5.0) > magnetic_field(1.0, 25.0)

    def test_magnetic_field_zero_period_rejected(self):
        with pytest.raises(InvalidInput):
            magnetic_field(1.0, 0.0)

    def test_density_sun(self):
        expected = M_SUN / (4.0 / 3.0 * math.pi * R_SUN ** 3)
        assert density(1.0, 1.0) == pytest.approx(expected, rel=1e-12)
        assert 1300 < density(1.0, 1.0) < 1500

    def test_density_white_dwarf_is_huge(self):
        assert density(1.0, 0.01) == pytest.approx(density(1.0, 1.0) * 1e6)

    def test_schwarzschild_radius(self):
        assert schwarzschild_radius_km(1.0) == pytest.approx(2.95, abs=0.01)


class TestElementProduction:
    """Baseline fractions, mass additions, metallicity scaling."""

    def test_baseline(self):
        e = element_production(1.0, 0.02)
        assert list(e.keys()) == ["hydrogen", "helium", "carbon", "oxygen",
                                  "nitrogen", "iron", "other"]
        assert e["hydrogen"] == 0.70
        assert e["helium"] == 0.28
        assert e["carbon"] == pytest.approx(0.01)
        assert e["iron"] == pytest.approx(0.001)

    def test_massive_star_additions(self):
        e = element_production(10.0, 0.02)
        assert e["carbon"] == pytest.approx(0.03)
        assert e["oxygen"] == pytest.approx(0.025)
        assert e["iron"] == pytest.approx(0.011)
        assert e["other"] == pytest.approx(0.003)

    def test_very_massive_star_additions(self):
        e = element_production(25.0, 0.02)
        assert e["iron"] == pytest.approx(0.061)
        assert e["other"] == pytest.approx(0.023)

    def test_threshold_is_strict(self):
        """Exactly 8 M_sun gets no core-collapse enrichment."""
        assert element_production(8.0)["carbon"] == pytest.approx(0.01)

    def test_metallicity_scales_metals_only(self):
        e = element_production(1.0, 0.04)
        assert e["hydrogen"] == 0.70
        assert e["helium"] == 0.28
        assert e["carbon"] == pytest.approx(0.02)
        assert e["nitrogen"] == pytest.approx(0.002)

    def test_not_renormalized(self):
        total = sum(element_production(25.0, 0.04).values())
        assert total > 1.0


class TestDisplayHelpers:

    @pytest.mark.parametrize("t,color", [
        (40000, "#9bb0ff"), (20000, "#aabfff"), (8000, "#cad7ff"),
        (6500, "#f8f7ff"), (5778, "#fff4ea"), (4000, "#ffd700"),
        (3500, "#ff6b6b"), (3000, "#ff4500"), (0, "#ff4500"),
    ])
    def test_star_color(self, t, color):
        assert star_color(t) == color

    @pytest.mark.parametrize("mass,name", [
        (0.3, "Red Dwarf"), (1.0, "Solar-type Star"),
        (3.0, "Intermediate Mass Star"), (10.0, "High Mass Star"),
        (50.0, "Very High Mass Star"),
    ])
    def test_star_class_name(self, mass, name):
        assert star_class_name(mass) == name


class TestInvalidInput:
    """Non-positive mass is rejected, never turned into NaN."""

    @pytest.mark.parametrize("func", [radius, luminosity, temperature,
                                      lifetime, evolution_path,
                                      element_production])
    @pytest.mark.parametrize("mass", [0, -1.0, float("nan"), float("inf")])
    def test_bad_mass(self, func, mass):
        with pytest.raises(InvalidInput):
            func(mass)

    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInput, ValueError)

    def test_non_numeric_mass(self):
        with pytest.raises(InvalidInput):
            radius("heavy")

    def test_extreme_masses_stay_numeric(self):
        for m in [1e-6, 1e-3, 1e3, 1e6]:
            for value in (radius(m), luminosity(m), temperature(m), lifetime(m)):
                assert not math.isnan(value)
                assert value > 0

    def test_power_law_overflow_saturates(self):
        assert power_law(1e200, 3) == math.inf


class TestFloatRangeExtremes:
    """Masses whose L or R under- or overflow a float still give numbers."""

    @pytest.mark.parametrize("mass", [1e-250, 1e-130, 1e160, 1e300])
    def test_temperature_finite_and_positive(self, mass):
        t = temperature(mass)
        assert math.isfinite(t)
        assert t > 0

    def test_temperature_follows_band_scaling(self):
        """T ~ M^((q - 2p) / 4) within a band, evaluated without L or R."""
        ratio = temperature(1e300) / temperature(1e299)
        assert ratio == pytest.approx(10 ** ((3 - 2 * 0.5) / 4), rel=1e-9)

    @pytest.mark.parametrize("mass,radius_solar", [
        (1e-250, 1e-200), (1e300, 1e150), (1e300, 0.001), (1.0, 1e-120),
    ])
    def test_density_never_nan(self, mass, radius_solar):
        rho = density(mass, radius_solar)
        assert not math.isnan(rho)
        assert rho > 0
