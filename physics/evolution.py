"""
Evolution timeline composition: (mass, metallicity) -> ordered stages.

The timeline is a fixed recipe on top of physics.properties:

  Main Sequence      [0, 0.9 t)          always
  Red (Super)giant   [0.9 t, 0.98 t)     M >= 0.5
  Advanced Burning   [0.98 t, t)         M >= 8
  Supernova          [t, t + 0.01 yr)    evolution path has a supernova
  Remnant            [start, inf)        always (White Dwarf / Neutron Star / Black Hole)

where t is the total lifetime. The mass thresholds are the same ones
used by evolution_path(), so the stages present always agree with the
path narrative.

Everything returned here is an immutable value; the module keeps no
state between calls.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math
from collections import namedtuple

import numpy as np

from physics.constants import Z_SUN, M_GIANT, M_CORE_COLLAPSE
from physics import properties
from physics.properties import (
    ARROW, WHITE_DWARF, NEUTRON_STAR, BLACK_HOLE, require_positive,
)

log = logging.getLogger(__name__)

# Fraction of the lifetime at which each pre-remnant phase ends
MS_END_FRAC = 0.90
GIANT_END_FRAC = 0.98

# Fraction of the lifetime spent in each post-main-sequence phase
GIANT_DURATION_FRAC = 0.08
ADVANCED_DURATION_FRAC = 0.02

# Supernova duration in years
SUPERNOVA_DURATION_YR = 0.01

# Remnant properties per final state: temperature K, luminosity L_sun,
# radius R_sun, display color
REMNANTS = {
    WHITE_DWARF: {"temperature": 10000.0, "luminosity": 0.01,
                  "radius": 0.01, "color": "#ffffff"},
    NEUTRON_STAR: {"temperature": 1e6, "luminosity": 0.001,
                   "radius": 0.0001, "color": "#ff6b6b"},
    BLACK_HOLE: {"temperature": 0.0, "luminosity": 0.0,
                 "radius": 0.00001, "color": "#000000"},
}


def _finite_or_none(value):
    return value if math.isfinite(value) else None


class Stage(namedtuple("Stage", [
        "name", "duration", "start_time", "end_time", "temperature",
        "luminosity", "radius", "fusion_process", "color", "description"])):
    """
    One leg of the evolutionary timeline.

    Attributes
    ----------
    name : str
        Stage name (e.g. 'Main Sequence', 'Red Giant', 'Black Hole').
    duration : float
        Years; math.inf for the terminal remnant.
    start_time, end_time : float
        Years since zero-age main sequence. end_time is math.inf for
        the remnant.
    temperature : float
        Effective temperature in K.
    luminosity : float
        Solar luminosities.
    radius : float
        Solar radii.
    fusion_process : str
        Label of the burning process.
    color : str
        Display hex color.
    description : str
        One-line physical description.
    """

    __slots__ = ()

    @property
    def is_remnant(self):
        return self.name in REMNANTS

    def to_dict(self):
        """Serialize for JSON; infinite duration and end time become None."""
        return {
            "name": self.name,
            "duration": _finite_or_none(self.duration),
            "start_time": self.start_time,
            "end_time": _finite_or_none(self.end_time),
            "temperature": self.temperature,
            "luminosity": self.luminosity,
            "radius": self.radius,
            "fusion_process": self.fusion_process,
            "color": self.color,
            "description": self.description,
        }


class StellarProperties(namedtuple("StellarProperties", [
        "mass", "metallicity", "radius", "luminosity", "temperature",
        "lifetime", "evolution_path", "stages"])):
    """
    Complete computed description of a star: zero-age properties, the
    terminal-fate classification, and the ordered stage tuple.
    """

    __slots__ = ()

    @property
    def final_stage(self):
        return self.stages[-1]

    def stage_names(self):
        return [s.name for s in self.stages]

    def to_dict(self):
        return {
            "mass": self.mass,
            "metallicity": self.metallicity,
            "radius": self.radius,
            "luminosity": self.luminosity,
            "temperature": self.temperature,
            "lifetime": self.lifetime,
            "evolution_path": self.evolution_path.to_dict(),
            "stages": [s.to_dict() for s in self.stages],
        }


def remnant_description(final_state, mass):
    """Physical description of a remnant; black holes quote their horizon."""
    if final_state == WHITE_DWARF:
        return "Degenerate electron core, slowly cooling over billions of years"
    if final_state == NEUTRON_STAR:
        return "Degenerate neutron core, extremely dense, may be a pulsar"
    if final_state == BLACK_HOLE:
        return "Gravitational singularity, event horizon at {:.2f} km".format(
            properties.schwarzschild_radius_km(mass))
    return "Stellar remnant"


def compose_stages(mass, metallicity=Z_SUN):
    """
    Build the ordered stage tuple for a star.

    Parameters
    ----------
    mass : float
        Initial mass in solar masses (> 0).
    metallicity : float, optional
        Metal mass fraction Z (> 0, default 0.02).

    Returns
    -------
    tuple of Stage
        At least two stages (main sequence and remnant), ordered and
        non-overlapping in time. Burning phases are contiguous; without
        a supernova the remnant starts at the full lifetime.

    Raises
    ------
    InvalidInput
        If mass or metallicity is not positive.
    """
    mass = require_positive("mass", mass)
    metallicity = require_positive("metallicity", metallicity)

    t_life = properties.lifetime(mass, metallicity)
    path = properties.evolution_path(mass)

    base_t = properties.temperature(mass)
    base_l = properties.luminosity(mass)
    base_r = properties.radius(mass)

    stages = [Stage(
        name="Main Sequence",
        duration=t_life * MS_END_FRAC,
        start_time=0.0,
        end_time=t_life * MS_END_FRAC,
        temperature=base_t,
        luminosity=base_l,
        radius=base_r,
        fusion_process="Hydrogen {} Helium".format(ARROW),
        color=properties.star_color(base_t),
        description="Core hydrogen fusion, stable burning",
    )]

    if mass >= M_GIANT:
        supergiant = mass >= M_CORE_COLLAPSE
        stages.append(Stage(
            name="Red Supergiant" if supergiant else "Red Giant",
            duration=t_life * GIANT_DURATION_FRAC,
            start_time=t_life * MS_END_FRAC,
            end_time=t_life * GIANT_END_FRAC,
            temperature=3500.0 if supergiant else 3000.0,
            luminosity=base_l * 100,
            radius=base_r * 50,
            fusion_process="Helium {} Carbon/Oxygen".format(ARROW),
            color="#ff4500",
            description="Shell hydrogen burning, core helium fusion",
        ))

        if supergiant:
            stages.append(Stage(
                name="Advanced Burning",
                duration=t_life * ADVANCED_DURATION_FRAC,
                start_time=t_life * GIANT_END_FRAC,
                end_time=t_life,
                temperature=5000.0,
                luminosity=base_l * 1000,
                radius=base_r * 100,
                fusion_process="Carbon {a} Oxygen {a} Silicon {a} Iron".format(
                    a=ARROW),
                color="#ff6b6b",
                description="Multiple shell burning, onion-like structure",
            ))

    if path.supernova:
        stages.append(Stage(
            name="Supernova",
            duration=SUPERNOVA_DURATION_YR,
            start_time=t_life,
            end_time=t_life + SUPERNOVA_DURATION_YR,
            temperature=1e9,
            luminosity=base_l * 1e9,
            radius=0.001,
            fusion_process="Core collapse",
            color="#ffffff",
            description="Core collapse, explosive nucleosynthesis",
        ))

    remnant = REMNANTS[path.final_state]
    stages.append(Stage(
        name=path.final_state,
        duration=math.inf,
        start_time=t_life + SUPERNOVA_DURATION_YR if path.supernova else t_life,
        end_time=math.inf,
        temperature=remnant["temperature"],
        luminosity=remnant["luminosity"],
        radius=remnant["radius"],
        fusion_process="None",
        color=remnant["color"],
        description=remnant_description(path.final_state, mass),
    ))

    log.debug("Composed %d stages for M=%.4g Z=%.4g (%s)",
              len(stages), mass, metallicity, path.final_state)
    return tuple(stages)


def compute_stellar_properties(mass, metallicity=Z_SUN):
    """
    Compute a star's zero-age properties and full evolutionary timeline.

    This is the single construction path for StellarProperties.

    Raises
    ------
    InvalidInput
        If mass <= 0 or metallicity <= 0.
    """
    mass = require_positive("mass", mass)
    metallicity = require_positive("metallicity", metallicity)
    return StellarProperties(
        mass=mass,
        metallicity=metallicity,
        radius=properties.radius(mass),
        luminosity=properties.luminosity(mass),
        temperature=properties.temperature(mass),
        lifetime=properties.lifetime(mass, metallicity),
        evolution_path=properties.evolution_path(mass),
        stages=compose_stages(mass, metallicity),
    )


def evolution_track(mass_min=0.1, mass_max=100.0, n_points=100,
                    metallicity=Z_SUN):
    """
    Zero-age main-sequence properties over a log-spaced mass grid.

    Useful for drawing the main sequence on an H-R diagram.

    Parameters
    ----------
    mass_min, mass_max : float
        Grid bounds in solar masses (0 < mass_min < mass_max).
    n_points : int
        Number of grid points (>= 2).
    metallicity : float
        Metal mass fraction Z.

    Returns
    -------
    dict
        Lists keyed 'mass', 'radius', 'luminosity', 'temperature',
        'lifetime', each of length n_points.
    """
    mass_min = require_positive("mass_min", mass_min)
    mass_max = require_positive("mass_max", mass_max)
    metallicity = require_positive("metallicity", metallicity)
    if mass_max <= mass_min:
        raise properties.InvalidInput("mass_max must exceed mass_min")
    n_points = int(n_points)
    if n_points < 2:
        raise properties.InvalidInput("n_points must be >= 2")

    masses = np.logspace(np.log10(mass_min), np.log10(mass_max), n_points)
    radii = np.array([properties.radius(m) for m in masses])
    lums = np.array([properties.luminosity(m) for m in masses])
    temps = np.array([properties.temperature(m) for m in masses])
    lifetimes = np.array([properties.lifetime(m, metallicity) for m in masses])

    return {
        "mass": masses.tolist(),
        "radius": radii.tolist(),
        "luminosity": lums.tolist(),
        "temperature": temps.tolist(),
        "lifetime": lifetimes.tolist(),
    }
