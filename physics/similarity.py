"""
Similarity ranking of a simulated star against the reference catalog.

For each catalog entry:

  massDiff   = |M - M_ref| / max(M, M_ref)
  tempDiff   = |log10 T - log10 T_ref|
  lumDiff    = |log10 L - log10 L_ref|
  similarity = 1 - (massDiff + tempDiff + lumDiff) / 3

Entries with similarity above the threshold (0.6) are kept, sorted
descending (stable, so ties keep catalog order) and truncated to the
top four. Scores are reported as percentages.

A candidate with non-positive temperature or luminosity (e.g. a black
hole remnant) has no defined log and matches nothing.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
import math

from physics.properties import require_positive
from data.reference_stars import REFERENCE_CATALOG

log = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.6
MAX_MATCHES = 4


class SimilarStar:
    """
    One ranked catalog match.

    Parameters
    ----------
    name : str
        Catalog display name.
    similarity_percent : float
        Similarity score times 100.
    reference : ReferenceStar
        The matched catalog entry.
    """

    __slots__ = ("name", "similarity_percent", "reference")

    def __init__(self, name, similarity_percent, reference):
        self.name = name
        self.similarity_percent = similarity_percent
        self.reference = reference

    def __repr__(self):
        return "SimilarStar({!r}, {:.1f}%)".format(
            self.name, self.similarity_percent)

    def to_dict(self):
        return {
            "name": self.name,
            "similarity": round(self.similarity_percent, 4),
            "reference": self.reference.to_dict(),
        }


def similarity(mass, temperature, luminosity, reference):
    """
    Similarity score in (-inf, 1] between a candidate and one reference.

    Returns -inf when the candidate temperature or luminosity is not
    positive, so such candidates never pass any threshold.
    """
    if temperature <= 0 or luminosity <= 0:
        return -math.inf
    mass_diff = abs(mass - reference.mass) / max(mass, reference.mass)
    temp_diff = abs(math.log10(temperature) - math.log10(reference.temperature))
    lum_diff = abs(math.log10(luminosity) - math.log10(reference.luminosity))
    return 1.0 - (mass_diff + temp_diff + lum_diff) / 3.0


def rank_similar_stars(mass, temperature, luminosity, catalog=None,
                       threshold=SIMILARITY_THRESHOLD, limit=MAX_MATCHES):
    """
    Rank catalog stars by similarity to a candidate.

    Parameters
    ----------
    mass : float
        Candidate mass in solar masses (> 0).
    temperature : float
        Candidate effective temperature in K.
    luminosity : float
        Candidate luminosity in L_sun.
    catalog : sequence of ReferenceStar, optional
        Defaults to the compiled-in REFERENCE_CATALOG.
    threshold : float
        Minimum similarity (exclusive) on the 0-1 scale.
    limit : int
        Maximum number of matches returned.

    Returns
    -------
    list of SimilarStar
        0 to `limit` entries, best first.

    Raises
    ------
    InvalidInput
        If mass is not positive.
    """
    mass = require_positive("mass", mass)
    if catalog is None:
        catalog = REFERENCE_CATALOG

    if temperature <= 0 or luminosity <= 0:
        log.debug("Candidate T=%s L=%s has no log scale; no matches",
                  temperature, luminosity)
        return []

    scored = []
    for ref in catalog:
        score = similarity(mass, temperature, luminosity, ref)
        if score > threshold:
            scored.append(SimilarStar(ref.name, score * 100.0, ref))

    # sorted() is stable: equal scores keep catalog order
    scored = sorted(scored, key=lambda m: m.similarity_percent, reverse=True)
    return scored[:limit]


def rank_for_stage(stellar_properties, stage, catalog=None):
    """Rank the catalog against one stage of a computed star."""
    return rank_similar_stars(
        stellar_properties.mass, stage.temperature, stage.luminosity,
        catalog=catalog)
