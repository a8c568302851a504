"""
Reference Star Comparison Service.

Ranks a simulated star (or one stage of it) against the reference
catalog using physics.similarity, and serves the catalog itself.

Endpoints:
    GET  /api/comparison/catalog       - list reference stars
    GET  /api/comparison/catalog/<id>  - one reference star
    POST /api/comparison/rank          - ranked matches (0-4 entries)

The rank payload takes either an explicit candidate
    {"mass": 1.0, "temperature": 5778, "luminosity": 1.0}
or a stage of a computed star
    {"mass": 1.0, "metallicity": 0.02, "stage_index": 0}

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

from flask import jsonify, request

from physics.services import (
    StellaService, read_float, read_mass, read_stage_index,
)
from physics.constants import Z_SUN
from physics.evolution import compute_stellar_properties
from physics.similarity import rank_similar_stars, rank_for_stage
from data.reference_stars import (
    REFERENCE_CATALOG,
    get_all_reference_stars,
    get_reference_star_by_id,
)

log = logging.getLogger(__name__)


class ComparisonService(StellaService):

    id = "comparison"
    name = "Reference Star Comparison"
    description = "Rank famous stars by similarity to a simulated star"
    category = "reference"
    route = "/comparison"

    def __init__(self, catalog=None):
        self.catalog = REFERENCE_CATALOG if catalog is None else tuple(catalog)

    def validate(self, config):
        """
        Normalize a rank request.

        An explicit candidate gives {mass, temperature, luminosity}.
        Otherwise the candidate is stage `stage_index` (default 0) of the
        star's computed timeline, and the config also carries the
        StellarProperties and Stage for rank_for_stage(). Mass is held to
        the simulator range in both forms.
        """
        mass = read_mass(config)

        if "temperature" in config or "luminosity" in config:
            return {
                "mass": mass,
                "temperature": read_float(config, "temperature"),
                "luminosity": read_float(config, "luminosity"),
                "star": None,
                "stage": None,
            }

        metallicity = read_float(config, "metallicity", Z_SUN)
        if metallicity <= 0:
            raise ValueError("Metallicity must be positive")
        star = compute_stellar_properties(mass, metallicity)
        stage = star.stages[read_stage_index(config, len(star.stages))]
        return {
            "mass": mass,
            "temperature": stage.temperature,
            "luminosity": stage.luminosity,
            "star": star,
            "stage": stage,
        }

    def compute(self, config):
        """Rank the catalog against the candidate."""
        stage = config["stage"]
        if stage is not None:
            matches = rank_for_stage(config["star"], stage, catalog=self.catalog)
        else:
            matches = rank_similar_stars(
                config["mass"], config["temperature"], config["luminosity"],
                catalog=self.catalog)
        log.info("Comparison M=%.3g T=%.4g L=%.4g matches=%d",
                 config["mass"], config["temperature"], config["luminosity"],
                 len(matches))
        return {
            "candidate": {
                "mass": config["mass"],
                "temperature": config["temperature"],
                "luminosity": config["luminosity"],
                "stage": stage.name if stage is not None else None,
            },
            "matches": [m.to_dict() for m in matches],
            "count": len(matches),
        }

    def register_routes(self, bp):
        """Register comparison API endpoints on the given blueprint."""
        service = self

        @bp.route("/comparison/catalog", methods=["GET"])
        def comparison_catalog():
            return jsonify(get_all_reference_stars(service.catalog))

        @bp.route("/comparison/catalog/<star_id>", methods=["GET"])
        def comparison_catalog_star(star_id):
            star = get_reference_star_by_id(star_id, service.catalog)
            if star is None:
                return jsonify({"error": "Reference star not found"}), 404
            return jsonify(star.to_dict())

        @bp.route("/comparison/rank", methods=["POST"])
        def comparison_rank():
            data = request.get_json(silent=True)
            if data is None:
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                config = service.validate(data)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(service.compute(config))
