"""
Stellar Evolution Service.

Wraps the evolution engine (physics.evolution, physics.diagnostics)
behind the StellaService interface and owns the /api/evolution/*
endpoints.

Endpoints:
    POST /api/evolution/compute  - full timeline for {mass, metallicity}
    POST /api/evolution/stage    - one stage with derived diagnostics
    POST /api/evolution/elements - element production fractions
    POST /api/evolution/track    - zero-age main sequence over a mass grid

Mass is restricted to the simulator range (SIM_MASS_MIN-SIM_MASS_MAX)
here; the engine itself accepts any positive mass.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging

from flask import jsonify, request

from physics.services import (
    StellaService, SIM_MASS_MIN, SIM_MASS_MAX, read_float, read_mass,
    read_stage_index,
)
from physics.constants import Z_SUN
from physics.evolution import compute_stellar_properties, evolution_track
from physics.diagnostics import stage_diagnostics, element_yields
from physics.properties import star_class_name

log = logging.getLogger(__name__)


class EvolutionService(StellaService):

    id = "evolution"
    name = "Stellar Evolution"
    description = "Evolutionary timeline from main sequence to remnant"
    category = "simulation"
    route = "/evolution"

    TRACK_POINTS_MIN = 10
    TRACK_POINTS_MAX = 500

    def validate(self, config):
        """Validate {mass, metallicity} and return normalized config."""
        mass = read_mass(config)
        metallicity = read_float(config, "metallicity", Z_SUN)
        if metallicity <= 0:
            raise ValueError("Metallicity must be positive")
        return {"mass": mass, "metallicity": metallicity}

    def compute(self, config):
        """Compute the full stellar timeline."""
        star = compute_stellar_properties(config["mass"], config["metallicity"])
        log.info("Evolution computed M=%.3g Z=%.3g stages=%d final=%s",
                 star.mass, star.metallicity, len(star.stages),
                 star.evolution_path.final_state)
        result = star.to_dict()
        result["star_class"] = star_class_name(star.mass)
        return result

    def compute_stage(self, config, raw):
        """One stage of the timeline with its diagnostics and element yields."""
        star = compute_stellar_properties(config["mass"], config["metallicity"])
        index = read_stage_index(raw, len(star.stages))
        stage = star.stages[index]
        return {
            "mass": star.mass,
            "metallicity": star.metallicity,
            "stage_index": index,
            "stage_count": len(star.stages),
            "stage": stage.to_dict(),
            "diagnostics": stage_diagnostics(star, stage).to_dict(),
            "elements": dict(element_yields(star)),
        }

    def validate_track(self, config):
        """Validate mass-grid parameters for compute_track()."""
        mass_min = read_float(config, "mass_min", SIM_MASS_MIN)
        mass_max = read_float(config, "mass_max", SIM_MASS_MAX)
        if not (SIM_MASS_MIN <= mass_min < mass_max <= SIM_MASS_MAX):
            raise ValueError("Require {} <= mass_min < mass_max <= {}".format(
                SIM_MASS_MIN, SIM_MASS_MAX))
        metallicity = read_float(config, "metallicity", Z_SUN)
        if metallicity <= 0:
            raise ValueError("Metallicity must be positive")
        n_points = int(read_float(config, "n_points", 100))
        n_points = max(self.TRACK_POINTS_MIN, min(n_points, self.TRACK_POINTS_MAX))
        return {
            "mass_min": mass_min,
            "mass_max": mass_max,
            "metallicity": metallicity,
            "n_points": n_points,
        }

    def compute_track(self, config):
        """Zero-age main-sequence radius, luminosity, temperature, lifetime."""
        track = evolution_track(config["mass_min"], config["mass_max"],
                                config["n_points"], config["metallicity"])
        track["metallicity"] = config["metallicity"]
        return track

    def register_routes(self, bp):
        """Register evolution API endpoints on the given blueprint."""
        service = self

        @bp.route("/evolution/compute", methods=["POST"])
        def evolution_compute():
            data = request.get_json(silent=True)
            if data is None:
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                config = service.validate(data)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(service.compute(config))

        @bp.route("/evolution/stage", methods=["POST"])
        def evolution_stage():
            data = request.get_json(silent=True)
            if data is None:
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                config = service.validate(data)
                result = service.compute_stage(config, data)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(result)

        @bp.route("/evolution/elements", methods=["POST"])
        def evolution_elements():
            data = request.get_json(silent=True)
            if data is None:
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                config = service.validate(data)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            star = compute_stellar_properties(config["mass"], config["metallicity"])
            return jsonify({
                "mass": star.mass,
                "metallicity": star.metallicity,
                "elements": dict(element_yields(star)),
            })

        @bp.route("/evolution/track", methods=["POST"])
        def evolution_track_endpoint():
            data = request.get_json(silent=True)
            if data is None:
                return jsonify({"error": "Request body must be JSON"}), 400
            try:
                config = service.validate_track(data)
            except ValueError as e:
                return jsonify({"error": str(e)}), 400
            return jsonify(service.compute_track(config))
