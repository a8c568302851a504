"""
Flask API routes for STELLA.

Shared endpoints:
  GET  /api/services        - metadata for all registered services
  GET  /api/services/<id>   - metadata for one service
  GET  /api/constants       - physical constants used by the engine

Service-owned endpoints (/api/evolution/*, /api/comparison/*) are
mounted by each registered service's register_routes().
"""

from flask import Blueprint, jsonify

from physics import constants


def create_api_blueprint(registry):
    """
    Build the /api blueprint and mount every registered service on it.

    Parameters
    ----------
    registry : StellaRegistry
        Populated service registry.

    Returns
    -------
    flask.Blueprint
    """
    api = Blueprint("api", __name__, url_prefix="/api")

    @api.route("/services", methods=["GET"])
    def list_services():
        """Return metadata for every registered service."""
        return jsonify(registry.list_all())

    @api.route("/services/<service_id>", methods=["GET"])
    def get_service(service_id):
        """Return metadata for one service, 404 if unknown."""
        service = registry.get(service_id)
        if service is None:
            return jsonify({"error": "Service not found"}), 404
        return jsonify(service.metadata())

    @api.route("/constants", methods=["GET"])
    def get_constants():
        """Return the physical constants used by the engine."""
        return jsonify({
            "M_SUN": constants.M_SUN,
            "R_SUN": constants.R_SUN,
            "L_SUN": constants.L_SUN,
            "T_SUN": constants.T_SUN,
            "G": constants.G,
            "C_LIGHT": constants.C_LIGHT,
            "SIGMA_SB": constants.SIGMA_SB,
            "Z_SUN": constants.Z_SUN,
            "YEAR_S": constants.YEAR_S,
        })

    for service in registry:
        service.register_routes(api)

    return api
