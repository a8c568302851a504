"""
STELLA service layer.

The Flask app never calls the engine directly. Each HTTP-facing piece
of the engine (the evolution timeline, the reference-star comparison)
is a StellaService: it turns a raw JSON payload into a checked config
with validate(), runs the engine with compute(), and mounts its own
/api/<route>/* endpoints. StellaRegistry holds the two services by id
so the app, the service index and the route mounting all see the same
instances.

The payload readers at the bottom (read_float, read_mass,
read_stage_index) are shared by both services so a request is
rejected the same way whichever endpoint receives it.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import math
from abc import ABC, abstractmethod

# Mass range of the simulator. The engine accepts any mass > 0; the API
# keeps requests inside the range the scaling laws were tuned for.
SIM_MASS_MIN = 0.1
SIM_MASS_MAX = 100.0


class StellaService(ABC):
    """
    One engine capability exposed over HTTP.

    Subclasses set the descriptive class attributes below and implement
    validate()/compute(). register_routes() is where a service adds its
    endpoints under its own route prefix.

    Class Attributes
    ----------------
    id : str
        Registry key, e.g. "evolution".
    name, description : str
        Shown in the /api/services index.
    category : str
        "simulation" for engine runs, "reference" for catalog lookups.
    route : str
        URL prefix under /api, e.g. "/evolution".
    """

    id = ""
    name = ""
    description = ""
    category = ""
    route = ""

    @abstractmethod
    def validate(self, config):
        """Check a raw payload; return the config compute() expects or raise ValueError."""

    @abstractmethod
    def compute(self, config):
        """Run the engine on a validated config; return a JSON-ready dict."""

    def register_routes(self, blueprint):
        """Add this service's endpoints to the /api blueprint."""

    def metadata(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "route": self.route,
        }


class StellaRegistry:
    """Services keyed by id, in the order they were registered."""

    def __init__(self):
        self._services = {}

    def register(self, service):
        """Add a service; a second service with the same id is a ValueError."""
        if service.id in self._services:
            raise ValueError(
                "Service '{}' is already registered".format(service.id))
        self._services[service.id] = service

    def get(self, service_id):
        """The service registered under service_id, or None."""
        return self._services.get(service_id)

    def list_all(self):
        """metadata() of every service, for the service index."""
        return [s.metadata() for s in self._services.values()]

    def __iter__(self):
        return iter(self._services.values())

    def __len__(self):
        return len(self._services)


def read_float(config, key, default=None):
    """
    Read a numeric field from a raw payload.

    Raises ValueError when the key is required (no default) and absent,
    or when the value is not a finite number.
    """
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError("Request body must be a JSON object")
    value = config.get(key, default)
    if value is None:
        raise ValueError("{} is required".format(key))
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError("{} must be a number".format(key))
    if not math.isfinite(value):
        raise ValueError("{} must be finite".format(key))
    return value


def read_mass(config, key="mass"):
    """Read a stellar mass and hold it to the simulator range."""
    mass = read_float(config, key)
    if not (SIM_MASS_MIN <= mass <= SIM_MASS_MAX):
        raise ValueError("Mass must be between {} and {} solar masses".format(
            SIM_MASS_MIN, SIM_MASS_MAX))
    return mass


def read_stage_index(config, stage_count):
    """
    Read 'stage_index' (default 0) as an index into a timeline.

    Booleans and non-integral numbers are rejected rather than
    truncated.
    """
    raw = config.get("stage_index", 0)
    if isinstance(raw, bool):
        raise ValueError("stage_index must be an integer")
    try:
        index = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise ValueError("stage_index must be an integer")
    if isinstance(raw, float) and raw != index:
        raise ValueError("stage_index must be an integer")
    if not (0 <= index < stage_count):
        raise ValueError("stage_index must be between 0 and {}".format(
            stage_count - 1))
    return index
