"""
Reference catalog of well-known stars for similarity comparison.

Each entry contains:
  id: unique identifier (lowercase slug)
  name: display name
  mass: M_sun
  metallicity: metal mass fraction Z
  temperature: effective temperature (K)
  luminosity: L_sun
  radius: R_sun
  age: years
  type: spectral/luminosity class
  description: one-liner

The compiled-in catalog is read-only process-wide data. A JSON file
with the same fields can replace it (see load_catalog_file); the
ranking algorithm does not care where the entries came from.

IMPORTANT: No unicode characters (Windows charmap constraint).
"""

import json
import logging
import math
from collections import namedtuple

log = logging.getLogger(__name__)

REFERENCE_FIELDS = (
    "id", "name", "mass", "metallicity", "temperature", "luminosity",
    "radius", "age", "type", "description",
)

_NUMERIC_FIELDS = ("mass", "metallicity", "temperature", "luminosity",
                   "radius", "age")


class ReferenceStar(namedtuple("ReferenceStar", REFERENCE_FIELDS)):
    """One immutable catalog entry."""

    __slots__ = ()

    def to_dict(self):
        return dict(self._asdict())


REFERENCE_STARS = [
    {
        "id": "sun",
        "name": "Sun",
        "mass": 1.0,
        "metallicity": 0.02,
        "temperature": 5778,
        "luminosity": 1.0,
        "radius": 1.0,
        "age": 4.6e9,
        "type": "G-type main sequence",
        "description": "Our home star, middle-aged and stable",
    },
    {
        "id": "proxima_centauri",
        "name": "Proxima Centauri",
        "mass": 0.12,
        "metallicity": 0.02,
        "temperature": 3042,
        "luminosity": 0.0017,
        "radius": 0.14,
        "age": 4.8e9,
        "type": "M-type red dwarf",
        "description": "Nearest star to Earth, will live trillions of years",
    },
    {
        "id": "betelgeuse",
        "name": "Betelgeuse",
        "mass": 20,
        "metallicity": 0.02,
        "temperature": 3600,
        "luminosity": 120000,
        "radius": 1000,
        "age": 8e6,
        "type": "M-type red supergiant",
        "description": "Massive star near the end of its life, future supernova",
    },
    {
        "id": "sirius_a",
        "name": "Sirius A",
        "mass": 2.1,
        "metallicity": 0.02,
        "temperature": 9940,
        "luminosity": 25,
        "radius": 1.7,
        "age": 2.3e8,
        "type": "A-type main sequence",
        "description": "Brightest star in Earth's night sky",
    },
    {
        "id": "vega",
        "name": "Vega",
        "mass": 2.1,
        "metallicity": 0.02,
        "temperature": 9602,
        "luminosity": 40,
        "radius": 2.4,
        "age": 4.5e8,
        "type": "A-type main sequence",
        "description": "Former pole star, rapidly rotating",
    },
    {
        "id": "rigel",
        "name": "Rigel",
        "mass": 23,
        "metallicity": 0.02,
        "temperature": 12100,
        "luminosity": 120000,
        "radius": 78,
        "age": 8e6,
        "type": "B-type blue supergiant",
        "description": "One of the most luminous stars known",
    },
    {
        "id": "antares",
        "name": "Antares",
        "mass": 15,
        "metallicity": 0.02,
        "temperature": 3600,
        "luminosity": 10000,
        "radius": 800,
        "age": 1.2e7,
        "type": "M-type red supergiant",
        "description": "Heart of Scorpius, massive and unstable",
    },
    {
        "id": "capella",
        "name": "Capella",
        "mass": 2.5,
        "metallicity": 0.02,
        "temperature": 4940,
        "luminosity": 78,
        "radius": 12,
        "age": 6.2e8,
        "type": "G-type giant",
        "description": "Binary star system, evolved off main sequence",
    },
]


def validate_reference_star(entry):
    """
    Check one raw catalog entry and return it as a ReferenceStar.

    Raises
    ------
    ValueError
        If a field is missing, a numeric field is not a positive finite
        number, or id/name is empty.
    """
    if not isinstance(entry, dict):
        raise ValueError("Catalog entry must be an object")
    missing = [f for f in REFERENCE_FIELDS if f not in entry]
    if missing:
        raise ValueError("Catalog entry {!r} missing fields: {}".format(
            entry.get("name", "?"), ", ".join(missing)))
    for key in ("id", "name"):
        if not isinstance(entry[key], str) or not entry[key].strip():
            raise ValueError("Catalog entry field '{}' must be a non-empty string".format(key))
    values = {}
    for key in _NUMERIC_FIELDS:
        try:
            val = float(entry[key])
        except (TypeError, ValueError):
            raise ValueError("Catalog entry {!r}: '{}' is not a number".format(
                entry["name"], key))
        if not math.isfinite(val) or val <= 0:
            raise ValueError("Catalog entry {!r}: '{}' must be > 0".format(
                entry["name"], key))
        values[key] = val
    return ReferenceStar(
        id=entry["id"].strip(),
        name=entry["name"].strip(),
        type=str(entry["type"]),
        description=str(entry["description"]),
        **values
    )


def build_catalog(entries):
    """Validate raw entries into a tuple of ReferenceStar; ids must be unique."""
    catalog = []
    seen = set()
    for entry in entries:
        star = validate_reference_star(entry)
        if star.id in seen:
            raise ValueError("Duplicate catalog id: {}".format(star.id))
        seen.add(star.id)
        catalog.append(star)
    return tuple(catalog)


REFERENCE_CATALOG = build_catalog(REFERENCE_STARS)


def load_catalog_file(path):
    """
    Load a reference catalog from a JSON file (a list of entry objects).

    Returns
    -------
    tuple of ReferenceStar

    Raises
    ------
    ValueError
        If the file cannot be read or parsed, or any entry is invalid.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Reference catalog load failed: path=%s, err=%s", path, e)
        raise ValueError("Cannot read reference catalog {}: {}".format(path, e))
    if not isinstance(raw, list) or not raw:
        raise ValueError("Reference catalog must be a non-empty JSON list")
    catalog = build_catalog(raw)
    log.info("Loaded %d reference stars from %s", len(catalog), path)
    return catalog


def get_all_reference_stars(catalog=None):
    """Return the catalog as a list of dicts, in catalog order."""
    if catalog is None:
        catalog = REFERENCE_CATALOG
    return [s.to_dict() for s in catalog]


def get_reference_star_by_id(star_id, catalog=None):
    """Return a ReferenceStar by id, or None."""
    if catalog is None:
        catalog = REFERENCE_CATALOG
    for star in catalog:
        if star.id == star_id:
            return star
    return None
