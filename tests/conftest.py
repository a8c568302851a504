"""
Pytest fixtures for STELLA test suite.
"""

import json

import pytest
from app import create_app


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({"TESTING": True, "REFERENCE_CATALOG_PATH": None})
    return app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def catalog_file(tmp_path):
    """Write a one-star JSON reference catalog and return its path."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{
        "id": "test_sun",
        "name": "Test Sun",
        "mass": 1.0,
        "metallicity": 0.02,
        "temperature": 5778,
        "luminosity": 1.0,
        "radius": 1.0,
        "age": 4.6e9,
        "type": "G-type main sequence",
        "description": "Catalog loaded from file",
    }]), encoding="utf-8")
    return str(path)
