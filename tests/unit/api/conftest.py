"""Fixtures for route tests."""

import pytest
from fastapi.testclient import TestClient

from seminar_registry.api.app import create_app
from seminar_registry.workflow import SeminarRegistry


@pytest.fixture
def app(registry: SeminarRegistry):
    """Create the application around the in-memory registry."""
    return create_app(registry=registry)


@pytest.fixture
def client(app):
    """Create a test client."""
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
