"""Fixtures building isolated registries and apps for each test."""
import pytest
from fastapi.testclient import TestClient

from taxpayer_registry.core.config import Settings
from taxpayer_registry.core.registry import TaxPayerRegistry
from taxpayer_registry.main import create_app


@pytest.fixture
def registry():
    """A fresh registry with the default append policy."""
    return TaxPayerRegistry()


@pytest.fixture
def make_client():
    """Builds a TestClient over a new app; keyword arguments override settings."""
    def _make(**overrides):
        overrides.setdefault("SNAPSHOT_PATH", None)
        app = create_app(Settings(**overrides))
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
