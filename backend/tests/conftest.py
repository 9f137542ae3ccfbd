"""Shared fixtures for API tests: a fresh app per test and a fake Anthropic client."""

import sys
import os

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from backend.ai.client import get_client, reset_client
from backend.config import Settings
from backend.main import create_app
from fakes import FakeAnthropic


@pytest.fixture
def settings():
    return Settings(
        anthropic_api_key="test-key",
        requests_per_minute=1000,
        ai_requests_per_minute=1000,
        default_location="Springfield, IL",
    )


@pytest.fixture
def app(settings):
    reset_client()
    application = create_app(settings)
    yield application
    application.dependency_overrides.clear()
    reset_client()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def use_fake(app):
    """Install a FakeAnthropic built from the given responses and return it."""
    def install(*responses):
        fake = FakeAnthropic(*responses)
        app.dependency_overrides[get_client] = lambda: fake
        return fake
    return install
