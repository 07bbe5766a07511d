"""Pytest configuration for integration tests."""

import os

import pytest

from liftlog.clients.supabase import SupabaseGateway
from liftlog.config import load_settings


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def supabase_gateway():
    """Gateway for a real Supabase project, or skip without credentials."""
    settings = load_settings()
    if settings.validate():
        pytest.skip("SUPABASE_URL / SUPABASE_ANON_KEY not configured")
    if not (os.getenv("LIFTLOG_EMAIL") and os.getenv("LIFTLOG_PASSWORD")):
        pytest.skip("LIFTLOG_EMAIL / LIFTLOG_PASSWORD not set")
    return SupabaseGateway.from_settings(settings)
