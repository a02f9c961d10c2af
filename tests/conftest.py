"""Pytest configuration and shared fixtures for the myst-jats test suite."""

import pytest

from myst_jats.diagnostics import DiagnosticCollector


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def diagnostics() -> DiagnosticCollector:
    """Provide an empty diagnostic collector."""
    return DiagnosticCollector()
