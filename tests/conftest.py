"""Pytest configuration and shared fixtures."""

import pytest
from click.testing import CliRunner

from meilies.protocol import Array


@pytest.fixture
def request_value():
    """Build a request value from text or byte arguments."""
    return Array.of_bulk


@pytest.fixture
def runner():
    """Click CLI runner."""
    return CliRunner()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove meilies settings from the environment."""
    monkeypatch.delenv("MEILIES_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MEILIES_OUTPUT_FORMAT", raising=False)
    return monkeypatch
