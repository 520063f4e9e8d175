"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Start every test from default settings."""
    for key in list(os.environ):
        if key.startswith("CSP_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CSP_LOG_JSON", "false")
    monkeypatch.setenv("CSP_LOG_LEVEL", "debug")

    # Reset cached settings
    import csp_builder.config.loader as loader
    loader._settings = None
    yield
    loader._settings = None


@pytest.fixture
def permissive_mode(monkeypatch):
    """Configure policies to keep duplicate directives."""
    monkeypatch.setenv("CSP_DEDUPLICATE", "false")
    import csp_builder.config.loader as loader
    loader._settings = None
