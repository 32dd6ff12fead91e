"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, time

import pytest

from palplanner.core.config import Settings


TODAY = date(2025, 4, 16)


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def morning() -> datetime:
    """08:00 on the test day."""
    return datetime.combine(TODAY, time(8, 0))
