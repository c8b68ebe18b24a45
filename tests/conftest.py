"""Pytest configuration and shared fixtures."""

import pytest

from fieldrules.config import reset_settings
from fieldrules.validators import FailureCollector


@pytest.fixture(autouse=True)
def reset_config_settings():
    """Reset the settings cache before and after each test.

    pydantic-settings reads env vars at instantiation time, so monkeypatched
    variables only show up after the cache is cleared.
    """
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def collector():
    return FailureCollector()
