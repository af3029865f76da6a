"""
Pytest configuration and fixtures for Provisor tests.
"""

import tempfile
from pathlib import Path

import pytest

from provisor.context import RunContext
from provisor.providers.loader import ProviderLoadCache
from provisor.settings import ProvisorSettings

from .helpers import CONVERGED


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(autouse=True)
def clear_converged():
    """Start every test with an empty convergence record."""
    CONVERGED.clear()
    yield
    CONVERGED.clear()


@pytest.fixture
def load_cache():
    """A private provider load cache, so tests never share loaded keys."""
    return ProviderLoadCache()


@pytest.fixture
def run_context():
    """An outer run context with an empty collection."""
    return RunContext(settings=ProvisorSettings(), node={"platform": "linux"})
