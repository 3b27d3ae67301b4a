"""
pytest configuration and fixtures for robot header codec tests.

Provides:
- tools/ on sys.path so tests import the modules directly
- Hypothesis property-based testing profiles
- Shared fixtures for the sample bytes and the test vector file
"""

import os
import sys
from pathlib import Path

import pytest

# Add project paths
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT / "tools"))

# Configure Hypothesis profiles
from hypothesis import settings, Verbosity, Phase

# Default profile: balanced speed and coverage
settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
)

# CI profile: more thorough testing
settings.register_profile(
    "ci",
    max_examples=500,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)

# Dev profile: fast iteration
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
)

# Debug profile: verbose output
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))


@pytest.fixture
def vectors_path():
    """Path to the bundled test vector file."""
    return ROOT / "vectors" / "bit_record.yaml"


@pytest.fixture
def sample_bytes():
    """The three example robots: 0xFF, 0x92, 0x18."""
    return [0xFF, 0x92, 0x18]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
