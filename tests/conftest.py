"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path so the package imports without installation
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from turbo_plonk import CircuitConfig, TurboPlonkConstraintSystem  # noqa: E402

FIELD_NAMES = ["bls12_381", "goldilocks"]


@pytest.fixture(params=FIELD_NAMES)
def config(request) -> CircuitConfig:
    """Circuit configuration, once per supported field."""
    return CircuitConfig(field_name=request.param)


@pytest.fixture
def field(config):
    return config.field


@pytest.fixture
def cs(config) -> TurboPlonkConstraintSystem:
    """Empty constraint system over each supported field."""
    return TurboPlonkConstraintSystem(config)
