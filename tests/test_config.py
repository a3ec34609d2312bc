import dataclasses
import math

import pytest

from ivpkit import InvalidConfigError, SolverConfig


def test_defaults():
    config = SolverConfig()
    assert config.abs_tol == 1e-6
    assert config.rel_tol == 1e-3
    assert config.max_step == math.inf
    assert config.max_steps == 100_000
    assert config.first_step is None


def test_replace_returns_validated_copy():
    config = SolverConfig()
    tighter = config.replace(rel_tol=1e-8)
    assert tighter.rel_tol == 1e-8
    assert config.rel_tol == 1e-3
    with pytest.raises(InvalidConfigError):
        config.replace(rel_tol=-1.0)


def test_is_frozen():
    config = SolverConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.abs_tol = 1.0


@pytest.mark.parametrize(
    "options",
    [
        {"abs_tol": -1e-6},
        {"rel_tol": math.nan},
        {"abs_tol": 0.0, "rel_tol": 0.0},
        {"min_step": 0.0},
        {"min_step": 1.0, "max_step": 0.5},
        {"max_steps": 0},
        {"max_steps": 10.5},
        {"max_steps": True},
        {"first_step": -0.1},
        {"safety": 1.5},
        {"min_factor": 1.0},
        {"max_factor": 0.5},
    ],
)
def test_invalid_options(options):
    with pytest.raises(InvalidConfigError):
        SolverConfig(**options)
