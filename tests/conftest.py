import numpy as np
import pytest

from ivpkit import DecayParameters, SolverConfig, drug_decay_problem, solve


@pytest.fixture
def decay_params():
    return DecayParameters(rate=0.2, initial_amount=0.05)


@pytest.fixture
def decay_solution(decay_params):
    return solve(drug_decay_problem(decay_params, t_span=(0.0, 24.0)))


@pytest.fixture
def tight_config():
    return SolverConfig(abs_tol=1e-10, rel_tol=1e-10)


def harmonic_oscillator(y, omega, t):
    """y'' = -omega**2 y as a first-order system."""
    return np.array([y[1], -omega**2 * y[0]])
