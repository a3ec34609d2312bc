import math

import numpy as np
import pytest

from ivpkit import DecayParameters, analytic_decay, decay_rhs, drug_decay_problem, time_to_threshold


def test_defaults():
    params = DecayParameters()
    assert params.rate == 0.2
    assert params.initial_amount == 0.05
    assert params.half_life == pytest.approx(math.log(2) / 0.2)


def test_zero_rate_has_infinite_half_life():
    assert DecayParameters(rate=0.0).half_life == math.inf


@pytest.mark.parametrize(
    "kwargs",
    [{"rate": -0.1}, {"rate": math.nan}, {"initial_amount": -1.0}, {"initial_amount": math.inf}],
)
def test_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        DecayParameters(**kwargs)


def test_rhs_uses_explicit_parameters():
    assert decay_rhs(0.05, DecayParameters(rate=0.2), 0.0) == pytest.approx(-0.01)
    assert decay_rhs(0.05, DecayParameters(rate=0.4), 0.0) == pytest.approx(-0.02)


def test_problem_wiring():
    params = DecayParameters(rate=0.3, initial_amount=2.0)
    problem = drug_decay_problem(params, t_span=(0.0, 12.0))
    assert problem.p is params
    assert problem.y0 == 2.0
    assert problem.t_span == (0.0, 12.0)
    assert problem.is_scalar


def test_analytic_decay():
    params = DecayParameters()
    assert analytic_decay(params, 0.1) == pytest.approx(0.049009933, abs=1e-9)
    np.testing.assert_allclose(
        analytic_decay(params, [0.0, 5.0]), [0.05, 0.05 * math.exp(-1.0)]
    )


def test_time_to_threshold():
    params = DecayParameters()
    assert time_to_threshold(params, 0.01) == pytest.approx(8.0472, abs=1e-4)
    assert time_to_threshold(params, 0.05) == 0.0


@pytest.mark.parametrize("threshold", [0.0, 0.06, -0.01])
def test_time_to_threshold_unreachable(threshold):
    with pytest.raises(ValueError):
        time_to_threshold(DecayParameters(), threshold)
