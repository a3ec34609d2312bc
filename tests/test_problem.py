import math

import numpy as np
import pytest

from ivpkit import InvalidProblemError, Problem


def rhs(y, p, t):
    return -y


def test_scalar_problem():
    problem = Problem(rhs, 2.0, t_span=(0, 5))
    assert problem.is_scalar
    assert problem.dim == 1
    assert problem.t_span == (0.0, 5.0)
    assert isinstance(problem.t0, float)
    np.testing.assert_array_equal(problem.initial_state, [2.0])


def test_vector_problem():
    problem = Problem(rhs, [1, 2, 3], p={"k": 1}, t_span=(1.0, 2.0))
    assert not problem.is_scalar
    assert problem.dim == 3
    assert problem.p == {"k": 1}
    assert problem.initial_state.dtype == float


def test_initial_state_is_read_only():
    problem = Problem(rhs, [1.0, 2.0])
    with pytest.raises(ValueError):
        problem.initial_state[0] = 5.0


def test_degenerate_span_is_valid():
    problem = Problem(rhs, 1.0, t_span=(3.0, 3.0))
    assert problem.t0 == problem.t1 == 3.0


@pytest.mark.parametrize(
    "t_span",
    [(1.0, 0.0), (0.0, math.nan), (-math.inf, 1.0), (0.0,), "ab", None],
)
def test_invalid_span(t_span):
    with pytest.raises(InvalidProblemError):
        Problem(rhs, 1.0, t_span=t_span)


@pytest.mark.parametrize(
    "y0",
    [math.nan, [1.0, math.inf], [[1.0, 2.0]], [], 1 + 2j, "abc"],
)
def test_invalid_initial_state(y0):
    with pytest.raises(InvalidProblemError):
        Problem(rhs, y0)


def test_fun_must_be_callable():
    with pytest.raises(InvalidProblemError):
        Problem(None, 1.0)


def test_invalid_problem_is_value_error():
    with pytest.raises(ValueError):
        Problem(rhs, 1.0, t_span=(2.0, 1.0))


def test_problem_is_hashable_with_sequence_state():
    problem = Problem(rhs, [1.0, 2.0])
    assert hash(problem) == hash(problem)
    assert problem == problem
    assert problem != Problem(rhs, np.array([1.0, 2.0]))
