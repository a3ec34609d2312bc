import dataclasses
import math

import numpy as np
import pytest

from ivpkit import OutOfRangeError, Solution, solve_ivp


def cubic_solution():
    """Samples of y = t**3 with exact derivatives."""
    ts = np.array([0.0, 1.0, 2.0])
    return Solution(ts, (ts**3)[:, None], (3 * ts**2)[:, None], scalar=True)


def test_hermite_reproduces_cubic():
    sol = cubic_solution()
    for t in (0.25, 0.5, 1.3, 1.75):
        assert sol.at(t) == pytest.approx(t**3, abs=1e-12)


def test_dense_output_beats_linear_interpolation():
    sol = solve_ivp(lambda y, p, t: -y, (0.0, 5.0), 1.0)
    midpoints = 0.5 * (sol.times[:-1] + sol.times[1:])
    exact = np.exp(-midpoints)
    dense_err = np.max(np.abs(sol.evaluate(midpoints) - exact))
    linear_err = np.max(np.abs(np.interp(midpoints, sol.times, sol.values) - exact))
    assert dense_err < linear_err


def test_sample_times_return_recorded_states():
    sol = solve_ivp(lambda y, p, t: -y, (0.0, 3.0), [1.0, 2.0])
    for t, y in sol:
        np.testing.assert_array_equal(sol.at(t), y)


@pytest.mark.parametrize("t", [-0.1, 2.0 + 1e-9, 100.0, math.nan])
def test_out_of_range(t):
    sol = cubic_solution()
    with pytest.raises(OutOfRangeError) as exc_info:
        sol.at(t)
    assert exc_info.value.t_min == 0.0
    assert exc_info.value.t_max == 2.0


def test_out_of_range_is_value_error():
    with pytest.raises(ValueError):
        cubic_solution().evaluate([0.5, 3.0])


def test_sequence_access():
    sol = cubic_solution()
    assert len(sol) == 3
    assert sol[1] == (1.0, 1.0)
    assert sol[-1] == (2.0, 8.0)
    assert list(sol) == [(0.0, 0.0), (1.0, 1.0), (2.0, 8.0)]
    assert sol.t_span == (0.0, 2.0)


def test_scalar_and_vector_shapes():
    scalar = solve_ivp(lambda y, p, t: -y, (0.0, 1.0), 1.0)
    vector = solve_ivp(lambda y, p, t: -y, (0.0, 1.0), [1.0, 2.0, 3.0])

    assert isinstance(scalar.at(0.5), float)
    assert scalar.values.shape == (len(scalar),)
    assert scalar.evaluate([0.1, 0.2]).shape == (2,)

    assert vector.at(0.5).shape == (3,)
    assert vector.values.shape == (len(vector), 3)
    assert vector.evaluate([0.1, 0.2]).shape == (2, 3)
    assert vector.dim == 3


def test_arrays_are_read_only():
    sol = cubic_solution()
    with pytest.raises(ValueError):
        sol.times[0] = 1.0
    with pytest.raises(ValueError):
        sol.values[0] = 1.0


def test_returned_states_are_copies():
    sol = solve_ivp(lambda y, p, t: -y, (0.0, 1.0), [1.0, 2.0])
    state = sol.at(0.5)
    state[:] = 0.0
    assert np.all(sol.at(0.5) > 0.0)


def test_is_frozen():
    sol = cubic_solution()
    with pytest.raises(dataclasses.FrozenInstanceError):
        sol.nfev = 3


def test_rejects_unordered_times():
    with pytest.raises(ValueError, match="increasing"):
        Solution([0.0, 2.0, 1.0], [[0.0], [1.0], [2.0]], [[0.0], [0.0], [0.0]])


def test_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        Solution([0.0, 1.0], [[0.0], [1.0]], [[0.0]])


def test_slicing_is_rejected():
    sol = cubic_solution()
    with pytest.raises(TypeError, match="integers"):
        sol[1:3]
