"""Threshold-crossing search on a solved trajectory.

The samples are scanned for a sign change of ``state - threshold``; each
bracketing interval is then refined with Brent's method on the dense-output
interpolant of the solution.
"""

from __future__ import annotations

import enum
import logging
import math

import numpy as np
from scipy.optimize import brentq

from .errors import NotFoundError
from .solution import Solution

logger = logging.getLogger(__name__)


class Direction(enum.IntEnum):
    """Which way the state must pass through the threshold.

    The values match the ``direction`` attribute convention for event
    functions: -1 for decreasing, +1 for increasing, 0 for both.
    """

    FALLING = -1
    EITHER = 0
    RISING = 1


def _component_values(solution: Solution, component: int | None) -> np.ndarray:
    if component is None:
        if solution.dim != 1:
            raise ValueError(
                f"solution has {solution.dim} components; pass component= to pick one"
            )
        return solution.ys[:, 0]
    if not -solution.dim <= component < solution.dim:
        raise IndexError(f"component {component} out of range for dimension {solution.dim}")
    return solution.ys[:, component]


def _brackets(g: np.ndarray, direction: Direction):
    """Yield indices ``i`` such that ``[t_i, t_{i+1}]`` contains a crossing."""
    for i in range(g.size - 1):
        left, right = g[i], g[i + 1]
        if left == 0.0:
            # Starting on the threshold is not a crossing; the crossing into
            # it was reported with the previous interval.
            continue
        if right != 0.0 and np.sign(left) == np.sign(right):
            continue
        rising = left < 0.0
        if direction == Direction.RISING and not rising:
            continue
        if direction == Direction.FALLING and rising:
            continue
        yield i


def _check_threshold(threshold) -> float:
    threshold = float(threshold)
    if not math.isfinite(threshold):
        raise ValueError(f"threshold must be finite, got {threshold!r}")
    return threshold


def _residual(solution: Solution, threshold: float, component: int | None):
    column = 0 if component is None else component

    def g_of_t(t: float) -> float:
        state = np.atleast_1d(solution.at(t))
        return float(state[column]) - threshold

    return g_of_t


def _refine(solution: Solution, i: int, g_of_t, tol: float) -> float:
    t_lo, t_hi = float(solution.ts[i]), float(solution.ts[i + 1])
    if g_of_t(t_hi) == 0.0:
        return t_hi
    t_star = brentq(g_of_t, t_lo, t_hi, xtol=1e-14, rtol=4 * np.finfo(float).eps, maxiter=200)
    residual = abs(g_of_t(t_star))
    if residual > tol:
        logger.warning(
            "crossing near t=%.12g has residual %.3e above tolerance %.3e",
            t_star, residual, tol,
        )
    else:
        logger.debug("crossing at t=%.12g (residual %.3e)", t_star, residual)
    return t_star


def find_crossings(
    solution: Solution,
    threshold: float,
    direction: Direction | int = Direction.EITHER,
    *,
    tol: float = 1e-8,
    component: int | None = None,
) -> list[float]:
    """Return every time the solution crosses `threshold`, in increasing order.

    See `find_crossing` for the meaning of the arguments. Returns an empty
    list when there is no crossing.
    """
    direction = Direction(direction)
    threshold = _check_threshold(threshold)
    g = _component_values(solution, component) - threshold
    g_of_t = _residual(solution, threshold, component)
    return [_refine(solution, i, g_of_t, tol) for i in _brackets(g, direction)]


def find_crossing(
    solution: Solution,
    threshold: float,
    direction: Direction | int = Direction.EITHER,
    *,
    tol: float = 1e-8,
    component: int | None = None,
) -> float:
    """Return the first time the solution crosses `threshold`.

    Args:
        solution: A solved trajectory.
        threshold: Finite value to locate.
        direction: `Direction.FALLING` (-1) finds a crossing from above,
            `Direction.RISING` (1) one from below, `Direction.EITHER` (0)
            either kind.
        tol: Absolute tolerance on `|state(t*) - threshold|`.
        component: State index to test. Required for solutions with more
            than one component.

    Raises:
        NotFoundError: No sample interval brackets a crossing in the
            requested direction.
        ValueError: `threshold` is not finite.
    """
    direction = Direction(direction)
    threshold = _check_threshold(threshold)
    g = _component_values(solution, component) - threshold
    first = next(_brackets(g, direction), None)
    if first is None:
        raise NotFoundError(
            threshold,
            f"threshold {threshold!r} is not crossed ({direction.name.lower()}) "
            f"over [{solution.ts[0]!r}, {solution.ts[-1]!r}]",
        )
    return _refine(solution, first, _residual(solution, threshold, component), tol)
