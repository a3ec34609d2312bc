"""Adaptive explicit Runge-Kutta integration.

`solve` advances a `Problem` with the Dormand-Prince 5(4) pair from
:mod:`ivpkit.tableau`. Each step is accepted when the RMS norm of the
embedded error estimate, scaled by ``abs_tol + rel_tol * |y|``, is at most
one. The next step size follows the usual controller
``h * safety * err ** (-1 / 5)``, clamped by the configured factors and step
bounds. Integration stops exactly at ``t1``.

Reference: Hairer, E.; Norsett, S.; Wanner, G. (1993). "Solving Ordinary
Differential Equations I", sections II.4 (step-size control and the starting
step) and II.6 (dense output).
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable

import numpy as np

from . import tableau
from .config import SolverConfig
from .errors import (
    DivergenceError,
    InvalidProblemError,
    MaxStepsExceededError,
    StepSizeUnderflowError,
)
from .problem import RHS, Problem
from .solution import Solution

logger = logging.getLogger(__name__)

_ERROR_EXPONENT = -1.0 / (tableau.ERROR_ESTIMATOR_ORDER + 1)


def _wrap_rhs(problem: Problem) -> Callable[[float, np.ndarray], np.ndarray]:
    """Adapt ``problem.fun`` to take and return 1-D float arrays.

    The wrapper checks the shape of every returned derivative and hands
    scalar problems a scalar state.
    """
    fun, p, dim, scalar = problem.fun, problem.p, problem.dim, problem.is_scalar

    def rhs(t: float, y: np.ndarray) -> np.ndarray:
        state = y[0] if scalar else y.copy()
        dydt = np.asarray(fun(state, p, t), dtype=float)
        if scalar and dydt.size == 1:
            return dydt.reshape(1)
        if dydt.shape != (dim,):
            expected = "a scalar" if scalar else f"shape ({dim},)"
            raise InvalidProblemError(
                f"fun returned a derivative of shape {dydt.shape}, expected {expected}"
            )
        return dydt

    return rhs


def _rms_norm(x: np.ndarray) -> float:
    return float(np.linalg.norm(x) / math.sqrt(x.size))


def _effective_min_step(t: float, config: SolverConfig) -> float:
    return max(config.min_step, 10.0 * abs(np.nextafter(t, np.inf) - t))


def select_initial_step(
    rhs: Callable[[float, np.ndarray], np.ndarray],
    t0: float,
    y0: np.ndarray,
    f0: np.ndarray,
    t1: float,
    config: SolverConfig,
) -> float:
    """Estimate a starting step size.

    Takes one explicit Euler trial step to estimate the second derivative and
    picks the step that would give a local error near the tolerance.
    """
    span = t1 - t0
    if span == 0.0:
        return 0.0
    scale = config.abs_tol + np.abs(y0) * config.rel_tol
    d0 = _rms_norm(y0 / scale)
    d1 = _rms_norm(f0 / scale)
    if d0 < 1e-5 or d1 < 1e-5:
        h0 = 1e-6
    else:
        h0 = 0.01 * d0 / d1
    h0 = min(h0, span)

    y1 = y0 + h0 * f0
    f1 = rhs(t0 + h0, y1)
    if not np.all(np.isfinite(f1)):
        # The trial point left the domain of the RHS; start from the smaller guess.
        return min(h0, config.max_step)
    d2 = _rms_norm((f1 - f0) / scale) / h0

    if d1 <= 1e-15 and d2 <= 1e-15:
        h1 = max(1e-6, h0 * 1e-3)
    else:
        h1 = (0.01 / max(d1, d2)) ** (1.0 / tableau.ORDER)

    return min(100.0 * h0, h1, span, config.max_step)


def _rk_step(rhs, t, y, f, h):
    """Take one Dormand-Prince step, returning ``(y_new, f_new, K)``."""
    K = np.empty((tableau.N_STAGES + 1, y.size))
    K[0] = f
    for s in range(1, tableau.N_STAGES):
        dy = K[:s].T @ tableau.A[s, :s] * h
        K[s] = rhs(t + tableau.C[s] * h, y + dy)
    y_new = y + h * (K[:-1].T @ tableau.B)
    f_new = rhs(t + h, y_new)
    K[-1] = f_new
    return y_new, f_new, K


def solve(problem: Problem, config: SolverConfig | None = None) -> Solution:
    """Integrate `problem` over its time span.

    Trial steps that leave the finite range are rejected and retried smaller.

    Args:
        problem: The initial value problem to integrate.
        config: Tolerances and step-size options. Defaults to `SolverConfig()`.

    Returns:
        `Solution` with a sample at every accepted step, starting at `t0` and
        ending exactly at `t1`.

    Raises:
        DivergenceError: The initial derivative is non-finite, or trial steps
            stay non-finite down to the minimum step.
        StepSizeUnderflowError: Meeting the tolerance required a step below
            the minimum step.
        MaxStepsExceededError: More than `config.max_steps` steps were needed.
        InvalidProblemError: `problem.fun` returned a derivative of the wrong
            shape.
    """
    config = config or SolverConfig()
    rhs = _wrap_rhs(problem)
    t0, t1 = problem.t_span
    y = np.array(problem.initial_state)
    t = t0

    f = rhs(t, y)
    nfev = 1
    if not np.all(np.isfinite(f)):
        raise DivergenceError("initial derivative is not finite", t)

    ts = [t]
    ys = [y]
    fs = [f]

    if t0 == t1:
        return Solution(ts, ys, fs, scalar=problem.is_scalar, nfev=nfev)

    if config.first_step is None:
        h = select_initial_step(rhs, t0, y, f, t1, config)
        nfev += 1
    else:
        h = min(config.first_step, config.max_step, t1 - t0)
    h = max(h, _effective_min_step(t, config))

    n_accepted = 0
    n_rejected = 0
    step_rejected = False

    while t < t1:
        if n_accepted >= config.max_steps:
            raise MaxStepsExceededError(t, config.max_steps)

        min_step = _effective_min_step(t, config)
        h = min(h, config.max_step)
        t_new = t + h
        if t_new >= t1:
            t_new = t1
        h_step = t_new - t

        with np.errstate(over="ignore", invalid="ignore"):
            y_new, f_new, K = _rk_step(rhs, t, y, f, h_step)
        nfev += tableau.N_STAGES
        finite = bool(np.all(np.isfinite(y_new)) and np.all(np.isfinite(K)))

        if finite:
            scale = config.abs_tol + np.maximum(np.abs(y), np.abs(y_new)) * config.rel_tol
            with np.errstate(over="ignore"):
                error_norm = _rms_norm(h_step * (K.T @ tableau.E) / scale)
        else:
            # A trial step that leaves the finite range is rejected like any
            # other step that misses the tolerance.
            error_norm = math.inf

        if error_norm <= 1.0:
            if error_norm == 0.0:
                factor = config.max_factor
            else:
                factor = min(config.max_factor, config.safety * error_norm ** _ERROR_EXPONENT)
            if step_rejected:
                factor = min(1.0, factor)
            t, y, f = t_new, y_new, f_new
            ts.append(t)
            ys.append(y)
            fs.append(f)
            n_accepted += 1
            step_rejected = False
            h = min(max(h_step * factor, min_step), config.max_step)
        else:
            factor = max(config.min_factor, config.safety * error_norm ** _ERROR_EXPONENT)
            h = h_step * factor
            n_rejected += 1
            step_rejected = True
            logger.debug(
                "rejected step at t=%.6g: h=%.3e err=%.3e, retrying with h=%.3e",
                t, h_step, error_norm, h,
            )
            if h < min_step:
                if not finite:
                    raise DivergenceError("state became non-finite", t_new)
                raise StepSizeUnderflowError(t, h, min_step)

    logger.debug(
        "solved over [%g, %g]: %d accepted, %d rejected steps, nfev=%d",
        t0, t1, n_accepted, n_rejected, nfev,
    )
    return Solution(
        ts,
        ys,
        fs,
        scalar=problem.is_scalar,
        nfev=nfev,
        n_accepted=n_accepted,
        n_rejected=n_rejected,
    )


def solve_ivp(
    fun: RHS,
    t_span: tuple[float, float],
    y0: Any,
    p: Any = None,
    **options,
) -> Solution:
    """Build a `Problem` and a `SolverConfig` from arguments and solve it.

    ``options`` are `SolverConfig` fields, e.g. ``abs_tol`` or ``max_steps``.
    """
    problem = Problem(fun, y0, p=p, t_span=t_span)
    return solve(problem, SolverConfig(**options))
