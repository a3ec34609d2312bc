"""First-order drug decay, ``da/dt = -r * a``.

The elimination rate and the initial amount are carried by an explicit
`DecayParameters` value that reaches the right-hand side through
``Problem.p``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .problem import Problem


@dataclass(frozen=True, slots=True)
class DecayParameters:
    """Parameters of the decay model.

    Attributes:
        rate: Elimination rate constant ``r`` in 1/hour.
        initial_amount: Amount ``a0`` present at ``t = 0``.
    """

    rate: float = 0.2
    initial_amount: float = 0.05

    def __post_init__(self) -> None:
        if not (math.isfinite(self.rate) and self.rate >= 0.0):
            raise ValueError(f"rate must be finite and >= 0, got {self.rate!r}")
        if not (math.isfinite(self.initial_amount) and self.initial_amount >= 0.0):
            raise ValueError(
                f"initial_amount must be finite and >= 0, got {self.initial_amount!r}"
            )

    @property
    def half_life(self) -> float:
        """Time for the amount to halve, ``ln 2 / r``."""
        return math.log(2.0) / self.rate if self.rate > 0 else math.inf


def decay_rhs(a, params: DecayParameters, t: float):
    """Right-hand side of the decay model."""
    return -params.rate * a


def drug_decay_problem(
    params: DecayParameters, t_span: tuple[float, float] = (0.0, 24.0)
) -> Problem:
    """Build the scalar decay problem for `params` over `t_span` (hours)."""
    return Problem(decay_rhs, params.initial_amount, p=params, t_span=t_span)


def analytic_decay(params: DecayParameters, t):
    """Exact amount ``a0 * exp(-r * t)`` at time(s) `t`."""
    return params.initial_amount * np.exp(-params.rate * np.asarray(t, dtype=float))


def time_to_threshold(params: DecayParameters, threshold: float) -> float:
    """Exact time at which the amount falls to `threshold`.

    Raises `ValueError` when the threshold is never reached from above.
    """
    if not 0.0 < threshold <= params.initial_amount:
        raise ValueError(
            f"threshold must be in (0, {params.initial_amount!r}], got {threshold!r}"
        )
    if params.rate == 0.0:
        if threshold == params.initial_amount:
            return 0.0
        raise ValueError("amount is constant when rate is 0")
    return math.log(params.initial_amount / threshold) / params.rate
