"""Initial value problem definition."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable

import numpy as np

from .errors import InvalidProblemError

RHS = Callable[[Any, Any, float], Any]


@dataclass(frozen=True, slots=True, eq=False)
class Problem:
    """An initial value problem ``dy/dt = fun(y, p, t)``, ``y(t0) = y0``.

    Attributes:
        fun: Right-hand side, called as ``fun(state, p, t)``. It must return a
            derivative with the same shape as ``state``.
        y0: Initial state, a finite real scalar or a 1-D sequence of finite
            reals.
        p: Parameters handed to ``fun`` unchanged on every call.
        t_span: ``(t0, t1)`` with ``t0 <= t1``.

    A scalar ``y0`` makes a scalar problem: ``fun`` then receives a scalar
    state and solutions evaluate to floats.
    """

    fun: RHS
    y0: Any
    p: Any = None
    t_span: tuple[float, float] = (0.0, 1.0)
    _state: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not callable(self.fun):
            raise InvalidProblemError(f"fun must be callable, got {type(self.fun).__name__}")

        try:
            t0, t1 = (float(t) for t in self.t_span)
        except (TypeError, ValueError) as exc:
            raise InvalidProblemError(f"t_span must be a pair of reals, got {self.t_span!r}") from exc
        if not (math.isfinite(t0) and math.isfinite(t1)):
            raise InvalidProblemError(f"t_span must be finite, got {self.t_span!r}")
        if t1 < t0:
            raise InvalidProblemError(f"t_span must satisfy t0 <= t1, got {self.t_span!r}")
        object.__setattr__(self, "t_span", (t0, t1))

        try:
            if np.iscomplexobj(self.y0):
                raise TypeError("complex values")
            state = np.array(self.y0, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidProblemError(f"y0 must be real-valued, got {self.y0!r}") from exc
        if state.ndim > 1:
            raise InvalidProblemError(f"y0 must be a scalar or 1-D, got shape {state.shape}")
        if state.ndim == 1 and state.size == 0:
            raise InvalidProblemError("y0 must not be empty")
        if not np.all(np.isfinite(state)):
            raise InvalidProblemError(f"y0 must be finite, got {self.y0!r}")
        state = np.atleast_1d(state)
        state.setflags(write=False)
        object.__setattr__(self, "_state", state)

    @property
    def t0(self) -> float:
        return self.t_span[0]

    @property
    def t1(self) -> float:
        return self.t_span[1]

    @property
    def is_scalar(self) -> bool:
        """True when `y0` was given as a scalar."""
        return np.ndim(self.y0) == 0

    @property
    def dim(self) -> int:
        """Number of state components."""
        return self._state.size

    @property
    def initial_state(self) -> np.ndarray:
        """`y0` as a read-only 1-D float array."""
        return self._state
