"""Continuous ODE solution.

A `Solution` owns the samples accepted by the adaptive stepper together with
the derivative at each sample. Between samples it evaluates a cubic Hermite
interpolant built from the two bracketing states and derivatives, which keeps
the accuracy of the solver between accepted steps ("dense output").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .errors import OutOfRangeError

SUCCESS_MESSAGE = "The solver successfully reached the end of the integration interval."


def _frozen(array) -> np.ndarray:
    out = np.array(array, dtype=float)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, slots=True, eq=False)
class Solution:
    """Sampled solution of an initial value problem.

    Attributes:
        ts: Sample times, shape ``(n,)``, strictly increasing.
        ys: States at the sample times, shape ``(n, dim)``.
        fs: Derivatives at the sample times, shape ``(n, dim)``.
        scalar: Whether the problem state is a scalar.
        nfev: Number of right-hand-side evaluations.
        n_accepted: Number of accepted steps.
        n_rejected: Number of rejected steps.
        message: Human readable termination status.
    """

    ts: np.ndarray
    ys: np.ndarray
    fs: np.ndarray
    scalar: bool = False
    nfev: int = 0
    n_accepted: int = 0
    n_rejected: int = 0
    message: str = SUCCESS_MESSAGE

    def __post_init__(self) -> None:
        ts = _frozen(self.ts)
        ys = _frozen(self.ys)
        fs = _frozen(self.fs)
        if ts.ndim != 1 or ts.size == 0:
            raise ValueError("ts must be a non-empty 1-D array")
        if ys.ndim != 2 or ys.shape[0] != ts.size or fs.shape != ys.shape:
            raise ValueError(
                f"ys and fs must have shape ({ts.size}, dim), got {ys.shape} and {fs.shape}"
            )
        if ts.size > 1 and not np.all(np.diff(ts) > 0):
            raise ValueError("ts must be strictly increasing")
        object.__setattr__(self, "ts", ts)
        object.__setattr__(self, "ys", ys)
        object.__setattr__(self, "fs", fs)

    # Sequence access

    def __len__(self) -> int:
        return self.ts.size

    def __getitem__(self, index: int) -> tuple[float, float | np.ndarray]:
        """Return sample `index` as `(t, state)`. Only integer indices are supported."""
        if isinstance(index, slice):
            raise TypeError("Solution indices must be integers; slice times or values instead")
        return float(self.ts[index]), self._state(self.ys[index])

    def __iter__(self) -> Iterator[tuple[float, float | np.ndarray]]:
        for i in range(len(self)):
            yield self[i]

    @property
    def t_span(self) -> tuple[float, float]:
        return float(self.ts[0]), float(self.ts[-1])

    @property
    def times(self) -> np.ndarray:
        """Sample times, for plotting against `values`."""
        return self.ts

    @property
    def values(self) -> np.ndarray:
        """Sample states: shape ``(n,)`` for scalar problems, else ``(n, dim)``."""
        return self.ys[:, 0] if self.scalar else self.ys

    @property
    def dim(self) -> int:
        return self.ys.shape[1]

    # Continuous evaluation

    def at(self, t: float) -> float | np.ndarray:
        """Evaluate the solution at time `t`.

        Raises `OutOfRangeError` when `t` lies outside the solved span. At a
        sample time the recorded state is returned exactly.
        """
        t = float(t)
        t_min, t_max = self.t_span
        if not t_min <= t <= t_max:
            raise OutOfRangeError(t, t_min, t_max)
        i = int(np.searchsorted(self.ts, t, side="left"))
        if self.ts[i] == t:
            return self._state(self.ys[i])
        return self._state(self._hermite(i - 1, t))

    def evaluate(self, ts) -> np.ndarray:
        """Evaluate the solution at every time in `ts`.

        Returns an array of shape ``(len(ts),)`` for scalar problems and
        ``(len(ts), dim)`` otherwise.
        """
        ts = np.atleast_1d(np.asarray(ts, dtype=float))
        out = np.array([np.atleast_1d(self.at(t)) for t in ts]).reshape(ts.size, self.dim)
        return out[:, 0] if self.scalar else out

    def _hermite(self, i: int, t: float) -> np.ndarray:
        t0, t1 = self.ts[i], self.ts[i + 1]
        h = t1 - t0
        s = (t - t0) / h
        s2 = s * s
        s3 = s2 * s
        h00 = 2 * s3 - 3 * s2 + 1
        h10 = s3 - 2 * s2 + s
        h01 = -2 * s3 + 3 * s2
        h11 = s3 - s2
        return (
            h00 * self.ys[i]
            + h10 * h * self.fs[i]
            + h01 * self.ys[i + 1]
            + h11 * h * self.fs[i + 1]
        )

    def _state(self, row: np.ndarray) -> float | np.ndarray:
        if self.scalar:
            return float(row[0])
        return np.array(row)
