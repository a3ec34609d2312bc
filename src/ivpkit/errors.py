"""Exception types raised by ivpkit.

All errors derive from :class:`IVPError`. Input validation errors also derive
from :class:`ValueError` so callers that only care about bad arguments can
catch them the usual way. Failures that happen while stepping derive from
:class:`SolverError` and record the time the integrator had reached.
"""

from __future__ import annotations


class IVPError(Exception):
    """Base class for every error raised by ivpkit."""


class InvalidProblemError(IVPError, ValueError):
    """The problem definition is malformed (span, initial state or RHS shape)."""


class InvalidConfigError(IVPError, ValueError):
    """A solver option is out of its valid range."""


class OutOfRangeError(IVPError, ValueError):
    """A solution was queried outside the span it was solved on."""

    def __init__(self, t: float, t_min: float, t_max: float):
        self.t = t
        self.t_min = t_min
        self.t_max = t_max
        super().__init__(f"t={t!r} is outside the solved span [{t_min!r}, {t_max!r}]")


class NotFoundError(IVPError, LookupError):
    """No threshold crossing exists in the sampled range."""

    def __init__(self, threshold: float, message: str | None = None):
        self.threshold = threshold
        super().__init__(message or f"threshold {threshold!r} is never crossed")


class SolverError(IVPError):
    """Integration stopped before reaching the end of the span."""

    def __init__(self, message: str, t: float):
        self.t = t
        super().__init__(f"{message} (t={t!r})")


class DivergenceError(SolverError):
    """The state or its derivative became non-finite."""


class StepSizeUnderflowError(SolverError):
    """The step needed to meet the tolerance fell below the minimum step.

    This usually means the problem is stiff or has a singularity near ``t``.
    """

    def __init__(self, t: float, step: float, min_step: float):
        self.step = step
        self.min_step = min_step
        super().__init__(
            f"required step {step:.3e} is below the minimum step {min_step:.3e}", t
        )


class MaxStepsExceededError(SolverError):
    """The step budget ran out before the end of the span."""

    def __init__(self, t: float, max_steps: int):
        self.max_steps = max_steps
        super().__init__(f"step budget of {max_steps} accepted steps exhausted", t)
