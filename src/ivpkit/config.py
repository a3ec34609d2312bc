"""Solver configuration.

`SolverConfig` collects the error-control and step-size options accepted by
:func:`ivpkit.solve`. It is a plain frozen dataclass so it can be created in
user scripts and tests and shared between independent solves.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .errors import InvalidConfigError


@dataclass(frozen=True, slots=True)
class SolverConfig:
    """Error-control and step-size settings for one integration.

    Attributes:
        abs_tol: Absolute error tolerance per component. Dominates for
            components near zero.
        rel_tol: Relative error tolerance per component.
        min_step: Smallest step the controller may take before giving up with
            `StepSizeUnderflowError`.
        max_step: Largest step the controller may take.
        max_steps: Budget of accepted steps before `MaxStepsExceededError`.
        first_step: Initial step size. `None` selects one automatically.
        safety: Safety factor applied to every step-size prediction.
        min_factor: Smallest allowed ratio between consecutive step sizes.
        max_factor: Largest allowed ratio between consecutive step sizes.
    """

    abs_tol: float = 1e-6
    rel_tol: float = 1e-3
    min_step: float = 1e-12
    max_step: float = math.inf
    max_steps: int = 100_000
    first_step: float | None = None
    safety: float = 0.9
    min_factor: float = 0.2
    max_factor: float = 10.0

    def __post_init__(self) -> None:
        if not (self.abs_tol >= 0.0 and math.isfinite(self.abs_tol)):
            raise InvalidConfigError(f"abs_tol must be finite and >= 0, got {self.abs_tol!r}")
        if not (self.rel_tol >= 0.0 and math.isfinite(self.rel_tol)):
            raise InvalidConfigError(f"rel_tol must be finite and >= 0, got {self.rel_tol!r}")
        if self.abs_tol == 0.0 and self.rel_tol == 0.0:
            raise InvalidConfigError("abs_tol and rel_tol cannot both be zero")
        if not (self.min_step > 0.0 and math.isfinite(self.min_step)):
            raise InvalidConfigError(f"min_step must be finite and > 0, got {self.min_step!r}")
        if not self.max_step >= self.min_step:
            raise InvalidConfigError(
                f"max_step ({self.max_step!r}) must be >= min_step ({self.min_step!r})"
            )
        if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int) or self.max_steps < 1:
            raise InvalidConfigError(f"max_steps must be a positive int, got {self.max_steps!r}")
        if self.first_step is not None and not (
            self.first_step > 0.0 and math.isfinite(self.first_step)
        ):
            raise InvalidConfigError(f"first_step must be finite and > 0, got {self.first_step!r}")
        if not 0.0 < self.safety <= 1.0:
            raise InvalidConfigError(f"safety must be in (0, 1], got {self.safety!r}")
        if not 0.0 < self.min_factor < 1.0 < self.max_factor:
            raise InvalidConfigError(
                "expected 0 < min_factor < 1 < max_factor, got "
                f"min_factor={self.min_factor!r}, max_factor={self.max_factor!r}"
            )

    def replace(self, **changes) -> "SolverConfig":
        """Return a copy with `changes` applied (validated again)."""
        return replace(self, **changes)
