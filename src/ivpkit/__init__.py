"""Adaptive Runge-Kutta integration of initial value problems."""

import logging

from .config import SolverConfig
from .crossing import Direction, find_crossing, find_crossings
from .errors import (
    DivergenceError,
    InvalidConfigError,
    InvalidProblemError,
    IVPError,
    MaxStepsExceededError,
    NotFoundError,
    OutOfRangeError,
    SolverError,
    StepSizeUnderflowError,
)
from .integrator import solve, solve_ivp
from .models import DecayParameters, analytic_decay, decay_rhs, drug_decay_problem, time_to_threshold
from .problem import Problem
from .solution import Solution

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Direction",
    "DecayParameters",
    "DivergenceError",
    "InvalidConfigError",
    "InvalidProblemError",
    "IVPError",
    "MaxStepsExceededError",
    "NotFoundError",
    "OutOfRangeError",
    "Problem",
    "Solution",
    "SolverConfig",
    "SolverError",
    "StepSizeUnderflowError",
    "analytic_decay",
    "decay_rhs",
    "drug_decay_problem",
    "find_crossing",
    "find_crossings",
    "solve",
    "solve_ivp",
    "time_to_threshold",
]
