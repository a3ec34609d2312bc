"""Dormand-Prince 5(4) coefficients.

Dormand, J. R.; Prince, P. J. (1980). "A family of embedded Runge-Kutta
formulae". The 5th order weights propagate the solution; the difference to
the embedded 4th order weights is the local error estimate. The last stage is
evaluated at the new point, so it is reused as the first stage of the next
step (FSAL).
"""

import numpy as np

ORDER = 5
ERROR_ESTIMATOR_ORDER = 4
N_STAGES = 6

C = np.array([0.0, 1 / 5, 3 / 10, 4 / 5, 8 / 9, 1.0])

A = np.array([
    [0.0, 0.0, 0.0, 0.0, 0.0],
    [1 / 5, 0.0, 0.0, 0.0, 0.0],
    [3 / 40, 9 / 40, 0.0, 0.0, 0.0],
    [44 / 45, -56 / 15, 32 / 9, 0.0, 0.0],
    [19372 / 6561, -25360 / 2187, 64448 / 6561, -212 / 729, 0.0],
    [9017 / 3168, -355 / 33, 46732 / 5247, 49 / 176, -5103 / 18656],
])

B = np.array([35 / 384, 0.0, 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84])

# Difference between the 5th order weights and the embedded 4th order ones,
# including the FSAL stage at index 6.
E = np.array([
    -71 / 57600, 0.0, 71 / 16695, -71 / 1920, 17253 / 339200, -22 / 525, 1 / 40,
])
