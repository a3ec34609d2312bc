import time
import numpy as np
import ivpkit
from scipy.integrate import solve_ivp as scipy_solve_ivp

def van_der_pol(y, eps, t):
    y0, y1 = y
    dy0 = y1
    dy1 = ((1.0 - y0**2) * y1 - y0) / eps
    return [dy0, dy1]

def linear_system(y, p, t):
    return -y

def benchmark_problem(name, fun, t_span, y0, p, rtol=1e-6, atol=1e-6):
    print(f"\nBenchmarking {name}...")

    # ivpkit and SciPy disagree on argument order; adapt for SciPy
    def scipy_fun(t, y):
        return fun(y, p, t)

    # Warmup
    try:
        ivpkit.solve_ivp(fun, t_span, y0, p=p, rel_tol=rtol, abs_tol=atol)
    except ivpkit.SolverError as e:
        print(f"  ivpkit failed: {e}")
        return

    # ivpkit
    start = time.perf_counter()
    sol_ivp = ivpkit.solve_ivp(fun, t_span, y0, p=p, rel_tol=rtol, abs_tol=atol)
    end = time.perf_counter()
    time_ivp = end - start
    print(f"  ivpkit (DOPRI5): {time_ivp:.6f} s, nfev={sol_ivp.nfev}, steps={sol_ivp.n_accepted}")

    # SciPy
    start = time.perf_counter()
    sol_scipy = scipy_solve_ivp(scipy_fun, t_span, y0, method='RK45', rtol=rtol, atol=atol)
    end = time.perf_counter()
    time_scipy = end - start
    print(f"  SciPy (RK45): {time_scipy:.6f} s, nfev={sol_scipy.nfev}, success={sol_scipy.success}")

    err = np.max(np.abs(sol_ivp.values[-1] - sol_scipy.y[:, -1]))
    print(f"  Max difference at t1: {err:.3e}")

if __name__ == "__main__":
    print("Comparing ivpkit vs scipy.integrate.solve_ivp")

    # Problem 1: Non-stiff Van der Pol
    eps = 1.0
    benchmark_problem("Van der Pol (Non-stiff, eps=1.0)", van_der_pol, (0, 100.0), [2.0, 0.0], eps)

    # Problem 2: Drug decay
    params = ivpkit.DecayParameters()
    benchmark_problem("Drug decay (r=0.2)", ivpkit.decay_rhs, (0, 24.0), [params.initial_amount], params)

    # Problem 3: Large Linear System
    # Tests overhead of array arithmetic per step
    N = 1000
    y0_lin = np.random.default_rng(0).random(N)
    benchmark_problem(f"Linear System (N={N})", linear_system, (0, 10.0), y0_lin, None)

    # Problem 4: Stiff Van der Pol
    # Explicit methods need tiny steps here; expect the solver to give up
    eps = 1e-3
    try:
        ivpkit.solve_ivp(van_der_pol, (0, 2.0), [2.0, 0.0], p=eps, max_steps=2_000)
    except ivpkit.SolverError as e:
        print(f"\nStiff Van der Pol: {e}")
