"""
Drug elimination with first-order kinetics, da/dt = -r * a.
Demonstrates:
- Building the decay problem from explicit parameters
- Querying the continuous solution at arbitrary times
- Locating the time the amount falls below a threshold
- Plotting samples, dense output and the analytic solution
"""
import ivpkit
import numpy as np
import matplotlib.pyplot as plt

params = ivpkit.DecayParameters(rate=0.2, initial_amount=0.05)  # 1/h, mg
problem = ivpkit.drug_decay_problem(params, t_span=(0.0, 24.0))

sol = ivpkit.solve(problem)

print("Status:", sol.message)
print(f"Accepted steps: {sol.n_accepted}, rejected: {sol.n_rejected}, nfev: {sol.nfev}")
print()
print("   t (h)    a(t)")
for t, a in sol:
    print(f"{t:8.4f}  {a:.6f}")

a_01 = sol.at(0.1)
print()
print(f"a(0.1) = {a_01:.9f} (exact {ivpkit.analytic_decay(params, 0.1):.9f})")

threshold = 0.01
t_cross = ivpkit.find_crossing(sol, threshold, ivpkit.Direction.FALLING)
print(f"Amount falls to {threshold} at t = {t_cross:.4f} h "
      f"(exact {ivpkit.time_to_threshold(params, threshold):.4f} h)")

# Plotting
t_dense = np.linspace(*sol.t_span, 200)

plt.figure()
plt.plot(t_dense, ivpkit.analytic_decay(params, t_dense), 'k--', label='Analytic')
plt.plot(t_dense, sol.evaluate(t_dense), label='Dense output')
plt.plot(sol.times, sol.values, 'o', label='Solver steps')
plt.axhline(threshold, color='gray', linewidth=0.8)
plt.axvline(t_cross, color='gray', linewidth=0.8)
plt.xlabel('Time (h)')
plt.ylabel('Amount of drug')
plt.title('Drug Decay')
plt.legend()
plt.grid(True)
plt.show()
