"""
Comprehensive demonstration of advanced features.
Demonstrates:
- Dense output (continuous solution)
- Multiple threshold crossings (ground impact and apex)
- Crossing direction and state component selection
- Handling solver errors
"""
import ivpkit
import numpy as np
import matplotlib.pyplot as plt

def cannon_with_drag(y, k, t):
    """
    Equations of motion for a cannonball with air drag.
    y[0] = x
    y[1] = y (height)
    y[2] = vx
    y[3] = vy

    Drag force is proportional to velocity squared: Fd = -k * v * |v|
    """
    x, h, vx, vy = y
    v = np.sqrt(vx**2 + vy**2)

    ax = -k * vx * v
    ay = -9.81 - k * vy * v

    return [vx, vy, ax, ay]

# Parameters
k = 0.05 # Drag coefficient
y0 = [0, 0, 50, 50] # Initial state: x=0, y=0, vx=50, vy=50
t_span = (0, 10)

config = ivpkit.SolverConfig(rel_tol=1e-8, abs_tol=1e-8)
problem = ivpkit.Problem(cannon_with_drag, y0, p=k, t_span=t_span)
sol = ivpkit.solve(problem, config)

print(f"Status: {sol.message}")
print(f"Number of steps: {len(sol)}")
print(f"Function evaluations: {sol.nfev}")

# Apex: vertical velocity goes from positive to negative
t_apex = ivpkit.find_crossing(sol, 0.0, ivpkit.Direction.FALLING, component=3)
y_apex = sol.at(t_apex)
print(f"Apex reached at t={t_apex:.4f}s, height={y_apex[1]:.4f}m")

# Impact: height comes back down through zero. The launch itself starts on
# the ground and does not count as a crossing.
t_impact = ivpkit.find_crossing(sol, 0.0, ivpkit.Direction.FALLING, component=1)
y_impact = sol.at(t_impact)
print(f"Impact at t={t_impact:.4f}s, distance={y_impact[0]:.4f}m")

# Querying past the solved span is an error, not an extrapolation
try:
    sol.at(t_span[1] + 1.0)
except ivpkit.OutOfRangeError as e:
    print(f"Out of range: {e}")

# Use dense output to sample smoothly for plotting
t_plot = np.linspace(0, t_impact, 200)
y_plot = sol.evaluate(t_plot) # Interpolated solution

plt.figure(figsize=(10, 6))
plt.plot(y_plot[:, 0], y_plot[:, 1], label='Trajectory')
plt.plot(y_apex[0], y_apex[1], 'ro', label='Apex')
plt.plot(y_impact[0], y_impact[1], 'ko', label='Impact')
plt.xlabel('Distance (m)')
plt.ylabel('Height (m)')
plt.title('Cannonball with Air Drag (Dense Output & Crossings)')
plt.legend()
plt.grid(True)
plt.show()
