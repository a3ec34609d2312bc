"""
Example of solving the Circular Restricted Three-Body Problem (CR3BP).
Demonstrates:
- Solving a system of 6 equations
- Tight tolerances
- Finding every crossing of the x-axis (y = 0)
"""
import ivpkit
import numpy as np
import matplotlib.pyplot as plt

def cr3bp(sv, mu, t):
    x, y, z, vx, vy, vz = sv

    r13 = np.sqrt((x + mu)**2 + y**2 + z**2)
    r23 = np.sqrt((x - 1.0 + mu)**2 + y**2 + z**2)

    dx = vx
    dy = vy
    dz = vz
    dvx = x + 2.0 * vy - (1.0 - mu) * (x + mu) / r13**3 - mu * (x - 1.0 + mu) / r23**3
    dvy = y - 2.0 * vx - (1.0 - mu) * y / r13**3 - mu * y / r23**3
    dvz = -(1.0 - mu) * vz / r13**3 - mu * vz / r23**3

    return [dx, dy, dz, dvx, dvy, dvz]

mu = 0.1
t_span = (0, 10.0)
y0 = [0.5, 0.1, 0.0, 0.0, 1.2, 0.0]

sol = ivpkit.solve_ivp(cr3bp, t_span, y0, p=mu, rel_tol=1e-6, abs_tol=1e-9)

print("Status:", sol.message)
print("nfev:", sol.nfev)

t_cross = ivpkit.find_crossings(sol, 0.0, ivpkit.Direction.RISING, component=1)
if t_cross:
    print("First upward x-axis crossing at t =", t_cross[0])
    print("State at crossing:", sol.at(t_cross[0]))
print("Upward crossings:", len(t_cross))

# Plotting
plt.figure()
plt.plot(sol.values[:, 0], sol.values[:, 1])
plt.xlabel('x')
plt.ylabel('y')
plt.title('CR3BP Trajectory')
plt.grid(True)
plt.axis('equal')
plt.show()
