"""
Basic example of solving a vector ODE.
Demonstrates:
- Basic usage of solve_ivp
- Passing a parameter explicitly instead of reading a global
- Plotting the raw samples
"""
import ivpkit
import matplotlib.pyplot as plt

def exponential_decay(y, k, t):
    return -k * y

# Three independent decays sharing one rate constant
t_span = (0, 10)
y0 = [2, 4, 8]
sol = ivpkit.solve_ivp(exponential_decay, t_span, y0, p=0.5)

print("Status:", sol.message)
print("Time points:", sol.times)
print("Values:", sol.values)

# Plotting
plt.figure()
plt.plot(sol.times, sol.values, 'o-')
plt.xlabel('t')
plt.ylabel('y')
plt.title('Exponential Decay')
plt.legend(['y1', 'y2', 'y3'])
plt.grid(True)
plt.show()
