import logging

import numpy as np
import cantera as ct
import matplotlib.pyplot as plt

from pyonedim import FlowConfig, StagnationFlow
from pyonedim.utils.visualization import FlowVisualizer, show_solution

logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")

# Hydrogen/oxygen/argon mixture against a hot wall
gas = ct.Solution('h2o2.yaml')
gas.TPX = 300.0, ct.one_atm, 'H2:2, O2:1, AR:7'
Y_unburned = gas.Y.copy()
gas.equilibrate('HP')
T_burned = gas.T
Y_burned = gas.Y.copy()

flow = StagnationFlow(gas, np.linspace(0.0, 0.02, 41),
                      config=FlowConfig(do_radiation=True))
flow.set_transport(gas)

# Initial guess: tanh profiles joining the unburned and burned states
z = flow.grid.z
s = 0.5 * (1.0 + np.tanh((z - 0.01) / 0.001))
x = np.zeros((flow.n_points, flow.n_vars))
x[:, 0] = 0.5 * (1.0 - z / z[-1])  # axial velocity [m/s]
x[:, 1] = 50.0  # radial velocity gradient [1/s]
x[:, 2] = 300.0 + (T_burned - 300.0) * s
x[:, 3] = -1.0e3
x[:, 4:] = np.outer(1.0 - s, Y_unburned) + np.outer(s, Y_burned)
xg = x.ravel()

# Residuals with the temperature held at the initial guess, then with energy
flow.finalize(xg)
residual = np.zeros_like(xg)
diag = np.zeros_like(xg)
flow.eval(None, xg, residual, diag)
print(f"Fixed temperature: max |residual| = {np.abs(residual).max():.4e}")

flow.solve_energy_eqn()
flow.eval(None, xg, residual, diag)
print(f"Energy equation:   max |residual| = {np.abs(residual).max():.4e}")
print(f"Differential rows: {int(diag.sum())} of {len(diag)}")

show_solution(flow, xg)

viz = FlowVisualizer(flow)
viz.plot_profiles(xg, species_names=['H2', 'O2', 'H2O'])
plt.show()
