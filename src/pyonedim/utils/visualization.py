"""
Reporting and plotting tools for flow domain solutions
"""
import logging
from typing import List, Optional

import numpy as np
import matplotlib.pyplot as plt

from ..core.components import C_OFFSET_T, C_OFFSET_U, C_OFFSET_V, C_OFFSET_Y

logger = logging.getLogger(__name__)


def show_solution(flow, xg: np.ndarray, columns: int = 5) -> str:
    """
    Log the solution profiles of a flow domain as a table, ``columns``
    components per block, followed by the radiative heat loss when radiation
    is enabled. Returns the formatted text.
    """
    x = flow.local_view(xg)
    names = [flow.component_name(n) for n in range(flow.n_vars)]
    lines = [f"Pressure: {flow.pressure:10.4g} Pa"]
    for start in range(0, flow.n_vars, columns):
        block = range(start, min(start + columns, flow.n_vars))
        lines.append("-" * (14 * (len(block) + 1)))
        lines.append(f"{'z':>13} " + "".join(f"{names[n]:>13} " for n in block))
        lines.append("-" * (14 * (len(block) + 1)))
        for j in range(flow.n_points):
            lines.append(f"{flow.grid.z[j]:13.5g} "
                         + "".join(f"{x[j, n]:13.5g} " for n in block))

    if flow.do_radiation:
        lines.append("-" * 28)
        lines.append(f"{'z [m]':>13} {'qdot [W/m^3]':>13}")
        for j in range(flow.n_points):
            lines.append(f"{flow.grid.z[j]:13.5g} {flow.qdot_radiation[j]:13.5g}")

    text = "\n".join(lines)
    logger.info("\n%s", text)
    return text


class FlowVisualizer:
    """
    Plots of flow domain solution profiles
    """
    def __init__(self, flow):
        self.flow = flow
        self.fig = None

    def plot_profiles(self, xg: np.ndarray, species_names: Optional[List[str]] = None):
        """
        Plot temperature, species and velocity profiles

        Args:
            xg: Solution vector containing this domain
            species_names: Species to plot (if None, plots major species)
        """
        flow = self.flow
        x = flow.local_view(xg)
        z = flow.grid.z * 1000  # Convert to mm

        if self.fig is None:
            self.fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(10, 12))
            self.fig.suptitle('Flow Structure')
        else:
            ax1, ax2, ax3 = self.fig.axes
            for ax in (ax1, ax2, ax3):
                ax.clear()

        # Temperature profile, with the solid temperature for porous burners
        ax1.plot(z, x[:, C_OFFSET_T], 'r-', label='Gas')
        if flow.porous is not None and flow.porous.solid_initialized:
            ax1.plot(z, flow.porous.Tw, 'k--', label='Solid')
        ax1.set_ylabel('Temperature [K]')
        ax1.legend()
        ax1.grid(True)

        # Species profiles
        Y = x[:, C_OFFSET_Y:]
        if species_names is None:
            # Plot major species (Y > 0.01 anywhere)
            species_indices = np.where(np.max(Y, axis=0) > 0.01)[0]
            species_names = [flow.species_names[k] for k in species_indices]
        else:
            species_indices = [flow.species_names.index(name) for name in species_names]

        for k, name in zip(species_indices, species_names):
            ax2.plot(z, Y[:, k], label=name)
        ax2.set_ylabel('Mass Fraction')
        ax2.legend()
        ax2.grid(True)

        # Velocity profiles
        ax3.plot(z, x[:, C_OFFSET_U], 'b-', label='u')
        ax3.plot(z, x[:, C_OFFSET_V], 'g-', label='V')
        ax3.set_xlabel('Position [mm]')
        ax3.set_ylabel('u [m/s], V [1/s]')
        ax3.legend()
        ax3.grid(True)

        plt.tight_layout()
        return self.fig
