"""
Boundary and continuity treatments for the supported flow configurations.

Each configuration is a plain entry in ``FLOW_STRATEGIES``: functions for
the two boundary points and the interior continuity equation, plus a few
switches the residual engine consults. Every other residual row is shared.
The functions receive the flow domain and the local ``(n_points, n_vars)``
views of the solution, residual and flag arrays.

Boundary rows are the defaults a connected boundary object (inlet, outlet,
surface) may overwrite afterwards. All of them are algebraic.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

import numpy as np

from ..core.components import (
    C_OFFSET_L, C_OFFSET_T, C_OFFSET_U, C_OFFSET_V, C_OFFSET_Y
)

logger = logging.getLogger(__name__)


class FlowType(Enum):
    """Supported flow configurations"""
    AxisymmetricStagnation = "stagnation flow"
    FreeFlame = "flame"
    Porous = "porous flow"


@dataclass(frozen=True)
class FlowStrategy:
    """Function table for one flow configuration"""
    left_boundary: Callable
    right_boundary: Callable
    continuity: Callable
    viscous: bool = True  # Free flames carry no radial momentum flux
    porous: bool = False  # Porosity scaling and solid coupling
    finalize: Optional[Callable] = None


def _species_flux_rows(flow, x: np.ndarray, rsd: np.ndarray, j: int, j_flux: int,
                       sign: float) -> None:
    """Zero diffusive flux species rows plus the normalization row"""
    Y = x[j, C_OFFSET_Y:]
    rsd[j, C_OFFSET_Y:] = sign * (flow.props.flux[:, j_flux] + flow.rho_u(x, j) * Y)
    rsd[j, C_OFFSET_Y] = 1.0 - Y.sum()


def eval_left_boundary(flow, x: np.ndarray, rsd: np.ndarray, diag: np.ndarray) -> None:
    """
    Default left boundary. Continuity propagates information right-to-left,
    since rho*u at point 0 depends on point 1 but not on the inlet mass flux.
    A connected inlet subtracts its own values from the V, T and mass flux
    rows, forcing the solution onto them.
    """
    rho = flow.props.rho
    rsd[0, C_OFFSET_U] = (-(flow.rho_u(x, 1) - flow.rho_u(x, 0)) / flow.grid.hh[0]
                          - (rho[1] * x[1, C_OFFSET_V] + rho[0] * x[0, C_OFFSET_V]))
    rsd[0, C_OFFSET_V] = x[0, C_OFFSET_V]
    rsd[0, C_OFFSET_T] = x[0, C_OFFSET_T]
    rsd[0, C_OFFSET_L] = -flow.rho_u(x, 0)
    _species_flux_rows(flow, x, rsd, 0, 0, -1.0)
    diag[0, :] = 0


def eval_stagnation_right_boundary(flow, x: np.ndarray, rsd: np.ndarray,
                                   diag: np.ndarray) -> None:
    """Zero u, V and T, and zero diffusive flux for all species"""
    j = flow.n_points - 1
    rsd[j, C_OFFSET_U] = flow.rho_u(x, j)
    rsd[j, C_OFFSET_V] = x[j, C_OFFSET_V]
    rsd[j, C_OFFSET_T] = x[j, C_OFFSET_T]
    rsd[j, C_OFFSET_L] = x[j, C_OFFSET_L] - x[j-1, C_OFFSET_L]
    _species_flux_rows(flow, x, rsd, j, j - 1, 1.0)
    diag[j, :] = 0


def eval_free_flame_right_boundary(flow, x: np.ndarray, rsd: np.ndarray,
                                   diag: np.ndarray) -> None:
    """Zero gradients of mass flux and temperature at the outflow"""
    j = flow.n_points - 1
    rsd[j, C_OFFSET_U] = flow.rho_u(x, j) - flow.rho_u(x, j-1)
    rsd[j, C_OFFSET_V] = x[j, C_OFFSET_V]
    rsd[j, C_OFFSET_T] = x[j, C_OFFSET_T] - x[j-1, C_OFFSET_T]
    rsd[j, C_OFFSET_L] = x[j, C_OFFSET_L] - x[j-1, C_OFFSET_L]
    _species_flux_rows(flow, x, rsd, j, j - 1, 1.0)
    diag[j, :] = 0


def eval_stagnation_continuity(flow, x: np.ndarray, rsd: np.ndarray,
                               diag: np.ndarray, j: int) -> None:
    """
    d(rho u)/dz + 2 rho V = 0, differenced towards the right boundary so
    that the mass flow rate propagates leftwards (j+1 -> j). Lambda
    information propagates in the opposite direction.
    """
    rho = flow.props.rho
    rsd[j, C_OFFSET_U] = (-(flow.rho_u(x, j+1) - flow.rho_u(x, j)) / flow.grid.hh[j]
                          - (rho[j+1] * x[j+1, C_OFFSET_V] + rho[j] * x[j, C_OFFSET_V]))
    diag[j, C_OFFSET_U] = 0


def eval_free_flame_continuity(flow, x: np.ndarray, rsd: np.ndarray,
                               diag: np.ndarray, j: int) -> None:
    """
    Continuity for a freely propagating flame. Downstream of the anchor the
    difference looks back, upstream it looks forward, and at the anchor
    itself the temperature (or, with the energy equation off, the mass flux)
    is pinned to remove the translational invariance.
    """
    z = flow.grid.z
    rho = flow.props.rho
    hh = flow.grid.hh
    if flow.z_anchor is None or z[j] > flow.z_anchor:
        rsd[j, C_OFFSET_U] = (-(flow.rho_u(x, j) - flow.rho_u(x, j-1)) / hh[j-1]
                              - (rho[j-1] * x[j-1, C_OFFSET_V] + rho[j] * x[j, C_OFFSET_V]))
    elif z[j] == flow.z_anchor:
        if flow.do_energy[j]:
            rsd[j, C_OFFSET_U] = x[j, C_OFFSET_T] - flow.t_anchor
        else:
            rsd[j, C_OFFSET_U] = flow.rho_u(x, j) - rho[0] * 0.3
    else:
        rsd[j, C_OFFSET_U] = (-(flow.rho_u(x, j+1) - flow.rho_u(x, j)) / hh[j]
                              - (rho[j+1] * x[j+1, C_OFFSET_V] + rho[j] * x[j, C_OFFSET_V]))
    diag[j, C_OFFSET_U] = 0


def eval_porous_continuity(flow, x: np.ndarray, rsd: np.ndarray,
                           diag: np.ndarray, j: int) -> None:
    """Stagnation continuity with the porosity multiplying the mass flux"""
    rho = flow.props.rho
    pore = flow.porosity
    rsd[j, C_OFFSET_U] = (-(flow.rho_u(x, j+1) * pore[j+1] - flow.rho_u(x, j) * pore[j])
                          / flow.grid.hh[j]
                          - (rho[j+1] * x[j+1, C_OFFSET_V] + rho[j] * x[j, C_OFFSET_V]))
    diag[j, C_OFFSET_U] = 0


def relocate_anchor(flow, x: np.ndarray) -> bool:
    """
    Make sure the flame anchor sits on a grid point, which may be needed
    after the grid has been modified externally. The anchor moves to the
    right end of the first interval where the temperature profile crosses
    the anchor temperature.

    Returns:
        bool: True if the anchor was moved
    """
    if flow.t_anchor is None:
        return False
    z = flow.grid.z
    if flow.z_anchor is not None and np.any(z == flow.z_anchor):
        return False

    T = x[:, C_OFFSET_T]
    for j in range(flow.n_points - 1):
        if (T[j] - flow.t_anchor) * (T[j+1] - flow.t_anchor) <= 0.0:
            flow.t_anchor = float(T[j+1])
            flow.z_anchor = float(z[j+1])
            logger.info("Flame anchor moved to z = %.6g m, T = %.6g K",
                        flow.z_anchor, flow.t_anchor)
            return True
    return False


FLOW_STRATEGIES: Dict[FlowType, FlowStrategy] = {
    FlowType.AxisymmetricStagnation: FlowStrategy(
        left_boundary=eval_left_boundary,
        right_boundary=eval_stagnation_right_boundary,
        continuity=eval_stagnation_continuity,
    ),
    FlowType.FreeFlame: FlowStrategy(
        left_boundary=eval_left_boundary,
        right_boundary=eval_free_flame_right_boundary,
        continuity=eval_free_flame_continuity,
        viscous=False,
        finalize=relocate_anchor,
    ),
    FlowType.Porous: FlowStrategy(
        left_boundary=eval_left_boundary,
        right_boundary=eval_stagnation_right_boundary,
        continuity=eval_porous_continuity,
        porous=True,
    ),
}
