"""
Solid-phase energy solver for porous burners.

The solid temperature obeys

    k_s d2Tw/dz2 + h_v (T - Tw) - dq - rho_s c_s dTw/dt = 0

where ``dq`` is the net radiative source given by a two-flux (S2)
discrete-ordinate closure of the radiative transfer equation. Conduction and
radiation are coupled through an outer fixed-point loop on ``dq``.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import cantera as ct
import numpy as np

from ..core.config import SolidSolverConfig
from .tridiagonal import solve_tridiagonal

logger = logging.getLogger(__name__)


@dataclass
class SolidGasState:
    """Gas-side inputs and solid properties for one solid solve"""
    z: np.ndarray  # Grid [m]
    T: np.ndarray  # Gas temperature [K]
    hconv: np.ndarray  # Volumetric heat transfer coefficient [W/m^3/K]
    scond: np.ndarray  # Solid conductivity [W/m/K]
    extinction: np.ndarray  # Extinction coefficient [1/m]
    albedo: np.ndarray  # Scattering albedo [-]
    srho: float  # Solid density [kg/m^3]
    scp: float  # Solid heat capacity [J/kg/K]
    q_left: Optional[float] = None  # Incident forward flux at z[0] [W/m^2]
    q_right: Optional[float] = None  # Incident backward flux at z[-1] [W/m^2]

    def incident_fluxes(self) -> Tuple[float, float]:
        # Both ends see black-body emission at the inlet gas temperature
        q_inlet = ct.stefan_boltzmann * self.T[0]**4
        q_left = q_inlet if self.q_left is None else self.q_left
        q_right = q_inlet if self.q_right is None else self.q_right
        return q_left, q_right


@dataclass
class SolidField:
    """Solid temperature and net radiative source"""
    Tw: np.ndarray
    dq: np.ndarray


def two_flux_radiation(z: np.ndarray, Tw: np.ndarray, extinction: np.ndarray,
                       albedo: np.ndarray, q_left: float, q_right: float,
                       tol: float = 1e-6, max_iter: int = 100
                       ) -> Tuple[np.ndarray, np.ndarray, bool]:
    """
    Iterate forward and backward radiative fluxes to a fixed point.

    Returns:
        Tuple of forward flux, backward flux and a convergence flag
    """
    N = len(z)
    emission = ct.stefan_boltzmann * Tw**4
    q_plus = np.zeros(N)
    q_minus = np.zeros(N)
    q_plus[0] = q_left
    q_minus[N-1] = q_right
    qp_new = q_plus.copy()
    qm_new = q_minus.copy()

    for _ in range(max_iter):
        for i in range(1, N):
            dz = z[i] - z[i-1]
            rk = extinction[i]
            qp_new[i] = (qp_new[i-1] + rk*dz*albedo[i]*q_minus[i]
                         + 2.0*rk*dz*(1.0 - albedo[i])*emission[i]) / \
                        (1.0 + dz*rk*(2.0 - albedo[i]))
        for i in range(N-2, -1, -1):
            dz = z[i+1] - z[i]
            rk = extinction[i]
            qm_new[i] = (qm_new[i+1] + rk*dz*albedo[i]*qp_new[i]
                         + 2.0*rk*dz*(1.0 - albedo[i])*emission[i]) / \
                        (1.0 + dz*rk*(2.0 - albedo[i]))

        change = max(np.linalg.norm(qp_new - q_plus), np.linalg.norm(qm_new - q_minus))
        q_plus[:] = qp_new
        q_minus[:] = qm_new
        if change < tol:
            return q_plus, q_minus, True

    return q_plus, q_minus, False


def net_radiative_source(Tw: np.ndarray, extinction: np.ndarray, albedo: np.ndarray,
                         q_plus: np.ndarray, q_minus: np.ndarray) -> np.ndarray:
    """Net radiative emission of the solid [W/m^3]"""
    return 4.0 * extinction * (1.0 - albedo) * (
        ct.stefan_boltzmann * Tw**4 - 0.5 * q_plus - 0.5 * q_minus)


def conduction_coefficients(state: SolidGasState, previous_Tw: np.ndarray,
                            dq: np.ndarray, rdt: float):
    """Tridiagonal rows of the solid energy balance"""
    z = state.z
    N = len(z)
    a = np.zeros(N)
    b = np.zeros(N)
    c = np.zeros(N)
    rhs = np.zeros(N)

    # End values follow the adjacent gas temperature
    b[0] = 1.0
    rhs[0] = state.T[0]
    b[N-1] = 1.0
    rhs[N-1] = state.T[N-1]

    capacity = state.srho * state.scp * rdt
    for i in range(1, N-1):
        span = z[i+1] - z[i-1]
        a[i] = 2.0 * state.scond[i] / ((z[i] - z[i-1]) * span)
        c[i] = 2.0 * state.scond[i] / ((z[i+1] - z[i]) * span)
        b[i] = -a[i] - c[i] - state.hconv[i] - capacity
        rhs[i] = -state.hconv[i] * state.T[i] + dq[i] - capacity * previous_Tw[i]
    return a, b, c, rhs


def solve_porous_solid_field(gas_state: SolidGasState, previous_field: SolidField,
                             rdt: float = 0.0,
                             config: Optional[SolidSolverConfig] = None
                             ) -> Tuple[SolidField, bool]:
    """
    Solve for the solid temperature and net radiative source.

    The previous field seeds the radiative source and supplies the old
    temperature for the capacitive term. Failure to converge is not fatal:
    the solid temperature falls back to the previous field and the returned
    flag is False.

    Args:
        gas_state: Gas temperature, heat transfer coefficients and solid properties
        previous_field: Solid field from the last call
        rdt: Reciprocal of the time step, zero for a steady solve
        config: Iteration controls

    Returns:
        Tuple of the new solid field and a convergence flag
    """
    config = config or SolidSolverConfig()
    previous_Tw = previous_field.Tw.copy()
    dq = previous_field.dq.copy()
    Tw = previous_Tw.copy()
    q_left, q_right = gas_state.incident_fluxes()

    converged = False
    stalled = False
    for iteration in range(1, config.outer_max_iter + 1):
        a, b, c, rhs = conduction_coefficients(gas_state, previous_Tw, dq, rdt)
        Tw = solve_tridiagonal(a, b, c, rhs)

        q_plus, q_minus, stalled = _radiation_pass(gas_state, Tw, q_left, q_right, config)
        if stalled:
            logger.warning("Solid radiation stall: two-flux iteration did not converge "
                           "in %d sweeps", config.inner_max_iter)
            dq_new = dq.copy()
        else:
            dq_new = net_radiative_source(Tw, gas_state.extinction, gas_state.albedo,
                                          q_plus, q_minus)

        change = np.linalg.norm(dq_new - dq)
        dq = config.relax * dq_new + (1.0 - config.relax) * dq
        if change < config.outer_tol:
            converged = not stalled
            logger.debug("Solid field converged in %d iterations", iteration)
            break
    else:
        Tw = previous_Tw
        logger.warning("Solid radiation not converged after %d iterations; "
                       "keeping the previous solid temperature", config.outer_max_iter)

    return SolidField(Tw, dq), converged


def _radiation_pass(state: SolidGasState, Tw: np.ndarray, q_left: float,
                    q_right: float, config: SolidSolverConfig):
    q_plus, q_minus, ok = two_flux_radiation(
        state.z, Tw, state.extinction, state.albedo, q_left, q_right,
        tol=config.inner_tol, max_iter=config.inner_max_iter)
    return q_plus, q_minus, not ok
