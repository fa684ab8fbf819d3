"""
Residual engine for one-dimensional reacting flows.

A flow domain evaluates the discretized continuity, radial momentum,
species and energy equations at every grid point of a candidate solution,
together with a flag telling the outer solver whether each row carries a
time derivative (1) or is an algebraic constraint (0). The configuration
specific pieces (boundary rows and continuity) come from the entries in
``FLOW_STRATEGIES``.
"""
import logging
from typing import Any, Dict, Optional, Sequence, Union

import cantera as ct
import numpy as np

from ..core.base import ResidualComponent
from ..core.components import (
    COMPONENT_NAMES, C_OFFSET_L, C_OFFSET_T, C_OFFSET_U, C_OFFSET_V, C_OFFSET_Y
)
from ..core.config import FlowConfig, PorousConfig
from ..core.errors import DataLengthMismatchError, UnsupportedConfigurationError
from ..core.grid import FlowGrid
from ..transport.porous import PorousMedia
from ..transport.properties import PropertyCache
from ..transport.radiation import RadiationModel
from .solid import SolidField, SolidGasState, solve_porous_solid_field
from .strategies import FLOW_STRATEGIES, FlowType

logger = logging.getLogger(__name__)


class StagnationFlow(ResidualComponent):
    """
    A one-dimensional flow domain: axisymmetric stagnation flow, freely
    propagating flame or flow through a porous burner.

    The domain owns its grid, the property cache and, for the porous
    configuration, the solid-phase state. The solution vector is owned by
    the caller; this domain occupies ``n_points * n_vars`` entries starting
    at ``loc`` and its first point has global index ``first_point``.
    """
    def __init__(self, gas, points: Union[int, Sequence[float]] = 10,
                 flow_type: Union[FlowType, str] = FlowType.AxisymmetricStagnation,
                 config: Optional[FlowConfig] = None,
                 porous: Optional[PorousConfig] = None,
                 kinetics=None):
        super().__init__()
        self.config = config or FlowConfig()
        self.config.validate()

        self.gas = gas
        self.kinetics = kinetics if kinetics is not None else gas
        try:
            self.flow_type = FlowType(flow_type)
        except ValueError:
            raise UnsupportedConfigurationError(f"Unknown flow type '{flow_type}'") from None
        self.strategy = FLOW_STRATEGIES[self.flow_type]
        if porous is not None and not self.strategy.porous:
            raise UnsupportedConfigurationError(
                f"Porous media parameters given for a '{self.flow_type.value}' domain")

        self.n_spec = gas.n_species
        self.n_vars = C_OFFSET_Y + self.n_spec
        self.wt = np.array(gas.molecular_weights, dtype=float)
        self.species_names = list(gas.species_names)

        self.props = PropertyCache(gas, 0, self.config.pressure)
        self.props.do_visc = self.strategy.viscous

        self.do_radiation = self.config.do_radiation
        self.radiation = RadiationModel(self.species_names)
        self.radiation.set_boundary_emissivities(self.config.emissivity_left,
                                                 self.config.emissivity_right)

        self.porous = None
        if self.strategy.porous:
            self.porous = PorousMedia(porous or PorousConfig(), 0)
        self.solid_converged = True

        # Enable all species equations by default, energy nowhere
        self.do_species = np.ones(self.n_spec, dtype=bool)
        self.do_energy = np.zeros(0, dtype=bool)

        # Fixed temperature profile on normalized coordinates
        self.zfix: Optional[np.ndarray] = None
        self.tfix: Optional[np.ndarray] = None

        # Flame anchor, free flames only
        self.z_anchor: Optional[float] = None
        self.t_anchor: Optional[float] = None

        self.x_prev: Optional[np.ndarray] = None

        self._init_bounds()

        self.grid = FlowGrid(self.n_vars)
        self.grid.add_resize_callback(self.resize)
        if np.ndim(points) == 0:
            z = np.arange(int(points)) / int(points)
        else:
            z = np.asarray(points, dtype=float)
        self.setupGrid(z)
        self._initialized = True

    def initialize(self) -> None:
        self._initialized = True

    def _init_bounds(self) -> None:
        nv = self.n_vars
        self.lower = np.full(nv, -1e20)
        self.upper = np.full(nv, 1e20)
        self.lower[C_OFFSET_T] = 200.0  # temperature bounds
        self.upper[C_OFFSET_T] = 1e9
        self.lower[C_OFFSET_Y:] = -1.0e-5  # mass fraction bounds
        self.upper[C_OFFSET_Y:] = 1.0e5

        c = self.config
        self.rtol_ss = np.full(nv, c.steady_rtol)
        self.atol_ss = np.full(nv, c.steady_atol)
        self.rtol_ts = np.full(nv, c.transient_rtol)
        self.atol_ts = np.full(nv, c.transient_atol)

    # ------------------------------------------------------------------
    # Grid and storage
    # ------------------------------------------------------------------

    def setupGrid(self, z: Sequence[float]) -> None:
        """Install a new grid; every per-point array is reallocated"""
        z_old = self.grid.z.copy()
        self.grid.setupGrid(z)
        if self.porous is not None:
            self.porous.remap(z_old, self.grid.z)
        if self.zfix is not None:
            self.fixed_temp = np.interp(self.grid.normalized(), self.zfix, self.tfix)

    def resize(self, n_points: int) -> None:
        """Reallocate property, flux, flag and radiation arrays"""
        n_old = self.n_points
        self.n_points = n_points
        self.props.resize(n_points)
        self.wdot = np.zeros((self.n_spec, n_points))
        self.qdot_radiation = np.zeros(n_points)

        # Existing flags keep their values, new points inherit the last one
        fill = bool(self.do_energy[-1]) if n_old else False
        do_energy = np.full(n_points, fill, dtype=bool)
        keep = min(n_old, n_points)
        do_energy[:keep] = self.do_energy[:keep]
        self.do_energy = do_energy

        self.fixed_temp = np.zeros(n_points)
        self.fixed_y = np.zeros((self.n_spec, n_points))
        self._unit_porosity = np.ones(n_points)
        self.x_prev = None

    @property
    def porosity(self) -> np.ndarray:
        if self.porous is not None:
            return self.porous.pore
        return self._unit_porosity

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def set_transport(self, gas=None, with_soret: Optional[bool] = None) -> None:
        if with_soret is None:
            with_soret = self.config.with_soret
        self.props.set_transport(gas if gas is not None else self.gas, with_soret)
        self.gas = self.props.gas

    def enable_soret(self, with_soret: bool = True) -> None:
        self.props.enable_soret(with_soret)

    @property
    def pressure(self) -> float:
        return self.props.pressure

    def set_pressure(self, pressure: float) -> None:
        self.props.pressure = pressure

    def enable_radiation(self, do_radiation: bool = True) -> None:
        self.do_radiation = do_radiation

    def set_boundary_emissivities(self, e_left: float, e_right: float) -> None:
        self.radiation.set_boundary_emissivities(e_left, e_right)

    def solve_energy_eqn(self, j: Optional[int] = None) -> None:
        """Enable the energy equation at point j, or everywhere"""
        if j is None:
            self.do_energy[:] = True
        else:
            self.do_energy[j] = True
        for n in (C_OFFSET_U, C_OFFSET_V, C_OFFSET_T):
            self.grid.setActive(n, True)

    def fix_temperature(self, j: Optional[int] = None) -> None:
        """Hold the temperature at the fixed profile at point j, or everywhere"""
        if j is None:
            self.do_energy[:] = False
        else:
            self.do_energy[j] = False
        for n in (C_OFFSET_U, C_OFFSET_V, C_OFFSET_T):
            self.grid.setActive(n, False)

    def solve_species(self, k: Optional[int] = None) -> None:
        if k is None:
            self.do_species[:] = True
        else:
            self.do_species[k] = True

    def fix_species(self, k: Optional[int] = None) -> None:
        """Hold species k (or all species) at the profile captured by ``finalize``"""
        if k is None:
            self.do_species[:] = False
        else:
            self.do_species[k] = False

    def set_fixed_temp_profile(self, zfixed: Sequence[float], tfixed: Sequence[float]) -> None:
        """
        Temperature profile used where the energy equation is off, given on
        coordinates normalized to [0, 1] over the domain.
        """
        zfixed = np.asarray(zfixed, dtype=float)
        tfixed = np.asarray(tfixed, dtype=float)
        if len(zfixed) != len(tfixed):
            raise DataLengthMismatchError(
                f"Fixed temperature profile has {len(zfixed)} positions but {len(tfixed)} values")
        self.zfix = zfixed
        self.tfix = tfixed
        self.fixed_temp = np.interp(self.grid.normalized(), zfixed, tfixed)

    def T_fixed(self, j: int) -> float:
        return float(self.fixed_temp[j])

    def set_anchor(self, z: float, T: float) -> None:
        """Pin a free flame at grid location ``z`` with temperature ``T``"""
        if self.flow_type != FlowType.FreeFlame:
            raise UnsupportedConfigurationError("Only free flames carry a flame anchor")
        self.z_anchor = float(z)
        self.t_anchor = float(T)

    def set_previous_solution(self, xg: np.ndarray) -> None:
        """Store the solution of the last time step for transient residuals"""
        self.x_prev = self.local_view(np.asarray(xg, dtype=float)).copy()

    def set_bounds(self, n: int, lower: float, upper: float) -> None:
        self.lower[n] = lower
        self.upper[n] = upper

    def lower_bound(self, n: int) -> float:
        return float(self.lower[n])

    def upper_bound(self, n: int) -> float:
        return float(self.upper[n])

    def set_steady_tolerances(self, rtol: float, atol: float, n: Optional[int] = None) -> None:
        if n is None:
            self.rtol_ss[:] = rtol
            self.atol_ss[:] = atol
        else:
            self.rtol_ss[n] = rtol
            self.atol_ss[n] = atol

    def set_transient_tolerances(self, rtol: float, atol: float, n: Optional[int] = None) -> None:
        if n is None:
            self.rtol_ts[:] = rtol
            self.atol_ts[:] = atol
        else:
            self.rtol_ts[n] = rtol
            self.atol_ts[n] = atol

    def component_name(self, n: int) -> str:
        if n < C_OFFSET_Y:
            return COMPONENT_NAMES[n]
        if n < self.n_vars:
            return self.species_names[n - C_OFFSET_Y]
        return "<unknown>"

    def component_index(self, name: str) -> Optional[int]:
        if name in COMPONENT_NAMES:
            return COMPONENT_NAMES.index(name)
        if name in self.species_names:
            return C_OFFSET_Y + self.species_names.index(name)
        return None

    # ------------------------------------------------------------------
    # Local quantities
    # ------------------------------------------------------------------

    def rho_u(self, x: np.ndarray, j: int) -> float:
        return self.props.rho[j] * x[j, C_OFFSET_U]

    def _upwind(self, x: np.ndarray, j: int) -> int:
        return j if x[j, C_OFFSET_U] > 0.0 else j + 1

    def dVdz(self, x: np.ndarray, j: int) -> float:
        jloc = self._upwind(x, j)
        return (x[jloc, C_OFFSET_V] - x[jloc-1, C_OFFSET_V]) / self.grid.hh[jloc-1]

    def dTdz(self, x: np.ndarray, j: int) -> float:
        jloc = self._upwind(x, j)
        return (x[jloc, C_OFFSET_T] - x[jloc-1, C_OFFSET_T]) / self.grid.hh[jloc-1]

    def dYdz(self, x: np.ndarray, j: int) -> np.ndarray:
        jloc = self._upwind(x, j)
        return (x[jloc, C_OFFSET_Y:] - x[jloc-1, C_OFFSET_Y:]) / self.grid.hh[jloc-1]

    def shear(self, x: np.ndarray, j: int) -> float:
        z = self.grid.z
        visc = self.props.visc
        c1 = visc[j-1] * (x[j, C_OFFSET_V] - x[j-1, C_OFFSET_V])
        c2 = visc[j] * (x[j+1, C_OFFSET_V] - x[j, C_OFFSET_V])
        return 2.0 * (c2 / (z[j+1] - z[j]) - c1 / (z[j] - z[j-1])) / (z[j+1] - z[j-1])

    def div_heat_flux(self, x: np.ndarray, j: int) -> float:
        z = self.grid.z
        tcon = self.props.tcon
        c1 = tcon[j-1] * (x[j, C_OFFSET_T] - x[j-1, C_OFFSET_T])
        c2 = tcon[j] * (x[j+1, C_OFFSET_T] - x[j, C_OFFSET_T])
        return -2.0 * (c2 / (z[j+1] - z[j]) - c1 / (z[j] - z[j-1])) / (z[j+1] - z[j-1])

    def get_wdot(self, x: np.ndarray, j: int) -> np.ndarray:
        """Net molar production rates at point j [kmol/m^3/s]"""
        self.props.set_gas(x, j)
        self.wdot[:, j] = self.kinetics.net_production_rates
        return self.wdot[:, j]

    def _previous(self, x: np.ndarray) -> np.ndarray:
        return self.x_prev if self.x_prev is not None else x

    # ------------------------------------------------------------------
    # Residual evaluation
    # ------------------------------------------------------------------

    def eval(self, jg: Optional[int], xg: np.ndarray, rg: np.ndarray,
             diagg: np.ndarray, rdt: float = 0.0, update_solid: bool = False) -> None:
        """
        Evaluate the residual equations.

        Args:
            jg: Global point index whose neighborhood is evaluated for a
                Jacobian column, or None for the whole domain
            xg: Global solution vector
            rg: Global residual vector, written in place
            diagg: Global algebraic (0) / differential (1) flags, written in place
            rdt: Reciprocal of the time step, zero for steady residuals
            update_solid: Solve the porous solid field before assembling rows
        """
        # Skip if the perturbed point lies outside this domain's influence
        if not self.affected_by(jg):
            return

        # Jacobian columns use the steady-state residual
        if jg is not None:
            rdt = 0.0
        if rdt != 0.0 and self.x_prev is None:
            raise RuntimeError("Transient residual requested without a previous solution")

        x = self.local_view(xg)
        rsd = self.local_view(rg)
        diag = self.local_view(diagg)
        n = self.n_points

        if jg is None:
            jmin, jmax = 0, n - 1
        else:
            jpt = jg - self.first_point
            jmin = max(jpt - 1, 0)
            jmax = min(jpt + 1, n - 1)

        # Properties are computed for grid points from j0 to j1
        j0 = max(jmin - 1, 0)
        j1 = min(jmax + 1, n - 1)

        self.props.update_thermo(x, j0, j1)
        # Transport properties are reused while a Jacobian is evaluated
        if jg is None:
            self.props.update_transport(x, j0, j1)
        self.props.update_diff_fluxes(x, self.grid.z, j0, j1)

        if self.do_radiation:
            self._update_radiation(x, jmin, jmax)

        if self.porous is not None:
            self._update_porous(x, jmin, jmax, rdt, update_solid and jg is None)

        x_prev = self._previous(x)
        for j in range(jmin, jmax + 1):
            if j == 0:
                self.strategy.left_boundary(self, x, rsd, diag)
            elif j == n - 1:
                self.strategy.right_boundary(self, x, rsd, diag)
            else:
                self.strategy.continuity(self, x, rsd, diag, j)
                self._eval_momentum(x, x_prev, rsd, diag, j, rdt)
                self._eval_species(x, x_prev, rsd, diag, j, rdt)
                self._eval_energy(x, x_prev, rsd, diag, j, rdt)

                rsd[j, C_OFFSET_L] = x[j, C_OFFSET_L] - x[j-1, C_OFFSET_L]
                diag[j, C_OFFSET_L] = 0

    def _eval_momentum(self, x, x_prev, rsd, diag, j: int, rdt: float) -> None:
        """
        Radial momentum

            rho dV/dt + rho u dV/dz + rho V^2 = d(mu dV/dz)/dz - lambda
        """
        rho = self.props.rho[j]
        V = x[j, C_OFFSET_V]
        rsd[j, C_OFFSET_V] = ((self.shear(x, j) - x[j, C_OFFSET_L]
                               - self.rho_u(x, j) * self.dVdz(x, j) - rho * V * V) / rho
                              - rdt * (V - x_prev[j, C_OFFSET_V]))
        diag[j, C_OFFSET_V] = 1

    def _eval_species(self, x, x_prev, rsd, diag, j: int, rdt: float) -> None:
        """
        Species, with porosity eps (unity outside porous media)

            rho eps dY_k/dt + eps rho u dY_k/dz + d(eps J_k)/dz = eps M_k omega_k
        """
        z = self.grid.z
        flux = self.props.flux
        pore = self.porosity
        wdot = self.get_wdot(x, j)
        Y = x[j, C_OFFSET_Y:]

        convec = self.rho_u(x, j) * self.dYdz(x, j) * pore[j]
        diffus = 2.0 * (flux[:, j] * pore[j] - flux[:, j-1] * pore[j-1]) / (z[j+1] - z[j-1])
        res = ((self.wt * wdot * pore[j] - convec - diffus) / (self.props.rho[j] * pore[j])
               - rdt * (Y - x_prev[j, C_OFFSET_Y:]))
        flags = np.ones(self.n_spec, dtype=diag.dtype)

        fixed = ~self.do_species
        if fixed.any():
            res[fixed] = Y[fixed] - self.fixed_y[fixed, j]
            flags[fixed] = 0

        rsd[j, C_OFFSET_Y:] = res
        diag[j, C_OFFSET_Y:] = flags

    def _eval_energy(self, x, x_prev, rsd, diag, j: int, rdt: float) -> None:
        """
        Energy

            rho cp dT/dt + rho cp u dT/dz = d(k dT/dz)/dz
                - sum_k(omega_k h_k_ref) - sum_k(J_k cp_k / M_k) dT/dz
                - q_rad - h_v (T - Tw) / eps

        or, where the energy equation is off, T = T_fixed.
        """
        T = x[j, C_OFFSET_T]
        if not self.do_energy[j]:
            rsd[j, C_OFFSET_T] = T - self.fixed_temp[j]
            diag[j, C_OFFSET_T] = 0
            return

        self.props.set_gas(x, j)
        h_RT = self.gas.standard_enthalpies_RT
        cp_R = self.gas.standard_cp_R
        flux = self.props.flux
        rho = self.props.rho[j]
        cp = self.props.cp[j]

        # Heat release and diffusive enthalpy transport
        flxk = 0.5 * (flux[:, j-1] + flux[:, j])
        dtdzj = self.dTdz(x, j)
        heat_release = np.dot(self.wdot[:, j], h_RT) * ct.gas_constant * T
        diffusive = np.dot(flxk, cp_R / self.wt) * ct.gas_constant * dtdzj

        res = -cp * self.rho_u(x, j) * dtdzj - self.div_heat_flux(x, j) - heat_release - diffusive
        if self.porous is not None:
            # Convective exchange with the solid
            res -= self.porous.hconv[j] * (T - self.porous.Tw[j]) / self.porous.pore[j]
        res /= rho * cp
        res -= rdt * (T - x_prev[j, C_OFFSET_T])
        res -= self.qdot_radiation[j] / (rho * cp)
        rsd[j, C_OFFSET_T] = res
        diag[j, C_OFFSET_T] = 1

    def _update_radiation(self, x: np.ndarray, jmin: int, jmax: int) -> None:
        window = slice(jmin, jmax + 1)
        T = x[window, C_OFFSET_T]
        # Mole fractions, species along the first axis
        X = (self.props.wtm[window, np.newaxis] * x[window, C_OFFSET_Y:]).T / self.wt[:, np.newaxis]
        self.qdot_radiation[window] = self.radiation.heat_loss(
            T, X, self.pressure, x[0, C_OFFSET_T], x[-1, C_OFFSET_T])

    def _update_porous(self, x: np.ndarray, jmin: int, jmax: int, rdt: float,
                       update_solid: bool) -> None:
        porous = self.porous
        if not porous.profiles_valid:
            porous.update_profiles(self.grid.z)
        if not porous.solid_initialized:
            porous.initialize_solid(x[:, C_OFFSET_T])

        rho_u = self.props.rho * x[:, C_OFFSET_U]
        porous.update_hconv(rho_u, self.props.tcon, self.props.visc, jmin, jmax)

        if update_solid:
            field, self.solid_converged = solve_porous_solid_field(
                self.solid_gas_state(x), SolidField(porous.Tw, porous.dq),
                rdt, porous.config.solver)
            porous.Tw = field.Tw
            porous.dq = field.dq
            self.grid.setExtraVar(porous.Tw)

    def solid_gas_state(self, x: np.ndarray) -> SolidGasState:
        """Inputs of the solid solver for local solution ``x``"""
        porous = self.porous
        return SolidGasState(
            z=self.grid.z,
            T=x[:, C_OFFSET_T].copy(),
            hconv=porous.hconv.copy(),
            scond=porous.scond,
            extinction=porous.extinction,
            albedo=porous.omega,
            srho=porous.config.srho,
            scp=porous.config.scp,
        )

    # ------------------------------------------------------------------
    # After a solve
    # ------------------------------------------------------------------

    def finalize(self, xg: np.ndarray) -> None:
        """
        Refresh the fixed temperature and species profiles from a solution
        and let the configuration update its own state (flame anchor).
        """
        x = self.local_view(xg)
        energy = bool(self.do_energy[0])
        if energy or self.zfix is None:
            self.fixed_temp = x[:, C_OFFSET_T].copy()
        else:
            self.fixed_temp = np.interp(self.grid.normalized(), self.zfix, self.tfix)
        self.fixed_y = x[:, C_OFFSET_Y:].T.copy()
        if energy:
            self.solve_energy_eqn()
        if self.strategy.finalize is not None:
            self.strategy.finalize(self, x)

    # ------------------------------------------------------------------
    # Persistence contract
    # ------------------------------------------------------------------

    def to_dict(self, xg: np.ndarray) -> Dict[str, Any]:
        """Grid, solution profiles and flags of this domain as plain arrays"""
        x = self.local_view(xg)
        data: Dict[str, Any] = {
            "type": self.flow_type.value,
            "pressure": self.pressure,
            "z": self.grid.z.copy(),
            "u": x[:, C_OFFSET_U].copy(),
            "V": x[:, C_OFFSET_V].copy(),
            "T": x[:, C_OFFSET_T].copy(),
            "L": x[:, C_OFFSET_L].copy(),
            "energy_enabled": self.do_energy.astype(float),
            "species_enabled": self.do_species.astype(float),
            "refine_criteria": {
                "ratio": self.grid.criteria.ratio,
                "slope": self.grid.criteria.slope,
                "curve": self.grid.criteria.curve,
                "prune": self.grid.criteria.prune,
                "grid_min": self.grid.criteria.grid_min,
            },
        }
        for k, name in enumerate(self.species_names):
            data[name] = x[:, C_OFFSET_Y + k].copy()
        if self.do_radiation:
            data["radiative_heat_loss"] = self.qdot_radiation.copy()
        if self.z_anchor is not None:
            data["z_fixed"] = self.z_anchor
            data["t_fixed"] = self.t_anchor
        if self.porous is not None:
            data["Solid"] = self.porous.to_dict()
        return data

    def restore(self, data: Dict[str, Any]) -> np.ndarray:
        """
        Rebuild grid, flags and solid state from ``to_dict`` output.

        Returns:
            np.ndarray: The restored local solution, flattened
        """
        if "z" not in data or len(data["z"]) == 0:
            raise DataLengthMismatchError("Domain contains no grid points")
        if "pressure" in data:
            self.set_pressure(float(data["pressure"]))
        self.setupGrid(data["z"])
        n = self.n_points
        x = np.zeros((n, self.n_vars))

        for name, n_comp in (("u", C_OFFSET_U), ("V", C_OFFSET_V),
                             ("T", C_OFFSET_T), ("L", C_OFFSET_L)):
            if name not in data:
                continue
            values = np.asarray(data[name], dtype=float)
            if len(values) != n:
                raise DataLengthMismatchError(
                    f"{name} array is of length {len(values)} but should be length {n}")
            x[:, n_comp] = values
        if "T" in data:
            # Fixed-temperature runs use the imported profile by default
            self.set_fixed_temp_profile(self.grid.normalized(), x[:, C_OFFSET_T])

        missing = []
        for k, name in enumerate(self.species_names):
            values = np.asarray(data.get(name, []), dtype=float)
            if len(values) == n:
                x[:, C_OFFSET_Y + k] = values
            else:
                missing.append(name)
        if missing:
            logger.warning("Missing data for species: %s", " ".join(missing))

        if "energy_enabled" in data:
            values = np.asarray(data["energy_enabled"])
            if len(values) == n:
                self.do_energy = values.astype(bool)
            elif len(values):
                raise DataLengthMismatchError(
                    f"energy_enabled is length {len(values)} but should be length {n}")

        if "species_enabled" in data:
            values = np.asarray(data["species_enabled"])
            if len(values) == self.n_spec:
                self.do_species = values.astype(bool)
            elif len(values):
                # Typically a solution saved with a different mechanism
                logger.warning("species_enabled is length %d but should be length %d. "
                               "Enabling all species equations.", len(values), self.n_spec)
                self.do_species = np.ones(self.n_spec, dtype=bool)

        if "refine_criteria" in data:
            ref = data["refine_criteria"]
            self.grid.setCriteria(ref["ratio"], ref["slope"], ref["curve"], ref["prune"])
            self.grid.criteria.grid_min = ref["grid_min"]

        if "z_fixed" in data and self.flow_type == FlowType.FreeFlame:
            self.set_anchor(data["z_fixed"], data["t_fixed"])

        if self.porous is not None and "Solid" in data:
            self.porous.restore(data["Solid"])
        return x.ravel()
