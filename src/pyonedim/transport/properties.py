"""
Property cache for one-dimensional flow domains.

Holds per-point thermodynamic properties and per-interval transport
properties and species diffusive mass fluxes. Everything is recomputed for
the window of points that a residual evaluation actually needs; values
outside that window are whatever the last full pass left behind.
"""
import logging
from enum import Enum
from typing import Optional

import numpy as np

from ..core.base import TransportComponent
from ..core.components import C_OFFSET_T, C_OFFSET_Y
from ..core.errors import UnknownTransportModelError, UnsupportedConfigurationError

logger = logging.getLogger(__name__)


class TransportModel(Enum):
    """Closures for the species diffusive flux"""
    MixtureAveraged = "mixture-averaged"
    Multicomponent = "multicomponent"


# Transport model names reported by Cantera, old and new spellings
_MODEL_NAMES = {
    "mixture-averaged": TransportModel.MixtureAveraged,
    "mixture-averaged-CK": TransportModel.MixtureAveraged,
    "Mix": TransportModel.MixtureAveraged,
    "CK_Mix": TransportModel.MixtureAveraged,
    "multicomponent": TransportModel.Multicomponent,
    "multicomponent-CK": TransportModel.Multicomponent,
    "Multi": TransportModel.Multicomponent,
    "CK_Multi": TransportModel.Multicomponent,
}


def classify_transport_model(name: str) -> TransportModel:
    """Map a provider transport model name onto a flux closure"""
    try:
        return _MODEL_NAMES[name]
    except KeyError:
        raise UnknownTransportModelError(
            f"Unknown transport model '{name}'. Use a mixture-averaged or "
            "multicomponent model.") from None


class PropertyCache(TransportComponent):
    """
    Per-point density, mean molecular weight and heat capacity, per-interval
    viscosity, conductivity and diffusion data, and per-interval species
    diffusive mass fluxes.

    Interval ``j`` joins points ``j`` and ``j+1``; interval quantities are
    stored at index ``j`` of arrays sized to the point count.
    """
    def __init__(self, gas, n_points: int, pressure: float):
        super().__init__()
        self.gas = gas
        self.n_spec = gas.n_species
        self.wt = np.array(gas.molecular_weights, dtype=float)
        self.pressure = pressure

        self.transport_model: Optional[TransportModel] = None
        self.do_soret = False
        self.do_visc = True

        self.n_points = 0
        self.resize(n_points)

    def initialize(self) -> None:
        self._initialized = True

    def resize(self, n_points: int) -> None:
        """Reallocate every property array for a new point count"""
        nsp = self.n_spec
        self.n_points = n_points

        # Point properties
        self.rho = np.zeros(n_points)
        self.wtm = np.zeros(n_points)
        self.cp = np.zeros(n_points)

        # Interval properties
        self.visc = np.zeros(n_points)
        self.tcon = np.zeros(n_points)
        self.diff = np.zeros((nsp, n_points))
        self.flux = np.zeros((nsp, n_points))
        if self.transport_model == TransportModel.Multicomponent:
            self.multidiff = np.zeros((n_points, nsp, nsp))
            self.dthermal = np.zeros((nsp, n_points))
        else:
            self.multidiff = None
            self.dthermal = None

    def set_transport(self, gas, with_soret: bool = False) -> None:
        """Select the flux closure from the transport model of ``gas``"""
        model = classify_transport_model(gas.transport_model)
        if model == TransportModel.MixtureAveraged and with_soret:
            raise UnsupportedConfigurationError(
                "Thermal diffusion (the Soret effect) requires using a "
                "multicomponent transport model.")
        self.gas = gas
        self.transport_model = model
        self.do_soret = with_soret
        self.resize(self.n_points)
        logger.debug("Transport model set to %s (Soret: %s)", model.value, with_soret)

    def enable_soret(self, with_soret: bool = True) -> None:
        if self.transport_model != TransportModel.Multicomponent:
            raise UnsupportedConfigurationError(
                "Thermal diffusion (the Soret effect) requires using a "
                "multicomponent transport model.")
        self.do_soret = with_soret

    def set_gas(self, x: np.ndarray, j: int) -> None:
        """Set the provider state to the temperature and composition at point j"""
        self.gas.set_unnormalized_mass_fractions(x[j, C_OFFSET_Y:])
        self.gas.TP = x[j, C_OFFSET_T], self.pressure

    def set_gas_at_midpoint(self, x: np.ndarray, j: int) -> None:
        """Set the provider state to the mean of points j and j+1"""
        ybar = 0.5 * (x[j, C_OFFSET_Y:] + x[j+1, C_OFFSET_Y:])
        self.gas.set_unnormalized_mass_fractions(ybar)
        self.gas.TP = 0.5 * (x[j, C_OFFSET_T] + x[j+1, C_OFFSET_T]), self.pressure

    def X(self, x: np.ndarray, k, j: int):
        """Mole fraction(s) of species k at point j"""
        return self.wtm[j] * x[j, C_OFFSET_Y + k] / self.wt[k]

    def update_thermo(self, x: np.ndarray, j0: int, j1: int) -> None:
        """Update density, mean molecular weight and cp at points j0..j1"""
        for j in range(j0, j1 + 1):
            self.set_gas(x, j)
            self.rho[j] = self.gas.density
            self.wtm[j] = self.gas.mean_molecular_weight
            self.cp[j] = self.gas.cp_mass

    def update_transport(self, x: np.ndarray, j0: int, j1: int) -> None:
        """Update transport properties on the intervals j0..j1-1"""
        if self.transport_model == TransportModel.MixtureAveraged:
            for j in range(j0, j1):
                self.set_gas_at_midpoint(x, j)
                self.visc[j] = self.gas.viscosity if self.do_visc else 0.0
                self.diff[:, j] = self.gas.mix_diff_coeffs
                self.tcon[j] = self.gas.thermal_conductivity

        elif self.transport_model == TransportModel.Multicomponent:
            for j in range(j0, j1):
                self.set_gas_at_midpoint(x, j)
                wtm = self.gas.mean_molecular_weight
                rho = self.gas.density
                self.visc[j] = self.gas.viscosity if self.do_visc else 0.0
                self.multidiff[j] = self.gas.multi_diff_coeffs

                # diff holds the factor outside the summation over species
                self.diff[:, j] = self.wt * rho / (wtm * wtm)

                self.tcon[j] = self.gas.thermal_conductivity
                if self.do_soret:
                    self.dthermal[:, j] = self.gas.thermal_diff_coeffs
        else:
            raise UnknownTransportModelError(
                "No transport model has been set for this flow domain.")

    def update_diff_fluxes(self, x: np.ndarray, z: np.ndarray, j0: int, j1: int) -> None:
        """Update species diffusive mass fluxes on the intervals j0..j1-1"""
        if self.transport_model == TransportModel.MixtureAveraged:
            for j in range(j0, j1):
                dz = z[j+1] - z[j]
                Xj = self.wtm[j] * x[j, C_OFFSET_Y:] / self.wt
                Xjp = self.wtm[j+1] * x[j+1, C_OFFSET_Y:] / self.wt
                flux = self.wt * (self.rho[j] * self.diff[:, j] / self.wtm[j])
                flux *= (Xj - Xjp) / dz
                # Correction flux so that sum_k Y_k V_k = 0
                self.flux[:, j] = flux - flux.sum() * x[j, C_OFFSET_Y:]

        elif self.transport_model == TransportModel.Multicomponent:
            for j in range(j0, j1):
                dz = z[j+1] - z[j]
                Xj = self.wtm[j] * x[j, C_OFFSET_Y:] / self.wt
                Xjp = self.wtm[j+1] * x[j+1, C_OFFSET_Y:] / self.wt
                weighted = self.multidiff[j] @ (self.wt * (Xjp - Xj))
                self.flux[:, j] = weighted * self.diff[:, j] / dz
        else:
            raise UnknownTransportModelError(
                "No transport model has been set for this flow domain.")

        if self.do_soret:
            for j in range(j0, j1):
                T0, T1 = x[j, C_OFFSET_T], x[j+1, C_OFFSET_T]
                gradlogT = 2.0 * (T1 - T0) / ((T1 + T0) * (z[j+1] - z[j]))
                self.flux[:, j] -= self.dthermal[:, j] * gradlogT

    def compute_properties(self, x: np.ndarray, j0: int, j1: int,
                           z: Optional[np.ndarray] = None,
                           transport: bool = True) -> None:
        """Thermo, transport and flux update over the window [j0, j1]"""
        self.update_thermo(x, j0, j1)
        if transport:
            self.update_transport(x, j0, j1)
        if z is not None:
            self.update_diff_fluxes(x, z, j0, j1)
