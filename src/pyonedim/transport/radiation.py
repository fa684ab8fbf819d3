"""
Optically-thin radiative heat loss.

The model of Liu and Rogg (EUROTHERM Seminars 17, 1991): optically thin
limit, gray gas, CO2 and H2O as the only radiating species. Planck mean
absorption coefficients are polynomials in 1000/T fitted to RADCAL data
(Grosshandler, NIST TN 1402, 1993), coefficients as published by the TNF
workshop.
"""
from typing import Optional, Sequence

import cantera as ct
import numpy as np

from ..core.errors import UnsupportedConfigurationError

# Polynomial coefficients for the Planck mean absorption coefficient [1/m/atm]
C_H2O = np.array([-0.23093, -1.12390, 9.41530, -2.99880, 0.51382, -1.86840e-5])
C_CO2 = np.array([18.741, -121.310, 273.500, -194.050, 56.310, -5.8169])

K_P_REF = ct.one_atm


def _find_species(species_names: Sequence[str], name: str) -> Optional[int]:
    for candidate in (name, name.lower()):
        if candidate in species_names:
            return list(species_names).index(candidate)
    return None


def planck_mean_coefficient(coeffs: np.ndarray, T) -> np.ndarray:
    """Planck mean absorption coefficient per unit partial pressure [1/m/Pa]"""
    theta = 1000.0 / np.asarray(T, dtype=float)
    # np.polyval wants the highest power first
    return np.polyval(coeffs[::-1], theta) / K_P_REF


class RadiationModel:
    """Volumetric radiative heat loss from CO2 and H2O"""
    def __init__(self, species_names: Sequence[str]):
        self.k_co2 = _find_species(species_names, "CO2")
        self.k_h2o = _find_species(species_names, "H2O")
        self.emissivity_left = 0.0
        self.emissivity_right = 0.0

    def set_boundary_emissivities(self, e_left: float, e_right: float) -> None:
        if not 0.0 <= e_left <= 1.0:
            raise UnsupportedConfigurationError(
                "The left boundary emissivity must be between 0.0 and 1.0!")
        if not 0.0 <= e_right <= 1.0:
            raise UnsupportedConfigurationError(
                "The right boundary emissivity must be between 0.0 and 1.0!")
        self.emissivity_left = e_left
        self.emissivity_right = e_right

    @property
    def has_absorbers(self) -> bool:
        return self.k_co2 is not None or self.k_h2o is not None

    def absorption_coefficient(self, T, X_co2, X_h2o, pressure: float) -> np.ndarray:
        """Planck mean absorption coefficient of the mixture [1/m]"""
        k_P = np.zeros_like(np.asarray(T, dtype=float))
        if self.k_h2o is not None:
            k_P = k_P + pressure * X_h2o * planck_mean_coefficient(C_H2O, T)
        if self.k_co2 is not None:
            k_P = k_P + pressure * X_co2 * planck_mean_coefficient(C_CO2, T)
        return k_P

    def heat_loss(self, T, X: np.ndarray, pressure: float,
                  T_left: float, T_right: float) -> np.ndarray:
        """
        Radiative heat loss [W/m^3] at points with temperature ``T`` and
        mole fractions ``X`` (species along the first axis), referenced
        against black-body emission from the two domain ends.
        """
        sigma = ct.stefan_boltzmann
        X_co2 = X[self.k_co2] if self.k_co2 is not None else 0.0
        X_h2o = X[self.k_h2o] if self.k_h2o is not None else 0.0
        k_P = self.absorption_coefficient(T, X_co2, X_h2o, pressure)

        boundary_left = self.emissivity_left * sigma * T_left**4
        boundary_right = self.emissivity_right * sigma * T_right**4
        return 2.0 * k_P * (2.0 * sigma * np.asarray(T)**4
                            - boundary_left - boundary_right)
