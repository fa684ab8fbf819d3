"""
Porous-media state for burner-stabilized flows through an inert solid.

The solid is described by two sections joined at ``zmid``. Porosity, pore
diameter, solid conductivity and scattering albedo are constant inside each
section and blend linearly across ``[zmid - dzmid, zmid + dzmid]``. The
extinction coefficient and the Nusselt correlation follow Hsu and Howell
(1992) for partially stabilized zirconia.

The solid temperature ``Tw`` and the net radiative source ``dq`` are carried
from one residual evaluation to the next; they seed the next solid solve.
"""
import logging
from typing import Any, Dict

import numpy as np
from scipy.interpolate import interp1d

from ..core.config import PorousConfig
from ..core.errors import DataLengthMismatchError

logger = logging.getLogger(__name__)

_SCALARS = ("pore1", "pore2", "diam1", "diam2", "scond1", "scond2",
            "omega1", "omega2", "srho", "scp", "zmid", "dzmid")

# Profiles written by to_dict; only the carried solid fields are read back
_FIELDS = {
    "Tsolid": "Tw",
    "Radiation": "dq",
    "Porosity": "pore",
    "Diameter": "diam",
    "SolidConductivity": "scond",
    "Hconv": "hconv",
}

_CARRIED = ("Tsolid", "Radiation")


def blend(z: np.ndarray, zmid: float, dzmid: float, v1: float, v2: float) -> np.ndarray:
    """Value v1 upstream of the band, v2 downstream, linear inside it"""
    z_start = zmid - dzmid
    values = v1 + (v2 - v1) / (2.0 * dzmid) * (z - z_start)
    values = np.where(z < z_start, v1, values)
    return np.where(z > zmid + dzmid, v2, values)


class PorousMedia:
    """Solid-phase properties and carried solid fields of a porous burner"""
    def __init__(self, config: PorousConfig, n_points: int):
        config.validate()
        self.config = config
        self.n_points = 0
        self.profiles_valid = False
        self.solid_initialized = False
        self.resize(n_points)

    def resize(self, n_points: int) -> None:
        """Reallocate property profiles and reset the solid fields"""
        self.n_points = n_points
        self.pore = np.ones(n_points)
        self.diam = np.zeros(n_points)
        self.scond = np.zeros(n_points)
        self.omega = np.zeros(n_points)
        self.extinction = np.zeros(n_points)
        self.cmult = np.zeros(n_points)  # Nusselt number coefficients
        self.mpow = np.zeros(n_points)
        self.hconv = np.zeros(n_points)
        self.Tw = np.zeros(n_points)
        self.dq = np.zeros(n_points)
        self.solid_initialized = False
        self.profiles_valid = False

    def remap(self, z_old: np.ndarray, z_new: np.ndarray) -> None:
        """Carry the solid fields over to a new grid"""
        carry = self.solid_initialized and len(z_old) == len(self.Tw)
        if carry:
            # Values outside the old grid take the nearest end value
            Tw = interp1d(z_old, self.Tw, bounds_error=False,
                          fill_value=(self.Tw[0], self.Tw[-1]))(z_new)
            dq = interp1d(z_old, self.dq, bounds_error=False,
                          fill_value=(self.dq[0], self.dq[-1]))(z_new)
        self.resize(len(z_new))
        if carry:
            self.Tw = Tw
            self.dq = dq
            self.solid_initialized = True

    def initialize_solid(self, T_gas: np.ndarray) -> None:
        """Start the solid in thermal equilibrium with the gas"""
        self.Tw = np.array(T_gas, dtype=float)
        self.dq = np.zeros(self.n_points)
        self.solid_initialized = True

    def update_profiles(self, z: np.ndarray) -> None:
        """Recompute the solid property profiles for grid ``z``"""
        c = self.config
        self.pore = blend(z, c.zmid, c.dzmid, c.pore1, c.pore2)
        self.diam = blend(z, c.zmid, c.dzmid, c.diam1, c.diam2)
        self.scond = blend(z, c.zmid, c.dzmid, c.scond1, c.scond2)
        self.omega = blend(z, c.zmid, c.dzmid, c.omega1, c.omega2)

        # Extinction coefficient, PSZ, Hsu and Howell (1992)
        self.extinction = 3.0 * (1.0 - self.pore) / self.diam
        self.cmult = -400.0 * self.diam + 0.687
        self.mpow = 443.7 * self.diam + 0.361
        self.profiles_valid = True

    def update_hconv(self, rho_u: np.ndarray, tcon: np.ndarray, visc: np.ndarray,
                     j0: int, j1: int) -> None:
        """
        Volumetric convective heat transfer coefficient [W/m^3/K] at points
        j0..j1 from a pore Reynolds number correlation. The last point uses
        the properties of the last interval.
        """
        jlast = self.n_points - 2
        for j in range(j0, j1 + 1):
            jt = min(j, jlast)
            if visc[jt] <= 0.0:
                self.hconv[j] = 0.0
                continue
            Re = abs(rho_u[j]) * self.pore[j] * self.diam[j] / visc[jt]
            nusselt = self.cmult[j] * Re**self.mpow[j]
            self.hconv[j] = tcon[jt] * nusselt / self.diam[j]**2

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {name: getattr(self.config, name) for name in _SCALARS}
        for key, attr in _FIELDS.items():
            data[key] = getattr(self, attr).copy()
        return data

    def restore(self, data: Dict[str, Any]) -> None:
        """
        Restore solid parameters and the carried solid fields saved by
        ``to_dict``. Property profiles and ``hconv`` are derived data; they
        are rebuilt from the restored parameters on the next evaluation.
        """
        for name in _SCALARS:
            if name in data:
                setattr(self.config, name, float(data[name]))
        self.config.validate()
        self.profiles_valid = False

        for key in _CARRIED:
            attr = _FIELDS[key]
            values = np.asarray(data.get(key, []), dtype=float)
            if len(values) == self.n_points:
                setattr(self, attr, values.copy())
            elif len(values):
                raise DataLengthMismatchError(
                    f"{key} is of length {len(values)} but should be length {self.n_points}")
        if len(data.get("Tsolid", [])):
            self.solid_initialized = True
        logger.info("Restored porous solid state on %d points", self.n_points)

