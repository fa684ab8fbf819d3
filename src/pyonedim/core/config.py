"""
Configuration objects for flow domains.
"""
from dataclasses import dataclass, field

import cantera as ct

from .errors import UnsupportedConfigurationError


@dataclass
class FlowConfig:
    """Configuration for a flow domain"""
    pressure: float = ct.one_atm  # [Pa]
    with_soret: bool = False  # Thermal diffusion, multicomponent only
    do_radiation: bool = False  # Optically-thin radiative loss

    # Boundary emissivities used by the radiation model
    emissivity_left: float = 0.0
    emissivity_right: float = 0.0

    # Default error tolerances handed to the outer solver
    steady_rtol: float = 1.0e-8
    steady_atol: float = 1.0e-15
    transient_rtol: float = 1.0e-8
    transient_atol: float = 1.0e-15

    def validate(self) -> None:
        if self.pressure <= 0.0:
            raise UnsupportedConfigurationError(
                f"Pressure must be positive, got {self.pressure}")
        for side, eps in (("left", self.emissivity_left),
                          ("right", self.emissivity_right)):
            if not 0.0 <= eps <= 1.0:
                raise UnsupportedConfigurationError(
                    f"The {side} boundary emissivity must be between 0.0 and 1.0, got {eps}")


@dataclass
class SolidSolverConfig:
    """Iteration controls for the porous solid subsolver"""
    outer_tol: float = 1.0e-6  # Norm of the net radiative source change
    outer_max_iter: int = 400
    inner_tol: float = 1.0e-6  # Norm of the two-flux intensity change
    inner_max_iter: int = 100
    relax: float = 0.1  # Under-relaxation of the net radiative source


@dataclass
class PorousConfig:
    """
    Porous burner description. Section 1 lies upstream of the midpoint
    ``zmid`` and section 2 downstream; properties blend linearly across
    ``[zmid - dzmid, zmid + dzmid]``.
    """
    pore1: float = 0.835  # Porosity [-]
    pore2: float = 0.87
    diam1: float = 0.00029  # Pore diameter [m]
    diam2: float = 0.00152
    scond1: float = 0.1824  # Solid thermal conductivity [W/m/K]
    scond2: float = 0.1624
    omega1: float = 0.8  # Scattering albedo [-]
    omega2: float = 0.8
    srho: float = 510.0  # Solid density [kg/m^3]
    scp: float = 824.0  # Solid heat capacity [J/kg/K]
    zmid: float = 0.035  # Section interface [m]
    dzmid: float = 0.002  # Half width of the blending band [m]
    solver: SolidSolverConfig = field(default_factory=SolidSolverConfig)

    def validate(self) -> None:
        for name in ("pore1", "pore2"):
            value = getattr(self, name)
            if not 0.0 < value < 1.0:
                raise UnsupportedConfigurationError(
                    f"{name} must lie in (0, 1), got {value}")
        for name in ("diam1", "diam2", "dzmid"):
            if getattr(self, name) <= 0.0:
                raise UnsupportedConfigurationError(
                    f"{name} must be positive, got {getattr(self, name)}")
        for name in ("omega1", "omega2"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise UnsupportedConfigurationError(
                    f"{name} must lie in [0, 1], got {value}")
        if not 0.0 < self.solver.relax <= 1.0:
            raise UnsupportedConfigurationError(
                f"Relaxation factor must lie in (0, 1], got {self.solver.relax}")
