"""
PyTest configuration and fixtures
"""
import pytest
import numpy as np
import cantera as ct


class IdealGasDouble:
    """
    Minimal stand-in for a Cantera Solution: ideal gas with constant heat
    capacity and transport properties and user-controlled production rates.
    """
    def __init__(self, species=("A", "B", "N2"), weights=(2.0, 18.0, 28.0),
                 transport_model="mixture-averaged"):
        self.species_names = list(species)
        self.n_species = len(species)
        self.molecular_weights = np.array(weights, dtype=float)
        self.transport_model = transport_model

        self.cp_mass = 1200.0
        self.viscosity = 2.0e-5
        self.thermal_conductivity = 0.05
        self.mix_diff_coeffs = np.full(self.n_species, 2.0e-5)
        self.multi_diff_coeffs = 2.0e-5 * np.ones((self.n_species, self.n_species))
        self.thermal_diff_coeffs = np.zeros(self.n_species)
        self.standard_enthalpies_RT = np.zeros(self.n_species)
        self.standard_cp_R = np.full(self.n_species, 3.5)
        self.wdot = np.zeros(self.n_species)

        self.Y = np.zeros(self.n_species)
        self.Y[-1] = 1.0
        self.T = 300.0
        self.P = ct.one_atm

    def set_unnormalized_mass_fractions(self, Y):
        self.Y = np.array(Y, dtype=float)

    @property
    def TP(self):
        return self.T, self.P

    @TP.setter
    def TP(self, values):
        self.T, self.P = values

    @property
    def mean_molecular_weight(self):
        return 1.0 / np.sum(self.Y / self.molecular_weights)

    @property
    def density(self):
        return self.P * self.mean_molecular_weight / (ct.gas_constant * self.T)

    @property
    def net_production_rates(self):
        return self.wdot.copy()


@pytest.fixture
def fake_gas():
    """Return an ideal-gas test double with mixture-averaged transport."""
    return IdealGasDouble()


@pytest.fixture
def simple_grid():
    """Return a simple uniform grid for testing."""
    return np.linspace(0, 0.02, 11)


@pytest.fixture
def simple_solution():
    """Return a Cantera Solution for testing."""
    gas = ct.Solution('h2o2.yaml')
    gas.TPX = 300.0, ct.one_atm, 'H2:2, O2:1, AR:5'
    return gas


@pytest.fixture
def multicomponent_solution():
    """Return a Cantera Solution with multicomponent transport."""
    gas = ct.Solution('h2o2.yaml', transport_model='multicomponent')
    gas.TPX = 300.0, ct.one_atm, 'H2:2, O2:1, AR:5'
    return gas


def make_solution(flow, u=0.0, V=0.0, T=300.0, L=0.0, Y=None):
    """Solution vector of a flow domain from per-component profiles"""
    x = np.zeros((flow.n_points, flow.n_vars))
    x[:, 0] = u
    x[:, 1] = V
    x[:, 2] = T
    x[:, 3] = L
    if Y is None:
        Y = np.zeros(flow.n_spec)
        Y[-1] = 1.0
    x[:, 4:] = Y
    return x.ravel()


@pytest.fixture
def build_solution():
    """Return the solution vector builder."""
    return make_solution
