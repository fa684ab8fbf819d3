"""
Tests for the porous solid subsolver
"""
import numpy as np
import cantera as ct

from pyonedim.core.config import SolidSolverConfig
from pyonedim.solvers.solid import (
    SolidField, SolidGasState, conduction_coefficients, net_radiative_source,
    solve_porous_solid_field, two_flux_radiation
)


def _state(T, z, hconv=0.0, extinction=0.0, albedo=0.0, **kwargs):
    N = len(z)
    return SolidGasState(
        z=z, T=np.asarray(T, dtype=float),
        hconv=np.full(N, hconv), scond=np.full(N, 0.2),
        extinction=np.full(N, extinction), albedo=np.full(N, albedo),
        srho=510.0, scp=824.0, **kwargs)


def test_linear_conduction():
    """No exchange and no radiation: the solid conducts linearly between the ends"""
    z = np.linspace(0.0, 0.05, 11)
    T = np.full(11, 500.0)
    T[0], T[-1] = 300.0, 1300.0
    state = _state(T, z)
    previous = SolidField(T.copy(), np.zeros(11))

    field, converged = solve_porous_solid_field(state, previous)
    assert converged
    np.testing.assert_allclose(field.Tw, np.linspace(300.0, 1300.0, 11))
    np.testing.assert_allclose(field.dq, 0.0)


def test_radiative_equilibrium():
    """Uniform solid irradiated at its own temperature has no net source"""
    N = 21
    z = np.linspace(0.0, 0.01, N)
    T = np.full(N, 900.0)
    state = _state(T, z, hconv=1e5, extinction=1.0, albedo=0.5)
    config = SolidSolverConfig(inner_max_iter=500)

    field, converged = solve_porous_solid_field(state, SolidField(T.copy(), np.zeros(N)),
                                                config=config)
    assert converged
    np.testing.assert_allclose(field.Tw, 900.0, rtol=1e-8)
    assert np.abs(field.dq).max() < 1e-6 * ct.stefan_boltzmann * 900.0**4


def test_cold_solid():
    N = 6
    z = np.linspace(0.0, 0.01, N)
    state = _state(np.zeros(N), z, hconv=10.0, extinction=100.0, albedo=0.8)
    field, converged = solve_porous_solid_field(state, SolidField(np.zeros(N), np.zeros(N)))
    assert converged
    np.testing.assert_allclose(field.Tw, 0.0)
    np.testing.assert_allclose(field.dq, 0.0)


def test_two_flux_fixed_point():
    N = 8
    z = np.linspace(0.0, 0.02, N)
    Tw = np.full(N, 1000.0)
    E = ct.stefan_boltzmann * 1000.0**4
    q_plus, q_minus, ok = two_flux_radiation(z, Tw, np.full(N, 5.0), np.full(N, 0.3), E, E,
                                             max_iter=500)
    assert ok
    np.testing.assert_allclose(q_plus, E, rtol=1e-8)
    np.testing.assert_allclose(q_minus, E, rtol=1e-8)
    dq = net_radiative_source(Tw, np.full(N, 5.0), np.full(N, 0.3), q_plus, q_minus)
    np.testing.assert_allclose(dq, 0.0, atol=1e-6 * E)


def test_transparent_medium_carries_boundary_flux():
    N = 5
    z = np.linspace(0.0, 0.01, N)
    q_plus, q_minus, ok = two_flux_radiation(z, np.full(N, 800.0), np.zeros(N), np.zeros(N),
                                             100.0, 50.0)
    assert ok
    np.testing.assert_allclose(q_plus, 100.0)
    np.testing.assert_allclose(q_minus, 50.0)


def test_conduction_coefficients_transient():
    z = np.array([0.0, 0.01, 0.03])
    state = _state([300.0, 400.0, 500.0], z, hconv=2.0)
    a, b, c, rhs = conduction_coefficients(state, np.array([300.0, 350.0, 500.0]),
                                           np.array([0.0, 7.0, 0.0]), rdt=10.0)
    assert b[0] == 1.0 and rhs[0] == 300.0
    assert b[2] == 1.0 and rhs[2] == 500.0
    np.testing.assert_allclose(a[1], 2.0 * 0.2 / (0.01 * 0.03))
    np.testing.assert_allclose(c[1], 2.0 * 0.2 / (0.02 * 0.03))
    capacity = 510.0 * 824.0 * 10.0
    np.testing.assert_allclose(b[1], -a[1] - c[1] - 2.0 - capacity)
    np.testing.assert_allclose(rhs[1], -2.0 * 400.0 + 7.0 - capacity * 350.0)


def test_incident_flux_defaults():
    state = _state([600.0, 700.0], np.array([0.0, 1.0]), q_right=5.0)
    q_left, q_right = state.incident_fluxes()
    np.testing.assert_allclose(q_left, ct.stefan_boltzmann * 600.0**4)
    assert q_right == 5.0


def test_outer_cap_keeps_previous_temperature():
    N = 6
    z = np.linspace(0.0, 0.01, N)
    T = np.linspace(300.0, 1500.0, N)
    previous = SolidField(np.full(N, 800.0), np.zeros(N))
    state = _state(T, z, hconv=1e3, extinction=500.0, albedo=0.2)
    config = SolidSolverConfig(outer_max_iter=1, outer_tol=1e-30)

    field, converged = solve_porous_solid_field(state, previous, config=config)
    assert not converged
    np.testing.assert_allclose(field.Tw, previous.Tw)


def test_inner_stall_freezes_radiative_source(caplog):
    """A two-flux stall keeps the seeded source and reports no convergence"""
    N = 8
    z = np.linspace(0.0, 0.01, N)
    T = np.linspace(300.0, 1500.0, N)
    seed = np.full(N, 3.0)
    previous = SolidField(T.copy(), seed.copy())
    state = _state(T, z, hconv=1e3, extinction=500.0, albedo=0.2)
    config = SolidSolverConfig(inner_max_iter=1)

    field, converged = solve_porous_solid_field(state, previous, config=config)
    assert converged is False
    np.testing.assert_allclose(field.dq, seed)
    assert "Solid radiation stall" in caplog.text
