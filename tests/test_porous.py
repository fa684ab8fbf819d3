"""
Tests for porous media properties and solid state
"""
import pytest
import numpy as np

from pyonedim.core.config import PorousConfig, SolidSolverConfig
from pyonedim.core.errors import DataLengthMismatchError, UnsupportedConfigurationError
from pyonedim.transport.porous import PorousMedia, blend


@pytest.fixture
def porous():
    media = PorousMedia(PorousConfig(), 5)
    media.update_profiles(np.array([0.0, 0.034, 0.035, 0.036, 0.07]))
    return media


def test_blend():
    z = np.array([0.0, 0.033, 0.034, 0.035, 0.036, 0.037, 0.07])
    values = blend(z, 0.035, 0.002, 1.0, 3.0)
    np.testing.assert_allclose(values, [1.0, 1.0, 1.5, 2.0, 2.5, 3.0, 3.0])


def test_profiles(porous):
    c = porous.config
    np.testing.assert_allclose(porous.pore[[0, -1]], [c.pore1, c.pore2])
    np.testing.assert_allclose(porous.pore[2], 0.5 * (c.pore1 + c.pore2))
    np.testing.assert_allclose(porous.diam[[0, -1]], [c.diam1, c.diam2])
    np.testing.assert_allclose(porous.scond[[0, -1]], [c.scond1, c.scond2])
    np.testing.assert_allclose(porous.omega, 0.8)
    np.testing.assert_allclose(porous.extinction, 3.0 * (1.0 - porous.pore) / porous.diam)
    np.testing.assert_allclose(porous.cmult, -400.0 * porous.diam + 0.687)
    np.testing.assert_allclose(porous.mpow, 443.7 * porous.diam + 0.361)
    assert porous.profiles_valid


def test_hconv(porous):
    rho_u = np.array([0.5, 0.5, -0.5, 0.5, 0.5])
    tcon = np.full(5, 0.05)
    visc = np.array([2e-5, 2e-5, 2e-5, 2e-5, 0.0])
    porous.update_hconv(rho_u, tcon, visc, 0, 4)

    Re = 0.5 * porous.pore * porous.diam / 2e-5
    expected = 0.05 * porous.cmult * Re**porous.mpow / porous.diam**2
    # Flow direction does not matter, the last point reuses the last interval
    np.testing.assert_allclose(porous.hconv[:4], expected[:4])
    np.testing.assert_allclose(porous.hconv[4], expected[4])
    assert np.all(porous.hconv > 0.0)

    visc[:] = 0.0
    porous.update_hconv(rho_u, tcon, visc, 1, 2)
    np.testing.assert_allclose(porous.hconv[1:3], 0.0)


def test_remap_keeps_solid_state():
    media = PorousMedia(PorousConfig(), 3)
    z_old = np.array([0.0, 0.5, 1.0])
    media.initialize_solid(np.array([300.0, 500.0, 700.0]))
    media.dq = np.array([0.0, 10.0, 20.0])

    media.remap(z_old, np.array([0.0, 0.25, 0.5, 0.75, 1.0]))
    assert media.n_points == 5
    assert media.solid_initialized
    assert not media.profiles_valid
    np.testing.assert_allclose(media.Tw, [300.0, 400.0, 500.0, 600.0, 700.0])
    np.testing.assert_allclose(media.dq, [0.0, 5.0, 10.0, 15.0, 20.0])


def test_remap_uninitialized_resets():
    media = PorousMedia(PorousConfig(), 3)
    media.remap(np.array([0.0, 0.5, 1.0]), np.linspace(0, 1, 4))
    assert not media.solid_initialized
    np.testing.assert_allclose(media.Tw, 0.0)


def test_save_and_restore(porous):
    porous.initialize_solid(np.linspace(300.0, 1200.0, 5))
    data = porous.to_dict()
    assert data["pore1"] == 0.835
    np.testing.assert_allclose(data["Tsolid"], np.linspace(300.0, 1200.0, 5))

    other = PorousMedia(PorousConfig(zmid=0.01), 5)
    other.restore(data)
    assert other.config.zmid == 0.035
    assert other.solid_initialized
    assert not other.profiles_valid
    np.testing.assert_allclose(other.Tw, porous.Tw)
    other.update_profiles(np.array([0.0, 0.034, 0.035, 0.036, 0.07]))
    np.testing.assert_allclose(other.pore, porous.pore)


def test_restore_rebuilds_profiles_from_parameters(porous):
    """Saved property profiles are not read back; the parameters define them"""
    data = porous.to_dict()
    data["Porosity"] = np.full(5, 0.1)
    data["Hconv"] = np.full(5, 7.0)
    data["Radiation"] = np.arange(5.0)

    other = PorousMedia(PorousConfig(), 5)
    other.restore(data)
    np.testing.assert_allclose(other.dq, np.arange(5.0))
    np.testing.assert_allclose(other.pore, 1.0)
    np.testing.assert_allclose(other.hconv, 0.0)

    other.update_profiles(np.array([0.0, 0.034, 0.035, 0.036, 0.07]))
    np.testing.assert_allclose(other.pore, porous.pore)


def test_restore_length_mismatch(porous):
    data = porous.to_dict()
    data["Tsolid"] = np.zeros(3)
    with pytest.raises(DataLengthMismatchError):
        porous.restore(data)


@pytest.mark.parametrize("kwargs", [
    {"pore1": 1.2},
    {"diam2": 0.0},
    {"omega1": -0.1},
    {"dzmid": -1.0},
    {"solver": SolidSolverConfig(relax=0.0)},
])
def test_invalid_config(kwargs):
    with pytest.raises(UnsupportedConfigurationError):
        PorousMedia(PorousConfig(**kwargs), 3)
