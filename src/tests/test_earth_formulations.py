# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
import pickle
import numpy as np
import pytest
from uncertainties import ufloat

import LineCableEngine.api as lce

SELF = lce.CouplingTerm.Self
MUTUAL = lce.CouplingTerm.Mutual


def get_earth_vectors(rho: float = 100.0, eps_r: float = 10.0):
    """
    Air and earth properties of one frequency, as the assembly passes them
    """
    rho_g = np.array([np.inf, rho])
    eps_g = np.array([lce.EPS_0, eps_r * lce.EPS_0])
    mu_g = np.array([lce.MU_0, lce.MU_0])
    return rho_g, eps_g, mu_g


def test_layer_checks():
    earth = get_earth_vectors()

    # Papadopoulos defaults to buried conductors
    with pytest.raises(lce.LayerMismatchError):
        lce.PapadopoulosZ()(SELF, 1.0, 1.0, 0.0, 0.01, *earth, 50.0)

    # Carson is for overhead conductors only
    with pytest.raises(lce.LayerMismatchError):
        lce.CarsonZ()(SELF, -1.0, -1.0, 0.0, 0.01, *earth, 50.0)

    with pytest.raises(lce.InterfaceConductorError):
        lce.PapadopoulosZ()(SELF, 0.0, 0.0, 0.0, 0.01, *earth, 50.0)

    # the closed forms are overhead formulas
    for formulation in [lce.SimpleCarson(), lce.FullCarson(), lce.DeriEarth()]:
        with pytest.raises(lce.LayerMismatchError):
            formulation(SELF, -1.0, -1.0, 0.0, 0.01, *earth, 50.0)
        with pytest.raises(lce.LayerMismatchError):
            formulation(MUTUAL, 10.0, -1.0, 2.0, 0.01, *earth, 50.0)

    with pytest.raises(lce.ConfigurationError):
        lce.HomogeneousEarthKernel(s=3)

    with pytest.raises(lce.ConfigurationError):
        lce.PapadopoulosY(s=1, t=2)


def test_carson_kernel_vs_series():
    """
    The Carson integral and its series expansion describe the same quantity
    """
    earth = get_earth_vectors()
    for f in [50.0, 1e3]:
        z_int = lce.CarsonZ()(SELF, 10.0, 10.0, 0.0, 0.01, *earth, f)
        z_ser = lce.FullCarson()(SELF, 10.0, 10.0, 0.0, 0.01, *earth, f)
        assert np.isclose(z_int.real, z_ser.real, rtol=1e-3)
        assert np.isclose(z_int.imag, z_ser.imag, rtol=1e-3)

        zm_int = lce.CarsonZ()(MUTUAL, 10.0, 12.0, 1.5, 0.01, *earth, f)
        zm_ser = lce.FullCarson()(MUTUAL, 10.0, 12.0, 1.5, 0.01, *earth, f)
        assert np.isclose(zm_int, zm_ser, rtol=1e-3)


def test_simple_carson_resistance():
    """
    The earth resistance of the simplified Carson formula is w mu0 / 8
    """
    earth = get_earth_vectors()
    z = lce.SimpleCarson()(SELF, 10.0, 10.0, 0.0, 0.01, *earth, 50.0)
    assert np.isclose(z.real, 2.0 * np.pi * 50.0 * lce.MU_0 / 8.0)

    # Carson's low frequency limit
    zc = lce.FullCarson()(SELF, 10.0, 10.0, 0.0, 0.01, *earth, 50.0)
    assert np.isclose(zc.real, z.real, rtol=0.05)


def test_deri_earth_close_to_carson():
    earth = get_earth_vectors()
    z1 = lce.DeriEarth()(SELF, 10.0, 10.0, 0.0, 0.01, *earth, 50.0)
    z2 = lce.FullCarson()(SELF, 10.0, 10.0, 0.0, 0.01, *earth, 50.0)
    assert abs(z1 - z2) / abs(z2) < 0.05


def test_buried_self_impedance():
    earth = get_earth_vectors()
    for f in [50.0, 1e3, 1e5]:
        z = lce.PapadopoulosZ()(SELF, -1.0, -1.0, 0.0, 0.04, *earth, f)
        assert z.real > 0
        assert z.imag > 0


def test_quasi_static_kernel_at_power_frequency():
    """
    At 50 Hz the displacement currents are negligible: Pollaczek and Papadopoulos agree
    """
    earth = get_earth_vectors()
    z1 = lce.PapadopoulosZ()(SELF, -1.0, -1.0, 0.0, 0.04, *earth, 50.0)
    z2 = lce.PollaczekZ()(SELF, -1.0, -1.0, 0.0, 0.04, *earth, 50.0)
    assert abs(z1 - z2) / abs(z2) < 1e-3


def test_kernel_reciprocity():
    earth = get_earth_vectors()
    z_ij = lce.PapadopoulosZ()(MUTUAL, -1.0, -1.5, 0.5, 0.04, *earth, 1e3)
    z_ji = lce.PapadopoulosZ()(MUTUAL, -1.5, -1.0, 0.5, 0.04, *earth, 1e3)
    assert np.isclose(z_ij, z_ji, rtol=1e-8)


def test_uncertain_depth():
    earth = get_earth_vectors()
    h = ufloat(-1.0, 0.05)

    z = lce.PapadopoulosZ()(SELF, h, h, 0.0, 0.04, *earth, 50.0)
    z0 = lce.PapadopoulosZ()(SELF, -1.0, -1.0, 0.0, 0.04, *earth, 50.0)

    assert isinstance(z, lce.UComplex)
    assert np.isclose(z.nominal_value, z0, rtol=1e-9)
    assert z.std_dev.imag > 0


def test_images():
    """
    Overhead conductors over a perfect earth: ln(2h / r) / (2 pi eps_0)
    """
    earth = get_earth_vectors()
    p = lce.Images()(SELF, 10.0, 10.0, 0.0, 0.01, *earth, 50.0)
    assert np.isclose(p, np.log(20.0 / 0.01) / (2.0 * np.pi * lce.EPS_0), rtol=1e-8)

    pm = lce.Images()(MUTUAL, 10.0, 10.0, 1.0, 0.01, *earth, 50.0)
    D = np.hypot(1.0, 20.0)
    assert np.isclose(pm, np.log(D / 1.0) / (2.0 * np.pi * lce.EPS_0), rtol=1e-8)


def test_equipotential_earth():
    earth = get_earth_vectors()
    assert lce.PollaczekY()(SELF, -1.0, -1.0, 0.0, 0.04, *earth, 50.0) == 0j

    with pytest.raises(lce.LayerMismatchError):
        lce.PollaczekY()(SELF, 1.0, 1.0, 0.0, 0.04, *earth, 50.0)


def test_full_wave_potential_coefficients():
    earth = get_earth_vectors()
    p = lce.PapadopoulosY()(SELF, -1.0, -1.0, 0.0, 0.04, *earth, 1e3)
    assert np.isfinite(p)
    assert abs(p) > 0


def test_formulations_pickle():
    """
    The formulations travel to the worker processes
    """
    earth = get_earth_vectors()
    for formulation in [lce.PapadopoulosZ(), lce.FullCarson(), lce.Images()]:
        h = 10.0 if isinstance(formulation, (lce.FullCarson, lce.Images)) else -1.0
        other = pickle.loads(pickle.dumps(formulation))
        assert other(SELF, h, h, 0.0, 0.04, *earth, 50.0) == formulation(SELF, h, h, 0.0, 0.04, *earth, 50.0)
