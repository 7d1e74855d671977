# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
import numpy as np
import pytest
from uncertainties import ufloat

import LineCableEngine.api as lce


def get_rlcg_lp() -> lce.LineParameters:
    """
    Two phases, two frequencies, built from known R, L, G, C per metre
    """
    f = np.array([50.0, 60.0])
    w = 2.0 * np.pi * f
    R = np.array([[1e-4, 2e-5], [2e-5, 1e-4]])
    L = np.array([[1e-6, 3e-7], [3e-7, 1e-6]])
    G = np.array([[1e-9, 0.0], [0.0, 1e-9]])
    C = np.array([[2e-10, -1e-11], [-1e-11, 2e-10]])
    Z = R[:, :, np.newaxis] + 1j * L[:, :, np.newaxis] * w
    Y = G[:, :, np.newaxis] + 1j * C[:, :, np.newaxis] * w
    return lce.LineParameters(Z=Z, Y=Y, f=f, names=['a', 'b'])


def test_shape_checks():
    Z = np.zeros((2, 2, 3), dtype=complex)

    with pytest.raises(lce.ShapeMismatchError):
        lce.LineParameters(Z=Z, Y=np.zeros((2, 2, 2), dtype=complex), f=[1.0, 2.0, 3.0])

    with pytest.raises(lce.ShapeMismatchError):
        lce.LineParameters(Z=Z, Y=Z, f=[1.0, 2.0])

    with pytest.raises(lce.ShapeMismatchError):
        lce.LineParameters(Z=np.zeros((2, 3, 3)), Y=np.zeros((2, 3, 3)), f=[1.0, 2.0, 3.0])


def test_frequency_slicing():
    lp = get_rlcg_lp()

    assert len(lp) == 2
    assert lp.n_phases == 2

    lp1 = lp[1]
    assert lp1.n_frequencies == 1
    assert lp1.f[0] == 60.0
    assert np.array_equal(lp1.Z[:, :, 0], lp.Z[:, :, 1])

    lp_last = lp[-1]
    assert lp_last.f[0] == 60.0

    lp_all = lp[0:2]
    assert lp_all.n_frequencies == 2
    assert lp_all.names == ['a', 'b']


def test_rlcg():
    lp = get_rlcg_lp()
    R, L, G, C = lp.get_rlcg(unit=lce.LengthUnit.PerMeter)

    assert np.allclose(R[:, :, 1], [[1e-4, 2e-5], [2e-5, 1e-4]])
    assert np.allclose(L[:, :, 0], [[1e-6, 3e-7], [3e-7, 1e-6]])
    assert np.allclose(C[:, :, 1], [[2e-10, -1e-11], [-1e-11, 2e-10]], atol=1e-14)
    assert np.allclose(G[:, :, 0], [[1e-9, 0.0], [0.0, 1e-9]], atol=1e-14)


def test_to_df():
    lp = get_rlcg_lp()
    df = lp.to_df(k=0)

    assert list(df.columns) == ['R [Ohm/km]', 'L [mH/km]', 'G [S/km]', 'C [uF/km]']
    assert list(df.index) == ['a-a', 'a-b', 'b-a', 'b-b']
    assert np.isclose(df.loc['a-a', 'R [Ohm/km]'], 0.1)
    assert np.isclose(df.loc['a-b', 'L [mH/km]'], 0.3)
    assert np.isclose(df.loc['b-b', 'C [uF/km]'], 0.2)

    df2 = lp.to_df(k=1, mode=lce.ParameterMode.ZY, unit=lce.LengthUnit.PerMeter)
    assert list(df2.columns) == ['Z [Ohm/m]', 'Y [S/m]']
    assert np.isclose(df2.loc['a-b', 'Z [Ohm/m]'], lp.Z[0, 1, 1])


def test_uncertain_parameters():
    Z = np.empty((1, 1, 1), dtype=object)
    Y = np.empty((1, 1, 1), dtype=object)
    Z[0, 0, 0] = lce.UComplex(ufloat(1e-4, 1e-6), ufloat(3e-4, 2e-6))
    Y[0, 0, 0] = 1e-6j

    lp = lce.LineParameters(Z=Z, Y=Y, f=[50.0])
    assert lp.is_uncertain

    nom = lp.nominal()
    std = lp.std()
    assert not nom.is_uncertain
    assert np.isclose(nom.Z[0, 0, 0], 1e-4 + 3e-4j)
    assert np.isclose(std.Z[0, 0, 0], 1e-6 + 2e-6j, atol=1e-12)
    assert std.Y[0, 0, 0] == 0

    df = lp.to_df(std=True, unit=lce.LengthUnit.PerMeter)
    assert np.isclose(df['R [Ohm/m]'].iloc[0], 1e-6, atol=1e-12)


def test_logger():
    logger = lce.Logger()
    logger.add_info("Started")
    logger.add_warning("Odd value", device='phase 1', value=3.0)

    other = lce.Logger()
    other.add_error("Broken", device='phase 2')
    logger += other

    assert len(logger) == 3
    assert logger.info_count() == 1
    assert logger.warning_count() == 1
    assert logger.error_count() == 1
    assert logger.has_logs()

    df = logger.to_df()
    assert list(df.columns) == ['Severity', 'Message', 'Device', 'Frequency', 'Value', 'Expected value']
    assert df.shape[0] == 3
