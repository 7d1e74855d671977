# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
import numpy as np
import scipy.special as sp
from uncertainties import ufloat

import LineCableEngine.api as lce


def test_plain_arguments():
    """
    Plain numbers go straight to scipy
    """
    assert np.isclose(lce.besselk(0, 1.0), sp.kv(0, 1.0))
    assert np.isclose(lce.besselix(1, 2.0 + 1.0j), sp.ive(1, 2.0 + 1.0j))
    assert np.isclose(lce.besselkx.nominal(0, ufloat(3.0, 0.1)), sp.kve(0, 3.0))


def test_uncertain_real_argument():
    """
    d I0 / dx = I1, so the deviation of I0(x) is I1(x) std(x)
    """
    x = ufloat(1.0, 0.01)
    v = lce.besseli(0, x)

    assert np.isclose(v.nominal_value, sp.iv(0, 1.0))
    assert np.isclose(v.std_dev, sp.iv(1, 1.0) * 0.01, rtol=1e-4)


def test_exact_uncertain_argument_is_plain():
    """
    An uncertain argument without deviation is evaluated as a plain number
    """
    v = lce.besselk(1, ufloat(2.0, 0.0))
    assert np.isclose(v, sp.kv(1, 2.0))


def test_uncertain_complex_argument():
    """
    K0' = -K1: with only the real part uncertain, the deviations of the real and imaginary
    parts of K0(z) are |Re K1(z)| std(x) and |Im K1(z)| std(x)
    """
    z0 = 1.0 + 0.5j
    z = lce.UComplex(ufloat(1.0, 0.01), 0.5)
    v = lce.besselk(0, z)

    assert isinstance(v, lce.UComplex)
    assert np.isclose(v.nominal_value, sp.kv(0, z0))

    k1 = sp.kv(1, z0)
    assert np.isclose(v.std_dev.real, abs(k1.real) * 0.01, rtol=1e-3)
    assert np.isclose(v.std_dev.imag, abs(k1.imag) * 0.01, rtol=1e-3)


def test_scaled_functions_match_unscaled():
    """
    Ix(z) exp(|Re z|) = I(z) and Kx(z) exp(-z) = K(z)
    """
    z = 3.0 + 2.0j
    assert np.isclose(lce.besselix(0, z) * np.exp(abs(z.real)), lce.besseli(0, z))
    assert np.isclose(lce.besselkx(1, z) * np.exp(-z), lce.besselk(1, z))
