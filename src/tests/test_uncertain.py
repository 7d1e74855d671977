# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
import numpy as np
from uncertainties import ufloat

import LineCableEngine.api as lce
import LineCableEngine.Utils.uncertain as um


def test_complex_arithmetic():
    a = lce.UComplex(ufloat(1.0, 0.1), 2.0)

    assert np.isclose((a * 2j).nominal_value, -4.0 + 2.0j)
    assert np.isclose((a + 1.0).nominal_value, 2.0 + 2.0j)
    assert np.isclose((1.0 - a).nominal_value, -2.0j)
    assert np.isclose((1.0 / a).nominal_value, 1.0 / (1.0 + 2.0j))
    assert np.isclose((a ** 2).nominal_value, (1.0 + 2.0j) ** 2)


def test_correlations_are_kept():
    """
    a / a is exactly one, whatever the deviation of a
    """
    a = lce.UComplex(ufloat(1.0, 0.1), ufloat(2.0, 0.3))
    q = a / a

    assert np.isclose(q.nominal_value, 1.0)
    assert abs(q.std_dev) < 1e-12


def test_holomorphic_sqrt():
    s = um.sqrt(lce.UComplex(ufloat(4.0, 0.04), 0.0))

    assert np.isclose(s.nominal_value, 2.0)
    assert np.isclose(s.std_dev.real, 0.01)
    assert np.isclose(s.std_dev.imag, 0.0)


def test_wrap_complex():
    """
    Numerical partial derivatives of a complex function of real arguments
    """
    f = um.wrap_complex(lambda x, y: complex(x * y, x))

    v = f(ufloat(2.0, 0.1), 3.0)
    assert np.isclose(v.nominal_value, 6.0 + 2.0j)
    assert np.isclose(v.std_dev.real, 0.3, rtol=1e-5)
    assert np.isclose(v.std_dev.imag, 0.1, rtol=1e-5)

    # exact arguments are stripped: plain result
    w = f(ufloat(2.0, 0.0), 3.0)
    assert isinstance(w, complex)


def test_numeric_kind_resolution():
    assert um.resolve_numeric_kind([1.0, 2.0], 3.0) == lce.NumericKind.Float
    assert um.resolve_numeric_kind([1.0, ufloat(1.0, 0.1)]) == lce.NumericKind.Uncertain
    assert um.resolve_numeric_kind(np.array([1.0, ufloat(1.0, 0.1)], dtype=object)) == lce.NumericKind.Uncertain

    arr = um.as_kind([1.0, np.inf, ufloat(2.0, 0.2)], lce.NumericKind.Uncertain)
    assert arr.dtype == object
    assert isinstance(arr[0], float) and not um.is_uncertain(arr[0])
    assert arr[1] == np.inf
    assert arr[2].std_dev == 0.2


def test_object_inverse():
    """
    Gauss-Jordan inverse of an uncertain matrix
    """
    M = np.empty((2, 2), dtype=object)
    M[0, 0] = lce.UComplex(ufloat(2.0, 0.1), 0.0)
    M[0, 1] = 1.0
    M[1, 0] = 1.0
    M[1, 1] = 3.0j

    Minv = um.inv(M)
    expected = np.linalg.inv(np.array([[2.0, 1.0], [1.0, 3.0j]]))

    assert Minv.dtype == object
    assert np.allclose(um.to_nominal(Minv).astype(complex), expected)
    assert np.all(np.abs(um.to_std(Minv)) > 0)


def test_absolute_value():
    x = um.fabs(ufloat(-2.0, 0.1))
    assert x.nominal_value == 2.0
    assert x.std_dev == 0.1
    assert um.fabs(-3.0) == 3.0
