# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
import numpy as np
import pytest

import LineCableEngine.api as lce


def get_symmetric_matrix(n: int, seed: int = 0) -> np.ndarray:
    """
    Random complex symmetric matrix with a dominant diagonal
    """
    rng = np.random.default_rng(seed)
    A = rng.random((n, n)) + 1j * rng.random((n, n))
    return A + A.T + 2.0 * n * np.eye(n)


def test_reorder_indices():
    perm = lce.reorder_indices([1, 2, 0, 1, 2, 0, 3])
    assert list(perm) == [0, 1, 6, 3, 4, 2, 5]

    Z = get_symmetric_matrix(3)
    Zr, map_r = lce.reorder(Z, [0, 1, 2])
    assert list(map_r) == [1, 2, 0]
    assert Zr[0, 0] == Z[1, 1]
    assert Zr[2, 2] == Z[0, 0]


def test_kron_reduction_is_idempotent():
    Z = get_symmetric_matrix(4)
    Zr = lce.kron_reduction(Z, [1, 2, 3, 0])

    assert Zr.shape == (3, 3)
    assert np.allclose(lce.kron_reduction(Zr, [1, 2, 3]), Zr)

    # nothing to eliminate: copy
    Zc = lce.kron_reduction(Z, [1, 2, 3, 4])
    assert np.array_equal(Zc, Z)
    assert Zc is not Z


def test_kron_reduction_is_a_schur_complement():
    """
    Eliminating conductors in the series side equals inverting the kept block of the inverse
    """
    Z = get_symmetric_matrix(5, seed=3)
    phase_map = [1, 2, 0, 3, 0]
    keep = [0, 1, 3]

    Zr = lce.kron_reduction(Z, phase_map)
    expected = np.linalg.inv(np.linalg.inv(Z)[np.ix_(keep, keep)])
    assert np.allclose(Zr, expected)


def test_shunt_side_reduction():
    """
    Dropping the grounded conductors of Y = jw P^-1 is the Kron reduction of P
    """
    P = get_symmetric_matrix(4, seed=7)
    phase_map = [1, 0, 2, 0]
    jw = 2j * np.pi * 50.0

    Yr = lce.kron_reduction_admittance(jw * np.linalg.inv(P), phase_map)
    expected = jw * np.linalg.inv(lce.kron_reduction(P, phase_map))
    assert np.allclose(Yr, expected)


def test_everything_grounded():
    Z = get_symmetric_matrix(2)
    with pytest.raises(lce.KronReductionError):
        lce.kron_reduction(Z, [0, 0])

    with pytest.raises(lce.KronReductionError):
        lce.reduce_matrices(Z, Z, [0, 0])


def test_bad_phase_map():
    Z = get_symmetric_matrix(3)
    with pytest.raises(lce.BundleError):
        lce.merge_bundles(Z, [1, 1])

    with pytest.raises(lce.BundleError):
        lce.kron_reduction(Z[:2, :], [1, 2])


def test_identical_bundle():
    """
    Two identical conductors in parallel: Z = (a + b) / 2 and Y = 2 (c + d)
    """
    a, b = 2.0 + 1.0j, 0.5 + 0.3j
    c, d = 3.0j, -1.0j
    Z = np.array([[a, b], [b, a]])
    Y = np.array([[c, d], [d, c]])

    Zr, Yr, labels = lce.reduce_matrices(Z, Y, [1, 1])

    assert Zr.shape == (1, 1)
    assert np.isclose(Zr[0, 0], (a + b) / 2.0)
    assert np.isclose(Yr[0, 0], 2.0 * (c + d))
    assert list(labels) == [1]


def test_bundle_merge_labels():
    Z = get_symmetric_matrix(3)
    M, new_map = lce.merge_bundles(Z, [1, 1, 2])
    assert list(new_map) == [1, 0, 2]
    assert np.isclose(M[1, 2], Z[1, 2] - Z[0, 2])

    My, new_map_y = lce.merge_bundles_admittance(Z, [1, 1, 2])
    assert list(new_map_y) == [1, 0, 2]
    assert np.isclose(My[0, 2], Z[0, 2] + Z[1, 2])


def test_bundle_without_kron_keeps_the_grounded_conductors():
    Z = get_symmetric_matrix(3)
    Zr, Yr, labels = lce.reduce_matrices(Z, Z, [1, 1, 0], bundle=True, kron=False)

    assert Zr.shape == (2, 2)
    assert Yr.shape == (2, 2)
    assert list(labels) == [1, 0]


def test_no_reduction():
    Z = get_symmetric_matrix(3)
    Zr, Yr, labels = lce.reduce_matrices(Z, Z, [0, 1, 2], bundle=False, kron=False)

    assert Zr.shape == (3, 3)
    assert list(labels) == [1, 2, 0]
    assert np.isclose(Zr[2, 2], Z[0, 0])


def test_ideal_transposition():
    Z = get_symmetric_matrix(3, seed=5)
    C = lce.ideal_transposition(Z)

    # circulant
    for i in range(3):
        for j in range(3):
            assert np.isclose(C[i, j], C[(i + 1) % 3, (j + 1) % 3])

    # projection
    assert np.allclose(lce.ideal_transposition(C), C)
    assert np.isclose(np.trace(C), np.trace(Z))
