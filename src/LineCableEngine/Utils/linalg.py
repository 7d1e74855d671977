# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

import numpy as np
import numba as nb

from LineCableEngine.basic_structures import CxMat, NumMat
from LineCableEngine.Utils.uncertain import to_nominal


def symmetrize(A: NumMat) -> NumMat:
    """
    Reciprocity enforcement: average with the transpose (not the conjugate transpose)
    :param A: square matrix
    :return: symmetric matrix
    """
    return (A + A.T) / 2.0


@nb.njit(cache=True)
def offdiag_ratio_nb(A: CxMat) -> float:
    """
    Largest off-diagonal magnitude relative to the largest diagonal magnitude
    :param A: complex matrix
    :return: ratio
    """
    n = A.shape[0]
    dmax = 0.0
    omax = 0.0
    for i in range(n):
        for j in range(n):
            v = np.abs(A[i, j])
            if i == j:
                if v > dmax:
                    dmax = v
            else:
                if v > omax:
                    omax = v
    eps = np.finfo(np.float64).eps
    if dmax < eps:
        dmax = eps
    return omax / dmax


def offdiag_ratio(A: NumMat) -> float:
    """
    Diagonal dominance measure on the nominal values
    :param A: square matrix (float, complex or object)
    :return: ratio
    """
    return offdiag_ratio_nb(np.ascontiguousarray(to_nominal(A), dtype=np.complex128))


@nb.njit(cache=True)
def circulant_classes_nb(n: int):
    """
    Diagonal offset class (j - i) mod n of every entry of an n x n matrix
    :param n: dimension
    :return: integer matrix
    """
    cls = np.empty((n, n), dtype=np.int64)
    for i in range(n):
        for j in range(n):
            cls[i, j] = (j - i) % n
    return cls


def circulant_projection(A: NumMat) -> NumMat:
    """
    Least squares projection of a square matrix onto the circulant matrices:
    every diagonal offset class is replaced by its mean value.
    :param A: square matrix (float, complex or object)
    :return: circulant matrix
    """
    n = A.shape[0]
    cls = circulant_classes_nb(n)
    coef = [A[cls == k].sum() / n for k in range(n)]
    C = np.empty_like(A)
    for i in range(n):
        for j in range(n):
            C[i, j] = coef[cls[i, j]]
    return C
