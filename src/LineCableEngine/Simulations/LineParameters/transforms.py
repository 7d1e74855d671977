# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Tuple, Union
import numpy as np

from LineCableEngine.basic_structures import CxMat, NumMat, Logger
from LineCableEngine.Simulations.LineParameters.line_parameters import LineParameters
from LineCableEngine.Utils.linalg import symmetrize, offdiag_ratio
import LineCableEngine.Utils.uncertain as um


def fortescue_matrix(n: int) -> CxMat:
    """
    Unitary symmetrical components matrix F[k, m] = a^(k m) / sqrt(n) with a = exp(j 2 pi / n)
    :param n: number of phases
    :return: n x n complex matrix
    """
    k = np.arange(n)
    a = np.exp(2j * np.pi / n)
    return np.power(a, np.outer(k, k)) / np.sqrt(n)


def abc_2_seq(mat: NumMat, F: CxMat) -> NumMat:
    """
    Phase to sequence domain: F M F^H
    :param mat: phase domain matrix
    :param F: fortescue_matrix
    :return: sequence domain matrix
    """
    return F.dot(mat).dot(F.conj().T)


def seq_2_abc(mat: NumMat, F: CxMat) -> NumMat:
    """
    Sequence to phase domain: F^H M F
    :param mat: sequence domain matrix
    :param F: fortescue_matrix
    :return: phase domain matrix
    """
    return F.conj().T.dot(mat).dot(F)


class Fortescue:
    """
    Symmetrical components transform of LineParameters.
    The decoupling is exact for symmetric (circulant) systems only; the off-diagonal residue
    is checked against tol and reported as a warning. The diagonal is retained.
    """
    name = 'Fortescue'

    def __init__(self, tol: float = 1e-4):
        """

        :param tol: accepted off-diagonal to diagonal magnitude ratio
        """
        self.tol = tol

    def __call__(self, lp: LineParameters, logger: Union[Logger, None] = None) -> Tuple[CxMat, LineParameters]:
        """
        Transform
        :param lp: LineParameters in the phase domain
        :param logger: Logger receiving the warnings (a new one if None), it becomes the logger of the result
        :return: transformation matrix, sequence domain LineParameters (diagonal)
        """
        logger = Logger() if logger is None else logger
        n = lp.n_phases
        F = fortescue_matrix(n)

        Zseq = np.empty_like(lp.Z)
        Yseq = np.empty_like(lp.Y)

        for k in range(lp.n_frequencies):
            for mat, out, label in ((lp.Z, Zseq, 'Z'), (lp.Y, Yseq, 'Y')):
                seq = abc_2_seq(symmetrize(mat[:, :, k]), F)

                ratio = offdiag_ratio(seq)
                if ratio > self.tol:
                    logger.add_warning("Sequence matrix is not diagonal", device=f"Fortescue {label}",
                                       value=ratio, expected_value=f"<={self.tol}", frequency=lp.f[k])

                diag = um.zeros((n, n), um.resolve_numeric_kind(seq))
                for i in range(n):
                    diag[i, i] = seq[i, i]
                out[:, :, k] = diag

        result = LineParameters(Z=Zseq, Y=Yseq, f=lp.f, logger=logger,
                                names=[f"seq {i}" for i in range(n)])
        return F, result

    def __str__(self):
        return self.name
