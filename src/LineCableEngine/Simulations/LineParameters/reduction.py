# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Phase domain reductions of the per frequency matrices.

Phase labels: 0 grounded (eliminated by the Kron reduction), 1..n phase, -1 kept explicitly.
The series side (Z) and the shunt side (Y, admittance form) are reduced with different but
equivalent operations:

    Z: bundle tails are merged by column / row subtraction and eliminated by Schur complement
    Y: bundle tails are merged by parallel combination (row / column addition) and dropped,
       grounded conductors are dropped (zero voltage), which is the Schur complement of the
       potential coefficients matrix.
"""
from __future__ import annotations

from typing import List, Tuple, Union
import numpy as np

from LineCableEngine.basic_structures import IntVec, NumMat
from LineCableEngine.exceptions import KronReductionError, BundleError
import LineCableEngine.Utils.uncertain as um
from LineCableEngine.Utils.linalg import circulant_projection


def reorder_indices(phase_map: Union[IntVec, List[int]]) -> IntVec:
    """
    Permutation that places the first conductor of every phase first (in encounter order),
    then the rest of the conductors of every phase (bundle tails), then the grounded ones
    :param phase_map: phase label of every conductor
    :return: permutation array
    """
    phases = list()
    firsts = list()
    tails = dict()
    zeros = list()

    for i, p in enumerate(phase_map):
        if p > 0:
            if p not in tails:
                tails[p] = list()
                phases.append(p)
                firsts.append(i)
            else:
                tails[p].append(i)
        else:
            zeros.append(i)

    perm = list(firsts)
    for p in phases:
        perm += tails[p]
    perm += zeros

    return np.array(perm, dtype=int)


def reorder(mat: NumMat, phase_map: IntVec) -> Tuple[NumMat, IntVec]:
    """
    Apply reorder_indices to a matrix and its labels
    :param mat: square matrix
    :param phase_map: phase labels
    :return: reordered matrix, reordered labels
    """
    check_map(mat, phase_map)
    perm = reorder_indices(phase_map)
    return mat[np.ix_(perm, perm)], np.asarray(phase_map)[perm]


def check_map(mat: NumMat, phase_map: IntVec) -> None:
    """
    The labels must describe every row of a square matrix
    """
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise BundleError(f"A square matrix is required, got {mat.shape}")
    if len(phase_map) != mat.shape[0]:
        raise BundleError(f"{len(phase_map)} phase labels for a {mat.shape[0]}x{mat.shape[1]} matrix")


def bundle_groups(phase_map: IntVec) -> List[List[int]]:
    """
    Indices of every phase with more than one conductor, in encounter order
    :param phase_map: phase labels
    :return: list of index lists, the first index is the bundle head
    """
    groups = dict()
    for i, p in enumerate(phase_map):
        if p > 0:
            groups.setdefault(p, list()).append(i)
    return [g for g in groups.values() if len(g) > 1]


def bundle_tails_map(phase_map: IntVec) -> IntVec:
    """
    Phase labels with the bundle tails set to 0
    :param phase_map: phase labels
    :return: new labels
    """
    new_map = np.array(phase_map, dtype=int)
    for grp in bundle_groups(phase_map):
        new_map[grp[1:]] = 0
    return new_map


def kron_plan(phase_map: IntVec, reduce_bundle: bool, kron_reduction: bool) -> Union[IntVec, None]:
    """
    Decide which conductors the Kron reduction eliminates
    :param phase_map: phase labels, already reordered
    :param reduce_bundle: merge the bundles
    :param kron_reduction: eliminate the grounded conductors
    :return: labels for the Kron reduction (0 -> eliminate), None if nothing is reduced
    """
    phase_map = np.asarray(phase_map, dtype=int)

    if reduce_bundle:
        reduced = bundle_tails_map(phase_map)
        if not kron_reduction:
            # only the tails go away, the grounded conductors stay explicit
            reduced[phase_map == 0] = -1
        return reduced

    if kron_reduction:
        return phase_map.copy()

    return None


def merge_bundles(mat: NumMat, phase_map: IntVec) -> Tuple[NumMat, IntVec]:
    """
    Series side bundle merging: for every bundle the columns of the tails are subtracted the
    column of the head, then the rows likewise. The tails then carry a zero voltage drop.
    :param mat: impedance matrix
    :param phase_map: phase labels
    :return: transformed matrix, labels with the tails set to 0
    """
    check_map(mat, phase_map)
    M = mat.copy()
    new_map = np.array(phase_map, dtype=int)
    groups = bundle_groups(phase_map)

    # column subtraction
    for grp in groups:
        i = grp[0]
        for k in grp[1:]:
            M[:, k] = M[:, k] - M[:, i]

    # row subtraction
    for grp in groups:
        i = grp[0]
        for k in grp[1:]:
            M[k, :] = M[k, :] - M[i, :]
            new_map[k] = 0

    return M, new_map


def merge_bundles_admittance(mat: NumMat, phase_map: IntVec) -> Tuple[NumMat, IntVec]:
    """
    Shunt side bundle merging: parallel combination of the conductors of a bundle.
    The rows and columns of the tails are added to the head.
    :param mat: admittance matrix
    :param phase_map: phase labels
    :return: transformed matrix, labels with the tails set to 0
    """
    check_map(mat, phase_map)
    M = mat.copy()
    new_map = np.array(phase_map, dtype=int)
    groups = bundle_groups(phase_map)

    for grp in groups:
        i = grp[0]
        for k in grp[1:]:
            M[:, i] = M[:, i] + M[:, k]

    for grp in groups:
        i = grp[0]
        for k in grp[1:]:
            M[i, :] = M[i, :] + M[k, :]
            new_map[k] = 0

    return M, new_map


def split_indices(phase_map: IntVec) -> Tuple[IntVec, IntVec]:
    """
    Conductors kept (label != 0) and eliminated (label == 0)
    :param phase_map: phase labels
    :return: keep, eliminate
    """
    phase_map = np.asarray(phase_map)
    keep = np.where(phase_map != 0)[0]
    eliminate = np.where(phase_map == 0)[0]
    if len(keep) == 0:
        raise KronReductionError(len(phase_map))
    return keep, eliminate


def kron_reduction(mat: NumMat, phase_map: IntVec) -> NumMat:
    """
    Perform the Kron reduction of the conductors labelled 0
    :param mat: primitive matrix
    :param phase_map: phase labels
    :return: reduced matrix
    """
    check_map(mat, phase_map)
    keep, embed = split_indices(phase_map)

    if len(embed) == 0:
        return mat.copy()

    Zaa = mat[np.ix_(keep, keep)]
    Zag = mat[np.ix_(keep, embed)]
    Zga = mat[np.ix_(embed, keep)]
    Zgg = mat[np.ix_(embed, embed)]

    return Zaa - Zag.dot(um.inv(Zgg)).dot(Zga)


def kron_reduction_admittance(mat: NumMat, phase_map: IntVec) -> NumMat:
    """
    Shunt side counterpart of kron_reduction: the conductors labelled 0 are at zero potential
    :param mat: admittance matrix
    :param phase_map: phase labels
    :return: reduced matrix
    """
    check_map(mat, phase_map)
    keep, embed = split_indices(phase_map)
    return mat[np.ix_(keep, keep)].copy()


def ideal_transposition(mat: NumMat) -> NumMat:
    """
    Perfect cyclic transposition of the conductors: nearest circulant matrix
    :param mat: square matrix
    :return: circulant matrix
    """
    return circulant_projection(mat)


def reduce_matrices(Z: NumMat, Y: NumMat, phase_map: IntVec,
                    bundle: bool = True, kron: bool = True, transpose: bool = False) -> Tuple[NumMat, NumMat, IntVec]:
    """
    Reduction pipeline of one frequency slice: reordering, bundle merging, Kron reduction and ideal transposition
    :param Z: impedance matrix
    :param Y: admittance matrix
    :param phase_map: phase labels in the original ordering
    :param bundle: merge the bundles
    :param kron: eliminate the grounded conductors
    :param transpose: apply the ideal transposition
    :return: reduced Z, reduced Y, labels of the remaining conductors
    """
    Zr, map_r = reorder(Z, phase_map)
    Yr, _ = reorder(Y, phase_map)

    plan = kron_plan(map_r, reduce_bundle=bundle, kron_reduction=kron)

    if bundle:
        Zr, _ = merge_bundles(Zr, map_r)
        Yr, _ = merge_bundles_admittance(Yr, map_r)

    if plan is not None:
        Zr = kron_reduction(Zr, plan)
        Yr = kron_reduction_admittance(Yr, plan)
        labels = map_r[plan != 0]
    else:
        labels = map_r

    if transpose:
        Zr = ideal_transposition(Zr)
        Yr = ideal_transposition(Yr)

    return Zr, Yr, labels
