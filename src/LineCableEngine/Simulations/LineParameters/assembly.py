# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Per frequency assembly of the phase domain matrices.

Inside a cable the coaxial components form loops: loop k runs along component k and returns through
component k + 1 (the earth for the outermost one). With U the upper triangular matrix of ones,

    Z_phase = U Z_loop U^T
    P_phase = U diag(p) U^T

Z_loop[k, k] = z_outer[k] + z_insulation[k] + z_inner[k + 1]   (earth self impedance for the last loop)
Z_loop[k, k + 1] = Z_loop[k + 1, k] = -z_mutual[k + 1]
p[k] = jw / y_insulation[k]

The earth terms couple every component of a cable with every component of the other cables.
"""
from __future__ import annotations

from typing import Any, List, Union
import numpy as np

from LineCableEngine.basic_structures import Logger, NumMat, IntVec
from LineCableEngine.enumerations import ConductorTerm, CouplingTerm
from LineCableEngine.exceptions import ConfigurationError
from LineCableEngine.Simulations.LineParameters.workspace import NumericWorkspace
from LineCableEngine.Simulations.LineParameters.Formulations.formulation_set import FormulationSet
import LineCableEngine.Utils.uncertain as um


def loop_to_phase(M: NumMat) -> NumMat:
    """
    Loop quantities of a coaxial cable to phase quantities: U M U^T
    :param M: loop matrix
    :return: phase matrix
    """
    m = M.shape[0]
    U = np.triu(np.ones((m, m))).astype(M.dtype)
    return U.dot(M).dot(U.T)


def earth_arguments(ws: NumericWorkspace, k: int):
    return ws.rho_g[:, k], ws.eps_g[:, k], ws.mu_g[:, k], ws.freq[k]


def cable_pairs(ws: NumericWorkspace) -> List[tuple]:
    """
    Pairs of different cables (a < b) with their phase indices
    """
    groups = [ws.cable_phases(c) for c in range(ws.ncable)]
    return [(groups[a], groups[b]) for a in range(ws.ncable) for b in range(a + 1, ws.ncable)]


def impedance_slice(ws: NumericWorkspace, k: int, formulations: FormulationSet) -> NumMat:
    """
    Series impedance matrix of one frequency
    :param ws: NumericWorkspace
    :param k: frequency index
    :param formulations: FormulationSet
    :return: n x n impedance matrix [Ohm/m]
    """
    n = ws.nphase
    jw = 2j * np.pi * ws.freq[k]
    z_int = formulations.internal_impedance
    z_ins = formulations.insulation_impedance
    z_earth = formulations.earth_impedance
    earth = earth_arguments(ws, k)

    Z = um.zeros((n, n), ws.kind)

    for c in range(ws.ncable):
        idx = ws.cable_phases(c)
        m = len(idx)
        last = idx[-1]

        def internal(term: ConductorTerm, i: int) -> Any:
            return z_int(term, ws.r_in[i], ws.r_ext[i], ws.rho_cond[i], ws.mu_cond[i], jw)

        outer = [internal(ConductorTerm.Outer, i) for i in idx]
        inner = [internal(ConductorTerm.Inner, i) for i in idx]
        mutual = [internal(ConductorTerm.Mutual, i) for i in idx]
        insulation = [z_ins(ws.r_ins_in[i], ws.r_ins_ext[i], ws.mu_ins[i], jw) for i in idx]

        ze = z_earth(CouplingTerm.Self, ws.vert[last], ws.vert[last], 0.0, ws.r_ins_ext[last], *earth)

        Zloop = um.zeros((m, m), ws.kind)
        for a in range(m):
            if a < m - 1:
                Zloop[a, a] = outer[a] + insulation[a] + inner[a + 1]
                Zloop[a, a + 1] = -mutual[a + 1]
                Zloop[a + 1, a] = -mutual[a + 1]
            else:
                Zloop[a, a] = outer[a] + insulation[a] + ze

        Z[np.ix_(idx, idx)] = loop_to_phase(Zloop)

    # the kernel is reciprocal: only one triangle is integrated
    for ia, ib in cable_pairs(ws):
        i, j = ia[-1], ib[-1]
        zm = z_earth(CouplingTerm.Mutual, ws.vert[i], ws.vert[j], um.fabs(ws.horz[i] - ws.horz[j]),
                     ws.r_ins_ext[i], *earth)
        Z[np.ix_(ia, ib)] = zm
        Z[np.ix_(ib, ia)] = zm

    return Z


def potential_slice(ws: NumericWorkspace, k: int, formulations: FormulationSet) -> NumMat:
    """
    Potential coefficients matrix of one frequency, jw P^-1 being the shunt admittance
    :param ws: NumericWorkspace
    :param k: frequency index
    :param formulations: FormulationSet
    :return: n x n matrix [m/F]
    """
    n = ws.nphase
    jw = 2j * np.pi * ws.freq[k]
    y_ins = formulations.insulation_admittance
    p_earth = formulations.earth_admittance
    earth = earth_arguments(ws, k)

    P = um.zeros((n, n), ws.kind)

    for c in range(ws.ncable):
        idx = ws.cable_phases(c)
        m = len(idx)
        last = idx[-1]

        Ploop = um.zeros((m, m), ws.kind)
        for a, i in enumerate(idx):
            y = y_ins(ws.r_ins_in[i], ws.r_ins_ext[i], ws.eps_ins[i], ws.tan_ins[i], jw)
            if um.nominal(y) != 0:
                Ploop[a, a] = jw / y

        pe = p_earth(CouplingTerm.Self, ws.vert[last], ws.vert[last], 0.0, ws.r_ins_ext[last], *earth)

        P[np.ix_(idx, idx)] = loop_to_phase(Ploop) + pe

    for ia, ib in cable_pairs(ws):
        i, j = ia[-1], ib[-1]
        pm = p_earth(CouplingTerm.Mutual, ws.vert[i], ws.vert[j], um.fabs(ws.horz[i] - ws.horz[j]),
                     ws.r_ins_ext[i], *earth)
        P[np.ix_(ia, ib)] = pm
        P[np.ix_(ib, ia)] = pm

    return P


def floating_phases(P: NumMat) -> IntVec:
    """
    Phases without any potential coefficient (bare conductors in an equipotential earth)
    :param P: potential coefficients matrix
    :return: indices
    """
    Pn = np.abs(um.to_nominal(P))
    return np.where(np.all(Pn == 0.0, axis=1))[0]


def admittance_slice(ws: NumericWorkspace, k: int, formulations: FormulationSet,
                     logger: Union[Logger, None] = None) -> NumMat:
    """
    Shunt admittance matrix of one frequency
    :param ws: NumericWorkspace
    :param k: frequency index
    :param formulations: FormulationSet
    :param logger: Logger (a new one if None)
    :return: n x n admittance matrix [S/m]
    """
    logger = Logger() if logger is None else logger
    n = ws.nphase
    jw = 2j * np.pi * ws.freq[k]
    P = potential_slice(ws, k, formulations)

    dead = floating_phases(P)
    for i in dead:
        logger.add_warning("Bare conductor without potential coefficients, shunt admittance set to zero",
                           device=ws.names[i], value=0.0, frequency=ws.freq[k])

    alive = np.setdiff1d(np.arange(n), dead)

    Y = um.zeros((n, n), ws.kind)
    if len(alive):
        try:
            Pinv = um.inv(P[np.ix_(alive, alive)])
        except np.linalg.LinAlgError as e:
            raise ConfigurationError(f"Singular potential coefficients matrix at {ws.freq[k]} Hz: {e}") from e

        Y[np.ix_(alive, alive)] = jw * Pinv

    return Y
