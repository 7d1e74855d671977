# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Tuple

from LineCableEngine.basic_structures import Logger, NumMat
from LineCableEngine.Simulations.LineParameters.workspace import NumericWorkspace
from LineCableEngine.Simulations.LineParameters.line_parameters_options import LineParametersOptions
from LineCableEngine.Simulations.LineParameters.Formulations.formulation_set import FormulationSet
from LineCableEngine.Simulations.LineParameters.assembly import impedance_slice, admittance_slice
from LineCableEngine.Simulations.LineParameters.reduction import reduce_matrices
from LineCableEngine.Utils.linalg import symmetrize


def solve_frequency(ws: NumericWorkspace,
                    k: int,
                    formulations: FormulationSet,
                    options: LineParametersOptions) -> Tuple[NumMat, NumMat, Logger]:
    """
    Assemble and reduce the matrices of one frequency.
    Only reads the workspace, so it can run in any process.
    :param ws: NumericWorkspace
    :param k: frequency index
    :param formulations: FormulationSet
    :param options: LineParametersOptions
    :return: reduced Z, reduced Y, logger of this frequency
    """
    logger = Logger()

    Z = impedance_slice(ws, k, formulations)
    Y = admittance_slice(ws, k, formulations, logger)

    if options.symmetrize:
        Z = symmetrize(Z)
        Y = symmetrize(Y)

    Zr, Yr, _ = reduce_matrices(Z, Y, ws.phase_map,
                                bundle=options.reduce_bundle,
                                kron=options.kron_reduction,
                                transpose=options.ideal_transposition)

    if options.verbose > 1:
        print(f"{ws.freq[k]} Hz done")

    return Zr, Yr, logger
