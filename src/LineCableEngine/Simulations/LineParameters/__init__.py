# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0

from LineCableEngine.Simulations.LineParameters.Formulations import *
from LineCableEngine.Simulations.LineParameters.line_parameters import LineParameters
from LineCableEngine.Simulations.LineParameters.line_parameters_options import LineParametersOptions
from LineCableEngine.Simulations.LineParameters.line_parameters_problem import LineParametersProblem
from LineCableEngine.Simulations.LineParameters.line_parameters_driver import LineParametersDriver
from LineCableEngine.Simulations.LineParameters.workspace import NumericWorkspace, build_workspace
from LineCableEngine.Simulations.LineParameters.assembly import impedance_slice, admittance_slice, potential_slice
from LineCableEngine.Simulations.LineParameters.reduction import (reorder_indices, reorder, merge_bundles,
                                                                  merge_bundles_admittance, kron_reduction,
                                                                  kron_reduction_admittance, ideal_transposition,
                                                                  reduce_matrices)
from LineCableEngine.Simulations.LineParameters.transforms import Fortescue, fortescue_matrix, abc_2_seq, seq_2_abc
