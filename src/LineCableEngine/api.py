# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

from typing import Union, Tuple
from LineCableEngine.basic_structures import *
from LineCableEngine.constants import *
from LineCableEngine.enumerations import *
from LineCableEngine.exceptions import *
from LineCableEngine.Devices import *
from LineCableEngine.Simulations import *
from LineCableEngine.Utils.uncertain import UComplex
from LineCableEngine.Utils.bessel import besseli, besselk, besselix, besselkx


def line_parameters(system: LineCableSystem,
                    earth_model: EarthModel,
                    frequencies: Union[Vec, None] = None,
                    formulations: Union[FormulationSet, None] = None,
                    options: Union[LineParametersOptions, None] = None) -> LineParameters:
    """
    Compute the line parameters of a cable system
    :param system: LineCableSystem
    :param earth_model: EarthModel
    :param frequencies: frequencies [Hz] (the earth model frequencies if None)
    :param formulations: FormulationSet (defaults for buried cables if None)
    :param options: LineParametersOptions
    :return: LineParameters (with the diagnostics in its logger)
    """
    problem = LineParametersProblem(system=system, earth_model=earth_model, frequencies=frequencies)

    driver = LineParametersDriver(problem=problem, formulations=formulations, options=options)

    driver.run()

    return driver.results


def sequence_parameters(lp: LineParameters, tol: float = 1e-4) -> Tuple[CxMat, LineParameters]:
    """
    Symmetrical components of some line parameters
    :param lp: LineParameters in the phase domain
    :param tol: accepted off-diagonal ratio
    :return: transformation matrix, sequence LineParameters
    """
    return Fortescue(tol=tol)(lp)
