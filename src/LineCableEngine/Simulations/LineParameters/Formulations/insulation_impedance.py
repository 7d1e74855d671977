# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Any
import numpy as np

from LineCableEngine.constants import MU_0, TOL
import LineCableEngine.Utils.uncertain as um


class InsulationImpedanceFormulation:
    """
    Base of the insulation (magnetic field in the dielectric) impedance formulations
    """
    name = 'Insulation impedance'

    def __call__(self, r_in: Any, r_ex: Any, mu_r: Any, jw: complex) -> Any:
        """

        :param r_in: inner radius of the insulation [m]
        :param r_ex: outer radius of the insulation [m]
        :param mu_r: relative permeability [-]
        :param jw: complex angular frequency [rad/s]
        :return: impedance [Ohm/m]
        """
        raise NotImplementedError()

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.name


class LosslessInsulationImpedance(InsulationImpedanceFormulation):
    """
    Coaxial inductance of the dielectric: jw mu ln(r_ex / r_in) / 2 pi
    """
    name = 'Lossless insulation impedance'

    def __call__(self, r_in, r_ex, mu_r, jw):
        if um.isapprox(r_in, 0.0, atol=TOL) or um.isapprox(r_in, r_ex, atol=TOL):
            return 0j

        return jw * MU_0 * um.lift(mu_r) * um.lift(um.log(r_ex / r_in)) / (2.0 * np.pi)
