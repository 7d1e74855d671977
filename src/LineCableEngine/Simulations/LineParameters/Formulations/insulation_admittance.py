# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Any
import numpy as np

from LineCableEngine.constants import EPS_0, TOL
import LineCableEngine.Utils.uncertain as um


class InsulationAdmittanceFormulation:
    """
    Base of the insulation shunt admittance formulations
    """
    name = 'Insulation admittance'

    def __call__(self, r_in: Any, r_ex: Any, eps_r: Any, tan_delta: Any, jw: complex) -> Any:
        """

        :param r_in: inner radius of the insulation [m]
        :param r_ex: outer radius of the insulation [m]
        :param eps_r: relative permittivity [-]
        :param tan_delta: loss tangent [-]
        :param jw: complex angular frequency [rad/s]
        :return: admittance [S/m], 0 for bare conductors
        """
        if um.isapprox(r_in, r_ex, atol=TOL):
            # bare conductor: no dielectric, no admittance
            return 0j

        return jw * 2.0 * np.pi * self.permittivity(eps_r, tan_delta) / um.lift(um.log(r_ex / r_in))

    def permittivity(self, eps_r: Any, tan_delta: Any) -> Any:
        """
        Permittivity of the dielectric [F/m]
        """
        raise NotImplementedError()

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.name


class LosslessInsulationAdmittance(InsulationAdmittanceFormulation):
    """
    Coaxial capacitance: jw 2 pi eps / ln(r_ex / r_in)
    """
    name = 'Lossless insulation admittance'

    def permittivity(self, eps_r, tan_delta):
        return EPS_0 * um.lift(eps_r)


class LossyInsulationAdmittance(InsulationAdmittanceFormulation):
    """
    Coaxial admittance with dielectric losses, eps = eps_0 eps_r (1 - j tan_delta),
    which yields G + jwC with G = wC tan_delta
    """
    name = 'Lossy insulation admittance'

    def permittivity(self, eps_r, tan_delta):
        return EPS_0 * um.lift(eps_r) * (1.0 - 1j * um.lift(tan_delta))
