# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Union

from LineCableEngine.Simulations.LineParameters.Formulations.internal_impedance import (InternalImpedanceFormulation,
                                                                                        ScaledBessel)
from LineCableEngine.Simulations.LineParameters.Formulations.insulation_impedance import (
    InsulationImpedanceFormulation, LosslessInsulationImpedance)
from LineCableEngine.Simulations.LineParameters.Formulations.insulation_admittance import (
    InsulationAdmittanceFormulation, LosslessInsulationAdmittance)
from LineCableEngine.Simulations.LineParameters.Formulations.earth_impedance import (EarthImpedanceFormulation,
                                                                                     Papadopoulos)
from LineCableEngine.Simulations.LineParameters.Formulations.earth_admittance import (EarthAdmittanceFormulation,
                                                                                      Pollaczek)
from LineCableEngine.Simulations.LineParameters.Formulations.ehem import EHEMFormulation, EnforceLayer


class FormulationSet:
    """
    One formulation per family, used by the assembly loop
    """

    def __init__(self,
                 internal_impedance: Union[InternalImpedanceFormulation, None] = None,
                 insulation_impedance: Union[InsulationImpedanceFormulation, None] = None,
                 insulation_admittance: Union[InsulationAdmittanceFormulation, None] = None,
                 earth_impedance: Union[EarthImpedanceFormulation, None] = None,
                 earth_admittance: Union[EarthAdmittanceFormulation, None] = None,
                 ehem: Union[EHEMFormulation, None] = None):
        """
        Any formulation left as None takes the default for buried cables.
        The frequency dependence of the earth properties belongs to the EarthModel.
        :param internal_impedance: conductor internal impedance (ScaledBessel)
        :param insulation_impedance: insulation impedance (LosslessInsulationImpedance)
        :param insulation_admittance: insulation admittance (LosslessInsulationAdmittance)
        :param earth_impedance: earth return impedance (Papadopoulos, earth / earth)
        :param earth_admittance: earth return potential coefficients (Pollaczek, earth / earth)
        :param ehem: equivalent homogeneous earth model (EnforceLayer(-1))
        """
        self.internal_impedance = ScaledBessel() if internal_impedance is None else internal_impedance
        self.insulation_impedance = (LosslessInsulationImpedance() if insulation_impedance is None
                                     else insulation_impedance)
        self.insulation_admittance = (LosslessInsulationAdmittance() if insulation_admittance is None
                                      else insulation_admittance)
        self.earth_impedance = Papadopoulos() if earth_impedance is None else earth_impedance
        self.earth_admittance = Pollaczek() if earth_admittance is None else earth_admittance
        self.ehem = EnforceLayer(-1) if ehem is None else ehem

    def to_dict(self):
        """
        Names of the active formulations
        :return: dict
        """
        return {
            'internal_impedance': str(self.internal_impedance),
            'insulation_impedance': str(self.insulation_impedance),
            'insulation_admittance': str(self.insulation_admittance),
            'earth_impedance': str(self.earth_impedance),
            'earth_admittance': str(self.earth_admittance),
            'ehem': str(self.ehem),
        }

    def __str__(self):
        return ', '.join(f'{k}: {v}' for k, v in self.to_dict().items())
