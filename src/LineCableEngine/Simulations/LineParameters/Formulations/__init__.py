# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0

from LineCableEngine.Simulations.LineParameters.Formulations.internal_impedance import (InternalImpedanceFormulation,
                                                                                        ScaledBessel, SimpleSkin,
                                                                                        DeriSkin)
from LineCableEngine.Simulations.LineParameters.Formulations.insulation_impedance import (
    InsulationImpedanceFormulation, LosslessInsulationImpedance)
from LineCableEngine.Simulations.LineParameters.Formulations.insulation_admittance import (
    InsulationAdmittanceFormulation, LosslessInsulationAdmittance, LossyInsulationAdmittance)
from LineCableEngine.Simulations.LineParameters.Formulations.earth_impedance import (
    EarthImpedanceFormulation, HomogeneousEarthKernel, OverheadClosedForm, SimpleCarson, FullCarson, DeriEarth)
from LineCableEngine.Simulations.LineParameters.Formulations.earth_impedance import Papadopoulos as PapadopoulosZ
from LineCableEngine.Simulations.LineParameters.Formulations.earth_impedance import Pollaczek as PollaczekZ
from LineCableEngine.Simulations.LineParameters.Formulations.earth_impedance import Carson as CarsonZ
from LineCableEngine.Simulations.LineParameters.Formulations.earth_admittance import EarthAdmittanceFormulation, Images
from LineCableEngine.Simulations.LineParameters.Formulations.earth_admittance import Papadopoulos as PapadopoulosY
from LineCableEngine.Simulations.LineParameters.Formulations.earth_admittance import Pollaczek as PollaczekY
from LineCableEngine.Simulations.LineParameters.Formulations.ehem import EHEMFormulation, EnforceLayer
from LineCableEngine.Simulations.LineParameters.Formulations.formulation_set import FormulationSet
